"""
Puerto de salida: Búsqueda de códigos de referencia (GVC).

Cuando el banco no manda el código de referencia dentro del código
propietario ("NTRF+166"), se busca en una tabla a partir de la
clasificación ISO de la transacción:

    (PMNT, RCDT, ESCT, C)  →  "166"   (SEPA Credit Transfer recibida)

La proyección de filas solo depende de esta interfaz; de dónde sale la
tabla (embebida, archivo, base de datos) es asunto del adaptador.
"""

from abc import ABC, abstractmethod


class ReferenceCodeLookup(ABC):
    """Interfaz para la tabla (dominio, familia, subfamilia, C/D) → código."""

    @abstractmethod
    def lookup(self, domain: str, family: str, sub_family: str, credit_flag: str) -> str:
        """Busca el código de referencia.

        Args:
            domain: Código de dominio ISO (p.ej. "PMNT").
            family: Código de familia (p.ej. "RCDT").
            sub_family: Código de subfamilia (p.ej. "ESCT").
            credit_flag: "C" para crédito, "D" para débito.

        Returns:
            Código de referencia, o "" si no hay coincidencia.
            Debe ser una función pura: mismas entradas → misma salida.
        """
        ...
