"""
Modelo de dominio: Resultado de procesar un archivo CAMT.

Es lo que el StatementProcessor devuelve y lo que reciben los writers.
Agrupa el documento extraído y las filas ya proyectadas, normalizadas y
(si así se configuró) ordenadas.
"""

from dataclasses import dataclass

from src.domain.models.document import Document
from src.domain.models.export_row import ExportField, ExportRow


@dataclass(frozen=True)
class ResultadoExportacion:
    documento: Document
    """Documento CAMT completo."""

    filas: tuple[ExportRow, ...] = ()
    """Filas listas para escribir."""

    archivo_origen: str = ""
    """Nombre del archivo XML de donde vienen los datos."""

    advertencias: tuple[str, ...] = ()
    """Avisos no fatales (p.ej. tipos de cambio invertidos)."""

    @property
    def num_filas(self) -> int:
        return len(self.filas)

    @property
    def tipo(self) -> str:
        """Tipo de mensaje: "camt.052", "camt.053" o "camt.054"."""
        return self.documento.kind.value

    @property
    def cuentas(self) -> list[str]:
        """Identificadores de cuenta presentes en las filas, en orden de aparición."""
        vistas: list[str] = []
        for fila in self.filas:
            cuenta = fila.display(ExportField.ACCOUNT_IBAN)
            if cuenta not in vistas:
                vistas.append(cuenta)
        return vistas
