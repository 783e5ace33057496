"""
Modelo de dominio: Opciones de exportación.

Es la única configuración del proyecto. El CLI la arma a partir de los
argumentos; los tests la construyen directamente.

Se dividen en dos grupos:
- Presentación (solo afectan al CSV): delimiter, include_header,
  write_utf8_bom.
- Proyección (afectan a los valores de las filas): signed_amount,
  credit_as_bool, remittance_separator, use_effective_credit,
  prefer_ultimate_counterparty, unicode_normalization.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExportOptions:
    # --- Presentación ---

    delimiter: str = ";"
    include_header: bool = True
    write_utf8_bom: bool = False
    """BOM UTF-8 al inicio del CSV (Excel lo necesita para detectar UTF-8)."""

    # --- Proyección ---

    signed_amount: bool = True
    """True → Amount con signo (CRDT=+ / DBIT=-).
    False → Amount siempre positivo; la dirección solo en CreditDebit."""

    credit_as_bool: bool = True
    """True → columna IsCredit con 1/0. False → CreditDebit con CRDT/DBIT."""

    remittance_separator: str = ""
    """Texto para unir varias líneas <Ustrd> en el display."""

    use_effective_credit: bool = False
    """True → la columna de dirección muestra la dirección DESPUÉS de la
    reversión. False → la dirección tal como viene en el XML."""

    prefer_ultimate_counterparty: bool = True
    """True → nombre de UltmtDbtr/UltmtCdtr antes que Dbtr/Cdtr."""

    unicode_normalization: bool = True
    """False → normalización de texto libre solo ASCII."""

    # --- Orden y huella ---

    sort_rows: bool = True
    use_booking_date: bool = True
    """Fecha usada para ordenar: booking (True) o value (False)."""

    include_fingerprint: bool = False
    """Agrega una columna Fingerprint (SHA-256) en los writers."""

    strict_amounts: bool = False
    """True → un monto fuera de rango lanza DesbordamientoError."""

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter debe ser un solo carácter: {self.delimiter!r}")
        if self.delimiter in ('"', "\n", "\r"):
            raise ValueError(f"delimiter no puede ser comilla ni salto de línea: {self.delimiter!r}")
