"""
Modelo de dominio: Información de remesa (RmtInf).

- Ustrd: líneas de texto libre ("concepto"), 0 o más.
- Strd: bloques estructurados con referencia del acreedor (p.ej. RF18...)
  e información adicional.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StructuredRemittance:
    """Un bloque <Strd>."""

    creditor_ref_type: str = ""
    """Tipo de referencia (<RefTp><CdOrPrtry><Cd> o <Prtry>), p.ej. "SCOR"."""

    creditor_ref: str = ""
    """Referencia del acreedor (<CdtrRefInf><Ref>)."""

    additional_info: str = ""
    """<AddtlRmtInf>, usado cuando no hay referencia del acreedor."""


@dataclass(frozen=True)
class RemittanceInformation:
    unstructured: tuple[str, ...] = ()
    """Líneas <Ustrd> no vacías, en orden del documento."""

    structured: tuple[StructuredRemittance, ...] = ()
