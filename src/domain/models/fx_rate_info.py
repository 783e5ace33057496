"""
Modelo de dominio: Información de tipo de cambio (<CcyXchg>).

`rate` es el tipo de cambio EFECTIVO después de reconciliar con los montos
(ver src.domain.shared.fx_rate). El valor tal como vino en el XML se
conserva en `supplied_rate`.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FxRateInfo:
    src_ccy: str = ""
    trgt_ccy: str = ""
    unit_ccy: str = ""
    rate: float = 0.0
    has: bool = False
    """True si el XML trae <XchgRate> o si se pudo derivar uno."""

    inverted: bool = False
    """True si el tipo informado venía en la dirección contraria
    (coincidía su recíproco con el derivado de los montos)."""

    supplied_rate: float = 0.0
    rate_decimals: int = 0
    """Decimales con que se informó <XchgRate> ("1.0870" → 4)."""
