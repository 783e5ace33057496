"""
Modelo de dominio: Comisiones de una transacción (<Chrgs>).
"""

from dataclasses import dataclass, field

from src.domain.models.account import Agent
from src.domain.models.currency_amount import CurrencyAmount


@dataclass(frozen=True)
class ChargesRecord:
    """Un registro <Rcrd> de comisión."""

    amount: CurrencyAmount = field(default_factory=CurrencyAmount)
    agent: Agent = field(default_factory=Agent)
    has_cdt_dbt_ind: bool = False
    """True si el registro trae su propio <CdtDbtInd>. Tiene prioridad
    sobre la dirección de la transacción y de la entrada."""

    is_credit: bool = False
    included: bool = False
    """<ChrgInclInd>: la comisión ya está incluida en el monto principal."""


@dataclass(frozen=True)
class Charges:
    total: CurrencyAmount | None = None
    """<TtlChrgsAndTaxAmt>, si viene."""

    records: tuple[ChargesRecord, ...] = ()
