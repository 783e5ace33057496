"""
Modelo de dominio: Entrada contable (<Ntry>).

Una Entry es una línea contabilizada del extracto. La dirección NO se
deduce del signo del monto (los montos CAMT son siempre positivos): se
toma de <CdtDbtInd> (CRDT / DBIT).

Las fechas se guardan dos veces:
- Texto ("2024-03-15"): lo que se muestra.
- Entero (20240315): lo que se usa para ordenar. 0 si la fecha es inválida.
"""

from dataclasses import dataclass, field

from src.domain.models.currency_amount import CurrencyAmount
from src.domain.models.entry_transaction import EntryTransaction


@dataclass(frozen=True)
class Entry:
    amount: CurrencyAmount = field(default_factory=CurrencyAmount)
    is_credit: bool = False
    """True si <CdtDbtInd> es CRDT."""

    booking_date: str = ""
    value_date: str = ""
    booking_date_int: int = 0
    value_date_int: int = 0
    entry_ref: str = ""
    """<NtryRef>."""

    status: str = ""
    """<Sts>: BOOK, PDNG, INFO..."""

    reversal: bool = False
    """<RvslInd>. Una reversión invierte la dirección efectiva UNA vez."""

    acct_svcr_ref: str = ""
    ordinal: int = 0
    """Posición 0-based dentro del Statement, asignada al extraer."""

    transactions: tuple[EntryTransaction, ...] = ()

    def __post_init__(self) -> None:
        if self.ordinal < 0:
            raise ValueError(f"ordinal no puede ser negativo: {self.ordinal}")

    @property
    def effective_credit(self) -> bool:
        """Dirección de la entrada después de aplicar la reversión."""
        return self.is_credit != self.reversal
