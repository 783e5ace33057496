"""
Modelo de dominio: Saldo (<Bal>).

Tipos que usa la exportación:
    OPBD  Opening Booked           PRCD  Previously Closed Booked
    CLBD  Closing Booked           ITBD  Interim Booked
    ITAV  Interim Available
"""

from dataclasses import dataclass, field

from src.domain.models.currency_amount import CurrencyAmount


@dataclass(frozen=True)
class Balance:
    type: str = ""
    amount: CurrencyAmount = field(default_factory=CurrencyAmount)
    date: str = ""
    has_cdt_dbt_ind: bool = False
    is_credit: bool = False

    @property
    def signed_amount(self) -> CurrencyAmount:
        """Monto con signo según <CdtDbtInd> (CRDT=+, DBIT=-).

        Sin indicador se devuelve el monto tal como vino.
        """
        if not self.has_cdt_dbt_ind:
            return self.amount
        magnitud = abs(self.amount.minor)
        return self.amount.with_minor(magnitud if self.is_credit else -magnitud)
