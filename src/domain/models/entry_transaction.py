"""
Modelo de dominio: Transacción dentro de una entrada (<TxDtls>).

Una entrada (<Ntry>) puede agrupar varias transacciones; por ejemplo, un
lote de transferencias SEPA se contabiliza como UNA entrada con N
<TxDtls>. Cada transacción genera una fila en la exportación.

Decisiones de diseño:
- `ordinal` se asigna al extraer (0, 1, 2... en orden del documento) y
  nunca se recalcula por posición: la exportación puede reordenar filas y
  el ordinal es el desempate estable.
- `tx_amount` es opcional: si es None, la fila usa el monto de la entrada.
- Los montos de <AmtDtls> (instruido, liquidado, contravalor) se guardan
  aparte porque solo se usan para preferir la moneda de la cuenta y para
  reconciliar el tipo de cambio.
"""

from dataclasses import dataclass, field

from src.domain.models.charges import Charges
from src.domain.models.currency_amount import CurrencyAmount
from src.domain.models.fx_rate_info import FxRateInfo
from src.domain.models.party import RelatedAgents, RelatedParties
from src.domain.models.references import References
from src.domain.models.remittance import RemittanceInformation
from src.domain.models.transaction_codes import (
    BankTransactionCode,
    ProprietaryBankTransactionCode,
    Purpose,
)


@dataclass(frozen=True)
class EntryTransaction:
    """Una transacción <TxDtls> ya extraída."""

    refs: References = field(default_factory=References)
    parties: RelatedParties = field(default_factory=RelatedParties)
    agents: RelatedAgents = field(default_factory=RelatedAgents)
    remittance: RemittanceInformation = field(default_factory=RemittanceInformation)
    purpose: Purpose = field(default_factory=Purpose)
    bank_tx_code: BankTransactionCode = field(default_factory=BankTransactionCode)
    proprietary_bank_tx_code: ProprietaryBankTransactionCode = field(
        default_factory=ProprietaryBankTransactionCode
    )
    charges: Charges = field(default_factory=Charges)
    additional_info: str = ""
    """<AddtlTxInf>."""

    tx_amount: CurrencyAmount | None = None
    """Monto propio de la transacción. None → se usa el de la entrada."""

    dta_code: str = ""
    """Código propietario completo, p.ej. "NTRF+166+9310"."""

    gvc: str = ""
    """Lo que sigue al primer '+' del código propietario ("166+9310")."""

    has_cdt_dbt_ind: bool = False
    """True si la transacción trae su propio <CdtDbtInd>."""

    is_credit: bool = False

    fx: FxRateInfo = field(default_factory=FxRateInfo)
    fx_instructed_amount: CurrencyAmount | None = None
    fx_settlement_amount: CurrencyAmount | None = None
    fx_counter_value_amount: CurrencyAmount | None = None

    ordinal: int = 0
    """Posición 0-based dentro de la entrada, asignada al extraer."""

    def __post_init__(self) -> None:
        if self.ordinal < 0:
            raise ValueError(f"ordinal no puede ser negativo: {self.ordinal}")
