"""
Modelo de dominio: Fila exportada.

Cada fila es una secuencia FIJA de 33 campos (ExportField). Cada campo
guarda DOS valores:

- display:   lo que ve el usuario en el CSV/Excel ("DE89 3704 ...",
             "Müller GmbH", "-30.00").
- canonical: la forma normalizada para comparar, ordenar y calcular la
             huella ("DE893704...", "müllergmbh", "30.00").

Decisiones de diseño:
- La fila es inmutable. La normalización NO modifica la fila: devuelve
  una nueva con los canónicos que faltaban (ver row_normalizer.py).
- El orden de ExportField es parte del contrato: el índice numérico de
  cada campo entra en la huella ("0=20240315\\x1f2=100.00\\x1f...").
"""

from dataclasses import dataclass
from enum import IntEnum


class ExportField(IntEnum):
    """Columnas de la exportación, en orden fijo."""

    BOOKING_DATE = 0
    VALUE_DATE = 1
    AMOUNT = 2
    CREDIT_DEBIT = 3
    CURRENCY = 4
    COUNTERPARTY_NAME = 5
    COUNTERPARTY_IBAN = 6
    COUNTERPARTY_BIC = 7
    REMITTANCE_LINE = 8
    REMITTANCE_STRUCTURED = 9
    END_TO_END_ID = 10
    MANDATE_ID = 11
    TX_ID = 12
    BANK_REF = 13
    ACCOUNT_IBAN = 14
    ACCOUNT_BIC = 15
    BK_TX_CD = 16
    BOOKING_CODE = 17
    STATUS = 18
    REVERSAL = 19
    RUNNING_BALANCE = 20
    SERVICER_BANK_NAME = 21
    OPENING_BALANCE = 22
    CLOSING_BALANCE = 23
    PRIMANOTA = 24
    DTA_CODE = 25
    GVC_CODE = 26
    SWIFT_TRANSACTION_CODE = 27
    CHARGES_AMOUNT = 28
    CHARGES_CURRENCY = 29
    CHARGES_INCLUDED = 30
    ENTRY_ORDINAL = 31
    TRANSACTION_ORDINAL = 32


NUM_FIELDS = len(ExportField)

# Títulos de columna. CREDIT_DEBIT depende de las opciones (ver header_names).
FIELD_HEADERS: dict[ExportField, str] = {
    ExportField.BOOKING_DATE: "BookingDate",
    ExportField.VALUE_DATE: "ValueDate",
    ExportField.AMOUNT: "Amount",
    ExportField.CREDIT_DEBIT: "CreditDebit",
    ExportField.CURRENCY: "Currency",
    ExportField.COUNTERPARTY_NAME: "CounterpartyName",
    ExportField.COUNTERPARTY_IBAN: "CounterpartyIBAN",
    ExportField.COUNTERPARTY_BIC: "CounterpartyBIC",
    ExportField.REMITTANCE_LINE: "RemittanceLine",
    ExportField.REMITTANCE_STRUCTURED: "RemittanceStructured",
    ExportField.END_TO_END_ID: "EndToEndId",
    ExportField.MANDATE_ID: "MandateId",
    ExportField.TX_ID: "TxId",
    ExportField.BANK_REF: "BankRef",
    ExportField.ACCOUNT_IBAN: "AccountIBAN",
    ExportField.ACCOUNT_BIC: "AccountBIC",
    ExportField.BK_TX_CD: "BkTxCd",
    ExportField.BOOKING_CODE: "BookingCode",
    ExportField.STATUS: "Status",
    ExportField.REVERSAL: "Reversal",
    ExportField.RUNNING_BALANCE: "RunningBalance",
    ExportField.SERVICER_BANK_NAME: "ServicerBankName",
    ExportField.OPENING_BALANCE: "OpeningBalance",
    ExportField.CLOSING_BALANCE: "ClosingBalance",
    ExportField.PRIMANOTA: "Primanota",
    ExportField.DTA_CODE: "DTACode",
    ExportField.GVC_CODE: "GVCCode",
    ExportField.SWIFT_TRANSACTION_CODE: "SWIFTTransactionCode",
    ExportField.CHARGES_AMOUNT: "ChargesAmount",
    ExportField.CHARGES_CURRENCY: "ChargesCurrency",
    ExportField.CHARGES_INCLUDED: "ChargesIncluded",
    ExportField.ENTRY_ORDINAL: "EntryOrdinal",
    ExportField.TRANSACTION_ORDINAL: "TxOrdinal",
}


def header_names(credit_as_bool: bool = True) -> list[str]:
    """Títulos de las 33 columnas en orden.

    Con credit_as_bool la columna de dirección se llama "IsCredit"
    (valores 1/0); si no, "CreditDebit" (valores CRDT/DBIT).
    """
    nombres = [FIELD_HEADERS[f] for f in ExportField]
    if credit_as_bool:
        nombres[ExportField.CREDIT_DEBIT] = "IsCredit"
    return nombres


@dataclass(frozen=True)
class FieldValue:
    display: str = ""
    canonical: str = ""


@dataclass(frozen=True)
class ExportRow:
    """Fila de 33 FieldValue, indexable por ExportField."""

    values: tuple[FieldValue, ...]

    def __post_init__(self) -> None:
        if len(self.values) != NUM_FIELDS:
            raise ValueError(
                f"Una fila debe tener {NUM_FIELDS} campos, recibió {len(self.values)}"
            )

    @classmethod
    def from_mapping(cls, values: dict[ExportField, FieldValue]) -> "ExportRow":
        """Construye una fila; los campos que falten quedan vacíos."""
        return cls(tuple(values.get(f, FieldValue()) for f in ExportField))

    def __getitem__(self, field: ExportField) -> FieldValue:
        return self.values[field]

    def display(self, field: ExportField) -> str:
        return self.values[field].display

    def canonical(self, field: ExportField) -> str:
        return self.values[field].canonical

    def with_value(self, field: ExportField, value: FieldValue) -> "ExportRow":
        """Devuelve una fila nueva con `field` reemplazado."""
        nuevos = list(self.values)
        nuevos[field] = value
        return ExportRow(tuple(nuevos))

    @property
    def displays(self) -> list[str]:
        """Los 33 valores display en orden de columna."""
        return [v.display for v in self.values]
