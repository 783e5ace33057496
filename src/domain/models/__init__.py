"""
Modelos de dominio del proyecto camt-statement-export.

Todos los modelos son dataclasses inmutables (frozen=True) que representan
los datos del negocio sin dependencias externas. Las secuencias se guardan
como tuplas para que el árbol completo sea inmutable.

Uso:
    from src.domain.models import Document, Statement, Entry, ExportRow
"""

from src.domain.models.account import Account, AccountId, Agent
from src.domain.models.balance import Balance
from src.domain.models.charges import Charges, ChargesRecord
from src.domain.models.currency_amount import CurrencyAmount
from src.domain.models.document import PAYLOAD_KINDS, DocKind, Document
from src.domain.models.entry import Entry
from src.domain.models.entry_transaction import EntryTransaction
from src.domain.models.export_options import ExportOptions
from src.domain.models.export_row import (
    FIELD_HEADERS,
    NUM_FIELDS,
    ExportField,
    ExportRow,
    FieldValue,
    header_names,
)
from src.domain.models.fx_rate_info import FxRateInfo
from src.domain.models.party import Party, RelatedAgents, RelatedParties
from src.domain.models.references import References
from src.domain.models.remittance import RemittanceInformation, StructuredRemittance
from src.domain.models.resultado_exportacion import ResultadoExportacion
from src.domain.models.statement import GroupHeader, Statement
from src.domain.models.transaction_codes import (
    BankTransactionCode,
    ProprietaryBankTransactionCode,
    Purpose,
)

__all__ = [
    "Account",
    "AccountId",
    "Agent",
    "Balance",
    "BankTransactionCode",
    "Charges",
    "ChargesRecord",
    "CurrencyAmount",
    "DocKind",
    "Document",
    "Entry",
    "EntryTransaction",
    "ExportField",
    "ExportOptions",
    "ExportRow",
    "FIELD_HEADERS",
    "FieldValue",
    "FxRateInfo",
    "GroupHeader",
    "NUM_FIELDS",
    "PAYLOAD_KINDS",
    "Party",
    "ProprietaryBankTransactionCode",
    "Purpose",
    "References",
    "RelatedAgents",
    "RelatedParties",
    "RemittanceInformation",
    "ResultadoExportacion",
    "Statement",
    "StructuredRemittance",
    "header_names",
]
