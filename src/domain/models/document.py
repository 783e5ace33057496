"""
Modelo de dominio: Documento CAMT completo.

Un Document se construye en UNA llamada al parser y es inmutable después.
Es dueño exclusivo de todo el árbol: Statement → Entry → EntryTransaction.
"""

from dataclasses import dataclass
from enum import Enum

from src.domain.models.statement import Statement


class DocKind(Enum):
    """Tipo de mensaje según el payload encontrado."""

    ACCOUNT_REPORT = "camt.052"
    STATEMENT = "camt.053"
    NOTIFICATION = "camt.054"
    UNKNOWN = "unknown"


# Nombre local del payload → tipo de documento
PAYLOAD_KINDS: dict[str, DocKind] = {
    "BkToCstmrStmt": DocKind.STATEMENT,
    "BkToCstmrDbtCdtNtfctn": DocKind.NOTIFICATION,
    "BkToCstmrAcctRpt": DocKind.ACCOUNT_REPORT,
}


@dataclass(frozen=True)
class Document:
    kind: DocKind = DocKind.UNKNOWN
    statements: tuple[Statement, ...] = ()

    @property
    def num_entries(self) -> int:
        return sum(len(st.entries) for st in self.statements)

    @property
    def num_transactions(self) -> int:
        return sum(st.num_transactions for st in self.statements)
