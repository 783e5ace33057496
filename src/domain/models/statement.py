"""
Modelo de dominio: Statement (<Stmt>, <Rpt> o <Ntfctn>).

Según el tipo de mensaje, el contenedor se llama distinto, pero la
estructura es la misma: una cuenta, sus saldos y sus entradas.
"""

from dataclasses import dataclass, field

from src.domain.models.account import Account
from src.domain.models.balance import Balance
from src.domain.models.entry import Entry


@dataclass(frozen=True)
class GroupHeader:
    """Encabezado del mensaje (<GrpHdr>), compartido por todos los statements."""

    msg_id: str = ""
    creation_date_time: str = ""
    message_recipient: str = ""
    """<MsgRcpt><Nm>."""


@dataclass(frozen=True)
class Statement:
    id: str = ""
    creation_date_time: str = ""
    account: Account = field(default_factory=Account)
    group_header: GroupHeader = field(default_factory=GroupHeader)
    balances: tuple[Balance, ...] = ()
    entries: tuple[Entry, ...] = ()

    @property
    def num_transactions(self) -> int:
        """Cantidad de filas que genera este statement al exportar.

        Una entrada sin transacciones genera una fila; una con N genera N.
        """
        return sum(max(1, len(e.transactions)) for e in self.entries)

    def first_balance(self, *types: str) -> Balance | None:
        """Primer saldo (en orden del documento) cuyo tipo esté en `types`."""
        for balance in self.balances:
            if balance.type in types:
                return balance
        return None

    def last_balance(self, *types: str) -> Balance | None:
        """Último saldo (en orden del documento) cuyo tipo esté en `types`."""
        encontrado = None
        for balance in self.balances:
            if balance.type in types:
                encontrado = balance
        return encontrado
