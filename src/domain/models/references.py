"""
Modelo de dominio: Referencias de una transacción (<Refs>).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class References:
    end_to_end_id: str = ""
    tx_id: str = ""
    acct_svcr_ref: str = ""
    """Referencia asignada por el banco de la cuenta."""

    mandate_id: str = ""
    """Mandato SEPA (débitos directos)."""
