"""
Modelo de dominio: Códigos de clasificación de la transacción.

ISO 20022 clasifica cada movimiento con un código jerárquico
(BkTxCd/Domn): dominio → familia → subfamilia, por ejemplo:

    PMNT / RCDT / ESCT   → Payments / Received Credit Transfer / SEPA CT

Además, los bancos mandan su propio código en <Prtry><Cd>, que en muchos
dialectos es compuesto ("NTRF+166+9310", ver proprietary_code.py).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BankTransactionCode:
    domain: str = ""
    family: str = ""
    sub_family: str = ""
    proprietary: str = ""
    """Código propietario tal como viene (<Prtry><Cd> o texto de <Prtry>)."""

    @property
    def is_empty(self) -> bool:
        """True si no hay ninguna parte del código ISO."""
        return not (self.domain or self.family or self.sub_family)


@dataclass(frozen=True)
class ProprietaryBankTransactionCode:
    code: str = ""
    issuer: str = ""
    """Emisor del código propietario (<Issr>), p.ej. "DK" o "ZKA"."""


@dataclass(frozen=True)
class Purpose:
    """Propósito del pago (<Purp>): código ISO o propietario."""

    code: str = ""
    proprietary: str = ""
