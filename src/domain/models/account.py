"""
Modelo de dominio: Cuenta del extracto y su banco (Agent).
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AccountId:
    """Identificación de una cuenta: IBAN o, en su defecto, <Othr><Id>."""

    iban: str = ""
    other: str = ""
    """Identificador no IBAN. Solo se llena si no hay IBAN."""

    @property
    def identifier(self) -> str:
        """IBAN si existe, si no el identificador alternativo."""
        return self.iban or self.other


@dataclass(frozen=True)
class Agent:
    """Institución financiera (FinInstnId): BIC y nombre."""

    bic: str = ""
    """BIC (<BIC> en versiones viejas, <BICFI> en las nuevas)."""

    name: str = ""


@dataclass(frozen=True)
class Account:
    """Cuenta a la que pertenece un Statement."""

    id: AccountId = field(default_factory=AccountId)
    name: str = ""
    currency: str = ""
    """Moneda de la cuenta (<Acct><Ccy>). Define la moneda de las columnas
    Currency y RunningBalance cuando existe."""

    servicer: Agent = field(default_factory=Agent)
    """Banco que administra la cuenta (<Acct><Svcr>)."""
