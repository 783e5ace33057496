"""
Modelo de dominio: Contrapartes de una transacción (RltdPties / RltdAgts).

En CAMT cada transacción trae hasta seis partes relacionadas:

    Dbtr / UltmtDbtr   → quien paga (directo / último)
    Cdtr / UltmtCdtr   → quien cobra (directo / último)
    DbtrAcct / CdtrAcct → sus cuentas

Y dos agentes (bancos): DbtrAgt y CdtrAgt.

Cuál de los dos lados es la "contraparte" lo decide la proyección de
filas según la dirección efectiva del movimiento, no el modelo.
"""

from dataclasses import dataclass, field

from src.domain.models.account import AccountId, Agent


@dataclass(frozen=True)
class Party:
    """Una parte (persona o empresa) con su cuenta y banco, si vienen."""

    name: str = ""
    iban: str = ""
    bic: str = ""


@dataclass(frozen=True)
class RelatedParties:
    debtor: Party = field(default_factory=Party)
    debtor_account: AccountId = field(default_factory=AccountId)
    ultimate_debtor: Party = field(default_factory=Party)
    creditor: Party = field(default_factory=Party)
    creditor_account: AccountId = field(default_factory=AccountId)
    ultimate_creditor: Party = field(default_factory=Party)


@dataclass(frozen=True)
class RelatedAgents:
    debtor_agent: Agent = field(default_factory=Agent)
    creditor_agent: Agent = field(default_factory=Agent)
