"""
Modelo de dominio: Monto con moneda.

Decisiones de diseño:
- El monto se guarda como ENTERO en unidades menores (centavos para EUR,
  yenes para JPY). Nunca float: float(0.1) + float(0.2) != 0.3.
- El exponente NO se guarda: siempre se deriva de la moneda
  (ver src.domain.shared.money.currency_exponent). Así es imposible tener
  un "EUR con 3 decimales".
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrencyAmount:
    """Monto en unidades menores + código ISO 4217."""

    currency: str = ""
    """Código de moneda (atributo Ccy). Cadena vacía si no viene."""

    minor: int = 0
    """Monto en unidades menores. Puede ser negativo."""

    def __post_init__(self) -> None:
        if not isinstance(self.minor, int) or isinstance(self.minor, bool):
            raise TypeError(f"minor debe ser int, recibió {type(self.minor).__name__}")

    @property
    def is_zero(self) -> bool:
        return self.minor == 0

    def with_minor(self, minor: int) -> "CurrencyAmount":
        """Devuelve un monto nuevo con la misma moneda."""
        return CurrencyAmount(self.currency, minor)
