"""
Tipos de cambio: lectura y reconciliación.

CONTEXTO DEL PROBLEMA:
Una transacción en moneda extranjera trae en <AmtDtls> hasta tres montos
(instruido, liquidado y contravalor) y, opcionalmente, un <CcyXchg> con
el tipo de cambio. Los bancos NO se ponen de acuerdo en la dirección del
tipo de cambio: unos informan "EUR por USD" y otros "USD por EUR" para
exactamente el mismo par SrcCcy/TrgtCcy.

SOLUCIÓN:
No se configura nada por banco. Se calcula el tipo de cambio DERIVADO de
los dos montos observados (destino / origen) y se compara contra el
informado en ambas direcciones:

- Coincide directo      → se conserva el informado.
- Coincide el recíproco → se adopta el derivado y se marca `inverted`.
- No coincide ninguno   → se adopta el derivado (dato inverosímil).
- No hay informado      → se adopta el derivado.

Tolerancia: relativa, max(1e-9, |derivado| × 1e-6). Además, como los
bancos redondean el tipo de cambio a 4-6 decimales, también se acepta
una diferencia de hasta media unidad del último decimal informado
("1.0870" se considera igual a 1/0.92 = 1.08695...).
"""

import math
from dataclasses import replace

from src.domain.models.currency_amount import CurrencyAmount
from src.domain.models.fx_rate_info import FxRateInfo
from src.domain.shared.money import minor_to_major

_TOLERANCIA_RELATIVA = 1e-6
_TOLERANCIA_MINIMA = 1e-9


def parse_exchange_rate(text: str) -> tuple[float, int]:
    """Lee el texto de <XchgRate>.

    Acepta coma decimal ("1,0870"). Un texto vacío o inválido da 0.0.

    Returns:
        Tupla (tipo de cambio, cantidad de decimales informados).

    Ejemplos:
        >>> parse_exchange_rate("1.0870")
        (1.087, 4)
        >>> parse_exchange_rate("1,5")
        (1.5, 1)
        >>> parse_exchange_rate("n/a")
        (0.0, 0)
    """
    limpio = text.strip().replace(",", ".")
    try:
        valor = float(limpio) if limpio else 0.0
    except ValueError:
        return 0.0, 0
    if not math.isfinite(valor):
        return 0.0, 0

    _, punto, decimales = limpio.partition(".")
    return valor, len(decimales) if punto and decimales.isdigit() else 0


def derived_rate(source: CurrencyAmount | None, target: CurrencyAmount | None) -> float:
    """Tipo de cambio observado: destino / origen en unidades mayores.

    Returns:
        0.0 si falta un monto, si no tiene moneda o si vale cero.
    """
    if source is None or target is None:
        return 0.0
    if not source.currency or not target.currency:
        return 0.0
    if source.is_zero or target.is_zero:
        return 0.0
    return minor_to_major(target) / minor_to_major(source)


def reconcile_ccyxchg(
    fx: FxRateInfo,
    source: CurrencyAmount | None,
    target: CurrencyAmount | None,
) -> FxRateInfo:
    """Reconcilia el tipo de cambio informado con el derivado de los montos.

    Args:
        fx: Información de tipo de cambio leída del XML.
        source: Monto identificado como moneda origen (SrcCcy).
        target: Monto identificado como moneda destino (TrgtCcy).

    Returns:
        Nuevo FxRateInfo. Si no se puede derivar un tipo de cambio (montos
        ausentes o en cero), se devuelve `fx` sin cambios.

    Ejemplos:
        Instruido 100.00 USD, liquidado 92.00 EUR, informado 1.0870:
        el recíproco coincide → rate ≈ 0.92, inverted=True.
    """
    derivado = derived_rate(source, target)
    if derivado <= 0.0:
        return fx

    if not (fx.has and fx.rate > 0.0):
        return replace(fx, rate=derivado, has=True, inverted=False)

    tolerancia = max(_TOLERANCIA_MINIMA, abs(derivado) * _TOLERANCIA_RELATIVA)
    media_unidad = 0.5 * 10 ** (-fx.rate_decimals) if fx.rate_decimals > 0 else 0.0

    if abs(fx.rate - derivado) <= max(tolerancia, media_unidad):
        return replace(fx, has=True, inverted=False)

    if abs(1.0 / fx.rate - derivado) <= tolerancia or abs(fx.rate - 1.0 / derivado) <= media_unidad:
        return replace(fx, rate=derivado, has=True, inverted=True)

    return replace(fx, rate=derivado, has=True, inverted=False)
