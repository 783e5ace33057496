"""
Utilidades para manejo de montos monetarios en unidades menores.

CONTEXTO DEL PROBLEMA:
Los extractos CAMT traen montos como texto ("1234.56"), pero los bancos
no siempre respetan el formato XML estándar: aparecen comas decimales
("1.234,56"), agrupadores de miles ("1'234.56", "1_234.56"), espacios
duros (NBSP) y hasta la convención contable de paréntesis "(50,00)".

SOLUCIÓN:
Todos los montos se guardan como ENTEROS en unidades menores (centavos
para EUR, yenes para JPY, milésimas para KWD...). Nunca float.

- El exponente depende de la moneda (tabla pequeña y explícita, por
  defecto 2).
- parse_decimal() nunca lanza en modo normal: un texto inválido o un
  desbordamiento devuelven 0 ("sin movimiento"), porque un campo malo no
  debe tirar todo el documento.
- format_amount() es el inverso exacto: siempre la misma cantidad de
  decimales para el mismo valor, sin importar el locale.
"""

from src.domain.exceptions import DesbordamientoError
from src.domain.models.currency_amount import CurrencyAmount

# Monedas sin decimales y con 3/4 decimales. Todo lo demás usa 2.
_EXPONENTES: dict[str, int] = {
    "JPY": 0,
    "KRW": 0,
    "VND": 0,
    "BHD": 3,
    "KWD": 3,
    "OMR": 3,
    "TND": 3,
    "CLF": 4,
}

_EXPONENTE_DEFAULT = 2

# Caracteres que se descartan antes de interpretar el número
_IGNORADOS = frozenset(" \t\r\n'_\u00a0")

# Rango de un entero con signo de 64 bits
_INT64_MAX = 2**63 - 1


def currency_exponent(currency: str) -> int:
    """Devuelve la cantidad de decimales de una moneda ISO 4217.

    Ejemplos:
        >>> currency_exponent("EUR")
        2
        >>> currency_exponent("JPY")
        0
        >>> currency_exponent("KWD")
        3
        >>> currency_exponent("")
        2
    """
    return _EXPONENTES.get(currency, _EXPONENTE_DEFAULT)


def parse_decimal(text: str, currency: str = "", strict: bool = False) -> int:
    """Convierte un texto decimal localizado a unidades menores.

    Reglas:
    - Se eliminan espacios, tabs, saltos de línea, apóstrofes, guiones
      bajos y NBSP (agrupadores habituales).
    - "(…)" significa negativo (convención contable). Un '+'/'-' inicial
      también se respeta y se combina con el paréntesis.
    - El separador decimal es el que aparezca MÁS AL FINAL entre el último
      '.' y la última ','. El otro carácter se trata como separador de
      miles y se elimina.
    - La parte fraccionaria se trunca o se rellena con ceros hasta el
      exponente de la moneda.

    Args:
        text: Monto como texto, tal como viene en el XML.
        currency: Código ISO de la moneda (define el exponente).
        strict: Si es True, un desbordamiento lanza DesbordamientoError
                en lugar de devolver 0.

    Returns:
        Monto en unidades menores. 0 si el texto no es un número válido.

    Raises:
        DesbordamientoError: Solo en modo estricto, si el valor no cabe
                             en un entero de 64 bits.

    Ejemplos:
        >>> parse_decimal("1.234,56", "EUR")
        123456
        >>> parse_decimal("1,234.56", "EUR")
        123456
        >>> parse_decimal("(50,00)", "EUR")
        -5000
        >>> parse_decimal("12.5", "JPY")
        12
        >>> parse_decimal("abc", "EUR")
        0
    """
    exp = currency_exponent(currency)
    s = "".join(c for c in text if c not in _IGNORADOS)

    negativo = False
    if len(s) >= 2 and s[0] == "(" and s[-1] == ")":
        negativo = True
        s = s[1:-1]
    if s and s[0] in "+-":
        if s[0] == "-":
            negativo = not negativo
        s = s[1:]

    ultimo_punto = s.rfind(".")
    ultima_coma = s.rfind(",")
    if ultimo_punto < 0 and ultima_coma < 0:
        entera, fraccion = s, ""
    else:
        decimal = "." if ultimo_punto > ultima_coma else ","
        otro = "," if decimal == "." else "."
        pos = s.rfind(decimal)
        entera = s[:pos].replace(otro, "")
        fraccion = s[pos + 1 :].replace(otro, "")

    if not entera:
        entera = "0"
    if not _solo_digitos(entera) or not _solo_digitos(fraccion):
        return 0

    fraccion = fraccion[:exp].ljust(exp, "0")
    valor = int(entera + fraccion)

    if valor > _INT64_MAX:
        if strict:
            raise DesbordamientoError(text, currency)
        return 0

    return -valor if negativo else valor


def format_amount(amount: CurrencyAmount, decimal_comma: bool = False) -> str:
    """Formatea un CurrencyAmount con ancho fijo de decimales.

    No usa separador de miles ni símbolo de moneda. El resultado es
    idéntico para valores idénticos, sin importar el locale.

    Ejemplos:
        >>> format_amount(CurrencyAmount("EUR", -5000))
        '-50.00'
        >>> format_amount(CurrencyAmount("EUR", 5), decimal_comma=True)
        '0,05'
        >>> format_amount(CurrencyAmount("JPY", 1200))
        '1200'
    """
    exp = currency_exponent(amount.currency)
    valor = abs(amount.minor)
    signo = "-" if amount.minor < 0 else ""
    if exp == 0:
        return f"{signo}{valor}"

    mayor, menor = divmod(valor, 10**exp)
    separador = "," if decimal_comma else "."
    return f"{signo}{mayor}{separador}{menor:0{exp}d}"


def minor_to_major(amount: CurrencyAmount) -> float:
    """Convierte unidades menores a unidades mayores como float.

    Solo se usa para comparar tipos de cambio (una razón entre dos montos),
    nunca para aritmética de saldos.
    """
    return amount.minor / (10 ** currency_exponent(amount.currency))


# =================================================================
# Enteros escalados (recálculo de saldo corrido después de ordenar)
# =================================================================


def fraction_digits(text: str) -> int:
    """Cantidad de dígitos después del primer '.' (0 si no hay punto)."""
    pos = text.find(".")
    return 0 if pos < 0 else len(text) - pos - 1


def parse_scaled(text: str, scale: int) -> int:
    """Convierte "123.4" a entero con `scale` decimales (scale=2 → 12340).

    La fracción se trunca o rellena. Un texto inválido devuelve 0.
    """
    entera, _, fraccion = text.partition(".")
    fraccion = fraccion[:scale].ljust(scale, "0")
    if not entera:
        entera = "0"
    try:
        return int(entera + fraccion)
    except ValueError:
        return 0


def format_scaled(value: int, scale: int) -> str:
    """Formatea un entero escalado quitando ceros finales y el punto.

    Ejemplos:
        >>> format_scaled(7000, 2)
        '70'
        >>> format_scaled(-1250, 2)
        '-12.5'
        >>> format_scaled(5, 3)
        '0.005'
    """
    signo = "-" if value < 0 else ""
    digitos = str(abs(value))
    if scale == 0:
        return f"{signo}{digitos}"

    digitos = digitos.rjust(scale + 1, "0")
    texto = f"{digitos[:-scale]}.{digitos[-scale:]}".rstrip("0").rstrip(".")
    if not texto:
        texto = "0"
    return f"{signo}{texto}"


def _solo_digitos(text: str) -> bool:
    # str.isdigit() acepta dígitos Unicode ("²", "٣"); aquí solo ASCII.
    return all("0" <= c <= "9" for c in text)
