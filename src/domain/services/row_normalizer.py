"""
Servicio de dominio: Normalización, orden y huella de filas exportadas.

Tres operaciones sobre filas ya proyectadas:

1. NORMALIZAR: completar el valor canónico de cada campo a partir de su
   display, con una regla por grupo de campos:
   - Texto libre (nombre, remesa): NFC + casefold + sin espacios ni
     caracteres de ancho cero. "Müller  GmbH" → "müllergmbh".
   - Identificadores (IBAN, BIC, referencias): sin espacios, mayúsculas
     ASCII. "de89 3704 0044" → "DE8937040044".
   - Códigos (moneda, BkTxCd, GVC...): recortar y mayúsculas ASCII.
   - Todo lo demás (fechas, montos, estado...): solo recortar.

2. ORDENAR: orden estable por (fecha, IBAN de la cuenta, ordinal de
   entrada, ordinal de transacción) y recálculo del saldo corrido por
   cuenta, porque el saldo de la proyección sigue el orden del documento.

3. HUELLA: una cadena "índice=canónico\\x1f..." con los campos que
   identifican un movimiento, para detectar duplicados entre archivos
   (el mismo movimiento en un camt.052 intradía y en el camt.053 del día).
"""

import hashlib
from collections.abc import Iterable, Sequence

from src.domain.models.export_row import ExportField, ExportRow, FieldValue
from src.domain.shared.money import fraction_digits, format_scaled, parse_scaled
from src.domain.shared.text_cleaner import (
    ascii_trim,
    ascii_upper,
    normalize_freetext,
    normalize_freetext_ascii,
    strip_all_spaces,
)

# =================================================================
# Grupos de campos
# =================================================================

FREETEXT_FIELDS = frozenset({
    ExportField.REMITTANCE_LINE,
    ExportField.REMITTANCE_STRUCTURED,
    ExportField.COUNTERPARTY_NAME,
})

IDENTIFIER_FIELDS = frozenset({
    ExportField.END_TO_END_ID,
    ExportField.MANDATE_ID,
    ExportField.TX_ID,
    ExportField.BANK_REF,
    ExportField.PRIMANOTA,
    ExportField.ACCOUNT_IBAN,
    ExportField.COUNTERPARTY_IBAN,
    ExportField.ACCOUNT_BIC,
    ExportField.COUNTERPARTY_BIC,
})

CODE_FIELDS = frozenset({
    ExportField.CURRENCY,
    ExportField.CHARGES_CURRENCY,
    ExportField.CREDIT_DEBIT,
    ExportField.BK_TX_CD,
    ExportField.BOOKING_CODE,
    ExportField.DTA_CODE,
    ExportField.GVC_CODE,
    ExportField.SWIFT_TRANSACTION_CODE,
})

# Campos que entran en la huella por defecto
CORE_HASH_FIELDS: tuple[ExportField, ...] = (
    ExportField.BOOKING_DATE,
    ExportField.AMOUNT,
    ExportField.CREDIT_DEBIT,
    ExportField.CURRENCY,
    ExportField.COUNTERPARTY_IBAN,
    ExportField.COUNTERPARTY_BIC,
    ExportField.REMITTANCE_LINE,
    ExportField.END_TO_END_ID,
    ExportField.TX_ID,
    ExportField.BANK_REF,
    ExportField.ACCOUNT_IBAN,
    ExportField.BK_TX_CD,
    ExportField.REVERSAL,
    ExportField.PRIMANOTA,
    ExportField.DTA_CODE,
)

# Separador entre pares índice=valor (ASCII Unit Separator)
HASH_FIELD_SEPARATOR = "\x1f"


# =================================================================
# Normalización
# =================================================================


def normalize_field(field: ExportField, value: str, unicode_normalization: bool = True) -> str:
    """Forma canónica de `value` según el grupo al que pertenece `field`.

    Args:
        field: Campo al que pertenece el valor.
        value: Texto display.
        unicode_normalization: False → el texto libre se normaliza solo
                               con reglas ASCII (sin NFC ni casefold).

    Ejemplos:
        >>> normalize_field(ExportField.COUNTERPARTY_IBAN, " de89 3704 ")
        'DE893704'
        >>> normalize_field(ExportField.CURRENCY, " eur ")
        'EUR'
        >>> normalize_field(ExportField.COUNTERPARTY_NAME, "Müller  GmbH")
        'müllergmbh'
    """
    if field in FREETEXT_FIELDS:
        if unicode_normalization:
            return normalize_freetext(value)
        return normalize_freetext_ascii(value)
    if field in IDENTIFIER_FIELDS:
        return ascii_upper(strip_all_spaces(value))
    if field in CODE_FIELDS:
        return ascii_upper(ascii_trim(value))
    return ascii_trim(value)


def normalize_row(
    row: ExportRow,
    fields: Iterable[ExportField] | None = None,
    unicode_normalization: bool = True,
) -> ExportRow:
    """Devuelve una fila nueva con los canónicos vacíos completados.

    Solo se tocan los campos cuyo canónico está vacío: lo que la
    proyección ya calculó (montos, remesa, ordinales) se respeta. Por eso
    normalizar dos veces da el mismo resultado.

    Args:
        row: Fila proyectada.
        fields: Campos a normalizar. None → todos.
        unicode_normalization: Ver normalize_field.
    """
    seleccion = set(ExportField) if fields is None else set(fields)
    valores = list(row.values)
    for campo in ExportField:
        actual = valores[campo]
        if campo not in seleccion or actual.canonical:
            continue
        valores[campo] = FieldValue(
            actual.display, normalize_field(campo, actual.display, unicode_normalization)
        )
    return ExportRow(tuple(valores))


# =================================================================
# Orden y saldo corrido
# =================================================================


def _entero(texto: str) -> int:
    try:
        return int(texto)
    except ValueError:
        return 0


def _clave_orden(row: ExportRow, campo_fecha: ExportField) -> tuple[int, str, int, int]:
    return (
        _entero(row.canonical(campo_fecha)),
        row.canonical(ExportField.ACCOUNT_IBAN),
        _entero(row.canonical(ExportField.ENTRY_ORDINAL)),
        _entero(row.canonical(ExportField.TRANSACTION_ORDINAL)),
    )


def sort_rows(rows: Sequence[ExportRow], use_booking_date: bool = True) -> list[ExportRow]:
    """Ordena filas normalizadas y recalcula el saldo corrido por cuenta.

    El orden es estable: filas con la misma clave conservan su orden
    relativo, y ordenar una lista ya ordenada no cambia nada.

    El saldo corrido se acumula por IBAN de cuenta con el signo de la
    dirección efectiva (CreditDebit canónico, invertido si Reversal=1).
    La escala crece con la mayor cantidad de decimales vista en Amount,
    así que una cuenta en KWD (3 decimales) no pierde precisión. El
    resultado se escribe sin ceros finales ("70" en vez de "70.00") en
    display y canónico.

    Args:
        rows: Filas con canónicos ya completados (normalize_row).
        use_booking_date: True → ordena por BookingDate, False → ValueDate.

    Returns:
        Lista nueva; las filas de entrada no se modifican.
    """
    campo_fecha = ExportField.BOOKING_DATE if use_booking_date else ExportField.VALUE_DATE
    ordenadas = sorted(rows, key=lambda r: _clave_orden(r, campo_fecha))

    # IBAN → (acumulado escalado, escala)
    saldos: dict[str, tuple[int, int]] = {}
    resultado: list[ExportRow] = []
    for row in ordenadas:
        iban = row.canonical(ExportField.ACCOUNT_IBAN)
        acumulado, escala = saldos.get(iban, (0, 0))

        monto = row.canonical(ExportField.AMOUNT)
        decimales = fraction_digits(monto)
        if decimales > escala:
            acumulado *= 10 ** (decimales - escala)
            escala = decimales

        credito = row.canonical(ExportField.CREDIT_DEBIT) == "1"
        if row.canonical(ExportField.REVERSAL) == "1":
            credito = not credito

        delta = parse_scaled(monto, escala)
        acumulado += delta if credito else -delta
        saldos[iban] = (acumulado, escala)

        texto = format_scaled(acumulado, escala)
        resultado.append(row.with_value(ExportField.RUNNING_BALANCE, FieldValue(texto, texto)))
    return resultado


# =================================================================
# Huella
# =================================================================


def accumulate_hash_row(
    row: ExportRow,
    fields: Iterable[ExportField] | None = None,
    unicode_normalization: bool = True,
) -> str:
    """Cadena de huella de una fila.

    Formato: "<índice>=<canónico>\\x1f" por cada campo seleccionado, en
    orden de ExportField (no en el orden en que se pasen). La fila se
    normaliza antes; sobre una fila ya normalizada no cambia nada.

    Args:
        row: Fila proyectada o normalizada.
        fields: Campos a incluir. None → CORE_HASH_FIELDS.
        unicode_normalization: Regla para el texto libre aún sin canónico;
                               debe coincidir con la usada al normalizar.

    Ejemplo:
        "0=20240315\\x1f2=100.00\\x1f3=1\\x1f4=EUR\\x1f..."
    """
    seleccion = set(CORE_HASH_FIELDS if fields is None else fields)
    normalizada = normalize_row(row, unicode_normalization=unicode_normalization)
    return "".join(
        f"{int(campo)}={normalizada.canonical(campo)}{HASH_FIELD_SEPARATOR}"
        for campo in ExportField
        if campo in seleccion
    )


def fingerprint_sha256(
    row: ExportRow,
    fields: Iterable[ExportField] | None = None,
    unicode_normalization: bool = True,
) -> str:
    """SHA-256 hexadecimal de accumulate_hash_row (64 caracteres)."""
    cadena = accumulate_hash_row(row, fields, unicode_normalization)
    return hashlib.sha256(cadena.encode("utf-8")).hexdigest()
