"""
Conversión de fechas ISO de los extractos CAMT.

CONTEXTO DEL PROBLEMA:
En CAMT una fecha puede venir de dos formas dentro del mismo elemento:

    <BookgDt><Dt>2024-03-15</Dt></BookgDt>
    <BookgDt><DtTm>2024-03-15T10:22:01+01:00</DtTm></BookgDt>

Y algunos bancos ponen el texto directamente en <BookgDt>.

SOLUCIÓN:
- El texto de la fecha se conserva tal cual para mostrarlo (columna
  display). Si solo hay timestamp, se toman los primeros 10 caracteres.
- Para ORDENAR se usa un entero YYYYMMDD. Una fecha mal formada o corta
  da 0 (nunca lanza): este entero no participa en ningún cálculo
  financiero, solo en el orden de las filas.
"""


def parse_iso_date_int(date_text: str) -> int:
    """Convierte "YYYY-MM-DD..." al entero YYYYMMDD.

    Solo se leen los primeros 10 caracteres, así que un timestamp completo
    también funciona.

    Args:
        date_text: Fecha en formato ISO (con o sin hora).

    Returns:
        Entero YYYYMMDD, o 0 si el texto es más corto que 10 caracteres
        o sus componentes no son numéricos.

    Ejemplos:
        >>> parse_iso_date_int("2024-03-15")
        20240315
        >>> parse_iso_date_int("2024-03-15T10:22:01")
        20240315
        >>> parse_iso_date_int("2024-3-5")
        0
        >>> parse_iso_date_int("")
        0
    """
    if len(date_text) < 10:
        return 0

    anio, mes, dia = date_text[0:4], date_text[5:7], date_text[8:10]
    if not all(parte.isascii() and parte.isdigit() for parte in (anio, mes, dia)):
        return 0

    return int(anio) * 10000 + int(mes) * 100 + int(dia)


def date_prefix(timestamp: str) -> str:
    """Devuelve la parte de fecha (10 caracteres) de un timestamp ISO.

    Ejemplos:
        >>> date_prefix("2024-03-15T10:22:01+01:00")
        '2024-03-15'
        >>> date_prefix("2024")
        '2024'
    """
    return timestamp[:10]
