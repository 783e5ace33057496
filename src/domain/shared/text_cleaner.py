"""
Utilidades de limpieza y normalización de texto.

Funciones reutilizables para derivar los valores CANÓNICOS de las filas
exportadas (los que se usan para comparar, ordenar y calcular huellas).

Estas funciones NO tienen lógica de negocio (no saben de cuentas ni
montos). Solo operan sobre strings puros.

Dos niveles:
- ASCII: trim, quitar espacios, mayúsculas/minúsculas solo en A-Z.
  Los caracteres no ASCII pasan intactos.
- Unicode (normalize_freetext): NFC + casefold + quitar todo espacio
  Unicode y caracteres de ancho cero. Es lo que se usa para nombres y
  textos de remesa, donde "Müller  GmbH" y "MÜLLER GMBH" deben ser el
  mismo valor canónico.
"""

import unicodedata

# Espacios ASCII (incluye \v y \f)
_ASCII_WS = " \t\n\r\f\v"

# Categorías Unicode de separadores: espacio, línea, párrafo
_CATEGORIAS_ESPACIO = frozenset({"Zs", "Zl", "Zp"})

_ANCHO_CERO = frozenset(
    {
        "\u200b",  # ZERO WIDTH SPACE
        "\u200c",  # ZERO WIDTH NON-JOINER
        "\u200d",  # ZERO WIDTH JOINER
        "\u2060",  # WORD JOINER
        "\ufeff",  # BOM / ZERO WIDTH NO-BREAK SPACE
    }
)


def ascii_trim(text: str) -> str:
    """Quita espacios ASCII al inicio y al final.

    A diferencia de str.strip() sin argumentos, NO quita NBSP ni otros
    espacios Unicode.

    Ejemplos:
        >>> ascii_trim("  EUR\\t")
        'EUR'
        >>> ascii_trim("\\u00a0EUR")
        '\\xa0EUR'
    """
    return text.strip(_ASCII_WS)


def strip_all_spaces(text: str) -> str:
    """Elimina TODOS los espacios ASCII, también los interiores.

    Ejemplos:
        >>> strip_all_spaces("DE89 3704 0044 0532 0130 00")
        'DE89370400440532013000'
    """
    return "".join(c for c in text if c not in _ASCII_WS)


def ascii_upper(text: str) -> str:
    """Mayúsculas solo para a-z; el resto de caracteres queda igual.

    Ejemplos:
        >>> ascii_upper("crdt-ä")
        'CRDT-ä'
    """
    return "".join(c.upper() if c.isascii() else c for c in text)


def ascii_lower(text: str) -> str:
    """Minúsculas solo para A-Z; el resto de caracteres queda igual."""
    return "".join(c.lower() if c.isascii() else c for c in text)


def normalize_freetext(text: str) -> str:
    """Normalización completa de texto libre.

    Pasos:
    1. Forma compuesta canónica (NFC).
    2. Case folding (más agresivo que lower: "ß" → "ss").
    3. Eliminar espacios Unicode (Zs, Zl, Zp) y controles de espacio ASCII.
    4. Eliminar caracteres de ancho cero.

    Ejemplos:
        >>> normalize_freetext("Müller  GmbH")
        'müllergmbh'
        >>> normalize_freetext("Stra\\u00dfe\\u200b 1")
        'strasse1'
    """
    plegado = unicodedata.normalize("NFC", text).casefold()
    return "".join(
        c
        for c in plegado
        if c not in _ASCII_WS
        and c not in _ANCHO_CERO
        and unicodedata.category(c) not in _CATEGORIAS_ESPACIO
    )


def normalize_freetext_ascii(text: str) -> str:
    """Variante mínima de normalize_freetext: solo ASCII.

    Quita espacios ASCII y pasa A-Z a minúsculas. Los caracteres no ASCII
    se conservan intactos (sin NFC ni casefold).

    Ejemplos:
        >>> normalize_freetext_ascii("Müller  GmbH")
        'müllergmbh'
        >>> normalize_freetext_ascii("ÄRGER")
        'Ärger'
    """
    return ascii_lower(strip_all_spaces(text))
