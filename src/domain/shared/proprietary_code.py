"""
Decodificación de códigos propietarios compuestos.

Varios dialectos bancarios (sobre todo alemanes, herencia del formato
DTA/MT940) meten varios identificadores en un solo campo <Prtry><Cd>,
separados por '+':

    "NTRF+166+9310"   →  prefijo "NTRF", código de referencia "166",
                         primanota "9310"
    "NMSC+201"        →  prefijo "NMSC", código de referencia "201"
    "NTRF"            →  solo prefijo

Solo el PRIMER '+' separa el prefijo del resto; si el resto contiene otro
'+', se vuelve a partir en código de referencia y primanota.
"""


def split_composite_code(code: str) -> tuple[str, str, str]:
    """Parte un código propietario en (prefijo, código de referencia, primanota).

    Args:
        code: Texto de <Prtry><Cd>, tal cual.

    Returns:
        Tupla (prefijo, referencia, primanota). Los campos ausentes son "".

    Ejemplos:
        >>> split_composite_code("NTRF+166+9310")
        ('NTRF', '166', '9310')
        >>> split_composite_code("NMSC+201")
        ('NMSC', '201', '')
        >>> split_composite_code("NTRF")
        ('NTRF', '', '')
        >>> split_composite_code("+116")
        ('', '116', '')
    """
    prefijo, separador, resto = code.partition("+")
    if not separador:
        return code, "", ""

    referencia, _, primanota = resto.partition("+")
    return prefijo, referencia, primanota
