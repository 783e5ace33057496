"""
Utilidades compartidas del dominio.

Estas funciones son usadas por el parser CAMT, la proyección de filas y
la normalización. No dependen de ninguna librería externa; solo operan
sobre tipos nativos de Python y los modelos del dominio.

Uso:
    from src.domain.shared.money import parse_decimal, format_amount
    from src.domain.shared.date_parser import parse_iso_date_int
    from src.domain.shared.text_cleaner import normalize_freetext, strip_all_spaces
    from src.domain.shared.fx_rate import reconcile_ccyxchg
    from src.domain.shared.proprietary_code import split_composite_code
"""
