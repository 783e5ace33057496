"""
Tabla de filas exportadas como DataFrame.

Los writers CSV y Excel escriben exactamente las mismas columnas; este
módulo arma el DataFrame una sola vez para ambos.
"""

import pandas as pd

from src.domain.models.export_options import ExportOptions
from src.domain.models.export_row import header_names
from src.domain.models.resultado_exportacion import ResultadoExportacion
from src.domain.services.row_normalizer import fingerprint_sha256

FINGERPRINT_COLUMN = "Fingerprint"


def column_names(options: ExportOptions) -> list[str]:
    """Títulos de columna, incluida la huella si se pidió."""
    nombres = header_names(options.credit_as_bool)
    if options.include_fingerprint:
        nombres.append(FINGERPRINT_COLUMN)
    return nombres


def build_rows_frame(
    resultados: list[ResultadoExportacion], options: ExportOptions
) -> pd.DataFrame:
    """DataFrame con los valores display de todas las filas, en orden.

    Todas las columnas son texto (dtype object): los montos se escriben
    exactamente como los formateó la proyección, sin pasar por float.
    """
    registros: list[list[str]] = []
    for resultado in resultados:
        for fila in resultado.filas:
            valores = fila.displays
            if options.include_fingerprint:
                valores.append(
                    fingerprint_sha256(fila, unicode_normalization=options.unicode_normalization)
                )
            registros.append(valores)

    return pd.DataFrame(registros, columns=column_names(options), dtype=object)
