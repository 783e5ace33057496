"""
Adaptador de salida: Escritor de CSV.

Formato de la salida:
- Delimitador configurable (por defecto ';', el habitual en Alemania,
  donde la coma es separador decimal).
- Encabezado opcional con los títulos de ExportField.
- BOM UTF-8 opcional para que Excel detecte la codificación.
- Comillas solo cuando hacen falta (delimitador, comillas, CR o LF
  dentro del valor); las comillas internas se duplican. El escape se
  hace celda por celda (escape_cell).
- Fin de línea '\\n'.
"""

from pathlib import Path

import pandas as pd

from src.adapters.output.writers.row_table import build_rows_frame
from src.domain.exceptions import OutputError
from src.domain.models.export_options import ExportOptions
from src.domain.models.resultado_exportacion import ResultadoExportacion
from src.domain.ports.output_writer import OutputWriter


class CsvWriter(OutputWriter):
    """Genera archivos CSV con las 33 columnas de exportación."""

    @property
    def format_name(self) -> str:
        return "csv"

    @property
    def extension(self) -> str:
        return ".csv"

    def write_single(
        self, resultado: ResultadoExportacion, output_path: Path, options: ExportOptions
    ) -> Path:
        """Escribe las filas de un archivo CAMT a CSV.

        Args:
            resultado: Resultado de procesar un archivo.
            output_path: Ruta donde crear el archivo. Si no termina en .csv,
                        se le agrega la extensión.
            options: Delimitador, encabezado y BOM.

        Returns:
            Ruta del archivo creado.
        """
        return self._escribir([resultado], output_path, options)

    def write_consolidated(
        self,
        resultados: list[ResultadoExportacion],
        output_path: Path,
        options: ExportOptions,
    ) -> Path:
        """Escribe las filas de varios archivos en un solo CSV, en orden."""
        if not resultados:
            raise OutputError(str(output_path), "No hay resultados para consolidar")
        return self._escribir(resultados, output_path, options)

    def _escribir(
        self,
        resultados: list[ResultadoExportacion],
        output_path: Path,
        options: ExportOptions,
    ) -> Path:
        if output_path.suffix.lower() != self.extension:
            output_path = output_path.with_suffix(self.extension)

        df = build_rows_frame(resultados, options)
        encoding = "utf-8-sig" if options.write_utf8_bom else "utf-8"

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding=encoding, newline="") as fh:
                for linea in _lineas(df, options):
                    fh.write(linea)
        except Exception as e:
            raise OutputError(str(output_path), str(e))

        return output_path


# =====================================================================
# MÉTODOS PRIVADOS: Escape de celdas
# =====================================================================


def escape_cell(value: str, delimiter: str) -> str:
    """Escapa un valor para CSV.

    Se entrecomilla si contiene el delimitador, comillas, CR o LF; las
    comillas internas se duplican siempre.

    Ejemplos:
        >>> escape_cell('a;b', ';')
        '"a;b"'
        >>> escape_cell('a\\rb', ';')
        '"a\\rb"'
        >>> escape_cell('EUR', ';')
        'EUR'
    """
    necesita_comillas = any(c in value for c in (delimiter, '"', "\r", "\n"))
    escapado = value.replace('"', '""')
    if necesita_comillas:
        return f'"{escapado}"'
    return escapado


def _lineas(df: pd.DataFrame, options: ExportOptions):
    """Genera las líneas del archivo, encabezado incluido si se pidió."""
    d = options.delimiter
    if options.include_header:
        yield d.join(escape_cell(str(c), d) for c in df.columns) + "\n"
    for fila in df.itertuples(index=False, name=None):
        yield d.join(escape_cell(str(v), d) for v in fila) + "\n"
