"""
Adaptador de salida: Escritor de Excel.

Genera archivos Excel con el layout de 2 hojas:
- Hoja 1 (Resumen): un renglón por archivo CAMT (tipo, cuentas, número
  de statements, entradas y filas, avisos de tipo de cambio).
- Hoja 2 (Movimientos): las 33 columnas de exportación, una fila por
  transacción.

Los valores de Movimientos se escriben como TEXTO: montos, IBAN y
ordinales se ven exactamente igual que en el CSV (sin que Excel quite
ceros iniciales ni reformatee decimales).
"""

from pathlib import Path

import pandas as pd

from src.adapters.output.writers.row_table import build_rows_frame
from src.domain.exceptions import OutputError
from src.domain.models.export_options import ExportOptions
from src.domain.models.resultado_exportacion import ResultadoExportacion
from src.domain.ports.output_writer import OutputWriter


class ExcelWriter(OutputWriter):
    """Genera archivos Excel con formato estandarizado."""

    @property
    def format_name(self) -> str:
        return "xlsx"

    @property
    def extension(self) -> str:
        return ".xlsx"

    def write_single(
        self, resultado: ResultadoExportacion, output_path: Path, options: ExportOptions
    ) -> Path:
        """Escribe un solo archivo CAMT a Excel.

        Args:
            resultado: Resultado de procesar un archivo.
            output_path: Ruta donde crear el archivo. Si no termina en .xlsx,
                        se le agrega la extensión.
            options: Opciones de exportación (títulos y columna de huella).

        Returns:
            Ruta del archivo creado.
        """
        # Asegurar extensión .xlsx
        if output_path.suffix.lower() != self.extension:
            output_path = output_path.with_suffix(self.extension)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            self._escribir_excel([resultado], output_path, options)
        except Exception as e:
            raise OutputError(str(output_path), str(e))

        return output_path

    def write_consolidated(
        self,
        resultados: list[ResultadoExportacion],
        output_path: Path,
        options: ExportOptions,
    ) -> Path:
        """Escribe la consolidación de varios archivos CAMT.

        Mismas 2 hojas: un renglón de Resumen por archivo y todas las
        filas de Movimientos en el orden de `resultados`.
        """
        if not resultados:
            raise OutputError(str(output_path), "No hay resultados para consolidar")

        if output_path.suffix.lower() != self.extension:
            output_path = output_path.with_suffix(self.extension)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            self._escribir_excel(resultados, output_path, options)
        except Exception as e:
            raise OutputError(str(output_path), str(e))

        return output_path

    # =================================================================
    # MÉTODO PRIVADO: Generación del Excel
    # =================================================================

    def _escribir_excel(
        self,
        resultados: list[ResultadoExportacion],
        output_path: Path,
        options: ExportOptions,
    ) -> None:
        """Genera el archivo Excel con las 2 hojas."""
        df_movimientos = build_rows_frame(resultados, options)

        filas_resumen = []
        for resultado in resultados:
            filas_resumen.append(
                {
                    "Archivo": resultado.archivo_origen,
                    "Tipo": resultado.tipo,
                    "Cuentas": ", ".join(resultado.cuentas),
                    "Statements": len(resultado.documento.statements),
                    "Entradas": resultado.documento.num_entries,
                    "Filas": resultado.num_filas,
                    "Avisos": len(resultado.advertencias),
                }
            )

        df_resumen = pd.DataFrame(filas_resumen)

        # --- Escribir Excel con xlsxwriter ---
        with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
            df_resumen.to_excel(writer, index=False, sheet_name="Resumen")
            df_movimientos.to_excel(writer, index=False, sheet_name="Movimientos")

            workbook = writer.book
            ws_resumen = writer.sheets["Resumen"]
            ws_movimientos = writer.sheets["Movimientos"]

            text_format = workbook.add_format({"num_format": "@"})

            # --- Formato Hoja Resumen ---
            ws_resumen.set_column("A:A", 30)  # Archivo
            ws_resumen.set_column("B:B", 10)  # Tipo
            ws_resumen.set_column("C:C", 30, text_format)  # Cuentas
            ws_resumen.set_column("D:G", 12)  # Contadores

            # --- Formato Hoja Movimientos ---
            ws_movimientos.set_column(0, len(df_movimientos.columns) - 1, 16, text_format)
            ws_movimientos.set_column("F:F", 30, text_format)  # CounterpartyName
            ws_movimientos.set_column("G:G", 26, text_format)  # CounterpartyIBAN
            ws_movimientos.set_column("I:I", 50, text_format)  # RemittanceLine
            ws_movimientos.set_column("O:O", 26, text_format)  # AccountIBAN
            ws_movimientos.freeze_panes(1, 0)
