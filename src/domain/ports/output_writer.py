"""
Puerto de salida: Escritor de resultados.

Define el contrato para escribir las filas exportadas en algún formato
persistente (CSV, Excel, etc.).

¿Por qué es un puerto de SALIDA?
Porque el dominio (parser, proyección, normalización) no decide NI conoce
el formato de salida. Solo produce un ResultadoExportacion y lo pasa a
quien implemente este puerto.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from src.domain.models.export_options import ExportOptions
from src.domain.models.resultado_exportacion import ResultadoExportacion


class OutputWriter(ABC):
    """Interfaz para escribir resultados de exportación."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Clave del formato en el registro. Ejemplo: 'csv', 'xlsx'."""
        ...

    @property
    @abstractmethod
    def extension(self) -> str:
        """Extensión de archivo incluyendo el punto. Ejemplo: '.csv'."""
        ...

    @abstractmethod
    def write_single(
        self, resultado: ResultadoExportacion, output_path: Path, options: ExportOptions
    ) -> Path:
        """Escribe el resultado de un solo archivo CAMT.

        Args:
            resultado: Filas y documento de un archivo.
            output_path: Ruta donde crear el archivo de salida.
            options: Opciones de presentación (delimitador, BOM, encabezado...).

        Returns:
            Ruta real del archivo creado (puede diferir si se añadió extensión).

        Raises:
            OutputError: Si falla la escritura (permisos, disco lleno, etc.)
        """
        ...

    @abstractmethod
    def write_consolidated(
        self,
        resultados: list[ResultadoExportacion],
        output_path: Path,
        options: ExportOptions,
    ) -> Path:
        """Escribe las filas de varios archivos en una sola salida.

        Raises:
            OutputError: Si no hay resultados o falla la escritura.
        """
        ...
