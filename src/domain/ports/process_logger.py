"""
Puerto de salida: Bitácora de procesamiento (Process Logger).

Define el contrato para registrar eventos durante la conversión de
extractos CAMT.

¿Por qué no usar simplemente el módulo `logging` de Python?
Porque `logging` es una herramienta de infraestructura (HOW), mientras que
este puerto define los EVENTOS de negocio (WHAT):
- "Se recibió un archivo" (no "INFO: archivo recibido")
- "El tipo de cambio venía invertido" (no "WARNING: fx")

La implementación puede usar `logging` internamente, pero el dominio
solo conoce los eventos de negocio. Esto permite:
- En desarrollo: imprimir a consola.
- En tests: acumular en memoria y hacer asserts.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class ProcessLogger(ABC):
    """Interfaz para la bitácora de procesamiento."""

    # --- Fase 1: Recepción ---

    @abstractmethod
    def log_file_received(self, file_path: Path, file_type: str) -> None:
        """Registra que se recibió un archivo para procesar.

        Args:
            file_path: Ruta del archivo.
            file_type: Extensión o tipo detectado: '.xml', '.txt'...
        """
        ...

    @abstractmethod
    def log_file_skipped(self, file_path: Path, reason: str) -> None:
        """Registra que un archivo fue descartado.

        Args:
            file_path: Ruta del archivo descartado.
            reason: Razón del descarte. Ejemplo: "Extensión .pdf no soportada"
        """
        ...

    # --- Fase 2: Parseo y proyección ---

    @abstractmethod
    def log_document_parsed(
        self, file_path: Path, kind: str, num_statements: int, num_entries: int
    ) -> None:
        """Registra que un documento CAMT se extrajo completo.

        Args:
            file_path: Archivo de origen.
            kind: Tipo de mensaje ("camt.053", ...).
            num_statements: Statements encontrados.
            num_entries: Entradas (<Ntry>) en total.
        """
        ...

    @abstractmethod
    def log_fx_rate_adjusted(
        self, file_path: Path, entry_ordinal: int, supplied: float, effective: float, inverted: bool
    ) -> None:
        """Registra que el tipo de cambio informado se reemplazó por el derivado.

        Args:
            file_path: Archivo de origen.
            entry_ordinal: Ordinal de la entrada afectada.
            supplied: Tipo de cambio tal como venía en el XML.
            effective: Tipo de cambio que se usará.
            inverted: True si el informado era el recíproco.
        """
        ...

    @abstractmethod
    def log_rows_exported(self, file_path: Path, num_rows: int) -> None:
        """Registra el fin exitoso de la proyección de filas."""
        ...

    @abstractmethod
    def log_error(self, file_path: Path, error: Exception) -> None:
        """Registra un error durante el procesamiento."""
        ...

    # --- Fase 3: Escritura ---

    @abstractmethod
    def log_output_written(self, output_path: Path) -> None:
        """Registra que se generó un archivo de salida."""
        ...

    # --- Resumen ---

    @abstractmethod
    def get_summary(self) -> dict:
        """Devuelve un resumen de todo el procesamiento.

        Returns:
            Diccionario con métricas:
            {
                'archivos_recibidos': int,
                'archivos_procesados': int,
                'archivos_descartados': int,
                'archivos_con_error': int,
                'total_filas': int,
                'tipos_cambio_ajustados': int,
                'salidas': List[str],
                'errores': List[dict],  # [{archivo, error}]
            }
        """
        ...
