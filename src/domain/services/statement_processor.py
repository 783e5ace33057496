"""
Servicio de dominio: Procesador de extractos CAMT.

Orquesta el pipeline completo para un archivo:
1. Recibe una ruta a un archivo XML.
2. Verifica que el parser lo acepte (can_handle).
3. Extrae el Document (DocumentParser).
4. Registra los tipos de cambio que hubo que corregir.
5. Proyecta las filas (RowProjector).
6. Normaliza y, si se pidió, ordena con recálculo de saldo corrido.
7. Devuelve un ResultadoExportacion.

¿Por qué no poner esta lógica en el CLI?
Porque esta orquestación es LÓGICA DE NEGOCIO: "dado un CAMT, producir
filas" es una regla del dominio. El CLI solo decide QUÉ archivos
procesar y DÓNDE guardar los resultados.
"""

from pathlib import Path

from src.domain.exceptions import ParserBaseError
from src.domain.models.document import Document
from src.domain.models.export_options import ExportOptions
from src.domain.models.resultado_exportacion import ResultadoExportacion
from src.domain.ports.document_parser import DocumentParser
from src.domain.ports.process_logger import ProcessLogger
from src.domain.services.row_normalizer import normalize_row, sort_rows
from src.domain.services.row_projector import RowProjector


class StatementProcessor:
    """Procesa un archivo CAMT y produce un ResultadoExportacion.

    Recibe sus dependencias por constructor (Dependency Injection).
    No sabe qué parser ni qué tabla de códigos concretos se están
    usando: solo conoce las interfaces (puertos).
    """

    def __init__(
        self,
        parser: DocumentParser,
        projector: RowProjector,
        logger: ProcessLogger,
        options: ExportOptions | None = None,
    ) -> None:
        """
        Args:
            parser: Parser de documentos CAMT.
            projector: Proyección de Document a filas.
            logger: Logger para la bitácora de procesamiento.
            options: Opciones de proyección y orden. None → valores por defecto.
        """
        self._parser = parser
        self._projector = projector
        self._logger = logger
        self._options = options or ExportOptions()

    @property
    def options(self) -> ExportOptions:
        return self._options

    def process_file(self, file_path: Path) -> ResultadoExportacion | None:
        """Procesa un archivo y devuelve el resultado.

        Args:
            file_path: Ruta al archivo a procesar.

        Returns:
            ResultadoExportacion si el procesamiento fue exitoso.
            None si el archivo fue descartado o hubo un error no fatal.
        """
        self._logger.log_file_received(file_path, file_path.suffix)

        if not self._parser.can_handle(file_path):
            self._logger.log_file_skipped(
                file_path,
                f"{self._parser.format_name} no acepta archivos '{file_path.suffix}'",
            )
            return None

        try:
            documento = self._parser.parse_file(file_path)
        except ParserBaseError as e:
            self._logger.log_error(file_path, e)
            return None

        self._logger.log_document_parsed(
            file_path, documento.kind.value, len(documento.statements), documento.num_entries
        )
        advertencias = self._revisar_tipos_cambio(file_path, documento)

        filas = self.export_rows(documento)
        self._logger.log_rows_exported(file_path, len(filas))

        return ResultadoExportacion(
            documento=documento,
            filas=tuple(filas),
            archivo_origen=file_path.name,
            advertencias=tuple(advertencias),
        )

    def export_rows(self, documento: Document) -> list:
        """Proyecta, normaliza y (según opciones) ordena las filas de un documento."""
        opciones = self._options
        filas = [
            normalize_row(fila, unicode_normalization=opciones.unicode_normalization)
            for fila in self._projector.project(documento, opciones)
        ]
        if opciones.sort_rows:
            filas = sort_rows(filas, use_booking_date=opciones.use_booking_date)
        return filas

    def process_directory(self, dir_path: Path) -> list[ResultadoExportacion]:
        """Procesa todos los archivos XML de un directorio (recursivo).

        Args:
            dir_path: Ruta al directorio con extractos CAMT.

        Returns:
            Lista de ResultadoExportacion (solo los exitosos).
        """
        if not dir_path.is_dir():
            raise ValueError(f"No es un directorio: {dir_path}")

        archivos = sorted(
            p for p in dir_path.glob("**/*") if p.is_file() and p.suffix.lower() == ".xml"
        )

        if not archivos:
            print(f"No se encontraron archivos XML en {dir_path}")
            return []

        resultados: list[ResultadoExportacion] = []
        for archivo in archivos:
            resultado = self.process_file(archivo)
            if resultado is not None:
                resultados.append(resultado)

        return resultados

    def _revisar_tipos_cambio(self, file_path: Path, documento: Document) -> list[str]:
        """Registra cada transacción cuyo tipo de cambio informado no se usó tal cual.

        Un tipo derivado sin que el XML trajera uno no es un ajuste: no
        hay nada que avisar.
        """
        advertencias: list[str] = []
        for statement in documento.statements:
            for entry in statement.entries:
                for tx in entry.transactions:
                    fx = tx.fx
                    if not fx.has or fx.supplied_rate <= 0:
                        continue
                    if not fx.inverted and fx.rate == fx.supplied_rate:
                        continue

                    self._logger.log_fx_rate_adjusted(
                        file_path, entry.ordinal, fx.supplied_rate, fx.rate, fx.inverted
                    )
                    motivo = "invertido" if fx.inverted else "reemplazado"
                    advertencias.append(
                        f"Entrada {entry.ordinal}, transacción {tx.ordinal}: "
                        f"tipo de cambio {fx.supplied_rate} {motivo} por {fx.rate:.6f}"
                    )
        return advertencias
