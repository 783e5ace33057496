"""
Puerto de entrada: Parser de documentos CAMT.

Define el contrato para convertir un XML CAMT (camt.052, camt.053 o
camt.054) al modelo de dominio Document.

Un parser cumple una regla estricta: o devuelve un Document COMPLETO o
lanza una subclase de ParseError. Nunca un documento a medias.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from src.domain.models.document import Document


class DocumentParser(ABC):
    """Interfaz para parsers de documentos bancarios."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Nombre del formato que parsea. Ejemplo: 'CAMT'."""
        ...

    @abstractmethod
    def can_handle(self, file_path: Path) -> bool:
        """Indica si este parser puede intentar leer el archivo.

        Solo mira la ruta (extensión), no abre el archivo.
        """
        ...

    @abstractmethod
    def parse_bytes(self, data: bytes, source_name: str = "<bytes>") -> Document:
        """Parsea un documento desde un buffer en memoria.

        Args:
            data: Contenido XML completo.
            source_name: Nombre usado en los mensajes de error.

        Raises:
            ParseError: Si el documento está vacío, mal formado o no es CAMT.
        """
        ...

    @abstractmethod
    def parse_file(self, file_path: Path) -> Document:
        """Parsea un documento desde un archivo.

        Raises:
            FormatoInvalidoError: Si el archivo no existe.
            ExtractionError: Si el archivo no se puede leer.
            ParseError: Si el contenido no es un CAMT válido.
        """
        ...
