"""
Puertos (interfaces) del dominio.

Los puertos definen QUÉ necesita el dominio, sin decir CÓMO se implementa.
Cada puerto tiene uno o más adaptadores que lo implementan.

Uso:
    from src.domain.ports import DocumentParser, OutputWriter, XmlNode
"""

from src.domain.ports.document_parser import DocumentParser
from src.domain.ports.output_writer import OutputWriter
from src.domain.ports.process_logger import ProcessLogger
from src.domain.ports.reference_code_lookup import ReferenceCodeLookup
from src.domain.ports.xml_node import XmlNode

__all__ = [
    "DocumentParser",
    "OutputWriter",
    "ProcessLogger",
    "ReferenceCodeLookup",
    "XmlNode",
]
