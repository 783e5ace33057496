"""
Adaptador de entrada: Nodo XML sobre xml.etree.ElementTree.

Implementa el puerto XmlNode envolviendo un Element de la librería
estándar. ElementTree representa los namespaces en el tag como
"{urn:...}Stmt"; aquí se descarta esa parte (y cualquier "prefijo:"
residual) para que el parser solo vea "Stmt".

¿Por qué ElementTree y no lxml?
Porque solo se necesita navegar hijos, atributos y texto de documentos
ya completos en memoria. No se usa XPath ni validación de esquema.
"""

from collections.abc import Iterator
from xml.etree.ElementTree import Element

from src.domain.ports.xml_node import XmlNode


def local_name(tag: str) -> str:
    """Quita el namespace de un tag o nombre de atributo.

    Ejemplos:
        >>> local_name("{urn:iso:std:iso:20022:tech:xsd:camt.053.001.02}Stmt")
        'Stmt'
        >>> local_name("ns2:Stmt")
        'Stmt'
        >>> local_name("Stmt")
        'Stmt'
    """
    if "}" in tag:
        tag = tag.rsplit("}", 1)[1]
    return tag.rsplit(":", 1)[-1]


class EtreeNode(XmlNode):
    """XmlNode respaldado por un xml.etree.ElementTree.Element."""

    __slots__ = ("_element",)

    def __init__(self, element: Element) -> None:
        self._element = element

    @property
    def local_name(self) -> str:
        return local_name(self._element.tag)

    def children(self) -> Iterator[XmlNode]:
        for hijo in self._element:
            # Comentarios e instrucciones de procesamiento tienen tag no-str
            if isinstance(hijo.tag, str):
                yield EtreeNode(hijo)

    @property
    def attributes(self) -> dict[str, str]:
        return {local_name(k): v for k, v in self._element.attrib.items()}

    @property
    def raw_text(self) -> str:
        return self._element.text or ""

    def __repr__(self) -> str:
        return f"EtreeNode(<{self.local_name}>)"
