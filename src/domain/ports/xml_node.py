"""
Puerto de entrada: Navegación de un árbol XML genérico.

Define el contrato MÍNIMO que el parser CAMT necesita de un árbol XML:
nombre local, hijos, atributos y texto. Nada de XPath ni de validación
de esquema.

¿Por qué un puerto y no usar ElementTree directamente en el parser?
Porque el requisito central es "buscar elementos por nombre LOCAL sin
importar el namespace". Cada banco usa una variante distinta:

    <Document xmlns="urn:iso:std:iso:20022:tech:xsd:camt.053.001.02">
    <ns2:Document xmlns:ns2="urn:iso:std:iso:20022:tech:xsd:camt.053.001.08">
    <Document>   (sin namespace)

Concentrando la comparación por nombre local aquí, el parser no sabe
nada de namespaces y la librería XML se puede cambiar sin tocarlo.

Las operaciones abstractas son las 4 primitivas; el resto (child,
descendant, textos) se implementa aquí una sola vez sobre ellas.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator


class XmlNode(ABC):
    """Elemento de un árbol XML, visto sin namespaces."""

    # --- Primitivas ---

    @property
    @abstractmethod
    def local_name(self) -> str:
        """Nombre del elemento sin prefijo ni URI de namespace."""
        ...

    @abstractmethod
    def children(self) -> Iterator["XmlNode"]:
        """Hijos directos (solo elementos), en orden del documento."""
        ...

    @property
    @abstractmethod
    def attributes(self) -> dict[str, str]:
        """Atributos con su nombre local como clave."""
        ...

    @property
    @abstractmethod
    def raw_text(self) -> str:
        """Texto directo del elemento, sin recortar. "" si no tiene."""
        ...

    # --- Derivadas ---

    @property
    def text(self) -> str:
        """Texto recortado (espacios, tabs y saltos de línea en los extremos)."""
        return self.raw_text.strip(" \t\n\r")

    def child(self, name: str) -> "XmlNode | None":
        """Primer hijo directo con ese nombre local."""
        for hijo in self.children():
            if hijo.local_name == name:
                return hijo
        return None

    def children_named(self, name: str) -> list["XmlNode"]:
        """Todos los hijos directos con ese nombre local."""
        return [hijo for hijo in self.children() if hijo.local_name == name]

    def descendant(self, name: str) -> "XmlNode | None":
        """Primer descendiente con ese nombre local (búsqueda en profundidad,
        en orden del documento). No incluye al propio nodo.

        Usa una pila explícita: la profundidad del árbol no está acotada.
        """
        pendientes = list(self.children())
        pendientes.reverse()
        while pendientes:
            nodo = pendientes.pop()
            if nodo.local_name == name:
                return nodo
            hijos = list(nodo.children())
            hijos.reverse()
            pendientes.extend(hijos)
        return None

    def path(self, *names: str) -> "XmlNode | None":
        """Sigue una cadena de hijos directos: path("Domn", "Fmly", "Cd")."""
        nodo: XmlNode | None = self
        for name in names:
            if nodo is None:
                return None
            nodo = nodo.child(name)
        return nodo

    def child_text(self, *names: str) -> str:
        """Texto recortado de path(*names), o "" si no existe."""
        nodo = self.path(*names)
        return nodo.text if nodo is not None else ""

    def descendant_text(self, name: str) -> str:
        nodo = self.descendant(name)
        return nodo.text if nodo is not None else ""

    def attribute(self, name: str) -> str:
        """Valor de un atributo por nombre local, o ""."""
        return self.attributes.get(name, "")
