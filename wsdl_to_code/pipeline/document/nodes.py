"""
Document set: the parsed WSDL and XSD documents a generation run works on.

Provides the read-only queries the analyzer needs: find definitions by
kind, local name and namespace, read attributes and documentation text.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from lxml import etree

WSDL_NAMESPACE = "http://schemas.xmlsoap.org/wsdl/"
XSD_NAMESPACE = "http://www.w3.org/2001/XMLSchema"

# WSDL definition kinds that can be looked up by name
WSDL_KINDS = {"message", "portType"}

# Top-level schema components that can be looked up by name
SCHEMA_KINDS = {"complexType", "simpleType", "element"}


def wsdl(tag: str) -> str:
    """Clark name of a WSDL element."""
    return f"{{{WSDL_NAMESPACE}}}{tag}"


def xsd(tag: str) -> str:
    """Clark name of an XML Schema element."""
    return f"{{{XSD_NAMESPACE}}}{tag}"


@dataclass
class DefinitionSet:
    """A ``wsdl:definitions`` document."""

    root: etree._Element
    target_namespace: str = ""
    source: str = ""


@dataclass
class SchemaDocument:
    """An ``xsd:schema``, standalone or embedded in ``wsdl:types``."""

    root: etree._Element
    target_namespace: str = ""
    source: str = ""


@dataclass
class DocumentSet:
    """All documents loaded for one generation run, in load order."""

    definitions: list[DefinitionSet] = field(default_factory=list)
    schemas: list[SchemaDocument] = field(default_factory=list)

    def find_definitions(self, kind: str, local_name: str, namespace_uri: str) -> list[etree._Element]:
        """
        Find WSDL definitions by kind, name and target namespace.

        Args:
            kind: Definition kind ("message", "portType", ...)
            local_name: Declared name of the definition
            namespace_uri: targetNamespace of the enclosing definitions

        Returns:
            Matching elements in load order
        """
        if kind not in WSDL_KINDS:
            raise ValueError(f"Unsupported definition kind: {kind}")

        matches = []
        for definition_set in self.definitions:
            if definition_set.target_namespace != namespace_uri:
                continue
            for node in definition_set.root.iterchildren(wsdl(kind)):
                if node.get("name") == local_name:
                    matches.append(node)
        return matches

    def interfaces(self) -> Iterator[tuple[DefinitionSet, etree._Element]]:
        """Iterate over all portType definitions in document order."""
        for definition_set in self.definitions:
            for node in definition_set.root.iterchildren(wsdl("portType")):
                yield definition_set, node

    def schema_components(self, kind: str, local_name: str, namespace_uri: str) -> list[etree._Element]:
        """Find top-level schema components by kind, name and target namespace."""
        if kind not in SCHEMA_KINDS:
            raise ValueError(f"Unsupported schema component kind: {kind}")

        matches = []
        for schema in self.schemas:
            if schema.target_namespace != namespace_uri:
                continue
            for node in schema.root.iterchildren(xsd(kind)):
                if node.get("name") == local_name:
                    matches.append(node)
        return matches

    def has_type(self, local_name: str, namespace_uri: str) -> bool:
        """Check whether a complexType or simpleType is declared."""
        return bool(self.schema_components("complexType", local_name, namespace_uri) or self.schema_components("simpleType", local_name, namespace_uri))

    def has_element(self, local_name: str, namespace_uri: str) -> bool:
        """Check whether a top-level element is declared."""
        return bool(self.schema_components("element", local_name, namespace_uri))

    @staticmethod
    def attribute(node: etree._Element, name: str, default: str | None = None) -> str | None:
        return node.get(name, default)

    @staticmethod
    def documentation(node: etree._Element) -> str | None:
        """
        Get the documentation text of a node.

        Reads a ``wsdl:documentation`` child, or the ``xsd:documentation``
        entries of an ``xsd:annotation`` child.

        Returns:
            The trimmed text, or None when there is none
        """
        doc_nodes = list(node.iterchildren(wsdl("documentation")))
        if not doc_nodes:
            for annotation in node.iterchildren(xsd("annotation")):
                doc_nodes.extend(annotation.iterchildren(xsd("documentation")))

        texts = [_clean_text("".join(doc.itertext())) for doc in doc_nodes]
        text = "\n".join(t for t in texts if t)
        return text or None


def _clean_text(text: str) -> str:
    """Strip each line and drop the surrounding blank lines."""
    lines = [line.strip() for line in text.strip().splitlines()]
    return "\n".join(lines)
