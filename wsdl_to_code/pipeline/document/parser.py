"""
Document parser that builds a DocumentSet.

Phase 1 of the pipeline: parse WSDL and XSD files with lxml without
resolving references. Imports and includes are not followed; only the
documents handed to the parser are visible to the analyzer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from lxml import etree

from ..errors import DocumentLoadError
from .nodes import WSDL_NAMESPACE, XSD_NAMESPACE, DefinitionSet, DocumentSet, SchemaDocument, wsdl, xsd

logger = logging.getLogger(__name__)


class DocumentParser:
    """Parses WSDL and XSD documents into a DocumentSet."""

    def __init__(self):
        self._parser = etree.XMLParser(remove_comments=True, resolve_entities=False, no_network=True)

    def parse_files(self, paths: Iterable[str | Path]) -> DocumentSet:
        """
        Parse several documents into one set.

        Args:
            paths: WSDL or XSD files, in the order definitions should be searched

        Returns:
            DocumentSet holding every definition and schema found
        """
        documents = DocumentSet()
        for path in paths:
            self.parse_file(path, documents)
        return documents

    def parse_file(self, path: str | Path, documents: DocumentSet | None = None) -> DocumentSet:
        """Parse one file, adding its content to documents (or a new set)."""
        source = str(path)
        try:
            with open(path, "rb") as f:
                content = f.read()
        except OSError as e:
            raise DocumentLoadError(source, f"cannot read document: {e}") from e
        return self.parse_string(content, source, documents)

    def parse_string(self, content: str | bytes, source: str = "<string>", documents: DocumentSet | None = None) -> DocumentSet:
        """Parse a document from memory, adding its content to documents (or a new set)."""
        if documents is None:
            documents = DocumentSet()

        if isinstance(content, str):
            content = content.encode("utf-8")

        try:
            root = etree.fromstring(content, self._parser)
        except etree.XMLSyntaxError as e:
            raise DocumentLoadError(source, f"invalid XML: {e}") from e

        if root.tag == wsdl("definitions"):
            self._add_definitions(root, source, documents)
        elif root.tag == xsd("schema"):
            documents.schemas.append(SchemaDocument(root=root, target_namespace=root.get("targetNamespace", ""), source=source))
            logger.debug("Loaded schema %s (targetNamespace=%s)", source, root.get("targetNamespace", ""))
        else:
            raise DocumentLoadError(source, f"unsupported root element {root.tag}; expected {{{WSDL_NAMESPACE}}}definitions or {{{XSD_NAMESPACE}}}schema")

        return documents

    def _add_definitions(self, root: etree._Element, source: str, documents: DocumentSet) -> None:
        """Register a wsdl:definitions document and its embedded schemas."""
        target_namespace = root.get("targetNamespace", "")
        documents.definitions.append(DefinitionSet(root=root, target_namespace=target_namespace, source=source))
        logger.debug("Loaded definitions %s (targetNamespace=%s)", source, target_namespace)

        for types_node in root.iterchildren(wsdl("types")):
            for schema_root in types_node.iterchildren(xsd("schema")):
                documents.schemas.append(
                    SchemaDocument(
                        root=schema_root,
                        target_namespace=schema_root.get("targetNamespace", ""),
                        source=source,
                    )
                )
