"""
Document module.

Contains the document set and the lxml parser for WSDL and XSD files,
plus enumeration facet extraction.
"""

from __future__ import annotations

from .facets import EnumerationFacetExtractor, EnumFacetSet
from .nodes import WSDL_NAMESPACE, XSD_NAMESPACE, DefinitionSet, DocumentSet, SchemaDocument
from .parser import DocumentParser

__all__ = [
    "DefinitionSet",
    "DocumentSet",
    "SchemaDocument",
    "DocumentParser",
    "EnumerationFacetExtractor",
    "EnumFacetSet",
    "WSDL_NAMESPACE",
    "XSD_NAMESPACE",
]
