"""
Enumeration facet extraction from XML Schema simple types.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from lxml import etree

from .nodes import XSD_NAMESPACE, DocumentSet, SchemaDocument, xsd

logger = logging.getLogger(__name__)

# Built-in XSD types whose enumeration values are integers
INTEGER_BASE_TYPES = {
    "integer",
    "int",
    "long",
    "short",
    "byte",
    "nonNegativeInteger",
    "nonPositiveInteger",
    "positiveInteger",
    "negativeInteger",
    "unsignedLong",
    "unsignedInt",
    "unsignedShort",
    "unsignedByte",
}


@dataclass
class EnumFacetSet:
    """The enumeration facets of one simple type."""

    name: str = ""
    target_namespace: str = ""
    cases: list[dict] = field(default_factory=list)  # {"value": ..., "doc": ...} records
    doc: str | None = None


class EnumerationFacetExtractor:
    """Collects enumeration facets from the schemas of a DocumentSet."""

    def extract(self, documents: DocumentSet) -> Iterator[EnumFacetSet]:
        """
        Yield one facet set per enumerated top-level simple type.

        Named simpleTypes and top-level elements declaring an anonymous
        simpleType are considered, in document order.
        """
        for schema in documents.schemas:
            yield from self._extract_from_schema(schema)

    def _extract_from_schema(self, schema: SchemaDocument) -> Iterator[EnumFacetSet]:
        for node in schema.root.iterchildren(xsd("simpleType"), xsd("element")):
            name = node.get("name")
            if not name:
                continue

            if node.tag == xsd("element"):
                simple_type = node.find(xsd("simpleType"))
                if simple_type is None:
                    continue
            else:
                simple_type = node

            restriction = simple_type.find(xsd("restriction"))
            if restriction is None:
                continue

            facets = list(restriction.iterchildren(xsd("enumeration")))
            if not facets:
                continue

            integer_valued = self._is_integer_base(restriction)
            cases = [self._facet_case(facet, integer_valued) for facet in facets]

            logger.debug("Found enumeration %s with %d cases", name, len(cases))
            yield EnumFacetSet(
                name=name,
                target_namespace=schema.target_namespace,
                cases=cases,
                doc=DocumentSet.documentation(node) or DocumentSet.documentation(simple_type),
            )

    def _is_integer_base(self, restriction: etree._Element) -> bool:
        """Check whether the restriction base is a built-in integer type."""
        base = restriction.get("base", "")
        prefix, _, local_name = base.rpartition(":")
        if local_name not in INTEGER_BASE_TYPES:
            return False
        namespace = restriction.nsmap.get(prefix or None)
        return namespace == XSD_NAMESPACE

    def _facet_case(self, facet: etree._Element, integer_valued: bool) -> dict:
        case = {"value": self._facet_value(facet, integer_valued), "doc": DocumentSet.documentation(facet) or ""}
        if isinstance(case["value"], int):
            # Case names follow the lexical form, so "007" and "7" stay distinct
            case["label"] = facet.get("value").strip()
        return case

    def _facet_value(self, facet: etree._Element, integer_valued: bool) -> str | int | None:
        value = facet.get("value")
        if value is None or not integer_valued:
            return value
        try:
            return int(value.strip())
        except ValueError:
            # Left as a string; the enum builder reports the conflict
            return value
