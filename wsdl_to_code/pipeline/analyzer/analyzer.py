"""
Document analyzer that transforms a DocumentSet to IR.

Phase 2 of the pipeline: resolve message references, build interface
descriptors from portTypes and enum descriptors from enumeration facets.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from ..config import CodeGeneratorConfig, ErrorPolicy
from ..document.facets import EnumerationFacetExtractor
from ..document.nodes import DocumentSet
from ..errors import GenerationError
from .enum_builder import EnumSpecBuilder
from .ir_nodes import IR, DefinitionFailure
from .operation_builder import OperationDescriptorBuilder
from .reference_resolver import MessagePartResolver, QualifiedReferenceResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DocumentAnalyzer:
    """Analyzes a document set and builds IR."""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the analyzer.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self.reference_resolver = QualifiedReferenceResolver()
        self.enum_builder = EnumSpecBuilder(
            case_collision=config.case_collision,
            empty_case_name=config.empty_case_name,
        )
        self.facet_extractor = EnumerationFacetExtractor()

    def analyze(self, documents: DocumentSet, root_name: str = "") -> IR:
        """
        Analyze the documents and build IR.

        Definitions are processed in document order. Under ErrorPolicy.SKIP a
        failing definition is recorded in ``IR.failures`` and left out.

        Args:
            documents: The loaded documents
            root_name: Name of the generation unit

        Returns:
            IR ready for code generation
        """
        ir = IR(root_name=root_name)

        if self.config.generate_interfaces:
            part_resolver = MessagePartResolver(
                documents,
                reference_resolver=self.reference_resolver,
                verify_part_references=self.config.verify_part_references,
            )
            operation_builder = OperationDescriptorBuilder(part_resolver)

            for definition_set, interface_node in documents.interfaces():
                name = interface_node.get("name", "")
                if name in self.config.ignore_interfaces:
                    logger.debug("Ignoring interface %s", name)
                    continue
                interface = self._build_definition(
                    ir,
                    "interface",
                    name,
                    lambda: operation_builder.build_interface(interface_node, definition_set.target_namespace),
                )
                if interface is not None:
                    ir.interfaces.append(interface)

        if self.config.generate_enums:
            for facet_set in self.facet_extractor.extract(documents):
                if facet_set.name in self.config.ignore_enums:
                    logger.debug("Ignoring enum %s", facet_set.name)
                    continue
                enum = self._build_definition(
                    ir,
                    "enum",
                    facet_set.name,
                    lambda: self.enum_builder.build_enum(
                        self.config.code_namespace(facet_set.target_namespace),
                        facet_set.name,
                        facet_set.cases,
                        facet_set.doc,
                    ),
                )
                if enum is not None:
                    ir.enums.append(enum)

        return ir

    def _build_definition(self, ir: IR, kind: str, name: str, build: Callable[[], T]) -> T | None:
        """Build one definition, applying the error policy on failure."""
        try:
            return build()
        except GenerationError as e:
            if self.config.on_definition_error != ErrorPolicy.SKIP:
                raise
            logger.warning("Skipping %s %s: %s", kind, name, e)
            ir.failures.append(DefinitionFailure(kind=kind, name=name, error=e))
            return None
