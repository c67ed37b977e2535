"""
Operation descriptor builder.

Walks the operations of a portType and builds their parameter and return
lists from the resolved input and output messages.
"""

from __future__ import annotations

import logging

from lxml import etree

from ..document.nodes import DocumentSet, wsdl
from .ir_nodes import ArtifactKind, InterfaceDescriptor, OperationDescriptor, ParamDescriptor
from .namespace_scope import NamespaceScope
from .reference_resolver import MessagePartResolver

logger = logging.getLogger(__name__)


class OperationDescriptorBuilder:
    """Builds operation and interface descriptors."""

    def __init__(self, part_resolver: MessagePartResolver):
        self.part_resolver = part_resolver

    def build_interface(self, interface_node: etree._Element, target_namespace: str) -> InterfaceDescriptor:
        """
        Build the descriptor of a portType.

        Args:
            interface_node: The wsdl:portType element
            target_namespace: targetNamespace of the enclosing definitions

        Returns:
            InterfaceDescriptor with its operations in document order
        """
        return InterfaceDescriptor(
            name=DocumentSet.attribute(interface_node, "name", ""),
            namespace_uri=InterfaceDescriptor.qualify_namespace(ArtifactKind.PORT_TYPE, target_namespace),
            operations=self.build_operations(interface_node),
            doc=DocumentSet.documentation(interface_node),
        )

    def build_operations(self, interface_node: etree._Element) -> tuple[OperationDescriptor, ...]:
        """Build one descriptor per operation, preserving document order."""
        return tuple(self.build_operation(node) for node in interface_node.iterchildren(wsdl("operation")))

    def build_operation(self, operation_node: etree._Element) -> OperationDescriptor:
        """Build the descriptor of one operation."""
        name = DocumentSet.attribute(operation_node, "name", "")
        logger.debug("Building operation %s", name)
        return OperationDescriptor(
            name=name,
            doc=DocumentSet.documentation(operation_node),
            params=self._resolve_params(operation_node, "input"),
            returns=self._resolve_params(operation_node, "output"),
        )

    def _resolve_params(self, operation_node: etree._Element, direction: str) -> tuple[ParamDescriptor, ...]:
        """Resolve the input or output message of an operation.

        A missing message reference yields no parameters.
        """
        message_node = operation_node.find(wsdl(direction))
        if message_node is None:
            return ()

        message_reference = DocumentSet.attribute(message_node, "message")
        if message_reference is None:
            return ()

        scope = NamespaceScope.from_element(message_node)
        parts = self.part_resolver.resolve_message_parts(message_reference, scope)
        return tuple(ParamDescriptor.from_part(part) for part in parts)
