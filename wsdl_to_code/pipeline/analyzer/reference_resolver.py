"""
Reference resolvers for QName and message resolution.

Splits prefixed references against explicit namespace scopes and resolves
operation message references to the ordered parts of their definitions.
"""

from __future__ import annotations

import logging

from lxml import etree

from ..document.nodes import XSD_NAMESPACE, DocumentSet, wsdl
from ..errors import ReferenceResolutionError
from .ir_nodes import MessagePart, QualifiedReference
from .namespace_scope import DEFAULT_PREFIX, NamespaceScope

logger = logging.getLogger(__name__)


class QualifiedReferenceResolver:
    """Splits ``prefix:localName`` references into qualified references."""

    def split(self, reference_text: str, scope: NamespaceScope) -> QualifiedReference:
        """
        Split a reference into its local name and namespace URI.

        Args:
            reference_text: The reference, e.g. "tns:GetQuoteRequest" or "GetQuoteRequest"
            scope: Namespace bindings visible where the reference appears

        Returns:
            QualifiedReference for the reference

        Raises:
            ReferenceResolutionError: If the text is not a QName or its prefix is unbound
        """
        text = (reference_text or "").strip()
        if not text:
            raise ReferenceResolutionError(reference_text or "", "Empty reference")

        if text.count(":") > 1:
            raise ReferenceResolutionError(text, "Malformed qualified name")

        prefix, _, local_name = text.rpartition(":")
        if not local_name or (":" in text and not prefix):
            raise ReferenceResolutionError(text, "Malformed qualified name")

        if prefix:
            namespace_uri = scope.lookup(prefix)
            if namespace_uri is None:
                raise ReferenceResolutionError(text, f"Namespace prefix '{prefix}' is not bound")
        else:
            # Unprefixed names use the default namespace, or no namespace at all
            namespace_uri = scope.lookup(DEFAULT_PREFIX) or ""

        return QualifiedReference(local_name=local_name, namespace_uri=namespace_uri)


class MessagePartResolver:
    """Resolves message references to the parts of their definitions."""

    def __init__(
        self,
        documents: DocumentSet,
        reference_resolver: QualifiedReferenceResolver | None = None,
        verify_part_references: bool = True,
    ):
        """
        Initialize the resolver.

        Args:
            documents: The loaded documents to search
            reference_resolver: Resolver used for message and part references
            verify_part_references: Whether part type/element references must name declared schema components
        """
        self.documents = documents
        self.reference_resolver = reference_resolver or QualifiedReferenceResolver()
        self.verify_part_references = verify_part_references

    def resolve_message_parts(self, message_reference: str, scope: NamespaceScope) -> tuple[MessagePart, ...]:
        """
        Resolve a message reference to its ordered parts.

        Args:
            message_reference: The message attribute of an operation input/output
            scope: Namespace bindings visible at the input/output element

        Returns:
            The message parts in document order

        Raises:
            ReferenceResolutionError: If the reference or one of the part references cannot be resolved
        """
        qname = self.reference_resolver.split(message_reference, scope)
        message = self.find_message(message_reference, qname)

        parts = []
        for part_node in message.iterchildren(wsdl("part")):
            parts.append(self._build_part(part_node))
        return tuple(parts)

    def find_message(self, message_reference: str, qname: QualifiedReference) -> etree._Element:
        """Find the message definition for a resolved reference.

        The first definition in load order wins when several match.
        """
        matches = self.documents.find_definitions("message", qname.local_name, qname.namespace_uri)
        if not matches:
            raise ReferenceResolutionError(message_reference, f"Message not found ({qname})")
        if len(matches) > 1:
            logger.warning("Message %s is defined %d times, using the first definition", qname, len(matches))
        return matches[0]

    def _build_part(self, part_node: etree._Element) -> MessagePart:
        """Convert a part element into a MessagePart."""
        scope = NamespaceScope.from_element(part_node)
        name = DocumentSet.attribute(part_node, "name", "")

        type_text = DocumentSet.attribute(part_node, "type")
        element_text = DocumentSet.attribute(part_node, "element")
        if type_text is not None and element_text is not None:
            raise ReferenceResolutionError(name or type_text, "Part declares both type and element")

        type_ref = None
        element_ref = None

        if type_text is not None:
            type_ref = self.reference_resolver.split(type_text, scope)
            if self.verify_part_references:
                self._verify(type_text, type_ref, self.documents.has_type, "Type")

        if element_text is not None:
            element_ref = self.reference_resolver.split(element_text, scope)
            if self.verify_part_references:
                self._verify(element_text, element_ref, self.documents.has_element, "Element")

        logger.debug("Resolved part %s (type=%s, element=%s)", name, type_ref, element_ref)
        return MessagePart(name=name, type_ref=type_ref, element_ref=element_ref)

    def _verify(self, reference_text: str, qname: QualifiedReference, is_declared, label: str) -> None:
        """Check that a part reference names a declared schema component."""
        if qname.namespace_uri == XSD_NAMESPACE:
            return
        if not is_declared(qname.local_name, qname.namespace_uri):
            raise ReferenceResolutionError(reference_text, f"{label} not found ({qname})")
