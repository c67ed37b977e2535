"""
Namespace scopes for QName resolution.

A scope is a chain of frames, one per element that declares namespaces,
walked from the innermost frame outward. Inner declarations shadow outer ones.
"""

from __future__ import annotations

from collections.abc import Mapping

from lxml import etree

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

# Prefix under which the default namespace is stored
DEFAULT_PREFIX = ""


class NamespaceScope:
    """Prefix bindings visible at one point of a document."""

    def __init__(self, bindings: Mapping[str, str] | None = None, parent: NamespaceScope | None = None):
        """
        Initialize a scope frame.

        Args:
            bindings: prefix -> namespace URI declared by this frame ("" for the default namespace)
            parent: Enclosing scope, or None for the outermost frame
        """
        self._bindings = dict(bindings or {})
        self.parent = parent

    @classmethod
    def from_element(cls, element: etree._Element) -> NamespaceScope:
        """Build the scope visible at an lxml element.

        One frame is created per ancestor (root first) holding only the
        declarations introduced by that element.
        """
        chain = [element, *element.iterancestors()]
        chain.reverse()

        scope = cls()
        inherited: dict[str | None, str] = {}
        for node in chain:
            declared = {prefix or DEFAULT_PREFIX: uri for prefix, uri in node.nsmap.items() if inherited.get(prefix) != uri}
            scope = scope.child(declared)
            inherited = dict(node.nsmap)
        return scope

    def child(self, bindings: Mapping[str, str]) -> NamespaceScope:
        """Return a new scope nested in this one."""
        return NamespaceScope(bindings, parent=self)

    def lookup(self, prefix: str) -> str | None:
        """Return the namespace bound to prefix, walking outward, or None."""
        if prefix == "xml":
            return XML_NAMESPACE
        scope: NamespaceScope | None = self
        while scope is not None:
            if prefix in scope._bindings:
                return scope._bindings[prefix]
            scope = scope.parent
        return None

    @property
    def default_namespace(self) -> str | None:
        return self.lookup(DEFAULT_PREFIX)

    def visible_bindings(self) -> dict[str, str]:
        """Flatten the chain into the bindings visible in this scope."""
        frames = []
        scope: NamespaceScope | None = self
        while scope is not None:
            frames.append(scope._bindings)
            scope = scope.parent

        visible: dict[str, str] = {}
        for frame in reversed(frames):
            visible.update(frame)
        return visible

    def __repr__(self) -> str:
        return f"NamespaceScope({self.visible_bindings()!r})"
