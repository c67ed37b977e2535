"""
IR (Intermediate Representation) node definitions.

These nodes represent the analyzed and resolved documents, ready for
code generation. All references are resolved and enum backing kinds are
determined. Nodes are frozen once built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ArtifactKind(str, Enum):
    """Kind of definition an interface descriptor was built from."""

    PORT_TYPE = "portType"


class BackingKind(str, Enum):
    """Backing representation of an enumeration."""

    STRING = "string"
    INTEGER = "integer"
    UNIT = "unit"  # Cases carry no value


@dataclass(frozen=True)
class QualifiedReference:
    """A (local name, namespace URI) pair."""

    local_name: str
    namespace_uri: str = ""

    def __str__(self) -> str:
        return f"{{{self.namespace_uri}}}{self.local_name}"


@dataclass(frozen=True)
class MessagePart:
    """One part of a message; at most one of type_ref / element_ref is set."""

    name: str
    type_ref: QualifiedReference | None = None
    element_ref: QualifiedReference | None = None


@dataclass(frozen=True)
class ParamDescriptor:
    """A parameter or return value of an operation."""

    name: str
    type_ref: QualifiedReference | None = None
    element_ref: QualifiedReference | None = None

    @staticmethod
    def from_part(part: MessagePart) -> ParamDescriptor:
        return ParamDescriptor(name=part.name, type_ref=part.type_ref, element_ref=part.element_ref)


@dataclass(frozen=True)
class OperationDescriptor:
    """An operation with its resolved parameters and returns."""

    name: str
    doc: str | None = None
    params: tuple[ParamDescriptor, ...] = ()
    returns: tuple[ParamDescriptor, ...] = ()


@dataclass(frozen=True)
class InterfaceDescriptor:
    """A service interface (the unit emitted as a class)."""

    name: str
    namespace_uri: str  # "<artifact-kind>#<targetNamespace>"
    operations: tuple[OperationDescriptor, ...] = ()
    doc: str | None = None

    @staticmethod
    def qualify_namespace(kind: ArtifactKind, target_namespace: str) -> str:
        return f"{kind.value}#{target_namespace}"


@dataclass(frozen=True)
class EnumCaseSpec:
    """A raw enumeration facet, as supplied by the facet extractor."""

    raw_value: Any = None
    doc: str = ""
    label: str | None = None  # lexical form the case name is derived from, when not raw_value

    @staticmethod
    def from_dict(d: dict) -> EnumCaseSpec:
        """Create a case spec from a ``{"value": ..., "doc": ..., "label": ...}`` record."""
        return EnumCaseSpec(raw_value=d.get("value"), doc=d.get("doc") or "", label=d.get("label"))


@dataclass(frozen=True)
class EnumCaseDescriptor:
    """A normalized enumeration case."""

    case_name: str
    value: str | int | None = None  # None for unit cases
    doc: str = ""


@dataclass(frozen=True)
class EnumDescriptor:
    """A normalized enumeration."""

    namespace: str
    name: str
    backing_kind: BackingKind
    cases: tuple[EnumCaseDescriptor, ...] = ()
    doc: str | None = None


@dataclass(frozen=True)
class DefinitionFailure:
    """A definition skipped because its generation failed."""

    kind: str  # "interface" or "enum"
    name: str
    error: Exception


@dataclass
class IR:
    """The complete Intermediate Representation."""

    root_name: str = ""

    # Interfaces in document order
    interfaces: list[InterfaceDescriptor] = field(default_factory=list)

    # Enums in document order
    enums: list[EnumDescriptor] = field(default_factory=list)

    # Definitions skipped under ErrorPolicy.SKIP
    failures: list[DefinitionFailure] = field(default_factory=list)

    # Generation comment
    generation_comment: str = ""
