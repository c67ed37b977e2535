"""
Analyzer module.

Contains namespace scopes, reference resolution, descriptor builders and
IR building.
"""

from __future__ import annotations

from .analyzer import DocumentAnalyzer
from .enum_builder import EnumSpecBuilder
from .ir_nodes import (
    IR,
    ArtifactKind,
    BackingKind,
    DefinitionFailure,
    EnumCaseDescriptor,
    EnumCaseSpec,
    EnumDescriptor,
    InterfaceDescriptor,
    MessagePart,
    OperationDescriptor,
    ParamDescriptor,
    QualifiedReference,
)
from .namespace_scope import NamespaceScope
from .operation_builder import OperationDescriptorBuilder
from .reference_resolver import MessagePartResolver, QualifiedReferenceResolver

__all__ = [
    "ArtifactKind",
    "BackingKind",
    "DefinitionFailure",
    "EnumCaseDescriptor",
    "EnumCaseSpec",
    "EnumDescriptor",
    "InterfaceDescriptor",
    "MessagePart",
    "OperationDescriptor",
    "ParamDescriptor",
    "QualifiedReference",
    "IR",
    "NamespaceScope",
    "QualifiedReferenceResolver",
    "MessagePartResolver",
    "OperationDescriptorBuilder",
    "EnumSpecBuilder",
    "DocumentAnalyzer",
]
