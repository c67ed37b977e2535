"""
Error types raised by the generation pipeline.

Errors are raised where they are detected and propagate to the caller.
Only the analyzer decides, per definition, whether a failure aborts the run.
"""

from __future__ import annotations

from typing import Any


class GenerationError(Exception):
    """Base class for all generation errors."""

    pass


class DocumentLoadError(GenerationError):
    """Raised when an input document cannot be read or is not a WSDL/XSD document."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")


class ReferenceResolutionError(GenerationError):
    """Raised when a qualified reference cannot be resolved.

    This can happen when:
    - The namespace prefix has no binding in any enclosing scope
    - The reference text is not a valid QName
    - No message, type or element definition matches the resolved name
    """

    def __init__(self, reference: str, message: str):
        self.reference = reference
        super().__init__(f"{message}: '{reference}'")


class EnumError(GenerationError):
    """Base class for enumeration normalization errors."""

    def __init__(self, enum_name: str, message: str):
        self.enum_name = enum_name
        super().__init__(f"Enum {enum_name}: {message}")


class InvalidEnumValueError(EnumError):
    """Raised when a case value is neither a string, an integer nor absent."""

    def __init__(self, enum_name: str, value: Any, index: int, reason: str | None = None):
        self.value = value
        self.index = index
        if reason is None:
            reason = f"values must be string or int when specified, got {type(value).__name__} {value!r}"
        super().__init__(enum_name, f"case #{index}: {reason}")


class MixedEnumBackingError(EnumError):
    """Raised when one enumeration mixes integer and string case values.

    ``values_by_kind`` holds every classified value, grouped by kind, so the
    whole conflict can be reported at once.
    """

    def __init__(self, enum_name: str, values_by_kind: dict[str, list[Any]]):
        self.values_by_kind = values_by_kind
        details = "; ".join(f"{kind}: {', '.join(repr(v) for v in values)}" for kind, values in values_by_kind.items())
        super().__init__(enum_name, f"cannot create an enum with both string and int values ({details})")


class DuplicateEnumCaseError(EnumError):
    """Raised when distinct raw values sanitize to the same case name."""

    def __init__(self, enum_name: str, case_name: str, raw_values: list[Any]):
        self.case_name = case_name
        self.raw_values = raw_values
        values = ", ".join(repr(v) for v in raw_values)
        super().__init__(enum_name, f"case name {case_name} is produced by several values ({values})")


class CodeWriteError(GenerationError):
    """Raised when generated code fails validation before being written."""

    pass


class DuplicateClassNameError(GenerationError):
    """Raised when two definitions would be emitted as the same class.

    A portType and a simpleType may share a local name, since WSDL and XSD
    keep separate symbol spaces, but the generated code has only one.
    """

    def __init__(self, class_name: str, namespace: str, first: str, second: str):
        self.class_name = class_name
        self.namespace = namespace
        self.definitions = (first, second)
        where = f" in namespace {namespace}" if namespace else ""
        super().__init__(f"Class {class_name}{where} is declared by both {first} and {second}")
