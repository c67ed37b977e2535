"""
Configuration for the code generator pipeline.

Covers analysis options, formatter and output options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


class ErrorPolicy(str, Enum):
    """What to do when one definition fails to generate."""

    ABORT = "abort"  # Default: the first failure aborts the run
    SKIP = "skip"  # Log the failure and continue with the other definitions


class CaseCollisionPolicy(str, Enum):
    """What to do when distinct enum values produce the same case name."""

    ERROR = "error"  # Default: reject the enum
    SUFFIX = "suffix"  # Append _2, _3, ... to later duplicates


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for post-processing formatters."""

    # Whether formatting is enabled
    enabled: bool = False

    # Formatter to use for Python output ("ruff" or "black")
    tool: str = "ruff"

    # Line length for the formatter
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"

    # Whether to use string normalization (convert single quotes to double)
    string_normalization: bool = True

    # Whether to honor magic trailing commas
    magic_trailing_comma: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Interfaces (portType names) to ignore during generation
    ignore_interfaces: list[str] = field(default_factory=list)

    # Enums (simpleType names) to ignore during generation
    ignore_enums: list[str] = field(default_factory=list)

    # Which kinds of definitions to generate
    generate_interfaces: bool = True
    generate_enums: bool = True

    # Require part type/element references to name declared schema components
    verify_part_references: bool = True

    # Handling of enum case name collisions
    case_collision: CaseCollisionPolicy = CaseCollisionPolicy.ERROR

    # Case name used for empty enumeration values
    empty_case_name: str = "EMPTY"

    # Code namespace per targetNamespace (e.g. {"urn:orders": "App\\Orders"})
    namespace_map: dict[str, str] = field(default_factory=dict)

    # Code namespace for targetNamespaces missing from namespace_map
    default_namespace: str = ""

    # What to do when one definition fails
    on_definition_error: ErrorPolicy = ErrorPolicy.ABORT

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Use from __future__ import annotations
    use_future_annotations: bool = True

    # Formatter configuration
    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    def code_namespace(self, target_namespace: str) -> str:
        """Get the code namespace for an XML targetNamespace."""
        return self.namespace_map.get(target_namespace, self.default_namespace)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif k == "case_collision":
                config.case_collision = CaseCollisionPolicy(v)
            elif k == "on_definition_error":
                config.on_definition_error = ErrorPolicy(v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "ignore_interfaces": self.ignore_interfaces,
            "ignore_enums": self.ignore_enums,
            "generate_interfaces": self.generate_interfaces,
            "generate_enums": self.generate_enums,
            "verify_part_references": self.verify_part_references,
            "case_collision": self.case_collision.value,
            "empty_case_name": self.empty_case_name,
            "namespace_map": self.namespace_map,
            "default_namespace": self.default_namespace,
            "on_definition_error": self.on_definition_error.value,
            "add_generation_comment": self.add_generation_comment,
            "use_future_annotations": self.use_future_annotations,
            "formatter": {
                "enabled": self.formatter.enabled,
                "tool": self.formatter.tool,
                "line_length": self.formatter.line_length,
                "target_version": self.formatter.target_version,
                "string_normalization": self.formatter.string_normalization,
                "magic_trailing_comma": self.formatter.magic_trailing_comma,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
