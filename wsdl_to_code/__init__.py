"""WSDL to Code Generator

A Python package for generating service interfaces and enums from WSDL
and XML Schema documents. Supports Python and PHP code generation with
namespace-aware reference resolution, enum backing inference and
configurable output options.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    CodeWriteError,
    DocumentParser,
    FormatterConfig,
    GenerationError,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)

__all__ = [
    "PipelineGenerator",
    "DocumentParser",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "GenerationError",
    "CodeWriteError",
    "AtomicWriter",
]
