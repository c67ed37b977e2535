"""
Pipeline - WSDL/XSD to Code generator.

This module provides a multi-phase architecture for generating code
from service definitions:

1. Phase 1 (Parser): Load WSDL and XSD documents into a DocumentSet
2. Phase 2 (Analyzer): Resolve message references, build interface and enum descriptors
3. Phase 3 (Backend): Render the descriptors with Jinja2 templates
4. Phase 4 (Formatter): Optional post-processing (ruff or black for Python)
5. Phase 5 (Writer): Validate and write the output atomically
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .config import CaseCollisionPolicy, CodeGeneratorConfig, ErrorPolicy, FormatterConfig, OutputConfig, OutputMode
from .document import DocumentParser, DocumentSet
from .errors import (
    CodeWriteError,
    DocumentLoadError,
    DuplicateClassNameError,
    DuplicateEnumCaseError,
    GenerationError,
    InvalidEnumValueError,
    MixedEnumBackingError,
    ReferenceResolutionError,
)
from .generator import PipelineGenerator

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "CaseCollisionPolicy",
    "ErrorPolicy",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "DocumentParser",
    "DocumentSet",
    "AtomicWriter",
    "GenerationError",
    "DocumentLoadError",
    "ReferenceResolutionError",
    "InvalidEnumValueError",
    "MixedEnumBackingError",
    "DuplicateEnumCaseError",
    "DuplicateClassNameError",
    "CodeWriteError",
]
