"""
Python code generation backend.

Generates Python Enum classes and abstract service interfaces from IR.
"""

from __future__ import annotations

import collections
import json
from typing import Any

from ...utils import to_python_identifier
from ..analyzer.ir_nodes import IR, BackingKind, ParamDescriptor, QualifiedReference
from ..config import CodeGeneratorConfig
from .base import CodeBackend


class PythonBackend(CodeBackend):
    """Python code generation backend."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"
    COMMENT_PREFIX = "#"
    ANY_TYPE = "Any"
    RESERVED_PARAM_NAMES = ("self",)

    TYPE_MAP = {
        "string": "str",
        "normalizedString": "str",
        "token": "str",
        "anyURI": "str",
        "QName": "str",
        "NCName": "str",
        "Name": "str",
        "ID": "str",
        "IDREF": "str",
        "language": "str",
        "integer": "int",
        "int": "int",
        "long": "int",
        "short": "int",
        "byte": "int",
        "nonNegativeInteger": "int",
        "nonPositiveInteger": "int",
        "positiveInteger": "int",
        "negativeInteger": "int",
        "unsignedLong": "int",
        "unsignedInt": "int",
        "unsignedShort": "int",
        "unsignedByte": "int",
        "boolean": "bool",
        "float": "float",
        "double": "float",
        "decimal": "Decimal",
        "base64Binary": "bytes",
        "hexBinary": "bytes",
        "dateTime": "datetime",
        "date": "date",
        "time": "time",
        "duration": "timedelta",
        "anyType": "Any",
    }

    # Imports needed by mapped types
    TYPE_IMPORTS = {
        "Any": ("typing", "Any"),
        "Decimal": ("decimal", "Decimal"),
        "datetime": ("datetime", "datetime"),
        "date": ("datetime", "date"),
        "time": ("datetime", "time"),
        "timedelta": ("datetime", "timedelta"),
    }

    # Standard library modules, for import grouping
    STDLIB_MODULES = {"abc", "datetime", "decimal", "enum", "typing"}

    # Enum base classes per backing kind
    ENUM_BASES = {
        BackingKind.STRING: "str, Enum",
        BackingKind.INTEGER: "int, Enum",
        BackingKind.UNIT: "Enum",
    }

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.python_imports: set[tuple[str, str]] = set()

    def _add_filters(self, env) -> None:
        env.filters["py_doc"] = self._escape_docstring
        env.filters["one_line"] = lambda text: " ".join(str(text).split())

    @staticmethod
    def _escape_docstring(text: str) -> str:
        """Escape text for use inside a triple-quoted docstring."""
        return str(text).replace("\\", "\\\\").replace('"', '\\"')

    def _prepare_enum_context(self, enum) -> dict[str, Any]:
        context = super()._prepare_enum_context(enum)
        context["BASES"] = self.ENUM_BASES[enum.backing_kind]
        return context

    def generate(self, ir: IR) -> str:
        """Generate Python code from IR."""
        # Reset import tracking
        self.python_imports = set()

        # Add future annotations if configured
        if self.config.use_future_annotations:
            self.python_imports.add(("__future__", "annotations"))

        # Every class lands in one module
        declared: dict[tuple[str, str], str] = {}
        blocks = []
        for enum in ir.enums:
            context = self._prepare_enum_context(enum)
            self._declare_class(declared, "", context["ENUM_NAME"], f"enum {enum.name}")
            self.python_imports.add(("enum", "Enum"))
            if enum.backing_kind == BackingKind.UNIT:
                self.python_imports.add(("enum", "auto"))
            blocks.append(self.enum_template.render(context))

        for interface in ir.interfaces:
            self.python_imports.add(("abc", "ABC"))
            if interface.operations:
                self.python_imports.add(("abc", "abstractmethod"))
            context = self._prepare_interface_context(interface)
            self._declare_class(declared, "", context["CLASS_NAME"], self._describe_interface(interface))
            blocks.append(self.interface_template.render(context))

        prefix = self.prefix_template.render(
            generation_comment=self.generation_comment(ir),
            required_imports=self._assemble_imports(),
        )

        parts = [part.strip("\n") for part in [prefix, *blocks] if part.strip()]
        return "\n\n\n".join(parts) + "\n"

    def translate_reference(self, qname: QualifiedReference) -> str:
        """Translate a reference, quoting forward references when annotations are evaluated."""
        result = super().translate_reference(qname)
        if result in self.TYPE_IMPORTS:
            self.python_imports.add(self.TYPE_IMPORTS[result])
        elif result not in self.TYPE_MAP.values() and not self.config.use_future_annotations:
            result = f'"{result}"'
        return result

    def translate_param_type(self, param: ParamDescriptor) -> str:
        result = super().translate_param_type(param)
        if result == self.ANY_TYPE:
            self.python_imports.add(("typing", "Any"))
        return result

    def format_enum_value(self, value: Any) -> str:
        """Format an enum value as a Python literal."""
        if isinstance(value, str):
            return json.dumps(value)
        return str(value)

    def _method_name(self, name: str) -> str:
        return to_python_identifier(name)

    def _param_name(self, name: str) -> str:
        return to_python_identifier(name)

    def _return_type(self, returns: tuple[ParamDescriptor, ...]) -> str:
        """None for no returns, the type for one, a tuple for several."""
        if not returns:
            return "None"
        types = [self.translate_param_type(param) for param in returns]
        if len(types) == 1:
            return types[0]
        return f"tuple[{', '.join(types)}]"

    def _enum_member_name(self, case_name: str) -> str:
        """Escape _sunder_ names, which Enum reserves."""
        if case_name.startswith("_") and case_name.endswith("_"):
            return case_name + "VALUE"
        return case_name

    def _assemble_imports(self) -> list[str]:
        """Assemble Python import statements."""
        # Group imports by module
        import_groups: dict[str, set[str]] = collections.defaultdict(set)
        for module, name in self.python_imports:
            import_groups[module].add(name)

        stdlib_groups = {m: import_groups[m] for m in import_groups if m in self.STDLIB_MODULES}

        assembled = []

        # __future__ imports first
        if "__future__" in import_groups:
            names = sorted(import_groups["__future__"])
            assembled.append(f"from __future__ import {', '.join(names)}")
            if stdlib_groups:
                assembled.append("")

        # Standard library
        for module in sorted(stdlib_groups.keys()):
            names = sorted(stdlib_groups[module])
            assembled.append(f"from {module} import {', '.join(names)}")

        return assembled
