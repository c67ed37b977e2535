"""
PHP code generation backend.

Generates PHP 8.1 enums and service interfaces from IR.
"""

from __future__ import annotations

import textwrap
from typing import Any

from ...utils import snake_to_pascal_case
from ..analyzer.ir_nodes import IR, BackingKind, EnumDescriptor, InterfaceDescriptor, ParamDescriptor
from .base import CodeBackend


class PhpBackend(CodeBackend):
    """PHP code generation backend."""

    TEMPLATE_LANG = "php"
    FILE_EXTENSION = "php"
    COMMENT_PREFIX = "//"
    ANY_TYPE = "mixed"
    RESERVED_PARAM_NAMES = ("this",)
    CASE_SENSITIVE_CLASS_NAMES = False

    TYPE_MAP = {
        "string": "string",
        "normalizedString": "string",
        "token": "string",
        "anyURI": "string",
        "QName": "string",
        "NCName": "string",
        "Name": "string",
        "ID": "string",
        "IDREF": "string",
        "language": "string",
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
        "decimal": "float",
        "base64Binary": "string",
        "hexBinary": "string",
        "dateTime": "\\DateTimeInterface",
        "date": "\\DateTimeInterface",
        "time": "\\DateTimeInterface",
        "duration": "\\DateInterval",
        "anyType": "mixed",
    }

    # Backed type declared after the enum name
    BACKED_TYPES = {
        BackingKind.STRING: "string",
        BackingKind.INTEGER: "int",
    }

    def _add_filters(self, env) -> None:
        env.filters["php_doc"] = lambda text: str(text).replace("*/", "*\\/")

    def generate(self, ir: IR) -> str:
        """Generate PHP code from IR."""
        # Blocks grouped by namespace, in first-seen order
        sections: dict[str, list[str]] = {}
        declared: dict[tuple[str, str], str] = {}

        for enum in ir.enums:
            context = self._prepare_enum_context(enum)
            self._declare_class(declared, enum.namespace, context["ENUM_NAME"], f"enum {enum.name}")
            sections.setdefault(enum.namespace, []).append(self.enum_template.render(context))

        for interface in ir.interfaces:
            namespace = self._interface_namespace(interface)
            context = self._prepare_interface_context(interface)
            self._declare_class(declared, namespace, context["CLASS_NAME"], self._describe_interface(interface))
            sections.setdefault(namespace, []).append(self.interface_template.render(context))

        prefix = self.prefix_template.render(generation_comment=self.generation_comment(ir)).strip("\n")

        parts = [prefix]
        if len(sections) == 1:
            namespace, blocks = next(iter(sections.items()))
            if namespace:
                parts.append(f"namespace {namespace};")
            parts.extend(block.strip("\n") for block in blocks)
        else:
            for namespace, blocks in sections.items():
                body = "\n\n".join(block.strip("\n") for block in blocks)
                opening = f"namespace {namespace} {{" if namespace else "namespace {"
                parts.append(f"{opening}\n{textwrap.indent(body, '    ')}\n}}")

        return "\n\n".join(parts) + "\n"

    def _interface_namespace(self, interface: InterfaceDescriptor) -> str:
        """Get the code namespace of an interface from its targetNamespace."""
        _, _, target_namespace = interface.namespace_uri.partition("#")
        return self.config.code_namespace(target_namespace)

    def _prepare_enum_context(self, enum: EnumDescriptor) -> dict[str, Any]:
        context = super()._prepare_enum_context(enum)
        context["BACKED_TYPE"] = self.BACKED_TYPES.get(enum.backing_kind)
        return context

    def format_enum_value(self, value: Any) -> str:
        """Format an enum value as a PHP literal."""
        if isinstance(value, str):
            escaped = value.replace("\\", "\\\\").replace("'", "\\'")
            return f"'{escaped}'"
        return str(value)

    def _method_name(self, name: str) -> str:
        pascal = snake_to_pascal_case(name) or "_"
        name = pascal[:1].lower() + pascal[1:]
        if name[0].isdigit():
            name = "_" + name
        return name

    def _param_name(self, name: str) -> str:
        return self._method_name(name)

    def _return_type(self, returns: tuple[ParamDescriptor, ...]) -> str:
        """void for no returns, the type for one, array for several."""
        if not returns:
            return "void"
        if len(returns) == 1:
            return self.translate_param_type(returns[0])
        return "array"

    def _enum_member_name(self, case_name: str) -> str:
        """PHP rejects a class constant named class."""
        if case_name.lower() == "class":
            return case_name + "_"
        return case_name
