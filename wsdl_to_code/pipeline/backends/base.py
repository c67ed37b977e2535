"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ...utils import snake_to_pascal_case
from ..analyzer.ir_nodes import IR, EnumDescriptor, InterfaceDescriptor, OperationDescriptor, ParamDescriptor, QualifiedReference
from ..config import CodeGeneratorConfig
from ..document.nodes import XSD_NAMESPACE
from ..errors import DuplicateClassNameError


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Type mapping from XSD built-in types to language types
    TYPE_MAP: dict[str, str] = {}

    # Language type for parts without a known type
    ANY_TYPE: str = ""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Comment prefix of the language
    COMMENT_PREFIX: str = "#"

    # Whether class names that differ only by case are distinct
    CASE_SENSITIVE_CLASS_NAMES: bool = True

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=False,
        )
        # Add custom filters
        self.jinja_env.filters["snake_to_pascal"] = snake_to_pascal_case
        self._add_filters(self.jinja_env)

        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.enum_template = self.jinja_env.get_template(f"enum.{self.FILE_EXTENSION}.jinja2")
        self.interface_template = self.jinja_env.get_template(f"interface.{self.FILE_EXTENSION}.jinja2")

    def _add_filters(self, env: jinja2.Environment) -> None:
        """Register language-specific template filters."""

    @abstractmethod
    def generate(self, ir: IR) -> str:
        """
        Generate code from IR.

        Args:
            ir: The intermediate representation

        Returns:
            Generated code as a string
        """

    @abstractmethod
    def format_enum_value(self, value: Any) -> str:
        """
        Format a backed enum value as a literal of the target language.

        Args:
            value: The case value (str or int)

        Returns:
            Literal string
        """

    def translate_param_type(self, param: ParamDescriptor) -> str:
        """Translate the type or element reference of a parameter."""
        if param.type_ref is not None:
            return self.translate_reference(param.type_ref)
        if param.element_ref is not None:
            return self.translate_reference(param.element_ref)
        return self.ANY_TYPE

    def translate_reference(self, qname: QualifiedReference) -> str:
        """
        Translate a qualified reference to a language-specific type string.

        XSD built-ins go through TYPE_MAP; other references become the
        PascalCase name of their local name.
        """
        if qname.namespace_uri == XSD_NAMESPACE:
            return self.TYPE_MAP.get(qname.local_name, self.ANY_TYPE)
        return snake_to_pascal_case(qname.local_name) or self.ANY_TYPE

    def class_name(self, name: str) -> str:
        """Convert a definition name to a class name."""
        return snake_to_pascal_case(name) or name

    def _declare_class(self, declared: dict[tuple[str, str], str], namespace: str, class_name: str, definition: str) -> None:
        """
        Record a class emitted into a code namespace.

        Args:
            declared: Classes already emitted, keyed by (namespace, class name)
            namespace: Code namespace the class is emitted into
            class_name: Name of the generated class
            definition: Description of the source definition, for error messages

        Raises:
            DuplicateClassNameError: If another definition already produced this class
        """
        key = (namespace, class_name if self.CASE_SENSITIVE_CLASS_NAMES else class_name.lower())
        if key in declared:
            raise DuplicateClassNameError(class_name, namespace, declared[key], definition)
        declared[key] = definition

    @staticmethod
    def _describe_interface(interface: InterfaceDescriptor) -> str:
        kind, _, target_namespace = interface.namespace_uri.partition("#")
        return f"{kind} {interface.name} ({target_namespace})" if target_namespace else f"{kind} {interface.name}"

    def generation_comment(self, ir: IR) -> str:
        """Render the generation comment line for the target language."""
        if not ir.generation_comment:
            return ""
        return f"{self.COMMENT_PREFIX} {ir.generation_comment}"

    def _prepare_enum_context(self, enum: EnumDescriptor) -> dict[str, Any]:
        """
        Prepare the template context for an enum.

        Args:
            enum: The enum descriptor

        Returns:
            Dictionary of template variables
        """
        return {
            "ENUM_NAME": self.class_name(enum.name),
            "BACKING_KIND": enum.backing_kind.value,
            "DOC": enum.doc,
            "cases": [
                {
                    "NAME": self._enum_member_name(case.case_name),
                    "VALUE": None if case.value is None else self.format_enum_value(case.value),
                    "DOC": case.doc,
                }
                for case in enum.cases
            ],
        }

    def _prepare_interface_context(self, interface: InterfaceDescriptor) -> dict[str, Any]:
        """
        Prepare the template context for an interface.

        Args:
            interface: The interface descriptor

        Returns:
            Dictionary of template variables
        """
        return {
            "CLASS_NAME": self.class_name(interface.name),
            "NAMESPACE_URI": interface.namespace_uri,
            "DOC": interface.doc,
            "methods": [self._prepare_operation_context(operation) for operation in interface.operations],
        }

    def _prepare_operation_context(self, operation: OperationDescriptor) -> dict[str, Any]:
        """Prepare the template context for one operation."""
        params = []
        used_names = set(self.RESERVED_PARAM_NAMES)
        for param in operation.params:
            name = self._param_name(param.name)
            base_name = name
            counter = 1
            while name in used_names:
                counter += 1
                name = f"{base_name}{counter}"
            used_names.add(name)
            params.append({"NAME": name, "ORIGINAL_NAME": param.name, "TYPE": self.translate_param_type(param)})

        return {
            "METHOD_NAME": self._method_name(operation.name),
            "ORIGINAL_NAME": operation.name,
            "DOC": operation.doc,
            "params": params,
            "RETURN_TYPE": self._return_type(operation.returns),
        }

    # Parameter names that generated methods cannot use
    RESERVED_PARAM_NAMES: tuple[str, ...] = ()

    @abstractmethod
    def _method_name(self, name: str) -> str:
        """Convert an operation name to a method name."""

    @abstractmethod
    def _param_name(self, name: str) -> str:
        """Convert a part name to a parameter name."""

    @abstractmethod
    def _return_type(self, returns: tuple[ParamDescriptor, ...]) -> str:
        """Build the return type of an operation."""

    def _enum_member_name(self, case_name: str) -> str:
        """Escape a case name that the target language cannot use as is."""
        return case_name
