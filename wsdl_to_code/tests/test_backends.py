"""
Tests for the Python and PHP backends, rendering hand-built IR.
"""

from __future__ import annotations

import ast

import pytest

from wsdl_to_code.pipeline import CodeGeneratorConfig, DuplicateClassNameError
from wsdl_to_code.pipeline.analyzer import (
    IR,
    BackingKind,
    EnumCaseDescriptor,
    EnumDescriptor,
    InterfaceDescriptor,
    OperationDescriptor,
    ParamDescriptor,
    QualifiedReference,
)
from wsdl_to_code.pipeline.backends import PhpBackend, PythonBackend
from wsdl_to_code.pipeline.document import XSD_NAMESPACE


def xsd_param(name, type_name):
    return ParamDescriptor(name, type_ref=QualifiedReference(type_name, XSD_NAMESPACE))


def make_ir(enums=(), interfaces=(), comment=""):
    return IR(root_name="test", enums=list(enums), interfaces=list(interfaces), generation_comment=comment)


QUOTE_INTERFACE = InterfaceDescriptor(
    name="StockQuotePortType",
    namespace_uri="portType#urn:example:stock",
    doc="Stock quotes.",
    operations=(
        OperationDescriptor(
            name="GetLastTradePrice",
            doc="Returns the last trade price.",
            params=(xsd_param("tickerSymbol", "string"), ParamDescriptor("options", element_ref=QualifiedReference("QuoteOptions", "urn:example:stock"))),
            returns=(xsd_param("price", "double"),),
        ),
        OperationDescriptor(name="GetHistory", params=(xsd_param("since", "dateTime"),), returns=(xsd_param("prices", "double"), ParamDescriptor("raw"))),
        OperationDescriptor(name="Reset"),
    ),
)

COLOR_ENUM = EnumDescriptor(
    namespace="App\\Enums",
    name="color",
    backing_kind=BackingKind.STRING,
    doc="Paint colors.",
    cases=(
        EnumCaseDescriptor("DARK_RED", "dark-red", "A deep red."),
        EnumCaseDescriptor("QUOTE", "it's \"quoted\""),
    ),
)

LEVEL_ENUM = EnumDescriptor(
    namespace="App\\Enums",
    name="Level",
    backing_kind=BackingKind.INTEGER,
    cases=(EnumCaseDescriptor("_1", 1), EnumCaseDescriptor("_10", 10)),
)

STATE_ENUM = EnumDescriptor(
    namespace="App\\Enums",
    name="State",
    backing_kind=BackingKind.UNIT,
    cases=(EnumCaseDescriptor("ON"), EnumCaseDescriptor("OFF"), EnumCaseDescriptor("_X_"), EnumCaseDescriptor("CLASS")),
)


class TestPythonBackend:
    def generate(self, ir, **config):
        return PythonBackend(CodeGeneratorConfig(**config)).generate(ir)

    def test_string_enum(self):
        code = self.generate(make_ir(enums=[COLOR_ENUM]))
        assert "class Color(str, Enum):" in code
        assert '    """Paint colors."""' in code
        assert "    # A deep red.\n    DARK_RED = \"dark-red\"" in code
        assert '    QUOTE = "it\'s \\"quoted\\""' in code
        assert "from enum import Enum\n" in code

    def test_integer_enum(self):
        code = self.generate(make_ir(enums=[LEVEL_ENUM]))
        assert "class Level(int, Enum):" in code
        assert '    """Enum Level"""' in code
        assert "    _1 = 1\n    _10 = 10\n" in code

    def test_unit_enum(self):
        code = self.generate(make_ir(enums=[STATE_ENUM]))
        assert "from enum import Enum, auto" in code
        assert "class State(Enum):" in code
        assert "    ON = auto()" in code
        # _sunder_ names are reserved by Enum
        assert "    _X_VALUE = auto()" in code
        assert "    CLASS = auto()" in code

    def test_generated_enums_are_importable(self):
        code = self.generate(make_ir(enums=[COLOR_ENUM, LEVEL_ENUM, STATE_ENUM]))
        namespace = {}
        exec(compile(code, "<generated>", "exec"), namespace)
        assert namespace["Color"]("dark-red").name == "DARK_RED"
        assert namespace["Level"](10).name == "_10"
        assert [member.name for member in namespace["State"]] == ["ON", "OFF", "_X_VALUE", "CLASS"]

    def test_interface(self):
        code = self.generate(make_ir(interfaces=[QUOTE_INTERFACE]))
        assert "from abc import ABC, abstractmethod" in code
        assert "class StockQuotePortType(ABC):" in code
        assert '    """Stock quotes."""' in code
        assert "    @abstractmethod\n    def get_last_trade_price(self, ticker_symbol: str, options: QuoteOptions) -> float:\n" in code
        assert '        """Returns the last trade price."""' in code
        assert "    def get_history(self, since: datetime) -> tuple[float, Any]:\n        ...\n" in code
        assert "    def reset(self) -> None:" in code
        assert "from datetime import datetime" in code
        assert "from typing import Any" in code
        ast.parse(code)

    def test_interface_without_doc(self):
        interface = InterfaceDescriptor(name="Empty", namespace_uri="portType#urn:e")
        code = self.generate(make_ir(interfaces=[interface]))
        assert '    """Empty (portType#urn:e)"""' in code
        assert "abstractmethod" not in code
        ast.parse(code)

    def test_import_order(self):
        code = self.generate(make_ir(enums=[LEVEL_ENUM], interfaces=[QUOTE_INTERFACE]))
        lines = [line for line in code.splitlines() if line.startswith("from ")]
        assert lines == [
            "from __future__ import annotations",
            "from abc import ABC, abstractmethod",
            "from datetime import datetime",
            "from enum import Enum",
            "from typing import Any",
        ]

    def test_forward_references_are_quoted_without_future_annotations(self):
        code = self.generate(make_ir(interfaces=[QUOTE_INTERFACE]), use_future_annotations=False)
        assert "from __future__" not in code
        assert 'options: "QuoteOptions"' in code
        assert "ticker_symbol: str" in code

    def test_parameter_names_are_made_unique(self):
        operation = OperationDescriptor(name="Call", params=(ParamDescriptor("self"), ParamDescriptor("a"), ParamDescriptor("A")))
        interface = InterfaceDescriptor(name="P", namespace_uri="portType#urn:p", operations=(operation,))
        code = self.generate(make_ir(interfaces=[interface]))
        assert "def call(self, self2: Any, a: Any, a2: Any) -> None:" in code

    def test_generation_comment(self):
        code = self.generate(make_ir(enums=[LEVEL_ENUM], comment="Generated for tests"))
        assert code.startswith("# Generated for tests\n\nfrom __future__ import annotations\n")
        assert code.endswith("\n")
        assert not code.endswith("\n\n")

    def test_empty_ir(self):
        code = self.generate(make_ir())
        assert code == "from __future__ import annotations\n"

    def test_enum_and_interface_with_one_class_name(self):
        interface = InterfaceDescriptor(name="Level", namespace_uri="portType#urn:example:levels")
        with pytest.raises(DuplicateClassNameError) as exc_info:
            self.generate(make_ir(enums=[LEVEL_ENUM], interfaces=[interface]))
        assert exc_info.value.definitions == ("enum Level", "portType Level (urn:example:levels)")
        assert str(exc_info.value) == "Class Level is declared by both enum Level and portType Level (urn:example:levels)"


class TestPhpBackend:
    def generate(self, ir, **config):
        return PhpBackend(CodeGeneratorConfig(**config)).generate(ir)

    def test_string_enum(self):
        code = self.generate(make_ir(enums=[COLOR_ENUM]))
        assert code.startswith("<?php\n\nnamespace App\\Enums;\n")
        assert "/**\n * Paint colors.\n */\nenum Color: string\n{\n" in code
        assert "    /** A deep red. */\n    case DARK_RED = 'dark-red';\n" in code
        assert "    case QUOTE = 'it\\'s \"quoted\"';\n" in code

    def test_integer_and_unit_enums(self):
        code = self.generate(make_ir(enums=[LEVEL_ENUM, STATE_ENUM]))
        assert "enum Level: int\n{\n    case _1 = 1;\n    case _10 = 10;\n}" in code
        assert "enum State\n{\n    case ON;\n" in code
        # class is not a valid case name in PHP
        assert "    case CLASS_;\n" in code
        assert "    case _X_;\n" in code

    def test_interface(self):
        code = self.generate(make_ir(interfaces=[QUOTE_INTERFACE]), namespace_map={"urn:example:stock": "App\\Stock"})
        assert "namespace App\\Stock;" in code
        assert "interface StockQuotePortType\n{\n" in code
        assert "     * Returns the last trade price.\n     *\n     * @param string $tickerSymbol\n     * @param QuoteOptions $options\n     * @return float\n" in code
        assert "    public function getLastTradePrice(string $tickerSymbol, QuoteOptions $options): float;" in code
        assert "    public function getHistory(\\DateTimeInterface $since): array;" in code
        assert "    public function reset(): void;" in code

    def test_several_namespaces_use_blocks(self):
        code = self.generate(make_ir(enums=[LEVEL_ENUM], interfaces=[QUOTE_INTERFACE]), default_namespace="App\\Service")
        assert "namespace App\\Enums {\n    /**\n" in code
        assert "namespace App\\Service {\n" in code
        assert "\n    interface StockQuotePortType\n    {\n" in code
        assert code.count("{") == code.count("}")

    def test_global_namespace(self):
        code = self.generate(make_ir(interfaces=[QUOTE_INTERFACE]))
        assert "namespace" not in code
        assert code.startswith("<?php\n\n/**\n * Stock quotes.\n */\ninterface StockQuotePortType\n")

    def test_reserved_parameter_name(self):
        operation = OperationDescriptor(name="do_it", params=(xsd_param("this", "int"),))
        interface = InterfaceDescriptor(name="P", namespace_uri="portType#", operations=(operation,))
        code = self.generate(make_ir(interfaces=[interface]))
        assert "public function doIt(int $this2): void;" in code

    def test_docblock_cannot_be_closed_by_doc(self):
        enum = EnumDescriptor(namespace="", name="E", backing_kind=BackingKind.UNIT, doc="ends */ here", cases=(EnumCaseDescriptor("A"),))
        code = self.generate(make_ir(enums=[enum]))
        assert " * ends *\\/ here" in code

    def test_duplicate_class_name_in_namespace(self):
        interface = InterfaceDescriptor(name="level", namespace_uri="portType#urn:example:levels")
        with pytest.raises(DuplicateClassNameError) as exc_info:
            self.generate(make_ir(enums=[LEVEL_ENUM], interfaces=[interface]), default_namespace="App\\Enums")
        assert exc_info.value.namespace == "App\\Enums"
        assert "Class Level in namespace App\\Enums is declared by both enum Level and portType level" in str(exc_info.value)

    def test_same_class_name_in_different_namespaces(self):
        interface = InterfaceDescriptor(name="Level", namespace_uri="portType#urn:example:levels")
        code = self.generate(make_ir(enums=[LEVEL_ENUM], interfaces=[interface]), default_namespace="App\\Service")
        assert "namespace App\\Enums {\n" in code
        assert "    interface Level\n" in code

    def test_generation_comment(self):
        code = self.generate(make_ir(enums=[LEVEL_ENUM], comment="Generated for tests"))
        assert code.startswith("<?php\n\n// Generated for tests\n\nnamespace App\\Enums;\n")


@pytest.mark.parametrize("backend_class", [PythonBackend, PhpBackend])
def test_xsd_type_translation(backend_class):
    backend = backend_class(CodeGeneratorConfig())
    assert backend.translate_reference(QualifiedReference("unknownBuiltin", XSD_NAMESPACE)) == backend.ANY_TYPE
    assert backend.translate_reference(QualifiedReference("order_line", "urn:x")) == "OrderLine"
    assert backend.translate_param_type(ParamDescriptor("untyped")) == backend.ANY_TYPE
