"""
Functional tests for the PipelineGenerator.

Generation cases are loaded from test_data/functional/*_tests.json; each case
lists the input documents, an optional config and the fragments expected in
the Python and PHP output.
"""

from __future__ import annotations

import ast
import json
from pathlib import Path

import pytest

from wsdl_to_code.pipeline import (
    CodeGeneratorConfig,
    CodeWriteError,
    DocumentParser,
    DuplicateClassNameError,
    DuplicateEnumCaseError,
    ErrorPolicy,
    MixedEnumBackingError,
    OutputMode,
    PipelineGenerator,
    ReferenceResolutionError,
)

TEST_DATA = Path(__file__).parent / "test_data"


def load_all_test_cases():
    """Load all test cases from all JSON files in test_data/functional directory."""
    test_cases = []
    for json_file in sorted((TEST_DATA / "functional").glob("*_tests.json")):
        with open(json_file) as f:
            data = json.load(f)

        for test_case in data:
            test_case["_source_file"] = json_file.name
            test_cases.append(test_case)

    return test_cases


def load(*names):
    return DocumentParser().parse_files(TEST_DATA / name for name in names)


def _generate_code(documents, config_dict=None, language="python"):
    """Helper to generate code with given documents and config."""
    config_dict = {"add_generation_comment": False, **(config_dict or {})}
    config = CodeGeneratorConfig.from_dict(config_dict)
    return PipelineGenerator("test", documents, config, language).generate()


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda test_case: test_case["name"])
def test_functional_generation(test_case):
    documents = load(*test_case["documents"])
    config = test_case.get("config", {})

    if "expected_python" in test_case or "unexpected_python" in test_case:
        generated_code = _generate_code(documents, config, "python")
        ast.parse(generated_code)
        for expected in test_case.get("expected_python", []):
            assert expected in generated_code, f"Expected pattern '{expected}' not found in Python output"
        for unexpected in test_case.get("unexpected_python", []):
            assert unexpected not in generated_code, f"Unexpected pattern '{unexpected}' found in Python output"

    if "expected_php" in test_case:
        generated_code = _generate_code(documents, config, "php")
        assert generated_code.startswith("<?php\n")
        for expected in test_case["expected_php"]:
            assert expected in generated_code, f"Expected pattern '{expected}' not found in PHP output"


class TestErrorPolicy:
    def test_abort_on_first_failure(self):
        with pytest.raises(ReferenceResolutionError) as exc_info:
            _generate_code(load("broken.wsdl"))
        assert exc_info.value.reference == "nope:EchoMessage"

    def test_skip_failing_definitions(self):
        generator = PipelineGenerator("broken", load("broken.wsdl"), CodeGeneratorConfig(on_definition_error=ErrorPolicy.SKIP, add_generation_comment=False))
        code = generator.generate()
        assert "class EchoPortType(ABC):" in code
        assert "def echo(self, text: str) -> str:" in code

        failures = generator.analyze().failures
        assert [(failure.kind, failure.name) for failure in failures] == [
            ("interface", "UnboundPrefixPortType"),
            ("interface", "MissingMessagePortType"),
            ("interface", "UnknownTypePortType"),
        ]
        assert all(isinstance(failure.error, ReferenceResolutionError) for failure in failures)

    def test_part_verification_can_be_disabled(self):
        config = CodeGeneratorConfig(on_definition_error=ErrorPolicy.SKIP, verify_part_references=False, add_generation_comment=False)
        generator = PipelineGenerator("broken", load("broken.wsdl"), config)
        assert "def send(self, payload: Undeclared) -> None:" in generator.generate()
        assert len(generator.analyze().failures) == 2

    def test_enum_failures(self):
        with pytest.raises(MixedEnumBackingError):
            _generate_code(load("broken_enums.xsd"))
        with pytest.raises(DuplicateEnumCaseError):
            _generate_code(load("broken_enums.xsd"), {"ignore_enums": ["MixedLevel"]})

    def test_skipped_enums(self):
        generator = PipelineGenerator("enums", load("broken_enums.xsd"), CodeGeneratorConfig(on_definition_error=ErrorPolicy.SKIP, add_generation_comment=False))
        code = generator.generate()
        assert "class Size(str, Enum):" in code
        assert [failure.name for failure in generator.analyze().failures] == ["MixedLevel", "Separator"]


class TestPipelineGenerator:
    def test_unsupported_language(self):
        with pytest.raises(ValueError):
            PipelineGenerator("test", load("calculator.wsdl"), language="cs")

    def test_explicit_generation_comment(self):
        generator = PipelineGenerator("calc", load("calculator.wsdl"), generation_comment="Generated for tests")
        assert generator.generate().startswith("# Generated for tests\n\nfrom __future__ import annotations\n")

    def test_default_generation_comment(self):
        code = PipelineGenerator("calc", load("calculator.wsdl"), language="php").generate()
        assert code.startswith("<?php\n\n// Generated by wsdl_to_code v1.0.0 : wsdl_to_code\n")

    def test_analysis_is_cached(self):
        generator = PipelineGenerator("calc", load("calculator.wsdl"))
        assert generator.analyze() is generator.analyze()
        assert generator.analyze().root_name == "calc"

    def test_php_namespaces_per_target_namespace(self):
        config = {"namespace_map": {"urn:example:calculator": "App\\Calculator", "urn:example:calculator:types": "App\\Types"}}
        code = _generate_code(load("calculator.wsdl"), config, "php")
        assert "namespace App\\Types {\n    /**\n" in code
        assert "namespace App\\Calculator {\n" in code
        assert code.index("namespace App\\Types") < code.index("namespace App\\Calculator")

    @pytest.mark.parametrize("language", ["python", "php"])
    def test_port_type_and_simple_type_sharing_a_name(self, language):
        documents = DocumentParser().parse_string(
            """<wsdl:definitions targetNamespace="urn:modes" xmlns:wsdl="http://schemas.xmlsoap.org/wsdl/"
                   xmlns:xsd="http://www.w3.org/2001/XMLSchema">
                 <wsdl:types>
                   <xsd:schema targetNamespace="urn:modes">
                     <xsd:simpleType name="Mode">
                       <xsd:restriction base="xsd:string"><xsd:enumeration value="on"/></xsd:restriction>
                     </xsd:simpleType>
                   </xsd:schema>
                 </wsdl:types>
                 <wsdl:portType name="Mode"/>
               </wsdl:definitions>"""
        )
        with pytest.raises(DuplicateClassNameError) as exc_info:
            _generate_code(documents, language=language)
        assert exc_info.value.class_name == "Mode"
        assert exc_info.value.definitions == ("enum Mode", "portType Mode (urn:modes)")


class TestWrite:
    def generator(self, **config):
        return PipelineGenerator("calc", load("calculator.wsdl"), CodeGeneratorConfig(add_generation_comment=False, **config))

    def test_write(self, tmp_path):
        output = tmp_path / "out" / "calculator.py"
        self.generator().write(output)
        assert output.read_text(encoding="utf-8") == self.generator().generate()

    def test_existing_file_is_kept(self, tmp_path):
        output = tmp_path / "calculator.py"
        output.write_text("original")
        with pytest.raises(FileExistsError):
            self.generator().write(output)
        assert output.read_text() == "original"

    def test_force_overwrites(self, tmp_path):
        output = tmp_path / "calculator.py"
        output.write_text("original")
        generator = self.generator()
        generator.config.output.mode = OutputMode.FORCE
        generator.write(output)
        assert "class CalculatorPortType(ABC):" in output.read_text()

    def test_non_atomic_write(self, tmp_path):
        output = tmp_path / "calculator.py"
        generator = self.generator()
        generator.config.output.atomic_write = False
        generator.write(output)
        assert output.exists()
        with pytest.raises(FileExistsError):
            generator.write(output)

    def test_invalid_code_is_not_written(self, tmp_path, monkeypatch):
        output = tmp_path / "calculator.py"
        generator = self.generator()
        monkeypatch.setattr(generator, "generate", lambda: "def broken(:\n")
        with pytest.raises(CodeWriteError):
            generator.write(output)
        assert list(tmp_path.iterdir()) == []
