"""
Pipeline generator.

Runs the phases in order: analyze the documents into IR, render the IR
with a language backend, optionally format, and write the output.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .analyzer import IR, DocumentAnalyzer
from .atomic_writer import AtomicWriter
from .backends import CodeBackend, PhpBackend, PythonBackend
from .config import CodeGeneratorConfig, OutputMode
from .document import DocumentSet
from .formatters import get_formatter

logger = logging.getLogger(__name__)

BACKENDS: dict[str, type[CodeBackend]] = {
    "python": PythonBackend,
    "php": PhpBackend,
}


class PipelineGenerator:
    """Generates code for the definitions of a document set."""

    def __init__(
        self,
        name: str,
        documents: DocumentSet,
        config: CodeGeneratorConfig | None = None,
        language: str = "python",
        generation_comment: str | None = None,
    ):
        """
        Initialize the generator.

        Args:
            name: Name of the generation unit
            documents: The loaded WSDL/XSD documents
            config: Code generation configuration
            language: Target language ("python" or "php")
            generation_comment: Comment text put at the top of the output (without comment prefix);
                defaults to the tool version and command line
        """
        if language not in BACKENDS:
            raise ValueError(f"Language '{language}' is not supported")

        self.name = name
        self.documents = documents
        self.config = config or CodeGeneratorConfig()
        self.language = language
        self.generation_comment = generation_comment
        self._ir: IR | None = None

    def analyze(self) -> IR:
        """Build the IR (cached for the lifetime of the generator)."""
        if self._ir is None:
            analyzer = DocumentAnalyzer(self.config)
            ir = analyzer.analyze(self.documents, root_name=self.name)
            if self.config.add_generation_comment:
                ir.generation_comment = self._generate_command_comment()
            logger.info(
                "Analyzed %s: %d interfaces, %d enums, %d skipped",
                self.name,
                len(ir.interfaces),
                len(ir.enums),
                len(ir.failures),
            )
            self._ir = ir
        return self._ir

    def _generate_command_comment(self) -> str:
        """Generate the comment text naming the tool and its command line."""
        if self.generation_comment is not None:
            return self.generation_comment

        from .. import __version__
        from ..cli_utils import reconstruct_command_line
        from ..wsdl_to_code import wsdl_to_code as click_command

        command_line = reconstruct_command_line(click_command)
        return f"Generated by wsdl_to_code v{__version__} : {command_line}"

    def generate(self) -> str:
        """Generate the source code."""
        ir = self.analyze()
        backend = BACKENDS[self.language](self.config)
        code = backend.generate(ir)

        if self.config.formatter.enabled and self.language == "python":
            code = get_formatter(self.config.formatter.tool).format(code, self.config.formatter)

        return code

    def write(self, output: str | Path) -> None:
        """
        Generate the code and write it to a file.

        Raises:
            FileExistsError: If the file exists and the output mode does not allow overwriting
            CodeWriteError: If the generated code fails validation
        """
        path = Path(output)
        code = self.generate()
        output_config = self.config.output

        if output_config.atomic_write:
            writer = AtomicWriter()
            if output_config.mode == OutputMode.ERROR_IF_EXISTS:
                writer.write_if_not_exists(path, code, self.language, output_config.validate_before_write)
            else:
                writer.write(path, code, self.language, output_config.validate_before_write)
            return

        if output_config.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")
        if output_config.validate_before_write:
            AtomicWriter().validate(code, self.language)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(code)
