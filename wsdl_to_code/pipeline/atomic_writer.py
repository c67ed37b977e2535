"""
Output writer for generated code.

Generated code is checked first, then written to a temporary file beside
the target and moved over it, so a failed run never leaves a partial file.
"""

from __future__ import annotations

import ast
import logging
import os
import re
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from .errors import CodeWriteError

logger = logging.getLogger(__name__)

Validator = Callable[[str], None]

# PHP string literals and comments, ignored when checking braces
_PHP_NOISE_PATTERN = re.compile(r"'(?:[^'\\]|\\.)*'|/\*.*?\*/|//[^\n]*", re.DOTALL)


def check_python(content: str) -> None:
    """Raise CodeWriteError unless the content parses as Python."""
    try:
        ast.parse(content)
    except SyntaxError as e:
        raise CodeWriteError(f"Generated Python code is not valid: line {e.lineno}: {e.msg}") from e


def check_php(content: str) -> None:
    """Structural checks of PHP code (open tag, balanced braces); PHP is not parsed."""
    if not content.startswith("<?php"):
        raise CodeWriteError("Generated PHP code is missing the <?php open tag")

    code = _PHP_NOISE_PATTERN.sub("", content)
    opened, closed = code.count("{"), code.count("}")
    if opened != closed:
        raise CodeWriteError(f"Generated PHP code has unbalanced braces: {opened} open, {closed} close")


@contextmanager
def _staged_file(target: Path) -> Iterator[Path]:
    """Yield a temporary path in the target directory, removed unless moved into place."""
    # Same directory, so the final rename does not cross filesystems
    fd, name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    os.close(fd)
    staged = Path(name)
    try:
        yield staged
    finally:
        staged.unlink(missing_ok=True)


class AtomicWriter:
    """Validates generated code and writes it with an atomic replace."""

    def __init__(self, validate_python: Validator | None = None, validate_php: Validator | None = None):
        """
        Initialize the writer.

        Args:
            validate_python: Replaces the ``ast.parse`` check of Python output
            validate_php: Replaces the structural check of PHP output
        """
        self.validators: dict[str, Validator] = {
            "python": validate_python or check_python,
            "php": validate_php or check_php,
        }

    def validate(self, content: str, language: str) -> None:
        """
        Run the validator of a language.

        Raises:
            CodeWriteError: If the content is rejected
            ValueError: If no validator is registered for the language
        """
        try:
            validator = self.validators[language]
        except KeyError:
            raise ValueError(f"Language '{language}' is not supported") from None
        validator(content)

    def write(self, path: Path, content: str, language: str, validate: bool = True) -> None:
        """
        Write content to path, replacing any previous file in one step.

        Args:
            path: Target file path
            content: Generated code
            language: "python" or "php"
            validate: Whether to validate the content first

        Raises:
            CodeWriteError: If validation fails (nothing is written)
        """
        if validate:
            self.validate(content, language)

        path.parent.mkdir(parents=True, exist_ok=True)
        with _staged_file(path) as staged:
            staged.write_text(content, encoding="utf-8")
            staged.replace(path)
        logger.debug("Wrote %d characters to %s", len(content), path)

    def write_if_not_exists(self, path: Path, content: str, language: str, validate: bool = True) -> None:
        """Like write, but refuses to replace an existing file.

        Raises:
            FileExistsError: If the file already exists
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")
        self.write(path, content, language, validate)
