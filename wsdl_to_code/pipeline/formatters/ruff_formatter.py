"""
Ruff formatter, run as a subprocess reading stdin.
"""

from __future__ import annotations

import subprocess

from ..config import FormatterConfig
from .base import Formatter, FormatterError


class RuffFormatter(Formatter):
    name = "ruff"

    def _probe(self) -> bool:
        try:
            return subprocess.run(["ruff", "--version"], capture_output=True, timeout=5).returncode == 0
        except (OSError, subprocess.SubprocessError):
            return False

    def _command(self, config: FormatterConfig) -> list[str]:
        cmd = ["ruff", "format", "--stdin-filename", "generated.py"]
        if config.line_length:
            cmd += ["--line-length", str(config.line_length)]
        if config.target_version:
            cmd += ["--target-version", config.target_version]
        return cmd

    def _run(self, code: str, config: FormatterConfig) -> str:
        try:
            result = subprocess.run(self._command(config), input=code, capture_output=True, text=True, timeout=30)
        except subprocess.SubprocessError as e:
            raise FormatterError(str(e)) from e

        if result.returncode != 0:
            raise FormatterError(result.stderr.strip())
        return result.stdout
