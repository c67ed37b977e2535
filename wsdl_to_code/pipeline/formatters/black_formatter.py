"""
Black formatter, used as a library.
"""

from __future__ import annotations

import importlib.util

from ..config import FormatterConfig
from .base import Formatter, FormatterError


class BlackFormatter(Formatter):
    name = "black"

    def _probe(self) -> bool:
        return importlib.util.find_spec("black") is not None

    def _run(self, code: str, config: FormatterConfig) -> str:
        import black

        mode = black.Mode(
            target_versions=self._target_versions(black, config.target_version),
            line_length=config.line_length,
            string_normalization=config.string_normalization,
            magic_trailing_comma=config.magic_trailing_comma,
        )
        try:
            return black.format_str(code, mode=mode)
        except black.InvalidInput as e:
            raise FormatterError(str(e)) from e

    @staticmethod
    def _target_versions(black, target_version: str) -> set:
        """Map "py312" to TargetVersion.PY312; versions black does not know are dropped."""
        version = getattr(black.TargetVersion, target_version.upper(), None) if target_version else None
        return {version} if version is not None else set()
