"""
Base class for formatters applied to generated Python code.

A formatter never fails a run: when its tool is missing or rejects the
code, the code is returned unchanged and the reason is logged.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..config import FormatterConfig

logger = logging.getLogger(__name__)


class FormatterError(Exception):
    """Raised by a formatter tool run that did not produce code."""

    pass


class Formatter(ABC):
    """A code formatting tool."""

    # Tool name, as used in FormatterConfig.tool
    name: str = ""

    def __init__(self):
        self._available: bool | None = None

    def is_available(self) -> bool:
        """Check once whether the tool can be used."""
        if self._available is None:
            self._available = self._probe()
            if not self._available:
                logger.info("%s is not installed, generated code is left unformatted", self.name)
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format the given code.

        Args:
            code: Python source code
            config: Formatter configuration

        Returns:
            Formatted code, or the input unchanged when formatting is not possible
        """
        if not self.is_available():
            return code
        try:
            return self._run(code, config)
        except FormatterError as e:
            logger.warning("%s could not format generated code: %s", self.name, e)
            return code

    @abstractmethod
    def _probe(self) -> bool:
        """Check whether the tool is installed."""

    @abstractmethod
    def _run(self, code: str, config: FormatterConfig) -> str:
        """Run the tool; raise FormatterError when it fails."""
