"""
Post-processing formatters for generated code.
"""

from __future__ import annotations

from .base import Formatter, FormatterError
from .black_formatter import BlackFormatter
from .ruff_formatter import RuffFormatter

FORMATTERS: dict[str, type[Formatter]] = {
    "ruff": RuffFormatter,
    "black": BlackFormatter,
}


def get_formatter(tool: str) -> Formatter:
    """Create the formatter registered under a tool name."""
    try:
        return FORMATTERS[tool]()
    except KeyError:
        raise ValueError(f"Unknown formatter '{tool}', expected one of: {', '.join(sorted(FORMATTERS))}") from None


__all__ = [
    "Formatter",
    "FormatterError",
    "RuffFormatter",
    "BlackFormatter",
    "get_formatter",
]
