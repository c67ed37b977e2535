"""
Utility functions for WSDL to Code generator.
"""

import keyword
import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z]|[0-9]|\b|_)|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")

# Runs of non-alphanumeric characters
_CASE_SEPARATOR_PATTERN = re.compile(r"[^a-zA-Z0-9]+")

# A leading minus sign before a digit, spelled out in case names
_NEGATIVE_NUMBER_PATTERN = re.compile(r"-(?=[0-9])")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dots) to spaces."""
    return _CASE_SEPARATOR_PATTERN.sub(" ", text)


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them together."""
    return "".join(word.capitalize() for word in words if word)


def make_case_name(value: str) -> str:
    """Convert an enumeration value to an enum case name.

    Runs of non-alphanumeric characters become one underscore, a leading
    minus sign before a digit is spelled MINUS, a leading digit gets an
    underscore prefix and the result is upper-cased.

    Examples:
        "normal" -> "NORMAL"
        "normal-mode" -> "NORMAL_MODE"
        "123" -> "_123"
        "-1" -> "MINUS_1"
        "a.b c" -> "A_B_C"

    Args:
        value: The raw enumeration value

    Returns:
        The case name (empty for an empty value)
    """
    text = str(value)
    if _NEGATIVE_NUMBER_PATTERN.match(text):
        text = "minus" + text
    name = _CASE_SEPARATOR_PATTERN.sub("_", text)
    if name[:1].isdigit():
        name = "_" + name
    return name.upper()


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "getQuoteRequest" -> "GetQuoteRequest"
        "first 3 rows" -> "First3Rows"
        "tns.OrderID" -> "TnsOrderId"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return _capitalize_and_join(words)


def to_snake_case(text: str) -> str:
    """Convert camelCase, PascalCase or separated text to snake_case.

    Examples:
        "GetQuote" -> "get_quote"
        "getHTTPStatus" -> "get_http_status"
        "order-id" -> "order_id"
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return "_".join(word.lower() for word in words if word)


def to_python_identifier(text: str) -> str:
    """Convert text to a snake_case Python identifier.

    Keywords get a trailing underscore and a leading digit gets a leading one.
    """
    name = to_snake_case(text) or "_"
    if name[0].isdigit():
        name = "_" + name
    if keyword.iskeyword(name):
        name = name + "_"
    return name
