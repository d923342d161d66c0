"""
String Manipulation Utilities for csemit.

This module provides the string helpers used by the formatter: C# string
literal escaping.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# String Literals
# =============================================================================

_ESCAPES = {
    "\\": "\\\\",
    "\"": "\\\"",
    "\0": "\\0",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def character_literal(ch: str) -> str:
    """
    Escape a single character for use inside a C# string literal.

    Args:
        ch: A single character

    Returns:
        The escaped form (without quotes)
    """
    if ch in _ESCAPES:
        return _ESCAPES[ch]
    if ord(ch) < 0x20:
        return f"\\u{ord(ch):04x}"
    return ch


def string_literal(value: Optional[str], indent: str = "\t") -> str:
    """
    Render a value as a quoted C# string literal.

    Embedded newlines are split into concatenated literals, one per line,
    with continuation lines indented by two units.

    Args:
        value: String to quote, or None for ``null``
        indent: Indent unit used for continuation lines

    Returns:
        C# source text for the literal
    """
    if value is None:
        return "null"
    parts = ["\""]
    for i, ch in enumerate(value):
        if ch == "\n" and i + 1 < len(value):
            parts.append("\\n\" +\n")
            parts.append(indent * 2)
            parts.append("\"")
            continue
        parts.append(character_literal(ch))
    parts.append("\"")
    return "".join(parts)

