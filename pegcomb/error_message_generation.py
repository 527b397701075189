"""
Utility functions for generating error messages.
"""

from typing import Tuple

from textwrap import indent

__all__ = [
    "DEFAULT_EXCERPT_LENGTH",
    "offset_to_line_and_column",
    "extract_line",
    "excerpt",
    "format_error_message",
]


DEFAULT_EXCERPT_LENGTH = 20
"""Number of characters of remaining input shown alongside a failure."""


def offset_to_line_and_column(string: str, offset: int) -> Tuple[int, int]:
    """
    Return the (1-indexed) line and column number corresponding with the
    specified offset.
    """
    lines = string.splitlines(keepends=True) or [""]
    line_start = 0
    for lineno, line in enumerate(lines, start=1):
        if offset < line_start + len(line):
            return lineno, offset - line_start + 1
        line_start += len(line)

    # Past the end: point just beyond the last line
    return len(lines), len(lines[-1]) + 1


def extract_line(string: str, line: int) -> str:
    """
    Given a line number (from :py:func:`offset_to_line_and_column`), return
    just that line (without any trailing newlines).
    """
    lines = string.splitlines()
    if line - 1 < len(lines):
        return lines[line - 1]
    else:
        # str.splitlines yields nothing for "" and drops a trailing empty line
        return ""


def excerpt(string: str, offset: int, length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Return up to ``length`` characters of ``string`` starting at ``offset``."""
    return string[offset : offset + length]


def format_error_message(line: int, column: int, snippet: str, message: str) -> str:
    """
    Generate a formatted error message of the style::

        At line 100 column 6:
            your snippet here...
                 ^
        Your message here...

    Takes a line and column number (from :py:func:`offset_to_line_and_column`)
    and a one-line snippet (from :py:func:`extract_line`) and a message.
    """
    pointer = " " * (column - 1) + "^"
    return "\n".join(
        [
            f"At line {line} column {column}:",
            indent(snippet.rstrip(), "    "),
            indent(pointer, "    "),
            message,
        ]
    )
