"""
A mutable read position over a source string.
"""

from typing import Optional, Pattern

__all__ = [
    "Cursor",
]


class Cursor:
    """
    A read position within a source string.

    A single :py:class:`Cursor` is shared by every combinator taking part in
    a parse. Combinators move it forward with :py:meth:`advance` when they
    consume input and move it back with :py:meth:`reset` when an attempt
    fails or when looking ahead.

    Parameters
    ----------
    source : str
        The string to be parsed. Never modified.
    origin : int
        The initial offset into ``source``. Default = 0.
    """

    source: str
    """The string being parsed."""

    position: int
    """The current offset into :py:attr:`source`."""

    def __init__(self, source: str, origin: int = 0) -> None:
        if not 0 <= origin <= len(source):
            raise ValueError(
                "origin {} outside of source of length {}".format(origin, len(source))
            )
        self.source = source
        self.position = origin

    def __repr__(self) -> str:
        return "{}({!r}, {})".format(type(self).__name__, self.source, self.position)

    @property
    def at_end(self) -> bool:
        """True when no input remains."""
        return self.position >= len(self.source)

    def read(self, n: int) -> str:
        """
        Return up to ``n`` characters starting at the current position
        without consuming them. Fewer characters (possibly none) are returned
        near the end of the source.
        """
        return self.source[self.position : self.position + n]

    def match_pattern(self, pattern: Pattern[str]) -> Optional[str]:
        """
        Match a compiled regular expression anchored at the current position
        (without consuming any input). Returns the matched string or None.
        """
        match = pattern.match(self.source, self.position)
        if match is None:
            return None
        else:
            return match.group(0)

    def advance(self, n: int) -> None:
        """
        Move forward ``n`` characters. The caller is responsible for only
        advancing over input it has just read or matched.
        """
        self.position += n

    def reset(self, position: int) -> None:
        """Move to an arbitrary (typically earlier) position."""
        self.position = position
