"""
The outcome of applying a combinator: either a :py:class:`Success` carrying a
payload or a :py:class:`Failure` describing what was expected.
"""

import json

from dataclasses import dataclass, field

from typing import Any, List, Tuple, Union

from pegcomb.error_message_generation import (
    DEFAULT_EXCERPT_LENGTH,
    offset_to_line_and_column,
    extract_line,
    excerpt,
    format_error_message,
)

__all__ = [
    "Payload",
    "Success",
    "Failure",
    "Result",
    "ParseError",
    "prettify",
]


Payload = Any
"""
A parse payload: a string (or any value produced by a
:py:func:`~pegcomb.combinators.modify` transform) or a tuple of payloads.
"""


def _is_sequence(value: Payload) -> bool:
    return isinstance(value, (tuple, list))


def prettify(payload: Payload) -> Payload:
    """
    Simplify a nested payload for display.

    Sequences containing exactly one element are replaced by that element
    and empty sequences are removed. For example::

        >>> prettify((("1",), (), ("2", ("3",))))
        ('1', ('2', '3'))
        >>> prettify(((), ("x",)))
        'x'

    Payloads which are not sequences are returned unchanged. Applying this
    function to its own output returns the same value.
    """
    if not _is_sequence(payload):
        return payload

    result: List[Payload] = []
    for element in payload:
        # Lift single element: ("1",) -> "1"
        if _is_sequence(element) and len(element) == 1:
            element = element[0]

        if _is_sequence(element):
            element = prettify(element)
            # Recursion may itself produce an empty or leaf value
            if _is_sequence(element) and len(element) == 0:
                continue
        result.append(element)

    if len(result) == 1:
        return result[0]
    else:
        return tuple(result)


@dataclass(frozen=True)
class Success:
    """A successful parse."""

    payload: Payload
    """
    The value produced. Primitive matchers produce the matched string,
    structural combinators tuples of their children's payloads.
    """

    def __bool__(self) -> bool:
        return True

    def prettify(self) -> Payload:
        """Return the :py:func:`prettify`-ed payload."""
        return prettify(self.payload)

    def unwrap(self) -> Payload:
        """Return the (unprettified) payload."""
        return self.payload

    def render(self) -> str:
        return "[Parse Succeeded] accepted: {}".format(
            json.dumps(self.prettify(), default=repr)
        )

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Failure:
    """A failed parse."""

    expected: str
    """A human readable description of what was expected."""

    offset: int
    """The offset at which the failed attempt was made."""

    source: str = field(default="", repr=False, compare=False)
    """The string being parsed (used to show the input which was received)."""

    causes: Tuple["Failure", ...] = field(default=(), repr=False, compare=False)
    r"""
    The child :py:class:`Failure`\ s from which a composite failure (e.g.
    from :py:func:`~pegcomb.combinators.or_`) was built.
    """

    def __bool__(self) -> bool:
        return False

    def received(self, length: int = DEFAULT_EXCERPT_LENGTH) -> str:
        """The (up to) ``length`` characters of input found at :py:attr:`offset`."""
        return excerpt(self.source, self.offset, length)

    def render(self, length: int = DEFAULT_EXCERPT_LENGTH) -> str:
        return "[Parse Failed]    expected: {} received: {}".format(
            json.dumps(self.expected), self.received(length)
        )

    def __str__(self) -> str:
        return self.render()

    def to_error(self) -> "ParseError":
        """Produce a :py:exc:`ParseError` describing this failure."""
        line, column = offset_to_line_and_column(self.source, self.offset)
        snippet = extract_line(self.source, line)
        return ParseError(line, column, snippet, self.expected, self.offset)

    def unwrap(self) -> Payload:
        """Always raises this failure as a :py:exc:`ParseError`."""
        raise self.to_error()


Result = Union[Success, Failure]


@dataclass
class ParseError(Exception):
    """
    Thrown by :py:meth:`Failure.unwrap` for callers who prefer exceptions to
    inspecting a :py:data:`Result`.

    Parameters
    ----------
    line : int
        One-indexed line number where the error occurred.
    column : int
        One-indexed column number where the error occurred.
    snippet : str
        The contents of the offending line.
    expected : str
        The failure description (see :py:attr:`Failure.expected`).
    offset : int
        Zero-indexed character offset where the error occurred.
    """

    line: int
    column: int
    snippet: str
    expected: str
    offset: int = 0

    def explain(self) -> str:
        """Return a human-readable string describing the expected input."""
        return "Expected {}".format(self.expected)

    def __str__(self) -> str:
        return format_error_message(
            self.line, self.column, self.snippet, self.explain()
        )
