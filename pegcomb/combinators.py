"""
Parsing Expression Grammar (PEG) combinators.

Each combinator is a (frozen) :py:class:`Combinator` which, when called with a
:py:class:`~pegcomb.cursor.Cursor`, attempts to match at the cursor's current
position and returns a :py:data:`~pegcomb.result.Result`. On success the
cursor is left just past the consumed input. On failure the cursor is always
left where it was found so that alternatives may be tried from the same
position.
"""

import re
import json
import logging

from functools import reduce

from dataclasses import dataclass

from typing import Callable, Iterable, Pattern, Tuple, Union

from pegcomb.cursor import Cursor
from pegcomb.result import Payload, Success, Failure, Result

__all__ = [
    "ParserLike",
    "Combinator",
    "Literal",
    "Regex",
    "AnyChar",
    "Empty",
    "Seq",
    "Or",
    "Rep0",
    "Rep1",
    "Opt",
    "And",
    "Not",
    "Lazy",
    "Modify",
    "literal",
    "pattern",
    "any1",
    "empty",
    "seq",
    "or_",
    "rep0",
    "rep1",
    "opt",
    "andp",
    "notp",
    "lazy",
    "modify",
    "parse",
]

logger = logging.getLogger(__name__)


ParserLike = Callable[[Cursor], Result]
"""
Anything which may be used as a parser: a :py:class:`Combinator` or any other
callable taking a :py:class:`~pegcomb.cursor.Cursor` and returning a
:py:data:`~pegcomb.result.Result`. Such callables must leave the cursor
unchanged when they fail.
"""


def _fail(cursor: Cursor, expected: str, causes: Tuple[Failure, ...] = ()) -> Failure:
    return Failure(expected, cursor.position, cursor.source, causes)


class Combinator:
    """A parser combinator. Abstract base class."""

    def __call__(self, cursor: Cursor) -> Result:
        """Attempt to match at the cursor's current position."""
        raise NotImplementedError()

    def iter_children(self) -> Iterable[ParserLike]:
        """
        Iterate over the parsers this combinator is built from. The targets
        of :py:class:`Lazy` references are not resolved.
        """
        raise NotImplementedError()

    def parse(self, string: str, origin: int = 0) -> Result:
        """Parse ``string`` starting at ``origin``. See :py:func:`parse`."""
        return parse(self, string, origin)


@dataclass(frozen=True)
class Literal(Combinator):
    """Match a literal string."""

    text: str

    def __call__(self, cursor: Cursor) -> Result:
        length = len(self.text)
        if cursor.read(length) == self.text:
            cursor.advance(length)
            return Success(self.text)
        else:
            return _fail(cursor, self.text)

    def iter_children(self) -> Iterable[ParserLike]:
        return iter(())


@dataclass(frozen=True)
class Regex(Combinator):
    """
    Match a compiled :py:mod:`re` regular expression, anchored at the cursor.
    If a string is provided, it will be compiled into a regular expression
    with the specified flags (:py:data:`re.DOTALL` by default).
    """

    pattern: Pattern[str]

    def __init__(
        self, pattern: Union[Pattern[str], str], flags: int = re.DOTALL
    ) -> None:
        if isinstance(pattern, str):
            pattern = re.compile(pattern, flags)

        object.__setattr__(self, "pattern", pattern)

    def __call__(self, cursor: Cursor) -> Result:
        string = cursor.match_pattern(self.pattern)
        if string is None:
            return _fail(cursor, self.pattern.pattern)
        else:
            cursor.advance(len(string))
            return Success(string)

    def iter_children(self) -> Iterable[ParserLike]:
        return iter(())


@dataclass(frozen=True)
class AnyChar(Combinator):
    """Match any single character."""

    def __call__(self, cursor: Cursor) -> Result:
        char = cursor.read(1)
        if len(char) == 1:
            cursor.advance(1)
            return Success(char)
        else:
            return _fail(cursor, "any char")

    def iter_children(self) -> Iterable[ParserLike]:
        return iter(())


@dataclass(frozen=True)
class Empty(Combinator):
    """Match the empty string. Never fails; produces an empty payload."""

    def __call__(self, cursor: Cursor) -> Result:
        return Success(())

    def iter_children(self) -> Iterable[ParserLike]:
        return iter(())


@dataclass(frozen=True)
class Seq(Combinator):
    """
    Sequence: match each parser in turn. The payload is a tuple of each
    parser's payload.

    On failure, the failure description is built up as
    ``seq(seq(a, b), expected)`` where ``a`` and ``b`` are the text consumed
    by the parsers which matched before the failing one.
    """

    parsers: Tuple[ParserLike, ...]

    def __call__(self, cursor: Cursor) -> Result:
        start_offset = cursor.position
        payloads = []
        descriptions = []
        for parser in self.parsers:
            before_offset = cursor.position
            result = parser(cursor)
            if isinstance(result, Failure):
                cursor.reset(start_offset)
                descriptions.append(result.expected)
                expected = reduce(
                    lambda acc, nxt: "seq({}, {})".format(acc, nxt), descriptions
                )
                return _fail(cursor, expected, (result,))

            descriptions.append(cursor.source[before_offset : cursor.position])
            payloads.append(result.payload)

        return Success(tuple(payloads))

    def iter_children(self) -> Iterable[ParserLike]:
        return iter(self.parsers)


@dataclass(frozen=True)
class Or(Combinator):
    """Prioritised alternation: the result of the first matching parser."""

    parsers: Tuple[ParserLike, ...]

    def __call__(self, cursor: Cursor) -> Result:
        start_offset = cursor.position
        failures = []
        for parser in self.parsers:
            result = parser(cursor)
            if isinstance(result, Success):
                return result
            cursor.reset(start_offset)
            failures.append(result)

        expected = reduce(
            lambda acc, nxt: "or({}, {})".format(acc, nxt),
            (failure.expected for failure in failures),
        )
        return _fail(cursor, expected, tuple(failures))

    def iter_children(self) -> Iterable[ParserLike]:
        return iter(self.parsers)


@dataclass(frozen=True)
class Rep0(Combinator):
    """
    Kleene star: greedily match 0-or-more repetitions. Never fails; the
    payload is a tuple of each repetition's payload.

    Repetition stops at the first match which consumes no input. That match
    is not included in the payload.
    """

    parser: ParserLike

    def __call__(self, cursor: Cursor) -> Result:
        payloads = []
        while True:
            before_offset = cursor.position
            result = self.parser(cursor)
            if isinstance(result, Failure):
                cursor.reset(before_offset)
                break

            # Stop at (and discard) a match which consumed nothing
            if cursor.position <= before_offset:
                cursor.reset(before_offset)
                break

            payloads.append(result.payload)

        return Success(tuple(payloads))

    def iter_children(self) -> Iterable[ParserLike]:
        return iter((self.parser,))


def _first_and_rest(payload: Payload) -> Payload:
    first, rest = payload
    return (first,) + rest


@dataclass(frozen=True)
class Rep1(Combinator):
    """
    'Kleene plus': match 1-or-more repetitions. The payload is a tuple of
    each repetition's payload.
    """

    parser: ParserLike

    def __call__(self, cursor: Cursor) -> Result:
        # NB: Syntactic sugar, implemented via other combinators
        combined = Modify(Seq((self.parser, Rep0(self.parser))), _first_and_rest)
        return combined(cursor)

    def iter_children(self) -> Iterable[ParserLike]:
        return iter((self.parser,))


@dataclass(frozen=True)
class Opt(Combinator):
    """
    Match a parser or nothing. Never fails; the payload is the parser's
    payload, or an empty tuple if it didn't match.
    """

    parser: ParserLike

    def __call__(self, cursor: Cursor) -> Result:
        start_offset = cursor.position
        result = self.parser(cursor)
        if isinstance(result, Success):
            return result
        else:
            cursor.reset(start_offset)
            return Success(())

    def iter_children(self) -> Iterable[ParserLike]:
        return iter((self.parser,))


@dataclass(frozen=True)
class And(Combinator):
    """Positive lookahead: match, without consuming, a parser."""

    parser: ParserLike

    def __call__(self, cursor: Cursor) -> Result:
        start_offset = cursor.position
        result = self.parser(cursor)
        cursor.reset(start_offset)

        if isinstance(result, Success):
            return Success(())
        else:
            return _fail(cursor, result.expected, (result,))

    def iter_children(self) -> Iterable[ParserLike]:
        return iter((self.parser,))


@dataclass(frozen=True)
class Not(Combinator):
    """
    Negative lookahead: matches (without consuming input) only when the
    parser does not.
    """

    parser: ParserLike

    def __call__(self, cursor: Cursor) -> Result:
        start_offset = cursor.position
        result = self.parser(cursor)
        cursor.reset(start_offset)

        if isinstance(result, Success):
            return _fail(cursor, "notp " + json.dumps(result.payload, default=repr))
        else:
            return Success(())

    def iter_children(self) -> Iterable[ParserLike]:
        return iter((self.parser,))


@dataclass(frozen=True)
class Lazy(Combinator):
    """
    A deferred reference to a parser, for use in recursive grammars. The
    ``thunk`` is called (with no arguments) to obtain the parser each time
    this combinator is used, not when it is constructed.
    """

    thunk: Callable[[], ParserLike]

    def resolve(self) -> ParserLike:
        """Return the parser this reference currently refers to."""
        return self.thunk()

    def __call__(self, cursor: Cursor) -> Result:
        return self.resolve()(cursor)

    def iter_children(self) -> Iterable[ParserLike]:
        return iter(())


@dataclass(frozen=True)
class Modify(Combinator):
    """
    Transform the payload of a successful match using ``fn``. Failures are
    passed through untouched (and ``fn`` is not called).
    """

    parser: ParserLike
    fn: Callable[[Payload], Payload]

    def __call__(self, cursor: Cursor) -> Result:
        result = self.parser(cursor)
        if isinstance(result, Success):
            return Success(self.fn(result.payload))
        else:
            return result

    def iter_children(self) -> Iterable[ParserLike]:
        return iter((self.parser,))


def literal(text: str) -> Literal:
    """Match the literal string ``text``."""
    return Literal(text)


def pattern(regex: Union[Pattern[str], str], flags: int = re.DOTALL) -> Regex:
    r"""
    Match a regular expression at the current position. String patterns are
    compiled with ``flags``; compiled patterns are used as-is.

    Unlike :py:func:`re.compile`, the default flags include :py:data:`re.DOTALL`
    so ``.`` also matches newlines::

        >>> pattern(r".").parse("\n")
        Success(payload='\n')
        >>> pattern(r".", flags=0).parse("\n")
        Failure(expected='.', offset=0)
    """
    return Regex(regex, flags)


def any1() -> AnyChar:
    """Match any single character."""
    return AnyChar()


def empty() -> Empty:
    """Match the empty string."""
    return Empty()


def seq(*parsers: ParserLike) -> Seq:
    """Match each of the parsers in turn (``e1 e2 ...``)."""
    return Seq(tuple(parsers))


def or_(*parsers: ParserLike) -> Or:
    """Match the first of the parsers to succeed (``e1 / e2 / ...``)."""
    if not parsers:
        raise ValueError("or_ requires at least one alternative")
    return Or(tuple(parsers))


def rep0(parser: ParserLike) -> Rep0:
    """Match zero or more repetitions (``e*``)."""
    return Rep0(parser)


def rep1(parser: ParserLike) -> Rep1:
    """Match one or more repetitions (``e+``)."""
    return Rep1(parser)


def opt(parser: ParserLike) -> Opt:
    """Optionally match (``e?``)."""
    return Opt(parser)


def andp(parser: ParserLike) -> And:
    """Positive lookahead (``&e``)."""
    return And(parser)


def notp(parser: ParserLike) -> Not:
    """Negative lookahead (``!e``)."""
    return Not(parser)


def lazy(thunk: Callable[[], ParserLike]) -> Lazy:
    """
    Refer to a parser which has not been defined yet. For example, a rule
    matching nested parentheses::

        >>> parens = or_(seq(literal("("), lazy(lambda: parens), literal(")")), empty())
    """
    return Lazy(thunk)


def modify(parser: ParserLike, fn: Callable[[Payload], Payload]) -> Modify:
    """Replace the payload of a successful match with ``fn(payload)``."""
    return Modify(parser, fn)


def parse(parser: ParserLike, string: str, origin: int = 0) -> Result:
    """
    Parse ``string`` (starting from offset ``origin``) with ``parser``.

    Does not require the whole string to be consumed: combine the grammar
    with ``notp(any1())`` to require this.
    """
    cursor = Cursor(string, origin)
    logger.debug("Parsing %d characters from offset %d", len(string), origin)

    result = parser(cursor)

    if isinstance(result, Success):
        logger.debug("Parse succeeded, stopped at offset %d", cursor.position)
    else:
        logger.debug(
            "Parse failed at offset %d, expected %s", result.offset, result.expected
        )
    return result
