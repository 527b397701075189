r"""
Pegcomb is a small library of parser combinators which may be composed to
build recursive-descent parsers for text-based inputs.

Specifically, the combinators implement the operators of Parsing Expression
Grammars (PEG): sequences, prioritised alternation, repetition, optional
matches and positive and negative lookahead. Grammars are ordinary Python
values built by passing combinators to other combinators; there is no
separate grammar language to compile. No memoisation is performed and
left-recursive grammars are not supported.

Basic usage
===========

A grammar is built from primitive matchers such as :py:func:`.literal` and
:py:func:`.pattern` combined using the structural combinators. For example,
a grammar matching an integer::

    >>> from pegcomb import pattern, rep1, modify
    >>> digit = pattern(r"[0-9]")
    >>> digits = rep1(digit)
    >>> number = modify(digits, "".join)

A grammar is applied to a string using :py:func:`.parse` (or the
:py:meth:`.Combinator.parse` method) which returns either a
:py:class:`.Success` or a :py:class:`.Failure`::

    >>> from pegcomb import parse
    >>> parse(number, "123abc")
    Success(payload='123')
    >>> parse(number, "abc")
    Failure(expected='[0-9]', offset=0)

Successes are truthy and failures falsy. Parse failures are never raised as
exceptions, though :py:meth:`.Failure.unwrap` may be used to raise a
:py:exc:`.ParseError` for callers who prefer this.

Recursive grammars
------------------

Rules which refer to themselves (or to rules which have not yet been
defined) must do so via :py:func:`.lazy`::

    >>> from pegcomb import literal, seq, or_, rep0, opt, lazy, notp, any1
    >>> space = modify(pattern(r"\s*"), lambda _: ())
    >>> value = lazy(lambda: or_(list_of_values, number))
    >>> list_of_values = seq(
    ...     literal("["),
    ...     space,
    ...     opt(seq(value, space, rep0(seq(literal(","), space, value, space)))),
    ...     literal("]"),
    ... )
    >>> start = seq(space, value, space, notp(any1()))

Payloads are nested tuples which mirror the structure of the grammar. The
:py:meth:`.Success.prettify` method strips out redundant nesting and empty
values to produce something more readable (here whitespace has been replaced
with an empty payload using :py:func:`.modify` so that it is removed)::

    >>> start.parse("[1, [2]]").prettify()
    ('[', ('1', (',', ('[', '2', ']'))), ']')

Cursors
=======

.. autoclass:: pegcomb.Cursor
    :members:

Results
=======

.. autoclass:: pegcomb.Success
    :members:

.. autoclass:: pegcomb.Failure
    :members:

.. autofunction:: pegcomb.prettify

.. autoexception:: pegcomb.ParseError
    :members:

Combinators
===========

.. autofunction:: pegcomb.parse

.. autoclass:: pegcomb.Combinator
    :members:

Primitives
----------

.. autofunction:: pegcomb.literal
.. autofunction:: pegcomb.pattern
.. autofunction:: pegcomb.any1
.. autofunction:: pegcomb.empty

Structure
---------

.. autofunction:: pegcomb.seq
.. autofunction:: pegcomb.or_
.. autofunction:: pegcomb.rep0
.. autofunction:: pegcomb.rep1
.. autofunction:: pegcomb.opt
.. autofunction:: pegcomb.andp
.. autofunction:: pegcomb.notp

Utilities
---------

.. autofunction:: pegcomb.lazy
.. autofunction:: pegcomb.modify

"""


from pegcomb.version import __version__

from pegcomb.cursor import *
from pegcomb.result import *
from pegcomb.combinators import *

# NB: These names are explicitly re-exported here because mypy in strict mode
# does not allow implicit re-exports. The completeness of this list is tested
# by the test suite.
__all__ = [  # noqa: F405
    # cursor.*
    "Cursor",
    # result.*
    "Payload",
    "Success",
    "Failure",
    "Result",
    "ParseError",
    "prettify",
    # combinators.*
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
