"""
Property-based tests of the invariants every combinator must uphold.
"""

from typing import Any

from hypothesis import given, strategies as st

from pegcomb.cursor import Cursor
from pegcomb.result import Success, Failure, prettify
from pegcomb.combinators import (
    ParserLike,
    literal,
    pattern,
    any1,
    empty,
    seq,
    or_,
    rep0,
    rep1,
    opt,
    andp,
    notp,
    modify,
)


texts = st.text(alphabet="ab", max_size=8)

leaf_parsers = st.one_of(
    st.text(alphabet="ab", min_size=1, max_size=3).map(literal),
    st.sampled_from(["a", "[ab]", "ab|ba", "a+", "b*"]).map(pattern),
    st.just(any1()),
    st.just(empty()),
)


def compound_parsers(children: Any) -> Any:
    return st.one_of(
        st.lists(children, min_size=1, max_size=3).map(lambda ps: seq(*ps)),
        st.lists(children, min_size=1, max_size=3).map(lambda ps: or_(*ps)),
        children.map(rep0),
        children.map(rep1),
        children.map(opt),
        children.map(andp),
        children.map(notp),
        children.map(lambda p: modify(p, repr)),
    )


parsers = st.recursive(leaf_parsers, compound_parsers, max_leaves=8)

payloads = st.recursive(
    st.text(alphabet="ab", max_size=2),
    lambda children: st.lists(children, max_size=4).map(tuple),
    max_leaves=12,
)


@st.composite
def cursor_args(draw: Any) -> Any:
    text = draw(texts)
    origin = draw(st.integers(min_value=0, max_value=len(text)))
    return text, origin


@given(parsers, cursor_args())
def test_backtracking(parser: ParserLike, args: Any) -> None:
    text, origin = args
    cursor = Cursor(text, origin)
    result = parser(cursor)
    assert 0 <= cursor.position <= len(text)
    if isinstance(result, Failure):
        assert cursor.position == origin
        assert result.offset == origin
    else:
        assert cursor.position >= origin


@given(parsers, cursor_args())
def test_single_seq_and_or_are_transparent(parser: ParserLike, args: Any) -> None:
    text, origin = args

    plain_cursor = Cursor(text, origin)
    plain = parser(plain_cursor)

    seq_cursor = Cursor(text, origin)
    in_seq = seq(parser)(seq_cursor)

    or_cursor = Cursor(text, origin)
    in_or = or_(parser)(or_cursor)

    assert in_or == plain
    assert or_cursor.position == plain_cursor.position
    assert seq_cursor.position == plain_cursor.position
    if isinstance(plain, Success):
        assert in_seq == Success((plain.payload,))
    else:
        assert in_seq == plain


@given(parsers, cursor_args())
def test_rep0_never_fails(parser: ParserLike, args: Any) -> None:
    text, origin = args
    cursor = Cursor(text, origin)
    result = rep0(parser)(cursor)
    assert isinstance(result, Success)
    assert origin <= cursor.position <= len(text)


@given(parsers, cursor_args())
def test_rep1_is_one_then_rep0(parser: ParserLike, args: Any) -> None:
    text, origin = args

    first_cursor = Cursor(text, origin)
    first = parser(first_cursor)

    rep1_cursor = Cursor(text, origin)
    rep1_result = rep1(parser)(rep1_cursor)

    if isinstance(first, Failure):
        assert rep1_result == first
        assert rep1_cursor.position == origin
        return

    # Whatever follows the first match is an ordinary zero-or-more repetition
    rest_cursor = Cursor(text, first_cursor.position)
    rest = rep0(parser)(rest_cursor)
    assert isinstance(rest, Success)
    assert rep1_result == Success((first.payload,) + rest.payload)
    assert rep1_cursor.position == rest_cursor.position

    # ...and when the first match made progress, rep1 agrees with rep0
    if first_cursor.position > origin:
        rep0_cursor = Cursor(text, origin)
        assert rep0(parser)(rep0_cursor) == rep1_result
        assert rep0_cursor.position == rep1_cursor.position


@given(parsers, cursor_args())
def test_opt_never_fails(parser: ParserLike, args: Any) -> None:
    text, origin = args
    plain_cursor = Cursor(text, origin)
    plain = parser(plain_cursor)

    opt_cursor = Cursor(text, origin)
    result = opt(parser)(opt_cursor)

    assert opt_cursor.position == plain_cursor.position
    if isinstance(plain, Success):
        assert result == plain
    else:
        assert result == Success(())


@given(parsers, cursor_args())
def test_lookahead_is_zero_width(parser: ParserLike, args: Any) -> None:
    text, origin = args

    plain = parser(Cursor(text, origin))

    and_cursor = Cursor(text, origin)
    and_result = andp(parser)(and_cursor)
    assert and_cursor.position == origin

    not_cursor = Cursor(text, origin)
    not_result = notp(parser)(not_cursor)
    assert not_cursor.position == origin

    assert bool(and_result) == bool(plain)
    assert bool(not_result) != bool(plain)
    if isinstance(plain, Failure):
        assert and_result == plain


@given(parsers, cursor_args())
def test_modify(parser: ParserLike, args: Any) -> None:
    text, origin = args
    plain = parser(Cursor(text, origin))
    modified = modify(parser, lambda payload: ("modified", payload))(
        Cursor(text, origin)
    )
    if isinstance(plain, Success):
        assert modified == Success(("modified", plain.payload))
    else:
        assert modified == plain


@given(payloads)
def test_prettify_idempotent(payload: Any) -> None:
    once = prettify(payload)
    assert prettify(once) == once


@given(parsers, texts)
def test_prettify_parse_results_idempotent(parser: ParserLike, text: str) -> None:
    result = parser(Cursor(text))
    if isinstance(result, Success):
        once = result.prettify()
        assert prettify(once) == once
