from pegcomb import __all__ as pegcomb_all

from pegcomb.cursor import __all__ as cursor_all
from pegcomb.result import __all__ as result_all
from pegcomb.combinators import __all__ as combinators_all


def test_all_is_complete() -> None:
    assert sorted(pegcomb_all) == sorted(cursor_all + result_all + combinators_all)
