from hypothesis import given, strategies as st

from mehl.evaluation.exports import propagate_exports, exported_bindings
from mehl.types.binding import Binding
from mehl.types.scope import Scope


def test_level_zero_bindings_stay_behind():
    source, destination = Scope(), Scope()
    source.bind(Binding("private", 1, 0))
    source.bind(Binding("public", 2, 1))
    propagate_exports(source, destination)
    assert "private" not in destination
    assert destination.lookup("public").export_level == 0
    assert destination.resolve("public") == 2


def test_exports_are_decremented_and_source_untouched():
    source, destination = Scope(), Scope()
    source.bind(Binding("x", 1, 3))
    exported = propagate_exports(source, destination)
    assert exported == [Binding("x", 1, 2)]
    assert source.lookup("x").export_level == 3


def test_later_exports_win_and_replace_existing():
    source, destination = Scope(), Scope()
    destination.bind(Binding("x", "old"))
    source.bind(Binding("x", "first", 1))
    source.bind(Binding("y", 0, 1))
    source.bind(Binding("x", "second", 1))
    propagate_exports(source, destination)
    assert destination.resolve("x") == "second"
    assert [b.name for b in destination] == ["y", "x"]


def test_exported_bindings_is_pure():
    bindings = [Binding("a", 1, 1), Binding("b", 2, 0)]
    assert exported_bindings(bindings) == [Binding("a", 1, 0)]
    assert bindings == [Binding("a", 1, 1), Binding("b", 2, 0)]


@given(st.integers(min_value=0, max_value=8), st.integers(min_value=0, max_value=10))
def test_level_k_survives_exactly_k_boundaries(level, boundaries):
    scope = Scope()
    scope.bind(Binding("x", 42, level))
    for _ in range(boundaries):
        outer = Scope()
        propagate_exports(scope, outer)
        scope = outer
    if boundaries <= level:
        assert scope.lookup("x").export_level == level - boundaries
    else:
        assert "x" not in scope
