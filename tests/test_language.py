"""Behaviour of whole programs running on top of the bundled prelude."""

import math

import pytest
from hypothesis import given, settings, strategies as st

from mehl.errors import UnboundNameError, NoMatchError, ArityOrShapeError, PanicError
from mehl.interpreter import Interpreter
from mehl.types.binding import BindingKind
from mehl.types.closure import Closure
from mehl.types.symbol import Symbol, UNIT, TRUE, FALSE

COUNTDOWN = """
(:countdown, "Counts down to zero, printing every step.", [
  . print
  (., 0, [:done], :_, [(., 1) - countdown]) match
]) fun
"""


def test_unbound_name(interp):
    with pytest.raises(UnboundNameError) as info:
        interp.eval("nope")
    assert info.value.name == "nope"


def test_let_binds_a_value(interp):
    interp.eval("(:x, 5) let")
    assert interp.resolve("x") == 5
    binding = interp.lookup("x")
    assert binding.kind is BindingKind.VALUE
    assert binding.export_level == 0


def test_let_destructures(interp):
    assert interp.eval("((:a, {:k :b}), (1, {:k 2})) let (b, a)") == (2, 1)


def test_fun_round_trip(interp):
    interp.eval('(:double, "Doubles a number.", [(., 2) *]) fun')
    assert interp.eval("21 double") == 42
    assert interp.eval(":double doc") == "Doubles a number."
    assert interp.lookup("double").kind is BindingKind.FUNCTION
    assert interp.lookup("double").export_level == 0


def test_literal_inside_a_function_replaces_its_input(interp):
    # `[2 *]` multiplies the literal 2, not the input; `(., 2)` pairs them
    interp.eval('(:two, "", [2]) fun')
    assert interp.eval("21 two") == 2


def test_let_inside_use_is_dropped(interp):
    assert interp.eval("[(:x, 1) let] use") == UNIT
    with pytest.raises(UnboundNameError):
        interp.resolve("x")


def test_pub_let_survives_one_use(interp):
    interp.eval("[(:a, 1) pub-let (:b, 2) let] use")
    assert interp.resolve("a") == 1
    assert interp.lookup("a").export_level == 1
    with pytest.raises(UnboundNameError):
        interp.eval("b")


def test_pub_level_decays_through_nested_uses(interp):
    interp.eval("[[(:x, 1) pub-let] use] use")
    assert interp.lookup("x").export_level == 0
    interp.eval("[[[(:y, 1) pub-let] use] use] use")
    with pytest.raises(UnboundNameError):
        interp.resolve("y")


def test_pub_fun_through_use(interp):
    interp.eval('[(:triple, "Triples.", [(., 3) *]) pub-fun] use')
    assert interp.eval("5 triple") == 15
    assert interp.lookup("triple").export_level == 1


def test_export_all(interp):
    assert interp.eval("[(:a, 1) let (:b, 2) let export-all] use (a, b)") == (1, 2)


def test_export_all_keeps_the_input_and_captures_private(interp):
    interp.eval('(:f, "", [(:a, 1) let export-all]) fun')
    interp.eval("7 f")
    assert interp.resolve("a") == 1
    assert "." not in interp.scope.vars

    interp.eval("((1, 2), (:?p, :?q), [(:r, p) let export-all]) match")
    assert interp.resolve("r") == 1
    for name in ("p", "q"):
        with pytest.raises(UnboundNameError):
            interp.resolve(name)


def test_shadowing_inside_a_block(interp):
    assert interp.eval("(:x, 1) let ([(:x, 2) let x] run, x)") == (2, 1)
    assert interp.resolve("x") == 1


def test_closures_capture_their_scope(interp):
    interp.eval('(:make-adder, "", [(:n, .) let [(., n) +]]) fun')
    interp.eval('(:add5, "", 5 make-adder) fun')
    assert interp.eval("10 add5") == 15
    with pytest.raises(UnboundNameError):
        interp.resolve("n")


def test_match_takes_the_first_matching_arm(interp):
    assert interp.eval("(5, :?n, [:first], 5, [:second]) match") == Symbol("first")
    assert interp.eval("(5, 5, [:second], :?n, [:first]) match") == Symbol("second")


def test_match_order_with_a_wildcard(interp):
    assert interp.eval("(:true, :true, [:a], :_, [:b]) match") == Symbol("a")
    assert interp.eval("(:true, :_, [:b], :true, [:a]) match") == Symbol("b")


def test_match_arm_gets_the_value_and_captures(interp):
    assert interp.eval("((1, 2), (:?a, :?b), [(b, a, .)]) match") == (2, 1, (1, 2))
    with pytest.raises(UnboundNameError):
        interp.resolve("a")


def test_match_arm_exports(interp):
    interp.eval("(1, :_, [(:x, 2) pub-let (:y, 3) let]) match")
    assert interp.resolve("x") == 2
    with pytest.raises(UnboundNameError):
        interp.resolve("y")


def test_match_without_a_matching_arm(interp):
    with pytest.raises(NoMatchError):
        interp.eval("(5, 1, [:one], :x, [:x]) match")


@pytest.mark.parametrize("args", ["(5, 1)", "(5, 1, [:a], 2)", "(5, 1, 2)", "5"])
def test_malformed_match(interp, args):
    with pytest.raises(ArityOrShapeError):
        interp.eval(f"{args} match")


def test_recursive_countdown(interp, output):
    interp.eval(COUNTDOWN)
    assert interp.eval("3 countdown") == Symbol("done")
    assert output.getvalue() == "🌮> 3\n🌮> 2\n🌮> 1\n🌮> 0\n"


def test_deep_recursion_stays_within_the_default_depth(monkeypatch):
    monkeypatch.delenv("MEHL_MAX_DEPTH", raising=False)
    itp = Interpreter()
    itp.eval('(:cd, "", [(:n, .) let ((n, 0) =, [:done], [(n, 1) - cd]) if]) fun')
    assert itp.eval("1000 cd") == Symbol("done")
    assert itp.runtime.depth == 0


def test_match_based_factorial_at_depth(monkeypatch):
    monkeypatch.delenv("MEHL_MAX_DEPTH", raising=False)
    itp = Interpreter()
    itp.eval('(:fact, "", [(., 0, [1], :_, [(., . dec fact) *]) match]) fun')
    assert itp.eval("1000 fact") == math.factorial(1000)


@pytest.mark.parametrize(
    "code, expected",
    [
        ("(1, 2, 3) +", 6),
        ("(2, 3, 4) *", 24),
        ("(10, 3) -", 7),
        ("(7, 2) /", 3),
        ("(-7, 2) /", -4),
        ("(7, 3) mod", 1),
        ("4 inc", 5),
        ("4 dec", 3),
        ("(1, 1) =", TRUE),
        ('(1, "1") =', FALSE),
        ("(1, 2) <", TRUE),
        ("(1, 2) >", FALSE),
        (":true not", FALSE),
        (":false not", TRUE),
        ("(:true, :true) and", TRUE),
        ("(:true, :false) and", FALSE),
        ("(:false, :true) or", TRUE),
        ("(:false, :false) or", FALSE),
        ("(:true, [1], [2]) if", 1),
        ("((3, 2) <, [:small], [:big]) if", Symbol("big")),
        ("((1, 2, 3), 1) get-item", 2),
        ("(1, 2) first", 1),
        ("(1, 2) second", 2),
        ("({:a 1}, :a) get-key", 1),
        ("(1, 2, 3) length", 3),
        ('("ab", "c") concat', "abc"),
        ("((1), (2, 3)) concat", (1, 2, 3)),
        ("5 type", Symbol("number")),
        ('"s" type', Symbol("string")),
        (":s type", Symbol("symbol")),
        ("(1, 2) type", Symbol("tuple")),
        ("{} type", Symbol("map")),
        ("[] type", Symbol("code")),
        ("[7] run", 7),
        ("[5] use", UNIT),
    ],
)
def test_prelude_functions(interp, code, expected):
    assert interp.eval(code) == expected


def test_if_runs_only_the_chosen_block(interp, output):
    interp.eval('(:false, ["then" print], ["else" print]) if')
    assert output.getvalue() == '🌮> "else"\n'


def test_repeat(interp, output):
    assert interp.eval("([1 print], 2) repeat") == UNIT
    assert output.getvalue() == "🌮> 1\n🌮> 1\n"


def test_loop_runs_until_a_panic(interp, output):
    interp.eval("(:n, 0) let")
    with pytest.raises(PanicError) as info:
        interp.eval("[(:n, n inc) pub-let n print (n, 3, [n panic], :_, [:more]) match] loop")
    assert info.value.value == 3
    assert output.getvalue() == "🌮> 1\n🌮> 2\n🌮> 3\n"
    assert interp.runtime.depth == 0


def test_print_passes_the_value_on(interp, output):
    assert interp.eval("(1, :a) print") == (1, Symbol("a"))
    assert output.getvalue() == "🌮> (1, :a)\n"


def test_panic(interp):
    with pytest.raises(PanicError) as info:
        interp.eval('"oops" panic')
    assert info.value.value == "oops"


def test_docs_of_prelude_names(interp):
    assert "name, docs" in interp.eval(":fun doc")
    assert interp.eval(":if doc").startswith("Runs one of two blocks")


def test_prelude_scope_is_sealed(interp):
    assert interp.prelude_scope.sealed
    assert not interp.scope.sealed
    assert isinstance(interp.resolve("fun"), Closure)
    assert interp.lookup("use").kind is BindingKind.PRIMITIVE


def _nest_in_uses(code: str, depth: int) -> str:
    for _ in range(depth):
        code = f"[{code}] (:use, .) ✨"
    return code


@settings(max_examples=30, deadline=None)
@given(st.integers(min_value=0, max_value=5), st.integers(min_value=1, max_value=6))
def test_export_level_k_survives_k_uses(level, depth):
    itp = Interpreter(prelude=None)
    itp.eval(_nest_in_uses(f"(:let, {{:name :x :value 1 :export-level {level}}}) ✨", depth))
    if depth <= level:
        assert itp.lookup("x").export_level == level - depth
    else:
        with pytest.raises(UnboundNameError):
            itp.resolve("x")
