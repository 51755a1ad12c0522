"""Value expression tests: bindings, conditional templates and comparisons."""

import pytest
from hypothesis import assume, given, strategies as st

from drivenui.engine import ContextStore
from drivenui.engine.expression import (
    Conditional,
    evaluate_arithmetic,
    evaluate_condition,
    parse_conditional,
    resolve_value_expression,
    resolve_variables,
)


@pytest.fixture
def store():
    store = ContextStore()
    store.set_engine_variable("user", "Ann")
    store.set_microapp_variable("app", "x", "5")
    return store


# ============================================================================
# Bindings
# ============================================================================

@pytest.mark.unit
def test_microapp_binding(store):
    assert resolve_value_expression("@{app.x}", store) == "5"


@pytest.mark.unit
def test_missing_binding_is_left_unchanged():
    assert resolve_value_expression("@{app.x}", ContextStore()) == "@{app.x}"


@pytest.mark.unit
def test_engine_binding(store):
    assert resolve_value_expression("@@{user}", store) == "Ann"
    assert resolve_value_expression("@@{ user }", store) == "Ann"
    assert resolve_value_expression("@@{nobody}", store) == "@@{nobody}"


@pytest.mark.unit
def test_bindings_inside_text(store):
    assert resolve_variables("Hi @@{user}, x=@{app.x}!", store) == "Hi Ann, x=5!"


@pytest.mark.unit
def test_scope_splits_on_first_dot():
    store = ContextStore()
    store.set_microapp_variable("app", "card.number", "1234")
    assert resolve_variables("@{app.card.number}", store) == "1234"


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["@{app}", "@{.x}", "@{app.}", "@{}", "@@{}"])
def test_malformed_bindings_stay_literal(store, raw):
    assert resolve_variables(raw, store) == raw


@pytest.mark.unit
def test_values_are_stringified():
    store = ContextStore()
    store.set_microapp_variable("app", "flag", True)
    store.set_microapp_variable("app", "n", 3)
    store.set_microapp_variable("app", "f", 2.5)
    assert resolve_variables("@{app.flag}/@{app.n}/@{app.f}", store) == "true/3/2.5"


@pytest.mark.unit
@given(st.text(alphabet=st.characters(exclude_characters="@"), max_size=100))
def test_text_without_bindings_is_identity(text):
    """Property test: plain text resolves to itself."""
    assume(not text.startswith("*if("))
    assert resolve_value_expression(text, ContextStore()) == text


# ============================================================================
# Conditional templates
# ============================================================================

@pytest.mark.unit
def test_conditional_equality():
    store = ContextStore()
    template = "*if(@{app.x}==5)*then(A)*else(B)"

    store.set_microapp_variable("app", "x", 5)
    assert resolve_value_expression(template, store) == "A"

    store.set_microapp_variable("app", "x", 3)
    assert resolve_value_expression(template, store) == "B"


@pytest.mark.unit
def test_conditional_with_absent_binding_takes_else():
    """The literal ``@{app.x}`` is compared to ``5`` as a string."""
    assert resolve_value_expression("*if(@{app.x}==5)*then(A)*else(B)", ContextStore()) == "B"


@pytest.mark.unit
def test_conditional_modulo():
    store = ContextStore()
    template = "*if(@{app.x}%2==0)*then(even)*else(odd)"

    store.set_microapp_variable("app", "x", 4)
    assert resolve_value_expression(template, store) == "even"

    store.set_microapp_variable("app", "x", 5)
    assert resolve_value_expression(template, store) == "odd"


@pytest.mark.unit
def test_branch_is_resolved(store):
    assert resolve_value_expression("*if(1==1)*then(Hi @@{user})*else(no)", store) == "Hi Ann"


@pytest.mark.unit
def test_parse_conditional_parts():
    assert parse_conditional("*if( a == b )*then(yes)*else(no)") == Conditional("a == b", "yes", "no")


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        "if(a==b)*then(A)*else(B)",
        "*if(a==b)*then(A)",
        "*if(a==b)*else(B)*then(A)",
        "*if(a==b)*then(A)*else(",
    ],
)
def test_malformed_conditionals_are_literals(raw):
    assert parse_conditional(raw) is None
    assert resolve_value_expression(raw, ContextStore()) == raw


@pytest.mark.unit
def test_parenthesis_inside_then_branch_truncates_branch():
    """The then-branch ends at its first ``)``, even inside a nested call."""
    raw = "*if(1==1)*then(f(x)*else(B)"
    assert parse_conditional(raw) == Conditional("1==1", "f(x", "B")


@pytest.mark.unit
def test_else_branch_ends_at_last_parenthesis():
    assert resolve_value_expression("*if(1==2)*then(A)*else(g(y))", ContextStore()) == "g(y)"


# ============================================================================
# Conditions
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "condition, expected",
    [
        ("3 > 2", True),
        ("3 < 2", False),
        ("2 >= 2", True),
        ("2 <= 1", False),
        ("2.0 == 2", True),
        ("1 != 1", False),
        ("'abc' == \"abc\"", True),
        ("abc != abd", True),
        ("7 % 3 == 1", True),
        ("-7 % 3 == -1", True),
        ("5 % 0 == 0", False),
    ],
)
def test_evaluate_condition(condition, expected):
    assert evaluate_condition(condition, ContextStore()) is expected


@pytest.mark.unit
@pytest.mark.parametrize("condition", ["b > a", "b < a", "b >= a", "a <= b"])
def test_ordering_on_non_numeric_operands_is_false(condition):
    """Ordering operators only compare numbers; text always evaluates to False."""
    assert evaluate_condition(condition, ContextStore()) is False


@pytest.mark.unit
def test_condition_without_operator_is_false():
    assert evaluate_condition("true", ContextStore()) is False


@pytest.mark.unit
def test_condition_with_repeated_operator_is_false():
    assert evaluate_condition("1 == 1 == 1", ContextStore()) is False


@pytest.mark.unit
def test_operator_priority():
    """``==`` is tried before ``>=``, so ``a>=b==c`` splits on ``==``."""
    assert evaluate_condition("2>=1==2>=1", ContextStore()) is True


@pytest.mark.unit
def test_evaluate_arithmetic():
    assert evaluate_arithmetic("10 % 4") == 2
    assert evaluate_arithmetic("1.5") == 1.5
    assert evaluate_arithmetic("42") == 42
    assert evaluate_arithmetic("1.5 % 2") == "1.5 % 2"
    assert evaluate_arithmetic(" text ") == "text"
