"""Value expressions: context bindings and the ``*if(...)*then(...)*else(...)`` template.

Bindings:
    ``@{microapp.name}``  microapp-scoped variable (split on the first ``.``)
    ``@@{name}``          engine-scoped variable

Bindings may appear anywhere in the text. A binding that cannot be resolved
stays in the output verbatim; resolution never fails.

Conditional template boundaries are found by plain marker search: the
then-branch ends at the first ``)`` after ``)*then(`` and the else-branch at
the last ``)`` of the whole string. Branches containing parentheses are
therefore cut short or rejected.
"""

import re
from typing import NamedTuple

from ..models.values import parse_number, stringify
from .context import ContextStore

_BINDING_RE = re.compile(r"@@\{([^{}]*)\}|@\{([^{}]*)\}")

IF_PREFIX = "*if("
THEN_MARKER = ")*then("
ELSE_MARKER = ")*else("

# Checked in this order; the first one present in the condition is used
OPERATORS = ("==", "!=", ">=", "<=", ">", "<")


class Conditional(NamedTuple):
    condition: str
    then_branch: str
    else_branch: str


def resolve_value_expression(raw: str, context: ContextStore) -> str:
    """
    Resolve a raw markup value against the context.

    Examples:
        >>> store = ContextStore()
        >>> store.set_microapp_variable("app", "x", 4)
        >>> resolve_value_expression("*if(@{app.x}%2==0)*then(even)*else(odd)", store)
        'even'
        >>> resolve_value_expression("@{app.missing}", store)
        '@{app.missing}'
    """
    if (conditional := parse_conditional(raw)) is not None:
        matched = evaluate_condition(conditional.condition, context)
        branch = conditional.then_branch if matched else conditional.else_branch
        return resolve_variables(branch, context)
    return resolve_variables(raw, context)


def resolve_variables(raw: str, context: ContextStore) -> str:
    """Substitute every resolvable binding in ``raw``."""
    if "@" not in raw:
        return raw

    def substitute(match: re.Match[str]) -> str:
        engine_name, scoped = match.group(1), match.group(2)
        if engine_name is not None:
            name = engine_name.strip()
            value = context.get_engine_variable(name) if name else None
        else:
            microapp_code, dot, name = scoped.partition(".")
            microapp_code, name = microapp_code.strip(), name.strip()
            if not dot or not microapp_code or not name:
                return match.group(0)
            value = context.get_microapp_variable(microapp_code, name)
        return match.group(0) if value is None else stringify(value)

    return _BINDING_RE.sub(substitute, raw)


def parse_conditional(value: str) -> Conditional | None:
    """Split a conditional template; ``None`` when ``value`` is not one."""
    if not value.startswith(IF_PREFIX):
        return None
    then_idx = value.find(THEN_MARKER)
    else_idx = value.find(ELSE_MARKER)
    if then_idx == -1 or else_idx == -1 or else_idx <= then_idx:
        return None

    then_start = then_idx + len(THEN_MARKER)
    then_end = value.find(")", then_start)
    if then_end == -1 or then_end > else_idx:
        return None

    else_start = else_idx + len(ELSE_MARKER)
    else_end = value.rfind(")")
    if else_end <= else_start:
        return None

    return Conditional(
        condition=value[len(IF_PREFIX):then_idx].strip(),
        then_branch=value[then_start:then_end],
        else_branch=value[else_start:else_end],
    )


def evaluate_condition(raw: str, context: ContextStore) -> bool:
    """
    Evaluate ``<operand> <op> <operand>`` after resolving bindings.

    Numeric operands compare as floats with every operator. Otherwise only
    ``==`` and ``!=`` apply (string equality); ordering operators on
    non-numeric operands evaluate to False.
    """
    expression = resolve_variables(raw.strip(), context)
    op = next((candidate for candidate in OPERATORS if candidate in expression), None)
    if op is None:
        return False
    parts = expression.split(op)
    if len(parts) != 2:
        return False

    left = _strip_quotes(parts[0].strip())
    right = _strip_quotes(parts[1].strip())
    left_value = evaluate_arithmetic(left)
    right_value = evaluate_arithmetic(right)

    if isinstance(left_value, (int, float)) and isinstance(right_value, (int, float)):
        lhs, rhs = float(left_value), float(right_value)
        match op:
            case "==":
                return lhs == rhs
            case "!=":
                return lhs != rhs
            case ">":
                return lhs > rhs
            case "<":
                return lhs < rhs
            case ">=":
                return lhs >= rhs
            case "<=":
                return lhs <= rhs

    match op:
        case "==":
            return left == right
        case "!=":
            return left != right
        case _:
            return False


def evaluate_arithmetic(expression: str) -> int | float | str:
    """
    Reduce ``a % b`` over integer literals, else parse a number, else echo text.

    The remainder takes the sign of the dividend (``-7 % 3 == -1``).
    """
    trimmed = expression.strip()
    if "%" in trimmed:
        parts = trimmed.split("%")
        if len(parts) == 2:
            left, right = parse_number(parts[0]), parse_number(parts[1])
            if isinstance(left, int) and isinstance(right, int) and right != 0:
                remainder = abs(left) % abs(right)
                return -remainder if left < 0 else remainder

    number = parse_number(trimmed)
    return trimmed if number is None else number


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


__all__ = [
    "Conditional",
    "resolve_value_expression",
    "resolve_variables",
    "parse_conditional",
    "evaluate_condition",
    "evaluate_arithmetic",
    "OPERATORS",
]
