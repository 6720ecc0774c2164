"""
GitHub Actions expression building.

An :class:`Expression` holds the text that goes between ``${{`` and ``}}``.
Converting it to a string (``str()``, f-strings, :func:`interpolate`) yields the
full ``${{ ... }}`` form, so expressions embed naturally in step parameters:

    >>> key = f"{runner.os}-{hash_files('yarn.lock')}"
    >>> key
    "${{ runner.os }}-${{ hashFiles('yarn.lock') }}"

Operators such as :func:`eq` keep their operands as raw expression text, which
is what ``if:`` conditions expect.
"""

import re
from typing import Any, Union

from workflowkit.core.exceptions import ExpressionError

ExpressionLike = Union["Expression", str]

# Operands that never need parentheses when combined with && / ||
_SIMPLE_OPERAND = re.compile(r"[A-Za-z0-9_.\-\[\]']+(\([^()]*\))?")


class Expression:
    """A GitHub Actions expression such as ``runner.os``."""

    __slots__ = ("source",)

    def __init__(self, source: str):
        if not isinstance(source, str) or not source.strip():
            raise ExpressionError(f"Expression text must be a non-empty string, got {source!r}")
        self.source = source.strip()

    def __str__(self) -> str:
        return "${{ " + self.source + " }}"

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def __repr__(self) -> str:
        return f"Expression({self.source!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Expression):
            return self.source == other.source
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Expression", self.source))


def literal(value: Any) -> str:
    """
    Render a Python value as expression operand text.

    Strings are single-quoted with embedded quotes doubled, which is the only
    escape GitHub's expression syntax supports.

    Args:
        value: Expression, str, bool, int, float or None

    Returns:
        Operand text

    Raises:
        ExpressionError: If value has an unsupported type
    """
    if isinstance(value, Expression):
        return value.source
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    raise ExpressionError(f"Unsupported expression operand: {value!r} ({type(value).__name__})")


IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


def property_path(base: str, name: Any) -> str:
    """Append ``name`` to an expression path, using index syntax when it isn't an identifier."""
    if isinstance(name, str) and IDENTIFIER.match(name):
        return f"{base}.{name}"
    return f"{base}[{literal(name)}]"


def _group(value: Any) -> str:
    text = literal(value)
    if _SIMPLE_OPERAND.fullmatch(text):
        return text
    return f"({text})"


def interpolate(*parts: Any) -> str:
    """
    Concatenate literal text and expressions into a single parameter value.

    Example:
        >>> interpolate("postgres:", matrix.pg)
        'postgres:${{ matrix.pg }}'
    """
    return "".join(str(part) for part in parts)


def hash_files(*patterns: str) -> Expression:
    """Build ``hashFiles('a', 'b', ...)`` over one or more path patterns."""
    if not patterns:
        raise ExpressionError("hash_files() requires at least one pattern")
    return Expression("hashFiles(" + ", ".join(literal(p) for p in patterns) + ")")


def eq(left: Any, right: Any) -> Expression:
    """``left == right``"""
    return Expression(f"{literal(left)} == {literal(right)}")


def neq(left: Any, right: Any) -> Expression:
    """``left != right``"""
    return Expression(f"{literal(left)} != {literal(right)}")


def and_(*conditions: Any) -> Expression:
    """Combine conditions with ``&&``."""
    if not conditions:
        raise ExpressionError("and_() requires at least one condition")
    if len(conditions) == 1:
        return Expression(literal(conditions[0]))
    return Expression(" && ".join(_group(c) for c in conditions))


def or_(*conditions: Any) -> Expression:
    """Combine conditions with ``||``."""
    if not conditions:
        raise ExpressionError("or_() requires at least one condition")
    if len(conditions) == 1:
        return Expression(literal(conditions[0]))
    return Expression(" || ".join(_group(c) for c in conditions))


def not_(condition: Any) -> Expression:
    """Negate a condition."""
    return Expression("!" + _group(condition))


def success() -> Expression:
    return Expression("success()")


def failure() -> Expression:
    return Expression("failure()")


def always() -> Expression:
    return Expression("always()")


def cancelled() -> Expression:
    return Expression("cancelled()")
