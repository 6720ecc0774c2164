"""
GitHub Actions expression helpers.

Mirrors the ``${{ }}`` expression language: contexts, operators and functions.
"""

from workflowkit.expression.expression import (
    Expression,
    ExpressionLike,
    literal,
    property_path,
    interpolate,
    hash_files,
    eq,
    neq,
    and_,
    or_,
    not_,
    success,
    failure,
    always,
    cancelled,
)
from workflowkit.expression.context import (
    PropertyExpression,
    github,
    runner,
    secrets,
    env,
    matrix,
    needs,
    steps,
    inputs,
    vars,
    job,
)

__all__ = [
    "Expression",
    "ExpressionLike",
    "PropertyExpression",
    "literal",
    "property_path",
    "interpolate",
    "hash_files",
    "eq",
    "neq",
    "and_",
    "or_",
    "not_",
    "success",
    "failure",
    "always",
    "cancelled",
    "github",
    "runner",
    "secrets",
    "env",
    "matrix",
    "needs",
    "steps",
    "inputs",
    "vars",
    "job",
]
