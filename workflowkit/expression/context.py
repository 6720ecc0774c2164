"""
Expression contexts (``github``, ``runner``, ``secrets``, ...).

Attribute and item access on a context produce property expressions:

    >>> str(github.event_name)
    '${{ github.event_name }}'
    >>> str(secrets["NPM_TOKEN"])
    '${{ secrets.NPM_TOKEN }}'
    >>> str(github.event["pull_request"])
    '${{ github.event.pull_request }}'
"""

from typing import Any

from workflowkit.expression.expression import Expression, property_path


class PropertyExpression(Expression):
    """An expression that supports further property dereferencing."""

    __slots__ = ()

    def __getattr__(self, name: str) -> "PropertyExpression":
        # Dunder and private lookups (copy, pickle, pytest introspection)
        # must keep failing normally.
        if name.startswith("_"):
            raise AttributeError(name)
        return PropertyExpression(f"{self.source}.{name}")

    def __getitem__(self, key: Any) -> "PropertyExpression":
        return PropertyExpression(property_path(self.source, key))


github = PropertyExpression("github")
runner = PropertyExpression("runner")
secrets = PropertyExpression("secrets")
env = PropertyExpression("env")
matrix = PropertyExpression("matrix")
needs = PropertyExpression("needs")
steps = PropertyExpression("steps")
inputs = PropertyExpression("inputs")
vars = PropertyExpression("vars")
job = PropertyExpression("job")
