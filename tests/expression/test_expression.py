"""Unit tests for GitHub Actions expression building."""

import pytest

from workflowkit.core.exceptions import ExpressionError
from workflowkit.expression import (
    Expression,
    always,
    and_,
    eq,
    github,
    hash_files,
    interpolate,
    literal,
    matrix,
    needs,
    neq,
    not_,
    or_,
    runner,
    secrets,
    success,
)


@pytest.mark.unit
class TestExpression:
    """Test the Expression value type."""

    def test_str_wraps_source(self):
        """Test str() yields the ${{ }} form."""
        assert str(Expression("runner.os")) == "${{ runner.os }}"

    def test_format_in_fstring(self):
        """Test expressions embed in f-strings."""
        key = f"{runner.os}-{hash_files('yarn.lock')}"
        assert key == "${{ runner.os }}-${{ hashFiles('yarn.lock') }}"

    def test_source_is_stripped(self):
        """Test surrounding whitespace is dropped."""
        assert Expression("  github.ref ").source == "github.ref"

    def test_empty_source_rejected(self):
        """Test empty expression text raises."""
        with pytest.raises(ExpressionError):
            Expression("   ")

    def test_equality_by_source(self):
        """Test expressions compare and hash by their text."""
        assert Expression("a.b") == Expression("a.b")
        assert len({Expression("a.b"), Expression("a.b")}) == 1
        assert Expression("a.b") != "a.b"


@pytest.mark.unit
class TestLiteral:
    """Test operand rendering."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("push", "'push'"),
            ("it's", "'it''s'"),
            (True, "true"),
            (False, "false"),
            (None, "null"),
            (3, "3"),
            (1.5, "1.5"),
        ],
    )
    def test_literal_values(self, value, expected):
        """Test each supported Python type."""
        assert literal(value) == expected

    def test_expression_operand_is_raw(self):
        """Test expressions are inserted without quoting."""
        assert literal(github.event_name) == "github.event_name"

    def test_unsupported_type(self):
        """Test lists are not valid operands."""
        with pytest.raises(ExpressionError, match="Unsupported"):
            literal(["a"])


@pytest.mark.unit
class TestOperators:
    """Test comparison and logical operators."""

    def test_eq(self):
        """Test equality against a string literal."""
        assert eq(github.event_name, "push").source == "github.event_name == 'push'"

    def test_neq(self):
        """Test inequality renders with !=."""
        assert str(neq(github.event_name, "push")) == "${{ github.event_name != 'push' }}"

    def test_and_groups_compound_operands(self):
        """Test compound operands are parenthesized."""
        condition = and_(eq(github.ref, "refs/heads/master"), success())
        assert condition.source == "(github.ref == 'refs/heads/master') && success()"

    def test_or_keeps_simple_operands_bare(self):
        """Test property paths don't get parentheses."""
        assert or_(github.event.forced, always()).source == "github.event.forced || always()"

    def test_single_condition_passthrough(self):
        """Test one operand is returned unchanged."""
        assert and_(success()).source == "success()"

    def test_empty_and_rejected(self):
        """Test and_() without operands raises."""
        with pytest.raises(ExpressionError):
            and_()

    def test_not(self):
        """Test negation groups compound operands."""
        assert not_(eq(github.event_name, "push")).source == "!(github.event_name == 'push')"
        assert not_(success()).source == "!success()"


@pytest.mark.unit
class TestFunctions:
    """Test function helpers."""

    def test_hash_files_multiple_patterns(self):
        """Test patterns are quoted and comma separated."""
        expr = hash_files("yarn.lock", "packages/a/src")
        assert expr.source == "hashFiles('yarn.lock', 'packages/a/src')"

    def test_hash_files_requires_pattern(self):
        """Test at least one pattern is needed."""
        with pytest.raises(ExpressionError):
            hash_files()

    def test_interpolate(self):
        """Test literal text and expressions concatenate."""
        assert interpolate("postgres:", matrix.pg) == "postgres:${{ matrix.pg }}"


@pytest.mark.unit
class TestContexts:
    """Test property access on contexts."""

    def test_attribute_access(self):
        """Test attributes chain into dotted paths."""
        assert str(needs.build.outputs.output) == "${{ needs.build.outputs.output }}"

    def test_item_access_identifier(self):
        """Test identifier keys use dot syntax."""
        assert str(secrets["NETLIFY_AUTH_TOKEN"]) == "${{ secrets.NETLIFY_AUTH_TOKEN }}"

    def test_item_access_non_identifier(self):
        """Test other keys use index syntax."""
        assert github.event["head commit"].source == "github.event['head commit']"

    def test_private_attribute_raises(self):
        """Test underscore names are not turned into paths."""
        with pytest.raises(AttributeError):
            github._private
