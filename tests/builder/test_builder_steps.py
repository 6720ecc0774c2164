"""Unit tests for step-level builder contexts."""

import pytest

from workflowkit.builder import StepsContext
from workflowkit.builder.steps import slugify
from workflowkit.core.exceptions import WorkflowDefinitionError
from workflowkit.expression import Expression, eq, github, success


@pytest.mark.unit
class TestStepsContext:
    """Test adding steps."""

    def test_use_adds_action_step(self):
        """Test use() records the action and its inputs."""
        ctx = StepsContext("build")
        ctx.use("actions/setup-node@v1", with_={"node-version": "14.x"})

        step = ctx.steps[0]
        assert step.uses == "actions/setup-node@v1"
        assert step.with_ == {"node-version": "14.x"}
        assert step.is_action

    def test_run_adds_command_step(self):
        """Test run() records the command and env."""
        ctx = StepsContext("build")
        ctx.run("yarn build", name="Build", env={"CI": "true"})

        step = ctx.steps[0]
        assert step.run == "yarn build"
        assert step.name == "Build"
        assert step.env == {"CI": "true"}
        assert not step.is_action

    def test_steps_keep_insertion_order(self):
        """Test steps come back in the order they were added."""
        ctx = StepsContext("job")
        ctx.run("one")
        ctx.use("two@v1")
        ctx.run("three")
        assert [s.run or s.uses for s in ctx.steps] == ["one", "two@v1", "three"]

    def test_run_requires_command(self):
        """Test empty commands are rejected."""
        with pytest.raises(WorkflowDefinitionError, match="requires a command"):
            StepsContext("job").run("")

    def test_invalid_env_name(self):
        """Test env keys must be valid variable names."""
        with pytest.raises(WorkflowDefinitionError, match="environment variable"):
            StepsContext("job").run("echo", env={"BAD-NAME": "x"})

    def test_add_returns_fragment_result(self):
        """Test add() passes the fragment's return value through."""
        ctx = StepsContext("job")

        def fragment(inner):
            inner.run("echo hi")
            return "artifact"

        assert ctx.add(fragment) == "artifact"
        assert len(ctx.steps) == 1


@pytest.mark.unit
class TestConditions:
    """Test when() blocks."""

    def test_when_sets_condition_on_nested_steps(self):
        """Test steps added inside when() carry its condition."""
        ctx = StepsContext("deploy")
        is_push = eq(github.event_name, "push")
        ctx.when(is_push, lambda c: c.run("netlify deploy --prod"))
        ctx.run("echo done")

        assert ctx.steps[0].condition == is_push
        assert ctx.steps[1].condition is None

    def test_nested_when_combines_conditions(self):
        """Test nested blocks join conditions with &&."""
        ctx = StepsContext("deploy")
        ctx.when(
            eq(github.event_name, "push"),
            lambda c: c.when(success(), lambda d: d.run("deploy")),
        )
        assert ctx.steps[0].condition.source == "(github.event_name == 'push') && success()"

    def test_when_requires_expression(self):
        """Test plain strings are not accepted as conditions."""
        with pytest.raises(WorkflowDefinitionError, match="Expression"):
            StepsContext("job").when("github.event_name == 'push'", lambda c: None)

    def test_condition_popped_after_error(self):
        """Test a failing fragment doesn't leak its condition."""
        ctx = StepsContext("job")

        def failing(inner):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            ctx.when(success(), failing)
        ctx.run("after")
        assert ctx.steps[0].condition is None


@pytest.mark.unit
class TestStepIds:
    """Test step ids and step outputs."""

    def test_unreferenced_steps_have_no_id(self):
        """Test ids are only assigned when something refers to the step."""
        ctx = StepsContext("job")
        ctx.run("yarn install")
        assert ctx.steps[0].id is None

    def test_outputs_assign_id_from_name(self):
        """Test referencing outputs derives an id from the step name."""
        ctx = StepsContext("job")
        ref = ctx.run("echo", name="Get yarn cache directory path")
        assert isinstance(ref.outputs.dir, Expression)
        assert str(ref.outputs.dir) == "${{ steps.get_yarn_cache_directory_path.outputs.dir }}"
        assert ctx.steps[0].id == "get_yarn_cache_directory_path"

    def test_derived_ids_are_unique(self):
        """Test equal names get numbered ids."""
        ctx = StepsContext("job")
        first = ctx.run("a", name="Cache")
        second = ctx.run("b", name="Cache")
        assert first.id == "cache"
        assert second.id == "cache_2"

    def test_explicit_id(self):
        """Test explicit ids are kept and checked for duplicates."""
        ctx = StepsContext("job")
        ref = ctx.run("a", id="yarn-cache")
        assert ref.id == "yarn-cache"
        assert ref.outcome.source == "steps.yarn-cache.outcome"
        with pytest.raises(WorkflowDefinitionError, match="duplicate step id"):
            ctx.run("b", id="yarn-cache")

    def test_slugify(self):
        """Test slugs are identifier-safe."""
        assert slugify("Save output: build") == "save_output_build"
        assert slugify("1st step") == "step_1st_step"
        assert slugify("!!!") == "step"
