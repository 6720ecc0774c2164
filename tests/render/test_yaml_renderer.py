"""Tests for rendering workflow trees to YAML."""

import pytest
import yaml

from workflowkit.builder import create_workflow
from workflowkit.builder.model import Job, Step, Strategy, Workflow
from workflowkit.core.exceptions import RenderError
from workflowkit.expression import eq, github, matrix, secrets
from workflowkit.render import render_header, render_workflow, workflow_to_dict, write_workflow
from workflowkit.render.yaml_renderer import job_to_dict, step_to_dict


def _sample_workflow():
    def define(ctx):
        ctx.set_workflow_name("Test")
        ctx.add_trigger("push", branches=["master"])
        ctx.add_trigger("pull_request", branches=["master"])

        def build(job):
            job.use("actions/checkout@v2")
            job.use(
                "actions/cache@v2",
                name="Enable Cache",
                with_={"path": "node_modules\npackages/*/node_modules", "key": "k"},
            )
            job.run("yarn build")
            return {"output": "build"}

        build_ref = ctx.add_job("build", build)

        def deploy(job):
            out = job.add_dependencies(build_ref)
            job.when(
                eq(github.event_name, "push"),
                lambda c: c.run(
                    "netlify deploy --prod",
                    env={"NETLIFY_AUTH_TOKEN": secrets.NETLIFY_AUTH_TOKEN},
                ),
            )
            job.run(f"echo {out.output}")

        ctx.add_job("deploy", deploy)

    return create_workflow(define)


@pytest.mark.unit
class TestDictConversion:
    """Test conversion of model objects to plain dicts."""

    def test_step_key_order(self):
        """Test step keys follow the documented order."""
        step = Step(name="Deploy", id="deploy", condition=eq(github.ref, "x"), run="echo", env={"A": "1"})
        assert list(step_to_dict(step)) == ["name", "id", "if", "run", "env"]

    def test_condition_is_bare(self):
        """Test if: gets the expression text without ${{ }}."""
        step = Step(condition=eq(github.event_name, "push"), run="echo")
        assert step_to_dict(step)["if"] == "github.event_name == 'push'"

    def test_with_expressions_converted(self):
        """Test expressions inside with: become ${{ }} strings."""
        step = Step(uses="a/b@v1", with_={"node-version": matrix.node})
        assert step_to_dict(step)["with"] == {"node-version": "${{ matrix.node }}"}

    def test_job_with_strategy(self):
        """Test strategy renders fail-fast before matrix."""
        job = Job(
            id="test",
            needs=["build"],
            strategy=Strategy(matrix={"node": ["12.x", "14.x"]}, fail_fast=False),
            steps=[Step(run="yarn test")],
        )
        data = job_to_dict(job)
        assert list(data) == ["needs", "runs-on", "strategy", "steps"]
        assert data["strategy"] == {"fail-fast": False, "matrix": {"node": ["12.x", "14.x"]}}

    def test_unsupported_value(self):
        """Test values that can't be represented raise RenderError."""
        step = Step(uses="a/b@v1", with_={"x": object()})
        with pytest.raises(RenderError):
            step_to_dict(step)

    def test_workflow_dict(self):
        """Test top-level keys and job outputs."""
        data = workflow_to_dict(_sample_workflow())
        assert list(data) == ["name", "on", "jobs"]
        assert data["jobs"]["build"]["outputs"] == {"output": "build"}
        assert data["jobs"]["deploy"]["needs"] == ["build"]


@pytest.mark.unit
class TestRenderWorkflow:
    """Test YAML text output."""

    def test_header(self):
        """Test the header names the source and the regenerate command."""
        header = render_header(source=".github/workflows-src/test.py")
        assert header.startswith("# This file is generated by WorkflowKit.")
        assert "# Source: .github/workflows-src/test.py" in header
        assert "# Regenerate with: wfgen generate" in header

    def test_header_without_source(self):
        """Test the source line is omitted when unknown."""
        assert "Source:" not in render_header()

    def test_output_parses_back(self):
        """Test rendered YAML loads to the same structure."""
        workflow = _sample_workflow()
        loaded = yaml.safe_load(render_workflow(workflow))
        assert loaded == workflow_to_dict(workflow)

    def test_multiline_strings_use_block_style(self):
        """Test multi-line values are written as literal blocks."""
        content = render_workflow(_sample_workflow())
        assert "path: |-\n" in content
        assert "\\n" not in content

    def test_expressions_in_output(self):
        """Test expressions and conditions appear verbatim."""
        content = render_workflow(_sample_workflow())
        assert "if: github.event_name == 'push'" in content
        assert "NETLIFY_AUTH_TOKEN: ${{ secrets.NETLIFY_AUTH_TOKEN }}" in content
        assert "run: echo ${{ needs.build.outputs.output }}" in content

    def test_no_anchors(self):
        """Test shared objects are duplicated, not aliased."""
        branches = ["master"]
        workflow = Workflow(
            name="W",
            triggers={"push": {"branches": branches}, "pull_request": {"branches": branches}},
            jobs={"a": Job(id="a", steps=[Step(run="true")])},
        )
        content = render_workflow(workflow)
        assert "&id" not in content
        assert "*id" not in content

    def test_rendering_is_deterministic(self):
        """Test the same tree renders to identical text."""
        assert render_workflow(_sample_workflow()) == render_workflow(_sample_workflow())

    def test_write_workflow(self, tmp_path):
        """Test write_workflow creates parent directories."""
        path = write_workflow(_sample_workflow(), tmp_path / ".github" / "workflows" / "test.yml")
        assert path.exists()
        assert yaml.safe_load(path.read_text())["name"] == "Test"
