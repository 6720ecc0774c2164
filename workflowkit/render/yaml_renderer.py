"""
Rendering workflow trees to GitHub Actions YAML.

The tree is first converted to plain dicts in the key order GitHub's own
documentation uses, then dumped with PyYAML. A Jinja2 template supplies the
"generated file" header.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from jinja2 import Environment, FileSystemLoader, TemplateError

from workflowkit.builder.model import Job, Step, Strategy, Workflow
from workflowkit.core.exceptions import RenderError
from workflowkit.core.filesystem import atomic_write
from workflowkit.expression import Expression

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
HEADER_TEMPLATE = "header.yml.j2"
DEFAULT_COMMAND = "wfgen generate"


class WorkflowDumper(yaml.SafeDumper):
    """SafeDumper tuned for workflow files."""

    def ignore_aliases(self, data: Any) -> bool:
        return True

    def increase_indent(self, flow: bool = False, indentless: bool = False):
        # Indent list items under their key, as GitHub's examples do
        return super().increase_indent(flow, False)


def _represent_str(dumper: yaml.SafeDumper, data: str):
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


WorkflowDumper.add_representer(str, _represent_str)


def _value(value: Any) -> Any:
    """Convert expressions (recursively) into their ``${{ }}`` strings."""
    if isinstance(value, Expression):
        return str(value)
    if isinstance(value, (str, bool, int, float)) or value is None:
        return value
    if isinstance(value, (list, tuple)):
        return [_value(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _value(v) for k, v in value.items()}
    raise RenderError(f"Cannot render value of type {type(value).__name__}: {value!r}")


def _condition(condition: Expression) -> str:
    # `if:` takes bare expression text; ${{ }} is optional there
    return condition.source


def step_to_dict(step: Step) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if step.name is not None:
        data["name"] = step.name
    if step.id is not None:
        data["id"] = step.id
    if step.condition is not None:
        data["if"] = _condition(step.condition)
    if step.uses is not None:
        data["uses"] = step.uses
        if step.with_:
            data["with"] = _value(step.with_)
    if step.run is not None:
        data["run"] = step.run
        if step.shell is not None:
            data["shell"] = step.shell
    if step.env:
        data["env"] = _value(step.env)
    if step.continue_on_error is not None:
        data["continue-on-error"] = step.continue_on_error
    return data


def strategy_to_dict(strategy: Strategy) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if strategy.fail_fast is not None:
        data["fail-fast"] = strategy.fail_fast
    if strategy.max_parallel is not None:
        data["max-parallel"] = strategy.max_parallel
    data["matrix"] = _value(strategy.matrix)
    return data


def job_to_dict(job: Job) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if job.name is not None:
        data["name"] = job.name
    if job.needs:
        data["needs"] = list(job.needs)
    data["runs-on"] = job.runs_on
    if job.condition is not None:
        data["if"] = _condition(job.condition)
    if job.timeout_minutes is not None:
        data["timeout-minutes"] = job.timeout_minutes
    if job.strategy is not None:
        data["strategy"] = strategy_to_dict(job.strategy)
    if job.env:
        data["env"] = _value(job.env)
    if job.outputs:
        data["outputs"] = _value(job.outputs)
    data["steps"] = [step_to_dict(s) for s in job.steps]
    return data


def workflow_to_dict(workflow: Workflow) -> Dict[str, Any]:
    """
    Convert a Workflow into the mapping GitHub Actions reads.

    Args:
        workflow: Workflow tree

    Returns:
        Dict ready for YAML serialization
    """
    data: Dict[str, Any] = {}
    if workflow.name is not None:
        data["name"] = workflow.name
    data["on"] = _value(workflow.triggers)
    if workflow.env:
        data["env"] = _value(workflow.env)
    data["jobs"] = {job_id: job_to_dict(job) for job_id, job in workflow.jobs.items()}
    return data


def _jinja_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_header(source: Optional[str] = None, command: str = DEFAULT_COMMAND) -> str:
    """Render the comment block placed at the top of generated files."""
    try:
        template = _jinja_env().get_template(HEADER_TEMPLATE)
        return template.render(source=source, command=command)
    except TemplateError as e:
        raise RenderError(f"Failed to render header template: {e}") from e


def render_workflow(
    workflow: Workflow,
    source: Optional[str] = None,
    command: str = DEFAULT_COMMAND,
) -> str:
    """
    Render a Workflow to YAML text, including the generated-file header.

    Args:
        workflow: Workflow tree
        source: Where the workflow was defined (shown in the header)
        command: Command that regenerates the file (shown in the header)

    Returns:
        YAML document text ending with a newline
    """
    data = workflow_to_dict(workflow)
    try:
        body = yaml.dump(
            data,
            Dumper=WorkflowDumper,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
            width=4096,
        )
    except yaml.YAMLError as e:
        raise RenderError(f"Failed to serialize workflow '{workflow.name}': {e}") from e

    return render_header(source=source, command=command) + "\n" + body


def write_workflow(
    workflow: Workflow,
    path: Union[str, Path],
    source: Optional[str] = None,
    command: str = DEFAULT_COMMAND,
) -> Path:
    """Render and atomically write a workflow file; returns its path."""
    path = Path(path)
    atomic_write(path, render_workflow(workflow, source=source, command=command))
    logger.info(f"Workflow '{workflow.name}' written to {path}")
    return path
