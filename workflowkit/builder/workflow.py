"""
Workflow-level builder.

Example:
    >>> def define(ctx):
    ...     ctx.set_workflow_name("Test")
    ...     ctx.add_trigger("push", branches=["master"])
    ...     ctx.add_job("lint", lambda job: job.run("yarn lint"))
    >>> workflow = create_workflow(define)
"""

import logging
from collections.abc import Mapping as MappingABC
from typing import Any, Callable, Dict, Mapping, Optional

from workflowkit.builder.job import JobContext, JobRef
from workflowkit.builder.model import Job, Value, Workflow
from workflowkit.builder.steps import IDENTIFIER, StepRef, collect_env
from workflowkit.core.exceptions import DuplicateJobError, WorkflowDefinitionError
from workflowkit.expression import Expression

logger = logging.getLogger(__name__)

JobDefinition = Callable[[JobContext], Optional[Mapping[str, Value]]]


class WorkflowContext:
    """Context passed to a workflow definition callback."""

    def __init__(self):
        self.workflow = Workflow()

    def set_workflow_name(self, name: str) -> None:
        self.workflow.name = name

    def add_trigger(self, event: str, config: Optional[Mapping[str, Any]] = None, **options: Any) -> None:
        """
        Run the workflow on an event.

        Keyword options use underscores for dashes, so ``branches_ignore``
        becomes ``branches-ignore``. Repeated calls for one event merge.
        """
        merged: Dict[str, Any] = dict(config or {})
        for key, value in options.items():
            merged[key.replace("_", "-")] = value
        self.workflow.triggers.setdefault(event, {}).update(merged)

    def set_env(self, env: Mapping[str, Value]) -> None:
        self.workflow.env.update(collect_env(env))

    def add_job(self, job_id: str, define: JobDefinition, name: Optional[str] = None) -> JobRef:
        """
        Define a job by running ``define`` against a fresh JobContext.

        Args:
            job_id: Unique job id within the workflow
            define: Callback adding steps; may return the job's outputs
            name: Optional display name

        Returns:
            JobRef usable by later jobs' ``add_dependencies``
        """
        if not isinstance(job_id, str) or not IDENTIFIER.match(job_id):
            raise WorkflowDefinitionError(f"Invalid job id: {job_id!r}")
        if job_id in self.workflow.jobs:
            raise DuplicateJobError(job_id)

        job = Job(id=job_id, name=name)
        ctx = JobContext(job, owner=self)
        outputs = define(ctx)
        # One-line jobs (`lambda job: job.run(...)`) return the step they added
        if isinstance(outputs, StepRef):
            outputs = None
        job.steps = ctx.steps

        if not job.steps:
            raise WorkflowDefinitionError(f"Job '{job_id}' has no steps")

        if outputs is not None:
            if not isinstance(outputs, MappingABC):
                raise WorkflowDefinitionError(
                    f"Job '{job_id}' must return a mapping of outputs, got {type(outputs).__name__}"
                )
            for key, value in outputs.items():
                if not isinstance(value, (str, int, float, bool, Expression)):
                    raise WorkflowDefinitionError(
                        f"Job '{job_id}' output '{key}' has unsupported type {type(value).__name__}"
                    )
                job.outputs[key] = value

        self.workflow.jobs[job_id] = job
        logger.debug(f"Added job '{job_id}' with {len(job.steps)} step(s)")
        return JobRef(job, owner=self)


def create_workflow(define: Callable[[WorkflowContext], None]) -> Workflow:
    """Build a Workflow by running ``define`` against a WorkflowContext."""
    ctx = WorkflowContext()
    define(ctx)
    if not ctx.workflow.jobs:
        raise WorkflowDefinitionError("Workflow defines no jobs")
    if not ctx.workflow.triggers:
        raise WorkflowDefinitionError("Workflow defines no triggers")
    return ctx.workflow
