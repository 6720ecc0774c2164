"""
Workflow builder DSL.

Workflows are defined with nested callbacks: a workflow callback adds jobs,
each job callback adds steps and may declare dependencies and a build matrix.
The result is a plain dataclass tree (see ``model``) that the renderer
serializes.
"""

from workflowkit.builder.model import Job, Step, Strategy, Workflow
from workflowkit.builder.steps import Steps, StepsContext, StepRef, StepOutputs
from workflowkit.builder.job import JobContext, JobRef, JobOutputs, MatrixValues
from workflowkit.builder.workflow import WorkflowContext, create_workflow
from workflowkit.builder.loader import discover_workflow_sources, load_workflow_file

__all__ = [
    "Job",
    "Step",
    "Strategy",
    "Workflow",
    "Steps",
    "StepsContext",
    "StepRef",
    "StepOutputs",
    "JobContext",
    "JobRef",
    "JobOutputs",
    "MatrixValues",
    "WorkflowContext",
    "create_workflow",
    "discover_workflow_sources",
    "load_workflow_file",
]
