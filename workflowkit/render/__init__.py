"""
Serialization of workflow trees to GitHub Actions YAML.
"""

from workflowkit.render.yaml_renderer import (
    WorkflowDumper,
    workflow_to_dict,
    job_to_dict,
    step_to_dict,
    render_header,
    render_workflow,
    write_workflow,
)

__all__ = [
    "WorkflowDumper",
    "workflow_to_dict",
    "job_to_dict",
    "step_to_dict",
    "render_header",
    "render_workflow",
    "write_workflow",
]
