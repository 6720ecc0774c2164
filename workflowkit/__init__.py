"""
WorkflowKit - declarative GitHub Actions workflows for JavaScript monorepos.

Workflows are described in Python with the builder DSL and rendered to
``.github/workflows/*.yml`` by the ``wfgen`` command.
"""

from workflowkit.builder import create_workflow, load_workflow_file
from workflowkit.render import render_workflow, write_workflow

__version__ = "0.1.0"

__all__ = ["create_workflow", "load_workflow_file", "render_workflow", "write_workflow", "__version__"]
