"""
Loading user-authored workflow sources.

A workflow source is a Python file (conventionally under
``.github/workflows-src/``) that defines either:

  - ``workflow = create_workflow(...)``, or
  - ``def workflow() -> Workflow``

The generated file takes the source's stem: ``workflows-src/test.py`` renders
to ``workflows/test.yml``.
"""

import logging
import runpy
from pathlib import Path
from typing import List, Union

from workflowkit.builder.model import Workflow
from workflowkit.core.exceptions import WorkflowKitError, WorkflowLoadError
from workflowkit.core.filesystem import normalize_path

logger = logging.getLogger(__name__)


def discover_workflow_sources(source_dir: Union[str, Path]) -> List[Path]:
    """
    List workflow sources in a directory.

    Files starting with ``_`` are helpers shared between sources and are skipped.

    Args:
        source_dir: Directory to scan

    Returns:
        Sorted list of source paths (empty if the directory doesn't exist)
    """
    source_dir = Path(source_dir)
    if not source_dir.is_dir():
        logger.debug(f"No workflow source directory: {source_dir}")
        return []
    return sorted(p for p in source_dir.glob("*.py") if not p.name.startswith("_"))


def load_workflow_file(path: Union[str, Path]) -> Workflow:
    """
    Execute a workflow source and return its Workflow.

    Args:
        path: Path to a ``.py`` workflow source

    Returns:
        The Workflow the source defines

    Raises:
        WorkflowLoadError: If the file is missing, fails to execute or defines no workflow
    """
    wf_path = normalize_path(path)
    if not wf_path.exists():
        raise WorkflowLoadError(f"Workflow source not found: {wf_path}")
    if wf_path.suffix != ".py":
        raise WorkflowLoadError(f"Workflow source must be a .py file, got: {wf_path.name}")

    logger.debug(f"Loading workflow source {wf_path}")
    try:
        namespace = runpy.run_path(str(wf_path), run_name=f"workflowkit_src_{wf_path.stem}")
    except WorkflowKitError as e:
        raise WorkflowLoadError(f"{wf_path.name}: {e}") from e
    except Exception as e:
        raise WorkflowLoadError(f"{wf_path.name} failed to execute: {e}") from e

    if "workflow" not in namespace:
        raise WorkflowLoadError(
            f"{wf_path.name} must define 'workflow' "
            "(a create_workflow(...) result or a function returning one)"
        )

    workflow = namespace["workflow"]
    if callable(workflow) and not isinstance(workflow, Workflow):
        try:
            workflow = workflow()
        except WorkflowKitError as e:
            raise WorkflowLoadError(f"{wf_path.name}: {e}") from e
        except Exception as e:
            raise WorkflowLoadError(f"{wf_path.name}: workflow() failed: {e}") from e

    if not isinstance(workflow, Workflow):
        raise WorkflowLoadError(
            f"{wf_path.name}: 'workflow' must be a Workflow, got {type(workflow).__name__}"
        )
    return workflow
