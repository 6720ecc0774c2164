"""
Check command implementation.

Fails when committed workflow files do not match what generate would write.
"""

import logging

from workflowkit.ci.generator import WorkflowGenerator
from workflowkit.cli.utils import (
    display_path,
    load_project_config,
    print_error,
    resolve_project_root,
)
from workflowkit.core.exceptions import WorkflowKitError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the check command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 when up to date, 1 otherwise)
    """
    project_root = resolve_project_root(args.project_root)

    try:
        config = load_project_config(args)
        stale = WorkflowGenerator(project_root, config).check(getattr(args, "only", None))
    except WorkflowKitError as e:
        print_error("Failed to check workflows", str(e))
        return 1

    if not stale:
        print("✓ Workflows are up to date")
        return 0

    for item in stale:
        print_error(f"{display_path(item.path, project_root)} is {item.reason}")
    print("Run 'wfgen generate' to update the workflow files")
    return 1


__all__ = ["run"]
