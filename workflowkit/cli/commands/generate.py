"""
Generate command implementation.

Renders the built-in pipeline and every workflow source into .github/workflows.
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
    Run the generate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    project_root = resolve_project_root(args.project_root)
    only = getattr(args, "only", None)

    try:
        config = load_project_config(args)
        generator = WorkflowGenerator(project_root, config)

        if getattr(args, "dry_run", False):
            for item in generator.plan(only):
                print(f"--- {display_path(item.path, project_root)}")
                print(item.content, end="")
            return 0

        written = generator.generate(only)
    except WorkflowKitError as e:
        logger.debug(f"Generation failed: {e!r}")
        print_error("Failed to generate workflows", str(e))
        return 1

    for path in written.values():
        print(f"Wrote {display_path(path, project_root)}")
    return 0


__all__ = ["run"]
