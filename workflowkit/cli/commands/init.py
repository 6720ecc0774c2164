"""
Init command implementation.

Writes a workflowkit.yaml holding the default pipeline settings.
"""

import logging
from pathlib import Path

import yaml

from workflowkit.cli.utils import (
    format_success_message,
    print_error,
    resolve_config_file,
    resolve_project_root,
)
from workflowkit.config.parser import PipelineConfig, config_to_data
from workflowkit.core.filesystem import atomic_write

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the init command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    logger.info("Initializing WorkflowKit")
    logger.debug(f"Arguments: {args}")

    # 1. Validation
    project_root = resolve_project_root(args.project_root)
    if not project_root.is_dir():
        print_error("Project root does not exist", f"Project root: {project_root}")
        return 1

    config_file = resolve_config_file(project_root, args.config)
    if config_file.exists() and not getattr(args, "force", False):
        logger.error("Project already initialized")
        print_error(
            "Project already initialized",
            f"Configuration file exists: {config_file}\n  Use --force to reinitialize",
        )
        return 1

    # 2. Generate configuration
    content = _render_default_config()

    # 3. Write configuration
    try:
        atomic_write(config_file, content)
    except OSError as e:
        print_error("Failed to write configuration", str(e))
        return 1
    logger.debug(f"Wrote {config_file}")

    print(
        format_success_message(
            "WorkflowKit initialized",
            {"Configuration": config_file},
            next_steps=[
                "Review workflowkit.yaml",
                "Run 'wfgen generate' to write .github/workflows",
            ],
        )
    )
    return 0


def _render_default_config() -> str:
    data = config_to_data(PipelineConfig())
    header = "# WorkflowKit configuration\n"
    return header + yaml.safe_dump(data, sort_keys=False, default_flow_style=False)


__all__ = ["run"]
