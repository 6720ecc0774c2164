"""
Validate command implementation.

Parses workflowkit.yaml and reports configuration problems.
"""

import logging

from workflowkit.cli.utils import (
    load_project_config,
    print_error,
    print_warning,
    resolve_config_file,
    resolve_project_root,
    safe_print,
)
from workflowkit.config.validation import ConfigValidator, format_validation_results
from workflowkit.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the validate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 when valid, 1 on errors)
    """
    project_root = resolve_project_root(args.project_root)
    config_file = resolve_config_file(project_root, args.config)
    if not config_file.exists() and not args.config:
        print_warning(f"No {config_file.name} found; validating the default configuration")

    try:
        config = load_project_config(args)
    except ConfigError as e:
        print_error("Invalid configuration", str(e))
        return 1

    result = ConfigValidator(project_root).validate(config)
    logger.debug(f"Validation: {len(result.errors)} error(s), {len(result.warnings)} warning(s)")
    safe_print(format_validation_results(result))
    return 0 if result.valid else 1


__all__ = ["run"]
