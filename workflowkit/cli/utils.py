"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from workflowkit.config.parser import CONFIG_FILE_NAME, PipelineConfig, load_config

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def resolve_project_root(path: Optional[Path] = None) -> Path:
    """
    Resolve project root directory.

    Args:
        path: Optional path (defaults to current directory)

    Returns:
        Resolved absolute path
    """
    if path is None:
        path = Path.cwd()
    return Path(path).resolve()


def resolve_config_file(project_root: Path, config: Optional[Path] = None) -> Path:
    """Return the configuration file path selected by --config or the default."""
    if config is not None:
        return Path(config).resolve()
    return project_root / CONFIG_FILE_NAME


def load_project_config(args) -> PipelineConfig:
    """
    Load configuration for the project named by parsed arguments.

    Args:
        args: Parsed arguments with project_root and config fields

    Returns:
        Parsed configuration (defaults when no file exists)

    Raises:
        ConfigError: If the configuration file is invalid
    """
    project_root = resolve_project_root(args.project_root)
    config_path = Path(args.config).resolve() if args.config else None
    logger.debug(f"Loading configuration for {project_root}")
    return load_config(project_root, config_path)


# ============================================================================
# Output Formatting
# ============================================================================


def format_success_message(
    title: str,
    details: Dict[str, Any],
    next_steps: Optional[list] = None,
    width: int = 70,
) -> str:
    """
    Format a standardized success message.

    Args:
        title: Success message title
        details: Key-value pairs to display
        next_steps: Optional list of next step instructions
        width: Width of message box

    Returns:
        Formatted message string
    """
    lines = []
    lines.append("=" * width)
    lines.append(title)
    lines.append("=" * width)
    lines.append("")

    for key, value in details.items():
        lines.append(f"{key}: {value}")

    if next_steps:
        lines.append("")
        lines.append("Next steps:")
        for step in next_steps:
            lines.append(f"  {step}")

    lines.append("")
    return "\n".join(lines)


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def print_warning(message: str):
    """Print warning message to stderr."""
    print(f"WARNING: {message}", file=sys.stderr)


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        safe_message = message.replace("✓", "[OK]").replace("→", "->")
        print(safe_message, file=file)


def display_path(path: Path, project_root: Path) -> str:
    """Return path relative to project_root when possible, for messages."""
    try:
        return Path(path).resolve().relative_to(project_root.resolve()).as_posix()
    except ValueError:
        return str(path)
