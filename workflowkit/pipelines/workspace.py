"""
Monorepo layout discovery.

Only packages that have a ``src`` directory take part in the build cache;
anything else under ``packages/`` (docs, fixtures, the website's static
assets) is ignored.
"""

import logging
from pathlib import Path
from typing import List, Union

from workflowkit.core.exceptions import WorkspaceError

logger = logging.getLogger(__name__)


def discover_packages(packages_dir: Union[str, Path]) -> List[str]:
    """
    List the buildable packages of a monorepo.

    Args:
        packages_dir: The monorepo's ``packages`` directory

    Returns:
        Sorted names of the children that contain a ``src`` directory

    Raises:
        WorkspaceError: If packages_dir doesn't exist or isn't a directory
    """
    packages_dir = Path(packages_dir)
    if not packages_dir.is_dir():
        raise WorkspaceError(f"Packages directory not found: {packages_dir}")

    names = []
    for entry in packages_dir.iterdir():
        if (entry / "src").is_dir():
            names.append(entry.name)
        else:
            logger.debug(f"Skipping {entry.name}: no src directory")

    names.sort()
    logger.debug(f"Discovered {len(names)} package(s) in {packages_dir}")
    return names
