"""
Project-level locking for WorkflowKit.

Two ``wfgen generate`` processes (an editor hook and a pre-commit hook, say)
must not interleave writes into ``.github/workflows``. Locking uses the
``filelock`` library for cross-platform advisory locks.

Example:
    >>> from workflowkit.core.locking import project_lock
    >>> with project_lock(Path('/path/to/project')):
    ...     write_workflow(...)
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from workflowkit.core.exceptions import LockTimeout

logger = logging.getLogger(__name__)

LOCK_DIR_NAME = ".workflowkit"
LOCK_FILE_NAME = "generate.lock"


def get_lock_path(project_root: Path) -> Path:
    """Return the lock file path for a project."""
    return Path(project_root) / LOCK_DIR_NAME / LOCK_FILE_NAME


@contextmanager
def project_lock(project_root: Path, timeout: float = 10):
    """
    Acquire the generation lock for a project.

    Args:
        project_root: Project root directory
        timeout: Maximum wait time in seconds (default: 10)

    Yields:
        None

    Raises:
        LockTimeout: If lock can't be acquired within timeout
    """
    lock_path = get_lock_path(project_root)
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    lock = FileLock(str(lock_path), timeout=timeout)

    try:
        with lock:
            logger.debug(f"Acquired project lock: {lock_path}")
            yield
            logger.debug(f"Released project lock: {lock_path}")
    except Timeout as e:
        logger.error(f"Could not acquire project lock after {timeout}s.")
        raise LockTimeout(
            f"Could not acquire project lock after {timeout}s. "
            "Another wfgen process may be generating workflows."
        ) from e
