"""
File system helpers for WorkflowKit.

Generated workflow files are always written through :func:`atomic_write` so a
CI provider (or a developer's editor) never observes a half-written file.
"""

import logging
import tempfile
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


def normalize_path(path: Union[str, Path]) -> Path:
    """
    Expand ``~`` and resolve a path to an absolute one.

    Args:
        path: Path to normalize

    Returns:
        Absolute, resolved Path
    """
    return Path(path).expanduser().resolve()


def atomic_write(file_path: Union[str, Path], content: str, encoding: str = "utf-8") -> None:
    """
    Write a text file atomically using temp file + rename.

    If the write fails, the original file (if any) remains unchanged.

    Args:
        file_path: Path to write to
        content: Text content
        encoding: Text encoding

    Example:
        >>> atomic_write('.github/workflows/test.yml', 'name: Test\\n')
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file in the same directory keeps the rename on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        # newline="" keeps "\n" line endings on every platform
        with open(temp_fd, "w", encoding=encoding, newline="") as f:
            f.write(content)
        temp_path.replace(file_path)
        logger.debug(f"Wrote {len(content)} characters to {file_path}")
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise


def read_text_if_exists(file_path: Union[str, Path], encoding: str = "utf-8") -> Optional[str]:
    """Return the file's text, or None when it does not exist."""
    file_path = Path(file_path)
    if not file_path.is_file():
        return None
    return file_path.read_text(encoding=encoding)
