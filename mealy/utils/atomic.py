"""Atomic file writes for rewriting machine documents in place."""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from mealy.utils.logging import get_logger

logger = get_logger("utils.atomic")


class AtomicWriteError(Exception):
    """Raised when an atomic write operation fails."""

    pass


@contextmanager
def atomic_write(
    path: Path,
    encoding: str = "utf-8",
) -> Generator[Any, None, None]:
    """
    Context manager for atomic text file writes.

    Writes to a temporary file in the same directory, then renames it over
    the target. On any error the temp file is removed and the original file
    is left untouched.

    Args:
        path: Target file path
        encoding: Text encoding

    Yields:
        File handle for writing

    Raises:
        AtomicWriteError: If the atomic write fails
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_name = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
    )

    temp_path = Path(temp_name)
    success = False

    try:
        os.close(fd)

        with open(temp_path, "w", encoding=encoding, newline="\n") as f:
            yield f

        temp_path.replace(path)
        success = True

        logger.debug("atomic_write_success", path=str(path))

    except Exception as e:
        logger.error("atomic_write_failed", path=str(path), error=str(e))
        raise AtomicWriteError(f"Failed to atomically write {path}: {e}") from e

    finally:
        if not success and temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass


def atomic_write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Atomically write text content to a file.

    Args:
        path: Target file path
        content: Text content to write
        encoding: Text encoding
    """
    with atomic_write(path, encoding=encoding) as f:
        f.write(content)
