"""Blocking filesystem helpers used by the engines through asyncio.to_thread."""

import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Optional


def is_regular_file(path: Path) -> bool:
    """Stat path (following symlinks) and report whether it is a regular file.

    Raises:
        OSError: If path cannot be stat'ed
    """
    return stat.S_ISREG(os.stat(path).st_mode)


def exists_as_regular_file(path: Path) -> bool:
    """Like is_regular_file, but a missing path is simply False."""
    try:
        return is_regular_file(path)
    except FileNotFoundError:
        return False


def write_atomic(path: Path, content: bytes, mode_source: Optional[Path] = None) -> None:
    """Write bytes atomically (temp file + rename).

    Symlinks are followed: the file the link points at is replaced and the
    link itself is kept. The mode is copied from the existing file, or from
    mode_source when path does not exist yet. A failed write leaves any
    existing file at path unchanged.

    Args:
        path: Destination file
        content: Bytes to write
        mode_source: File to copy permissions from if path does not exist
    """
    target = Path(os.path.realpath(path))

    # Unique temp name in the target directory, so the rename stays on one filesystem
    fd, temp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(content)

        if target.exists():
            shutil.copymode(target, temp_path)
        elif mode_source is not None:
            shutil.copymode(mode_source, temp_path)

        temp_path.replace(target)
    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise
