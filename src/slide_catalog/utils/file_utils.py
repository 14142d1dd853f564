"""File utility functions for atomic writes and safe path probing."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Union


def write_atomically(path: Path, content: str | bytes, mode: int | None = None) -> None:
    """Atomically write content to file using temp file + fsync + os.replace.

    Args:
        path: Target file path.
        content: Content to write (str or bytes).
        mode: Optional file permissions.

    Pattern:
        - Write to temp file in same directory.
        - Flush + fsync for durability.
        - Atomic rename via os.replace.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")

    try:
        if isinstance(content, bytes):
            with open(tmp, "wb") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
        else:
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())

        if mode is not None:
            os.chmod(tmp, mode)

        os.replace(tmp, path)
    except BaseException:
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            pass
        raise


@dataclass(frozen=True)
class Found:
    """The probed path exists."""

    path: Path
    is_dir: bool
    mtime_ms: float
    size: int


@dataclass(frozen=True)
class NotFound:
    """The probed path does not exist."""

    path: Path


@dataclass(frozen=True)
class ProbeError:
    """The probe failed for a reason other than absence (permissions, I/O)."""

    path: Path
    cause: OSError


PathProbe = Union[Found, NotFound, ProbeError]


def probe_path(path: Path) -> PathProbe:
    """Stat a path without conflating "missing" with "could not check"."""
    try:
        st = path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return NotFound(path)
    except OSError as e:
        return ProbeError(path, e)
    return Found(
        path=path,
        is_dir=stat.S_ISDIR(st.st_mode),
        mtime_ms=st.st_mtime * 1000,
        size=st.st_size,
    )
