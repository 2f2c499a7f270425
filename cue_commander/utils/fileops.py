"""File operations for config and CUE sheet output."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def secure_mkdir(path: Path) -> None:
    """Create *path* (and missing parents) readable by the owner only.

    An existing directory is chmod-ed to 0o700 as well, so only call this
    on directories the program owns, such as the config directory.
    """
    path.mkdir(mode=0o700, parents=True, exist_ok=True)
    path.chmod(0o700)


def atomic_write(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write content to *path* atomically.

    Uses a temporary file in the same directory and an atomic rename
    so readers never see a partially-written file. An existing file keeps
    its permission bits.
    """
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp-", suffix=".tmp")
    try:
        # The file object owns fd from here on, so it is closed on any error
        with open(fd, "w", encoding=encoding, newline="") as f:
            if path.exists():
                os.fchmod(f.fileno(), path.stat().st_mode & 0o777)
            else:
                umask = os.umask(0)
                os.umask(umask)
                os.fchmod(f.fileno(), 0o666 & ~umask)
            f.write(content)
        Path(tmp_path).replace(path)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise
