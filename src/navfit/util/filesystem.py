"""
Filesystem helpers shared by the scaffold and CLI commands.

Pages are written through a staging file and swapped into place, so a browser
or a concurrent scaffold run never sees a half-written document.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from filelock import FileLock

logger = logging.getLogger(__name__)

LOCK_TIMEOUT_SECONDS = 30


def lock_path_for(target: Path) -> Path:
    """Lock file that guards writes to ``target``."""
    return target.with_name(f".{target.name}.lock")


def _replace_atomically(target: Path, content: str, encoding: str) -> None:
    fd, staging = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    staging_path = Path(staging)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        staging_path.replace(target)
    finally:
        if staging_path.exists():
            try:
                staging_path.unlink()
            except OSError as exc:
                logger.debug("Could not remove staging file %s (%s)", staging_path, exc)


def write_text_file(path: Path | str, content: str, encoding: str = "utf-8", *, lock: bool = True) -> Path:
    """
    Write text to a file, creating parent directories as needed.

    With ``lock`` set, writers of the same file are serialized through a
    hidden lock file next to it.
    """
    target = Path(path).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    if not lock:
        _replace_atomically(target, content, encoding)
        return target
    with FileLock(str(lock_path_for(target)), timeout=LOCK_TIMEOUT_SECONDS):
        _replace_atomically(target, content, encoding)
    return target
