"""File-system helpers used by the generator.

Blocking calls are pushed to worker threads one file at a time, so a
cancellation lands between two files rather than somewhere inside a large
tree copy.
"""

from __future__ import annotations

import asyncio
import shutil
from collections.abc import Iterable
from pathlib import Path

from walrus_starter.config import DEFAULT_EXCLUDE
from walrus_starter.models import EnvCopyResult

ENV_EXAMPLE = ".env.example"
ENV_FILE = ".env"


async def copy_directory(
    src: str | Path,
    dest: str | Path,
    exclude: Iterable[str] = DEFAULT_EXCLUDE,
) -> int:
    """Recursively copy *src* into *dest*, skipping entries named in *exclude*.

    Exclusion matches entry names at every depth.  Existing files in *dest*
    are overwritten.

    Returns:
        Number of files copied.
    """
    excluded = frozenset(exclude)
    src_path, dest_path = Path(src), Path(dest)
    await asyncio.to_thread(dest_path.mkdir, parents=True, exist_ok=True)

    files_created = 0
    for entry in sorted(src_path.iterdir()):
        if entry.name in excluded:
            continue
        target = dest_path / entry.name
        if entry.is_dir():
            files_created += await copy_directory(entry, target, excluded)
        else:
            await asyncio.to_thread(shutil.copy2, entry, target)
            files_created += 1
    return files_created


def is_directory_empty(path: str | Path) -> bool:
    """Return ``True`` if *path* does not exist or has no entries."""
    dir_path = Path(path)
    if not dir_path.exists():
        return True
    if not dir_path.is_dir():
        return False
    return next(dir_path.iterdir(), None) is None


def ensure_directory(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist."""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def copy_env_file(target_dir: str | Path) -> EnvCopyResult:
    """Create ``.env`` from ``.env.example`` unless ``.env`` already exists.

    The copy is byte-for-byte.  Calling this again never touches an existing
    ``.env``.
    """
    base = Path(target_dir)
    example = base / ENV_EXAMPLE
    env = base / ENV_FILE

    if not example.is_file():
        return EnvCopyResult(created=False, reason="no-source")
    if env.exists():
        return EnvCopyResult(created=False, reason="already-exists")

    env.write_bytes(example.read_bytes())
    return EnvCopyResult(created=True)
