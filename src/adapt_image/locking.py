"""
Per-file generation lock shared by threads and processes.

The lock is an fcntl.flock() on a lock file named after the md5 of the
protected path. Acquisition never blocks: the caller learns whether it owns
the lock and decides whether to retry. The lock file is removed on release.
"""

from __future__ import annotations

import fcntl
import hashlib
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from loguru import logger


def lock_path_for(target: str | Path, lock_dir: str | Path) -> Path:
    digest = hashlib.md5(str(target).encode("utf-8")).hexdigest()
    return Path(lock_dir) / f"{digest}.lock"


@contextmanager
def cache_lock(target: str | Path, lock_dir: str | Path) -> Iterator[bool]:
    """Try to lock `target` exclusively.

    Yields True when the lock was acquired, False when somebody else holds
    it. Whatever happens inside the block, an acquired lock is released and
    its lock file removed.
    """
    lock_path = lock_path_for(target, lock_dir)
    Path(lock_dir).mkdir(parents=True, exist_ok=True)
    fd = os.open(lock_path, os.O_RDWR | os.O_CREAT, 0o644)
    acquired = False
    try:
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
            acquired = True
        except BlockingIOError:
            logger.debug(f"Lock {lock_path} for {target} is held by another worker")

        if acquired and not _is_current(fd, lock_path):
            # the previous owner removed the file between our open() and flock()
            logger.debug(f"Lock file {lock_path} was replaced while acquiring it")
            fcntl.flock(fd, fcntl.LOCK_UN)
            acquired = False

        try:
            yield acquired
        finally:
            if acquired:
                # unlink while still holding the lock, so no one can lock the old inode afterwards
                try:
                    os.unlink(lock_path)
                except FileNotFoundError:
                    pass
                fcntl.flock(fd, fcntl.LOCK_UN)
    finally:
        os.close(fd)


def _is_current(fd: int, lock_path: Path) -> bool:
    try:
        on_disk = os.stat(lock_path)
    except FileNotFoundError:
        return False
    held = os.fstat(fd)
    return (held.st_dev, held.st_ino) == (on_disk.st_dev, on_disk.st_ino)
