"""Exclusive lock around the load-mutate-save window of mutating commands.

Two shells running ``jump chdir`` at the same moment would otherwise each load
the database, add their own visit, and the last writer would drop the other's
update. Mutating commands hold an ``flock`` on a sibling lock file for the
whole sequence; read-only commands never take it.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

try:
    import fcntl
except ImportError:
    # Windows has no fcntl; mutations run unlocked there
    fcntl = None

logger = logging.getLogger(__name__)


@contextmanager
def exclusive_lock(path: Path) -> Iterator[Path]:
    """Hold an exclusive flock on ``path`` for the duration of the context.

    Blocks until the lock is available. The lock file is created if needed
    and left in place afterwards; only the lock itself is released.

    Args:
        path: Lock file to acquire

    Yields:
        The lock file path
    """
    if fcntl is None:
        logger.debug(f"File locking unavailable on this platform, not locking {path}")
        yield path
        return

    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    try:
        fd = os.open(str(path), os.O_RDWR | os.O_CREAT, 0o644)
        fcntl.flock(fd, fcntl.LOCK_EX)
        logger.debug(f"Acquired lock {path}")

        yield path

    finally:
        if fd is not None:
            fcntl.flock(fd, fcntl.LOCK_UN)
            os.close(fd)
            logger.debug(f"Released lock {path}")
