"""
File readiness checks for FileSorter.

A new file is ready once it can be opened with an exclusive lock and has a
non-zero length. Downloads and copies usually create the file first and
fill it afterwards, so an empty file is treated as still being written.
"""

import os
import time

from filesorter.exceptions import FileNotReadyError
from filesorter.logger import get_logger

if os.name == 'posix':
    import fcntl

DEFAULT_TIMEOUT_MS = 10000
DEFAULT_POLL_INTERVAL_MS = 200


def _lock_exclusive(f):
    """Take a non-blocking exclusive lock on an open file.

    On POSIX this is an advisory flock. On Windows a writer holding the file
    without read sharing already makes open() fail, so no extra lock is taken.

    Raises:
        OSError: If another handle holds a conflicting lock.
    """
    if os.name == 'posix':
        fcntl.flock(f.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)


def _unlock(f):
    if os.name == 'posix':
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)


def open_exclusive_size(path):
    """Open a file for exclusive reading and return its current length.

    Args:
        path: Absolute path to the file.

    Returns:
        int: File size in bytes.

    Raises:
        OSError: If the file cannot be opened or locked.
    """
    with open(path, 'rb') as f:
        _lock_exclusive(f)
        try:
            return os.fstat(f.fileno()).st_size
        finally:
            _unlock(f)


def wait_until_ready(path, timeout_ms=DEFAULT_TIMEOUT_MS,
                     poll_interval_ms=DEFAULT_POLL_INTERVAL_MS,
                     sleep=time.sleep, clock=time.monotonic):
    """Block until a file is fully written or the timeout passes.

    Polls every poll_interval_ms. There are two ways to give up:

    - The file stays locked (or unreadable) past the timeout. This raises
      FileNotReadyError chained to the last access error.
    - The file opens fine but stays empty past the timeout. This returns
      False without raising.

    Callers should treat both as "not ready".

    Args:
        path: Absolute path to the file.
        timeout_ms: Give up after this many milliseconds.
        poll_interval_ms: Delay between attempts in milliseconds.
        sleep: Sleep function, injectable for tests.
        clock: Monotonic clock in seconds, injectable for tests.

    Returns:
        bool: True when the file is ready, False when it stayed empty.

    Raises:
        FileNotReadyError: If the file stayed locked or vanished.
    """
    logger = get_logger()
    filename = os.path.basename(path)
    start = clock()
    poll_seconds = poll_interval_ms / 1000.0
    attempt = 0

    while True:
        attempt += 1
        try:
            size = open_exclusive_size(path)
        except FileNotFoundError as e:
            raise FileNotReadyError(path, timeout_ms) from e
        except OSError as e:
            elapsed_ms = (clock() - start) * 1000
            if elapsed_ms >= timeout_ms:
                raise FileNotReadyError(path, timeout_ms) from e
            logger.debug(f"File locked (attempt {attempt}): {filename}: {e}")
            sleep(poll_seconds)
            continue

        if size > 0:
            if attempt > 1:
                logger.debug(f"File ready after {attempt} attempts: {filename}")
            return True

        elapsed_ms = (clock() - start) * 1000
        if elapsed_ms >= timeout_ms:
            logger.debug(f"File still empty after {timeout_ms}ms, giving up: {filename}")
            return False
        logger.debug(f"File is empty, may still be copying (attempt {attempt}): {filename}")
        sleep(poll_seconds)
