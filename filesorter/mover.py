"""
File movement logic for FileSorter.

Moves a file to an already resolved destination path without ever
replacing an existing file.
"""

import errno
import os
import shutil

from filesorter.exceptions import MoveError
from filesorter.logger import get_logger

# link() failures that mean "hard links not possible here", not "move failed"
_NO_LINK_ERRNOS = {errno.EXDEV, errno.EPERM, errno.EMLINK, errno.ENOTSUP, errno.EOPNOTSUPP}


def move_file(source, destination):
    """Move a file to destination, refusing to overwrite.

    On the same filesystem the file is hard-linked to the destination and
    then unlinked from the source; link() fails atomically if the
    destination already exists. Across filesystems (or where hard links are
    unsupported) it falls back to shutil.move after an existence check.

    Args:
        source: Absolute path to the source file.
        destination: Absolute destination path, parent directory must exist.

    Returns:
        str: The destination path.

    Raises:
        MoveError: If the destination exists or the filesystem operation fails.
    """
    logger = get_logger()

    if os.path.lexists(destination):
        raise MoveError(source, destination, "destination already exists")

    try:
        os.link(source, destination)
    except FileExistsError as e:
        raise MoveError(source, destination, "destination already exists") from e
    except OSError as e:
        if e.errno not in _NO_LINK_ERRNOS:
            raise MoveError(source, destination, e.strerror or str(e)) from e
        logger.debug(f"Hard link not possible ({e.strerror}), copying instead: {source}")
        _copy_move(source, destination)
        return destination

    try:
        os.unlink(source)
    except OSError as e:
        # Keep a single copy: undo the link so the source stays authoritative
        try:
            os.unlink(destination)
        except OSError:
            logger.warning(f"Could not remove partial destination: {destination}")
        raise MoveError(source, destination, e.strerror or str(e)) from e

    return destination


def _copy_move(source, destination):
    if os.path.lexists(destination):
        raise MoveError(source, destination, "destination already exists")
    try:
        shutil.move(source, destination)
    except OSError as e:
        raise MoveError(source, destination, e.strerror or str(e)) from e
