"""
File sorting pipeline for FileSorter.

Handles one "file created" notification at a time:
wait until ready -> classify -> resolve destination -> move.
Each call returns a SortResult; deciding whether a failure should stop
the process is left to the caller.
"""

import enum
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from filesorter.classifier import Category, ExtensionClassifier, get_extension
from filesorter.exceptions import FileNotReadyError
from filesorter.logger import get_logger, log_sort_result
from filesorter.mover import move_file
from filesorter.readiness import DEFAULT_POLL_INTERVAL_MS, DEFAULT_TIMEOUT_MS, wait_until_ready
from filesorter.resolver import PathResolver


class SortAction(enum.Enum):
    MOVED = 'MOVED'
    SKIPPED_NO_NAME = 'SKIPPED (no name)'
    SKIPPED_NOT_READY = 'SKIPPED (not ready)'
    FAILED = 'FAILED'


@dataclass
class SortResult:
    """Outcome of handling a single file event."""

    action: SortAction
    source: str
    name: Optional[str] = None
    category: Optional[Category] = None
    destination: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self):
        return self.action is SortAction.MOVED

    @property
    def is_fatal(self):
        """Only move/resolve failures escalate; skips are recoverable."""
        return self.action is SortAction.FAILED


def file_created_at(path):
    """Return the creation time of a file as a local datetime.

    Uses st_birthtime where the platform reports it, st_ctime on Windows
    (creation time there) and st_mtime elsewhere.
    """
    st = os.stat(path)
    timestamp = getattr(st, 'st_birthtime', None)
    if timestamp is None:
        timestamp = st.st_ctime if os.name == 'nt' else st.st_mtime
    return datetime.fromtimestamp(timestamp)


class FileSorter:
    """Moves newly created files into the sorted tree.

    Events are processed synchronously and one at a time; the readiness
    wait blocks the calling thread.
    """

    def __init__(self, sorted_root, classifier=None, resolver=None,
                 ready_timeout_ms=DEFAULT_TIMEOUT_MS,
                 ready_poll_interval_ms=DEFAULT_POLL_INTERVAL_MS,
                 created_at=file_created_at):
        """Initialize the sorter.

        Args:
            sorted_root: Absolute path of the sorted destination root.
            classifier: ExtensionClassifier, default table when None.
            resolver: PathResolver, one rooted at sorted_root when None.
            ready_timeout_ms: Readiness timeout per file.
            ready_poll_interval_ms: Readiness poll interval.
            created_at: Callable returning a file's creation datetime.
        """
        self.sorted_root = sorted_root
        self.classifier = classifier or ExtensionClassifier()
        self.resolver = resolver or PathResolver(sorted_root)
        self.ready_timeout_ms = ready_timeout_ms
        self.ready_poll_interval_ms = ready_poll_interval_ms
        self.created_at = created_at
        self.logger = get_logger()

    @classmethod
    def from_config(cls, config, sorted_root):
        return cls(
            sorted_root,
            ready_timeout_ms=config['ready_timeout_ms'],
            ready_poll_interval_ms=config['ready_poll_interval_ms'],
        )

    def on_file_created(self, path, name):
        """Handle a "file created" notification.

        Args:
            path: Absolute path of the new file.
            name: File name as reported by the watch source, may be None.

        Returns:
            SortResult: MOVED on success; SKIPPED_* when the file was left
            in place; FAILED when resolving or moving raised.
        """
        if not name:
            return self._finish(SortResult(
                SortAction.SKIPPED_NO_NAME, path,
                error=ValueError("event has no file name")))

        self.logger.debug(f"New file detected: {name}")

        try:
            ready = wait_until_ready(path, self.ready_timeout_ms, self.ready_poll_interval_ms)
        except FileNotReadyError as e:
            return self._finish(SortResult(SortAction.SKIPPED_NOT_READY, path, name, error=e))
        if not ready:
            return self._finish(SortResult(
                SortAction.SKIPPED_NOT_READY, path, name,
                error=FileNotReadyError(path, self.ready_timeout_ms, reason="still empty")))

        category = self.classifier.classify(get_extension(path))
        destination = None

        try:
            created = self.created_at(path)
            destination = self.resolver.resolve_destination(category, path, name, created)
            self.logger.debug(f"Moving {path} -> {destination}")
            move_file(path, destination)
        except Exception as e:
            # Anything raised here is a failed move and escalates to the caller
            return self._finish(SortResult(
                SortAction.FAILED, path, name, category, destination, error=e))

        return self._finish(SortResult(SortAction.MOVED, path, name, category, destination))

    def _finish(self, result):
        log_sort_result(result)
        return result
