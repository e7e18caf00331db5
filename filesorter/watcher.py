"""
File system watcher for FileSorter.

Uses the watchdog library to monitor the unsorted folder (non-recursively)
for new files and hands each one to the FileSorter. Watchdog delivers
events on a single dispatcher thread, so files are sorted one at a time.
"""

import os
import threading

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from filesorter.exceptions import FatalSortError
from filesorter.logger import get_logger


class FileWatcher:
    """Monitors the unsorted folder and feeds new files to the sorter.

    When a file fails to move and exit_on_error is set, the watcher stops
    and start() raises FatalSortError.
    """

    def __init__(self, sorter, watch_dir, exit_on_error=True, scan_existing=False):
        """Initialize the file watcher.

        Args:
            sorter: FileSorter instance that handles each new file.
            watch_dir: Directory to monitor.
            exit_on_error: Stop watching after the first failed move.
            scan_existing: Sort files already in watch_dir before watching.
        """
        self.sorter = sorter
        self.watch_dir = watch_dir
        self.exit_on_error = exit_on_error
        self.scan_existing = scan_existing
        self.logger = get_logger()

        self.observer = Observer()
        self._handler = _NewFileHandler(self)
        self._stop_event = threading.Event()
        self.fatal_result = None

        self.logger.info(f"File watcher configured for: {watch_dir}")

    def start(self):
        """Start watching the unsorted folder. Blocks until stopped.

        Raises:
            FatalSortError: If a file failed to move and exit_on_error is set.
        """
        self.logger.info(f"Starting file watcher on: {self.watch_dir}")

        if self.scan_existing:
            self._scan_existing()
            self._raise_if_fatal()
        else:
            self.logger.debug("Startup scan disabled, watching for new files only")

        self.observer.schedule(self._handler, self.watch_dir, recursive=False)
        self.observer.start()

        try:
            while self.observer.is_alive() and not self._stop_event.is_set():
                self._stop_event.wait(timeout=1)
        except KeyboardInterrupt:
            self.logger.warning("Ctrl+C detected, shutting down...")
        finally:
            self.stop()

        self._raise_if_fatal()

    def stop(self):
        """Stop the file watcher gracefully. Safe to call more than once."""
        self._stop_event.set()
        if self.observer.is_alive():
            self.logger.info("Stopping file watcher...")
            self.observer.stop()
            self.observer.join()
            self.logger.info("File watcher stopped")

    def _raise_if_fatal(self):
        if self.fatal_result is not None:
            raise FatalSortError(self.fatal_result)

    def _scan_existing(self):
        """Sort files that were already in the folder before startup."""
        self.logger.info(f"Scanning existing files in {self.watch_dir}...")
        count = 0
        for filename in sorted(os.listdir(self.watch_dir)):
            filepath = os.path.join(self.watch_dir, filename)
            if not os.path.isfile(filepath):
                continue
            count += 1
            self.on_new_file(filepath, filename)
            if self.fatal_result is not None:
                break
        self.logger.info(f"Startup scan complete: {count} files found")

    def on_new_file(self, filepath, filename):
        """Handle a new file event.

        Args:
            filepath: Absolute path to the new file.
            filename: Its name, may be empty.

        Returns:
            SortResult or None: None when the watcher is already stopping.
        """
        if self.fatal_result is not None:
            return None

        result = self.sorter.on_file_created(filepath, filename)
        if result.is_fatal and self.exit_on_error:
            self.logger.error("Terminating after failed move (exit_on_error is set)")
            self.fatal_result = result
            self._stop_event.set()
        return result


class _NewFileHandler(FileSystemEventHandler):
    """Watchdog event handler that delegates to FileWatcher."""

    def __init__(self, watcher):
        super().__init__()
        self.watcher = watcher

    def on_created(self, event):
        """Called when a file is created in the watched directory."""
        if event.is_directory:
            return
        filepath = os.fsdecode(event.src_path)
        self.watcher.on_new_file(filepath, os.path.basename(filepath))
