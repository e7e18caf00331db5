"""
Exception types for FileSorter.

Readiness and missing-name problems are handled locally by skipping the
file. Move failures are reported to the driver, which applies the
exit-on-error policy.
"""


class FileSorterError(Exception):
    """Base class for all FileSorter errors."""


class ConfigError(FileSorterError):
    """The configuration file or a configuration value is invalid."""


class FileNotReadyError(FileSorterError):
    """A file was not ready within the readiness timeout.

    reason is "still locked" when the writer kept it locked (the last access
    error is chained as ``__cause__``) or "still empty" when it never grew.
    """

    def __init__(self, path, timeout_ms, reason="still locked"):
        self.path = path
        self.timeout_ms = timeout_ms
        self.reason = reason
        super().__init__(f"File {reason} after {timeout_ms}ms: {path}")


class MoveError(FileSorterError):
    """Moving a file into the sorted tree failed."""

    def __init__(self, source, destination, reason):
        self.source = source
        self.destination = destination
        self.reason = reason
        super().__init__(f"Cannot move {source} -> {destination}: {reason}")


class FatalSortError(FileSorterError):
    """A failed event met the exit-on-error policy; the process should stop."""

    def __init__(self, result):
        self.result = result
        super().__init__(f"Fatal error while sorting {result.source}: {result.error}")
