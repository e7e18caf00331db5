"""FileSorter: keeps a drop folder organized by extension and date."""

__version__ = "1.0.0"
