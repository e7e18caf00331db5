"""
Destination path resolution for FileSorter.

Builds <sorted root>/<category folder>/<year>/<month>/<file name>, creating
missing directories on the way, and picks a free file name by appending
" (1)", " (2)", ... before the extension when the name is taken.

The existence check and the later move are not atomic. Another process
writing into the sorted tree can still claim the chosen name first; the
mover then refuses to overwrite and reports the failure.
"""

import os

from filesorter.classifier import CATEGORY_FOLDERS, Category, get_extension
from filesorter.logger import get_logger

UNKNOWN_FOLDER = 'Unknown'
NO_EXTENSION_FOLDER = 'NoExtension'


def suffixed_name(file_name, index):
    """Return file_name with ' (index)' inserted before its extension.

    >>> suffixed_name('report.pdf', 2)
    'report (2).pdf'
    >>> suffixed_name('README', 1)
    'README (1)'
    """
    ext = get_extension(file_name)
    stem = file_name[:len(file_name) - len(ext)]
    return f"{stem} ({index}){ext}"


class PathResolver:
    """Computes and prepares destination paths inside the sorted root."""

    def __init__(self, sorted_root, folders=CATEGORY_FOLDERS):
        """
        Args:
            sorted_root: Absolute path of the sorted destination root.
            folders: Mapping of Category -> relative folder. Categories
                     missing from it fall back to the Unknown folder.
        """
        self.sorted_root = sorted_root
        self.folders = folders
        self.logger = get_logger()

    def ensure_directory(self, path):
        if not os.path.isdir(path):
            self.logger.debug(f"Creating directory: {path}")
            os.makedirs(path, exist_ok=True)
        return path

    def base_dir(self, category, source_path):
        """Return (and create) the category directory for a file.

        Unknown files are grouped by their extension, or under NoExtension
        when they have none. The extension keeps its original case.
        """
        unknown_root = os.path.join(self.sorted_root, UNKNOWN_FOLDER)

        if category is Category.UNKNOWN:
            extension = get_extension(source_path)
            return self.ensure_directory(os.path.join(unknown_root, extension or NO_EXTENSION_FOLDER))

        folder = self.folders.get(category)
        if folder is None:
            self.logger.debug(f"No folder mapped for {category.value}, using {unknown_root}")
            return self.ensure_directory(unknown_root)

        return self.ensure_directory(os.path.join(self.sorted_root, folder))

    def dated_dir(self, base_dir, created):
        """Return (and create) <base_dir>/<YYYY>/<MM> for a creation datetime."""
        year_dir = self.ensure_directory(os.path.join(base_dir, f"{created.year}"))
        return self.ensure_directory(os.path.join(year_dir, f"{created.month:02d}"))

    def free_path(self, directory, file_name):
        """Return the first path in directory that doesn't exist yet.

        Tries file_name, then 'name (1).ext', 'name (2).ext', ...
        """
        candidate = os.path.join(directory, file_name)
        index = 1
        while os.path.lexists(candidate):
            self.logger.debug(f"File {candidate} already exists! Trying suffix ({index})")
            candidate = os.path.join(directory, suffixed_name(file_name, index))
            index += 1
        return candidate

    def resolve_destination(self, category, source_path, file_name, created):
        """Compute the destination path for a file, creating its directories.

        Args:
            category: Category of the file.
            source_path: Absolute path of the file being sorted.
            file_name: Name to give the file at the destination.
            created: datetime used for the year/month partition.

        Returns:
            str: Absolute destination path whose parent directory exists.
        """
        base = self.base_dir(category, source_path)
        month_dir = self.dated_dir(base, created)
        return self.free_path(month_dir, file_name)
