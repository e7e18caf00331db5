"""
Extension-based classification for FileSorter.

Maps a file extension to a Category through a static lookup table that is
built once at import time and exposed read-only. Several extensions are
listed under more than one category (.pdf, .svg, .csv); CATEGORY_PRECEDENCE
decides which category owns them.
"""

import enum
import os
from types import MappingProxyType


class Category(enum.Enum):
    IMAGE_BITMAP = 'ImageBitmap'
    IMAGE_RAW = 'ImageRaw'
    IMAGE_VECTOR = 'ImageVector'
    AUDIO = 'Audio'
    VIDEO = 'Video'
    SUBTITLE = 'Subtitle'
    TEXT_DOCUMENT = 'TextDocument'
    SPREADSHEET = 'Spreadsheet'
    PRESENTATION = 'Presentation'
    PDF_OR_EBOOK = 'PdfOrEbook'
    WINDOWS_EXECUTABLE = 'WindowsExecutable'
    UNIX_SCRIPT = 'UnixScript'
    UNKNOWN = 'Unknown'


# Supported file extensions grouped by category
CATEGORY_EXTENSIONS = MappingProxyType({
    Category.IMAGE_BITMAP: ('.jpg', '.jpeg', '.png', '.gif', '.webp', '.tiff', '.bmp', '.heic', '.svg'),
    Category.IMAGE_RAW: ('.cr2', '.nef', '.arw', '.rw2', '.orf', '.dng'),
    Category.IMAGE_VECTOR: ('.svg', '.ai', '.eps', '.pdf'),
    Category.AUDIO: ('.mp3', '.wav', '.flac', '.m4a', '.aac', '.ogg', '.wma', '.opus'),
    Category.VIDEO: ('.mp4', '.mkv', '.mov', '.avi', '.wmv', '.webm', '.flv', '.m4v'),
    Category.SUBTITLE: ('.srt', '.sub', '.ass', '.vtt'),
    Category.TEXT_DOCUMENT: ('.txt', '.rtf', '.doc', '.docx', '.odt', '.md', '.csv', '.tex'),
    Category.SPREADSHEET: ('.xlsx', '.xls', '.ods', '.csv', '.tsv', '.xlsm'),
    Category.PRESENTATION: ('.pptx', '.ppt', '.odp', '.key'),
    Category.PDF_OR_EBOOK: ('.pdf', '.epub', '.mobi', '.azw3'),
    Category.WINDOWS_EXECUTABLE: ('.exe', '.msi', '.bat', '.cmd', '.com', '.ps1'),
    Category.UNIX_SCRIPT: ('.sh', '.bash', '.zsh', '.fish', '.run', '.bin'),
})

# First category listing an extension owns it
CATEGORY_PRECEDENCE = (
    Category.PDF_OR_EBOOK,
    Category.SPREADSHEET,
    Category.IMAGE_VECTOR,
    Category.IMAGE_RAW,
    Category.IMAGE_BITMAP,
    Category.AUDIO,
    Category.VIDEO,
    Category.SUBTITLE,
    Category.TEXT_DOCUMENT,
    Category.PRESENTATION,
    Category.WINDOWS_EXECUTABLE,
    Category.UNIX_SCRIPT,
)

# Relative destination folder per category. UNKNOWN is resolved separately.
CATEGORY_FOLDERS = MappingProxyType({
    Category.IMAGE_BITMAP: os.path.join('Images', 'Bitmap'),
    Category.IMAGE_RAW: os.path.join('Images', 'RawImages'),
    Category.IMAGE_VECTOR: os.path.join('Images', 'Vector'),
    Category.AUDIO: 'Audio',
    Category.VIDEO: 'Videos',
    Category.SUBTITLE: 'Subtitles',
    Category.TEXT_DOCUMENT: 'TextDocuments',
    Category.SPREADSHEET: 'Spreadsheets',
    Category.PRESENTATION: 'Presentations',
    Category.PDF_OR_EBOOK: 'PdfAndEbooks',
    Category.WINDOWS_EXECUTABLE: 'WindowsExecutables',
    Category.UNIX_SCRIPT: 'UnixScripts',
})


def build_extension_table(category_extensions=CATEGORY_EXTENSIONS,
                          precedence=CATEGORY_PRECEDENCE):
    """Build the read-only extension -> Category lookup.

    Args:
        category_extensions: Mapping of Category -> iterable of extensions.
        precedence: Categories in priority order. Categories missing from it
                    are ranked after it in declaration order.

    Returns:
        MappingProxyType: Lower-cased extension -> Category.
    """
    ordered = list(precedence)
    ordered += [c for c in category_extensions if c not in ordered]

    table = {}
    for category in ordered:
        for ext in category_extensions.get(category, ()):
            table.setdefault(ext.lower(), category)
    return MappingProxyType(table)


EXTENSION_TO_CATEGORY = build_extension_table()


def get_extension(filename_or_ext):
    """Return the extension of a file name or path, including the dot.

    The extension runs from the last '.' of the base name. A name that starts
    with '.' and has no other dot is its own extension, so '.jpg' and '.sh'
    are returned unchanged and '.bashrc' has the extension '.bashrc'.
    'README' and 'archive.' (trailing dot) have no extension; 'archive.tar.gz'
    has '.gz'.
    """
    if not filename_or_ext:
        return ''
    name = os.path.basename(filename_or_ext)
    index = name.rfind('.')
    if index < 0 or index == len(name) - 1:
        return ''
    return name[index:]


class ExtensionClassifier:
    """Classifies files into categories by extension (case-insensitive)."""

    def __init__(self, table=EXTENSION_TO_CATEGORY):
        self.table = table

    def classify(self, filename_or_ext):
        """Return the Category for a bare extension ('.jpg') or a filename.

        Args:
            filename_or_ext: Extension with leading dot, or a file name/path.

        Returns:
            Category: The matching category, or Category.UNKNOWN when the
            extension is empty or not listed.
        """
        ext = get_extension(filename_or_ext)
        if not ext:
            return Category.UNKNOWN
        return self.table.get(ext.lower(), Category.UNKNOWN)


_default_classifier = ExtensionClassifier()


def classify(filename_or_ext):
    """Classify with the default table."""
    return _default_classifier.classify(filename_or_ext)
