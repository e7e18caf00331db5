"""Tests for extension classification."""

import pytest

from filesorter.classifier import (
    CATEGORY_EXTENSIONS,
    CATEGORY_FOLDERS,
    EXTENSION_TO_CATEGORY,
    Category,
    ExtensionClassifier,
    build_extension_table,
    classify,
    get_extension,
)


class TestClassify:

    @pytest.mark.parametrize("ext", [".jpg", ".JPG", ".Jpg", ".jPg"])
    def test_case_insensitive(self, ext):
        assert classify(ext) is Category.IMAGE_BITMAP

    def test_every_listed_extension_is_case_insensitive(self):
        for ext, category in EXTENSION_TO_CATEGORY.items():
            assert classify(ext.upper()) is category
            assert classify(f"file{ext.upper()}") is category

    @pytest.mark.parametrize("name, expected", [
        ("photo.JPG", Category.IMAGE_BITMAP),
        ("IMG_0001.CR2", Category.IMAGE_RAW),
        ("logo.ai", Category.IMAGE_VECTOR),
        ("song.flac", Category.AUDIO),
        ("clip.mkv", Category.VIDEO),
        ("movie.srt", Category.SUBTITLE),
        ("notes.md", Category.TEXT_DOCUMENT),
        ("budget.xlsx", Category.SPREADSHEET),
        ("deck.key", Category.PRESENTATION),
        ("book.epub", Category.PDF_OR_EBOOK),
        ("setup.msi", Category.WINDOWS_EXECUTABLE),
        ("install.sh", Category.UNIX_SCRIPT),
        ("/some/dir/archive.tar.gz", Category.UNKNOWN),
    ])
    def test_filenames(self, name, expected):
        assert classify(name) is expected

    @pytest.mark.parametrize("value", ["", None, "README", "Makefile", "trailingdot."])
    def test_no_extension_is_unknown(self, value):
        assert classify(value) is Category.UNKNOWN

    def test_unlisted_extension_is_unknown(self):
        assert classify(".xyz") is Category.UNKNOWN
        assert classify("data.xyz") is Category.UNKNOWN


class TestPrecedence:
    """Extensions listed under several categories get one fixed owner."""

    def test_pdf_is_pdf_or_ebook(self):
        assert classify(".pdf") is Category.PDF_OR_EBOOK

    def test_svg_is_vector(self):
        assert classify(".svg") is Category.IMAGE_VECTOR

    def test_csv_is_spreadsheet(self):
        assert classify(".csv") is Category.SPREADSHEET

    def test_precedence_order_decides(self):
        table = build_extension_table(
            {Category.TEXT_DOCUMENT: (".csv",), Category.SPREADSHEET: (".CSV",)},
            precedence=(Category.TEXT_DOCUMENT,),
        )
        assert dict(table) == {".csv": Category.TEXT_DOCUMENT}


class TestTables:

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            EXTENSION_TO_CATEGORY[".new"] = Category.AUDIO
        with pytest.raises(TypeError):
            CATEGORY_FOLDERS[Category.UNKNOWN] = "Unknown"

    def test_every_category_but_unknown_has_extensions_and_folder(self):
        for category in Category:
            if category is Category.UNKNOWN:
                assert category not in CATEGORY_FOLDERS
                assert category not in CATEGORY_EXTENSIONS
            else:
                assert CATEGORY_EXTENSIONS[category]
                assert category in CATEGORY_FOLDERS

    def test_custom_table(self):
        classifier = ExtensionClassifier({".log": Category.TEXT_DOCUMENT})
        assert classifier.classify("server.LOG") is Category.TEXT_DOCUMENT
        assert classifier.classify("photo.jpg") is Category.UNKNOWN


def test_get_extension():
    assert get_extension(".JPG") == ".JPG"
    assert get_extension("photo.JPG") == ".JPG"
    assert get_extension("README") == ""
    assert get_extension("") == ""


@pytest.mark.parametrize("name, expected", [
    (".sh", ".sh"),
    (".bashrc", ".bashrc"),
    ("/drop/.bashrc", ".bashrc"),
    ("archive.", ""),
    ("/drop/archive.", ""),
    ("archive.tar.gz", ".gz"),
    ("/drop.d/README", ""),
])
def test_get_extension_edge_names(name, expected):
    assert get_extension(name) == expected


def test_dot_named_script_is_unix_script():
    assert classify("/drop/.sh") is Category.UNIX_SCRIPT
