import unittest

from anonymous_github.domain.file_types import (
    get_file_extension,
    get_language_class,
    is_code_file,
    is_markdown_file,
)


class TestFileTypes(unittest.TestCase):
    def test_extension(self) -> None:
        self.assertEqual(get_file_extension("archive.tar.GZ"), "gz")
        self.assertEqual(get_file_extension("Makefile"), "")

    def test_markdown(self) -> None:
        self.assertTrue(is_markdown_file("README.md"))
        self.assertTrue(is_markdown_file("notes.Markdown"))
        self.assertFalse(is_markdown_file("README.rst"))

    def test_code(self) -> None:
        self.assertTrue(is_code_file("main.py"))
        self.assertFalse(is_code_file("image.png"))

    def test_language_class(self) -> None:
        self.assertEqual(get_language_class("app.tsx"), "typescript")
        self.assertEqual(get_language_class("config.yml"), "yaml")
        self.assertEqual(get_language_class("LICENSE"), "text")
