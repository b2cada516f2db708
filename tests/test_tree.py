import unittest

from anonymous_github.domain.models import RemoteEntry, RepositoryEntry
from anonymous_github.domain.tree import build_listing, fold_to_hierarchy


def _paths(entries):
    return [entry.path for entry in entries]


class TestBuildListing(unittest.TestCase):
    def test_synthesizes_missing_directory_once(self) -> None:
        listing = build_listing([
            RemoteEntry(path="src/b.py", type="file", size=2),
            RemoteEntry(path="src/a.py", type="file", size=1),
        ])

        self.assertEqual(_paths(listing), ["src", "src/a.py", "src/b.py"])
        src = listing[0]
        self.assertEqual(src.type, "dir")
        self.assertEqual(src.name, "src")
        self.assertIsNone(src.size)

    def test_synthesizes_every_ancestor(self) -> None:
        listing = build_listing([RemoteEntry(path="a/b/c/d.txt", type="file", size=3)])

        self.assertEqual(_paths(listing), ["a", "a/b", "a/b/c", "a/b/c/d.txt"])
        self.assertEqual([entry.name for entry in listing], ["a", "b", "c", "d.txt"])
        self.assertEqual([entry.type for entry in listing], ["dir", "dir", "dir", "file"])

    def test_explicit_directory_is_not_duplicated(self) -> None:
        for remote in (
            [RemoteEntry(path="src", type="dir"), RemoteEntry(path="src/a.py", type="file", size=1)],
            [RemoteEntry(path="src/a.py", type="file", size=1), RemoteEntry(path="src", type="dir")],
        ):
            listing = build_listing(remote)
            self.assertEqual(_paths(listing), ["src", "src/a.py"])

    def test_directories_precede_descendants(self) -> None:
        listing = build_listing([
            RemoteEntry(path="z/inner/file.txt", type="file", size=1),
            RemoteEntry(path="a-c", type="file", size=1),
            RemoteEntry(path="a/b", type="file", size=1),
            RemoteEntry(path="README.md", type="file", size=1),
        ])
        paths = _paths(listing)

        for index, path in enumerate(paths):
            for later in paths[index + 1:]:
                self.assertFalse(path.startswith(later + "/"), f"{later} should precede {path}")
        self.assertEqual(paths, sorted(paths))

    def test_file_sizes_are_kept(self) -> None:
        listing = build_listing([RemoteEntry(path="x.bin", type="file", size=1024)])

        self.assertEqual(listing, [RepositoryEntry(name="x.bin", path="x.bin", type="file", size=1024)])

    def test_empty_input(self) -> None:
        self.assertEqual(build_listing([]), [])


class TestFoldToHierarchy(unittest.TestCase):
    def test_nested_file(self) -> None:
        root = fold_to_hierarchy(build_listing([RemoteEntry(path="a/b/c.py", type="file", size=7)]))

        c = root["a"].children["b"].children["c.py"]
        self.assertEqual(c.type, "file")
        self.assertEqual(c.size, 7)
        self.assertEqual(c.path, "a/b/c.py")
        self.assertEqual(root["a"].type, "dir")
        self.assertEqual(root["a"].children["b"].type, "dir")
        self.assertTrue(root["a"].is_dir)
        self.assertFalse(c.is_dir)

    def test_intermediates_without_entries_become_directories(self) -> None:
        root = fold_to_hierarchy([RepositoryEntry(name="c.py", path="a/b/c.py", type="file", size=1)])

        self.assertEqual(root["a"].type, "dir")
        self.assertEqual(root["a"].children["b"].path, "a/b")

    def test_siblings_keep_input_order(self) -> None:
        root = fold_to_hierarchy([
            RepositoryEntry(name="b", path="b", type="file"),
            RepositoryEntry(name="a", path="a", type="file"),
        ])

        self.assertEqual(list(root), ["b", "a"])

    def test_node_with_children_is_a_directory(self) -> None:
        root = fold_to_hierarchy([
            RepositoryEntry(name="a", path="a", type="file"),
            RepositoryEntry(name="b", path="a/b", type="file"),
        ])

        self.assertTrue(root["a"].is_dir)

    def test_empty_path_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            fold_to_hierarchy([RepositoryEntry(name="", path="", type="file")])

    def test_fresh_result_per_call(self) -> None:
        entries = build_listing([RemoteEntry(path="a/x", type="file", size=1)])

        self.assertIsNot(fold_to_hierarchy(entries)["a"], fold_to_hierarchy(entries)["a"])
