import base64
import unittest

from anonymous_github.domain.models import RemoteEntry
from anonymous_github.infrastructure.acl import GitHubTranslator, decode_base64_content


class TestGitHubTranslator(unittest.TestCase):
    def test_to_repository_info(self) -> None:
        raw_repo = {
            "name": "example",
            "full_name": "octocat/example",
            "private": False,
            "default_branch": "main",
        }

        info = GitHubTranslator.to_repository_info(raw_repo, ["main", "dev"], "README.md")

        self.assertEqual(info.full_name, "octocat/example")
        self.assertEqual(info.branches, ["main", "dev"])
        self.assertTrue(info.has_readme)
        self.assertEqual(info.readme_path, "README.md")

    def test_missing_full_name_raises(self) -> None:
        with self.assertRaises(ValueError):
            GitHubTranslator.to_repository_info({"name": "example"}, [])

    def test_to_branch_names(self) -> None:
        raw = [{"name": "main", "commit": {}}, {"name": "dev"}, {"commit": {}}]

        self.assertEqual(GitHubTranslator.to_branch_names(raw), ["main", "dev"])

    def test_to_remote_entries_maps_git_object_types(self) -> None:
        raw_tree = {
            "sha": "abc",
            "tree": [
                {"path": "src", "type": "tree", "sha": "1"},
                {"path": "src/main.py", "type": "blob", "size": 42, "sha": "2"},
                {"path": "vendor/lib", "type": "commit", "sha": "3"},
            ],
            "truncated": False,
        }

        entries = GitHubTranslator.to_remote_entries(raw_tree)

        self.assertEqual(entries, [
            RemoteEntry(path="src", type="dir"),
            RemoteEntry(path="src/main.py", type="file", size=42),
        ])

    def test_truncated_tree_warns(self) -> None:
        with self.assertLogs("anonymous_github.infrastructure.acl", level="WARNING"):
            GitHubTranslator.to_remote_entries({"tree": [], "truncated": True})

    def test_missing_tree_raises(self) -> None:
        with self.assertRaises(ValueError):
            GitHubTranslator.to_remote_entries({"message": "Not Found"})

    def test_to_repository_file_decodes_content(self) -> None:
        encoded = base64.b64encode("print('héllo')\n".encode("utf-8")).decode("ascii")
        # GitHub line-wraps base64 content.
        wrapped = "\n".join(encoded[i:i + 8] for i in range(0, len(encoded), 8))
        raw = {"type": "file", "name": "a.py", "path": "src/a.py", "size": 16, "content": wrapped}

        repository_file = GitHubTranslator.to_repository_file(raw)

        self.assertEqual(repository_file.content, "print('héllo')\n")
        self.assertEqual(repository_file.path, "src/a.py")

    def test_to_repository_file_rejects_directories(self) -> None:
        with self.assertRaises(ValueError):
            GitHubTranslator.to_repository_file({"type": "dir", "name": "src"})
        with self.assertRaises(ValueError):
            GitHubTranslator.to_repository_file([{"type": "file", "name": "a.py"}])


class TestDecodeBase64Content(unittest.TestCase):
    def test_invalid_utf8_is_replaced(self) -> None:
        encoded = base64.b64encode(b"ok \xff").decode("ascii")

        self.assertEqual(decode_base64_content(encoded), "ok \ufffd")
