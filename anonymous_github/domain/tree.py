from functools import cmp_to_key
from typing import Any, Dict, Iterable, List

from anonymous_github.domain.models import RemoteEntry, RepositoryEntry, TreeNode

PATH_SEPARATOR = "/"


def _compare_paths(a: RepositoryEntry, b: RepositoryEntry) -> int:
    if a.path == b.path:
        return 0
    # A directory always sorts before anything nested beneath it.
    if b.path.startswith(a.path + PATH_SEPARATOR):
        return -1
    if a.path.startswith(b.path + PATH_SEPARATOR):
        return 1
    return -1 if a.path < b.path else 1


def build_listing(remote_entries: Iterable[RemoteEntry]) -> List[RepositoryEntry]:
    """
    Builds a complete, ordered listing from a flat remote listing.

    The remote side may omit intermediate directories; one directory entry is
    synthesized per missing ancestor. Synthesized directories carry no size.
    When the remote side also lists a directory explicitly, its entry is kept.

    Args:
        remote_entries (Iterable[RemoteEntry]): Files and directory markers in any order.

    Returns:
        List[RepositoryEntry]: Every entry exactly once, each directory ahead of its descendants.
    """
    entries: Dict[str, RepositoryEntry] = {}
    synthesized = set()

    for item in remote_entries:
        segments = item.path.split(PATH_SEPARATOR)
        if item.path not in entries or item.path in synthesized:
            entries[item.path] = RepositoryEntry(
                name=segments[-1],
                path=item.path,
                type=item.type,
                size=item.size,
            )
            synthesized.discard(item.path)

        for depth in range(1, len(segments)):
            parent_path = PATH_SEPARATOR.join(segments[:depth])
            if parent_path in entries:
                continue
            entries[parent_path] = RepositoryEntry(
                name=segments[depth - 1],
                path=parent_path,
                type="dir",
            )
            synthesized.add(parent_path)

    return sorted(entries.values(), key=cmp_to_key(_compare_paths))


def fold_to_hierarchy(entries: Iterable[RepositoryEntry]) -> Dict[str, TreeNode]:
    """
    Folds an ordered listing into nested nodes keyed by path segment.

    Intermediate segments become directories; type and size are only taken
    from the entry at the last segment. Siblings keep first-appearance order.
    """
    root: Dict[str, Dict[str, Any]] = {}

    for entry in entries:
        if not entry.path:
            raise ValueError("Repository entry path must not be empty.")

        segments = entry.path.split(PATH_SEPARATOR)
        level = root
        for depth, segment in enumerate(segments, start=1):
            node = level.get(segment)
            if node is None:
                node = {
                    "name": segment,
                    "path": PATH_SEPARATOR.join(segments[:depth]),
                    "type": "dir",
                    "size": None,
                    "children": {},
                }
                level[segment] = node

            if depth == len(segments):
                node["type"] = entry.type
                node["size"] = entry.size
            else:
                node["type"] = "dir"
            level = node["children"]

    return {name: TreeNode.model_validate(node) for name, node in root.items()}
