import base64
import binascii
import logging
from typing import Any, Dict, List, Optional

from anonymous_github.domain.models import RemoteEntry, RepositoryFile, RepositoryInfo

logger = logging.getLogger(__name__)

# git object kind -> listing entry type; submodules ("commit") are skipped.
TREE_ITEM_TYPES = {"blob": "file", "tree": "dir"}


class GitHubTranslator:
    """
    Anti-corruption layer that translates raw GitHub REST responses into domain models.
    """

    @staticmethod
    def to_repository_info(
        raw_repo: Dict[str, Any],
        branches: List[str],
        readme_path: Optional[str] = None,
    ) -> RepositoryInfo:
        """
        Transforms a raw `GET /repos/{owner}/{repo}` payload into a RepositoryInfo.

        Args:
            raw_repo (Dict[str, Any]): The repository payload.
            branches (List[str]): Branch names available on the repository.
            readme_path (Optional[str]): README file found on the requested branch, if any.

        Returns:
            RepositoryInfo: The domain model describing the repository.
        """
        full_name = raw_repo.get('full_name')
        if not full_name:
            raise ValueError("full_name is required to build RepositoryInfo.")

        return RepositoryInfo(
            name=raw_repo.get('name', ''),
            full_name=full_name,
            private=bool(raw_repo.get('private', False)),
            default_branch=raw_repo.get('default_branch', ''),
            branches=branches,
            has_readme=readme_path is not None,
            readme_path=readme_path,
        )

    @staticmethod
    def to_branch_names(raw_branches: List[Dict[str, Any]]) -> List[str]:
        return [branch['name'] for branch in raw_branches if branch.get('name')]

    @staticmethod
    def to_remote_entries(raw_tree: Dict[str, Any]) -> List[RemoteEntry]:
        """
        Transforms a recursive `git/trees` payload into a flat remote listing.

        Raises:
            ValueError: if the payload carries no `tree` array.
        """
        items = raw_tree.get('tree')
        if items is None:
            raise ValueError("No tree data in response.")

        if raw_tree.get('truncated'):
            logger.warning("GitHub truncated the repository tree; the listing is incomplete.")

        entries = []
        for item in items:
            entry_type = TREE_ITEM_TYPES.get(item.get('type'))
            if entry_type is None or not item.get('path'):
                logger.debug(f"Skipping tree item {item.get('path')!r} of type {item.get('type')!r}.")
                continue
            entries.append(RemoteEntry(
                path=item['path'],
                type=entry_type,
                size=item.get('size') if entry_type == "file" else None,
            ))
        return entries

    @staticmethod
    def to_repository_file(raw_content: Dict[str, Any]) -> RepositoryFile:
        """
        Transforms a `contents` payload for a single file, decoding its content.

        Raises:
            ValueError: if the payload does not describe a file.
        """
        if not isinstance(raw_content, dict) or raw_content.get('type') != 'file':
            kind = raw_content.get('type') if isinstance(raw_content, dict) else 'dir'
            raise ValueError(f"Requested path is not a file: {kind}")

        return RepositoryFile(
            name=raw_content.get('name', ''),
            path=raw_content.get('path', ''),
            size=raw_content.get('size', 0),
            content=decode_base64_content(raw_content.get('content', '')),
        )


def decode_base64_content(content: str) -> str:
    """Decodes GitHub's line-wrapped base64 file content as UTF-8 text."""
    try:
        return base64.b64decode(content).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError) as e:
        logger.error(f"Failed to decode base64 content: {e}")
        return content
