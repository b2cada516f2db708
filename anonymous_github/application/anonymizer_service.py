import logging
from typing import Any, List, Optional
from urllib.parse import quote, unquote

import aiohttp

from anonymous_github.domain.anonymizer import TermAnonymizer
from anonymous_github.domain.exceptions import (
    GitHubApiException,
    InvalidRequestException,
    InvalidTokenException,
    NotFoundException,
    RepositoryValidationException,
)
from anonymous_github.domain.file_types import get_language_class, is_code_file, is_markdown_file
from anonymous_github.domain.models import (
    AnonymizedFile,
    RepositoryListing,
    SealedConfig,
    SealResult,
)
from anonymous_github.domain.tree import build_listing
from anonymous_github.infrastructure.acl import GitHubTranslator
from anonymous_github.infrastructure.config_seal import ConfigSeal
from anonymous_github.infrastructure.github_client import GitHubRestClient

logger = logging.getLogger(__name__)

README_CANDIDATES = ("README.md", "README.txt", "README.rst", "readme.md", "readme.txt")


def parse_terms(raw: Any) -> List[str]:
    """
    Normalizes anonymization terms supplied by a caller.

    Accepts a list of strings or a single newline-delimited string. Terms are
    trimmed and blank ones dropped; order and duplicates are kept.
    """
    if isinstance(raw, str):
        candidates = raw.split("\n")
    elif isinstance(raw, (list, tuple)):
        candidates = [term for term in raw if isinstance(term, str)]
    else:
        return []
    return [term.strip() for term in candidates if term.strip()]


class AnonymizerService:
    """
    Service exposing the operations behind an anonymized repository link:
    creating a link, listing its files and serving a single anonymized file.

    Every operation that takes a token unseals it first; a token that does not
    unseal raises InvalidTokenException and nothing is fetched.
    """

    def __init__(self, github_client: GitHubRestClient, config_seal: ConfigSeal):
        self.github_client = github_client
        self.config_seal = config_seal

    async def create_link(self, repository_id: str, ref: str, terms: Any = None) -> SealResult:
        """
        Validates a repository and branch, then seals them with the given terms.

        Args:
            repository_id (str): Repository in owner/name form.
            ref (str): Branch to publish.
            terms (Any): List of terms or a newline-delimited string.

        Returns:
            SealResult: The token and what was learned about the repository.
        """
        repository_id = (repository_id or "").strip()
        ref = (ref or "").strip()
        if not repository_id or not ref:
            raise InvalidRequestException("Repository and branch are required")

        async with aiohttp.ClientSession() as session:
            info = await self._validate_repository(session, repository_id, ref)

        config = SealedConfig.create(repository_id=repository_id, ref=ref, terms=parse_terms(terms))
        token = self.config_seal.seal(config)
        logger.info(f"Created anonymized link for {info.full_name}@{ref} with {len(config.terms)} terms.")
        return SealResult(token=token, info=info)

    def open(self, token: str) -> SealedConfig:
        """Unseals a token taken from a URL path segment."""
        config = self.config_seal.unseal(unquote(token or ""))
        if config is None:
            raise InvalidTokenException()
        return config

    async def list_files(self, token: str) -> RepositoryListing:
        config = self.open(token)

        async with aiohttp.ClientSession() as session:
            raw_tree = await self.github_client.get_tree(session, config.repository_id, config.ref)

        try:
            remote_entries = GitHubTranslator.to_remote_entries(raw_tree)
        except ValueError as e:
            raise GitHubApiException(f"Unable to fetch repository files: {e}")

        entries = build_listing(remote_entries)
        logger.info(f"Listed {len(entries)} files/directories.")
        return RepositoryListing(repository_id=config.repository_id, ref=config.ref, entries=entries)

    async def get_file(self, token: str, path: str) -> AnonymizedFile:
        """Fetches one file and replaces every sealed term in its content."""
        config = self.open(token)
        path = path.strip("/")
        if not path:
            raise InvalidRequestException("File path is required")

        async with aiohttp.ClientSession() as session:
            raw_content = await self.github_client.get_contents(session, config.repository_id, path, config.ref)

        try:
            repository_file = GitHubTranslator.to_repository_file(raw_content)
        except ValueError as e:
            raise InvalidRequestException(str(e))

        content = TermAnonymizer(config.terms).anonymize(repository_file.content)
        is_code = is_code_file(repository_file.name)

        return AnonymizedFile(
            filename=repository_file.name,
            content=content,
            is_markdown=is_markdown_file(repository_file.name),
            is_code=is_code,
            original_path=path,
            language=get_language_class(repository_file.name) if is_code else None,
        )

    @staticmethod
    def share_path(token: str, path: Optional[str] = None) -> str:
        """URL path for a token, optionally pointing at a file inside the repository."""
        share = "/" + quote(token, safe="")
        if path:
            share += "/" + quote(path.strip("/"))
        return share

    async def _validate_repository(self, session: aiohttp.ClientSession, repository_id: str, ref: str):
        logger.info(f"Validating repository: {repository_id}")
        try:
            raw_repo = await self.github_client.get_repository(session, repository_id)
        except NotFoundException:
            raise RepositoryValidationException(
                f"Repository {repository_id} does not exist or is not accessible"
            )

        branches = GitHubTranslator.to_branch_names(
            await self.github_client.list_branches(session, repository_id)
        )
        if ref not in branches:
            raise RepositoryValidationException(
                f"Branch {ref} does not exist. Available branches: {', '.join(branches)}"
            )

        readme_path = await self._find_readme(session, repository_id, ref)
        if readme_path is None:
            logger.warning(f"Repository {repository_id} does not have a README file in branch {ref}")

        return GitHubTranslator.to_repository_info(raw_repo, branches, readme_path)

    async def _find_readme(self, session: aiohttp.ClientSession, repository_id: str, ref: str) -> Optional[str]:
        for candidate in README_CANDIDATES:
            try:
                await self.github_client.get_contents(session, repository_id, candidate, ref)
            except GitHubApiException as e:
                logger.debug(f"README candidate {candidate} unavailable: {e}")
                continue
            return candidate
        return None
