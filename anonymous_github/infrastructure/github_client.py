import aiohttp
import asyncio
import logging
import random
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from anonymous_github.domain.exceptions import (
    GitHubApiException,
    NotFoundException,
    RateLimitExceededException,
    RepositoryAccessDeniedException,
)

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
REQUEST_TIMEOUT = aiohttp.ClientTimeout(total=60, connect=10)
MAX_RETRIES = 5
SERVER_ERRORS = {500, 502, 503, 504}


def _backoff(attempt: int) -> float:
    return (2 ** attempt) + random.uniform(0, 2)


def _retry_after_seconds(value: str, attempt: int) -> float:
    """Reads a Retry-After header given in seconds or as an HTTP date."""
    try:
        return max(int(value), 0)
    except ValueError:
        pass
    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return _backoff(attempt)
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    return max((retry_at - datetime.now(timezone.utc)).total_seconds(), 0)


class GitHubRestClient:
    """
    Client for the parts of the GitHub REST API needed to browse a repository.
    Handles authentication, retries and rate limit signalling.
    """

    def __init__(self, token: Optional[str] = None, api_url: str = API_URL):
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "anonymous-github",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        self.api_url = api_url.rstrip("/")

    async def get_repository(self, session: aiohttp.ClientSession, repository_id: str) -> Dict[str, Any]:
        return await self._get_json(session, f"/repos/{repository_id}")

    async def list_branches(self, session: aiohttp.ClientSession, repository_id: str) -> List[Dict[str, Any]]:
        return await self._get_json(session, f"/repos/{repository_id}/branches", params={"per_page": "100"})

    async def get_contents(
        self,
        session: aiohttp.ClientSession,
        repository_id: str,
        path: str,
        ref: str,
    ) -> Dict[str, Any]:
        """Fetches a single content item; files carry base64 encoded `content`."""
        return await self._get_json(
            session,
            f"/repos/{repository_id}/contents/{quote(path)}",
            params={"ref": ref},
        )

    async def get_tree(self, session: aiohttp.ClientSession, repository_id: str, ref: str) -> Dict[str, Any]:
        """Fetches the full recursive git tree for a ref."""
        return await self._get_json(
            session,
            f"/repos/{repository_id}/git/trees/{quote(ref, safe='')}",
            params={"recursive": "1"},
        )

    async def _get_json(
        self,
        session: aiohttp.ClientSession,
        endpoint: str,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Performs a GET against the API, retrying transient failures.

        Raises:
            NotFoundException: on 404.
            RateLimitExceededException: on 429 or when the primary rate limit is exhausted.
            RepositoryAccessDeniedException: on any other 403.
            GitHubApiException: when retries are exhausted.
        """
        url = f"{self.api_url}{endpoint}"

        for attempt in range(MAX_RETRIES):
          try:
            async with session.get(url, params=params, headers=self.headers, timeout=REQUEST_TIMEOUT) as response:
                if response.status == 404:
                    raise NotFoundException(f"GitHub resource not found: {endpoint}")

                if response.status in {403, 429}:
                    # Secondary rate limit (abuse detection)
                    retry_after = response.headers.get('Retry-After')
                    if retry_after:
                        sleep_time = _retry_after_seconds(retry_after, attempt)
                        logger.warning(f"Secondary rate limit ({response.status}). Sleeping {sleep_time:.0f}s...")
                        await asyncio.sleep(sleep_time)
                        continue

                    if response.status == 429 or response.headers.get('X-RateLimit-Remaining') == "0":
                        raise RateLimitExceededException(reset_at=response.headers.get('X-RateLimit-Reset', 'unknown'))

                    raise RepositoryAccessDeniedException(
                        f"Access denied for {endpoint}; the repository may be private or require a token."
                    )

                if response.status in SERVER_ERRORS:
                    sleep_time = _backoff(attempt)
                    logger.warning(
                        f"Server error ({response.status}). "
                        f"Retrying in {sleep_time:.1f}s (attempt {attempt + 1}/{MAX_RETRIES})..."
                    )
                    await asyncio.sleep(sleep_time)
                    continue

                if response.status >= 400:
                    raise GitHubApiException(f"GitHub request failed: {response.status} for {endpoint}")

                return await response.json()

          except (aiohttp.ClientError, asyncio.TimeoutError) as e:
              sleep_time = _backoff(attempt)
              logger.warning(
                  f"Request failed (attempt {attempt + 1}/{MAX_RETRIES}): {e}. "
                  f"Retrying in {sleep_time:.1f}s..."
              )
              await asyncio.sleep(sleep_time)

        raise GitHubApiException(f"Failed to fetch {endpoint} after {MAX_RETRIES} attempts.")
