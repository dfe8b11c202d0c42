"""
Commit Loader component for the GitHub REST API.

This module fetches the branch resource for a repository and extracts the
latest commit's message, author name and author date from it.
"""

import time
from typing import Any, Optional
from urllib.parse import quote

import httpx

from commit_tracker.models.commit import Commit, RepositoryIdentity
from commit_tracker.utils.logging import get_logger, log_api_call


logger = get_logger(__name__)

BRANCH_PATH = "/repos/{account}/{repository}/branches/{branch}"


class CommitLoaderError(Exception):
    """Base exception for Commit Loader errors."""
    pass


class TransportError(CommitLoaderError):
    """The request failed or GitHub answered with an error status."""
    pass


class ParseError(CommitLoaderError):
    """The response body does not have the expected branch shape."""
    pass


def _require_string(node: Any, *path: str) -> str:
    for key in path:
        if not isinstance(node, dict) or key not in node:
            raise ParseError(f"Missing field in branch response: {'.'.join(path)}")
        node = node[key]

    if not isinstance(node, str):
        raise ParseError(
            f"Expected string at {'.'.join(path)}, got {type(node).__name__}"
        )
    return node


def parse_commit(payload: Any) -> Commit:
    """
    Extract the latest commit from a decoded branch response.

    Args:
        payload: Decoded JSON body of ``GET /repos/{owner}/{repo}/branches/{branch}``

    Returns:
        Commit with message, author name and author date

    Raises:
        ParseError: If any of the three fields is missing or not a string
    """
    return Commit(
        message=_require_string(payload, "commit", "commit", "message"),
        author=_require_string(payload, "commit", "commit", "author", "name"),
        date=_require_string(payload, "commit", "commit", "author", "date"),
    )


class CommitLoader:
    """
    Loads the latest commit of a branch from GitHub.

    One GET per call: no retries, no caching and no authentication. Timeouts
    are whatever the HTTP client defaults to.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize Commit Loader.

        Args:
            base_url: GitHub API base URL. If None, will load from settings.
            client: Optional shared AsyncClient; a short-lived one is opened
                per request otherwise
            user_agent: User-Agent header value. If None, will load from settings.
        """
        if base_url is None or user_agent is None:
            from commit_tracker.config import settings
            base_url = base_url or settings.github_api_url
            user_agent = user_agent or settings.user_agent

        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self._client = client

    def branch_url(self, identity: RepositoryIdentity) -> str:
        """
        Build the branch endpoint URL for an identity.

        Each value is percent-encoded; slashes stay literal in the branch
        only, since branch names like ``feature/x`` are addressed that way.
        """
        return self.base_url + BRANCH_PATH.format(
            account=quote(identity.account, safe=""),
            repository=quote(identity.repository, safe=""),
            branch=quote(identity.branch, safe="/"),
        )

    async def fetch(self, identity: RepositoryIdentity) -> Commit:
        """
        Fetch the latest commit on the identity's branch.

        Args:
            identity: Repository and branch to look up

        Returns:
            Latest commit on the branch

        Raises:
            TransportError: On connection failure or a non-2xx response
            ParseError: If the body is not JSON of the expected shape
        """
        url = self.branch_url(identity)
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.user_agent,
        }
        start_time = time.time()

        try:
            # Renamed repositories and branches answer with a 301
            if self._client is not None:
                response = await self._client.get(url, headers=headers, follow_redirects=True)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url, headers=headers, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            log_api_call(
                logger,
                service="github",
                endpoint=url,
                method="GET",
                status_code=e.response.status_code,
                duration_ms=(time.time() - start_time) * 1000,
                error=str(e),
            )
            raise TransportError(
                f"GitHub returned {e.response.status_code} for {identity.full_name}@{identity.branch}"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log_api_call(
                logger,
                service="github",
                endpoint=url,
                method="GET",
                duration_ms=(time.time() - start_time) * 1000,
                error=str(e),
            )
            raise TransportError(f"Request to GitHub failed: {e}") from e

        log_api_call(
            logger,
            service="github",
            endpoint=url,
            method="GET",
            status_code=response.status_code,
            duration_ms=(time.time() - start_time) * 1000,
        )

        try:
            payload = response.json()
        except ValueError as e:
            raise ParseError(f"Branch response is not valid JSON: {e}") from e

        return parse_commit(payload)


# Global instance
_commit_loader: Optional[CommitLoader] = None


def get_commit_loader() -> CommitLoader:
    """
    Get global Commit Loader instance.

    Returns:
        CommitLoader instance
    """
    global _commit_loader
    if _commit_loader is None:
        _commit_loader = CommitLoader()
    return _commit_loader
