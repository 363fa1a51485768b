import aiohttp
import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from yarl import URL

from src.domain.exceptions import GitHubAPIException, RateLimitExceededException
from src.infrastructure.response_cache import ResponseCache

logger = logging.getLogger(__name__)

GITHUB_API_BASE = URL("https://api.github.com")
REQUEST_TIMEOUT = aiohttp.ClientTimeout(total=30, connect=10)
RATE_LIMIT_STATUSES = {403, 429}

class GitHubRESTClient:
    """
    Client for the GitHub REST API endpoints behind the community statistics.
    Responses are memoised in an explicitly owned ResponseCache keyed by request URL.
    """

    def __init__(self, token: Optional[str] = None, cache: Optional[ResponseCache] = None):
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "mcp-catalog",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        self.cache = cache if cache is not None else ResponseCache()

    @staticmethod
    def _reset_at(headers) -> Optional[str]:
        raw_reset = headers.get("X-RateLimit-Reset")
        if not raw_reset:
            return None
        return datetime.fromtimestamp(int(raw_reset), tz=timezone.utc).isoformat().replace("+00:00", "Z")

    async def get_json(
        self,
        session: aiohttp.ClientSession,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Fetches and decodes a GitHub REST resource, serving fresh cached copies first.

        Args:
            session (aiohttp.ClientSession): The shared HTTP session.
            path (str): Resource path below the API root, e.g. "/repos/owner/name".
            params (Optional[Dict[str, Any]]): Query string parameters.

        Returns:
            Any: The decoded JSON payload.
        """
        url = GITHUB_API_BASE.with_path(path)
        if params:
            url = url.with_query(params)
        cache_key = str(url)

        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for {cache_key}")
            return cached

        try:
            async with session.get(cache_key, headers=self.headers, timeout=REQUEST_TIMEOUT) as response:
                if response.status in RATE_LIMIT_STATUSES and response.headers.get("X-RateLimit-Remaining") == "0":
                    raise RateLimitExceededException(reset_at=self._reset_at(response.headers))

                if response.status >= 400:
                    raise GitHubAPIException(f"GitHub API error: {response.status}", status=response.status)

                data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"GitHub request to {cache_key} failed: {e}")
            raise GitHubAPIException(f"GitHub API request failed: {e}") from e

        self.cache.set(cache_key, data)
        return data

    async def fetch_repository(self, session: aiohttp.ClientSession, repository: str) -> Dict[str, Any]:
        return await self.get_json(session, f"/repos/{repository}")

    async def fetch_contributors(self, session: aiohttp.ClientSession, repository: str) -> List[Dict[str, Any]]:
        return await self.get_json(session, f"/repos/{repository}/contributors")

    async def fetch_user(self, session: aiohttp.ClientSession, login: str) -> Dict[str, Any]:
        return await self.get_json(session, f"/users/{login}")

    async def fetch_open_issues(self, session: aiohttp.ClientSession, repository: str) -> List[Dict[str, Any]]:
        return await self.get_json(session, f"/repos/{repository}/issues", params={"state": "open", "per_page": 100})
