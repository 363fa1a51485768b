import unittest
from unittest.mock import AsyncMock, MagicMock

import aiohttp

from src.domain.exceptions import GitHubAPIException, RateLimitExceededException
from src.infrastructure.github_client import GitHubRESTClient
from src.infrastructure.response_cache import ResponseCache


def _response(status=200, payload=None, headers=None):
    response = AsyncMock()
    response.status = status
    response.headers = headers or {}
    response.json = AsyncMock(return_value=payload)
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=False)
    return response


class TestGitHubRESTClient(unittest.TestCase):
    def test_headers_are_dict(self) -> None:
        token = "test-token"
        client = GitHubRESTClient(token=token)

        self.assertIsInstance(client.headers, dict)
        self.assertEqual(client.headers["Authorization"], f"Bearer {token}")

    def test_anonymous_client_sends_no_authorization(self) -> None:
        client = GitHubRESTClient()
        self.assertNotIn("Authorization", client.headers)
        self.assertIn("User-Agent", client.headers)
        self.assertIn("Accept", client.headers)


class TestGetJson(unittest.IsolatedAsyncioTestCase):
    async def test_responses_are_served_from_cache(self) -> None:
        client = GitHubRESTClient(cache=ResponseCache(ttl_seconds=300))
        session = MagicMock()
        session.get = MagicMock(return_value=_response(payload={"stargazers_count": 3}))

        first = await client.fetch_repository(session, "seefor/network-mcp-hub")
        second = await client.fetch_repository(session, "seefor/network-mcp-hub")

        self.assertEqual(first, {"stargazers_count": 3})
        self.assertEqual(second, first)
        session.get.assert_called_once()
        self.assertEqual(
            session.get.call_args.args[0],
            "https://api.github.com/repos/seefor/network-mcp-hub",
        )

    async def test_query_parameters_are_part_of_the_url(self) -> None:
        client = GitHubRESTClient()
        session = MagicMock()
        session.get = MagicMock(return_value=_response(payload=[]))

        await client.fetch_open_issues(session, "seefor/network-mcp-hub")

        url = session.get.call_args.args[0]
        self.assertIn("state=open", url)
        self.assertIn("/repos/seefor/network-mcp-hub/issues", url)

    async def test_error_status_raises(self) -> None:
        client = GitHubRESTClient()
        session = MagicMock()
        session.get = MagicMock(return_value=_response(status=404))

        with self.assertRaises(GitHubAPIException) as ctx:
            await client.fetch_user(session, "ghost")

        self.assertEqual(ctx.exception.status, 404)
        self.assertEqual(len(client.cache), 0)

    async def test_exhausted_quota_raises_rate_limit(self) -> None:
        client = GitHubRESTClient()
        session = MagicMock()
        session.get = MagicMock(return_value=_response(
            status=403,
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1767225600"},
        ))

        with self.assertRaises(RateLimitExceededException) as ctx:
            await client.fetch_contributors(session, "seefor/network-mcp-hub")

        self.assertEqual(ctx.exception.reset_at, "2026-01-01T00:00:00Z")

    async def test_connection_errors_are_wrapped(self) -> None:
        client = GitHubRESTClient()
        session = MagicMock()
        session.get = MagicMock(side_effect=aiohttp.ClientConnectionError("boom"))

        with self.assertRaises(GitHubAPIException):
            await client.fetch_repository(session, "seefor/network-mcp-hub")
