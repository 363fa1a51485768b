import asyncio
import logging
from typing import List

import aiohttp

from src.domain.exceptions import GitHubAPIException
from src.domain.models import CommunityStats, ContributorProfile, RepositoryStats
from src.infrastructure.acl import GitHubTranslator
from src.infrastructure.github_client import GitHubRESTClient

logger = logging.getLogger(__name__)

# Number of contributors enriched with profile details
TOP_CONTRIBUTORS = 12


class CommunityService:
    """
    Service that gathers community statistics for the hub repository.

    Every remote lookup degrades to an empty or zero value on failure so the
    caller always receives a complete CommunityStats.
    """

    def __init__(self, github_client: GitHubRESTClient, repository: str):
        self.github_client = github_client
        self.repository = repository

    async def get_repository_stats(self, session: aiohttp.ClientSession) -> RepositoryStats:
        try:
            raw_repo = await self.github_client.fetch_repository(session, self.repository)
        except GitHubAPIException as e:
            logger.error(f"Failed to fetch repository stats: {e}")
            return RepositoryStats()
        return GitHubTranslator.to_repository_stats(raw_repo)

    async def get_open_issues_count(self, session: aiohttp.ClientSession) -> int:
        try:
            issues = await self.github_client.fetch_open_issues(session, self.repository)
        except GitHubAPIException as e:
            logger.error(f"Failed to fetch issues count: {e}")
            return 0
        return len(issues) if isinstance(issues, list) else 0

    async def get_contributors_count(self, session: aiohttp.ClientSession) -> int:
        try:
            raw_contributors = await self.github_client.fetch_contributors(session, self.repository)
        except GitHubAPIException as e:
            logger.error(f"Failed to fetch contributors: {e}")
            return 0
        return len(raw_contributors) if isinstance(raw_contributors, list) else 0

    async def get_contributors(
        self,
        session: aiohttp.ClientSession,
        limit: int = TOP_CONTRIBUTORS,
    ) -> List[ContributorProfile]:
        """
        Fetches the top contributors, enriched with their profile details.

        Args:
            session (aiohttp.ClientSession): The shared HTTP session.
            limit (int): How many contributors to enrich.

        Returns:
            List[ContributorProfile]: Contributors in GitHub's ranking order; empty on failure.
        """
        try:
            raw_contributors = await self.github_client.fetch_contributors(session, self.repository)
        except GitHubAPIException as e:
            logger.error(f"Failed to fetch contributors: {e}")
            return []

        if not isinstance(raw_contributors, list):
            logger.error("Unexpected contributors payload; expected a list.")
            return []

        top = [c for c in raw_contributors[:limit] if isinstance(c, dict) and c.get('login')]
        return list(await asyncio.gather(*(self._enrich(session, c) for c in top)))

    async def _enrich(self, session, raw_contributor) -> ContributorProfile:
        try:
            raw_user = await self.github_client.fetch_user(session, raw_contributor['login'])
        except GitHubAPIException as e:
            logger.warning(f"No profile details for '{raw_contributor['login']}': {e}")
            raw_user = None
        return GitHubTranslator.to_contributor(raw_contributor, raw_user)

    async def get_community_stats(self, session: aiohttp.ClientSession, total_servers: int) -> CommunityStats:
        """Combines repository, issue and contributor figures with the catalog size."""
        repo_stats, issues_count, contributors_count = await asyncio.gather(
            self.get_repository_stats(session),
            self.get_open_issues_count(session),
            self.get_contributors_count(session),
        )

        return CommunityStats(
            total_contributors=contributors_count,
            total_stars=repo_stats.stars,
            total_forks=repo_stats.forks,
            active_discussions=issues_count,
            total_servers=total_servers,
        )
