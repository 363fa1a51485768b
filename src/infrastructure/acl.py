from typing import Any, Dict, Optional
from src.domain.models import ContributorProfile, RepositoryStats

class GitHubTranslator:
    """
    Anti-corruption layer that translates raw GitHub REST JSON payloads into community models.
    """

    @staticmethod
    def to_repository_stats(raw_repo: Dict[str, Any]) -> RepositoryStats:
        """
        Transforms a raw ``/repos/{owner}/{name}`` payload into RepositoryStats.

        Args:
            raw_repo (Dict[str, Any]): The decoded repository payload.

        Returns:
            RepositoryStats: Star and fork counters, zero when absent.
        """
        return RepositoryStats(
            stars=raw_repo.get('stargazers_count') or 0,
            forks=raw_repo.get('forks_count') or 0,
        )

    @staticmethod
    def to_contributor(
        raw_contributor: Dict[str, Any],
        raw_user: Optional[Dict[str, Any]] = None,
    ) -> ContributorProfile:
        """
        Merges a ``/contributors`` entry with the optional ``/users/{login}`` details.
        Without details, the login doubles as the display name.
        """
        login = raw_contributor.get('login')
        if not login:
            raise ValueError("login is required to build ContributorProfile.")

        user_data = raw_user or {}
        return ContributorProfile(
            login=login,
            avatar_url=raw_contributor.get('avatar_url') or '',
            contributions=raw_contributor.get('contributions') or 0,
            name=user_data.get('name') or login,
            company=user_data.get('company') or None,
            blog=user_data.get('blog') or None,
        )
