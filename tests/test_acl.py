import unittest

from src.infrastructure.acl import GitHubTranslator


class TestGitHubTranslator(unittest.TestCase):
    def test_to_repository_stats_reads_counters(self) -> None:
        raw_repo = {
            "full_name": "seefor/network-mcp-hub",
            "stargazers_count": 123,
            "forks_count": 7,
        }

        stats = GitHubTranslator.to_repository_stats(raw_repo)

        self.assertEqual(stats.stars, 123)
        self.assertEqual(stats.forks, 7)

    def test_to_repository_stats_defaults_to_zero(self) -> None:
        stats = GitHubTranslator.to_repository_stats({"stargazers_count": None})

        self.assertEqual(stats.stars, 0)
        self.assertEqual(stats.forks, 0)

    def test_to_contributor_merges_user_details(self) -> None:
        raw_contributor = {"login": "octocat", "avatar_url": "https://avatars/1", "contributions": 42}
        raw_user = {"name": "The Octocat", "company": "@github", "blog": ""}

        profile = GitHubTranslator.to_contributor(raw_contributor, raw_user)

        self.assertEqual(profile.name, "The Octocat")
        self.assertEqual(profile.contributions, 42)
        self.assertEqual(profile.company, "@github")
        self.assertIsNone(profile.blog)

    def test_to_contributor_falls_back_to_login(self) -> None:
        profile = GitHubTranslator.to_contributor({"login": "octocat"})

        self.assertEqual(profile.name, "octocat")
        self.assertEqual(profile.avatar_url, "")

    def test_missing_login_raises(self) -> None:
        with self.assertRaises(ValueError):
            GitHubTranslator.to_contributor({"contributions": 3})
