"""
Pytest configuration and fixtures for Dependabot merger tests.
"""

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from dependabot_merger.config import Settings
from dependabot_merger.github_client import GitHubClient
from dependabot_merger.models import DependencyPr, RepositoryRef


@pytest.fixture
def mock_settings() -> Settings:
    """Mock settings for testing."""
    return Settings(
        github_token="test-token",
        repos=["test-org/repo-a", "test-org/repo-b"],
        log_level="DEBUG",
    )


@pytest.fixture
def repo_ref() -> RepositoryRef:
    return RepositoryRef(org="test-org", repo="repo-a")


@pytest.fixture
def mock_github_client() -> AsyncMock:
    """Mock GitHub client for testing."""
    client = AsyncMock(spec=GitHubClient)
    client.list_open_pulls.return_value = []
    client.get_check_runs.return_value = []
    client.get_branch_head_sha.return_value = "base-head"
    client.approve_pr.return_value = True
    client.merge_pr.return_value = True
    return client


@pytest.fixture
def make_pr(repo_ref: RepositoryRef) -> Callable[..., DependencyPr]:
    """Factory for classified dependency PRs."""

    def _make_pr(
        number: int,
        checks_pass: bool = True,
        is_rebased: bool = True,
        rebase_in_progress: bool = False,
        target_version: str = "1.2.4",
    ) -> DependencyPr:
        return DependencyPr(
            url=f"https://github.com/test-org/repo-a/pull/{number}",
            number=number,
            repository=repo_ref,
            checks_pass=checks_pass,
            is_rebased=is_rebased,
            rebase_in_progress=rebase_in_progress,
            target_version=target_version,
        )

    return _make_pr


@pytest.fixture
def make_pull() -> Callable[..., MagicMock]:
    """Factory for PyGithub-like pull request objects."""

    def _make_pull(
        number: int,
        login: str = "dependabot[bot]",
        title: str = "Bump foo from 1.2.3 to 1.2.4",
        body: str | None = "Bumps foo from 1.2.3 to 1.2.4.",
        base_sha: str = "base-head",
        base_ref: str = "main",
        head_sha: str | None = None,
    ) -> MagicMock:
        pull = MagicMock()
        pull.number = number
        pull.user.login = login
        pull.title = title
        pull.body = body
        pull.html_url = f"https://github.com/test-org/repo-a/pull/{number}"
        pull.base.sha = base_sha
        pull.base.ref = base_ref
        pull.head.sha = head_sha or f"head-{number}"
        return pull

    return _make_pull


@pytest.fixture
def make_check_run() -> Callable[[str | None], MagicMock]:
    """Factory for PyGithub-like check run objects."""

    def _make_check_run(conclusion: str | None) -> MagicMock:
        run = MagicMock()
        run.conclusion = conclusion
        return run

    return _make_check_run
