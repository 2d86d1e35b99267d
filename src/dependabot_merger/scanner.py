"""
Repository scanner for the Dependabot merger.

Collects the open pull requests opened by the dependency bot in one
repository and classifies each of them.
"""

import structlog

from .classifier import DEFAULT_REBASE_MARKER, classify_pr
from .github_client import GitHubClient
from .models import DependencyPr, RepositoryRef

logger = structlog.get_logger(__name__)


class RepositoryScanner:
    """
    Scanner for dependency-bot pull requests.

    Any failed read aborts the scan of the repository; no partial list is
    returned.
    """

    def __init__(
        self,
        github_client: GitHubClient,
        bot_login: str = "dependabot[bot]",
        rebase_marker: str = DEFAULT_REBASE_MARKER,
    ):
        """
        Initialize the scanner.

        Args:
            github_client: GitHub API client
            bot_login: Author login of the dependency bot
            rebase_marker: PR body text the bot writes while rebasing
        """
        self.github_client = github_client
        self.bot_login = bot_login
        self.rebase_marker = rebase_marker

    async def scan(self, repo_ref: RepositoryRef) -> list[DependencyPr]:
        """
        Classify every open bot PR of a repository.

        Args:
            repo_ref: Repository reference

        Returns:
            Classified PRs in the order GitHub lists them
        """
        pulls = await self.github_client.list_open_pulls(repo_ref)
        bot_pulls = [
            pull
            for pull in pulls
            if pull.user is not None and pull.user.login == self.bot_login
        ]

        logger.info(
            "Scanning dependency PRs",
            repository=str(repo_ref),
            open_prs=len(pulls),
            bot_prs=len(bot_pulls),
        )

        prs = []
        for pull in bot_pulls:
            check_runs = await self.github_client.get_check_runs(
                repo_ref, pull.head.sha
            )
            base_head_sha = await self.github_client.get_branch_head_sha(
                repo_ref, pull.base.ref
            )
            # Base SHA, body and title come from the single-PR endpoint.
            detail = await self.github_client.get_pull(repo_ref, pull.number)

            pr = classify_pr(
                repository=repo_ref,
                number=detail.number,
                url=detail.html_url,
                check_conclusions=[run.conclusion for run in check_runs],
                pr_base_sha=detail.base.sha,
                base_head_sha=base_head_sha,
                body=detail.body,
                title=detail.title,
                rebase_marker=self.rebase_marker,
            )
            logger.debug(
                "Classified dependency PR",
                repository=str(repo_ref),
                pr_number=pr.number,
                checks_pass=pr.checks_pass,
                is_rebased=pr.is_rebased,
                rebase_in_progress=pr.rebase_in_progress,
                target_version=pr.target_version,
            )
            prs.append(pr)

        return prs
