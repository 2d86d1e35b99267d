"""
Run orchestrator for the Dependabot merger.

Processes the configured repositories one after another and keeps a failure
in one repository from affecting the others.
"""

from dataclasses import dataclass, field

import structlog

from .config import Settings
from .github_client import GitHubClient
from .models import RepositoryRef
from .planner import SKIP_NO_PRS, ActionPlanner, PlanResult
from .scanner import RepositoryScanner

logger = structlog.get_logger(__name__)


@dataclass
class RepositoryOutcome:
    """Result of processing one configured repository."""

    repository: str
    result: PlanResult | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class RunSummary:
    """Results of one run over all configured repositories."""

    outcomes: list[RepositoryOutcome] = field(default_factory=list)

    @property
    def merged(self) -> int:
        return sum(1 for o in self.outcomes if o.result and o.result.merged)

    @property
    def rebases_requested(self) -> int:
        return sum(1 for o in self.outcomes if o.result and o.result.rebase_requested)

    @property
    def failed(self) -> list[str]:
        return [o.repository for o in self.outcomes if not o.succeeded]


class RunOrchestrator:
    """
    Runs the scan and plan steps over every configured repository.

    Repositories are handled strictly sequentially in configured order.
    """

    def __init__(
        self,
        settings: Settings,
        github_client: GitHubClient,
        scanner: RepositoryScanner | None = None,
        planner: ActionPlanner | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            settings: Application settings
            github_client: GitHub API client
            scanner: Repository scanner, built from settings if omitted
            planner: Action planner, built from settings if omitted
        """
        self.settings = settings
        self.github_client = github_client
        self.scanner = scanner or RepositoryScanner(
            github_client,
            bot_login=settings.bot_login,
            rebase_marker=settings.rebase_in_progress_marker,
        )
        self.planner = planner or ActionPlanner(
            github_client,
            rebase_command=settings.rebase_command,
            merge_method=settings.merge_method,
            approve_review_body=settings.approve_review_body,
            dry_run=settings.dry_run,
        )

    async def run(self) -> RunSummary:
        """
        Process every configured repository.

        Returns:
            RunSummary with one outcome per repository
        """
        repos = self.settings.repos

        logger.info(
            "Starting run", repositories=len(repos), dry_run=self.settings.dry_run
        )

        summary = RunSummary()
        for repo in repos:
            summary.outcomes.append(await self.process_repository(repo))

        logger.info(
            "Run complete",
            repositories=len(summary.outcomes),
            merged=summary.merged,
            rebases_requested=summary.rebases_requested,
            failed=summary.failed,
        )
        return summary

    async def process_repository(self, repo: str) -> RepositoryOutcome:
        """
        Scan one repository and act on it, logging any failure.

        Args:
            repo: Repository full name (org/repo)

        Returns:
            RepositoryOutcome
        """
        try:
            repo_ref = RepositoryRef.parse(repo)
            prs = await self.scanner.scan(repo_ref)
            result = await self.planner.plan_and_act(prs)
        except Exception as e:
            logger.error(
                "Failed to process repository",
                repository=repo,
                error=str(e),
                error_type=type(e).__name__,
            )
            return RepositoryOutcome(repository=repo, error=str(e))

        if result.skipped_reason == SKIP_NO_PRS:
            logger.info("No dependency PRs to merge", repository=repo)
        elif not result.acted:
            logger.info(
                "No action taken",
                repository=repo,
                reason=result.skipped_reason,
                merge_error=result.merge_error,
            )

        return RepositoryOutcome(repository=repo, result=result)
