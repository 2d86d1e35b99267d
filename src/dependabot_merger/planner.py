"""
Action planner for the Dependabot merger.

Given the classified dependency PRs of one repository, picks and performs at
most one merge and at most one rebase request.
"""

from dataclasses import dataclass

import structlog

from .exceptions import MergeRejectedError
from .github_client import GitHubClient
from .models import DependencyPr

logger = structlog.get_logger(__name__)

SKIP_NO_PRS = "no_dependency_prs"
SKIP_REBASE_IN_PROGRESS = "rebase_in_progress"


@dataclass
class PlanResult:
    """Outcome of planning one repository."""

    merged: DependencyPr | None = None
    rebase_requested: DependencyPr | None = None
    skipped_reason: str | None = None
    merge_error: str | None = None
    dry_run: bool = False

    @property
    def acted(self) -> bool:
        return self.merged is not None or self.rebase_requested is not None


def eligible_prs(prs: list[DependencyPr]) -> list[DependencyPr]:
    """Drop PRs whose target version carries build metadata."""
    return [pr for pr in prs if not pr.has_build_metadata]


def find_merge_candidate(prs: list[DependencyPr]) -> DependencyPr | None:
    """First PR with passing checks that is up to date with its base."""
    return next((pr for pr in prs if pr.checks_pass and pr.is_rebased), None)


def find_rebase_candidate(
    prs: list[DependencyPr], merged: DependencyPr | None = None
) -> DependencyPr | None:
    """First PR behind its base branch, never the PR merged in this run."""
    return next(
        (
            pr
            for pr in prs
            if not pr.is_rebased and (merged is None or pr.number != merged.number)
        ),
        None,
    )


class ActionPlanner:
    """
    Decides and performs the next action for one repository.

    Decisions are taken from the classified list passed in; remote state is
    not re-read between the merge and the rebase step.
    """

    def __init__(
        self,
        github_client: GitHubClient,
        rebase_command: str = "@dependabot rebase",
        merge_method: str = "merge",
        approve_review_body: str = "",
        dry_run: bool = False,
    ):
        """
        Initialize the planner.

        Args:
            github_client: GitHub API client
            rebase_command: Comment that asks the bot to rebase
            merge_method: merge, squash or rebase
            approve_review_body: Body of the approval review
            dry_run: Log the chosen actions without performing them
        """
        self.github_client = github_client
        self.rebase_command = rebase_command
        self.merge_method = merge_method
        self.approve_review_body = approve_review_body
        self.dry_run = dry_run

    async def plan_and_act(self, prs: list[DependencyPr]) -> PlanResult:
        """
        Merge at most one PR, then request a rebase of at most one PR.

        Args:
            prs: Classified PRs of a single repository, in scan order

        Returns:
            PlanResult describing what was done
        """
        result = PlanResult(dry_run=self.dry_run)
        if not prs:
            result.skipped_reason = SKIP_NO_PRS
            return result

        candidates = eligible_prs(prs)
        filtered = len(prs) - len(candidates)
        if filtered:
            logger.info(
                "Ignoring PRs with build metadata versions",
                repository=str(prs[0].repository),
                count=filtered,
                urls=[pr.url for pr in prs if pr.has_build_metadata],
            )

        if any(pr.rebase_in_progress for pr in candidates):
            logger.info(
                "One of the PRs is being rebased already, skipping further actions",
                repository=str(prs[0].repository),
            )
            result.skipped_reason = SKIP_REBASE_IN_PROGRESS
            return result

        to_merge = find_merge_candidate(candidates)
        if to_merge is not None:
            try:
                result.merged = await self._merge(to_merge)
            except MergeRejectedError as e:
                logger.info(
                    "Failed to merge PR",
                    repository=str(to_merge.repository),
                    pr_number=to_merge.number,
                    url=to_merge.url,
                    error=str(e),
                )
                result.merge_error = str(e)

        to_rebase = find_rebase_candidate(candidates, result.merged)
        if to_rebase is not None:
            await self._request_rebase(to_rebase)
            result.rebase_requested = to_rebase

        return result

    async def _merge(self, pr: DependencyPr) -> DependencyPr:
        """Approve and merge a PR; MergeRejectedError escapes only from the merge."""
        logger.info(
            "Would merge PR" if self.dry_run else "Merging PR",
            repository=str(pr.repository),
            pr_number=pr.number,
            url=pr.url,
            target_version=pr.target_version,
            dry_run=self.dry_run,
        )
        if self.dry_run:
            return pr

        await self.github_client.approve_pr(
            pr.repository, pr.number, self.approve_review_body
        )
        await self.github_client.merge_pr(pr.repository, pr.number, self.merge_method)
        return pr

    async def _request_rebase(self, pr: DependencyPr) -> None:
        logger.info(
            "Would rebase PR" if self.dry_run else "Rebasing PR",
            repository=str(pr.repository),
            pr_number=pr.number,
            url=pr.url,
            dry_run=self.dry_run,
        )
        if self.dry_run:
            return

        await self.github_client.create_comment(
            pr.repository, pr.number, self.rebase_command
        )
