"""
GitHub API client for the Dependabot merger.

This module wraps PyGithub with the handful of calls the merger needs and
translates PyGithub failures into the merger's own exceptions.
"""

from typing import Any

import structlog
from github import Auth, Github, GithubException
from github.CheckRun import CheckRun
from github.PullRequest import PullRequest
from github.Repository import Repository

from .exceptions import (
    AuthenticationError,
    GitHubAPIError,
    MalformedRemoteDataError,
    MergeRejectedError,
)
from .models import RepositoryRef

logger = structlog.get_logger(__name__)

# Git ref object types that carry a commit SHA usable as a branch head.
_SHA_REF_TYPES = {"commit", "tag"}


class GitHubClient:
    """
    GitHub API client authenticated with a personal access token.

    All calls are blocking PyGithub requests issued one after another; the
    client adds no retries or timeouts of its own.
    """

    def __init__(self, config: Any) -> None:
        """
        Initialize the GitHub client.

        Args:
            config: Settings object carrying ``github_token`` and ``github_api_url``

        Raises:
            AuthenticationError: if the client cannot be built from the token
        """
        self.config = config
        self._github = self._authenticate()
        self._repos: dict[str, Repository] = {}

    def _authenticate(self) -> Github:
        """Build an authenticated GitHub instance."""
        token = getattr(self.config, "github_token", None)
        if not token:
            raise AuthenticationError("GitHub token is not configured")

        try:
            github = Github(
                auth=Auth.Token(token),
                base_url=getattr(self.config, "github_api_url", None)
                or "https://api.github.com",
            )
        except Exception as e:
            logger.error("GitHub client construction failed", error=str(e))
            raise AuthenticationError(f"Failed to build GitHub client: {e}") from e

        logger.debug("GitHub client created (PAT mode)")
        return github

    def _get_repo(self, repo_ref: RepositoryRef) -> Repository:
        full_name = repo_ref.full_name
        if full_name not in self._repos:
            self._repos[full_name] = self._github.get_repo(full_name, lazy=True)
        return self._repos[full_name]

    async def list_open_pulls(self, repo_ref: RepositoryRef) -> list[PullRequest]:
        """
        List open pull requests of a repository.

        Args:
            repo_ref: Repository reference

        Returns:
            List of PullRequest objects, in API order
        """
        try:
            pulls = list(self._get_repo(repo_ref).get_pulls(state="open"))
            logger.debug(
                "Listed open pull requests", repository=str(repo_ref), count=len(pulls)
            )
            return pulls
        except GithubException as e:
            logger.error(
                "Failed to list pull requests", repository=str(repo_ref), error=str(e)
            )
            raise GitHubAPIError(
                f"Failed to list pull requests for {repo_ref}: {e}",
                status_code=e.status,
            ) from e

    async def get_check_runs(self, repo_ref: RepositoryRef, sha: str) -> list[CheckRun]:
        """
        Get all check runs for a commit.

        Args:
            repo_ref: Repository reference
            sha: Commit SHA

        Returns:
            List of CheckRun objects
        """
        try:
            commit = self._get_repo(repo_ref).get_commit(sha)
            return list(commit.get_check_runs())
        except GithubException as e:
            logger.error(
                "Failed to get check runs",
                repository=str(repo_ref),
                sha=sha,
                error=str(e),
            )
            raise GitHubAPIError(
                f"Failed to get check runs for {sha}: {e}", status_code=e.status
            ) from e

    async def get_branch_head_sha(self, repo_ref: RepositoryRef, branch: str) -> str:
        """
        Get the commit a branch currently points at.

        Args:
            repo_ref: Repository reference
            branch: Branch name

        Returns:
            Head commit SHA

        Raises:
            MalformedRemoteDataError: if the ref does not point at a commit or tag
        """
        try:
            ref = self._get_repo(repo_ref).get_git_ref(f"heads/{branch}")
        except GithubException as e:
            logger.error(
                "Failed to get branch ref",
                repository=str(repo_ref),
                branch=branch,
                error=str(e),
            )
            raise GitHubAPIError(
                f"Failed to get branch {branch}: {e}", status_code=e.status
            ) from e

        ref_object = ref.object
        if ref_object is None or ref_object.type not in _SHA_REF_TYPES:
            object_type = getattr(ref_object, "type", None)
            raise MalformedRemoteDataError(
                f"Branch {branch} of {repo_ref} points at a {object_type!r} object, "
                "expected a commit or tag",
                context={"repository": str(repo_ref), "branch": branch},
            )
        return ref_object.sha

    async def get_pull(self, repo_ref: RepositoryRef, number: int) -> PullRequest:
        """
        Get pull request by number.

        Args:
            repo_ref: Repository reference
            number: Pull request number

        Returns:
            PullRequest object
        """
        try:
            return self._get_repo(repo_ref).get_pull(number)
        except GithubException as e:
            logger.error(
                "Failed to get pull request",
                repository=str(repo_ref),
                pr_number=number,
                error=str(e),
            )
            raise GitHubAPIError(
                f"Failed to get PR {number}: {e}", status_code=e.status
            ) from e

    async def create_comment(
        self, repo_ref: RepositoryRef, number: int, body: str
    ) -> None:
        """
        Post a comment on a pull request.

        Args:
            repo_ref: Repository reference
            number: Pull request number
            body: Comment text
        """
        try:
            self._get_repo(repo_ref).get_issue(number).create_comment(body)
            logger.debug(
                "Comment created", repository=str(repo_ref), pr_number=number
            )
        except GithubException as e:
            logger.error(
                "Failed to create comment",
                repository=str(repo_ref),
                pr_number=number,
                error=str(e),
            )
            raise GitHubAPIError(
                f"Failed to comment on PR {number}: {e}", status_code=e.status
            ) from e

    async def approve_pr(
        self, repo_ref: RepositoryRef, number: int, review_body: str = ""
    ) -> bool:
        """
        Approve a pull request.

        Args:
            repo_ref: Repository reference
            number: Pull request number
            review_body: Review body text

        Returns:
            True if successful
        """
        try:
            pr = await self.get_pull(repo_ref, number)
            if review_body:
                pr.create_review(body=review_body, event="APPROVE")
            else:
                pr.create_review(event="APPROVE")

            logger.debug("PR approved", repository=str(repo_ref), pr_number=number)
            return True
        except GithubException as e:
            logger.error(
                "Failed to approve PR",
                repository=str(repo_ref),
                pr_number=number,
                error=str(e),
            )
            raise GitHubAPIError(
                f"Failed to approve PR {number}: {e}", status_code=e.status
            ) from e

    async def merge_pr(
        self, repo_ref: RepositoryRef, number: int, merge_method: str = "merge"
    ) -> bool:
        """
        Merge a pull request.

        Args:
            repo_ref: Repository reference
            number: Pull request number
            merge_method: merge, squash or rebase

        Returns:
            True if merged

        Raises:
            MergeRejectedError: if GitHub refuses the merge
        """
        try:
            pr = self._get_repo(repo_ref).get_pull(number)
            status = pr.merge(merge_method=merge_method)
        except GithubException as e:
            raise MergeRejectedError(
                f"GitHub rejected merge of PR {number}: {e}",
                pr_number=number,
                status_code=e.status,
            ) from e

        if not status.merged:
            raise MergeRejectedError(
                f"GitHub did not merge PR {number}: {status.message}",
                pr_number=number,
            )
        return True
