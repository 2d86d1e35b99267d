"""
PR state classification.

Turns the raw GitHub data gathered for one dependency PR into an immutable
DependencyPr decision record.
"""

from collections.abc import Iterable

from .models import DependencyPr, RepositoryRef
from .versions import extract_target_version

DEFAULT_REBASE_MARKER = "Dependabot is rebasing this PR"

FAILURE_CONCLUSION = "failure"


def checks_pass(conclusions: Iterable[str | None]) -> bool:
    """
    Check whether a set of check-run conclusions allows merging.

    Only an explicit ``failure`` blocks; pending, skipped and neutral runs do
    not. An empty set passes.
    """
    return all(conclusion != FAILURE_CONCLUSION for conclusion in conclusions)


def classify_pr(
    repository: RepositoryRef,
    number: int,
    url: str | None,
    check_conclusions: Iterable[str | None],
    pr_base_sha: str,
    base_head_sha: str,
    body: str | None,
    title: str | None,
    rebase_marker: str = DEFAULT_REBASE_MARKER,
) -> DependencyPr:
    """
    Build the decision record for one dependency PR.

    Args:
        repository: Repository the PR belongs to
        number: Pull request number
        url: HTML URL of the PR, if known
        check_conclusions: Conclusions of the check runs on the PR head commit
        pr_base_sha: Base commit recorded on the PR
        base_head_sha: Current head commit of the PR's base branch
        body: PR description
        title: PR title
        rebase_marker: Body text the bot writes while it rebases the PR

    Returns:
        DependencyPr
    """
    return DependencyPr(
        url=url or "",
        number=number,
        repository=repository,
        checks_pass=checks_pass(check_conclusions),
        is_rebased=pr_base_sha == base_head_sha,
        rebase_in_progress=bool(body) and rebase_marker in body,
        target_version=extract_target_version(title or "") or "",
    )
