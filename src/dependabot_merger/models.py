"""
Data models for the Dependabot merger.

Both models are immutable and rebuilt from live GitHub state on every run.
"""

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import InvalidRepositoryError


class RepositoryRef(BaseModel):
    """A GitHub repository identified by owner and name."""

    model_config = ConfigDict(frozen=True)

    org: str = Field(..., min_length=1, description="Repository owner")
    repo: str = Field(..., min_length=1, description="Repository name")

    @classmethod
    def parse(cls, full_name: str) -> "RepositoryRef":
        """
        Build a reference from an ``org/repo`` string.

        Args:
            full_name: Repository full name

        Returns:
            RepositoryRef

        Raises:
            InvalidRepositoryError: if either part is missing or empty
        """
        parts = full_name.strip().split("/")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise InvalidRepositoryError(
                f"Repository must be in 'org/repo' format, got {full_name!r}",
                repository=full_name,
            )
        return cls(org=parts[0], repo=parts[1])

    @property
    def full_name(self) -> str:
        return f"{self.org}/{self.repo}"

    def __str__(self) -> str:
        return self.full_name


class DependencyPr(BaseModel):
    """Classified state of one open pull request opened by the dependency bot."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(default="", description="HTML URL, empty if unavailable")
    number: int = Field(..., description="Pull request number")
    repository: RepositoryRef

    checks_pass: bool = Field(..., description="No check run concluded 'failure'")
    # PR base commit equals the base branch head.
    is_rebased: bool
    rebase_in_progress: bool

    target_version: str = Field(
        default="", description="Version bumped to, empty if it could not be parsed"
    )

    @property
    def has_build_metadata(self) -> bool:
        """True when the target version carries a ``+build`` suffix."""
        return "+" in self.target_version
