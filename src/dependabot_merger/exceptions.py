"""
Custom exceptions for the Dependabot merger.

This module defines the exception hierarchy used to separate fatal startup
errors from per-repository failures.
"""

from typing import Any


class DependabotMergerError(Exception):
    """Base exception for Dependabot merger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code or "DEPENDABOT_MERGER_ERROR"
        self.context = context or {}


class ConfigurationError(DependabotMergerError):
    """Exception for configuration related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "CONFIGURATION_ERROR", context)


class AuthenticationError(DependabotMergerError):
    """Exception for authentication related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "AUTHENTICATION_ERROR", context)


class InvalidRepositoryError(DependabotMergerError):
    """Exception for repository identifiers that are not ``org/repo``."""

    def __init__(self, message: str, repository: str | None = None):
        super().__init__(message, "INVALID_REPOSITORY", {"repository": repository})
        self.repository = repository


class GitHubAPIError(DependabotMergerError):
    """Exception for GitHub API related errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "GITHUB_API_ERROR", context)
        self.status_code = status_code


class MergeRejectedError(GitHubAPIError):
    """The platform refused to merge a pull request."""

    def __init__(
        self,
        message: str,
        pr_number: int | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, status_code, context)
        self.code = "MERGE_REJECTED"
        self.pr_number = pr_number


class MalformedRemoteDataError(DependabotMergerError):
    """Exception for remote objects with an unexpected shape."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, "MALFORMED_REMOTE_DATA", context)
