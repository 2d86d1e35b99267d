"""
Dependabot merger

Rebases and merges Dependabot dependency update PRs across a list of GitHub
repositories, one action at a time.
"""

__version__ = "0.1.0"

from .classifier import classify_pr
from .config import Settings, load_settings
from .exceptions import DependabotMergerError
from .github_client import GitHubClient
from .models import DependencyPr, RepositoryRef
from .orchestrator import RunOrchestrator
from .planner import ActionPlanner
from .scanner import RepositoryScanner
from .versions import extract_target_version

__all__ = [
    "Settings",
    "load_settings",
    "GitHubClient",
    "RepositoryRef",
    "DependencyPr",
    "RepositoryScanner",
    "ActionPlanner",
    "RunOrchestrator",
    "DependabotMergerError",
    "classify_pr",
    "extract_target_version",
]
