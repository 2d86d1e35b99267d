"""
Command-line entry point for the Dependabot merger.

This module configures logging, loads settings, builds the GitHub client and
performs a single run over the configured repositories.
"""

import argparse
import asyncio
import logging
import sys

import structlog

from .config import DEFAULT_CONFIG_PATH, Settings, load_settings
from .exceptions import AuthenticationError, ConfigurationError
from .github_client import GitHubClient
from .orchestrator import RunOrchestrator, RunSummary


def setup_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Configure structured logging."""
    logging.basicConfig(
        level=getattr(logging, log_level), format="%(message)s", force=True
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.processors.JSONRenderer()
                if log_format == "json"
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


async def run(settings: Settings) -> RunSummary:
    """Build the GitHub client and process every configured repository."""
    github_client = GitHubClient(settings)
    orchestrator = RunOrchestrator(settings, github_client)
    return await orchestrator.run()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dependabot-merger",
        description="Rebase and merge Dependabot pull requests",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the TOML configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the actions that would be taken without performing them",
    )
    parser.add_argument("--log-level", help="Override the configured log level")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    overrides: dict[str, object] = {}
    if args.dry_run:
        overrides["dry_run"] = True
    if args.log_level:
        overrides["log_level"] = args.log_level

    try:
        settings = load_settings(args.config, **overrides)
    except ConfigurationError as e:
        setup_logging()
        structlog.get_logger(__name__).error(
            "Failed to load configuration", error=str(e)
        )
        return 1

    setup_logging(settings.log_level, settings.log_format)
    logger = structlog.get_logger(__name__)

    try:
        asyncio.run(run(settings))
    except AuthenticationError as e:
        logger.error("Failed to initialize GitHub client", error=str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
