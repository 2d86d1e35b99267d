"""
Configuration management for the Dependabot merger.

Settings are read with Pydantic Settings from, in order of precedence, init
arguments, ``DEPENDABOT_MERGER_*`` environment variables, a ``.env`` file and
the TOML configuration file.
"""

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .classifier import DEFAULT_REBASE_MARKER
from .exceptions import ConfigurationError

DEFAULT_CONFIG_PATH = "config.toml"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DEPENDABOT_MERGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub configuration
    github_token: str = Field(..., description="GitHub personal access token")
    github_api_url: str = Field(
        default="https://api.github.com", description="GitHub API URL"
    )
    repos: str | list[str] = Field(
        default_factory=list,
        description="Repositories to process, in order (org/repo)",
    )

    # Dependency bot
    bot_login: str = Field(
        default="dependabot[bot]", description="Login of the dependency bot"
    )
    rebase_command: str = Field(
        default="@dependabot rebase", description="Comment that requests a rebase"
    )
    rebase_in_progress_marker: str = Field(
        default=DEFAULT_REBASE_MARKER,
        description="PR body text written by the bot while it rebases",
    )

    # Actions
    merge_method: str = Field(default="merge", description="merge, squash or rebase")
    approve_review_body: str = Field(default="", description="Approval review body")
    dry_run: bool = Field(default=False, description="Log actions without acting")

    # Logging configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="console", description="Log format")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @field_validator("github_token")
    @classmethod
    def validate_github_token(cls, v: str) -> str:
        """Reject blank tokens."""
        if not v.strip():
            raise ValueError("github_token must not be empty")
        return v.strip()

    @field_validator("rebase_command", "rebase_in_progress_marker")
    @classmethod
    def validate_bot_text(cls, v: str) -> str:
        """Reject blank bot command and marker text."""
        if not v.strip():
            raise ValueError("bot command and marker text must not be empty")
        return v

    @field_validator("repos", mode="before")
    @classmethod
    def parse_repos(cls, v: Any) -> list[str]:
        """Parse repositories from comma-separated string or list."""
        if isinstance(v, str):
            if not v.strip():
                return []
            return [repo.strip() for repo in v.split(",") if repo.strip()]
        elif isinstance(v, list):
            return [str(repo).strip() for repo in v if str(repo).strip()]
        else:
            error_msg = f"repos must be a string or list, got {type(v)}"
            raise ValueError(error_msg)

    @field_validator("merge_method")
    @classmethod
    def validate_merge_method(cls, v: str) -> str:
        """Validate merge method."""
        allowed_methods = {"merge", "squash", "rebase"}
        if v.lower() not in allowed_methods:
            raise ValueError(f"Invalid merge method: {v}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in {"json", "console"}:
            raise ValueError(f"Invalid log format: {v}")
        return v


def load_settings(
    config_path: str | Path = DEFAULT_CONFIG_PATH, **overrides: Any
) -> Settings:
    """
    Load settings from a TOML file, the environment and explicit overrides.

    Args:
        config_path: Path to the TOML configuration file
        **overrides: Values that take precedence over every other source

    Returns:
        Settings

    Raises:
        ConfigurationError: if the file is missing, unparsable or invalid
    """
    path = Path(config_path)
    if not path.is_file():
        raise ConfigurationError(
            f"Configuration file not found: {path}", context={"path": str(path)}
        )

    class FileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=path)

    try:
        return FileSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {path}: {e}", context={"path": str(path)}
        ) from e
    except (OSError, ValueError) as e:
        raise ConfigurationError(
            f"Failed to read configuration file {path}: {e}",
            context={"path": str(path)},
        ) from e
