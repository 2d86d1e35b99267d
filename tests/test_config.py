"""
Tests for configuration loading and validation.
"""

import os
from unittest.mock import patch

import pytest

from dependabot_merger.config import Settings, load_settings
from dependabot_merger.exceptions import ConfigurationError

CONFIG_TOML = """
github_token = "file-token"
repos = ["test-org/repo-a", "test-org/repo-b"]
"""


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """A config.toml in an isolated working directory."""
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TOML, encoding="utf-8")
    return path


class TestLoadSettings:
    """Test load_settings."""

    def test_load_from_file(self, config_file):
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings(config_file)

        assert settings.github_token == "file-token"
        assert settings.repos == ["test-org/repo-a", "test-org/repo-b"]
        assert settings.bot_login == "dependabot[bot]"
        assert settings.rebase_command == "@dependabot rebase"
        assert settings.merge_method == "merge"
        assert settings.dry_run is False

    def test_environment_overrides_file(self, config_file):
        with patch.dict(
            os.environ,
            {
                "DEPENDABOT_MERGER_GITHUB_TOKEN": "env-token",
                "DEPENDABOT_MERGER_REPOS": "other-org/one, other-org/two",
                "DEPENDABOT_MERGER_DRY_RUN": "true",
            },
            clear=True,
        ):
            settings = load_settings(config_file)

        assert settings.github_token == "env-token"
        assert settings.repos == ["other-org/one", "other-org/two"]
        assert settings.dry_run is True

    def test_overrides_take_precedence(self, config_file):
        env = {"DEPENDABOT_MERGER_LOG_LEVEL": "info"}
        with patch.dict(os.environ, env, clear=True):
            settings = load_settings(config_file, log_level="debug", dry_run=True)

        assert settings.log_level == "DEBUG"
        assert settings.dry_run is True

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigurationError, match="not found"):
            load_settings(tmp_path / "missing.toml")

    def test_unparsable_file(self, config_file):
        config_file.write_text("github_token = [unterminated", encoding="utf-8")
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError):
                load_settings(config_file)

    def test_missing_token(self, config_file):
        config_file.write_text('repos = ["test-org/repo-a"]\n', encoding="utf-8")
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError, match="github_token"):
                load_settings(config_file)

    def test_malformed_repository_is_kept_for_the_run(self, config_file):
        config_file.write_text(
            'github_token = "t"\nrepos = ["not-a-repo", "test-org/repo-a", " "]\n',
            encoding="utf-8",
        )
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings(config_file)

        assert settings.repos == ["not-a-repo", "test-org/repo-a"]


class TestSettingsValidation:
    """Test field validators."""

    def test_blank_token_rejected(self):
        with pytest.raises(ValueError, match="github_token must not be empty"):
            Settings(github_token="   ")

    def test_repos_from_comma_separated_string(self):
        settings = Settings(github_token="t", repos="a/b, c/d,")
        assert settings.repos == ["a/b", "c/d"]

    def test_repos_empty_string(self):
        assert Settings(github_token="t", repos="").repos == []

    @pytest.mark.parametrize("field", ["rebase_command", "rebase_in_progress_marker"])
    def test_blank_bot_text_rejected(self, field):
        with pytest.raises(ValueError, match="must not be empty"):
            Settings(github_token="t", **{field: "  "})

    def test_merge_method(self):
        settings = Settings(github_token="t", merge_method="SQUASH")
        assert settings.merge_method == "squash"
        with pytest.raises(ValueError, match="Invalid merge method"):
            Settings(github_token="t", merge_method="octopus")

    def test_log_level(self):
        assert Settings(github_token="t", log_level="warning").log_level == "WARNING"
        with pytest.raises(ValueError, match="Invalid log level"):
            Settings(github_token="t", log_level="LOUD")

    def test_log_format(self):
        with pytest.raises(ValueError, match="Invalid log format"):
            Settings(github_token="t", log_format="xml")
