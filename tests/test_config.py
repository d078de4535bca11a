"""Tests for the project configuration system."""

import json
from pathlib import Path

import pytest

from lfslock.config import (
    GitConfig,
    LoggingConfig,
    ProjectConfig,
    _load_config_file,
    load_config,
)
from lfslock.errors import ConfigError


class TestDefaults:
    """Tests for default configuration values."""

    def test_git_defaults(self):
        config = GitConfig()
        assert config.program == "git"
        assert config.timeout == 60.0
        assert config.show_progress is True

    def test_logging_defaults(self):
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.dir == ".lfslock/logs"

    def test_project_defaults(self):
        config = ProjectConfig()
        assert config.preferences.path == ".lfslock/preferences.json"
        assert config.watch.interval == 2.0


class TestFromDict:
    """Tests for ProjectConfig.from_dict."""

    def test_full(self):
        config = ProjectConfig.from_dict({
            "git": {"program": "/usr/bin/git", "timeout": None, "show_progress": False},
            "preferences": {"path": "state/prefs.json"},
            "watch": {"interval": 5},
            "logging": {"level": "debug", "dir": None},
        })
        assert config.git.program == "/usr/bin/git"
        assert config.git.timeout is None
        assert config.git.show_progress is False
        assert config.preferences.path == "state/prefs.json"
        assert config.watch.interval == 5.0
        assert config.logging.level == "DEBUG"
        assert config.logging.dir is None

    def test_empty_sections(self):
        config = ProjectConfig.from_dict({"git": None, "watch": {}})
        assert config.git.program == "git"
        assert config.watch.interval == 2.0

    def test_paths_resolved_against_repo_root(self, tmp_path: Path):
        config = ProjectConfig(repo_root=tmp_path)
        assert config.preferences_path() == tmp_path / ".lfslock" / "preferences.json"
        assert config.log_dir() == tmp_path / ".lfslock" / "logs"

    def test_absolute_paths_kept(self, tmp_path: Path):
        config = ProjectConfig.from_dict({
            "preferences": {"path": str(tmp_path / "p.json")},
            "logging": {"dir": str(tmp_path / "logs")},
        })
        assert config.preferences_path() == tmp_path / "p.json"
        assert config.log_dir() == tmp_path / "logs"

    @pytest.mark.parametrize("watch", [{"interval": None}, {"interval": "fast"}, {"interval": 0}, {"interval": True}])
    def test_bad_interval_raises_config_error(self, watch):
        with pytest.raises(ConfigError, match="watch.interval"):
            ProjectConfig.from_dict({"watch": watch})

    @pytest.mark.parametrize("timeout", ["60", -1, [5]])
    def test_bad_timeout_raises_config_error(self, timeout):
        with pytest.raises(ConfigError, match="git.timeout"):
            ProjectConfig.from_dict({"git": {"timeout": timeout}})

    def test_integer_durations_accepted(self):
        config = ProjectConfig.from_dict({"git": {"timeout": 30}, "watch": {"interval": 1}})
        assert config.git.timeout == 30.0
        assert config.watch.interval == 1.0

    def test_file_logging_disabled(self):
        config = ProjectConfig.from_dict({"logging": {"dir": None}})
        assert config.log_dir() is None


class TestLoadConfigFile:
    """Tests for _load_config_file."""

    def test_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("git:\n  program: mygit\n", encoding="utf-8")
        assert _load_config_file(path) == {"git": {"program": "mygit"}}

    def test_json(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"watch": {"interval": 1}}), encoding="utf-8")
        assert _load_config_file(path) == {"watch": {"interval": 1}}

    def test_non_mapping_yields_empty(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert _load_config_file(path) == {}

    def test_unsupported_suffix(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigError):
            _load_config_file(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("git: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            _load_config_file(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            _load_config_file(tmp_path / "missing.yaml")


class TestLoadConfig:
    """Tests for config discovery and caching."""

    def test_defaults_without_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_config()
        assert config.git.program == "git"
        assert config.repo_root == tmp_path.resolve()

    def test_finds_yaml_at_repo_root(self, tmp_path: Path, monkeypatch):
        (tmp_path / ".git").mkdir()
        (tmp_path / ".lfslock").mkdir()
        (tmp_path / ".lfslock" / "config.yaml").write_text(
            "git:\n  program: repo-git\n", encoding="utf-8"
        )
        sub = tmp_path / "Assets"
        sub.mkdir()
        monkeypatch.chdir(sub)

        config = load_config()

        assert config.git.program == "repo-git"
        assert config.repo_root == tmp_path.resolve()

    def test_yaml_preferred_over_json(self, tmp_path: Path, monkeypatch):
        (tmp_path / ".lfslock").mkdir()
        (tmp_path / ".lfslock" / "config.yaml").write_text("git:\n  program: y\n", encoding="utf-8")
        (tmp_path / "lfslock.config.json").write_text('{"git": {"program": "j"}}', encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert load_config().git.program == "y"

    def test_explicit_path(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "custom.json"
        path.write_text('{"git": {"program": "custom"}}', encoding="utf-8")

        assert load_config(path).git.program == "custom"

    def test_cached(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        first = load_config()
        (tmp_path / "lfslock.config.json").write_text('{"git": {"program": "new"}}', encoding="utf-8")

        assert load_config() is first
