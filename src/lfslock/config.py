"""Project configuration system for lfslock.

Loads project-specific settings from .lfslock/config.yaml so the git
program, command timeout and state locations can be tuned per repository.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from lfslock.errors import ConfigError
from lfslock.workspace import find_repo_root


def _seconds(value: Any, key: str, allow_none: bool = False) -> Optional[float]:
    """Validate a positive duration in seconds from a config file.

    Raises:
        ConfigError: If the value is not a positive number (or null where allowed).
    """
    if value is None and allow_none:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{key} must be a positive number of seconds, got {value!r}")
    return float(value)


@dataclass
class GitConfig:
    """How the git lfs backend is invoked."""
    program: str = "git"
    timeout: Optional[float] = 60.0  # seconds, None waits forever
    show_progress: bool = True


@dataclass
class PreferencesConfig:
    """Where persistent preferences (the disable toggle) are stored."""
    path: str = ".lfslock/preferences.json"


@dataclass
class WatchConfig:
    """Modified-file watcher settings."""
    interval: float = 2.0  # seconds between passes


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    dir: Optional[str] = ".lfslock/logs"


@dataclass
class ProjectConfig:
    """Top-level project configuration."""
    git: GitConfig = field(default_factory=GitConfig)
    preferences: PreferencesConfig = field(default_factory=PreferencesConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    repo_root: Path = field(default_factory=Path.cwd)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'ProjectConfig':
        """Create a ProjectConfig from a dictionary (parsed YAML/JSON)."""
        config = ProjectConfig()

        git_data = data.get("git") or {}
        config.git = GitConfig(
            program=git_data.get("program", "git"),
            timeout=_seconds(git_data.get("timeout", 60.0), "git.timeout", allow_none=True),
            show_progress=git_data.get("show_progress", True),
        )

        prefs_data = data.get("preferences") or {}
        config.preferences = PreferencesConfig(
            path=prefs_data.get("path", ".lfslock/preferences.json"),
        )

        watch_data = data.get("watch") or {}
        config.watch = WatchConfig(
            interval=_seconds(watch_data.get("interval", 2.0), "watch.interval"),
        )

        logging_data = data.get("logging") or {}
        config.logging = LoggingConfig(
            level=str(logging_data.get("level", "INFO")).upper(),
            dir=logging_data.get("dir", ".lfslock/logs"),
        )

        return config

    def preferences_path(self) -> Path:
        """Absolute path of the preferences file."""
        path = Path(self.preferences.path)
        return path if path.is_absolute() else self.repo_root / path

    def log_dir(self) -> Optional[Path]:
        """Absolute path of the log directory, None if file logging is off."""
        if not self.logging.dir:
            return None
        path = Path(self.logging.dir)
        return path if path.is_absolute() else self.repo_root / path


def _load_config_file(config_path: Path) -> Dict[str, Any]:
    """Load a config file (YAML or JSON).

    Args:
        config_path: Path to the config file.

    Returns:
        Parsed configuration dictionary.

    Raises:
        ConfigError: If the file cannot be read, parsed, or has an unknown suffix.
    """
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    try:
        if config_path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        elif config_path.suffix == ".json":
            data = json.loads(content)
        else:
            raise ConfigError(f"Unsupported config file format: {config_path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    return data if isinstance(data, dict) else {}


# Module-level cached config
_cached_config: Optional[ProjectConfig] = None


def load_config(config_path: Optional[Path] = None) -> ProjectConfig:
    """Load the project configuration.

    Searches for config in this order:
    1. Explicit path (if provided)
    2. .lfslock/config.yaml
    3. .lfslock/config.yml
    4. .lfslock/config.json
    5. lfslock.config.json (repo root)

    If no config file is found, returns defaults.

    Args:
        config_path: Optional explicit path to config file.

    Returns:
        Loaded ProjectConfig.
    """
    global _cached_config

    if _cached_config is not None and config_path is None:
        return _cached_config

    repo_root = find_repo_root()

    if config_path is not None:
        config = ProjectConfig.from_dict(_load_config_file(config_path))
        config.repo_root = repo_root
        _cached_config = config
        return config

    candidates = [
        repo_root / ".lfslock" / "config.yaml",
        repo_root / ".lfslock" / "config.yml",
        repo_root / ".lfslock" / "config.json",
        repo_root / "lfslock.config.json",
    ]

    for candidate in candidates:
        if candidate.exists():
            config = ProjectConfig.from_dict(_load_config_file(candidate))
            config.repo_root = repo_root
            _cached_config = config
            return config

    # No config file found - use defaults
    config = ProjectConfig(repo_root=repo_root)
    _cached_config = config
    return config


def reset_config() -> None:
    """Reset the cached configuration (useful for testing)."""
    global _cached_config
    _cached_config = None

