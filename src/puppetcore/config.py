"""PuppetCore configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from puppetcore.models import (
    DEFAULT_CLICK_TIMEOUT_MS,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_PROFILE_DIRNAME,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_VIEWPORT,
    DEFAULT_WINDOW_SIZE,
    SETTLE_DELAY_MS,
)

PROJECT_DIRNAME = ".puppetcore"


class PuppetConfigError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


@dataclass
class PuppetConfig:
    """Configuration for a PuppetCore session."""

    project_dir: Path = field(default_factory=lambda: Path(PROJECT_DIRNAME))

    # Engine timing (milliseconds)
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    settle_delay_ms: int = SETTLE_DELAY_MS
    click_timeout_ms: int = DEFAULT_CLICK_TIMEOUT_MS

    # Browser session
    headless: bool = False
    viewport: tuple[int, int] = DEFAULT_VIEWPORT
    window_size: tuple[int, int] = DEFAULT_WINDOW_SIZE
    user_data_dir: Path = field(default_factory=lambda: Path(PROJECT_DIRNAME) / DEFAULT_PROFILE_DIRNAME)
    chrome_path: str | None = None

    @classmethod
    def from_file(cls, config_path: Path) -> PuppetConfig:
        """Load config from a YAML file."""
        if not config_path.exists():
            raise PuppetConfigError(f"Config file not found: {config_path}\n\nTo fix: create {config_path}")
        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise PuppetConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PuppetConfigError(f"Config file must be a YAML mapping: {config_path}")
        return cls._from_dict(data, config_path.parent)

    @classmethod
    def default(cls, project_dir: Path) -> PuppetConfig:
        """Defaults rooted at ``project_dir``, with CHROME_PATH from the environment."""
        return cls._from_dict({}, project_dir)

    @classmethod
    def _from_dict(cls, data: dict[str, Any], project_dir: Path) -> PuppetConfig:
        """Create config from a dictionary."""
        config = cls()
        config.project_dir = project_dir

        for key in ("timeout_ms", "poll_interval_ms", "settle_delay_ms", "click_timeout_ms"):
            if key in data:
                setattr(config, key, _non_negative_int(key, data[key]))
        if config.poll_interval_ms == 0:
            raise PuppetConfigError("poll_interval_ms must be greater than 0")

        if "headless" in data:
            config.headless = bool(data["headless"])
        if "viewport" in data:
            config.viewport = _size("viewport", data["viewport"], DEFAULT_VIEWPORT)
        if "window_size" in data:
            config.window_size = _size("window_size", data["window_size"], DEFAULT_WINDOW_SIZE)

        if data.get("user_data_dir"):
            config.user_data_dir = (project_dir / Path(data["user_data_dir"]).expanduser()).resolve()
        else:
            config.user_data_dir = project_dir / DEFAULT_PROFILE_DIRNAME

        config.chrome_path = data.get("chrome_path") or os.environ.get("CHROME_PATH") or None

        return config


def _non_negative_int(key: str, value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise PuppetConfigError(f"{key} must be an integer, got {value!r}") from exc
    if number < 0:
        raise PuppetConfigError(f"{key} must be >= 0, got {number}")
    return number


def _size(key: str, value: Any, default: tuple[int, int]) -> tuple[int, int]:
    if not isinstance(value, dict):
        raise PuppetConfigError(f"{key} must be a mapping with width and height")
    return (
        _non_negative_int(f"{key}.width", value.get("width", default[0])),
        _non_negative_int(f"{key}.height", value.get("height", default[1])),
    )


def find_project_dir(start: Path | None = None) -> Path:
    """Locate the .puppetcore/ project directory by searching upward from ``start``."""
    current = start or Path.cwd()
    for base in [current, *current.parents]:
        candidate = base / PROJECT_DIRNAME
        if candidate.is_dir():
            return candidate
    return current / PROJECT_DIRNAME


def load_config(config_path: Path | None = None) -> PuppetConfig:
    """Load ``config_path``, or the discovered project's config.yaml, or defaults."""
    if config_path is not None:
        return PuppetConfig.from_file(config_path)
    project_dir = find_project_dir()
    project_config = project_dir / "config.yaml"
    if project_config.is_file():
        return PuppetConfig.from_file(project_config)
    return PuppetConfig.default(project_dir)
