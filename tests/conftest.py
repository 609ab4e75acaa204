"""Shared fixtures for PuppetCore unit tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from puppetcore.engine.criteria import Candidate, MatchCriteria, MatchResult


# ---------------------------------------------------------------------------
# Fake clock: time only moves when the code under test sleeps
# ---------------------------------------------------------------------------

class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Fake page: scripted evaluation results plus recorded interactions
# ---------------------------------------------------------------------------

class FakePage:
    """In-memory PageHandle.

    ``results`` decides what each evaluation returns: either a callable
    ``(criteria, tick) -> MatchResult`` or a list consumed one item per tick
    (the last item repeats once the list runs out).
    """

    def __init__(
        self,
        results: Callable[[MatchCriteria, int], MatchResult] | list[MatchResult] | None = None,
        native_error: Exception | None = None,
        synthetic_error: Exception | None = None,
    ) -> None:
        self._results = results if results is not None else [MatchResult()]
        self.native_error = native_error
        self.synthetic_error = synthetic_error
        self.evaluations: list[MatchCriteria] = []
        self.scrolled: list[Any] = []
        self.native_clicks: list[Any] = []
        self.synthetic_clicks: list[Any] = []
        self.pressed: list[str] = []
        self.typed: list[str] = []

    def evaluate(self, criteria: MatchCriteria) -> MatchResult:
        tick = len(self.evaluations)
        self.evaluations.append(criteria)
        if callable(self._results):
            return self._results(criteria, tick)
        return self._results[min(tick, len(self._results) - 1)]

    def scroll_into_view(self, node: Any) -> None:
        self.scrolled.append(node)

    def click(self, node: Any) -> None:
        self.native_clicks.append(node)
        if self.native_error is not None:
            raise self.native_error

    def synthetic_click(self, node: Any) -> None:
        self.synthetic_clicks.append(node)
        if self.synthetic_error is not None:
            raise self.synthetic_error

    def press(self, key: str) -> None:
        self.pressed.append(key)

    def type_text(self, text: str) -> None:
        self.typed.append(text)


def make_candidate(tag: str = "button", text: str = "Save", path: str = "html>body>button") -> Candidate:
    return Candidate(node=object(), tag=tag, text=text, path=path)


def found(candidate: Candidate | None = None, **kwargs: Any) -> MatchResult:
    return MatchResult(candidate=candidate or make_candidate(), **kwargs)


@pytest.fixture
def fake_page() -> FakePage:
    """A page where a <button>Save</button> is present from the first tick."""
    return FakePage([found()])


# ---------------------------------------------------------------------------
# YAML samples
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_config_yaml() -> str:
    """Return a valid PuppetCore config.yaml as a string."""
    return """\
timeout_ms: 5000
poll_interval_ms: 50
settle_delay_ms: 250
click_timeout_ms: 1500
headless: true
viewport:
  width: 1280
  height: 720
window_size:
  width: 1280
  height: 800
user_data_dir: profile
"""


@pytest.fixture
def sample_macro_yaml() -> str:
    """Return a valid macro YAML file as a string."""
    return """\
name: Rename chat
steps:
  - click_attribute: chat-options
    attribute: data-testid
  - click_text: Rename
    timeout_ms: 5000
  - press: Backspace
    repeat: 3
  - type: "my-repo: 3"
  - press: Enter
  - sleep: 2
"""


@pytest.fixture
def tmp_project_dir(tmp_path: Path, sample_config_yaml: str) -> Path:
    """Create a temporary .puppetcore/ project directory with a config.yaml."""
    project_dir = tmp_path / ".puppetcore"
    project_dir.mkdir()
    (project_dir / "config.yaml").write_text(sample_config_yaml, encoding="utf-8")
    return project_dir


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, Any], Path]:
    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        text = data if isinstance(data, str) else yaml.dump(data, default_flow_style=False)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
