"""Macros - YAML-scripted sequences of clicks, keys and pauses.

A macro file looks like::

    name: Filter by free shipping
    steps:
      - click_text: Filters
      - click_checkbox: Free shipping
        timeout_ms: 5000
      - click_index: .result-card
        index: 2
      - press: Backspace
        repeat: 10
      - type: "my-repo: 3"
      - press: Enter
      - sleep: 2

Steps run in order against a ``Session``. Engine errors are not caught here:
retry policy belongs to whoever runs the macro.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from pathlib import Path
from typing import Any, Callable

import yaml

from puppetcore.engine.errors import MacroError
from puppetcore.engine.executor import InteractionOutcome
from puppetcore.engine.session import Session
from puppetcore.log import log_section

logger = logging.getLogger("puppetcore.macro")

# action -> (type of its argument, allowed option keys)
STEP_ACTIONS: dict[str, tuple[type | tuple[type, ...], frozenset[str]]] = {
    "click_text": (str, frozenset({"timeout_ms"})),
    "click_attribute": (str, frozenset({"timeout_ms", "attribute"})),
    "click_index": (str, frozenset({"timeout_ms", "index"})),
    "click_nth_attribute": (str, frozenset({"timeout_ms", "index", "attribute"})),
    "click_checkbox": (str, frozenset({"timeout_ms"})),
    "press": (str, frozenset({"repeat", "delay"})),
    "type": (str, frozenset()),
    "sleep": ((int, float), frozenset()),
}


@dataclasses.dataclass
class MacroStep:
    action: str
    arg: Any
    options: dict[str, Any] = dataclasses.field(default_factory=dict)

    def describe(self) -> str:
        return f"{self.action}: {self.arg!r}"


@dataclasses.dataclass
class Macro:
    name: str
    steps: list[MacroStep]
    source: Path | None = None


@dataclasses.dataclass
class MacroResult:
    name: str
    steps_run: int
    outcomes: list[InteractionOutcome]
    duration_seconds: float


def validate_macro(data: Any) -> list[dict[str, Any]]:
    """Validate raw macro data. Returns a list of issue dicts (empty when valid)."""
    issues: list[dict[str, Any]] = []

    if not isinstance(data, dict):
        return [{"severity": "error", "field": "root", "message": "Macro file must be a YAML mapping"}]

    if not data.get("name"):
        issues.append({"severity": "warning", "field": "name", "message": "Macro has no name"})

    steps = data.get("steps")
    if not isinstance(steps, list) or not steps:
        issues.append({"severity": "error", "field": "steps", "message": "steps must be a non-empty list"})
        return issues

    for i, raw in enumerate(steps, start=1):
        field_name = f"steps[{i}]"
        if not isinstance(raw, dict):
            issues.append({"severity": "error", "field": field_name, "message": "Step must be a mapping"})
            continue
        actions = [key for key in raw if key in STEP_ACTIONS]
        if len(actions) != 1:
            issues.append(
                {
                    "severity": "error",
                    "field": field_name,
                    "message": f"Step must have exactly one action out of: {', '.join(STEP_ACTIONS)}",
                }
            )
            continue
        action = actions[0]
        arg_type, allowed = STEP_ACTIONS[action]
        arg = raw[action]
        blank_target = action.startswith("click") and isinstance(arg, str) and not arg.strip()
        negative_pause = action == "sleep" and isinstance(arg, (int, float)) and arg < 0
        if isinstance(arg, bool) or not isinstance(arg, arg_type) or blank_target or negative_pause:
            issues.append(
                {"severity": "error", "field": f"{field_name}.{action}", "message": f"Invalid argument: {arg!r}"}
            )
        for key, value in raw.items():
            if key == action:
                continue
            if key not in allowed:
                issues.append(
                    {"severity": "error", "field": f"{field_name}.{key}", "message": f"Unknown option for {action}"}
                )
            elif key == "attribute":
                if not isinstance(value, str) or not value:
                    issues.append(
                        {"severity": "error", "field": f"{field_name}.{key}", "message": "Expected an attribute name"}
                    )
            elif isinstance(value, bool) or not isinstance(value, (int, float)):
                issues.append(
                    {"severity": "error", "field": f"{field_name}.{key}", "message": f"Expected a number, got {value!r}"}
                )

    return issues


def parse_macro(data: Any, source: Path | None = None) -> Macro:
    """Build a Macro from raw data, raising MacroError on any validation error."""
    issues = validate_macro(data)
    errors = [issue for issue in issues if issue["severity"] == "error"]
    if errors:
        where = f" in {source}" if source else ""
        details = "\n".join(f"  {e['field']}: {e['message']}" for e in errors)
        raise MacroError(f"Invalid macro{where}:\n{details}")

    steps: list[MacroStep] = []
    for raw in data["steps"]:
        action = next(key for key in raw if key in STEP_ACTIONS)
        options = {key: value for key, value in raw.items() if key != action}
        steps.append(MacroStep(action=action, arg=raw[action], options=options))

    name = data.get("name") or (source.stem if source else "macro")
    return Macro(name=str(name), steps=steps, source=source)


def load_macro(path: Path) -> Macro:
    """Load and validate a macro YAML file."""
    if not path.is_file():
        raise MacroError(f"Macro file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise MacroError(f"YAML parse error in {path}: {exc}") from exc
    return parse_macro(data, source=path)


def run_macro(
    macro: Macro,
    session: Session,
    sleep: Callable[[float], None] = time.sleep,
) -> MacroResult:
    """Run every step of ``macro`` against ``session``, stopping at the first error."""
    log_section(logger, f"Macro: {macro.name}")
    start = time.monotonic()
    outcomes: list[InteractionOutcome] = []

    for i, step in enumerate(macro.steps, start=1):
        logger.info("Step %d/%d: %s", i, len(macro.steps), step.describe())
        try:
            outcome = _run_step(step, session, sleep)
        except Exception as exc:
            logger.error("Macro %s failed at step %d (%s): %s", macro.name, i, step.describe(), exc)
            raise
        if outcome is not None:
            outcomes.append(outcome)

    duration = round(time.monotonic() - start, 2)
    logger.info("Macro %s finished: %d step(s) in %.2fs", macro.name, len(macro.steps), duration)
    return MacroResult(name=macro.name, steps_run=len(macro.steps), outcomes=outcomes, duration_seconds=duration)


def _run_step(step: MacroStep, session: Session, sleep: Callable[[float], None]) -> InteractionOutcome | None:
    opts = step.options
    timeout_ms = opts.get("timeout_ms")

    if step.action == "click_text":
        return session.click_by_text(step.arg, timeout_ms=timeout_ms)
    if step.action == "click_attribute":
        return session.click_by_attribute(step.arg, attribute=opts.get("attribute", "name"), timeout_ms=timeout_ms)
    if step.action == "click_index":
        return session.click_by_index(step.arg, int(opts.get("index", 1)), timeout_ms=timeout_ms)
    if step.action == "click_nth_attribute":
        return session.click_nth_by_attribute(
            step.arg,
            int(opts.get("index", 1)),
            attribute=opts.get("attribute", "name"),
            timeout_ms=timeout_ms,
        )
    if step.action == "click_checkbox":
        return session.click_checkbox_by_text(step.arg, timeout_ms=timeout_ms)
    if step.action == "press":
        repeat = max(1, int(opts.get("repeat", 1)))
        delay = float(opts.get("delay", 0))
        for n in range(repeat):
            session.press_key(step.arg)
            if delay and n < repeat - 1:
                sleep(delay)
        return None
    if step.action == "type":
        session.type_text(step.arg)
        return None
    if step.action == "sleep":
        sleep(float(step.arg))
        return None
    raise MacroError(f"Unknown macro action: {step.action}")
