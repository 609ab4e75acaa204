"""Module-level helpers backed by a process-wide default session.

Convenience layer for scripts that drive a single page:

    from puppetcore import bind_page, click_by_text

    bind_page(page)
    click_by_text("Submit")

Code that automates several pages at once should create one ``Session`` per
page instead.
"""

from __future__ import annotations

import time
from typing import Any

from puppetcore.engine.executor import InteractionOutcome
from puppetcore.engine.session import Session

default_session = Session()


def bind_page(page: Any) -> None:
    """Set the default session's current page."""
    default_session.bind_page(page)


def click_by_text(text: str, *, timeout_ms: int | None = None) -> InteractionOutcome:
    return default_session.click_by_text(text, timeout_ms=timeout_ms)


def click_by_attribute(name: str, *, attribute: str = "name", timeout_ms: int | None = None) -> InteractionOutcome:
    return default_session.click_by_attribute(name, attribute=attribute, timeout_ms=timeout_ms)


def click_by_index(selector: str, index: int = 1, *, timeout_ms: int | None = None) -> InteractionOutcome:
    return default_session.click_by_index(selector, index, timeout_ms=timeout_ms)


def click_nth_by_attribute(
    name: str, index: int = 1, *, attribute: str = "name", timeout_ms: int | None = None
) -> InteractionOutcome:
    return default_session.click_nth_by_attribute(name, index, attribute=attribute, timeout_ms=timeout_ms)


def click_checkbox_by_text(text: str, *, timeout_ms: int | None = None) -> InteractionOutcome:
    return default_session.click_checkbox_by_text(text, timeout_ms=timeout_ms)


def press_key(key: str) -> None:
    default_session.press_key(key)


def type_text(text: str) -> None:
    default_session.type_text(text)


def sleep(seconds: float = 1) -> None:
    """Pause for ``seconds`` seconds."""
    time.sleep(seconds)
