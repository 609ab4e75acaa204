"""PageHandle protocol and the Playwright adapter.

The engine talks to a live document only through ``PageHandle``. Anything
that can evaluate a criteria descriptor and inject clicks/keys can be bound
to a session; ``PlaywrightPage`` is the implementation shipped for Chromium
driven by Playwright's sync API.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from puppetcore.engine.criteria import Candidate, MatchCriteria, MatchResult
from puppetcore.engine.scripts import FIND_CANDIDATE_JS, SCROLL_INTO_VIEW_JS, SYNTHETIC_CLICK_JS
from puppetcore.models import DEFAULT_CLICK_TIMEOUT_MS

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle, Page

logger = logging.getLogger("puppetcore.engine.page")

# Errors Playwright raises while the document is being replaced. A poll tick
# that hits one of these simply found nothing.
_NAVIGATION_ERRORS = (
    "execution context was destroyed",
    "cannot find context with specified id",
    "frame was detached",
)


@runtime_checkable
class PageHandle(Protocol):
    """Capability over one live document plus input primitives."""

    def evaluate(self, criteria: MatchCriteria) -> MatchResult: ...

    def scroll_into_view(self, node: Any) -> None: ...

    def click(self, node: Any) -> None: ...

    def synthetic_click(self, node: Any) -> None: ...

    def press(self, key: str) -> None: ...

    def type_text(self, text: str) -> None: ...


class PlaywrightPage:
    """PageHandle over a ``playwright.sync_api.Page``."""

    def __init__(self, page: Page, click_timeout_ms: int = DEFAULT_CLICK_TIMEOUT_MS) -> None:
        self._page = page
        self._click_timeout_ms = click_timeout_ms

    @property
    def page(self) -> Page:
        return self._page

    def evaluate(self, criteria: MatchCriteria) -> MatchResult:
        try:
            handle = self._page.evaluate_handle(FIND_CANDIDATE_JS, criteria.descriptor())
        except Exception as exc:
            if _is_navigation_error(exc):
                logger.debug("Document replaced during evaluation of %s: %s", criteria.describe(), exc)
                return MatchResult()
            raise

        # Every property read creates a remote handle; only a matched element outlives this call.
        try:
            info_handle = handle.get_property("info")
            try:
                info: dict[str, Any] = info_handle.json_value() or {}
            finally:
                info_handle.dispose()
            element_handle = handle.get_property("element")
            element = element_handle.as_element()
            if element is None:
                element_handle.dispose()
        finally:
            handle.dispose()

        if element is None:
            return MatchResult(
                text_matched=bool(info.get("textMatched")),
                match_count=int(info.get("count", 0)),
            )

        if info.get("fallback"):
            logger.warning(
                "No interactive ancestor for %s; clicking <%s> at %s directly",
                criteria.describe(),
                info.get("tag", "?"),
                info.get("path", "?"),
            )

        candidate = Candidate(
            node=element,
            tag=info.get("tag", ""),
            text=info.get("text", ""),
            path=info.get("path", ""),
        )
        return MatchResult(
            candidate=candidate,
            text_matched=bool(info.get("textMatched")),
            match_count=int(info.get("count", 0)),
        )

    def scroll_into_view(self, node: ElementHandle) -> None:
        node.evaluate(SCROLL_INTO_VIEW_JS)

    def click(self, node: ElementHandle) -> None:
        node.click(timeout=self._click_timeout_ms)

    def synthetic_click(self, node: ElementHandle) -> None:
        node.evaluate(SYNTHETIC_CLICK_JS)

    def press(self, key: str) -> None:
        self._page.keyboard.press(key)

    def type_text(self, text: str) -> None:
        self._page.keyboard.type(text)

    def __repr__(self) -> str:
        return f"PlaywrightPage(url={getattr(self._page, 'url', '?')!r})"


def _is_navigation_error(error: Exception) -> bool:
    msg = str(error).lower()
    return any(marker in msg for marker in _NAVIGATION_ERRORS)


def as_page_handle(page: Any, click_timeout_ms: int = DEFAULT_CLICK_TIMEOUT_MS) -> PageHandle:
    """Return ``page`` as a PageHandle, wrapping a raw Playwright page if needed."""
    if isinstance(page, PageHandle):
        return page
    if hasattr(page, "evaluate_handle") and hasattr(page, "keyboard"):
        return PlaywrightPage(page, click_timeout_ms=click_timeout_ms)
    raise TypeError(f"Cannot use {type(page).__name__} as a page: expected a PageHandle or a Playwright Page")
