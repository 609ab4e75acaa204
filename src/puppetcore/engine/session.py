"""Session: the bound page plus the four selector strategies.

A ``Session`` owns exactly one current page. Each click operation builds a
criteria object, polls the page until it resolves to a candidate, then hands
the candidate to the interaction executor.

Example:
    >>> session = Session(page)
    >>> session.click_by_text("Save")
    >>> session.click_by_index(".view-type-card", 2)
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Callable

from puppetcore.engine.criteria import (
    AttributeEquals,
    MatchCriteria,
    SelectorIndex,
    TextContains,
    TextContainsCheckbox,
    attribute_selector,
)
from puppetcore.engine.errors import NoPageBoundError
from puppetcore.engine.executor import InteractionExecutor, InteractionOutcome
from puppetcore.engine.page import PageHandle, as_page_handle
from puppetcore.engine.poller import wait_until
from puppetcore.models import (
    DEFAULT_CLICK_TIMEOUT_MS,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_TIMEOUT_MS,
    SETTLE_DELAY_MS,
)

if TYPE_CHECKING:
    from puppetcore.config import PuppetConfig

logger = logging.getLogger("puppetcore.engine.session")


class Session:
    """One automation flow over one page. Not safe for concurrent use."""

    def __init__(
        self,
        page: Any = None,
        *,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        settle_delay_ms: int = SETTLE_DELAY_MS,
        click_timeout_ms: int = DEFAULT_CLICK_TIMEOUT_MS,
        executor: InteractionExecutor | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.timeout_ms = timeout_ms
        self.poll_interval_ms = poll_interval_ms
        self.click_timeout_ms = click_timeout_ms
        self._clock = clock
        self._sleep = sleep
        self.executor = executor or InteractionExecutor(settle_delay_ms=settle_delay_ms, sleep=sleep)
        self._page: PageHandle | None = None
        if page is not None:
            self.bind_page(page)

    @classmethod
    def from_config(cls, config: PuppetConfig, page: Any = None) -> Session:
        return cls(
            page,
            timeout_ms=config.timeout_ms,
            poll_interval_ms=config.poll_interval_ms,
            settle_delay_ms=config.settle_delay_ms,
            click_timeout_ms=config.click_timeout_ms,
        )

    # -- Page binding --------------------------------------------------------

    def bind_page(self, page: Any) -> None:
        """Make ``page`` the current page. Accepts a PageHandle or a Playwright Page."""
        self._page = as_page_handle(page, click_timeout_ms=self.click_timeout_ms)
        logger.debug("Bound page %r", self._page)

    @property
    def page(self) -> PageHandle | None:
        return self._page

    def _require_page(
        self, operation: str, criteria: MatchCriteria | None = None, timeout_ms: int | None = None
    ) -> PageHandle:
        if self._page is None:
            raise NoPageBoundError(operation, criteria, timeout_ms)
        return self._page

    # -- Selector strategies -------------------------------------------------

    def click_by_text(self, text: str, *, timeout_ms: int | None = None) -> InteractionOutcome:
        """Click the first visible control whose text contains ``text`` (case-insensitive)."""
        return self._click("click_by_text", TextContains(text), timeout_ms)

    def click_by_attribute(
        self, name: str, *, attribute: str = "name", timeout_ms: int | None = None
    ) -> InteractionOutcome:
        """Click the first visible element whose ``attribute`` equals ``name``."""
        return self._click("click_by_attribute", AttributeEquals(attribute, name), timeout_ms)

    def click_by_index(self, selector: str, index: int = 1, *, timeout_ms: int | None = None) -> InteractionOutcome:
        """Click the 1-based ``index``-th element matching ``selector``.

        Waits for the list to grow to ``index`` elements; an index past the
        end times out like any other miss.
        """
        return self._click("click_by_index", SelectorIndex(selector, index), timeout_ms)

    def click_nth_by_attribute(
        self, name: str, index: int = 1, *, attribute: str = "name", timeout_ms: int | None = None
    ) -> InteractionOutcome:
        """Click the ``index``-th element whose ``attribute`` equals ``name``."""
        criteria = SelectorIndex(attribute_selector(attribute, name), index)
        return self._click("click_nth_by_attribute", criteria, timeout_ms)

    def click_checkbox_by_text(self, text: str, *, timeout_ms: int | None = None) -> InteractionOutcome:
        """Click the checkbox associated with the element whose text contains ``text``."""
        return self._click("click_checkbox_by_text", TextContainsCheckbox(text), timeout_ms)

    def click(self, criteria: MatchCriteria, *, timeout_ms: int | None = None) -> InteractionOutcome:
        """Click whatever ``criteria`` resolves to."""
        return self._click("click", criteria, timeout_ms)

    # -- Keyboard ------------------------------------------------------------

    def press_key(self, key: str) -> None:
        self._require_page("press_key").press(key)

    def type_text(self, text: str) -> None:
        self._require_page("type_text").type_text(text)

    # -- Internals -----------------------------------------------------------

    def _click(self, operation: str, criteria: MatchCriteria, timeout_ms: int | None) -> InteractionOutcome:
        timeout = self.timeout_ms if timeout_ms is None else timeout_ms
        page = self._require_page(operation, criteria, timeout)
        logger.debug("Searching for %s with timeout %dms", criteria.describe(), timeout)

        candidate = wait_until(
            lambda: page.evaluate(criteria),
            criteria,
            timeout_ms=timeout,
            poll_interval_ms=self.poll_interval_ms,
            clock=self._clock,
            sleep=self._sleep,
        )
        logger.info("Found %s", candidate.summary())

        return self.executor.click(page, candidate, criteria, timeout)

    def __repr__(self) -> str:
        return f"Session(page={self._page!r}, timeout_ms={self.timeout_ms})"
