"""Interaction Executor: scroll, settle, then click through ordered tiers.

Tiers are tried in order until one succeeds. Each tier reports success or
failure as a ``TierResult`` instead of raising, so new fallbacks (keyboard
activation, coordinate click, ...) can be appended to the list without
touching the executor loop.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from typing import TYPE_CHECKING, Any, Callable, Protocol, Sequence

from puppetcore.engine.errors import InteractionFailedError
from puppetcore.models import CLICK_TIERS, NATIVE_TIER, SETTLE_DELAY_MS, SYNTHETIC_TIER

if TYPE_CHECKING:
    from puppetcore.engine.criteria import Candidate, MatchCriteria
    from puppetcore.engine.page import PageHandle

logger = logging.getLogger("puppetcore.engine.executor")


@dataclasses.dataclass
class TierResult:
    """Outcome of one click tier."""

    tier: str
    success: bool
    error: Exception | None = None


@dataclasses.dataclass
class InteractionOutcome:
    """A successful click, recording which tier landed it."""

    criteria: MatchCriteria
    candidate: Candidate
    tier: str
    duration_ms: float = 0.0


class ClickTier(Protocol):
    name: str

    def attempt(self, page: PageHandle, node: Any) -> TierResult: ...


class NativeClick:
    """Pointer click through the platform's input pipeline."""

    name = NATIVE_TIER

    def attempt(self, page: PageHandle, node: Any) -> TierResult:
        try:
            page.click(node)
        except Exception as exc:
            return TierResult(self.name, False, exc)
        return TierResult(self.name, True)


class SyntheticClick:
    """``element.click()`` issued from the document's own script context."""

    name = SYNTHETIC_TIER

    def attempt(self, page: PageHandle, node: Any) -> TierResult:
        try:
            page.synthetic_click(node)
        except Exception as exc:
            return TierResult(self.name, False, exc)
        return TierResult(self.name, True)


_TIER_TYPES = {NATIVE_TIER: NativeClick, SYNTHETIC_TIER: SyntheticClick}

DEFAULT_TIERS: tuple[ClickTier, ...] = tuple(_TIER_TYPES[name]() for name in CLICK_TIERS)


class InteractionExecutor:
    """Clicks a resolved candidate reliably."""

    def __init__(
        self,
        settle_delay_ms: int = SETTLE_DELAY_MS,
        tiers: Sequence[ClickTier] = DEFAULT_TIERS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not tiers:
            raise ValueError("InteractionExecutor needs at least one click tier")
        self.settle_delay_ms = settle_delay_ms
        self.tiers = list(tiers)
        self._sleep = sleep

    def click(
        self,
        page: PageHandle,
        candidate: Candidate,
        criteria: MatchCriteria,
        timeout_ms: int,
    ) -> InteractionOutcome:
        """Scroll ``candidate`` to the viewport centre, settle, and click it.

        The candidate is not re-validated after the settle delay; a re-render
        inside that window can make the click land on a detached node.

        Raises:
            InteractionFailedError: every tier failed. Chained to the last
                tier's error; all tier errors are on ``.failures``.
        """
        start = time.monotonic()

        page.scroll_into_view(candidate.node)
        if self.settle_delay_ms > 0:
            logger.debug("Waiting %dms after scroll", self.settle_delay_ms)
            self._sleep(self.settle_delay_ms / 1000)

        failures: list[TierResult] = []
        for tier in self.tiers:
            result = tier.attempt(page, candidate.node)
            if result.success:
                if failures:
                    logger.info("Clicked %s via %s fallback", candidate.summary(), tier.name)
                return InteractionOutcome(
                    criteria=criteria,
                    candidate=candidate,
                    tier=tier.name,
                    duration_ms=round((time.monotonic() - start) * 1000, 1),
                )
            logger.info("%s click failed on %s: %s", tier.name.capitalize(), candidate.summary(), result.error)
            failures.append(result)

        raise InteractionFailedError(criteria, timeout_ms, candidate, failures) from failures[-1].error
