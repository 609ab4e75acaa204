"""Wait-until primitive shared by every selector strategy."""

from __future__ import annotations

import logging
import time
from typing import Callable

from puppetcore.engine.criteria import Candidate, MatchCriteria, MatchResult, TextContainsCheckbox
from puppetcore.engine.errors import CheckboxNotFoundError, ElementNotFoundError
from puppetcore.models import DEFAULT_POLL_INTERVAL_MS, DEFAULT_TIMEOUT_MS

logger = logging.getLogger("puppetcore.engine.poller")


def wait_until(
    predicate: Callable[[], MatchResult],
    criteria: MatchCriteria,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> Candidate:
    """Re-run ``predicate`` until it yields a candidate or ``timeout_ms`` elapses.

    The predicate is evaluated once immediately and then every
    ``poll_interval_ms``. Sleeps are cut short at the deadline, so a miss is
    reported no earlier than the timeout and no later than the timeout plus
    one poll interval.

    Raises:
        ElementNotFoundError: nothing matched before the deadline.
        CheckboxNotFoundError: checkbox criteria whose text matched on the
            last tick, but with no associated checkbox.
        ValueError: negative timeout or non-positive poll interval.

    Exceptions raised by ``predicate`` propagate unchanged.
    """
    if timeout_ms < 0:
        raise ValueError(f"timeout_ms must be >= 0, got {timeout_ms}")
    if poll_interval_ms <= 0:
        raise ValueError(f"poll_interval_ms must be > 0, got {poll_interval_ms}")

    deadline = clock() + timeout_ms / 1000
    interval = poll_interval_ms / 1000
    ticks = 0

    while True:
        result = predicate()
        ticks += 1
        if result.candidate is not None:
            logger.debug("Matched %s after %d poll(s)", criteria.describe(), ticks)
            return result.candidate

        remaining = deadline - clock()
        if remaining <= 0:
            break
        sleep(min(interval, remaining))

    logger.debug("Gave up on %s after %d poll(s) (%dms)", criteria.describe(), ticks, timeout_ms)
    if isinstance(criteria, TextContainsCheckbox) and result.text_matched:
        raise CheckboxNotFoundError(criteria, timeout_ms)
    raise ElementNotFoundError(criteria, timeout_ms, match_count=result.match_count)
