"""PuppetCore error taxonomy.

Every lookup or interaction failure carries the criteria that was requested
and the timeout it was given, so a failing macro step can be diagnosed from
the exception alone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from puppetcore.engine.criteria import Candidate, MatchCriteria
    from puppetcore.engine.executor import TierResult


class PuppetCoreError(Exception):
    """Base class for all PuppetCore errors."""

    pass


class NoPageBoundError(PuppetCoreError):
    """Raised when an operation runs before a page has been bound."""

    def __init__(
        self,
        operation: str,
        criteria: MatchCriteria | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        self.operation = operation
        self.criteria = criteria
        self.timeout_ms = timeout_ms
        target = f" for {criteria.describe()}" if criteria is not None else ""
        super().__init__(
            f"{operation}(){target}: no page bound\n\n"
            "To fix: call bind_page(page) first, or create Session(page)"
        )


class ElementNotFoundError(PuppetCoreError):
    """Raised when no visible element matched before the timeout elapsed."""

    def __init__(self, criteria: MatchCriteria, timeout_ms: int, match_count: int = 0) -> None:
        self.criteria = criteria
        self.timeout_ms = timeout_ms
        self.match_count = match_count
        super().__init__(self._message())

    def _message(self) -> str:
        return f"No element found for {self.criteria.describe()} within {self.timeout_ms}ms"


class CheckboxNotFoundError(PuppetCoreError):
    """Raised when the text matched but no checkbox could be associated with it."""

    def __init__(self, criteria: MatchCriteria, timeout_ms: int) -> None:
        self.criteria = criteria
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Text matched for {criteria.describe()} but no checkbox was found "
            f"in its label or descendants within {timeout_ms}ms"
        )


class InteractionFailedError(PuppetCoreError):
    """Raised when every click tier failed on a resolved candidate."""

    def __init__(
        self,
        criteria: MatchCriteria,
        timeout_ms: int,
        candidate: Candidate,
        failures: list[TierResult],
    ) -> None:
        self.criteria = criteria
        self.timeout_ms = timeout_ms
        self.candidate = candidate
        self.failures = failures
        tiers = "; ".join(f"{f.tier}: {type(f.error).__name__}: {f.error}" for f in failures)
        super().__init__(
            f"Could not click <{candidate.tag}> at {candidate.path} for {criteria.describe()} ({tiers})"
        )

    @property
    def errors(self) -> dict[str, Any]:
        """Map tier name to the error that tier raised."""
        return {f.tier: f.error for f in self.failures}


class MacroError(PuppetCoreError):
    """Raised when a macro file is missing or malformed."""

    pass
