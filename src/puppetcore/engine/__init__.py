"""PuppetCore engine: element resolution and reliable clicking.

- Session: bound page plus the selector strategies (text, attribute, index, checkbox)
- wait_until: predicate polling with timeout
- InteractionExecutor: scroll, settle, native click with synthetic fallback
- PageHandle / PlaywrightPage: the document capability and its Playwright adapter
"""

from puppetcore.engine.criteria import (
    AttributeEquals,
    Candidate,
    MatchCriteria,
    MatchResult,
    SelectorIndex,
    TextContains,
    TextContainsCheckbox,
    normalize_text,
)
from puppetcore.engine.errors import (
    CheckboxNotFoundError,
    ElementNotFoundError,
    InteractionFailedError,
    MacroError,
    NoPageBoundError,
    PuppetCoreError,
)
from puppetcore.engine.executor import (
    InteractionExecutor,
    InteractionOutcome,
    NativeClick,
    SyntheticClick,
    TierResult,
)
from puppetcore.engine.page import PageHandle, PlaywrightPage, as_page_handle
from puppetcore.engine.poller import wait_until
from puppetcore.engine.session import Session

__all__ = [
    "AttributeEquals",
    "Candidate",
    "CheckboxNotFoundError",
    "ElementNotFoundError",
    "InteractionExecutor",
    "InteractionFailedError",
    "InteractionOutcome",
    "MacroError",
    "MatchCriteria",
    "MatchResult",
    "NativeClick",
    "NoPageBoundError",
    "PageHandle",
    "PlaywrightPage",
    "PuppetCoreError",
    "SelectorIndex",
    "Session",
    "SyntheticClick",
    "TextContains",
    "TextContainsCheckbox",
    "TierResult",
    "as_page_handle",
    "normalize_text",
    "wait_until",
]
