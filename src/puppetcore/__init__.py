"""PuppetCore - reliable clicking on live, script-mutated pages.

Finds elements by visible text, attribute, selector position or associated
checkbox, waits for them through asynchronous rendering, and clicks them
with a native-then-synthetic fallback.
"""

__version__ = "0.4.0"

from puppetcore.engine import (
    CheckboxNotFoundError,
    ElementNotFoundError,
    InteractionFailedError,
    NoPageBoundError,
    PageHandle,
    PlaywrightPage,
    PuppetCoreError,
    Session,
)
from puppetcore.helpers import (
    bind_page,
    click_by_attribute,
    click_by_index,
    click_by_text,
    click_checkbox_by_text,
    click_nth_by_attribute,
    default_session,
    press_key,
    sleep,
    type_text,
)

__all__ = [
    "CheckboxNotFoundError",
    "ElementNotFoundError",
    "InteractionFailedError",
    "NoPageBoundError",
    "PageHandle",
    "PlaywrightPage",
    "PuppetCoreError",
    "Session",
    "__version__",
    "bind_page",
    "click_by_attribute",
    "click_by_index",
    "click_by_text",
    "click_checkbox_by_text",
    "click_nth_by_attribute",
    "default_session",
    "press_key",
    "sleep",
    "type_text",
]
