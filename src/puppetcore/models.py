"""Centralized engine defaults."""

# Lookup timing (milliseconds)
DEFAULT_TIMEOUT_MS = 10_000
DEFAULT_POLL_INTERVAL_MS = 100

# Pause between scrolling a target into view and clicking it (milliseconds)
SETTLE_DELAY_MS = 1_000

# Actionability budget for the native Playwright click before falling back
DEFAULT_CLICK_TIMEOUT_MS = 3_000

# Browser session
DEFAULT_VIEWPORT = (1920, 780)
DEFAULT_WINDOW_SIZE = (1920, 700)
DEFAULT_PROFILE_DIRNAME = "chrome-profile"

# Click tiers, in the order they are attempted
NATIVE_TIER = "native"
SYNTHETIC_TIER = "synthetic"
CLICK_TIERS = (NATIVE_TIER, SYNTHETIC_TIER)

# ARIA roles treated as interactive by the ancestor resolver
INTERACTIVE_ROLES = (
    "button",
    "link",
    "menuitem",
    "menuitemcheckbox",
    "menuitemradio",
    "tab",
    "option",
    "checkbox",
    "radio",
    "switch",
)
