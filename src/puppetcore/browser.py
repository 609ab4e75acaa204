"""Browser session bootstrap - Playwright persistent Chromium context.

Launches Chromium with a persistent profile directory so logins survive
between runs, sets the window size and viewport, and exposes the page both
raw and wrapped as a ``PlaywrightPage``. The click engine never imports this
module; it only needs the page.
"""

from __future__ import annotations

import logging
from typing import Any

from puppetcore.config import PuppetConfig
from puppetcore.engine.page import PlaywrightPage

logger = logging.getLogger("puppetcore.browser")


class BrowserSession:
    """Context manager owning Playwright, the browser context and its page.

    Example:
        >>> with BrowserSession(config) as browser:
        ...     browser.goto("https://example.com")
        ...     Session.from_config(config, browser.handle).click_by_text("More information")
    """

    def __init__(self, config: PuppetConfig) -> None:
        self._config = config
        self._playwright: Any = None
        self._context: Any = None
        self._page: Any = None
        self._handle: PlaywrightPage | None = None

    def start(self) -> BrowserSession:
        """Launch the browser. Call once; pair with stop()."""
        from playwright.sync_api import sync_playwright

        config = self._config
        config.user_data_dir.mkdir(parents=True, exist_ok=True)

        launch_kwargs: dict[str, Any] = {
            "user_data_dir": str(config.user_data_dir),
            "headless": config.headless,
            "args": [f"--window-size={config.window_size[0]},{config.window_size[1]}"],
            "viewport": {"width": config.viewport[0], "height": config.viewport[1]},
        }
        if config.chrome_path:
            launch_kwargs["executable_path"] = config.chrome_path

        logger.info(
            "Launching Chromium: profile=%s, headless=%s, viewport=%dx%d",
            config.user_data_dir,
            config.headless,
            config.viewport[0],
            config.viewport[1],
        )
        self._playwright = sync_playwright().start()
        try:
            self._context = self._playwright.chromium.launch_persistent_context(**launch_kwargs)
        except Exception:
            self._playwright.stop()
            self._playwright = None
            raise

        # Persistent contexts open with one blank page already
        self._page = self._context.pages[0] if self._context.pages else self._context.new_page()
        self._handle = PlaywrightPage(self._page, click_timeout_ms=config.click_timeout_ms)
        return self

    def stop(self) -> None:
        """Close the context and Playwright. Safe to call more than once."""
        try:
            if self._context is not None:
                self._context.close()
        except Exception as exc:
            logger.warning("Failed to close browser context: %s", exc)
        try:
            if self._playwright is not None:
                self._playwright.stop()
        except Exception as exc:
            logger.warning("Failed to stop Playwright: %s", exc)
        self._context = None
        self._playwright = None
        self._page = None
        self._handle = None

    def __enter__(self) -> BrowserSession:
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    @property
    def page(self) -> Any:
        if self._page is None:
            raise RuntimeError("Browser page is not initialized. Use within a with-block or call start().")
        return self._page

    @property
    def handle(self) -> PlaywrightPage:
        if self._handle is None:
            raise RuntimeError("Browser page is not initialized. Use within a with-block or call start().")
        return self._handle

    def goto(self, url: str) -> None:
        """Navigate to ``url`` and wait for DOMContentLoaded."""
        logger.info("Loading URL: %s", url)
        self.page.goto(url, wait_until="domcontentloaded")

    def __repr__(self) -> str:
        return f"BrowserSession(headless={self._config.headless}, profile={str(self._config.user_data_dir)!r})"
