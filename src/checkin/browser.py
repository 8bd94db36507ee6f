"""
Browser session handling on top of Playwright.

A BrowserSession is one isolated browser context with a single page. Every
attempt gets a brand new one, so cookies, storage and DOM state from a
failed attempt never leak into the next.
"""
import logging
from pathlib import Path
from typing import Optional

from playwright.sync_api import Browser, BrowserContext, Page, Playwright

from checkin.errors import ConfigurationError

logger = logging.getLogger(__name__)


class BrowserSession:
    """One browser context and its page."""

    def __init__(self, context: BrowserContext, page: Page) -> None:
        self.context = context
        self.page = page
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def navigate(self, url: str) -> None:
        logger.debug(f"Visiting {url}")
        self.page.goto(url)

    def resize_viewport(self, width: int, height: int) -> None:
        logger.debug(f"Resizing window to {width}x{height}")
        self.page.set_viewport_size({"width": width, "height": height})

    def capture_body(self) -> str:
        return self.page.content()

    def capture_screenshot(self) -> bytes:
        return self.page.screenshot(full_page=True)

    def close(self) -> None:
        """Close the context. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        logger.info("Closing browser session...")
        self.context.close()


class BrowserSessionFactory:
    """
    Creates a fresh BrowserSession for each attempt.

    Chromium is launched on first use and relaunched if it has died, so a
    browser that fails to start counts against the attempt that needed it.
    """

    def __init__(self, playwright: Playwright, headless: bool = True, slow_mo: int = 0,
                 default_timeout: int = 30000) -> None:
        self.playwright = playwright
        self.headless = headless
        self.slow_mo = slow_mo
        self.default_timeout = default_timeout
        self._browser: Optional[Browser] = None

    def __call__(self) -> BrowserSession:
        browser = self._get_browser()
        logger.debug("Creating browser session")
        context = browser.new_context()
        context.set_default_timeout(self.default_timeout)
        try:
            page = context.new_page()
        except Exception:
            context.close()
            raise
        return BrowserSession(context, page)

    def _get_browser(self) -> Browser:
        if self._browser is None or not self._browser.is_connected():
            logger.debug(f"Launching Chromium (headless={self.headless})")
            self._browser = self.playwright.chromium.launch(headless=self.headless, slow_mo=self.slow_mo)
        return self._browser

    def close(self) -> None:
        if self._browser is not None:
            self._browser.close()
            self._browser = None


def check_for_browser(playwright: Playwright) -> Path:
    """
    Make sure the Chromium build Playwright drives is installed.

    Raises:
        ConfigurationError: If the executable is missing
    """
    logger.debug("Checking if Chromium is available")
    executable = Path(playwright.chromium.executable_path)
    if not executable.exists():
        raise ConfigurationError(
            f"Can not find Chromium at {executable}. Run `playwright install chromium`"
        )
    return executable
