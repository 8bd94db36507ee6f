"""
Page object model for the Base Page.
Shared waits for the airline pages; every check-in page derives from it.
"""

from playwright.sync_api import Page, Locator, TimeoutError as PlaywrightTimeoutError
import logging

logger = logging.getLogger(__name__)


class BasePage:
    """Holds the Playwright page and the waits every check-in page uses"""

    def __init__(self, page: Page) -> None:
        self.page = page

    def is_element_visible(self, locator: Locator, timeout: int = 5000) -> bool:
        """
        Non-blocking visibility check.

        Returns False once `timeout` milliseconds pass without the element
        showing up. Any other driver error is raised.
        """
        try:
            self.wait_for_element(locator, state="visible", timeout=timeout)
        except PlaywrightTimeoutError:
            return False
        return True

    def wait_for_element(self, locator: Locator, state: str = "visible", timeout: int = 10000) -> Locator:
        """
        Block until `locator` reaches `state` ("visible", "attached", "hidden"
        or "detached").

        Raises:
            TimeoutError: If the state is not reached within `timeout` ms
        """
        locator.wait_for(state=state, timeout=timeout)
        return locator

    def wait_for_idle(self, timeout: int = 1000) -> None:
        """Give the page `timeout` ms to finish rendering after a request settles."""
        logger.debug(f"Waiting {timeout}ms for the page to render")
        self.page.wait_for_timeout(timeout)
