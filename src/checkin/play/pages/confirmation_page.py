"""
Page Object Model for the check-in confirmation page.
Shown after a successful reservation lookup; holds the final check-in button.
"""
from playwright.sync_api import Page, Locator, TimeoutError as PlaywrightTimeoutError
import logging

from checkin.errors import CheckInTimeout
from checkin.play.pages.base_page import BasePage

logger = logging.getLogger(__name__)


class ConfirmationPage(BasePage):
    """Represents the page with the final check-in button."""

    def __init__(self, page: Page):
        super().__init__(page)

    @property
    def check_in_button(self) -> Locator:
        """Get the final check-in button."""
        # No id on this button; it is the only submit-button mixin on the page
        return self.page.locator(".form-mixin--submit-button").first

    def wait_for_confirmation_load(self) -> None:
        """Wait for the confirmation page to load completely."""
        self.wait_for_element(self.check_in_button)

    def confirm_check_in(self) -> None:
        """Click the final check-in button."""
        logger.info("Confirming check in")
        self.wait_for_element(self.check_in_button)
        self.check_in_button.click()

    def wait_for_settle(self, timeout: int = 15000, dwell: int = 3000) -> None:
        """
        Wait until the check-in request has gone through.

        Polls for network idle (no outstanding requests) up to `timeout`
        milliseconds, then waits a fixed `dwell` for the page to render.

        Raises:
            CheckInTimeout: If requests are still in flight after `timeout`
        """
        try:
            self.page.wait_for_load_state("networkidle", timeout=timeout)
        except PlaywrightTimeoutError as e:
            raise CheckInTimeout(
                f"Page did not settle within {timeout}ms after confirming check in"
            ) from e
        if dwell > 0:
            self.wait_for_idle(dwell)
