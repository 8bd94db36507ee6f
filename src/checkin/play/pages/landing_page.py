"""
Page Object Model for the airline landing page.
Encapsulates the check-in tab, the reservation lookup form and the error
banner the site shows when it refuses a check-in.
"""
from playwright.sync_api import Page, Locator
from typing import Optional
import logging

from checkin.checkin_models import TravelerCredential
from checkin.play.pages.base_page import BasePage

logger = logging.getLogger(__name__)


class LandingPage(BasePage):
    """Represents the landing page with the reservation lookup form."""

    FORM_PREFIX = "#LandingPageAirReservationForm"

    def __init__(self, page: Page):
        super().__init__(page)

    @property
    def check_in_tab(self) -> Locator:
        """Get the Check-In tab of the booking widget."""
        return self.page.locator("#TabbedArea_4-tab-4").first

    @property
    def confirmation_input(self) -> Locator:
        """Get the confirmation number field."""
        return self.page.locator(f"{self.FORM_PREFIX}_confirmationNumber_check-in").first

    @property
    def first_name_input(self) -> Locator:
        """Get the passenger first name field."""
        return self.page.locator(f"{self.FORM_PREFIX}_passengerFirstName_check-in").first

    @property
    def last_name_input(self) -> Locator:
        """Get the passenger last name field."""
        return self.page.locator(f"{self.FORM_PREFIX}_passengerLastName_check-in").first

    @property
    def submit_button(self) -> Locator:
        """Get the lookup submit button."""
        return self.page.locator(f"{self.FORM_PREFIX}_submit-button_check-in").first

    @property
    def error_banner(self) -> Locator:
        """
        Get the error flash shown at the top of the page.

        The site uses it when the reservation doesn't exist, when it is too
        early to check in, when the flight has already left, etc.
        """
        return self.page.locator(".message_error").first

    def wait_for_page_load(self) -> None:
        """Wait for the landing page to load completely."""
        self.wait_for_element(self.check_in_tab, state="attached")

    def open_check_in_tab(self) -> None:
        """Click the Check-In tab so the lookup form is shown."""
        logger.debug("Clicking Check-In Tab")
        self.check_in_tab.click()
        self.wait_for_element(self.confirmation_input)

    def fill_reservation(self, traveler: TravelerCredential) -> None:
        """Fill confirmation number, first name and last name."""
        logger.debug("Fill out flight info")
        self.confirmation_input.fill(traveler.confirmation)
        self.first_name_input.fill(traveler.first_name)
        self.last_name_input.fill(traveler.last_name)

    def click_submit(self) -> None:
        """Click the lookup submit button."""
        self.submit_button.click()

    def look_up_reservation(self, traveler: TravelerCredential) -> None:
        """
        Perform the complete lookup flow.

        Args:
            traveler: Whose reservation to look up
        """
        self.open_check_in_tab()
        self.fill_reservation(traveler)
        self.click_submit()

    def has_error(self, timeout: int = 3000) -> bool:
        """Check if the site answered with its error banner."""
        return self.is_element_visible(self.error_banner, timeout=timeout)

    def get_error_message(self) -> Optional[str]:
        """
        Get the first line of the error banner.

        Returns:
            The message, or None if the banner is empty or missing
        """
        try:
            text = self.error_banner.inner_text(timeout=1000)
        except Exception as e:
            logger.debug(f"Could not read error banner: {e}")
            return None
        lines = [line.strip() for line in text.split("\n") if line.strip()]
        return lines[0] if lines else None
