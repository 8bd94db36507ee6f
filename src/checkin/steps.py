"""
The check-in step sequence: one full pass through the airline website.
"""
import logging
from typing import Protocol

from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from checkin.browser import BrowserSession
from checkin.checkin_models import TravelerCredential
from checkin.errors import CheckInError, CheckInTimeout, InteractionFailure, SiteReportedError
from checkin.play.pages.confirmation_page import ConfirmationPage
from checkin.play.pages.landing_page import LandingPage

logger = logging.getLogger(__name__)


class StepSequence(Protocol):
    """A unit of work the orchestrator runs once per attempt."""

    def execute(self, session: BrowserSession, credential: TravelerCredential) -> None: ...


class CheckInSteps:
    """
    Visit the site, look up the reservation and check in.

    Returns normally on success. Every failure surfaces as a CheckInError:
    SiteReportedError when the site shows its error banner, CheckInTimeout
    when a bounded wait expires, InteractionFailure for anything the driver
    could not do.
    """

    def __init__(
        self,
        base_url: str,
        settle_timeout: int = 15000,
        settle_dwell: int = 3000,
        error_timeout: int = 3000,
    ) -> None:
        self.base_url = base_url
        self.settle_timeout = settle_timeout
        self.settle_dwell = settle_dwell
        self.error_timeout = error_timeout

    def execute(self, session: BrowserSession, credential: TravelerCredential) -> None:
        try:
            self._run(session, credential)
        except CheckInError:
            raise
        except PlaywrightTimeoutError as e:
            raise CheckInTimeout(str(e).splitlines()[0] if str(e) else None) from e
        except PlaywrightError as e:
            raise InteractionFailure(e) from e

    def _run(self, session: BrowserSession, credential: TravelerCredential) -> None:
        logger.info("Visiting check-in website")
        session.navigate(self.base_url)

        landing_page = LandingPage(session.page)
        landing_page.wait_for_page_load()
        landing_page.look_up_reservation(credential)

        if landing_page.has_error(timeout=self.error_timeout):
            message = landing_page.get_error_message() or "unknown"
            raise SiteReportedError(message)

        confirmation_page = ConfirmationPage(session.page)
        confirmation_page.wait_for_confirmation_load()
        confirmation_page.confirm_check_in()
        confirmation_page.wait_for_settle(timeout=self.settle_timeout, dwell=self.settle_dwell)
        logger.info("Check in submitted")
