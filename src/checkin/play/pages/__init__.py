"""Page Object Model classes for the check-in flow."""

from .base_page import BasePage
from .landing_page import LandingPage
from .confirmation_page import ConfirmationPage

__all__ = [
    "BasePage",
    "LandingPage",
    "ConfirmationPage",
]
