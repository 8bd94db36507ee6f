"""
Exception taxonomy for the check-in automation.

ConfigurationError is raised during pre-flight only. CheckInError and its
subclasses are raised by a single attempt and are folded into the retry
decision by the orchestrator.
"""
from typing import Optional


class ConfigurationError(ValueError):
    """Missing or malformed configuration. Fatal, raised before any browser work."""


class CheckInError(Exception):
    """Base class for failures of a single check-in attempt."""

    kind = "error"


class SiteReportedError(CheckInError):
    """The website itself rejected the check-in (too early, unknown reservation, ...)."""

    kind = "site_reported"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Site reported error: {self.message}"


class InteractionFailure(CheckInError):
    """A technical fault while locating or operating on page elements."""

    kind = "interaction"

    def __init__(self, cause: object):
        super().__init__(str(cause))
        self.cause = cause

    def __str__(self) -> str:
        if isinstance(self.cause, BaseException):
            return f"{type(self.cause).__name__}: {self.cause}"
        return str(self.cause)


class CheckInTimeout(CheckInError):
    """A bounded wait expired."""

    kind = "timeout"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Timed out waiting for the page")
        self.message = message or "Timed out waiting for the page"

    def __str__(self) -> str:
        return f"Timeout: {self.message}"
