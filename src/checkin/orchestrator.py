"""
Bounded-retry orchestration of a check-in run.

The orchestrator owns the run lifecycle: it opens a fresh browser session
per attempt, runs the step sequence, decides whether to retry, and on every
exit path captures artifacts, closes the session and hands the run to the
reporter exactly once.

States: Idle -> Attempting -> Succeeded | Retrying | Exhausted. Retrying is a
pass-through back to Attempting.
"""
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from checkin.artifacts import ArtifactCollector
from checkin.browser import BrowserSession
from checkin.config import DEFAULT_VIEWPORT
from checkin.checkin_models import RunContext, RunOutcome, TravelerCredential
from checkin.errors import CheckInError, ConfigurationError, InteractionFailure, SiteReportedError
from checkin.reporter import RunReporter
from checkin.steps import StepSequence
from checkin.utils import make_run_id

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class RetryPolicy:
    """
    How many attempts a run gets and which failures are worth retrying.

    Backoff is linear: attempt N waits N * base_delay seconds before the
    next attempt starts.
    """
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay: float = 2.0
    retry_site_errors: bool = True

    def validate(self) -> None:
        if self.max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.base_delay < 0:
            raise ConfigurationError(f"base_delay must be >= 0, got {self.base_delay}")

    def is_retryable(self, error: CheckInError) -> bool:
        if isinstance(error, SiteReportedError):
            return self.retry_site_errors
        return True

    def backoff_delay(self, attempt_number: int) -> float:
        return attempt_number * self.base_delay


class AttemptStatus(Enum):
    SUCCESS = "success"
    RETRYABLE_FAILURE = "retryable_failure"
    TERMINAL_FAILURE = "terminal_failure"


@dataclass(frozen=True)
class AttemptResult:
    status: AttemptStatus
    error: Optional[CheckInError] = None

    @classmethod
    def success(cls) -> "AttemptResult":
        return cls(AttemptStatus.SUCCESS)


SessionFactory = Callable[[], BrowserSession]


class RetryOrchestrator:
    """Runs the step sequence for one traveler with bounded retries."""

    def __init__(
        self,
        credential: TravelerCredential,
        steps: StepSequence,
        session_factory: SessionFactory,
        collector: ArtifactCollector,
        reporter: RunReporter,
        policy: Optional[RetryPolicy] = None,
        run_id: Optional[str] = None,
        viewport: Tuple[int, int] = DEFAULT_VIEWPORT,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.policy = policy or RetryPolicy()
        self.policy.validate()

        self.credential = credential
        self.steps = steps
        self.session_factory = session_factory
        self.collector = collector
        self.reporter = reporter
        self.run_id = run_id or make_run_id()
        self.viewport = viewport
        self.sleep = sleep

    def run(self) -> RunContext:
        """
        Execute the run and return its finished context.

        Never raises for check-in failures; the outcome is on the returned
        context. Exceptions that are not ordinary failures (for example
        KeyboardInterrupt) still go through cleanup and reporting before
        propagating.
        """
        context = RunContext(run_id=self.run_id, max_attempts=self.policy.max_attempts)
        session: Optional[BrowserSession] = None
        captured_attempt = 0

        try:
            while True:
                logger.info(
                    f"Starting execution (Attempt #{context.attempt_number} of {context.max_attempts})"
                )
                try:
                    session = self._open_session()
                except Exception as e:
                    logger.error("Could not open browser session", exc_info=True)
                    result = self._classify(InteractionFailure(e), context)
                else:
                    result = self._run_attempt(session, context)

                if result.status is AttemptStatus.SUCCESS:
                    logger.info("Complete!")
                    context.finalize(RunOutcome.SUCCESS)
                    break

                if result.status is AttemptStatus.TERMINAL_FAILURE:
                    context.finalize(RunOutcome.FAILED)
                    break

                self._capture(session, context)
                captured_attempt = context.attempt_number
                delay = self.policy.backoff_delay(context.attempt_number)
                logger.info(f"Retrying in {delay:.1f} seconds...")
                self.sleep(delay)
                self._close_session(session)
                session = None
                context.next_attempt()
        finally:
            if context.outcome is RunOutcome.PENDING:
                logger.error("Run aborted by an unexpected error")
                context.finalize(RunOutcome.FAILED)
            if captured_attempt != context.attempt_number:
                self._capture(session, context)
            self._close_session(session)
            self.reporter.finalize(context, self.collector.artifacts)

        return context

    def _open_session(self) -> BrowserSession:
        session = self.session_factory()
        try:
            # The site hides parts of the form below a minimum width
            session.resize_viewport(*self.viewport)
        except Exception:
            self._close_session(session)
            raise
        return session

    def _run_attempt(self, session: BrowserSession, context: RunContext) -> AttemptResult:
        try:
            self.steps.execute(session, self.credential)
        except CheckInError as e:
            logger.error(f"Attempt #{context.attempt_number} failed: {e}", exc_info=True)
            return self._classify(e, context)
        except Exception as e:
            logger.error(f"Attempt #{context.attempt_number} failed unexpectedly: {e}", exc_info=True)
            return self._classify(InteractionFailure(e), context)
        return AttemptResult.success()

    def _classify(self, error: CheckInError, context: RunContext) -> AttemptResult:
        context.record_failure(error)

        if not self.policy.is_retryable(error):
            logger.warning(f"{error.kind} errors are not retried, giving up")
            return AttemptResult(AttemptStatus.TERMINAL_FAILURE, error)

        if context.attempt_number >= context.max_attempts:
            logger.error(f"All {context.max_attempts} attempts failed")
            return AttemptResult(AttemptStatus.TERMINAL_FAILURE, error)

        return AttemptResult(AttemptStatus.RETRYABLE_FAILURE, error)

    def _capture(self, session: Optional[BrowserSession], context: RunContext) -> None:
        note = None
        if context.failures and context.failures[-1].attempt_number == context.attempt_number:
            note = context.failures[-1].message
        self.collector.capture_attempt(session, context.run_id, context.attempt_number, note=note)

    def _close_session(self, session: Optional[BrowserSession]) -> None:
        if session is None:
            return
        try:
            session.close()
        except Exception as e:
            logger.warning(f"Error closing browser session: {e}")
