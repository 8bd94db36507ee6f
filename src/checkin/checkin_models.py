"""
Data models for the check-in automation workflow.

These are plain dataclasses shared by the orchestrator, the artifact
collector and the reporter.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from checkin.errors import CheckInError, ConfigurationError


@dataclass(frozen=True)
class TravelerCredential:
    """
    Identity used to look up the reservation.

    The confirmation code is normalized to upper case. All three fields are
    required; a missing value is a configuration error.
    """
    confirmation: str
    first_name: str
    last_name: str

    def __post_init__(self):
        confirmation = (self.confirmation or "").strip().upper()
        first_name = (self.first_name or "").strip()
        last_name = (self.last_name or "").strip()

        missing = [
            name for name, value in (
                ("confirmation", confirmation),
                ("first_name", first_name),
                ("last_name", last_name),
            ) if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Traveler credential is missing: {', '.join(missing)}"
            )

        object.__setattr__(self, "confirmation", confirmation)
        object.__setattr__(self, "first_name", first_name)
        object.__setattr__(self, "last_name", last_name)


class RunOutcome(Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class AttemptFailure:
    """One failed attempt, kept for the final report."""
    attempt_number: int
    kind: str
    message: str

    @classmethod
    def from_error(cls, attempt_number: int, error: CheckInError) -> "AttemptFailure":
        return cls(attempt_number=attempt_number, kind=error.kind, message=str(error))


@dataclass
class RunContext:
    """
    State of one run: which attempt we are on and how it ended.

    The outcome starts as PENDING and is finalized exactly once.
    """
    run_id: str
    max_attempts: int
    attempt_number: int = 1
    outcome: RunOutcome = RunOutcome.PENDING
    failures: List[AttemptFailure] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if not 1 <= self.attempt_number <= self.max_attempts:
            raise ValueError(f"attempt_number {self.attempt_number} out of range")

    @property
    def attempts_made(self) -> int:
        return self.attempt_number

    @property
    def success(self) -> bool:
        return self.outcome is RunOutcome.SUCCESS

    @property
    def last_error(self) -> Optional[str]:
        if not self.failures:
            return None
        return self.failures[-1].message

    def record_failure(self, error: CheckInError) -> AttemptFailure:
        failure = AttemptFailure.from_error(self.attempt_number, error)
        self.failures.append(failure)
        return failure

    def next_attempt(self) -> int:
        if self.attempt_number >= self.max_attempts:
            raise RuntimeError("No attempts left in this run")
        self.attempt_number += 1
        return self.attempt_number

    def finalize(self, outcome: RunOutcome) -> None:
        if outcome is RunOutcome.PENDING:
            raise ValueError("Cannot finalize a run as pending")
        if self.outcome is not RunOutcome.PENDING:
            raise RuntimeError(f"Run {self.run_id} already finalized as {self.outcome.value}")
        self.outcome = outcome
        self.finished_at = datetime.now()


class ArtifactKind(Enum):
    PAGE_SNAPSHOT = "page_snapshot"
    SCREENSHOT = "screenshot"
    LOG_FILE = "log_file"


@dataclass(frozen=True)
class Artifact:
    """A forensic capture written to disk for a given attempt."""
    kind: ArtifactKind
    attempt_number: int
    path: Path

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class NotificationMessage:
    """The single report sent at the end of a run."""
    subject: str
    body: str
    attachments: List[Artifact] = field(default_factory=list)
