"""
Shared fakes for orchestrator, collector and reporter tests.

None of these touch a real browser or the network.
"""
from typing import List, Optional, Sequence, Tuple

import pytest

from checkin.artifacts import ArtifactCollector
from checkin.checkin_models import TravelerCredential


class FakeSession:
    """Stands in for BrowserSession."""

    def __init__(self, number: int, body: str = "<html></html>",
                 fail_body: bool = False, fail_screenshot: bool = False):
        self.number = number
        self.body = body
        self.fail_body = fail_body
        self.fail_screenshot = fail_screenshot
        self.viewport: Optional[Tuple[int, int]] = None
        self.close_calls = 0

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    def resize_viewport(self, width: int, height: int) -> None:
        self.viewport = (width, height)

    def capture_body(self) -> str:
        if self.fail_body:
            raise RuntimeError("page crashed")
        return self.body

    def capture_screenshot(self) -> bytes:
        if self.fail_screenshot:
            raise RuntimeError("target closed")
        return b"\x89PNG fake"

    def close(self) -> None:
        self.close_calls += 1


class FakeSessionFactory:
    """Hands out a new FakeSession on every call and remembers them all."""

    def __init__(self, fail_on: Sequence[int] = ()):
        self.sessions: List[FakeSession] = []
        self.fail_on = set(fail_on)
        self.calls = 0

    def __call__(self) -> FakeSession:
        self.calls += 1
        if self.calls in self.fail_on:
            raise RuntimeError("browser failed to launch")
        session = FakeSession(self.calls)
        self.sessions.append(session)
        return session


class ScriptedSteps:
    """
    Step sequence that follows a script, one entry per attempt.

    None means success; an exception instance is raised. The last entry is
    repeated once the script runs out.
    """

    def __init__(self, *script):
        self.script = list(script) or [None]
        self.calls: List[Tuple[object, TravelerCredential]] = []

    def execute(self, session, credential: TravelerCredential) -> None:
        index = min(len(self.calls), len(self.script) - 1)
        self.calls.append((session, credential))
        outcome = self.script[index]
        if outcome is not None:
            raise outcome


class RecordingSender:
    """NotificationSender that keeps what it was asked to send."""

    def __init__(self, configured: bool = True, error: Optional[Exception] = None):
        self.configured = configured
        self.error = error
        self.sent: List[Tuple[str, str, List[Tuple[str, bytes]]]] = []

    def is_configured(self) -> bool:
        return self.configured

    def send(self, subject: str, body: str, attachments) -> bool:
        self.sent.append((subject, body, list(attachments)))
        if self.error is not None:
            raise self.error
        return True


class RecordingReporter:
    """Wraps a real reporter and counts finalize calls."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []

    def finalize(self, context, artifacts):
        self.calls.append((context, tuple(artifacts)))
        return self.inner.finalize(context, artifacts)


@pytest.fixture
def traveler() -> TravelerCredential:
    return TravelerCredential(confirmation="abc123", first_name="Ada", last_name="Lovelace")


@pytest.fixture
def collector(tmp_path) -> ArtifactCollector:
    return ArtifactCollector(tmp_path / "artifacts")


@pytest.fixture
def sleeps() -> List[float]:
    return []

