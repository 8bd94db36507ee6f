"""Tests for the command line entry point, with the browser faked out."""
import contextlib

import pytest

from checkin import run_checkin
from checkin.tests.conftest import FakeSessionFactory, ScriptedSteps
from checkin.errors import SiteReportedError

ENV_VARS = [
    "CHECKIN_CONFIRMATION", "CHECKIN_NAME", "CHECKIN_FIRST_NAME", "CHECKIN_LAST_NAME",
    "CHECKIN_MAX_ATTEMPTS", "CHECKIN_RETRY_DELAY", "CHECKIN_ARTIFACT_DIR",
    "RESEND_API_KEY", "RESEND_FROM_EMAIL", "CHECKIN_EMAIL_RECIPIENTS",
]


class ClosingFactory(FakeSessionFactory):

    def __init__(self, *args, **kwargs):
        super().__init__()
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CHECKIN_RETRY_DELAY", "0")


@pytest.fixture
def no_browser(monkeypatch):
    def forbidden():
        raise AssertionError("browser must not be started")

    monkeypatch.setattr(run_checkin, "sync_playwright", forbidden)


@pytest.fixture
def fake_browser(monkeypatch):
    factories = []

    def make_factory(*args, **kwargs):
        factory = ClosingFactory()
        factories.append(factory)
        return factory

    monkeypatch.setattr(run_checkin, "sync_playwright", lambda: contextlib.nullcontext(object()))
    monkeypatch.setattr(run_checkin, "check_for_browser", lambda playwright: None)
    monkeypatch.setattr(run_checkin, "BrowserSessionFactory", make_factory)
    return factories


def _use_steps(monkeypatch, steps):
    monkeypatch.setattr(run_checkin, "CheckInSteps", lambda **kwargs: steps)


def test_missing_traveler_exits_1_before_browser(tmp_path, no_browser):
    assert run_checkin.main(["--artifact-dir", str(tmp_path)]) == 1


def test_zero_max_attempts_exits_1_before_browser(monkeypatch, tmp_path, no_browser):
    monkeypatch.setenv("CHECKIN_CONFIRMATION", "ABC123")
    monkeypatch.setenv("CHECKIN_NAME", "Ada Lovelace")

    assert run_checkin.main(["--artifact-dir", str(tmp_path), "--max-attempts", "0"]) == 1


def test_successful_run_exits_0(monkeypatch, tmp_path, fake_browser):
    monkeypatch.setenv("CHECKIN_CONFIRMATION", "ABC123")
    monkeypatch.setenv("CHECKIN_NAME", "Ada Lovelace")
    steps = ScriptedSteps(None)
    _use_steps(monkeypatch, steps)

    assert run_checkin.main(["--artifact-dir", str(tmp_path)]) == 0
    assert len(steps.calls) == 1
    assert fake_browser[0].closed
    assert list(tmp_path.glob("screenshot-*-attempt1.png"))


def test_failed_run_exits_1_after_all_attempts(monkeypatch, tmp_path, fake_browser):
    monkeypatch.setenv("CHECKIN_CONFIRMATION", "ABC123")
    monkeypatch.setenv("CHECKIN_NAME", "Ada Lovelace")
    steps = ScriptedSteps(SiteReportedError("too early"))
    _use_steps(monkeypatch, steps)

    assert run_checkin.main(["--artifact-dir", str(tmp_path), "--max-attempts", "2"]) == 1
    assert len(steps.calls) == 2
    assert fake_browser[0].closed
