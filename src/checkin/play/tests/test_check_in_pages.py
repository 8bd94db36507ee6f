"""Page objects and the step sequence against local HTML fixtures."""
import pytest

from checkin.browser import BrowserSession, BrowserSessionFactory
from checkin.errors import InteractionFailure, SiteReportedError
from checkin.play.pages import ConfirmationPage, LandingPage
from checkin.steps import CheckInSteps


def _steps(url):
    return CheckInSteps(base_url=url, settle_timeout=5000, settle_dwell=0, error_timeout=500)


def test_landing_page_fills_reservation(session, site, traveler):
    session.navigate(site["success"])
    landing_page = LandingPage(session.page)
    landing_page.wait_for_page_load()

    landing_page.look_up_reservation(traveler)

    assert session.page.evaluate("window.submitted") == ["ABC123", "Ada", "Lovelace"]
    assert not landing_page.has_error(timeout=200)


def test_landing_page_reads_first_line_of_error(session, site, traveler):
    session.navigate(site["error"])
    landing_page = LandingPage(session.page)
    landing_page.look_up_reservation(traveler)

    assert landing_page.has_error(timeout=2000)
    assert landing_page.get_error_message() == "We are unable to retrieve your reservation."


def test_confirmation_page_clicks_and_settles(session, site, traveler):
    session.navigate(site["success"])
    LandingPage(session.page).look_up_reservation(traveler)

    confirmation_page = ConfirmationPage(session.page)
    confirmation_page.wait_for_confirmation_load()
    confirmation_page.confirm_check_in()
    confirmation_page.wait_for_settle(timeout=5000, dwell=0)

    assert session.page.get_attribute("#result", "data-checked-in") == "yes"


def test_steps_succeed(session, site, traveler):
    _steps(site["success"]).execute(session, traveler)

    assert session.page.get_attribute("#result", "data-checked-in") == "yes"


def test_steps_raise_site_reported_error(session, site, traveler):
    with pytest.raises(SiteReportedError) as exc_info:
        _steps(site["error"]).execute(session, traveler)

    assert exc_info.value.message == "We are unable to retrieve your reservation."


def test_steps_wrap_driver_errors(session, tmp_path, traveler):
    missing = (tmp_path / "missing.html").as_uri()

    with pytest.raises(InteractionFailure):
        _steps(missing).execute(session, traveler)


def test_session_captures_and_resizes(session, site):
    session.navigate(site["success"])
    session.resize_viewport(1600, 1280)

    assert session.page.viewport_size == {"width": 1600, "height": 1280}
    assert "TabbedArea_4-tab-4" in session.capture_body()
    assert session.capture_screenshot().startswith(b"\x89PNG")


def test_session_close_is_idempotent(browser):
    context = browser.new_context()
    session = BrowserSession(context, context.new_page())
    session.close()
    session.close()

    assert session.closed


def test_factory_gives_isolated_sessions(playwright_instance, browser, site):
    factory = BrowserSessionFactory(playwright_instance, headless=True, default_timeout=5000)
    try:
        first = factory()
        first.navigate(site["success"])
        first.close()

        second = factory()
        assert second.context is not first.context
        second.close()
    finally:
        factory.close()
