"""
Fixtures that drive real Chromium against local HTML pages.

Tests are skipped when Playwright's Chromium build is not installed.
"""
import pytest
from playwright.sync_api import sync_playwright

from checkin.browser import BrowserSession
from checkin.checkin_models import TravelerCredential

LANDING_PAGE = """
<html>
<head><title>Fly</title></head>
<body>
  <ul>
    <li><button id="TabbedArea_4-tab-4" onclick="showForm()">Check In</button></li>
  </ul>
  <div id="check-in-form" style="display: none">
    <input id="LandingPageAirReservationForm_confirmationNumber_check-in">
    <input id="LandingPageAirReservationForm_passengerFirstName_check-in">
    <input id="LandingPageAirReservationForm_passengerLastName_check-in">
    <button id="LandingPageAirReservationForm_submit-button_check-in" onclick="lookUp()">Check in</button>
  </div>
  <div id="result"></div>
  <script>
    var MODE = "__MODE__";
    function field(name) {
      return document.getElementById("LandingPageAirReservationForm_" + name + "_check-in").value;
    }
    function showForm() {
      document.getElementById("check-in-form").style.display = "block";
    }
    function lookUp() {
      window.submitted = [field("confirmationNumber"), field("passengerFirstName"), field("passengerLastName")];
      var result = document.getElementById("result");
      if (MODE === "error") {
        result.innerHTML = '<div class="message_error">We are unable to retrieve your reservation.<br>Please try again.</div>';
      } else {
        result.innerHTML = '<button class="form-mixin--submit-button" onclick="checkIn()">Check In</button>';
      }
    }
    function checkIn() {
      document.getElementById("result").setAttribute("data-checked-in", "yes");
    }
  </script>
</body>
</html>
"""


@pytest.fixture(scope="module")
def playwright_instance():
    with sync_playwright() as p:
        yield p


@pytest.fixture(scope="module")
def browser(playwright_instance):
    try:
        browser = playwright_instance.chromium.launch(headless=True)
    except Exception as e:
        pytest.skip(f"Chromium not available: {e}")
    yield browser
    browser.close()


@pytest.fixture
def session(browser):
    context = browser.new_context()
    context.set_default_timeout(5000)
    session = BrowserSession(context, context.new_page())
    yield session
    session.close()


@pytest.fixture
def site(tmp_path):
    """Write the landing page in both variants and return their file URLs."""
    urls = {}
    for mode in ("success", "error"):
        path = tmp_path / f"{mode}.html"
        path.write_text(LANDING_PAGE.replace("__MODE__", mode), encoding="utf-8")
        urls[mode] = path.as_uri()
    return urls


@pytest.fixture
def traveler():
    return TravelerCredential(confirmation="abc123", first_name="Ada", last_name="Lovelace")
