from unittest import mock

import pytest

from fluent_webtest.driver import Driver


@pytest.mark.parametrize("value", ["chrome", "CHROME", " Chrome "])
def test_lookup_is_case_insensitive(value):
    assert Driver(value) is Driver.CHROME


def test_unknown_driver():
    with pytest.raises(ValueError):
        Driver("netscape")


@pytest.mark.parametrize("driver, expected", [(d, d is Driver.FIREFOX) for d in Driver])
def test_supports_download(driver, expected):
    assert driver.supports_download == expected


def test_firefox_options():
    with mock.patch("fluent_webtest.driver.webdriver.Firefox") as firefox:
        result = Driver.FIREFOX.construct(headless=True, binary_path="/opt/firefox", download_dir="/tmp/dl")
    assert result is firefox.return_value
    options = firefox.call_args.kwargs["options"]
    assert "-headless" in options.arguments
    assert options.preferences["browser.download.dir"] == "/tmp/dl"
    assert options.preferences["browser.download.folderList"] == 2
    assert options.binary_location == "/opt/firefox"


@pytest.mark.parametrize("driver, selenium_class", [(Driver.CHROME, "Chrome"), (Driver.EDGE, "Edge")])
def test_chromium_options(driver, selenium_class):
    with mock.patch(f"fluent_webtest.driver.webdriver.{selenium_class}") as browser:
        driver.construct(headless=True, binary_path="/usr/bin/brave", download_dir="/tmp/dl")
    options = browser.call_args.kwargs["options"]
    assert "--headless" in options.arguments
    assert options.binary_location == "/usr/bin/brave"


def test_headed_chrome():
    with mock.patch("fluent_webtest.driver.webdriver.Chrome") as chrome:
        Driver.CHROME.construct(headless=False, binary_path=None, download_dir="/tmp/dl")
    assert "--headless" not in chrome.call_args.kwargs["options"].arguments


def test_safari_ignores_headless():
    with mock.patch("fluent_webtest.driver.webdriver.Safari") as safari:
        Driver.SAFARI.construct(headless=True, binary_path="/ignored", download_dir="/tmp/dl")
    safari.assert_called_once()
