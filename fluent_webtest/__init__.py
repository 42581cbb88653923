"""
fluent_webtest provides a fluent layer over selenium for end-to-end web tests:

    with WebTest(driver=Driver.CHROME) as test:
        test.open("https://the-internet.herokuapp.com/")
        test.tag("a").text("Checkboxes").element.click()
        boxes = test.wait_for_tag("input", timeout=5).attribute("type", "checkbox").elements

Installing the package also registers a pytest plugin providing the
`web_test` fixture (see fluent_webtest.plugin).
"""
from fluent_webtest.driver import Driver
from fluent_webtest.element import Element
from fluent_webtest.models import WebTestOptions
from fluent_webtest.search import NotFoundError, SearchResults
from fluent_webtest.webtest import BrowserError, WebTest

__all__ = [
    "BrowserError",
    "Driver",
    "Element",
    "NotFoundError",
    "SearchResults",
    "WebTest",
    "WebTestOptions",
]
