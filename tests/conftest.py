import time
from typing import List
from unittest import mock

import pytest
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from fluent_webtest.driver import Driver
from fluent_webtest.element import Element

pytest_plugins = ["pytester"]


def make_web_element(tag_name: str = "div", text: str = "", **attributes) -> WebElement:
    """A selenium WebElement double; attributes are served by get_attribute."""
    element = mock.MagicMock(spec=WebElement)
    element.tag_name = tag_name
    element.text = text
    element.get_attribute.side_effect = attributes.get
    return element


@pytest.fixture
def fake_driver() -> WebDriver:
    return mock.MagicMock(spec=WebDriver)


@pytest.fixture
def make_element(fake_driver):
    def inner(tag_name: str = "div", text: str = "", **attributes) -> Element:
        return Element(make_web_element(tag_name, text, **attributes), fake_driver)

    return inner


@pytest.fixture
def sleeps(monkeypatch) -> List[float]:
    """Records calls to time.sleep instead of sleeping."""
    recorded = []
    monkeypatch.setattr(time, "sleep", recorded.append)
    return recorded


@pytest.fixture
def construct(fake_driver):
    with mock.patch.object(Driver, "construct", return_value=fake_driver) as construct:
        yield construct
