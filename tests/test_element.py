import logging
from unittest import mock

import pytest
from selenium.common.exceptions import StaleElementReferenceException
from selenium.webdriver.common.by import By

from fluent_webtest.element import Element
from fluent_webtest.search import NotFoundError, SearchStrategy


@pytest.fixture
def form(make_element):
    return make_element("form")


def test_str_is_tag_name(form):
    assert str(form) == "form"


def test_actions_chain(make_element):
    field = make_element("input")
    assert field.clear().type("be ", "boundless").click() is field
    field.web_element.clear.assert_called_once_with()
    field.web_element.send_keys.assert_called_once_with("be ", "boundless")
    field.web_element.click.assert_called_once_with()


def test_type_is_logged(caplog, make_element):
    caplog.set_level(logging.INFO, logger="fluent_webtest")
    make_element("input").type("foo", "bar")
    assert "Typing 'foobar' on tag 'input'" in caplog.text


def test_select(make_element):
    dropdown = make_element("select")
    with mock.patch("fluent_webtest.element.Select") as select:
        assert dropdown.select("Option 2") is dropdown
    select.assert_called_once_with(dropdown.web_element)
    select.return_value.select_by_visible_text.assert_called_once_with("Option 2")


def test_text_and_value(make_element):
    field = make_element("input", "shown", value="typed")
    assert field.text == "shown"
    assert field.value == "typed"
    assert make_element("input").value is None


def test_parent(form, make_element, fake_driver):
    body = make_element("body").web_element
    fake_driver.execute_script.return_value = body
    parent = form.parent
    assert isinstance(parent, Element)
    assert parent.web_element is body
    fake_driver.execute_script.assert_called_once_with("return arguments[0].parentNode;", form.web_element)


def test_no_parent(form, fake_driver):
    fake_driver.execute_script.return_value = None
    with pytest.raises(NotFoundError):
        _ = form.parent


def test_children(form, make_element):
    kids = [make_element("input").web_element, make_element("button").web_element]
    form.web_element.find_elements.return_value = kids
    children = form.children
    assert [child.web_element for child in children] == kids
    assert [str(child) for child in children] == ["input", "button"]
    form.web_element.find_elements.assert_called_once_with(By.XPATH, "./child::*")


def test_tag_searches_inside_element(form, make_element):
    fields = [make_element("input", name="user").web_element, make_element("input", name="pass").web_element]
    form.web_element.find_elements.return_value = fields
    results = form.tag("input")
    assert results.dataset.description == "tag 'input' inside tag 'form'"
    assert results.strategy == SearchStrategy.direct()
    form.web_element.find_elements.assert_not_called()

    found = results.attribute("name", "pass").element
    assert found.web_element is fields[1]
    form.web_element.find_elements.assert_called_once_with(By.TAG_NAME, "input")


def test_tag_skips_stale_children(form, make_element):
    fine = make_element("li", "fine").web_element
    stale = make_element("li").web_element
    type(stale).text = mock.PropertyMock(side_effect=StaleElementReferenceException("gone"))
    form.web_element.find_elements.return_value = [stale, fine]
    assert [e.web_element for e in form.tag("li").text("fine").elements] == [fine]


def test_wait_for_tag(form, make_element, sleeps):
    item = make_element("li").web_element
    form.web_element.find_elements.side_effect = [[], [item]]
    results = form.wait_for_tag("li", timeout=2)
    assert results.strategy == SearchStrategy.wait_for(2)
    assert results.element.web_element is item
    assert sleeps == [0.3]
