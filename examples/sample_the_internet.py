"""
Clicks through https://the-internet.herokuapp.com/, a site built for
exercising browser automation. Run it with pytest explicitly:

    pytest examples/sample_the_internet.py --webtest-headed
"""


def test_click_links(web_test):
    web_test.open("https://the-internet.herokuapp.com/")
    web_test.log("Opened the-internet.herokuapp.com")

    web_test.tag("a").text("Checkboxes").element.click()
    header = web_test.wait_for_tag("h3", timeout=5).element
    assert "Checkboxes" in header.text

    checkboxes = web_test.tag("input").attribute("type", "checkbox").elements
    web_test.log(f"Found {len(checkboxes)} checkboxes")
    checkboxes[0].click()

    web_test.open("/")
    web_test.wait_for_tag("a", timeout=5).text("Dropdown").element.click()
    web_test.wait_for_tag("select", timeout=5).element.select("Option 2")
    assert web_test.tag("option").filter("selected", lambda e: e.web_element.is_selected()).element.text == "Option 2"


def test_nested_search(web_test):
    web_test.open("https://the-internet.herokuapp.com/tables")
    table = web_test.tag("table").attribute("id", "table1").element
    rows = table.tag("tbody").element.children
    assert rows
    assert str(rows[0].parent) == "tbody"
    assert table.tag("td").text("Smith").optional_element is not None
