from typing import List, Optional

from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.select import Select

from fluent_webtest.log import Tag, log_action
from fluent_webtest.search import DataSet, NotFoundError, SearchResults, SearchStrategy

__all__ = ["Element"]


class Element:
    """
    An element found inside the web page, wrapping a selenium WebElement.
    The driver is shared with the owning WebTest and is never closed from here.
    """

    def __init__(self, web_element: WebElement, driver: WebDriver, ascii: bool = False):
        self.web_element = web_element
        self.driver = driver
        self.ascii = ascii

    def __str__(self):
        return self.web_element.tag_name or str(self.web_element)

    def __repr__(self):
        return f"Element({self})"

    def type(self, *text: str) -> "Element":
        """Send text to this element, which should accept input (e.g. an 'input')."""
        log_action(Tag.TYPE, self.ascii, f"Typing '{''.join(text)}' on tag '{self}'")
        self.web_element.send_keys(*text)
        return self

    def click(self) -> "Element":
        log_action(Tag.CLICK, self.ascii, f"Clicking on tag '{self}'")
        self.web_element.click()
        return self

    def clear(self) -> "Element":
        log_action(Tag.CLEAR, self.ascii, f"Clearing tag '{self}'")
        self.web_element.clear()
        return self

    def select(self, text: str) -> "Element":
        """Select an option of a 'select' element by its visible text."""
        log_action(Tag.SELECT, self.ascii, f"Selecting '{text}' from dropdown '{self}'")
        Select(self.web_element).select_by_visible_text(text)
        return self

    @property
    def text(self) -> str:
        return self.web_element.text

    @property
    def value(self) -> Optional[str]:
        return self.web_element.get_attribute("value")

    @property
    def parent(self) -> "Element":
        node = self.driver.execute_script("return arguments[0].parentNode;", self.web_element)
        if not isinstance(node, WebElement):
            raise NotFoundError(f"Unable to find parent of tag '{self}'")
        parent = Element(node, self.driver, self.ascii)
        log_action(Tag.PARENT, self.ascii, f"Request parent of tag '{self}', which is a '{parent}'")
        return parent

    @property
    def children(self) -> List["Element"]:
        found = self.web_element.find_elements(By.XPATH, "./child::*")
        plural = "" if len(found) == 1 else "s"
        log_action(Tag.CHILDREN, self.ascii, f"Request children of tag '{self}', found {len(found)} item{plural}")
        return [Element(child, self.driver, self.ascii) for child in found]

    def _search(self, tag: str, strategy: SearchStrategy) -> SearchResults:
        def query() -> List[Element]:
            return [Element(e, self.driver, self.ascii) for e in self.web_element.find_elements(By.TAG_NAME, tag)]

        dataset = DataSet(description=f"tag '{tag}' inside tag '{self}'", query=query)
        return SearchResults(dataset, strategy, self.ascii)

    def tag(self, tag: str) -> SearchResults:
        """Search for a tag inside this element."""
        return self._search(tag, SearchStrategy.direct())

    def wait_for_tag(self, tag: str, timeout: float = 60.0) -> SearchResults:
        """
        Search for a tag inside this element, waiting up to `timeout` seconds
        for at least one match to appear.
        """
        return self._search(tag, SearchStrategy.wait_for(timeout))
