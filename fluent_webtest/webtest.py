import os
import shutil
import tempfile
import time
from logging import getLogger
from pathlib import Path
from typing import Callable, List, Optional, TypeVar, Union
from urllib.parse import urljoin, urlparse

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By

from fluent_webtest.element import Element
from fluent_webtest.log import Tag, describe_seconds, log_action, log_error
from fluent_webtest.models import WebTestOptions
from fluent_webtest.search import SLEEP_TIME, DataSet, SearchResults, SearchStrategy, wait_until_not_none

logger = getLogger(__name__)

__all__ = ["WebTest", "BrowserError"]

T = TypeVar("T")


class BrowserError(Exception):
    """Error to raise for a meaningful browser error report."""

    def __init__(self, message: str, url: Optional[str] = None, *args):
        self.message = message
        self.url = url
        super().__init__(message, url, *args)


class WebTest:
    """
    Entry point for browser tests. Use it as a context manager so the browser
    is closed (and an error screenshot taken, if configured) automatically:

        with WebTest(driver=Driver.CHROME) as test:
            test.open("https://example.com")
            test.tag("a").text("More information").element.click()
    """

    def __init__(self, options: Optional[WebTestOptions] = None, **kwargs):
        self.options = options or WebTestOptions(**kwargs)
        self._temp_dir = tempfile.mkdtemp(prefix="web-tests-")
        try:
            self.driver = self.options.driver.construct(
                headless=self.options.headless,
                binary_path=self.options.binary_path,
                download_dir=self._temp_dir,
            )
        except Exception:
            shutil.rmtree(self._temp_dir, ignore_errors=True)
            raise

    @property
    def ascii(self) -> bool:
        return self.options.ascii

    @property
    def download_dir(self) -> Optional[str]:
        """The download folder, or None when the driver cannot download."""
        if self.options.driver.supports_download:
            return self._temp_dir
        return None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_val is not None and self.options.error_screenshot:
                self.save_error_screenshot(self.options.error_screenshot)
        finally:
            self.close()

    def save_error_screenshot(self, target: Path):
        try:
            self.screenshot(target)
        except WebDriverException as e:
            logger.warning(f"Could not take error screenshot: {e!r}")
            return
        self.log(f"Error screenshot saved to {Path(target).absolute()}")

    def use(self, block: Callable[["WebTest"], T]) -> T:
        """Run block(self), closing the browser afterwards."""
        with self:
            return block(self)

    def open(self, url: str):
        """Open a URL; relative URLs are resolved against the current page."""
        log_action(Tag.OPEN, self.ascii, f"Request for URL '{url}'")
        target = url
        if not urlparse(url).scheme:
            target = urljoin(self.driver.current_url or "", url)
        try:
            self.driver.get(target)
        except WebDriverException as e:
            raise BrowserError(f"Unable to open server page '{url}'. Is the server running?", target) from e

    def back(self):
        log_action(Tag.BACK, self.ascii, "Navigating back")
        self.driver.back()

    def forward(self):
        log_action(Tag.FORWARD, self.ascii, "Navigating forward")
        self.driver.forward()

    def refresh(self):
        log_action(Tag.REFRESH, self.ascii, "Refreshing page")
        self.driver.refresh()

    @property
    def current_url(self) -> Optional[str]:
        return self.driver.current_url

    @property
    def title(self) -> Optional[str]:
        return self.driver.title

    def _search(self, tag: str, strategy: SearchStrategy) -> SearchResults:
        def query() -> List[Element]:
            return [Element(e, self.driver, self.ascii) for e in self.driver.find_elements(By.TAG_NAME, tag)]

        return SearchResults(DataSet(description=f"tag '{tag}'", query=query), strategy, self.ascii)

    def tag(self, tag: str) -> SearchResults:
        """Search for a tag in the current page."""
        return self._search(tag, SearchStrategy.direct())

    def wait_for_tag(self, tag: str, timeout: float = 60.0) -> SearchResults:
        """
        Search for a tag in the current page, waiting up to `timeout` seconds
        for at least one match to appear.
        """
        return self._search(tag, SearchStrategy.wait_for(timeout))

    def log(self, message: str):
        log_action(Tag.MESSAGE, self.ascii, message)

    def delay(self, seconds: float = SLEEP_TIME):
        log_action(Tag.DELAY, self.ascii, f"Waiting for {describe_seconds(seconds)}")
        time.sleep(seconds)

    def wait_for(self, predicate: Callable[[], bool], seconds: float = 1.0, reason: str = "") -> bool:
        """
        Wait until predicate() is true, for at most `seconds`.
        Returns whether the predicate was satisfied.
        """
        reason = f"'{reason}' " if reason else ""
        log_action(Tag.WAIT, self.ascii, f"Waiting for {describe_seconds(seconds)} until the predicate {reason}is true")
        return wait_until_not_none(seconds, lambda: True if predicate() else None) or False

    def screenshot(self, target: Union[str, Path]):
        """
        Save a screenshot of the current page. Firefox captures the full
        page; other browsers capture the visible viewport.
        """
        target = os.path.abspath(target)
        os.makedirs(os.path.dirname(target), exist_ok=True)
        if isinstance(self.driver, webdriver.Firefox):
            saved = self.driver.get_full_page_screenshot_as_file(target)
        else:
            saved = self.driver.get_screenshot_as_file(target)
        if not saved:
            log_error(Tag.ERROR, self.ascii, f"Unable to take screenshot using driver {self.driver}")

    def close(self):
        """Quit the browser (unless keep_open) and remove temporary files (if cleanup)."""
        try:
            if not self.options.keep_open:
                self.driver.quit()
        finally:
            if self.options.cleanup:
                shutil.rmtree(self._temp_dir, ignore_errors=True)
