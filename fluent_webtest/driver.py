import logging
from enum import Enum
from typing import Optional

from selenium import webdriver
from selenium.webdriver.remote.webdriver import WebDriver

logger = logging.getLogger(__name__)

__all__ = ["Driver"]


def _quiet_selenium():
    logging.getLogger("selenium").setLevel(logging.WARNING)


def _firefox(headless: bool, binary_path: Optional[str], download_dir: str) -> WebDriver:
    options = webdriver.FirefoxOptions()
    options.log.level = "warn"
    options.set_preference("browser.download.dir", download_dir)
    options.set_preference("browser.download.folderList", 2)
    if headless:
        options.add_argument("-headless")
    if binary_path:
        options.binary_location = binary_path
    return webdriver.Firefox(options=options)


def _chrome(headless: bool, binary_path: Optional[str], download_dir: str) -> WebDriver:
    options = webdriver.ChromeOptions()
    if headless:
        options.add_argument("--headless")
    if binary_path:
        options.binary_location = binary_path
    _quiet_selenium()
    return webdriver.Chrome(options=options)


def _edge(headless: bool, binary_path: Optional[str], download_dir: str) -> WebDriver:
    options = webdriver.EdgeOptions()
    if headless:
        options.add_argument("--headless")
    if binary_path:
        options.binary_location = binary_path
    _quiet_selenium()
    return webdriver.Edge(options=options)


def _safari(headless: bool, binary_path: Optional[str], download_dir: str) -> WebDriver:
    # Safari supports neither headless mode nor a custom binary.
    return webdriver.Safari(options=webdriver.SafariOptions())


_BUILDERS = {
    "firefox": _firefox,
    "chrome": _chrome,
    "edge": _edge,
    "safari": _safari,
}


class Driver(Enum):
    """
    The browsers a WebTest can drive. Driver binaries are resolved by
    selenium manager, so nothing needs to be installed up front.

    Chrome also covers Chromium-based browsers (Brave, Chromium, Opera)
    when a binary_path is given. Safari is macOS only and requires
    `safaridriver --enable`.
    """

    FIREFOX = "firefox"
    CHROME = "chrome"
    EDGE = "edge"
    SAFARI = "safari"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return None

    @property
    def supports_download(self) -> bool:
        """Only Firefox can be pointed at a download directory."""
        return self is Driver.FIREFOX

    def construct(self, headless: bool, binary_path: Optional[str], download_dir: str) -> WebDriver:
        logger.info(
            f"Building {self.value} driver (headless={headless}, binary={binary_path or 'default'}, "
            f"downloads={download_dir if self.supports_download else 'unsupported'})"
        )
        return _BUILDERS[self.value](headless, binary_path, download_dir)
