import re
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field, model_validator

from fluent_webtest.driver import Driver


class WebTestOptions(BaseModel):
    """
    How a WebTest builds and tears down its browser.

    driver - the browser to use
    headless - run without a visible window
    cleanup - remove the temporary (download) directory when closing
    binary_path - an alternative browser executable, e.g. Brave for Driver.CHROME
    error_screenshot - where to save a screenshot when a `with WebTest()` block fails
    keep_open - leave the browser running after close(), for debugging
    ascii - log with [TAGS] instead of icons
    """

    driver: Driver = Driver.FIREFOX
    headless: bool = True
    cleanup: bool = True
    binary_path: Optional[str] = None
    error_screenshot: Optional[Path] = None
    keep_open: bool = False
    ascii: bool = False


class Outcome(Enum):
    success = "success"
    failure = "failure"
    never_started = "never started"


class Timed(BaseModel):
    start_time: datetime = Field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    def __enter__(self):
        self.start_time = datetime.now()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = datetime.now()

    def stop_timer(self):
        self.end_time = datetime.now()

    @computed_field
    @property
    def duration(self) -> str:
        """
        A human-readable minutes/seconds slug; 129 seconds reads '2m 9s'.
        """
        end_time = self.end_time or datetime.now()
        minutes, seconds = divmod(int((end_time - self.start_time).total_seconds()), 60)
        if minutes:
            return f"{minutes}m {seconds}s"
        return f"{seconds}s"


class TestResult(Timed):
    __test__ = False  # not a pytest test class

    test_name: str
    test_id: Optional[str] = None  # derived from test_name
    screenshot: Optional[str] = None  # relative to the report directory
    traceback: Optional[str] = None
    test_description: Optional[str] = None
    outcome: Outcome = Outcome.never_started

    @model_validator(mode="after")
    def populate_test_id(self):
        if not self.test_id:
            test_id = re.sub(r"-+", "-", re.sub(r"[^\w]", "-", self.test_name))
            self.test_id = test_id.strip("-")
        return self


class Report(Timed):
    outcome: Outcome = Outcome.never_started
    results: List[TestResult] = []
    arguments: Optional[str] = None
    title: str

    @property
    def failures(self) -> List[TestResult]:
        return [result for result in self.results if result.outcome != Outcome.success]

    @property
    def num_failures(self) -> int:
        return len(self.failures)


class ReportResult:
    """
    The outcome of a test's call phase, attached to the pytest item.
    report -- a pytest test outcome
    excinfo -- exception info if there is any
    doc -- the docstring for the test if there is any
    """

    def __init__(self, report, excinfo, doc):
        self.report = report
        self.excinfo = excinfo
        self.doc = doc
