import logging
import os
import sys
from typing import Callable, Optional

import pytest
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .driver import Driver
from .models import Outcome, Report, ReportResult, TestResult, Timed, WebTestOptions
from .report_exporter import ReportExporter
from .webtest import BrowserError, WebTest

logger = logging.getLogger(__name__)


class WebTestSettings(BaseSettings):
    """
    Defaults derived from WEBTEST_* environment variables, with truthy/falsey
    strings translated into bools. Command line options take precedence.
    """

    model_config = SettingsConfigDict(env_prefix="webtest_")

    driver: Optional[str] = None
    headed: Optional[bool] = None
    binary_path: Optional[str] = None
    keep_open: Optional[bool] = None
    ascii: Optional[bool] = None
    report_dir: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def handle_empty_string(cls, v):
        if v == "":
            return None
        return v


def pytest_addoption(parser):
    settings = WebTestSettings()
    group = parser.getgroup("fluent_webtest")
    group.addoption(
        "--webtest-driver",
        action="store",
        dest="webtest_driver",
        default=Driver(settings.driver or Driver.FIREFOX.value).value,
        choices=[d.value for d in Driver],
        help="The browser used by the web_test fixture (default: firefox).",
    )
    group.addoption(
        "--webtest-headed",
        action="store_true",
        dest="webtest_headed",
        default=bool(settings.headed),
        help="Show the browser window instead of running headless.",
    )
    group.addoption(
        "--webtest-binary",
        action="store",
        dest="webtest_binary",
        default=settings.binary_path,
        help="Path to an alternative browser executable.",
    )
    group.addoption(
        "--webtest-keep-open",
        action="store_true",
        dest="webtest_keep_open",
        default=bool(settings.keep_open),
        help="Leave the browser running after each test, for debugging.",
    )
    group.addoption(
        "--webtest-ascii",
        action="store_true",
        dest="webtest_ascii",
        default=bool(settings.ascii),
        help="Log actions with [TAGS] instead of icons.",
    )
    group.addoption(
        "--report-dir",
        action="store",
        dest="report_dir",
        default=settings.report_dir or os.path.join(os.getcwd(), "webtest-report"),
        help="The path to the directory where screenshots and the report should be stored.",
    )
    group.addoption(
        "--report-title",
        action="store",
        dest="report_title",
        default="Web Test Summary",
        help="An optional title for your report; if not provided, a default will be used.",
    )


@pytest.fixture(scope="session")
def webtest_options(request) -> WebTestOptions:
    """
    The options every WebTest built by the plugin is created with. Override
    this fixture to customize them:

        @pytest.fixture(scope='session')
        def webtest_options(webtest_options) -> WebTestOptions:
            return webtest_options.model_copy(update={"cleanup": False})
    """
    config = request.config
    return WebTestOptions(
        driver=Driver(config.getoption("webtest_driver")),
        headless=not config.getoption("webtest_headed"),
        binary_path=config.getoption("webtest_binary"),
        keep_open=config.getoption("webtest_keep_open"),
        ascii=config.getoption("webtest_ascii"),
    )


@pytest.fixture(scope="session")
def build_web_test(webtest_options) -> Callable[..., WebTest]:
    logger.info(f"WebTest instances will be built with the following settings: {webtest_options!r}")

    def inner(**overrides) -> WebTest:
        options = webtest_options.model_copy(update=overrides) if overrides else webtest_options
        return WebTest(options)

    return inner


@pytest.fixture(scope="session")
def report_dir(request) -> str:
    dir_ = request.config.getoption("report_dir")
    os.makedirs(dir_, exist_ok=True)
    return dir_


@pytest.fixture(scope="session")
def report_title(request) -> str:
    return request.config.getoption("report_title")


@pytest.fixture(scope="session")
def test_report(report_dir, report_title) -> Report:
    """
    Collects the results of every test that used `web_test`; exported to
    report_dir once the session ends.
    """
    report = Report(arguments=" ".join(sys.argv[1:]), title=report_title)
    yield report
    report.stop_timer()
    report.outcome = Outcome.failure if report.num_failures else Outcome.success
    ReportExporter().export_all(report, report_dir)


@pytest.fixture
def web_test(build_web_test, request, report_dir, test_report) -> WebTest:
    """
    A fresh WebTest for each test. If the test fails, a screenshot of the page
    is saved to the report directory before the browser is closed.
    """
    timer: Timed
    with Timed() as timer:
        test = build_web_test()
        try:
            yield test
        finally:
            result = _build_result(request, timer)
            try:
                if result.outcome == Outcome.failure:
                    result.screenshot = f"screenshots/{result.test_id}.png"
                    test.save_error_screenshot(os.path.join(report_dir, result.screenshot))
            finally:
                test.close()
    result.end_time = timer.end_time
    test_report.results.append(result)


def _build_result(request, timer: Timed) -> TestResult:
    call_summary: Optional[ReportResult] = getattr(request.node, "report_result", None)
    if not call_summary:
        logger.error(
            f"Test {request.node} reported no outcomes; "
            f"this usually indicates a fixture caused an error when setting up the test."
        )
        return TestResult(test_name=request.node.name, start_time=timer.start_time)

    outcome = Outcome.failure if call_summary.report.failed else Outcome.success
    tb = None
    if call_summary.excinfo and outcome == Outcome.failure:
        exception = call_summary.excinfo.value
        tb = f"{exception.__class__.__name__}: {exception}"
        if isinstance(exception, BrowserError) and exception.__cause__:
            tb = f"{tb}\ncaused by {exception.__cause__!r}"
    return TestResult(
        test_name=call_summary.report.nodeid,
        test_description=call_summary.doc,
        outcome=outcome,
        start_time=timer.start_time,
        traceback=tb,
    )


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    This gives us hooks from which to report status post test-run.
    """
    outcome = yield

    report = outcome.get_result()
    if report.when == "call":
        doc = getattr(getattr(item, "function", None), "__doc__", None)
        item.report_result = ReportResult(report=report, excinfo=call.excinfo, doc=doc)
