import json
import os

import pytest

from fluent_webtest import export_report
from fluent_webtest.models import Outcome, Report, TestResult
from fluent_webtest.report_exporter import ReportExporter


@pytest.fixture
def report() -> Report:
    return Report(
        title="Checkout flow",
        arguments="-k checkout",
        results=[
            TestResult(test_name="test_shop.py::test_cart", outcome=Outcome.success, test_description="Cart works"),
            TestResult(
                test_name="test_shop.py::test_pay",
                outcome=Outcome.failure,
                traceback="NotFoundError: Item with tag 'button' not found",
                screenshot="screenshots/test_shop-py-test_pay.png",
            ),
        ],
    )


def test_export_json_marks_failure(report, tmp_path):
    filename = ReportExporter().export_json(report, str(tmp_path))
    with open(filename) as f:
        data = json.load(f)
    assert data["outcome"] == "failure"
    assert data["results"][1]["screenshot"] == "screenshots/test_shop-py-test_pay.png"
    assert "duration" in data


def test_export_all(report, tmp_path):
    dest = tmp_path / "report"
    ReportExporter().export_all(report, str(dest))
    assert (dest / "report.json").exists()
    html = (dest / "index.html").read_text()
    assert "Checkout flow" in html
    assert "Cart works" in html
    assert 'src="screenshots/test_shop-py-test_pay.png"' in html
    assert "Item with tag &#39;button&#39; not found" in html


def test_export_report_cli(report, tmp_path):
    source = ReportExporter().export_json(report, str(tmp_path))
    output_dir = tmp_path / "regenerated"
    assert export_report.main(["-i", source, "-o", str(output_dir)]) == str(output_dir)
    assert os.path.exists(output_dir / "index.html")
    assert Report.model_validate_json((output_dir / "report.json").read_text()).title == "Checkout flow"


def test_export_report_cli_requires_input():
    with pytest.raises(SystemExit):
        export_report.get_parser().parse_args([])
