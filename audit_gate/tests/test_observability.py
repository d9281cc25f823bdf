"""
Lightweight validation tests for the observability layer.

These tests verify:
- AuditMetrics copies counts out of a classification result
- AuditMetrics serializes to dict properly
- AuditReporter generates Markdown and saves it to disk
"""
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from decisioning import AdvisoryClassifier, ClassificationResult
from observability import AuditMetrics, AuditReporter


@pytest.fixture
def classified(mixed_records):
    """mixed_records classified with exceptions for 7, 20 and 999."""
    return AdvisoryClassifier().classify(mixed_records, ['7', '20', '999'])


def test_metrics_record_result(classified):
    """Verify AuditMetrics counts every classification outcome."""
    metrics = AuditMetrics(run_id="test_run", started_at=datetime.utcnow())

    metrics.record_result(classified)

    assert metrics.advisories_total == 4
    assert metrics.advisories_failing == 2
    assert metrics.advisories_excepted == 2
    assert metrics.advisories_dev_only == 1
    assert metrics.extraneous_exceptions == 2
    assert metrics.severity_counts == {"high": 4}
    assert metrics.passed is False


def test_metrics_record_command():
    metrics = AuditMetrics(run_id="test_run", started_at=datetime.utcnow())

    metrics.record_command("npm audit --json", 1, 2.31)

    assert metrics.commands == [{"command": "npm audit --json", "exit_code": 1, "duration": 2.31}]


def test_metrics_serialization(classified):
    """Verify AuditMetrics can be serialized to dict."""
    metrics = AuditMetrics(
        run_id="test_run",
        started_at=datetime(2024, 1, 15, 12, 0, 0),
        completed_at=datetime(2024, 1, 15, 12, 0, 4)
    )
    metrics.record_result(classified)
    metrics.record_command("npm audit --json", 1, 3.5)

    data = metrics.to_dict()

    assert data["run_id"] == "test_run"
    assert data["started_at"] == "2024-01-15T12:00:00"
    assert data["completed_at"] == "2024-01-15T12:00:04"
    assert data["advisories_total"] == 4
    assert data["passed"] is False
    assert data["commands"][0]["exit_code"] == 1


def test_reporter_generates_markdown(classified):
    """Verify AuditReporter generates valid Markdown."""
    metrics = AuditMetrics(
        run_id="test_run",
        started_at=datetime(2024, 1, 15, 12, 0, 0),
        completed_at=datetime(2024, 1, 15, 12, 0, 4)
    )
    metrics.record_result(classified)
    metrics.record_command("npm audit --json", 1, 3.5)

    report = AuditReporter().generate_report(metrics, classified)

    assert "# Dependency Audit Report" in report
    assert "test_run" in report
    assert "**Duration:** 4.0 seconds" in report
    assert "**Verdict:** FAILED" in report
    assert "## Severity Distribution" in report
    assert "## Advisories" in report
    assert "https://npmjs.com/advisories/100" in report
    assert "## Removable Exceptions" in report
    assert "no matching advisory" in report
    assert "development dependencies only" in report
    assert "`npm audit --json`" in report


def test_reporter_skips_empty_sections():
    metrics = AuditMetrics(run_id="test_run", started_at=datetime.utcnow())

    report = AuditReporter().generate_report(metrics, ClassificationResult())

    assert "**Verdict:** PASSED" in report
    assert "## Advisories" not in report
    assert "## Removable Exceptions" not in report
    assert "## Commands" not in report


def test_reporter_saves_to_file():
    """Verify AuditReporter can save reports to file."""
    metrics = AuditMetrics(run_id="test_run", started_at=datetime.utcnow())
    reporter = AuditReporter()
    report = reporter.generate_report(metrics, ClassificationResult())

    with tempfile.TemporaryDirectory() as tmpdir:
        report_path = reporter.save_report(report, Path(tmpdir) / "reports")

        assert report_path.exists()
        assert report_path.name.startswith("audit-report-")
        assert report_path.suffix == ".md"
        assert "Dependency Audit Report" in report_path.read_text()
