#!/usr/bin/env python3
"""
Build gate around `npm audit`.

This module coordinates one audit run:
1. Lockfile: Make sure package-lock.json exists (temporarily if needed)
2. Audit: Run `npm audit --json` in the project directory
3. Decoding: Turn the JSON report into raw advisory records
4. Classification: Apply the exception policy and sort advisories
5. Rendering: Print the advisory table and summary
6. Reporting: Optionally save a Markdown report

The gate passes iff no advisory affects a production dependency without
an exception.

Usage:
    python run_audit.py [--config audit.yaml] [--path DIR] [--exception ID ...]
"""
import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, TextIO

import yaml

from decisioning import AdvisoryClassifier, AuditGateError, ClassificationResult, ExceptionSet
from ingestion import CommandRunner, NpmAuditAdapter, ensure_package_lock
from observability import AuditMetrics, AuditReporter, RenderConfig, ReportRenderer

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "audit": {
        "path": ".",
        "exceptions": [],
        "strict": False,
    },
    "report": {
        "max_module_length": 16,
        "max_title_length": 16,
        "colors": True,
        "markdown_dir": None,
    },
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load gate configuration from YAML, filling in defaults.

    Args:
        config_path: Path to YAML file, or None for defaults only

    Returns:
        Configuration with 'audit' and 'report' sections

    Raises:
        FileNotFoundError: If config_path is given but does not exist
        ValueError: If the file has the wrong shape
    """
    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}

    if config_path is None:
        return config

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    for section, values in loaded.items():
        if section not in config:
            raise ValueError(f"Unknown config section: {section}")
        if values is None:
            continue
        if not isinstance(values, dict):
            raise ValueError(f"Config section '{section}' must be a mapping")
        for key, value in values.items():
            if key not in config[section]:
                raise ValueError(f"Unknown config key: {section}.{key}")
            config[section][key] = value

    exceptions = config["audit"]["exceptions"]
    if exceptions is None:
        config["audit"]["exceptions"] = []
    elif not isinstance(exceptions, list):
        raise ValueError("audit.exceptions must be a list of advisory IDs")

    if not isinstance(config["audit"]["path"], str):
        raise ValueError("audit.path must be a directory path")

    for section, key in (("report", "colors"), ("audit", "strict")):
        if not isinstance(config[section][key], bool):
            raise ValueError(f"{section}.{key} must be true or false")

    logger.debug(f"Loaded config from {config_path}")
    return config


class NpmAuditGate:
    """
    Runs npm audit against a directory and decides pass or fail.

    The report goes to the caller's stream; diagnostics go to logging.
    After run(), the classification and metrics stay available as
    last_result and metrics.
    """

    def __init__(
        self,
        stream: TextIO,
        exceptions: Iterable,
        path: str = ".",
        colors: bool = True,
        max_module_length: int = 16,
        max_title_length: int = 16,
        report_dir: Optional[str] = None,
        strict: bool = False,
    ):
        self.stream = stream
        self.exceptions = ExceptionSet(exceptions)
        self.path = Path(path)
        self.report_dir = Path(report_dir) if report_dir else None

        self.adapter = NpmAuditAdapter()
        self.classifier = AdvisoryClassifier(strict=strict)
        self.renderer = ReportRenderer(RenderConfig(
            max_module_length=max_module_length,
            max_title_length=max_title_length,
            colors_enabled=colors,
        ))
        self.reporter = AuditReporter()

        self.last_result: Optional[ClassificationResult] = None
        self.metrics: Optional[AuditMetrics] = None

    @classmethod
    def from_config(cls, config: Dict[str, Dict[str, Any]], stream: TextIO) -> "NpmAuditGate":
        audit = config["audit"]
        report = config["report"]
        return cls(
            stream=stream,
            exceptions=audit["exceptions"],
            path=audit["path"],
            colors=report["colors"],
            max_module_length=report["max_module_length"],
            max_title_length=report["max_title_length"],
            report_dir=report["markdown_dir"],
            strict=audit["strict"],
        )

    def run(self) -> bool:
        """
        Execute one audit.

        Returns:
            True if the build should pass

        Raises:
            CommandFailedError: If the lockfile cannot be generated
            AuditReportError: If npm audit output cannot be decoded
            MalformedAdvisory: If an advisory lacks a required field
        """
        started_at = datetime.utcnow()
        metrics = AuditMetrics(run_id=started_at.strftime("%Y%m%d-%H%M%S"), started_at=started_at)
        self.metrics = metrics

        runner = CommandRunner(
            self.path,
            log=self._log,
            on_result=lambda r: metrics.record_command(r.command, r.exit_code, r.duration)
        )

        logger.info(f"Auditing {self.path.resolve()} with {len(self.exceptions)} exception(s)")

        with ensure_package_lock(runner):
            # npm audit exits non-zero whenever it finds advisories
            audit = runner.run(self.adapter.command)
            raw_advisories = self.adapter.parse(audit.stdout)
            result = self.classifier.classify(raw_advisories, self.exceptions)
            self.renderer.write(result, self.stream)

        self.last_result = result
        metrics.record_result(result)
        metrics.completed_at = datetime.utcnow()

        if self.report_dir:
            report = self.reporter.generate_report(metrics, result)
            report_path = self.reporter.save_report(report, self.report_dir)
            logger.info(f"Report: {report_path}")

        logger.info(
            f"Audit {'passed' if result.passed else 'failed'}: "
            f"{metrics.advisories_total} advisories, {metrics.advisories_failing} failing"
        )
        return result.passed

    def _log(self, message: str):
        self.stream.write(message + "\n")


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Fail the build on unexcepted npm advisories against production dependencies"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--path",
        default=None,
        help="Project directory to audit (default: audit.path from config, or .)"
    )
    parser.add_argument(
        "--exception",
        action="append",
        default=[],
        metavar="ID",
        help="Advisory ID to except; may be repeated"
    )
    parser.add_argument(
        "--no-colors",
        action="store_true",
        help="Disable ANSI colors in the report"
    )
    parser.add_argument(
        "--report-dir",
        default=None,
        help="Directory to write a Markdown report into"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )

    try:
        config = load_config(args.config)
        if args.path:
            config["audit"]["path"] = args.path
        config["audit"]["exceptions"] = list(config["audit"]["exceptions"]) + args.exception
        if args.no_colors:
            config["report"]["colors"] = False
        if args.report_dir:
            config["report"]["markdown_dir"] = args.report_dir

        gate = NpmAuditGate.from_config(config, stream=sys.stdout)
        passed = gate.run()

    except (AuditGateError, OSError, ValueError) as e:
        logger.error(f"Audit gate failed: {e}")
        sys.exit(2)

    sys.exit(0 if passed else 1)


if __name__ == "__main__":
    main()
