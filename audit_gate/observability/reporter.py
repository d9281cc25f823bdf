"""
Generate audit run reports in Markdown format.

This module provides AuditReporter, which turns AuditMetrics and a
ClassificationResult into a Markdown document suitable for CI artifacts.

Report sections:
- Header with run metadata (ID, timestamp, duration, verdict)
- Summary table with advisory counts
- Severity distribution
- Advisory table in display order
- Exceptions that can be removed
- Commands executed

Design decisions:
- Uses tabulate library for GitHub-flavored tables
- Full titles and URLs, unlike the terminal table
- Reports saved with timestamp for historical tracking
"""
from datetime import datetime
from pathlib import Path

from tabulate import tabulate

from decisioning.classifier import ClassificationResult

from .metrics import AuditMetrics


class AuditReporter:
    """Generates Markdown reports from gate run metrics."""

    def generate_report(self, metrics: AuditMetrics, result: ClassificationResult) -> str:
        """
        Generate full run report in Markdown format.

        Args:
            metrics: AuditMetrics from the completed run
            result: Classification the verdict was based on

        Returns:
            Markdown-formatted report as string
        """
        lines = []

        # Header
        lines.append("# Dependency Audit Report")
        lines.append(f"**Run ID:** {metrics.run_id}")
        lines.append(f"**Started:** {metrics.started_at.isoformat()}")
        if metrics.completed_at:
            duration = (metrics.completed_at - metrics.started_at).total_seconds()
            lines.append(f"**Duration:** {duration:.1f} seconds")
        lines.append(f"**Verdict:** {'PASSED' if metrics.passed else 'FAILED'}")
        lines.append("")

        # Summary table
        lines.append("## Summary")
        summary_data = [
            ["Total Advisories", metrics.advisories_total],
            ["Failing", metrics.advisories_failing],
            ["Excepted", metrics.advisories_excepted],
            ["Dev Only", metrics.advisories_dev_only],
            ["Removable Exceptions", metrics.extraneous_exceptions],
        ]
        lines.append(tabulate(summary_data, headers=["Metric", "Value"], tablefmt="github"))
        lines.append("")

        # Severity distribution
        if metrics.severity_counts:
            lines.append("## Severity Distribution")
            severity_data = [[k, v] for k, v in sorted(metrics.severity_counts.items())]
            lines.append(tabulate(severity_data, headers=["Severity", "Count"], tablefmt="github"))
            lines.append("")

        # Advisories
        if result.advisories:
            lines.append("## Advisories")
            advisory_data = [
                [
                    adv.id,
                    adv.module,
                    adv.title,
                    adv.severity,
                    adv.url,
                    "y" if adv.is_production else "n",
                    "y" if adv.is_excepted else "n",
                ]
                for adv in result.advisories
            ]
            lines.append(tabulate(
                advisory_data,
                headers=["ID", "Module", "Title", "Severity", "URL", "Prod", "Excepted"],
                tablefmt="github",
                disable_numparse=True
            ))
            lines.append("")

        # Removable exceptions
        removable = [[exc, "no matching advisory"] for exc in result.extraneous_exceptions]
        removable += [[exc, "development dependencies only"] for exc in result.extraneous_dev_exceptions]
        if removable:
            lines.append("## Removable Exceptions")
            lines.append(tabulate(
                removable, headers=["Exception", "Reason"], tablefmt="github", disable_numparse=True
            ))
            lines.append("")

        # Commands
        if metrics.commands:
            lines.append("## Commands")
            command_data = [
                [f"`{cmd['command']}`", cmd["exit_code"], f"{cmd['duration']}s"]
                for cmd in metrics.commands
            ]
            lines.append(tabulate(command_data, headers=["Command", "Exit Code", "Duration"], tablefmt="github"))
            lines.append("")

        return "\n".join(lines)

    def save_report(self, report: str, output_dir: Path) -> Path:
        """
        Save report to file with timestamp.

        Args:
            report: Markdown report content
            output_dir: Directory to save report in

        Returns:
            Path to saved report file
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.utcnow().strftime("%Y%m%d-%H%M%S")
        filepath = output_dir / f"audit-report-{timestamp}.md"
        filepath.write_text(report)
        return filepath
