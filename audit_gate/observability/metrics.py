"""
Metrics collection for audit gate runs.

This module provides AuditMetrics, a dataclass that tracks what happened
during one gate run:
- Counts of advisories by classification outcome
- Severity distribution across the report
- Exceptions that matched nothing or only dev dependencies
- Commands executed, with exit codes and durations

Design decisions:
- Single metrics object per run
- Populated from a ClassificationResult rather than recomputed
- Serializable to_dict() for JSON output and the Markdown reporter
"""
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from decisioning.classifier import ClassificationResult


@dataclass
class AuditMetrics:
    """
    Metrics for a single gate run.

    Tracks advisory counts, the verdict, and command timings.
    """
    run_id: str
    started_at: datetime
    completed_at: datetime = None

    # Core counts
    advisories_total: int = 0
    advisories_failing: int = 0
    advisories_excepted: int = 0
    advisories_dev_only: int = 0
    extraneous_exceptions: int = 0
    passed: bool = True

    # Key: severity label as reported, Value: count
    severity_counts: Dict[str, int] = field(default_factory=dict)

    # One entry per command: command, exit_code, duration
    commands: List[Dict[str, Any]] = field(default_factory=list)

    def record_command(self, command: str, exit_code: int, duration: float):
        """
        Record an executed command.

        Args:
            command: Command line as run
            exit_code: Process exit status
            duration: Wall-clock seconds, already rounded
        """
        self.commands.append({
            "command": command,
            "exit_code": exit_code,
            "duration": duration
        })

    def record_result(self, result: ClassificationResult):
        """Copy counts and the verdict out of a classification result."""
        advisories = result.advisories
        self.advisories_total = len(advisories)
        self.advisories_failing = len(result.failing_ids)
        self.advisories_excepted = sum(1 for adv in advisories if adv.is_excepted)
        self.advisories_dev_only = sum(1 for adv in advisories if not adv.is_production)
        self.extraneous_exceptions = (
            len(result.extraneous_exceptions) + len(result.extraneous_dev_exceptions)
        )
        self.severity_counts = dict(Counter(adv.severity for adv in advisories))
        self.passed = result.passed

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert metrics to dictionary for JSON serialization.

        Returns:
            Dictionary with timestamps as ISO strings
        """
        return {
            "run_id": self.run_id,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "advisories_total": self.advisories_total,
            "advisories_failing": self.advisories_failing,
            "advisories_excepted": self.advisories_excepted,
            "advisories_dev_only": self.advisories_dev_only,
            "extraneous_exceptions": self.extraneous_exceptions,
            "passed": self.passed,
            "severity_counts": dict(self.severity_counts),
            "commands": list(self.commands)
        }
