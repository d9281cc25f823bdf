"""
Reporting layer for the audit gate.

This module renders classification results for terminals and records
run metrics.

Main exports:
- ReportRenderer: Fixed-width, optionally colored advisory table and summary
- RenderConfig: Immutable options and lookup tables for the renderer
- AuditMetrics: Tracks counts and command timings for a run
- AuditReporter: Generates Markdown reports
"""
from .render_config import RenderConfig
from .renderer import ReportRenderer, NO_ADVISORIES_MESSAGE
from .metrics import AuditMetrics
from .reporter import AuditReporter

__all__ = [
    "RenderConfig",
    "ReportRenderer",
    "NO_ADVISORIES_MESSAGE",
    "AuditMetrics",
    "AuditReporter",
]
