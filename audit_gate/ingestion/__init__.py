"""
Ingestion layer for the audit gate.

Runs the package manager and decodes its report:
- CommandRunner: timed subprocess execution
- ensure_package_lock: temporary package-lock.json management
- NpmAuditAdapter: `npm audit --json` decoding
"""
from .command_runner import (
    CommandFailedError,
    CommandResult,
    CommandRunner,
    ensure_package_lock,
)
from .npm_audit_adapter import AUDIT_COMMAND, AuditReportError, NpmAuditAdapter

__all__ = [
    "AUDIT_COMMAND",
    "AuditReportError",
    "CommandFailedError",
    "CommandResult",
    "CommandRunner",
    "NpmAuditAdapter",
    "ensure_package_lock",
]
