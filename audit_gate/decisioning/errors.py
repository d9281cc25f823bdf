"""
Error types raised while classifying an audit report.

Every error the gate raises derives from AuditGateError so callers can
catch the whole family in one place. None of them are retryable.
"""


class AuditGateError(Exception):
    """Base class for all audit gate errors."""


class MalformedAdvisory(AuditGateError, ValueError):
    """A raw advisory record is missing a required field."""

    def __init__(self, field_name: str, advisory_id=None):
        self.field_name = field_name
        self.advisory_id = advisory_id
        where = f"advisory {advisory_id}" if advisory_id is not None else "advisory record"
        super().__init__(f"Malformed {where}: missing required field '{field_name}'")


class DuplicateAdvisoryId(AuditGateError, ValueError):
    """The same advisory ID appears more than once (strict mode only)."""

    def __init__(self, advisory_id: str):
        self.advisory_id = advisory_id
        super().__init__(f"Duplicate advisory ID in report: {advisory_id}")
