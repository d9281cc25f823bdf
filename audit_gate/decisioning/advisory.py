"""
Value types for advisories flowing through the gate.

RawAdvisory is the already-decoded input record; Advisory is the
classified, immutable form consumed by the sorter and the renderer.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from .errors import MalformedAdvisory


REQUIRED_FIELDS = ('id', 'module', 'title', 'severity', 'url', 'findings')


@dataclass(frozen=True)
class Finding:
    """One dependency path through which an advisory is reached."""
    is_dev_dependency: bool


@dataclass(frozen=True)
class RawAdvisory:
    """Advisory record as reported by the audit tool, before classification."""
    id: str
    module: str
    title: str
    severity: str
    url: str
    findings: Tuple[Finding, ...]

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> 'RawAdvisory':
        """
        Build a RawAdvisory from a decoded mapping.

        Args:
            record: Mapping with id, module, title, severity, url and findings,
                    where each finding carries is_dev_dependency

        Returns:
            RawAdvisory with the id normalized to a string

        Raises:
            MalformedAdvisory: If a required key is missing or null, or the
                record or one of its findings is not a mapping
        """
        if not isinstance(record, Mapping):
            raise MalformedAdvisory('id')

        advisory_id = record.get('id')

        for field_name in REQUIRED_FIELDS:
            if record.get(field_name) is None:
                raise MalformedAdvisory(field_name, advisory_id)

        if not isinstance(record['findings'], (list, tuple)):
            raise MalformedAdvisory('findings', advisory_id)

        findings = []
        for finding in record['findings']:
            if isinstance(finding, Finding):
                findings.append(finding)
                continue
            if not isinstance(finding, Mapping) or finding.get('is_dev_dependency') is None:
                raise MalformedAdvisory('findings.is_dev_dependency', advisory_id)
            findings.append(Finding(is_dev_dependency=bool(finding['is_dev_dependency'])))

        return cls(
            id=str(advisory_id),
            module=record['module'],
            title=record['title'],
            severity=record['severity'],
            url=record['url'],
            findings=tuple(findings)
        )

    @property
    def is_production(self) -> bool:
        """True if at least one finding is reached through a non-dev dependency."""
        return any(not finding.is_dev_dependency for finding in self.findings)


@dataclass(frozen=True)
class Advisory:
    """Classified advisory. Plain value object, never mutated."""
    id: str
    module: str
    title: str
    severity: str
    url: str
    is_production: bool
    is_excepted: bool

    @property
    def is_failing(self) -> bool:
        """Production advisories without an exception fail the build."""
        return self.is_production and not self.is_excepted
