"""
Adapter for `npm audit --json` output.

Decodes the legacy npm audit report into RawAdvisory records.
Expected structure:

    {
        "advisories": {
            "118": {
                "id": 118,
                "module_name": "minimatch",
                "title": "Regular Expression Denial of Service",
                "severity": "high",
                "url": "https://npmjs.com/advisories/118",
                "findings": [{"version": "0.3.0", "dev": false, "paths": [...]}]
            }
        }
    }
"""
import json
import logging
from typing import Any, Dict, List

from decisioning.advisory import RawAdvisory
from decisioning.errors import AuditGateError, MalformedAdvisory

logger = logging.getLogger(__name__)

AUDIT_COMMAND = "npm audit --json"

# npm field -> RawAdvisory field
FIELD_MAP = {
    "id": "id",
    "module_name": "module",
    "title": "title",
    "severity": "severity",
    "url": "url",
    "findings": "findings",
}


class AuditReportError(AuditGateError, ValueError):
    """Raised when audit output is not a decodable report."""


class NpmAuditAdapter:
    """Turns npm audit JSON into raw advisory records."""

    def __init__(self, command: str = AUDIT_COMMAND):
        self.command = command

    def parse(self, raw: str) -> List[RawAdvisory]:
        """
        Decode an npm audit JSON document.

        Args:
            raw: stdout of `npm audit --json`

        Returns:
            RawAdvisory records in report order

        Raises:
            AuditReportError: If the output is not JSON or has no advisories mapping
            MalformedAdvisory: If an advisory lacks a required field
        """
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise AuditReportError(f"`{self.command}` did not produce valid JSON: {e}") from e

        if not isinstance(document, dict) or not isinstance(document.get("advisories"), dict):
            raise AuditReportError(f"`{self.command}` output has no 'advisories' mapping")

        advisories = [self.normalize(record) for record in document["advisories"].values()]
        logger.info(f"Decoded {len(advisories)} advisories from `{self.command}`")
        return advisories

    def normalize(self, raw_record: Dict[str, Any]) -> RawAdvisory:
        """
        Transform one npm advisory into a RawAdvisory.

        Raises:
            MalformedAdvisory: If a required field is missing
        """
        if not isinstance(raw_record, dict):
            raise MalformedAdvisory("id")

        advisory_id = raw_record.get("id")
        record = {}
        for npm_field, field_name in FIELD_MAP.items():
            if npm_field not in raw_record:
                raise MalformedAdvisory(npm_field, advisory_id)
            record[field_name] = raw_record[npm_field]

        if record["findings"] is not None:
            findings = []
            for finding in record["findings"]:
                if not isinstance(finding, dict) or "dev" not in finding:
                    raise MalformedAdvisory("findings.dev", advisory_id)
                findings.append({"is_dev_dependency": finding["dev"]})
            record["findings"] = findings

        return RawAdvisory.from_dict(record)
