"""
Advisory classifier.

Turns raw advisory records and an exception set into a classification
result: the sorted advisories, the IDs that fail the build, and the
exceptions that no longer do anything useful.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Union
import logging

from .advisory import Advisory, RawAdvisory
from .errors import DuplicateAdvisoryId
from .exception_set import ExceptionSet
from .sorter import sort_advisories


logger = logging.getLogger(__name__)


@dataclass
class ClassificationResult:
    """Outcome of classifying one audit report."""
    advisories: List[Advisory] = field(default_factory=list)
    failing_ids: List[str] = field(default_factory=list)
    extraneous_exceptions: List[str] = field(default_factory=list)
    extraneous_dev_exceptions: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """The build passes iff no un-excepted production advisory exists."""
        return not self.failing_ids


class AdvisoryClassifier:
    """
    Classifies advisories against an exception policy.

    Duplicate advisory IDs are not an error by default: the lookup used to
    match exceptions is built from the sorted advisories and the last entry
    for an ID wins. With strict=True duplicates raise DuplicateAdvisoryId.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def classify(
        self,
        raw_advisories: Iterable[Union[RawAdvisory, Mapping[str, Any]]],
        exceptions: Union[ExceptionSet, Iterable]
    ) -> ClassificationResult:
        """
        Classify raw advisories against the exception set.

        Args:
            raw_advisories: RawAdvisory instances or decoded mappings
            exceptions: ExceptionSet, or any iterable of exception tokens

        Returns:
            ClassificationResult with advisories in display order

        Raises:
            MalformedAdvisory: If any record lacks a required field
            DuplicateAdvisoryId: In strict mode, if an ID repeats
        """
        if not isinstance(exceptions, ExceptionSet):
            exceptions = ExceptionSet(exceptions)

        # Build everything before returning so a malformed record leaves no partial result
        records = [
            raw if isinstance(raw, RawAdvisory) else RawAdvisory.from_dict(raw)
            for raw in raw_advisories
        ]

        if self.strict:
            self._check_unique_ids(records)

        advisories = sort_advisories(
            Advisory(
                id=raw.id,
                module=raw.module,
                title=raw.title,
                severity=raw.severity,
                url=raw.url,
                is_production=raw.is_production,
                is_excepted=exceptions.contains(raw.id)
            )
            for raw in records
        )

        advisories_by_id: Dict[str, Advisory] = {adv.id: adv for adv in advisories}

        failing_ids = [adv.id for adv in advisories if adv.is_failing]

        extraneous_exceptions = [
            exception_id for exception_id in exceptions
            if exception_id not in advisories_by_id
        ]

        extraneous_dev_exceptions = [
            exception_id for exception_id in exceptions
            if exception_id in advisories_by_id
            and not advisories_by_id[exception_id].is_production
        ]

        logger.debug(
            f"Classified {len(advisories)} advisories: {len(failing_ids)} failing, "
            f"{len(extraneous_exceptions)} extraneous exceptions, "
            f"{len(extraneous_dev_exceptions)} dev-only exceptions"
        )

        return ClassificationResult(
            advisories=advisories,
            failing_ids=failing_ids,
            extraneous_exceptions=extraneous_exceptions,
            extraneous_dev_exceptions=extraneous_dev_exceptions
        )

    def _check_unique_ids(self, records: List[RawAdvisory]):
        seen = set()
        for raw in records:
            if raw.id in seen:
                raise DuplicateAdvisoryId(raw.id)
            seen.add(raw.id)
