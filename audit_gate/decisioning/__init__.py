"""
Advisory decisioning layer.

Classifies audit advisories against an exception policy and orders them
for display. Pure functions over already-decoded data; no I/O.
"""
from .errors import AuditGateError, MalformedAdvisory, DuplicateAdvisoryId
from .advisory import Advisory, Finding, RawAdvisory
from .exception_set import ExceptionSet
from .classifier import AdvisoryClassifier, ClassificationResult
from .sorter import sort_advisories, sort_key


__all__ = [
    'AuditGateError',
    'MalformedAdvisory',
    'DuplicateAdvisoryId',
    'Advisory',
    'Finding',
    'RawAdvisory',
    'ExceptionSet',
    'AdvisoryClassifier',
    'ClassificationResult',
    'sort_advisories',
    'sort_key',
]
