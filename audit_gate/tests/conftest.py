"""
Shared pytest fixtures for audit gate tests.

This module provides reusable advisory records and npm audit documents
so individual test modules stay focused on behavior.
"""
import json
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from decisioning import RawAdvisory


def make_record(advisory_id, dev_flags=(False,), **overrides):
    """Build a decoded advisory mapping with one finding per dev flag."""
    record = {
        'id': advisory_id,
        'module': f"module-{advisory_id}",
        'title': f"Advisory {advisory_id}",
        'severity': 'high',
        'url': f"https://npmjs.com/advisories/{advisory_id}",
        'findings': [{'is_dev_dependency': dev} for dev in dev_flags],
    }
    record.update(overrides)
    return record


@pytest.fixture
def record_factory():
    """Expose make_record to tests."""
    return make_record


@pytest.fixture
def mixed_records():
    """
    Four advisories covering every classification outcome.

    - 100: production, reached through a dev and a prod path
    - 20: development only
    - 3: production
    - 7: production, usually excepted by tests
    """
    return [
        make_record('100', dev_flags=(True, False)),
        make_record('20', dev_flags=(True,)),
        make_record('3'),
        make_record('7'),
    ]


@pytest.fixture
def sample_raw_advisory():
    """A single production RawAdvisory."""
    return RawAdvisory.from_dict(make_record('118', title='Regular Expression Denial of Service'))


def npm_advisory(advisory_id, dev=False, **overrides):
    """One advisory in `npm audit --json` shape."""
    advisory = {
        'id': advisory_id,
        'module_name': f"module-{advisory_id}",
        'title': f"Advisory {advisory_id}",
        'severity': 'moderate',
        'url': f"https://npmjs.com/advisories/{advisory_id}",
        'findings': [{'version': '1.0.0', 'dev': dev, 'paths': ['a>b']}],
    }
    advisory.update(overrides)
    return advisory


@pytest.fixture
def npm_audit_output():
    """
    Raw stdout of `npm audit --json` with one prod and one dev advisory.

    Returns:
        JSON string
    """
    document = {
        'actions': [],
        'advisories': {
            '118': npm_advisory(118, title='Regular Expression Denial of Service', severity='high'),
            '577': npm_advisory(577, dev=True, module_name='lodash', severity='low'),
        },
        'metadata': {'vulnerabilities': {'high': 1, 'low': 1}},
    }
    return json.dumps(document)


@pytest.fixture
def empty_audit_output():
    """npm audit output for a project without advisories."""
    return json.dumps({'actions': [], 'advisories': {}, 'metadata': {}})
