"""
Test Configuration
==================

Pytest fixtures and test configuration for the logo history viewer.
"""

import json

import pytest

from logo_replay.models.snapshot import Snapshot
from logo_replay.models.status import FetchSuccess

from tests.fakes import FakeHistoryClient


@pytest.fixture
def sample_entries():
    """Provide the raw {time, logo} entries of a two-snapshot history."""
    return [
        {"time": "t0", "logo": "AAA"},
        {"time": "t1", "logo": "BBB"},
    ]


@pytest.fixture
def sample_body(sample_entries):
    """Provide the history response body for sample_entries."""
    return json.dumps(sample_entries)


@pytest.fixture
def sample_history():
    """Provide the decoded two-snapshot history."""
    return (
        Snapshot(time="t0", image="AAA"),
        Snapshot(time="t1", image="BBB"),
    )


@pytest.fixture
def fake_client(sample_history):
    """Provide a client that always returns sample_history."""
    return FakeHistoryClient(FetchSuccess(history=sample_history))
