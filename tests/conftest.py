"""
Shared fixtures for ProctorExam client tests.
"""

import json
import random

import pytest

from proctorexam import ProctorExamClient

from helpers import API_KEY, API_SECRET, BASE_URL, FIXED_TIME, fixture_bytes


@pytest.fixture
def client():
    """Create test client with deterministic nonce and clock."""
    return ProctorExamClient(
        BASE_URL,
        API_KEY,
        API_SECRET,
        rng=random.Random(42),
        clock=lambda: FIXED_TIME
    )


@pytest.fixture
def load_fixture():
    """Return a loader for decoded fixture documents."""
    return lambda name: json.loads(fixture_bytes(name))
