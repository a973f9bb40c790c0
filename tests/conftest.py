"""
Pytest configuration for Planar Machines tests.

This file ensures the project root is in sys.path for all tests.
"""

import os
import sys

import pytest

# Add project root to sys.path for imports
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)


class FakeStream:
    """Replays fixed draws and counts how many were taken."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def next(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value

    def randrange(self, n: int) -> int:
        return int(self.next() * n)


@pytest.fixture
def fake_stream():
    return FakeStream
