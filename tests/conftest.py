"""
Configuration for pytest: import path setup, settings isolation and
instrumented collection/element types.
"""

import sys
from pathlib import Path
import pytest

# Add the project root to Python path so `lazyfuse` imports from a checkout.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from lazyfuse import config


_ENV_VARS = ("LAZYFUSE_LENGTH_POLICY", "LAZYFUSE_REUSE_TEMPORARIES")


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Every test starts from the built-in defaults, whatever the environment says."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config.reset()
    yield
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config.reset()


class CountingList(list):
    """A list that counts how often each index is read."""

    def __init__(self, *args):
        super().__init__(*args)
        self.reads = {}

    def __getitem__(self, index):
        self.reads[index] = self.reads.get(index, 0) + 1
        return super().__getitem__(index)

    @property
    def total_reads(self):
        return sum(self.reads.values())


class Tracked:
    """An element type that counts how many instances have been constructed."""
    constructed = 0

    def __init__(self, value):
        Tracked.constructed += 1
        self.value = value

    def __add__(self, other):
        return Tracked(self.value + other.value)

    def __iadd__(self, other):
        self.value += other.value
        return self


@pytest.fixture
def counting_list():
    """Factory for read-counting lists."""
    return CountingList


@pytest.fixture
def tracked():
    """The Tracked element class, with its construction counter reset."""
    Tracked.constructed = 0
    return Tracked
