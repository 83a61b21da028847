"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_kpdve.state import HarmonyState, harmony_state_default


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def default_state() -> HarmonyState:
    """F major triad state, KPDVE [0, 0, 0, 4, 2]."""
    return harmony_state_default()
