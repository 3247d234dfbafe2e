"""
Integration test fixtures.

Integration tests:
- Test component boundaries
- Use real I/O but to temp locations
- Should be deterministic
"""

import pytest
import tempfile
import shutil
from pathlib import Path

from repositories import JsonStateRepository


@pytest.fixture
def temp_dir():
    """Temporary directory for test data."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def state_dir(temp_dir):
    """Temporary state directory."""
    p = temp_dir / "state"
    p.mkdir()
    return p


@pytest.fixture
def json_repo(state_dir):
    return JsonStateRepository(base_path=state_dir)
