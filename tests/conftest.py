"""Shared fixtures."""

import pytest

from helpers import write_wheel


@pytest.fixture
def wheel_factory(tmp_path):
    """Create wheel archives under a scratch directory."""
    store = tmp_path / "wheels"
    store.mkdir()

    def _make(filename, name, version, files=None, extra_entries=None):
        return write_wheel(store / filename, name, version, files, extra_entries)

    return _make
