"""Shared fixtures."""

import copy

import orjson
import pytest

from tests.helpers import JFS_DOCUMENT, OFS_DOCUMENT


@pytest.fixture
def ofs_data():
    """Document as written by OpenFunscripter."""
    return copy.deepcopy(OFS_DOCUMENT)


@pytest.fixture
def jfs_data():
    """Document as written by JoyFunScripter, using every top-level key."""
    return copy.deepcopy(JFS_DOCUMENT)


@pytest.fixture
def write_funscript(tmp_path):
    """Write a dict as JSON to ``tmp_path / name`` and return the path."""

    def _write(data, name="script.funscript"):
        path = tmp_path / name
        path.write_bytes(orjson.dumps(data))
        return path

    return _write
