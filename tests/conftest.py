"""Shared pytest fixtures for dispose-python tests."""

from pathlib import Path

import pytest

from dispose_python import HandleTable


@pytest.fixture()
def handle_table() -> HandleTable:
    """Fresh handle table so counts are not shared between tests."""
    return HandleTable()


@pytest.fixture()
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test inside an empty temporary working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
