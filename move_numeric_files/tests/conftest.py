"""Shared fixtures."""

from pathlib import Path

import pytest

from move_numeric_files.tests.fixtures import build_tree


@pytest.fixture
def make_tree(tmp_path):
    """Build a directory tree under tmp_path from a nested dict and return its root."""

    def _make(layout: dict):
        return build_tree(tmp_path, layout)

    return _make


@pytest.fixture
def deny_rename(monkeypatch):
    """Make every rename of a file called 1_b.txt fail with a permission error."""
    original_rename = Path.rename

    def rename(self, target):
        if self.name == "1_b.txt":
            raise PermissionError(13, "Permission denied")
        return original_rename(self, target)

    monkeypatch.setattr(Path, "rename", rename)
