"""Helpers for building and inspecting directory trees in tests."""

from pathlib import Path


def build_tree(base: Path, layout: dict) -> Path:
    """Create files and directories under base from a nested dict.

    Dict values become subdirectories; string values become file contents.
    """
    for name, content in layout.items():
        path = base / name
        if isinstance(content, dict):
            path.mkdir()
            build_tree(path, content)
        else:
            path.write_text(content)
    return base


def listing(directory: Path) -> list[str]:
    """Sorted names directly inside a directory."""
    return sorted(child.name for child in directory.iterdir())
