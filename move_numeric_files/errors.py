"""Exceptions raised while walking and renumbering a directory tree."""

from pathlib import Path


class MoveNumericFilesError(Exception):
    """Base class for all move-numeric-files errors."""


class DirectoryReadError(MoveNumericFilesError, OSError):
    """A directory could not be listed.

    Fatal to the walk: nothing below the failing directory (or after it) is visited.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Unable to read directory {self.path}: {reason}")


class RenameConflictError(MoveNumericFilesError, OSError):
    """A single rename could not be applied.

    Scoped to one file: the rest of the plan and the rest of the walk carry on.
    """

    def __init__(self, source: Path, target: Path, reason: str) -> None:
        self.source = Path(source)
        self.target = Path(target)
        self.reason = reason
        super().__init__(f"Cannot rename {self.source.name} to {self.target.name}: {reason}")
