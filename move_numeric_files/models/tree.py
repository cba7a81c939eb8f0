"""Directory tree data model."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class DirectoryEntry:
    """Immediate children of one directory, split into directories and files."""

    path: Path
    directories: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)

    def subdirectory_paths(self) -> list[Path]:
        """Full paths of the child directories, in reported order."""
        return [self.path / name for name in self.directories]
