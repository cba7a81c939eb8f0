"""Recursive directory walker with a visitor interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from pathlib import Path

from move_numeric_files.errors import DirectoryReadError
from move_numeric_files.models.tree import DirectoryEntry


VisitCallback = Callable[[Path, list[str], list[str]], None]


class DirectoryVisitor(ABC):
    """Receives the immediate children of every directory in a walk."""

    @abstractmethod
    def visit(self, path: Path, directories: list[str], files: list[str]) -> None:
        """Handle one directory.

        Args:
            path: Directory being reported.
            directories: Names of its child directories.
            files: Names of its child files (anything that is not a directory).
        """
        pass


class CallbackVisitor(DirectoryVisitor):
    """Adapts a plain function to the DirectoryVisitor interface."""

    def __init__(self, callback: VisitCallback) -> None:
        self.callback = callback

    def visit(self, path: Path, directories: list[str], files: list[str]) -> None:
        self.callback(path, directories, files)


class FileSystemWalker:
    """Pre-order walk of a directory tree.

    Each directory is read once and reported before any of its subdirectories
    are entered. Names inside each partition are sorted so that "first
    encountered" does not depend on the platform's directory order.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def _read_directory(self, path: Path) -> DirectoryEntry:
        """List one directory and split its children into directories and files.

        Raises:
            DirectoryReadError: If the directory cannot be listed.
        """
        directories: list[str] = []
        files: list[str] = []
        try:
            for child in path.iterdir():
                if child.is_dir():
                    directories.append(child.name)
                else:
                    files.append(child.name)
        except OSError as e:
            raise DirectoryReadError(path, e.strerror or str(e)) from e

        return DirectoryEntry(path=path, directories=sorted(directories), files=sorted(files))

    def iter_entries(self) -> Iterator[DirectoryEntry]:
        """Yield a DirectoryEntry for every directory under the root, root first.

        Uses an explicit stack rather than recursion, so tree depth is not
        bounded by the interpreter's recursion limit. Children are pushed only
        after the consumer has finished with the parent entry.
        """
        pending = [self.root]
        while pending:
            entry = self._read_directory(pending.pop())
            yield entry
            pending.extend(reversed(entry.subdirectory_paths()))

    def walk(self, visitor: DirectoryVisitor | VisitCallback) -> None:
        """Walk the tree, reporting every directory to the visitor.

        The directories list is passed by reference; removing names from it
        during a visit prunes those subtrees, as with ``os.walk``.

        Args:
            visitor: A DirectoryVisitor, or any callable taking (path, directories, files).

        Raises:
            DirectoryReadError: If any directory cannot be read. Visits already
                made are not undone.
        """
        if not isinstance(visitor, DirectoryVisitor):
            visitor = CallbackVisitor(visitor)

        for entry in self.iter_entries():
            visitor.visit(entry.path, entry.directories, entry.files)
