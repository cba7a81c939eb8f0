"""Renumbering engine: plan and apply moves that remove duplicate numeric prefixes."""

import re
from collections.abc import Callable, Iterable
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from move_numeric_files.config import RenumberConfig
from move_numeric_files.errors import RenameConflictError
from move_numeric_files.models.renumber import (
    DuplicateGroup,
    NumericFileName,
    RenameFailure,
    RenameOp,
    RenamePlan,
    RenumberResult,
)
from move_numeric_files.processors.walker import DirectoryVisitor, FileSystemWalker


# ASCII digits only: "²_a.txt" and other Unicode digits are not numbered files
NUMERIC_PREFIX_PATTERN = re.compile(r"(\d+)(.*)", re.ASCII | re.DOTALL)


def parse_numeric_name(name: str) -> NumericFileName | None:
    """Split a filename into its leading number and remainder.

    Returns:
        The parsed name, or None if the name does not start with a digit.
    """
    match = NUMERIC_PREFIX_PATTERN.fullmatch(name)
    if match is None:
        return None

    digits, remainder = match.groups()
    return NumericFileName(
        prefix_digits=int(digits),
        width=len(digits),
        remainder=remainder,
        original_name=name,
    )


def group_by_number(names: Iterable[str]) -> list[DuplicateGroup]:
    """Group numbered filenames by numeric value.

    Unnumbered names are dropped. "1_a" and "01_b" land in the same group.

    Args:
        names: Filenames in directory read order.

    Returns:
        One group per distinct number, in ascending numeric order. Members keep
        their read order.
    """
    groups: dict[int, DuplicateGroup] = {}
    for name in names:
        parsed = parse_numeric_name(name)
        if parsed is None:
            continue
        group = groups.setdefault(parsed.prefix_digits, DuplicateGroup(number=parsed.prefix_digits))
        group.members.append(parsed)

    return [groups[number] for number in sorted(groups)]


def find_duplicate_groups(names: Iterable[str]) -> list[DuplicateGroup]:
    """Return only the groups with more than one member."""
    return [group for group in group_by_number(names) if group.is_duplicate]


def format_numbered_name(parsed: NumericFileName, number: int) -> str:
    """Swap the leading number of a filename, keeping its zero padding width.

    The width only grows when the new number needs more digits.
    """
    return f"{number:0{parsed.width}d}{parsed.remainder}"


class FreeNumberAllocator:
    """Hands out the smallest unused number at or above a floor.

    Occupied numbers only ever get added, so the search cursor never has to
    move back down. One allocator is shared by every duplicate group in a
    directory.
    """

    def __init__(self, start: int, occupied: Iterable[int] = ()) -> None:
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")
        self.start = start
        self.occupied: set[int] = set(occupied)
        self._cursor = start

    def allocate(self, accept: Callable[[int], bool] | None = None) -> int:
        """Reserve and return the next free number.

        Args:
            accept: Optional extra check. Numbers it rejects are passed over for
                this call only and stay available to later calls.
        """
        while self._cursor in self.occupied:
            self._cursor += 1
        number = self._cursor
        while number in self.occupied or (accept is not None and not accept(number)):
            number += 1
        self.occupied.add(number)
        return number


def plan_directory(
    directory: Path,
    files: Iterable[str],
    start: int = 1,
    keep_file: str | None = None,
    directories: Iterable[str] = (),
) -> RenamePlan:
    """Work out the renames that remove duplicate numbers from one directory.

    Nothing on disk is touched.

    Args:
        directory: Directory holding the files.
        files: File names in read order.
        start: Lowest number a displaced file may be moved to.
        keep_file: Name to keep at its number when it is part of a duplicate group.
        directories: Subdirectory names in the same directory. A displaced file is
            never sent to a name one of them already holds.

    Returns:
        A plan with one operation per displaced file. Empty when there are no duplicates.
    """
    directory = Path(directory)
    files = list(files)
    taken_names = set(files) | set(directories)
    groups = group_by_number(files)
    plan = RenamePlan(directory=directory)

    allocator = FreeNumberAllocator(start, occupied=(group.number for group in groups))

    for group in groups:
        if not group.is_duplicate:
            continue

        keeper = group.select_keeper(keep_file)
        for member in group.members:
            if member is keeper:
                continue
            new_number = allocator.allocate(
                accept=lambda number, member=member: format_numbered_name(member, number) not in taken_names
            )
            plan.operations.append(
                RenameOp(
                    source=directory / member.original_name,
                    target=directory / format_numbered_name(member, new_number),
                    old_number=group.number,
                    new_number=new_number,
                )
            )

    return plan


def rename_file(op: RenameOp) -> None:
    """Apply a single rename.

    Raises:
        RenameConflictError: If the source is gone, the target already exists,
            or the filesystem refuses the rename.
    """
    if not op.source.exists() and not op.source.is_symlink():
        raise RenameConflictError(op.source, op.target, "source file not found")
    # Path.rename silently replaces existing files on POSIX
    if op.target.exists() or op.target.is_symlink():
        raise RenameConflictError(op.source, op.target, "target already exists")

    try:
        op.source.rename(op.target)
    except OSError as e:
        raise RenameConflictError(op.source, op.target, e.strerror or str(e)) from e


def apply_plan(plan: RenamePlan) -> tuple[list[RenameOp], list[RenameFailure]]:
    """Apply every operation of a plan, carrying on past failures.

    Returns:
        The operations that were applied and the ones that failed.
    """
    applied: list[RenameOp] = []
    failures: list[RenameFailure] = []

    for op in plan.operations:
        try:
            rename_file(op)
        except RenameConflictError as e:
            failures.append(RenameFailure(operation=op, error=str(e)))
        else:
            applied.append(op)

    return applied, failures


class RenumberProcessor(DirectoryVisitor):
    """Visitor that renumbers each directory as soon as it is reported.

    Renames happen before the walker descends into the directory's children,
    and only touch files, so the walk never reads a directory that is being
    changed.
    """

    def __init__(
        self,
        start: int = 1,
        keep_file: str | None = None,
        dry_run: bool = False,
        verbose: bool = False,
        console: Console | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            start: Lowest number a displaced file may be moved to.
            keep_file: Preferred file to keep in each duplicate group.
            dry_run: If True, only collect plans.
            verbose: Print every visited directory.
            console: Console for progress and failure messages.
        """
        self.start = start
        self.keep_file = keep_file
        self.dry_run = dry_run
        self.verbose = verbose
        self.console = console if console is not None else Console()
        self.result = RenumberResult()

    @classmethod
    def from_config(cls, config: RenumberConfig, **kwargs) -> "RenumberProcessor":
        return cls(start=config.start, keep_file=config.keep_file, dry_run=config.dry_run, **kwargs)

    def visit(self, path: Path, directories: list[str], files: list[str]) -> None:
        self.result.directories_visited += 1
        if self.verbose:
            self.console.print(f"[dim]Visiting {escape(str(path))}[/dim]")

        plan = plan_directory(path, files, start=self.start, keep_file=self.keep_file, directories=directories)
        if plan.is_empty:
            return

        self.result.plans.append(plan)
        if self.dry_run:
            return

        applied, failures = apply_plan(plan)
        self.result.applied.extend(applied)
        self.result.failures.extend(failures)

        for failure in failures:
            self.console.print(f"[red]Rename failed in {escape(str(path))}:[/red] {escape(failure.error)}")


def renumber_tree(
    config: RenumberConfig,
    console: Console | None = None,
    verbose: bool = False,
) -> RenumberResult:
    """Walk the configured directory and renumber every directory in it.

    Raises:
        DirectoryReadError: If a directory cannot be read. Renames already
            applied in earlier directories stay applied.
    """
    processor = RenumberProcessor.from_config(config, verbose=verbose, console=console)
    FileSystemWalker(config.directory).walk(processor)
    return processor.result
