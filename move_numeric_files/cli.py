"""CLI entrypoints."""

from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from move_numeric_files.config import ENVVAR_PREFIX, RenumberConfig
from move_numeric_files.errors import DirectoryReadError
from move_numeric_files.models.renumber import RenameOp, RenumberResult
from move_numeric_files.processors.renumber import find_duplicate_groups, renumber_tree
from move_numeric_files.processors.walker import FileSystemWalker


console = Console()


def _relative_directory(directory: Path, root: Path) -> str:
    try:
        relative = directory.relative_to(root)
    except ValueError:
        return escape(str(directory))
    return escape(str(relative)) if relative.parts else "."


def _run_walk(config: RenumberConfig, verbose: bool) -> RenumberResult:
    """Run one renumbering walk, turning a directory read failure into exit status 1."""
    try:
        return renumber_tree(config, console=console, verbose=verbose)
    except DirectoryReadError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise SystemExit(1) from e


def _print_operations(operations: list[RenameOp], root: Path) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Directory", style="dim")
    table.add_column("Original", style="cyan")
    table.add_column("New Name", style="green")

    for op in operations:
        table.add_row(_relative_directory(op.source.parent, root), escape(op.source.name), escape(op.target.name))

    console.print(table)


@click.group(context_settings=dict(show_default=True))
def cli() -> None:
    """move-numeric-files - Move numbered files up so that no two share a number."""
    pass


@cli.command("renumber")
@click.option(
    "--start",
    type=click.IntRange(min=0),
    default=1,
    envvar=f"{ENVVAR_PREFIX}_START",
    show_envvar=True,
    help="The first number to start checking for free numbers at.",
)
@click.option(
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    envvar=f"{ENVVAR_PREFIX}_DIRECTORY",
    show_envvar=True,
    help="Directory to search for files in. Defaults to the current working directory.",
)
@click.option(
    "--keep-file",
    type=str,
    default=None,
    envvar=f"{ENVVAR_PREFIX}_KEEP_FILE",
    show_envvar=True,
    help="When duplicate numbers are found, the name of the file to keep. "
    "If not specified, the first file name encountered is kept.",
)
@click.option("--dry-run", is_flag=True, default=False, help="Show the renames without applying them.")
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    default=False,
    help="Apply renames without asking for confirmation.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Print every directory visited.")
def renumber(
    start: int,
    directory: Path | None,
    keep_file: str | None,
    dry_run: bool,
    yes: bool,
    verbose: bool,
) -> None:
    """Move files prefixed with a numeric identifier "up" so that there are no duplicate numbers.

    Every directory under DIRECTORY is handled on its own. In each group of
    files sharing a number one file stays put and the others move to the
    smallest free number at or above --start, keeping their zero padding.

    Examples:

        move-numeric-files renumber --directory ./slides --dry-run

        move-numeric-files renumber --start 100 --keep-file 3_intro.md -y
    """
    settings: dict = dict(start=start, keep_file=keep_file, dry_run=dry_run)
    if directory is not None:
        settings["directory"] = directory
    try:
        config = RenumberConfig(**settings)
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e

    console.print(
        f"Renumbering files under [bold cyan]{escape(str(config.directory))}[/bold cyan] "
        f"starting at [bold magenta]{config.start}[/bold magenta]..."
    )
    if config.keep_file:
        console.print(f"Keeping: [italic]{escape(config.keep_file)}[/italic]")
    console.print()

    if not config.dry_run and not yes:
        # Preview with a planning-only walk, then walk again to apply
        preview = _run_walk(config.model_copy(update={"dry_run": True}), verbose)
        if not preview.plans:
            console.print("[green]No duplicate numbers found.[/green]")
            return

        console.print("[bold]Proposed renames:[/bold]")
        _print_operations(preview.operations, config.directory)
        console.print()

        if not click.confirm("Apply these renames?", default=False):
            console.print("[yellow]Aborted. No files were renamed.[/yellow]")
            return

        console.print("[cyan]Applying renames...[/cyan]")

    result = _run_walk(config, verbose)

    if not result.plans:
        console.print("[green]No duplicate numbers found.[/green]")
        return

    if config.dry_run:
        console.print("[bold]Proposed renames:[/bold]")
        _print_operations(result.operations, config.directory)
        console.print()
        console.print("[yellow]Dry run. No files were renamed.[/yellow]")
        return

    if yes and result.applied:
        _print_operations(result.applied, config.directory)

    console.print()
    console.print(result.summary())

    if result.failed_count:
        console.print(f"[bold red]{result.failed_count} rename(s) failed.[/bold red]")
        raise SystemExit(1)

    console.print(f"[bold green]Successfully renamed {result.applied_count} file(s).[/bold green]")


@cli.command("duplicates")
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
def duplicates(directory: Path) -> None:
    """List files sharing a numeric prefix under DIRECTORY without renaming anything."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Directory", style="dim")
    table.add_column("Number", justify="right", style="magenta")
    table.add_column("Files", style="cyan")

    found = 0
    try:
        for entry in FileSystemWalker(directory).iter_entries():
            for group in find_duplicate_groups(entry.files):
                table.add_row(
                    _relative_directory(entry.path, directory),
                    str(group.number),
                    escape(", ".join(group.names)),
                )
                found += 1
    except DirectoryReadError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise SystemExit(1) from e

    if not found:
        console.print("[green]No duplicate numbers found.[/green]")
        return

    console.print(table)
    console.print(f"Found [bold]{found}[/bold] duplicate group(s).")
