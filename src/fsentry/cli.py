"""Command-line interface for fsentry."""

import asyncio
import json
import logging
from collections.abc import Coroutine
from typing import Annotated, Any, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from fsentry import __version__
from fsentry.config import get_settings
from fsentry.entry import Entry
from fsentry.filters import EntryFilter
from fsentry.models import EntryKind

T = TypeVar("T")

app = typer.Typer(
    name="fsentry",
    help="Filesystem entries: list, filter, copy, move and inspect paths",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"fsentry version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option(
            "--config",
            "-f",
            help="Path to a YAML config file (overrides default config locations).",
        ),
    ] = None,
) -> None:
    """fsentry - filesystem entries from the command line."""
    try:
        settings = get_settings(config_file=config_file)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=True, show_path=False)],
    )


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine, turning OS errors into a clean exit."""
    try:
        return asyncio.run(coro)
    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command("ls")
def list_command(
    path: Annotated[str, typer.Argument(help="Directory to list")] = ".",
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Walk subdirectories too"),
    ] = False,
    extensions: Annotated[
        list[str] | None,
        typer.Option("--ext", "-e", help="Only list files with this extension (repeatable)"),
    ] = None,
    kind: Annotated[
        EntryKind | None,
        typer.Option("--kind", "-k", help="Only list entries of this kind"),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output format: table or json"),
    ] = None,
) -> None:
    """List the entries of a directory.

    Examples:
        fsentry ls src
        fsentry ls src -r --ext py
        fsentry ls . -r --kind directory -o json
    """
    settings = get_settings()
    output_format = output or settings.output_format
    if output_format not in ("table", "json"):
        console.print(f"[red]Error:[/red] Unsupported output format: {output_format}")
        raise typer.Exit(1)

    entry_filter = EntryFilter(kind=kind, extensions=extensions or None)
    directory = Entry(path).as_directory()

    async def collect() -> list[tuple[Entry, EntryKind]]:
        if recursive:
            entries = await directory.list_recursively(entry_filter)
        else:
            entries = await directory.list(entry_filter)
        return [(entry, await entry.kind()) for entry in sorted(entries, key=lambda e: e.path)]

    rows = _run(collect())

    if output_format == "json":
        console.print_json(json.dumps([{"path": entry.path, "kind": entry_kind.value} for entry, entry_kind in rows]))
        return

    table = Table(title=directory.path, show_header=True, header_style="bold")
    table.add_column("Kind", no_wrap=True)
    table.add_column("Path")
    for entry, entry_kind in rows:
        style = "blue" if entry_kind == EntryKind.DIRECTORY else None
        table.add_row(entry_kind.value, entry.path, style=style)
    console.print(table)


@app.command()
def info(path: Annotated[str, typer.Argument(help="File or directory")]) -> None:
    """Show information about a file or directory."""
    entry_info = _run(Entry(path).info())
    console.print(
        Panel(
            f"[bold]Path:[/bold] {entry_info.absolute_path}\n"
            f"[bold]Kind:[/bold] {entry_info.kind.value}\n"
            f"[bold]Size:[/bold] {entry_info.size:,} bytes\n"
            f"[bold]Extension:[/bold] {entry_info.extension or '-'}\n"
            f"[bold]Modified:[/bold] {entry_info.modified_at}",
            title=entry_info.name or entry_info.path,
        )
    )


@app.command()
def cat(path: Annotated[str, typer.Argument(help="File to print")]) -> None:
    """Print the content of a file."""
    content = _run(Entry(path).as_file().read(get_settings().default_encoding))
    console.print(content, end="", markup=False, highlight=False)


@app.command()
def mkdir(path: Annotated[str, typer.Argument(help="Directory to create")]) -> None:
    """Create a directory and its missing parents."""
    created = _run(Entry(path).as_directory().create_directory())
    console.print(f"[green]✓[/green] Created {created.path}")


@app.command()
def touch(path: Annotated[str, typer.Argument(help="File to create")]) -> None:
    """Create an empty file and its missing parents."""
    created = _run(Entry(path).as_file().create_file())
    console.print(f"[green]✓[/green] Created {created.path}")


@app.command("cp")
def copy_command(
    source: Annotated[str, typer.Argument(help="File or directory to copy")],
    destination: Annotated[str, typer.Argument(help="Destination path")],
) -> None:
    """Copy a file or a directory tree."""
    copied = _run(Entry(source).copy(Entry(destination)))
    console.print(f"[green]✓[/green] Copied {source} -> {copied.path}")


@app.command("mv")
def move_command(
    source: Annotated[str, typer.Argument(help="File or directory to move")],
    destination: Annotated[str, typer.Argument(help="Destination path")],
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Replace an existing destination"),
    ] = False,
) -> None:
    """Move a file or a directory tree."""
    moved = _run(Entry(source).move(Entry(destination), overwrite=overwrite))
    console.print(f"[green]✓[/green] Moved {source} -> {moved.path}")


@app.command("rm")
def remove_command(path: Annotated[str, typer.Argument(help="File or directory to remove")]) -> None:
    """Remove a file or a whole directory tree."""
    _run(Entry(path).remove())
    console.print(f"[green]✓[/green] Removed {path}")


@app.command()
def config() -> None:
    """Show current configuration."""
    settings = get_settings()

    console.print(Panel("[bold]Current Configuration[/bold]", title="fsentry"))
    console.print(f"[bold]Default Encoding:[/bold] {settings.default_encoding}")
    console.print(f"[bold]Read Chunk Size:[/bold] {settings.read_chunk_size:,}")
    console.print(f"[bold]Output Format:[/bold] {settings.output_format}")
    console.print(f"[bold]Log Level:[/bold] {settings.log_level}")
    console.print(f"[bold]Server Root:[/bold] {settings.server_root}")


@app.command()
def serve(
    root: Annotated[
        str | None,
        typer.Argument(help="Directory the server is confined to (default: server_root setting)"),
    ] = None,
) -> None:
    """Start the fsentry MCP server over stdin/stdout.

    Available tools:
        list_directory  - List (optionally recursively) and filter a directory
        get_entry_info  - Kind, size and modification time of a path
        entry_exists    - Check if a path exists
        read_file       - Read a text file

    MCP config for Cline (cline_mcp_settings.json):
        {
          "mcpServers": {
            "fsentry": {
              "command": "fsentry",
              "args": ["serve", "/path/to/project"]
            }
          }
        }
    """
    from fsentry.server import run_server

    try:
        run_server(root)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
