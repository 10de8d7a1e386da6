"""Main CLI application."""

from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from book_manifest.commands.toc import execute_read_time, execute_toc
from book_manifest.commands.validate import execute_validate
from book_manifest.config import Settings, get_settings
from book_manifest.errors import BookManifestError
from book_manifest.logging_config import configure_logging

app = typer.Typer(
    name="book-manifest",
    help="Validate chapter front matter and assemble the book manifest.",
    add_completion=False,
)

console = Console()


class PlaceholderChoice(str, Enum):
    """How reviewer/translator placeholders such as TBD are reported."""

    IGNORE = "ignore"
    WARN = "warn"
    ERROR = "error"


RootArgument = Annotated[
    Path,
    typer.Argument(
        help="Manuscript root containing chapter Markdown files",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
]

MinLinesOption = Annotated[
    Optional[int],
    typer.Option(
        "--min-lines",
        help="Skip files shorter than N lines (0 keeps every file, default: 20)",
        min=0,
    ),
]

PlaceholderOption = Annotated[
    Optional[PlaceholderChoice],
    typer.Option(
        "--placeholders",
        "-p",
        help="Treat TBD reviewer/translator values as: ignore, warn or error",
        case_sensitive=False,
    ),
]

WorkersOption = Annotated[
    Optional[int],
    typer.Option(
        "--workers",
        "-w",
        help="Number of files to read in parallel",
        min=1,
    ),
]


def resolve_settings(
    min_lines: int | None = None,
    placeholders: PlaceholderChoice | None = None,
    workers: int | None = None,
) -> Settings:
    """Apply command-line overrides on top of the environment settings."""
    overrides = {
        "min_lines": min_lines,
        "placeholder_policy": placeholders.value if placeholders else None,
        "max_workers": workers,
    }
    return get_settings().model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging on stderr",
        ),
    ] = False,
) -> None:
    """Validate chapter front matter and assemble the book manifest."""
    configure_logging("DEBUG" if verbose else get_settings().log_level)


@app.command()
def validate(
    root: RootArgument,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the manifest (or errors) as JSON",
        ),
    ] = False,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Also write manifest.json (or errors.json) to this directory",
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
        ),
    ] = None,
    min_lines: MinLinesOption = None,
    placeholders: PlaceholderOption = None,
    workers: WorkersOption = None,
) -> None:
    """Validate every chapter and build the manifest.

    Exit code 0 means the manifest is clean, 1 means at least one file could
    not be parsed, and 2 means the files parsed but failed validation.
    """
    settings = resolve_settings(min_lines, placeholders, workers)

    try:
        code = execute_validate(
            root=root,
            settings=settings,
            console=console,
            output_dir=output_dir,
            as_json=as_json,
        )
    except BookManifestError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    raise typer.Exit(code)


@app.command()
def toc(
    root: RootArgument,
    min_lines: MinLinesOption = None,
    placeholders: PlaceholderOption = None,
    workers: WorkersOption = None,
) -> None:
    """Display the table of contents grouped by part."""
    settings = resolve_settings(min_lines, placeholders, workers)

    try:
        code = execute_toc(root=root, settings=settings, console=console)
    except BookManifestError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    raise typer.Exit(code)


@app.command("read-time")
def read_time(
    root: RootArgument,
    min_lines: MinLinesOption = None,
    workers: WorkersOption = None,
) -> None:
    """Show estimated read time per part and for the whole book."""
    settings = resolve_settings(min_lines, workers=workers)

    try:
        code = execute_read_time(root=root, settings=settings, console=console)
    except BookManifestError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    raise typer.Exit(code)


if __name__ == "__main__":
    app()
