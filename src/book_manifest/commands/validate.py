"""Validate command implementation."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from book_manifest.config import Settings
from book_manifest.core.output_writer import ManifestWriter, render_errors_json
from book_manifest.core.validator import build_manifest_from_root
from book_manifest.models.issues import ManifestWarning, ValidationIssue
from book_manifest.models.manifest import BookManifest, ManifestResult

EXIT_OK = 0
EXIT_PARSE_ERRORS = 1
EXIT_VALIDATION_ERRORS = 2


def exit_code_for(result: ManifestResult) -> int:
    """Parse errors take precedence over other validation errors."""
    if result.ok:
        return EXIT_OK
    if result.parse_errors:
        return EXIT_PARSE_ERRORS
    return EXIT_VALIDATION_ERRORS


def display_path(path: str, root: Path) -> str:
    """Path relative to the manuscript root when it lives under it."""
    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return path


def display_summary(manifest: BookManifest, root: Path, console: Console) -> None:
    """Show the manifest summary panel and per-part table."""
    console.print(
        Panel(
            f"[bold]{root.name}[/]\n\n"
            f"[dim]Parts:[/] {len(manifest.parts)}\n"
            f"[dim]Chapters:[/] {manifest.chapter_count}\n"
            f"[dim]Estimated read time:[/] {manifest.total_read_time} min",
            title="Manifest OK",
            border_style="green",
        )
    )

    if not manifest.parts:
        return

    console.print()
    table = Table(title="Parts", show_header=True, header_style="bold cyan")
    table.add_column("Part", style="dim", width=5)
    table.add_column("Name", style="white")
    table.add_column("Chapters", justify="right")
    table.add_column("Minutes", justify="right", style="green")

    for part in manifest.parts:
        table.add_row(
            str(part.number),
            escape(part.name) if part.name else "—",
            str(len(part.chapters)),
            str(part.read_time),
        )

    console.print(table)


def display_errors(
    errors: list[ValidationIssue],
    root: Path,
    console: Console,
) -> None:
    """Show errors as a table: kind, file, message."""
    table = Table(
        title=f"{len(errors)} Error(s)",
        show_header=True,
        header_style="bold red",
    )
    table.add_column("Kind", style="red", no_wrap=True)
    table.add_column("File", style="white")
    table.add_column("Message", style="dim")

    for error in errors:
        table.add_row(
            error.kind.value,
            escape(display_path(error.path, root)),
            escape(error.message),
        )

    console.print(table)


def display_warnings(
    warnings: list[ManifestWarning],
    root: Path,
    console: Console,
) -> None:
    """List soft warnings."""
    for warning in warnings:
        console.print(
            f"[yellow]⚠ {warning.kind.value}[/] "
            f"{escape(display_path(warning.path, root))}: {escape(warning.message)}",
            highlight=False,
        )


def execute_validate(
    root: Path,
    settings: Settings,
    console: Console,
    output_dir: Path | None = None,
    as_json: bool = False,
) -> int:
    """Execute the validate command. Returns the process exit code."""
    result = build_manifest_from_root(root, settings)

    if output_dir is not None:
        written = ManifestWriter(output_dir).write(result)
        if not as_json:
            console.print(f"[dim]Wrote {escape(str(written))}[/]")

    if as_json:
        payload = (
            result.manifest.model_dump_json(indent=2)
            if result.manifest is not None
            else render_errors_json(result)
        )
        console.print(
            payload, markup=False, highlight=False, emoji=False, soft_wrap=True
        )
        return exit_code_for(result)

    if result.manifest is not None:
        display_summary(result.manifest, root, console)
    else:
        display_errors(result.errors, root, console)

    if result.warnings:
        console.print()
        display_warnings(result.warnings, root, console)

    return exit_code_for(result)
