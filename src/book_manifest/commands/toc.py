"""Table-of-contents and read-time command implementations."""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from book_manifest.commands.validate import (
    EXIT_OK,
    display_errors,
    display_path,
    display_warnings,
    exit_code_for,
)
from book_manifest.config import Settings
from book_manifest.core.validator import build_manifest_from_root, compute_read_time
from book_manifest.models.chapter import ChapterStatus
from book_manifest.models.manifest import BookManifest


def display_toc(manifest: BookManifest, root: Path, console: Console) -> None:
    """Table of contents grouped by part."""
    table = Table(title="Table of Contents", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="white")
    table.add_column("Status", justify="center")
    table.add_column("Min", justify="right", style="green")
    table.add_column("File", style="dim")

    for part in manifest.parts:
        heading = f"Part {part.number}"
        if part.name:
            heading += f": {escape(part.name)}"
        table.add_row("", f"[bold]{heading}[/]", "", f"[bold]{part.read_time}[/]", "")

        for chapter in part.chapters:
            status = (
                "[green]complete[/]"
                if chapter.status == ChapterStatus.COMPLETE
                else "[yellow]draft[/]"
            )
            minutes = (
                str(chapter.estimated_read_time)
                if chapter.estimated_read_time is not None
                else "—"
            )
            table.add_row(
                str(chapter.chapter),
                f"  {escape(chapter.title)}",
                status,
                minutes,
                escape(display_path(chapter.path, root)),
            )
        table.add_section()

    console.print(table)


def execute_toc(root: Path, settings: Settings, console: Console) -> int:
    """Execute the toc command. Returns the process exit code."""
    result = build_manifest_from_root(root, settings)

    if result.manifest is None:
        display_errors(result.errors, root, console)
        return exit_code_for(result)

    display_toc(result.manifest, root, console)
    console.print(
        f"\n[dim]Total:[/] {result.manifest.chapter_count} chapter(s), "
        f"{result.manifest.total_read_time} min"
    )
    return EXIT_OK


def execute_read_time(root: Path, settings: Settings, console: Console) -> int:
    """Execute the read-time command. Returns the process exit code."""
    result = build_manifest_from_root(root, settings)

    if result.manifest is None:
        display_errors(result.errors, root, console)
        return exit_code_for(result)

    report = compute_read_time(result.manifest)

    table = Table(title="Estimated Read Time", show_header=True, header_style="bold cyan")
    table.add_column("Part", style="dim")
    table.add_column("Minutes", justify="right", style="green")
    table.add_column("Hours", justify="right")

    for number, minutes in report.by_part.items():
        table.add_row(str(number), str(minutes), f"{minutes / 60:.1f}")

    table.add_section()
    table.add_row(
        "[bold]Total[/]",
        f"[bold]{report.total}[/]",
        f"[bold]{report.total / 60:.1f}[/]",
    )
    console.print(table)

    if report.warnings:
        console.print()
        display_warnings(report.warnings, root, console)

    return EXIT_OK
