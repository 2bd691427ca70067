"""Rich rendering helpers for the command line."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .models import RunConfig, RunSummary, TranscriptResult


def show_files(console: Console, directory: Path, files: Sequence[Path]) -> None:
    console.print(f"Found {len(files)} MP3 file(s) in [cyan]{directory}[/cyan]:")
    for number, path in enumerate(files, start=1):
        console.print(f"  {number:>3}. {escape(path.name)}")
    console.print()


def show_config(console: Console, config: RunConfig) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="cyan")
    table.add_column()

    table.add_row("Mode:", config.mode.value)
    table.add_row("Files:", str(len(config.selected_files)))
    for path in config.selected_files:
        table.add_row("", path.name)
    table.add_row("Output:", str(config.output_path))
    table.add_row("Model:", config.model)
    table.add_row("Prompt:", config.prompt or "[dim](none)[/dim]")

    console.print()
    console.print(Panel(table, title="Transcription Configuration", border_style="blue"))
    console.print()


def show_result(console: Console, index: int, total: int, result: TranscriptResult) -> None:
    prefix = f"[{index + 1}/{total}] {escape(result.audio_path.name)}"
    if result.ok:
        console.print(f"[green]✓[/green] {prefix} → {escape(str(result.output_path))}")
    else:
        console.print(f"[red]✗[/red] {prefix}: {escape(str(result.error))}")


def show_summary(console: Console, summary: RunSummary) -> None:
    table = Table.grid(padding=(0, 2))
    table.add_row("[bold]Files processed:[/bold]", str(summary.attempted))
    table.add_row("[bold]Succeeded:[/bold]", f"[green]{summary.succeeded}[/green]")
    table.add_row("[bold]Failed:[/bold]", f"[red]{summary.failed}[/red]")
    for result in summary.failures:
        table.add_row("", f"[red]{result.audio_path}[/red]")

    console.print()
    console.print(Panel(table, title="Processing Summary", border_style="green"))
