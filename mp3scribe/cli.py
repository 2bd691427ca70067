"""Command line interface for mp3scribe."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from . import __version__, ui
from .config import DEFAULT_MODEL, ConfigError, Settings, load_settings
from .runner import BatchRunner, ConfigResolver
from .transcriber import TranscriptionBackend, get_backend
from .wizard import NoAudioFilesError, StaticResolver, WizardResolver

app = typer.Typer(add_completion=False, help="Batch transcription of MP3 files with OpenAI.")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.ERROR, format=LOG_FORMAT)


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)


def _load_settings() -> Settings:
    try:
        return load_settings()
    except ConfigError as exc:
        _fail(f"Error: {exc}")
        raise typer.Exit(code=1) from exc


def _execute(resolver: ConfigResolver, backend: TranscriptionBackend, console: Console) -> None:
    runner = BatchRunner(
        backend,
        on_result=lambda index, total, result: ui.show_result(console, index, total, result),
    )
    try:
        config = runner.configure(resolver)
    except NoAudioFilesError as exc:
        raise typer.Exit(code=1) from exc
    except ConfigError as exc:
        _fail(f"Error: {exc}")
        raise typer.Exit(code=1) from exc
    except Exception as exc:
        logging.getLogger(__name__).exception("Configuration failed")
        _fail(f"Configuration failed: {exc}")
        raise typer.Exit(code=1) from exc

    if config is None:
        console.print("[yellow]Cancelled. No files were processed.[/yellow]")
        return

    summary = runner.process(config)
    ui.show_summary(console, summary)
    if summary.failed:
        console.print("[yellow]Re-run the failed files listed above to retry them.[/yellow]")
    else:
        console.print("[bold green]All files processed![/bold green]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    if version:
        typer.echo(f"mp3scribe v{__version__}")
        raise typer.Exit()

    _setup_logging(verbose)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command()
def run(
    input_dir: Optional[Path] = typer.Option(
        None, "--input", "-i", help="Directory to scan for MP3 files (default: current directory)."
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Directory for transcripts (default: current directory)."
    ),
    model: str = typer.Option(DEFAULT_MODEL, "--model", "-m", help="OpenAI transcription model."),
    prompt: str = typer.Option("", "--prompt", "-p", help="Optional context hint for the model."),
) -> None:
    """Transcribe every MP3 file in a directory without asking questions."""

    settings = _load_settings()
    console = Console()
    resolver = StaticResolver(input_dir, output_dir, model=model, prompt=prompt, console=console)
    _execute(resolver, get_backend(settings), console)


@app.command()
def wizard() -> None:
    """Choose files, output directory, model and prompt interactively."""

    settings = _load_settings()
    console = Console()
    _execute(WizardResolver(console=console), get_backend(settings), console)


if __name__ == "__main__":  # pragma: no cover
    app()
