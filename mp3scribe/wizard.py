"""Resolution of the run configuration, interactively or from fixed defaults."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from . import ui
from .config import (
    AUDIO_EXTENSION,
    DEFAULT_INPUT_DIR,
    DEFAULT_MODEL,
    DEFAULT_OUTPUT_DIR,
    MODELS,
    ConfigError,
)
from .models import Mode, RunConfig
from .scanner import ScanStatus, is_audio_file, scan_directory

logger = logging.getLogger(__name__)

_SELECTION_SPLIT_RE = re.compile(r"[\s,]+")


class NoAudioFilesError(RuntimeError):
    """Raised when discovery finds nothing to transcribe."""


def parse_selection(answer: str, count: int) -> List[int]:
    """Turn ``"all"`` or ``"1, 3-4"`` into sorted zero-based indices.

    Raises ``ValueError`` for empty, malformed or out-of-range answers.
    """

    answer = answer.strip().lower()
    if answer in {"all", "*"}:
        return list(range(count))

    chosen = set()
    for token in _SELECTION_SPLIT_RE.split(answer):
        if not token:
            continue
        start, sep, end = token.partition("-")
        first = int(start)
        last = int(end) if sep else first
        if first < 1 or last > count or first > last:
            raise ValueError(f"{token} is outside 1-{count}")
        chosen.update(range(first - 1, last))
    if not chosen:
        raise ValueError("Select at least one file")
    return sorted(chosen)


def _discover(console: Console, directory: Path) -> List[Path]:
    result = scan_directory(directory)
    if result.status is ScanStatus.FOUND:
        return result.files
    if result.status is ScanStatus.EMPTY:
        message = f"No MP3 files found in {directory}"
    else:
        message = f"Could not read directory {directory} ({result.status.value})"
    console.print(f"[red]{escape(message)}[/red]")
    raise NoAudioFilesError(message)


class StaticResolver:
    """Non-interactive configuration: one directory, fixed model and prompt."""

    def __init__(
        self,
        input_dir: Optional[Path] = None,
        output_dir: Optional[Path] = None,
        model: str = DEFAULT_MODEL,
        prompt: str = "",
        console: Optional[Console] = None,
    ) -> None:
        self.input_dir = input_dir or Path.cwd()
        self.output_dir = output_dir or Path.cwd()
        self.model = model
        self.prompt = prompt
        self.console = console or Console()

    def resolve(self) -> RunConfig:
        if not self.output_dir.is_dir():
            raise ConfigError(f"Output directory {self.output_dir} does not exist.")
        self.console.print(f"Searching for MP3 files in: [cyan]{escape(str(self.input_dir))}[/cyan]")
        files = _discover(self.console, self.input_dir)
        ui.show_files(self.console, self.input_dir, files)
        return RunConfig(
            mode=Mode.MULTIPLE,
            selected_files=tuple(files),
            output_path=self.output_dir,
            model=self.model,
            prompt=self.prompt,
        )

    def confirm(self, config: RunConfig) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class _Draft:
    mode: Optional[Mode] = None
    files: Tuple[Path, ...] = ()
    output_path: Optional[Path] = None
    model: str = DEFAULT_MODEL
    prompt: str = ""

    def build(self) -> RunConfig:
        if self.mode is None or self.output_path is None:
            raise ConfigError("Configuration is incomplete.")
        if not self.output_path.is_dir():
            raise ConfigError(f"Output directory {self.output_path} no longer exists.")
        missing = [path for path in self.files if not path.is_file()]
        if missing:
            names = ", ".join(str(path) for path in missing)
            raise ConfigError(f"Selected file(s) no longer exist: {names}")
        return RunConfig(
            mode=self.mode,
            selected_files=self.files,
            output_path=self.output_path,
            model=self.model,
            prompt=self.prompt,
        )


Step = Callable[[_Draft], _Draft]


class WizardResolver:
    """Interactive configuration built from an ordered list of prompts."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self.steps: List[Step] = [
            self._ask_mode,
            self._ask_sources,
            self._ask_model,
            self._ask_prompt,
        ]

    def resolve(self) -> RunConfig:
        draft = _Draft()
        for step in self.steps:
            draft = step(draft)
        return draft.build()

    def confirm(self, config: RunConfig) -> bool:
        ui.show_config(self.console, config)
        return Confirm.ask("Start transcription?", default=True, console=self.console)

    def _ask_mode(self, draft: _Draft) -> _Draft:
        self.console.print("[bold]Input[/bold]")
        answer = Prompt.ask(
            "Transcribe a single file or multiple files from a directory?",
            choices=[mode.value for mode in Mode],
            default=Mode.MULTIPLE.value,
            console=self.console,
        )
        return replace(draft, mode=Mode(answer))

    def _ask_sources(self, draft: _Draft) -> _Draft:
        if draft.mode is Mode.SINGLE:
            audio_path = self._ask_audio_file()
            output_path = self._ask_directory("Output directory", DEFAULT_OUTPUT_DIR)
            return replace(draft, files=(audio_path,), output_path=output_path)

        input_dir = self._ask_directory("Input directory", DEFAULT_INPUT_DIR)
        output_path = self._ask_directory("Output directory", DEFAULT_OUTPUT_DIR)
        files = _discover(self.console, input_dir)
        ui.show_files(self.console, input_dir, files)
        selected = self._ask_selection(files)
        return replace(draft, files=tuple(selected), output_path=output_path)

    def _ask_model(self, draft: _Draft) -> _Draft:
        self.console.print("[bold]Model[/bold]")
        for name, description in MODELS.items():
            self.console.print(f"  {name:<24} [dim]{description}[/dim]")
        model = Prompt.ask(
            "Model",
            choices=list(MODELS),
            default=DEFAULT_MODEL,
            show_choices=False,
            console=self.console,
        )
        return replace(draft, model=model)

    def _ask_prompt(self, draft: _Draft) -> _Draft:
        prompt = Prompt.ask(
            "Context prompt for the model (optional)",
            default="",
            show_default=False,
            console=self.console,
        )
        return replace(draft, prompt=prompt.strip())

    def _ask_audio_file(self) -> Path:
        while True:
            answer = Prompt.ask("Path to the MP3 file", console=self.console).strip()
            path = Path(answer).expanduser()
            if not answer or not path.exists():
                self._reject(f"File {answer!r} does not exist.")
            elif not path.is_file():
                self._reject(f"{answer} is not a file.")
            elif not is_audio_file(path):
                self._reject(f"{answer} is not an {AUDIO_EXTENSION} file.")
            else:
                return path

    def _ask_directory(self, label: str, default: Path) -> Path:
        while True:
            answer = Prompt.ask(label, default=str(default), console=self.console).strip()
            path = Path(answer).expanduser()
            if answer and path.is_dir():
                return path
            self._reject(f"Directory {answer!r} does not exist.")

    def _ask_selection(self, files: List[Path]) -> List[Path]:
        while True:
            answer = Prompt.ask(
                "Files to transcribe (e.g. 1,3-4)",
                default="all",
                console=self.console,
            )
            try:
                indices = parse_selection(answer, len(files))
            except ValueError as exc:
                self._reject(f"Invalid selection: {exc}")
                continue
            return [files[index] for index in indices]

    def _reject(self, message: str) -> None:
        logger.debug("Rejected input: %s", message)
        self.console.print(f"[red]{escape(message)}[/red]")
