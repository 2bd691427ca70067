"""Dataclasses describing a single transcription run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


class Mode(str, Enum):
    """How the input files were chosen."""

    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Resolved parameters for one batch run."""

    mode: Mode
    selected_files: Tuple[Path, ...]
    output_path: Path
    model: str
    prompt: str = ""

    def __post_init__(self) -> None:
        if not self.selected_files:
            raise ValueError("A run needs at least one selected file.")


@dataclass(slots=True)
class TranscriptResult:
    """Outcome of processing one audio file."""

    audio_path: Path
    output_path: Optional[Path] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class RunSummary:
    results: List[TranscriptResult] = field(default_factory=list)

    def add(self, result: TranscriptResult) -> None:
        self.results.append(result)

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for result in self.results if result.ok)

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded

    @property
    def failures(self) -> List[TranscriptResult]:
        return [result for result in self.results if not result.ok]
