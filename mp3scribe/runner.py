"""Sequential batch processing of the selected audio files."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol

from .models import RunConfig, RunSummary, TranscriptResult
from .transcriber import TranscriptionBackend, TranscriptionError
from .writer import OutputError, save_transcript

logger = logging.getLogger(__name__)

Saver = Callable[[str, Path, Path], Path]
ResultCallback = Callable[[int, int, TranscriptResult], None]


class RunState(str, Enum):
    IDLE = "idle"
    CONFIGURING = "configuring"
    CONFIRMING = "confirming"
    PROCESSING = "processing"
    DONE = "done"


class ConfigResolver(Protocol):
    def resolve(self) -> RunConfig:
        """Return the configuration for this run."""

    def confirm(self, config: RunConfig) -> bool:
        """Return whether processing should start."""


class BatchRunner:
    """Drive one run from configuration to summary.

    Files are transcribed one at a time in selection order. A failure while
    transcribing or saving one file is recorded in the summary and never stops
    the remaining files.
    """

    def __init__(
        self,
        backend: TranscriptionBackend,
        saver: Saver = save_transcript,
        on_result: Optional[ResultCallback] = None,
    ) -> None:
        self.backend = backend
        self.saver = saver
        self.on_result = on_result
        self.state = RunState.IDLE

    def run(self, resolver: ConfigResolver) -> Optional[RunSummary]:
        """Resolve, confirm and process. Returns ``None`` when the operator declines."""

        config = self.configure(resolver)
        if config is None:
            return None
        return self.process(config)

    def configure(self, resolver: ConfigResolver) -> Optional[RunConfig]:
        """Resolve and confirm; ``None`` means the run ended without processing."""

        self.state = RunState.CONFIGURING
        config = resolver.resolve()

        self.state = RunState.CONFIRMING
        if not resolver.confirm(config):
            logger.info("Run cancelled before processing")
            self.state = RunState.DONE
            return None
        return config

    def process(self, config: RunConfig) -> RunSummary:
        self.state = RunState.PROCESSING
        summary = RunSummary()
        total = len(config.selected_files)
        for index, audio_path in enumerate(config.selected_files):
            result = self._process_one(audio_path, config)
            summary.add(result)
            if self.on_result is not None:
                try:
                    self.on_result(index, total, result)
                except Exception:  # noqa: BLE001 - reporting must not abort the batch
                    logger.exception("Result callback failed for %s", audio_path.name)
        self.state = RunState.DONE
        logger.info(
            "Processed %d file(s): %d succeeded, %d failed",
            summary.attempted,
            summary.succeeded,
            summary.failed,
        )
        return summary

    def _process_one(self, audio_path: Path, config: RunConfig) -> TranscriptResult:
        try:
            text = self.backend.transcribe(audio_path, config.model, config.prompt or None)
            output_path = self.saver(text, audio_path, config.output_path)
        except (TranscriptionError, OutputError) as exc:
            logger.warning("Failed to process %s: %s", audio_path.name, exc)
            return TranscriptResult(audio_path, error=exc)
        except Exception as exc:  # noqa: BLE001 - one file must not abort the batch
            logger.exception("Unexpected error while processing %s", audio_path.name)
            return TranscriptResult(audio_path, error=exc)
        return TranscriptResult(audio_path, output_path=output_path)
