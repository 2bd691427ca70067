"""Remote transcription backends."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from openai import OpenAI, OpenAIError

from .config import Settings

logger = logging.getLogger(__name__)

SEGMENT_TIMESTAMP_MODELS = {"whisper-1"}


class TranscriptionError(RuntimeError):
    """Raised when a file could not be transcribed."""

    def __init__(self, audio_path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to transcribe {audio_path.name}: {cause}")
        self.audio_path = audio_path
        self.cause = cause


class TranscriptionBackend(Protocol):
    """Common interface for transcription backends."""

    def transcribe(self, audio_path: Path, model: str, prompt: Optional[str] = None) -> str:
        """Return the full transcript text of ``audio_path``."""


class OpenAIBackend:
    """Cloud transcription using the OpenAI API."""

    def __init__(self, settings: Settings, client: Optional[Any] = None) -> None:
        self._client = client if client is not None else OpenAI(api_key=settings.api_key)

    def transcribe(self, audio_path: Path, model: str, prompt: Optional[str] = None) -> str:
        params: Dict[str, Any] = {"model": model}
        if prompt and prompt.strip():
            params["prompt"] = prompt.strip()
        if model in SEGMENT_TIMESTAMP_MODELS:
            params["response_format"] = "verbose_json"
            params["timestamp_granularities"] = ["segment"]

        logger.info("Transcribing %s with %s", audio_path, model)
        try:
            with audio_path.open("rb") as fh:
                response = self._client.audio.transcriptions.create(file=fh, **params)
        except (OSError, OpenAIError) as exc:
            raise TranscriptionError(audio_path, exc) from exc
        return response.text


def get_backend(settings: Settings) -> TranscriptionBackend:
    return OpenAIBackend(settings)
