"""Placement and persistence of transcript files."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path

from .config import AUDIO_EXTENSION, TRANSCRIPT_EXTENSION, TRANSCRIPT_SUFFIX

logger = logging.getLogger(__name__)


class OutputError(RuntimeError):
    """Raised when a transcript cannot be written."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to save transcript to {path}: {cause}")
        self.path = path
        self.cause = cause


def transcript_path(audio_path: Path, output_dir: Path) -> Path:
    name = audio_path.name
    if name.lower().endswith(AUDIO_EXTENSION):
        name = name[: -len(AUDIO_EXTENSION)]
    return Path(output_dir) / f"{name}{TRANSCRIPT_SUFFIX}{TRANSCRIPT_EXTENSION}"


def save_transcript(text: str, audio_path: Path, output_dir: Path) -> Path:
    """Write ``text`` next to its siblings in ``output_dir``, replacing any previous run."""

    path = transcript_path(audio_path, output_dir)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", delete=False
        ) as fh:
            tmp_name = fh.name
            fh.write(text)
        os.replace(tmp_name, path)
    except (OSError, UnicodeError) as exc:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
        raise OutputError(path, exc) from exc
    logger.info("Transcription saved to %s", path)
    return path
