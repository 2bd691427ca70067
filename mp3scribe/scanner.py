"""Discovery of audio files eligible for transcription."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Union

from .config import AUDIO_EXTENSION

logger = logging.getLogger(__name__)


class ScanStatus(str, Enum):
    FOUND = "found"
    EMPTY = "empty"
    NOT_FOUND = "not_found"
    UNREADABLE = "unreadable"


@dataclass(slots=True)
class ScanResult:
    directory: Path
    status: ScanStatus
    files: List[Path] = field(default_factory=list)


def is_audio_file(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() == AUDIO_EXTENSION


def scan_directory(directory: Union[str, Path]) -> ScanResult:
    """List matching files in ``directory`` without recursing.

    Entries keep the order reported by the operating system. A missing or
    unreadable directory is reported through the result status instead of an
    exception.
    """

    directory = Path(directory)
    try:
        names = os.listdir(directory)
    except FileNotFoundError:
        logger.error("Input directory %s does not exist", directory)
        return ScanResult(directory, ScanStatus.NOT_FOUND)
    except OSError as exc:
        logger.error("Error reading directory %s: %s", directory, exc)
        return ScanResult(directory, ScanStatus.UNREADABLE)

    files = [directory / name for name in names if is_audio_file(name)]
    status = ScanStatus.FOUND if files else ScanStatus.EMPTY
    logger.debug("Found %d audio file(s) in %s", len(files), directory)
    return ScanResult(directory, status, files)


def find_audio_files(directory: Union[str, Path]) -> List[Path]:
    """Return audio files in ``directory``; empty when it cannot be listed."""

    return scan_directory(directory).files
