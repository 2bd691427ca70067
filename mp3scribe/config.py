"""Environment configuration and fixed defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

API_KEY_ENV = "OPENAI_API_KEY"
AUDIO_EXTENSION = ".mp3"
TRANSCRIPT_SUFFIX = "_transcript"
TRANSCRIPT_EXTENSION = ".txt"

DEFAULT_MODEL = "gpt-4o-transcribe"
MODELS = {
    "gpt-4o-transcribe": "best quality (recommended)",
    "gpt-4o-mini-transcribe": "faster, cheaper",
    "whisper-1": "classic Whisper, segment timestamps",
}
DEFAULT_INPUT_DIR = Path("./inputs")
DEFAULT_OUTPUT_DIR = Path("./outputs")


class ConfigError(RuntimeError):
    """Raised when required configuration is missing."""


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-wide settings, loaded once at startup."""

    api_key: str


def load_settings(env_file: Optional[Path] = None) -> Settings:
    load_dotenv(dotenv_path=env_file or Path.cwd() / ".env")
    api_key = os.getenv(API_KEY_ENV, "").strip()
    if not api_key:
        raise ConfigError(
            f"The {API_KEY_ENV} environment variable is required. "
            f"Export it or add `{API_KEY_ENV}=sk-...` to a .env file."
        )
    return Settings(api_key=api_key)
