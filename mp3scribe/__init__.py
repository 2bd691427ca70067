"""Top-level package for mp3scribe."""

from . import config, models, runner, scanner, transcriber, writer

__version__ = "0.1.0"

__all__ = ["config", "models", "runner", "scanner", "transcriber", "writer"]
