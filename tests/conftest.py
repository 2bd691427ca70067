import io
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pytest
from rich.console import Console
from rich.prompt import Prompt

from mp3scribe.transcriber import TranscriptionError


class FakeBackend:
    """Backend returning canned text, failing for the given file names."""

    def __init__(self, text: str = "hello world", fail_for: Iterable[str] = ()) -> None:
        self.text = text
        self.fail_for = set(fail_for)
        self.calls: List[Tuple[Path, str, Optional[str]]] = []

    def transcribe(self, audio_path: Path, model: str, prompt: Optional[str] = None) -> str:
        self.calls.append((audio_path, model, prompt))
        if audio_path.name in self.fail_for:
            raise TranscriptionError(audio_path, ConnectionError("network is unreachable"))
        return self.text


class ScriptedPrompt:
    """Stand-in for ``Prompt.ask`` answering from a fixed script."""

    def __init__(self, answers: Iterable[str]) -> None:
        self.answers = list(answers)
        self.questions: List[str] = []

    def __call__(self, prompt: str = "", **kwargs) -> str:
        self.questions.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt}")
        return self.answers.pop(0)


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def script_prompts(monkeypatch):
    def _install(*answers: str) -> ScriptedPrompt:
        scripted = ScriptedPrompt(answers)
        monkeypatch.setattr(Prompt, "ask", scripted)
        return scripted

    return _install


@pytest.fixture
def api_key(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    return "sk-test"
