from pathlib import Path

import pytest

from conftest import FakeBackend
from mp3scribe.models import Mode, RunConfig
from mp3scribe.runner import BatchRunner, RunState
from mp3scribe.writer import OutputError, save_transcript


def make_files(directory: Path, count: int):
    paths = []
    for index in range(count):
        path = directory / f"clip{index}.mp3"
        path.write_bytes(b"audio")
        paths.append(path)
    return paths


def make_config(files, output_path, prompt=""):
    return RunConfig(
        mode=Mode.MULTIPLE,
        selected_files=tuple(files),
        output_path=output_path,
        model="gpt-4o-transcribe",
        prompt=prompt,
    )


class StubResolver:
    def __init__(self, config, answer=True):
        self.config = config
        self.answer = answer

    def resolve(self):
        return self.config

    def confirm(self, config):
        return self.answer


def test_run_config_requires_files(tmp_path):
    with pytest.raises(ValueError):
        make_config([], tmp_path)


def test_files_are_processed_in_order(tmp_path):
    files = make_files(tmp_path, 3)
    backend = FakeBackend()
    runner = BatchRunner(backend)

    summary = runner.process(make_config(list(reversed(files)), tmp_path, prompt="context"))

    assert [call[0] for call in backend.calls] == list(reversed(files))
    assert all(call[2] == "context" for call in backend.calls)
    assert summary.succeeded == 3
    assert runner.state is RunState.DONE


def test_empty_prompt_is_passed_as_none(tmp_path):
    files = make_files(tmp_path, 1)
    backend = FakeBackend()

    BatchRunner(backend).process(make_config(files, tmp_path))

    assert backend.calls[0][2] is None


@pytest.mark.parametrize("failing", [(), (0,), (1,), (3,), (0, 2), (0, 1, 2, 3)])
def test_failures_are_isolated(tmp_path, failing):
    out = tmp_path / "out"
    out.mkdir()
    files = make_files(tmp_path, 4)
    backend = FakeBackend(fail_for=[files[index].name for index in failing])

    summary = BatchRunner(backend).process(make_config(files, out))

    assert summary.attempted == 4
    assert summary.failed == len(failing)
    assert summary.succeeded == 4 - len(failing)
    assert len(backend.calls) == 4
    for index, path in enumerate(files):
        output = out / f"{path.stem}_transcript.txt"
        assert output.exists() is (index not in failing)


def test_second_file_network_error(tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    files = make_files(tmp_path, 3)
    backend = FakeBackend(fail_for=[files[1].name])
    reported = []

    runner = BatchRunner(backend, on_result=lambda i, total, result: reported.append((i, total, result.ok)))
    summary = runner.process(make_config(files, out))

    assert (summary.succeeded, summary.failed) == (2, 1)
    assert sorted(p.name for p in out.iterdir()) == ["clip0_transcript.txt", "clip2_transcript.txt"]
    assert summary.failures[0].audio_path == files[1]
    assert "network is unreachable" in str(summary.failures[0].error)
    assert reported == [(0, 3, True), (1, 3, False), (2, 3, True)]


def test_write_failure_does_not_stop_batch(tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    files = make_files(tmp_path, 3)

    def flaky_saver(text, audio_path, output_dir):
        if audio_path == files[0]:
            raise OutputError(output_dir / "clip0_transcript.txt", PermissionError("read-only"))
        return save_transcript(text, audio_path, output_dir)

    summary = BatchRunner(FakeBackend(), saver=flaky_saver).process(make_config(files, out))

    assert (summary.succeeded, summary.failed) == (2, 1)
    assert not (out / "clip0_transcript.txt").exists()
    assert isinstance(summary.failures[0].error, OutputError)


def test_unexpected_backend_error_is_recorded(tmp_path):
    files = make_files(tmp_path, 2)

    class BrokenBackend(FakeBackend):
        def transcribe(self, audio_path, model, prompt=None):
            if audio_path == files[0]:
                raise ValueError("bad payload")
            return super().transcribe(audio_path, model, prompt)

    summary = BatchRunner(BrokenBackend()).process(make_config(files, tmp_path))

    assert (summary.succeeded, summary.failed) == (1, 1)


def test_declining_confirmation_processes_nothing(tmp_path):
    files = make_files(tmp_path, 2)
    backend = FakeBackend()
    saves = []
    runner = BatchRunner(backend, saver=lambda *args: saves.append(args))

    summary = runner.run(StubResolver(make_config(files, tmp_path), answer=False))

    assert summary is None
    assert backend.calls == []
    assert saves == []
    assert runner.state is RunState.DONE


def test_confirmed_run_returns_summary(tmp_path):
    files = make_files(tmp_path, 2)
    runner = BatchRunner(FakeBackend())
    assert runner.state is RunState.IDLE

    summary = runner.run(StubResolver(make_config(files, tmp_path)))

    assert summary is not None
    assert summary.succeeded == 2
    assert (tmp_path / "clip1_transcript.txt").read_text(encoding="utf-8") == "hello world"


def test_failed_write_keeps_earlier_transcript(tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    files = make_files(tmp_path, 1)
    previous = out / "clip0_transcript.txt"
    previous.write_text("good old transcript", encoding="utf-8")

    summary = BatchRunner(FakeBackend("bad \ud800")).process(make_config(files, out))

    assert summary.failed == 1
    assert isinstance(summary.failures[0].error, OutputError)
    assert previous.read_text(encoding="utf-8") == "good old transcript"


def test_failing_result_callback_does_not_stop_batch(tmp_path):
    files = make_files(tmp_path, 2)

    def broken_callback(index, total, result):
        raise RuntimeError("terminal went away")

    summary = BatchRunner(FakeBackend(), on_result=broken_callback).process(make_config(files, tmp_path))

    assert summary.succeeded == 2
    assert (tmp_path / "clip1_transcript.txt").exists()
