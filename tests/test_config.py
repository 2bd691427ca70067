from mp3scribe import config
from mp3scribe.config import ConfigError, Settings


def test_load_settings_reads_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

    settings = config.load_settings()
    assert settings == Settings(api_key="sk-env")


def test_load_settings_reads_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "placeholder")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    (tmp_path / ".env").write_text("OPENAI_API_KEY=sk-from-file\n")

    settings = config.load_settings()
    assert settings.api_key == "sk-from-file"


def test_missing_api_key_raises(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    try:
        config.load_settings()
    except ConfigError as exc:
        assert "OPENAI_API_KEY" in str(exc)
    else:
        raise AssertionError("Expected ConfigError for missing API key")


def test_blank_api_key_counts_as_missing(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "   ")

    try:
        config.load_settings()
    except ConfigError:
        pass
    else:
        raise AssertionError("Expected ConfigError for blank API key")
