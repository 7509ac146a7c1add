import pytest

from stake_overrides.settings import Settings


def test_defaults_without_environment(tmp_path):
    settings = Settings.from_env(dotenv_path=str(tmp_path / "missing.env"))

    assert settings.source is None
    assert settings.reload_period == 60.0
    assert settings.poll_interval == 0.001
    assert settings.http_timeout == 10.0
    assert settings.log_level == "INFO"
    assert settings.log_file is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("STAKE_OVERRIDES_SOURCE", "https://example.com/overrides.yaml")
    monkeypatch.setenv("STAKE_OVERRIDES_RELOAD_PERIOD", "5")
    monkeypatch.setenv("STAKE_OVERRIDES_LOG_LEVEL", "debug")

    settings = Settings.from_env(dotenv_path=None)

    assert settings.source == "https://example.com/overrides.yaml"
    assert settings.reload_period == 5.0
    assert settings.log_level == "DEBUG"


def test_dotenv_does_not_override_environment(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "STAKE_OVERRIDES_SOURCE=/from/dotenv.yaml\n"
        "STAKE_OVERRIDES_HTTP_TIMEOUT=3\n"
    )
    monkeypatch.setenv("STAKE_OVERRIDES_SOURCE", "/from/env.yaml")
    # load_dotenv writes to os.environ; let monkeypatch undo it
    monkeypatch.setenv("STAKE_OVERRIDES_HTTP_TIMEOUT", "")
    monkeypatch.delenv("STAKE_OVERRIDES_HTTP_TIMEOUT")

    settings = Settings.from_env(dotenv_path=str(env_file))

    assert settings.source == "/from/env.yaml"
    assert settings.http_timeout == 3.0


@pytest.mark.parametrize("value", ["soon", "0", "-1"])
def test_invalid_period_raises(monkeypatch, value):
    monkeypatch.setenv("STAKE_OVERRIDES_RELOAD_PERIOD", value)
    with pytest.raises(ValueError, match="STAKE_OVERRIDES_RELOAD_PERIOD"):
        Settings.from_env(dotenv_path=None)
