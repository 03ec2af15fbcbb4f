from pathlib import Path

import pytest

from config import DEFAULT_API_BASE_URL, DEFAULT_REQUEST_TIMEOUT, load_config


@pytest.fixture
def isolated_env(tmp_path, monkeypatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    for name in ("MAILCAL_API_URL", "MAILCAL_SESSION", "MAILCAL_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def _write_config(root: Path, text: str) -> None:
    path = root / "config" / "mailcal" / "config.json"
    path.parent.mkdir(parents=True)
    path.write_text(text)


def test_defaults_without_config_file(isolated_env) -> None:
    config = load_config()

    assert config.api_base_url == DEFAULT_API_BASE_URL
    assert config.session_cookie is None
    assert config.request_timeout == DEFAULT_REQUEST_TIMEOUT
    assert config.log_path == isolated_env / "state" / "mailcal" / "mailcal.log"
    assert config.debug is False


def test_config_file_with_trailing_commas(isolated_env) -> None:
    _write_config(
        isolated_env,
        '{"api_base_url": "https://events.example/", "session_cookie": "JSESSIONID=abc", '
        '"request_timeout": "2.5",}',
    )

    config = load_config()

    assert config.api_base_url == "https://events.example"
    assert config.session_cookie == "JSESSIONID=abc"
    assert config.request_timeout == 2.5


def test_environment_overrides_file(isolated_env, monkeypatch) -> None:
    _write_config(isolated_env, '{"api_base_url": "https://events.example"}')
    monkeypatch.setenv("MAILCAL_API_URL", "http://127.0.0.1:8080/")
    monkeypatch.setenv("MAILCAL_SESSION", "SESSION=s3cr3t")
    monkeypatch.setenv("MAILCAL_DEBUG", "true")

    config = load_config()

    assert config.api_base_url == "http://127.0.0.1:8080"
    assert config.session_cookie == "SESSION=s3cr3t"
    assert config.debug is True


def test_invalid_config_falls_back_to_defaults(isolated_env) -> None:
    _write_config(isolated_env, "not json at all")

    config = load_config()

    assert config.api_base_url == DEFAULT_API_BASE_URL
    assert config.request_timeout == DEFAULT_REQUEST_TIMEOUT
