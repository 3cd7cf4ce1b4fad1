"""AppSettings tests: entorno con prefijo y .env del usuario."""

import pytest
from pydantic import ValidationError

from core.config import AppSettings, _parse_env_lines, get_user_env_file, write_user_env_vars


def test_defaults_without_environment():
    settings = AppSettings(_env_file=None)
    assert settings.api_base_url is None
    assert settings.http_timeout_seconds == 30.0
    assert settings.log_level == "WARNING"


def test_base_url_from_environment(monkeypatch):
    monkeypatch.setenv("DOJO_ADMIN_API_BASE_URL", "http://localhost:3000")
    assert AppSettings(_env_file=None).api_base_url == "http://localhost:3000"


def test_project_env_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("DOJO_ADMIN_API_BASE_URL=http://from-dotenv:3000\n", encoding="utf-8")
    assert AppSettings().api_base_url == "http://from-dotenv:3000"


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, http_timeout_seconds=0)


def test_write_user_env_vars_merges_existing():
    write_user_env_vars({"DOJO_ADMIN_API_BASE_URL": "http://a"})
    path = write_user_env_vars({"DOJO_ADMIN_LOG_LEVEL": "DEBUG"})

    assert path == get_user_env_file()
    assert _parse_env_lines(path.read_text(encoding="utf-8")) == {
        "DOJO_ADMIN_API_BASE_URL": "http://a",
        "DOJO_ADMIN_LOG_LEVEL": "DEBUG",
    }


def test_parse_env_lines_skips_comments_and_quotes():
    text = "# comment\n\nKEY='value'\nBROKEN\nOTHER = \"x=y\"\n"
    assert _parse_env_lines(text) == {"KEY": "value", "OTHER": "x=y"}


def test_write_user_env_vars_overwrites_unreadable_file():
    env_file = get_user_env_file()
    env_file.parent.mkdir(parents=True, exist_ok=True)
    env_file.write_bytes(b"\xff\xfeDOJO=\x80\n")

    path = write_user_env_vars({"DOJO_ADMIN_API_BASE_URL": "http://a"})

    assert _parse_env_lines(path.read_text(encoding="utf-8")) == {"DOJO_ADMIN_API_BASE_URL": "http://a"}
