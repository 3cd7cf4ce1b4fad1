"""TokenStore tests: la sesión vive solo en el llamador (CLI)."""

import os
import sys

import pytest

from cli.token_store import StoredSession, TokenStore, default_token_path


def test_load_without_file_returns_none(tmp_path):
    assert TokenStore(tmp_path / "session.json").load() is None


def test_save_and_load_roundtrip(tmp_path):
    store = TokenStore(tmp_path / "nested" / "session.json")
    path = store.save(StoredSession(access_token="tok", email="a@example.com"))

    assert path.exists()
    assert store.load() == StoredSession(access_token="tok", email="a@example.com")


@pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX permissions")
def test_saved_file_is_private(tmp_path):
    path = TokenStore(tmp_path / "session.json").save(StoredSession(access_token="tok"))
    assert os.stat(path).st_mode & 0o777 == 0o600


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    assert TokenStore(path).load() is None


def test_clear_reports_whether_a_session_existed(tmp_path):
    store = TokenStore(tmp_path / "session.json")
    assert store.clear() is False
    store.save(StoredSession(access_token="tok"))
    assert store.clear() is True
    assert store.load() is None


@pytest.mark.skipif(sys.platform.startswith("win") or sys.platform == "darwin", reason="XDG layout")
def test_default_path_uses_user_config_dir(tmp_path):
    assert default_token_path() == tmp_path / "xdg" / "dojo-admin" / "session.json"
