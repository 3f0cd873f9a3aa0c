# tests/test_config_and_session.py

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from agent_desk.auth.session import SessionStore
from agent_desk.config import Settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("AGENT_DESK_"):
            monkeypatch.delenv(name)

    s = Settings.from_env()

    assert s.page_size == 10
    assert s.api_token is None
    assert s.http_timeout_seconds is None
    assert s.session_path == s.data_dir / "session.json"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("AGENT_DESK_API_BASE_URL", "https://api.example.com/")
    monkeypatch.setenv("AGENT_DESK_API_TOKEN", " abc ")
    monkeypatch.setenv("AGENT_DESK_PAGE_SIZE", "0")
    monkeypatch.setenv("AGENT_DESK_HTTP_TIMEOUT_SECONDS", "7.5")
    monkeypatch.setenv("AGENT_DESK_DATA_DIR", str(tmp_path))

    s = Settings.from_env()

    assert s.api_base_url == "https://api.example.com"
    assert s.api_token == "abc"
    assert s.page_size == 1
    assert s.http_timeout_seconds == 7.5
    assert s.session_path == tmp_path / "session.json"


def test_settings_ignore_garbage_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AGENT_DESK_PAGE_SIZE", "ten")
    monkeypatch.setenv("AGENT_DESK_HTTP_TIMEOUT_SECONDS", "-1")

    s = Settings.from_env()

    assert s.page_size == 10
    assert s.http_timeout_seconds is None


def test_session_store_save_load_clear(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "session.json"
    store = SessionStore(path)
    assert store.token is None

    store.save("  tok-1 ")
    assert store.token == "tok-1"
    if os.name == "posix":
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    # A fresh store reads the file back.
    assert SessionStore(path).token == "tok-1"

    store.clear()
    assert store.token is None
    assert not path.exists()


def test_env_token_wins_over_file(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    SessionStore(path).save("from-file")

    assert SessionStore(path, env_token="from-env").token == "from-env"


def test_corrupt_session_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text("[not an object", "utf-8")

    assert SessionStore(path).token is None


def test_empty_token_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        SessionStore(tmp_path / "session.json").save("   ")
