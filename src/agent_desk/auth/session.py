# src/agent_desk/auth/session.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> dict[str, Any]:
    raw = path.read_text("utf-8")
    val = json.loads(raw)
    if isinstance(val, dict):
        return val
    raise ValueError("Expected JSON object")


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    tmp = path.with_suffix(".tmp")
    tmp.write_text(json.dumps(data, ensure_ascii=False), "utf-8")
    os.replace(tmp, path)
    with contextlib.suppress(OSError):
        # Best-effort: not critical on Windows or restricted FS.
        os.chmod(path, 0o600)


class SessionStore:
    """
    Holds the opaque bearer credential.

    The token comes from the environment (never persisted by us) or from
    session.json under the local data dir. The file contains a secret and
    must live under a gitignored directory.
    """

    def __init__(self, path: Path, *, env_token: str | None = None) -> None:
        self.path = Path(path)
        self._env_token = env_token
        self._token: str | None = None
        self._loaded = False

    def _load(self) -> None:
        self._loaded = True
        if not self.path.exists():
            return
        try:
            data = _load_json(self.path)
        except (OSError, ValueError):
            logger.warning("Failed to read session file %s; ignoring it", self.path, exc_info=True)
            return
        token = data.get("token")
        if isinstance(token, str) and token.strip():
            self._token = token.strip()

    @property
    def token(self) -> str | None:
        if self._env_token:
            return self._env_token
        if not self._loaded:
            self._load()
        return self._token

    def save(self, token: str) -> None:
        token = token.strip()
        if not token:
            raise ValueError("empty token")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        _atomic_write_json(self.path, {"token": token})
        self._token = token
        self._loaded = True
        logger.info("Session credential saved to %s", self.path)

    def clear(self) -> None:
        self._env_token = None
        self._token = None
        self._loaded = True
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        logger.info("Session credential removed from %s", self.path)
