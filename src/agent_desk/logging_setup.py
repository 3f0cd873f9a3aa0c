# src/agent_desk/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "agent-desk.log"

# Lowest level shown on the console per logger prefix; first match wins.
# The API client logs one line per request, httpx/httpcore even more.
_CONSOLE_THRESHOLDS: tuple[tuple[str, int], ...] = (
    ("agent_desk.api.", logging.WARNING),
    ("agent_desk.", logging.NOTSET),
    ("httpx", logging.WARNING),
    ("httpcore", logging.WARNING),
)


def console_threshold(logger_name: str) -> int:
    for prefix, level in _CONSOLE_THRESHOLDS:
        if logger_name.startswith(prefix):
            return level
    # Captured warnings ('py.warnings') and every other library.
    return logging.ERROR


class _DashboardConsoleFilter(logging.Filter):
    """Keeps the prompt readable while the dashboard talks to the backend."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= console_threshold(record.name)


def setup_logging(
    *,
    log_dir: str | Path = ".local/agent-desk",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route all logs to stderr (filtered) and to `<log_dir>/agent-desk.log` (unfiltered).

    Replaces whatever handlers the root logger had. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    console.addFilter(_DashboardConsoleFilter())

    logfile = logging.FileHandler(str(log_file), encoding="utf-8")
    logfile.setLevel(file_level)
    logfile.setFormatter(formatter)

    root.addHandler(console)
    root.addHandler(logfile)

    logging.captureWarnings(True)
    return log_file
