"""Build log management with rotation.

Keeps up to N build logs (``max_log_files`` in ``[tool.dmgs]``):
- build.log (current/most recent)
- build.log.1 (previous)
- build.log.2, build.log.3, ... (older)
"""

import re
from pathlib import Path
from typing import TextIO

DEFAULT_MAX_LOGS = 5

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def get_log_path(log_dir: Path, index: int = 0) -> Path:
    """Path of a log file (index 0 is the current one, 1+ are older)."""
    if index == 0:
        return log_dir / "build.log"
    return log_dir / f"build.log.{index}"


def rotate_logs(log_dir: Path, max_logs: int = DEFAULT_MAX_LOGS) -> None:
    """Shift existing logs up by one, dropping the oldest at the limit.

    Args:
        log_dir: Directory holding the logs
        max_logs: Maximum number of log files to keep
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    oldest = get_log_path(log_dir, max_logs - 1)
    if oldest.exists():
        oldest.unlink()

    for i in range(max_logs - 2, -1, -1):
        current = get_log_path(log_dir, i)
        if current.exists():
            current.rename(get_log_path(log_dir, i + 1))


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    return ANSI_ESCAPE.sub("", text)


class BuildLogger:
    """Writes everything the UI shows to a rotating log file."""

    def __init__(self, log_dir: Path, max_logs: int = DEFAULT_MAX_LOGS) -> None:
        """Initialize the build logger.

        Args:
            log_dir: Directory for build logs
            max_logs: Maximum number of log files to keep
        """
        self.log_dir = log_dir
        self.max_logs = max(max_logs, 1)
        self.log_path = get_log_path(log_dir)
        self._file_handle: TextIO | None = None

    def start(self) -> None:
        """Rotate logs and open a new log file."""
        rotate_logs(self.log_dir, self.max_logs)
        self._file_handle = open(self.log_path, "w", encoding="utf-8")

    def write(self, text: str) -> None:
        """Write text to the log, without ANSI codes."""
        if self._file_handle:
            self._file_handle.write(strip_ansi(text))
            self._file_handle.flush()

    def write_line(self, text: str) -> None:
        """Write a line to the log (newline added if missing)."""
        if not text.endswith("\n"):
            text = text + "\n"
        self.write(text)

    def close(self) -> None:
        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None

    def __enter__(self) -> "BuildLogger":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
