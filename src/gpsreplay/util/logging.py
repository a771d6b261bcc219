# gpsreplay/util/logging.py
from __future__ import annotations

import datetime
from pathlib import Path
from typing import Optional

from gpsreplay.util.paths import ensure_dir

# When set, log lines are appended here instead of printed (curses owns stdout).
_log_file: Optional[Path] = None


def set_log_file(path: Optional[Path]) -> None:
    """Redirect log lines to `path` (None restores printing to stdout)."""
    global _log_file
    if path is not None:
        path = path.expanduser()
        ensure_dir(path.parent)
    _log_file = path


def log(msg: str) -> None:
    """Write a timestamped log line (local time with timezone)."""
    ts = datetime.datetime.now().astimezone().isoformat(timespec="seconds")
    line = f"{ts}  {msg}"
    if _log_file is None:
        print(line)
        return
    with _log_file.open("a", encoding="utf-8") as f:
        f.write(line + "\n")
