# gpsreplay/util/paths.py
from __future__ import annotations

from pathlib import Path
from shutil import which as _which
from typing import Optional


def ensure_dir(path: Path) -> None:
    """Ensure a directory exists."""
    path.mkdir(parents=True, exist_ok=True)

def which(cmd: str) -> Optional[str]:
    return _which(cmd)

def list_gpx_candidates(root: Path) -> list[Path]:
    """Return every *.gpx file under `root`, sorted (empty if root is missing)."""
    if not root.is_dir():
        return []
    return sorted(p for p in root.rglob("*.gpx") if p.is_file())
