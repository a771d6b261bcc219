"""
gpsreplay configuration loader

This module centralizes *all* configuration handling for gpsreplay.

Design goals:
- CLI flags override everything.
- Provide sensible defaults if no config exists.
- Allow per-machine config without committing personal paths:
    ~/.config/gpsreplay/config.toml
- Allow repo-local config:
    <repo_root>/config/config.toml
- Allow environment variable overrides for automation.

Precedence (highest to lowest) for any given value:
1) CLI argument (handled by gpsreplay.cli)
2) Environment variables (GPSREPLAY_*)
3) User config: ~/.config/gpsreplay/config.toml
4) Repo config: <repo_root>/config/config.toml
5) Hard defaults

Example config.toml:

    [paths]
    work_root = "~/GPS/_work"
    log_file = "~/.cache/gpsreplay/gpsreplay.log"

    [playback]
    tick_ms = 100
    speed = 1.0
    end_policy = "pause"      # pause | loop | stop
    untimed_step_s = 1.0

    [viewport]
    margin = 0.05
    cell_aspect = 2.0

    [profile]
    default = "speed"         # speed | elevation | distance | latitude | longitude

This module uses Python's built-in tomllib on Python 3.11+, or `tomli` if installed.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from gpsreplay.errors import ConfigError

# ---------------------------------------------------------------------------
# TOML loading helpers
# ---------------------------------------------------------------------------
def _load_toml(path: Path) -> dict[str, Any]:
    """
    Parse a TOML file at `path`.

    Behavior:
    - If the file does not exist, return an empty dict (non-fatal).
    - If the file exists but is invalid TOML, raise a ConfigError
      with a clear, user-facing message.
    """
    if not path.is_file():
        return {}

    try:
        try:
            # Python 3.11+ standard library
            import tomllib
            return tomllib.loads(path.read_text(encoding="utf-8")) or {}
        except ModuleNotFoundError:
            import tomli
            return tomli.loads(path.read_text(encoding="utf-8")) or {}
    except (OSError, ValueError) as e:
        # TOMLDecodeError is a ValueError subclass in both tomllib and tomli
        raise ConfigError(f"Failed to parse TOML config: {path} ({e})") from e


# ---------------------------------------------------------------------------
# Generic coercion helpers
# ---------------------------------------------------------------------------
def _deep_get(d: dict[str, Any], dotted_key: str) -> Any:
    """
    Fetch nested dictionary values using dot-separated keys.

    Example:
        _deep_get(cfg, "playback.tick_ms")

    Returns None if any part of the path is missing.
    """
    cur: Any = d
    for part in dotted_key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _as_path(v: Any) -> Optional[Path]:
    """
    Coerce a config value into a pathlib.Path if possible.

    Returns None if value cannot be interpreted as a path.
    """
    if v is None:
        return None
    if isinstance(v, Path):
        return v.expanduser()
    if isinstance(v, str) and v.strip():
        return Path(v).expanduser()
    return None


def _as_float(v: Any, *, minimum: float = 0.0) -> Optional[float]:
    """
    Coerce a config value into a finite float strictly above `minimum`.

    Strings are accepted so environment variables behave like TOML numbers.
    Returns None for anything unusable, letting the caller keep its default.
    """
    if v is None or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(f) or f <= minimum:
        return None
    return f


def _as_choice(v: Any, choices: tuple[str, ...]) -> Optional[str]:
    """Return the lower-cased value if it is one of `choices`, else None."""
    if not isinstance(v, str):
        return None
    s = v.strip().lower()
    return s if s in choices else None


def _env_path(var: str) -> Optional[Path]:
    """
    Read an environment variable and interpret it as a Path.

    Used for automation, CI, and power-user overrides.
    """
    val = os.environ.get(var)
    return Path(val).expanduser() if val else None


# ---------------------------------------------------------------------------
# Repo discovery + defaults
# ---------------------------------------------------------------------------
def find_repo_root(start: Path) -> Optional[Path]:
    """
    Walk upward from `start` looking for the repo root.

    Heuristic:
    - The presence of a `config/` directory marks the repo root
    """
    start = start.resolve()
    for p in [start] + list(start.parents):
        if (p / "config").is_dir():
            return p
    return None


END_POLICIES = ("pause", "loop", "stop")
PROFILE_NAMES = ("speed", "elevation", "distance", "latitude", "longitude")


# ---------------------------------------------------------------------------
# Typed config dataclasses
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ReplayPaths:
    """
    Canonical resolved filesystem paths used by gpsreplay.
    """

    work_root: Path
    log_file: Path


@dataclass(frozen=True)
class PlaybackConfig:
    """
    Playback clock and cursor behaviour.

    - tick_ms: interval between clock ticks in the terminal UI
    - speed: initial playback speed multiplier (track-time scaled)
    - end_policy: what happens when playback reaches the last point
    - untimed_step_s: timeline spacing per point for tracks without timestamps
    """

    tick_ms: float = 100.0
    speed: float = 1.0
    end_policy: str = "pause"
    untimed_step_s: float = 1.0


@dataclass(frozen=True)
class ViewportConfig:
    """
    Route projection settings.

    - margin: fraction of the route span added on every side
    - cell_aspect: height of one drawing row relative to one column
    """

    margin: float = 0.05
    cell_aspect: float = 2.0


@dataclass(frozen=True)
class ReplayConfig:
    """
    Fully merged gpsreplay configuration.

    Attributes:
    - paths: resolved filesystem layout
    - playback / viewport: engine settings
    - default_profile: profile shown after load
    - source: provenance map showing where each value came from
    """

    paths: ReplayPaths
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    viewport: ViewportConfig = field(default_factory=ViewportConfig)
    default_profile: str = "speed"
    source: dict[str, str] = field(default_factory=dict)


def default_config() -> ReplayConfig:
    """Configuration built purely from hard defaults (no files, no env)."""
    return ReplayConfig(
        paths=ReplayPaths(
            work_root=Path.home() / "GPS" / "_work",
            log_file=Path.home() / ".cache" / "gpsreplay" / "gpsreplay.log",
        ),
    )


# ---------------------------------------------------------------------------
# Main config loader
# ---------------------------------------------------------------------------
def load_config(
    repo_root: Optional[Path] = None,
    repo_config_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
) -> ReplayConfig:
    """
    Load, merge, and normalize all gpsreplay configuration.

    This function is the single authoritative entry point
    for configuration access.
    """

    # Locate repo and config files
    if repo_root is None:
        repo_root = find_repo_root(Path(__file__).resolve())
    if repo_config_path is None and repo_root is not None:
        repo_config_path = repo_root / "config" / "config.toml"
    if user_config_path is None:
        user_config_path = Path.home() / ".config" / "gpsreplay" / "config.toml"

    # Load raw TOML dicts
    repo_cfg = _load_toml(repo_config_path) if repo_config_path else {}
    user_cfg = _load_toml(user_config_path) if user_config_path else {}

    defaults = default_config()
    values: dict[str, Any] = {
        "paths.work_root": defaults.paths.work_root,
        "paths.log_file": defaults.paths.log_file,
        "playback.tick_ms": defaults.playback.tick_ms,
        "playback.speed": defaults.playback.speed,
        "playback.end_policy": defaults.playback.end_policy,
        "playback.untimed_step_s": defaults.playback.untimed_step_s,
        "viewport.margin": defaults.viewport.margin,
        "viewport.cell_aspect": defaults.viewport.cell_aspect,
        "profile.default": defaults.default_profile,
    }

    # Track provenance for debugging
    src = {k: "default" for k in values}

    def coerce(key: str, raw: Any) -> Any:
        if key.startswith("paths."):
            return _as_path(raw)
        if key == "playback.end_policy":
            return _as_choice(raw, END_POLICIES)
        if key == "profile.default":
            return _as_choice(raw, PROFILE_NAMES)
        if key == "viewport.margin":
            # 0 is a valid margin
            m = _as_float(raw, minimum=-1.0)
            return m if m is not None and m >= 0.0 else None
        return _as_float(raw)

    # ------------------------------------------------------------------
    # Repo + user overrides (user wins)
    # ------------------------------------------------------------------
    for cfg, label, path in ((repo_cfg, "repo", repo_config_path), (user_cfg, "user", user_config_path)):
        for key in values:
            v = coerce(key, _deep_get(cfg, key))
            if v is None:
                continue
            values[key] = v
            src[key] = f"{label}:{path}"

    # Environment variable overrides (highest non-CLI precedence)
    env_map = {
        "GPSREPLAY_WORK_ROOT": "paths.work_root",
        "GPSREPLAY_LOG_FILE": "paths.log_file",
        "GPSREPLAY_TICK_MS": "playback.tick_ms",
        "GPSREPLAY_END_POLICY": "playback.end_policy",
    }

    for env, key in env_map.items():
        if key.startswith("paths."):
            v = _env_path(env)
        else:
            v = coerce(key, os.environ.get(env))
        if v is None:
            continue
        values[key] = v
        src[key] = f"env:{env}"

    return ReplayConfig(
        paths=ReplayPaths(
            work_root=values["paths.work_root"].expanduser(),
            log_file=values["paths.log_file"].expanduser(),
        ),
        playback=PlaybackConfig(
            tick_ms=values["playback.tick_ms"],
            speed=values["playback.speed"],
            end_policy=values["playback.end_policy"],
            untimed_step_s=values["playback.untimed_step_s"],
        ),
        viewport=ViewportConfig(
            margin=values["viewport.margin"],
            cell_aspect=values["viewport.cell_aspect"],
        ),
        default_profile=values["profile.default"],
        source=src,
    )
