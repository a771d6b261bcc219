# gpsreplay/analyze/track.py
"""
Track analysis functions for gpsreplay
"""

from __future__ import annotations

from pathlib import Path

from gpsreplay.analyze.metrics import MetricTable, compute
from gpsreplay.formats.gpx import extract_samples, read_gpx
from gpsreplay.track.store import Track, load


def load_gpx_track(gpx_path: Path) -> Track:
    """Read a GPX file and load its first track. Raises LoadError subclasses."""
    tree = read_gpx(gpx_path)
    return load(extract_samples(tree))


def summarize(table: MetricTable) -> dict:
    """Whole-track statistics derived from an already computed metric table."""
    speeds = [v for v in table.speed if v is not None]
    duration = table.duration_s

    stats = {
        "points": len(table),
        "segments": len(speeds),
        "distance_m": table.total_distance_m,
        "duration_s": duration,
        "avg_speed_mps": None,
        "max_speed_mps": max(speeds) if speeds else None,
        "elevation_gain_m": table.elevation_gain_m,
        "elevation_loss_m": table.elevation_loss_m,
    }
    if duration:
        stats["avg_speed_mps"] = table.total_distance_m / duration
    return stats


def analyze_track(gpx_path: Path) -> dict:
    return summarize(compute(load_gpx_track(gpx_path)))
