# gpsreplay/analyze/metrics.py
"""
Metric Engine for gpsreplay

Derives, in one pass, the per-point metric table for a loaded Track:
cumulative distance, elapsed time, instantaneous speed, elevation and
elevation gain/loss.

"No value" is always None, never 0.0. A speed of 0.0 means the receiver did
not move between two distinct timestamps; None means the speed could not be
measured (first point, duplicate or backwards timestamp, untimed track).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from haversine import haversine, Unit

from gpsreplay.track.store import Track
from gpsreplay.util.logging import log

Column = tuple[Optional[float], ...]


@dataclass(frozen=True)
class PointMetrics:
    distance_m: float
    elapsed_s: Optional[float]
    speed_mps: Optional[float]
    elevation_m: Optional[float]
    elevation_delta_m: Optional[float]
    elevation_gain_m: float
    elevation_loss_m: float


def value_range(values: Sequence[Optional[float]]) -> Optional[tuple[float, float]]:
    """(min, max) over the defined values, or None if there are none."""
    defined = [v for v in values if v is not None]
    if not defined:
        return None
    return min(defined), max(defined)


@dataclass(frozen=True)
class MetricTable:
    """
    Immutable metric table aligned 1:1 with the Track it was computed from.

    Columns are exposed as tuples so views over them cannot be mutated, and
    their value ranges are cached once here rather than on every lookup.
    """
    points: tuple[PointMetrics, ...]
    timed: bool
    distance: Column
    elapsed: Column
    speed: Column
    elevation: Column
    latitude: Column
    longitude: Column
    ranges: dict[str, Optional[tuple[float, float]]]

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, index: int) -> PointMetrics:
        return self.points[index]

    @property
    def total_distance_m(self) -> float:
        return self.points[-1].distance_m

    @property
    def duration_s(self) -> Optional[float]:
        return self.points[-1].elapsed_s

    @property
    def elevation_gain_m(self) -> float:
        return self.points[-1].elevation_gain_m

    @property
    def elevation_loss_m(self) -> float:
        return self.points[-1].elevation_loss_m


def compute(track: Track) -> MetricTable:
    """Compute the metric table for `track` (O(n), never fails for a loaded Track)."""
    timed = track.is_timed

    points: list[PointMetrics] = []
    distance = 0.0
    elapsed = 0.0 if timed else None
    gain = 0.0
    loss = 0.0
    backwards = 0

    prev = None
    for p in track:
        if prev is None:
            points.append(PointMetrics(
                distance_m=0.0,
                elapsed_s=elapsed,
                speed_mps=None,
                elevation_m=p.ele,
                elevation_delta_m=None,
                elevation_gain_m=0.0,
                elevation_loss_m=0.0,
            ))
            prev = p
            continue

        d_m = haversine((prev.lat, prev.lon), (p.lat, p.lon), unit=Unit.METERS, normalize=True)
        distance += d_m

        speed = None
        if timed:
            dt_s = (p.time - prev.time).total_seconds()
            if dt_s < 0:
                # Non-monotonic time: hold elapsed time, leave speed undefined.
                backwards += 1
            else:
                elapsed += dt_s
                if dt_s > 0:
                    speed = d_m / dt_s

        ele_delta = None
        if p.ele is not None and prev.ele is not None:
            ele_delta = p.ele - prev.ele
            if ele_delta > 0:
                gain += ele_delta
            else:
                loss -= ele_delta

        points.append(PointMetrics(
            distance_m=distance,
            elapsed_s=elapsed,
            speed_mps=speed,
            elevation_m=p.ele,
            elevation_delta_m=ele_delta,
            elevation_gain_m=gain,
            elevation_loss_m=loss,
        ))
        prev = p

    if backwards:
        log(f"Warning: {backwards} sample(s) with backwards timestamps; speed left undefined there")

    columns = {
        "distance": tuple(m.distance_m for m in points),
        "elapsed": tuple(m.elapsed_s for m in points),
        "speed": tuple(m.speed_mps for m in points),
        "elevation": tuple(m.elevation_m for m in points),
        "latitude": tuple(s.lat for s in track),
        "longitude": tuple(s.lon for s in track),
    }

    return MetricTable(
        points=tuple(points),
        timed=timed,
        ranges={name: value_range(col) for name, col in columns.items()},
        **columns,
    )
