# gpsreplay/track/store.py
"""
Track Store: the immutable, ordered sequence of raw GPS samples.

A Track is built exactly once per session by `load()`. Everything downstream
(metrics, profiles, playback, projection) only reads it.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from gpsreplay.errors import EmptyTrackError, MalformedSampleError
from gpsreplay.util.logging import log


@dataclass(frozen=True)
class RawSample:
    """One recorded GPS fix. Elevation and time may be absent."""
    lat: Optional[float]
    lon: Optional[float]
    ele: Optional[float] = None
    time: Optional[dt.datetime] = None


@dataclass(frozen=True)
class GeoBounds:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @property
    def mid_lat(self) -> float:
        return (self.min_lat + self.max_lat) / 2.0


@dataclass(frozen=True)
class Track:
    """Non-empty, recording-ordered samples. Construct via `load()`."""
    samples: tuple[RawSample, ...]

    def __len__(self) -> int:
        return len(self.samples)

    def __getitem__(self, index: int) -> RawSample:
        return self.samples[index]

    def __iter__(self) -> Iterator[RawSample]:
        return iter(self.samples)

    @property
    def last_index(self) -> int:
        return len(self.samples) - 1

    @property
    def is_timed(self) -> bool:
        """True only if every sample carries a timestamp."""
        return all(s.time is not None for s in self.samples)

    @property
    def bounds(self) -> GeoBounds:
        lats = [s.lat for s in self.samples]
        lons = [s.lon for s in self.samples]
        return GeoBounds(min(lats), max(lats), min(lons), max(lons))


def _missing(v: Optional[float]) -> bool:
    return v is None or (isinstance(v, float) and math.isnan(v))


def load(parsed_points: Iterable[RawSample]) -> Track:
    """
    Validate parser output and freeze it into a Track.

    Raises:
      EmptyTrackError       if there are no samples
      MalformedSampleError  if a sample lacks latitude or longitude

    Out-of-range coordinates are accepted as-is; only the renderer clamps.
    """
    samples = tuple(parsed_points)
    if not samples:
        raise EmptyTrackError("Track contains no points")

    for i, s in enumerate(samples):
        lat_missing = _missing(s.lat)
        lon_missing = _missing(s.lon)
        if lat_missing and lon_missing:
            raise MalformedSampleError(i, "no latitude or longitude")
        if lat_missing:
            raise MalformedSampleError(i, "no latitude")
        if lon_missing:
            raise MalformedSampleError(i, "no longitude")

    track = Track(samples=samples)
    log(f"Loaded track: {len(track)} point(s), timed={track.is_timed}")
    return track
