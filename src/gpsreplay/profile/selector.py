# gpsreplay/profile/selector.py
"""
Profile Selector

Maps a ProfileKind to a read-only view over one precomputed metric column,
plus its label, unit and cached value range. All views are built once when
the selector is created; switching is a dictionary lookup.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from gpsreplay.analyze.metrics import Column, MetricTable


class ProfileKind(enum.Enum):
    SPEED = "speed"
    ELEVATION = "elevation"
    DISTANCE = "distance"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"


class AxisKind(enum.Enum):
    TIME = "time"
    DISTANCE = "distance"


# kind -> (MetricTable column, label, unit)
_PROFILE_COLUMNS: dict[ProfileKind, tuple[str, str, str]] = {
    ProfileKind.SPEED: ("speed", "Speed", "m/s"),
    ProfileKind.ELEVATION: ("elevation", "Elevation", "m"),
    ProfileKind.DISTANCE: ("distance", "Distance", "m"),
    ProfileKind.LATITUDE: ("latitude", "Latitude", "deg"),
    ProfileKind.LONGITUDE: ("longitude", "Longitude", "deg"),
}

_AXIS_COLUMNS: dict[AxisKind, tuple[str, str, str]] = {
    AxisKind.TIME: ("elapsed", "Time", "s"),
    AxisKind.DISTANCE: ("distance", "Distance", "m"),
}


@dataclass(frozen=True)
class ProfileView:
    kind: ProfileKind
    label: str
    unit: str
    values: Column
    value_range: Optional[tuple[float, float]]

    def value_at(self, index: int) -> Optional[float]:
        return self.values[index]

    @property
    def title(self) -> str:
        return f"{self.label} [{self.unit}]"


@dataclass(frozen=True)
class AxisView:
    kind: AxisKind
    label: str
    unit: str
    values: Column
    value_range: Optional[tuple[float, float]]


class ProfileSelector:
    """Holds the active profile and x axis; never touches playback state."""

    def __init__(self, table: MetricTable, initial: ProfileKind = ProfileKind.SPEED):
        columns = {
            "speed": table.speed,
            "elevation": table.elevation,
            "distance": table.distance,
            "latitude": table.latitude,
            "longitude": table.longitude,
            "elapsed": table.elapsed,
        }
        self._views = {
            kind: ProfileView(
                kind=kind,
                label=label,
                unit=unit,
                values=columns[column],
                value_range=table.ranges[column],
            )
            for kind, (column, label, unit) in _PROFILE_COLUMNS.items()
        }
        self._axes = {
            axis: AxisView(
                kind=axis,
                label=label,
                unit=unit,
                values=columns[column],
                value_range=table.ranges[column],
            )
            for axis, (column, label, unit) in _AXIS_COLUMNS.items()
        }
        self._order = list(ProfileKind)
        self._timed = table.timed
        self.kind = initial
        self.axis = AxisKind.TIME if table.timed else AxisKind.DISTANCE

    @property
    def current(self) -> ProfileView:
        return self._views[self.kind]

    @property
    def x_axis(self) -> AxisView:
        return self._axes[self.axis]

    def select(self, kind: ProfileKind) -> ProfileView:
        self.kind = kind
        return self._views[kind]

    def _cycle(self, step: int) -> ProfileView:
        i = self._order.index(self.kind)
        return self.select(self._order[(i + step) % len(self._order)])

    def next(self) -> ProfileView:
        return self._cycle(1)

    def previous(self) -> ProfileView:
        return self._cycle(-1)

    def toggle_axis(self) -> AxisView:
        """Switch between time and distance; untimed tracks stay on distance."""
        if self._timed and self.axis is AxisKind.DISTANCE:
            self.axis = AxisKind.TIME
        else:
            self.axis = AxisKind.DISTANCE
        return self.x_axis
