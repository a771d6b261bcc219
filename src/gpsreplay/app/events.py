# gpsreplay/app/events.py
"""
User input and clock events understood by a Session.

How these are bound to keys is up to the front end (see gpsreplay.tui).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Play:
    pass

@dataclass(frozen=True)
class Pause:
    pass

@dataclass(frozen=True)
class TogglePlay:
    pass

@dataclass(frozen=True)
class SeekFraction:
    fraction: float

@dataclass(frozen=True)
class SeekIndex:
    index: int

@dataclass(frozen=True)
class Step:
    delta: int

@dataclass(frozen=True)
class NextProfile:
    pass

@dataclass(frozen=True)
class PreviousProfile:
    pass

@dataclass(frozen=True)
class ToggleAxis:
    pass

@dataclass(frozen=True)
class SetSpeed:
    multiplier: float

@dataclass(frozen=True)
class Resize:
    width: int
    height: int

@dataclass(frozen=True)
class Pan:
    dx: float
    dy: float

@dataclass(frozen=True)
class Zoom:
    factor: float

@dataclass(frozen=True)
class ResetView:
    pass

@dataclass(frozen=True)
class Rewind:
    pass

@dataclass(frozen=True)
class Tick:
    now: Optional[float] = None


Event = Union[
    Play, Pause, TogglePlay, SeekFraction, SeekIndex, Step,
    NextProfile, PreviousProfile, ToggleAxis, SetSpeed,
    Rewind, Resize, Pan, Zoom, ResetView, Tick,
]
