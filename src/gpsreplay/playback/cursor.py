# gpsreplay/playback/cursor.py
"""
Playback Cursor

Owns "where in the track we are": the current index, the Playing/Paused flag
and the speed multiplier. Playback runs on track time, so speed 1.0 replays a
recording at the pace it was recorded. Tracks without timestamps get a
uniform timeline of `untimed_step_s` seconds per point.

State machine:

    Paused --play()--> Playing
    Playing --pause()--> Paused
    Playing --tick() past last point--> EndPolicy (default: Paused at last point)

seek()/seek_index()/step()/set_speed() are valid in either state and never
change it.
"""

from __future__ import annotations

import bisect
import enum
import math
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from gpsreplay.errors import InvalidSpeedError


class EndPolicy(enum.Enum):
    PAUSE = "pause"
    LOOP = "loop"
    STOP = "stop"


@dataclass
class PlaybackState:
    current_index: int = 0
    playing: bool = False
    speed: float = 1.0
    last_tick: Optional[float] = None
    position_s: float = 0.0


def build_timeline(
        elapsed: Sequence[Optional[float]], *, untimed_step_s: float = 1.0,
) -> tuple[float, ...]:
    """Per-point playback times: elapsed seconds, or a uniform step if untimed."""
    if elapsed and all(e is not None for e in elapsed):
        return tuple(elapsed)
    return tuple(i * untimed_step_s for i in range(len(elapsed)))


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


class PlaybackCursor:

    def __init__(
            self,
            timeline: Sequence[float], *,
            speed: float = 1.0,
            end_policy: EndPolicy = EndPolicy.PAUSE,
            clock: Callable[[], float] = time.monotonic,
    ):
        if not timeline:
            raise ValueError("timeline must contain at least one point")
        self._timeline = tuple(timeline)
        self._clock = clock
        self.end_policy = end_policy
        self.state = PlaybackState()
        self.set_speed(speed)

    # -- read-only accessors ---------------------------------------------

    @property
    def index(self) -> int:
        return self.state.current_index

    @property
    def playing(self) -> bool:
        return self.state.playing

    @property
    def speed(self) -> float:
        return self.state.speed

    @property
    def last_index(self) -> int:
        return len(self._timeline) - 1

    @property
    def progress(self) -> float:
        """current_index / (length - 1); a one-point track is complete."""
        if self.last_index == 0:
            return 1.0
        return self.state.current_index / self.last_index

    # -- transitions ------------------------------------------------------

    def play(self) -> None:
        if self.state.playing:
            return
        if self.state.current_index == self.last_index and self.end_policy is not EndPolicy.LOOP:
            self._move_to(0)
        self.state.playing = True
        self.state.last_tick = self._clock()

    def pause(self) -> None:
        if not self.state.playing:
            return
        self.state.playing = False
        self.state.last_tick = None

    def toggle(self) -> None:
        if self.state.playing:
            self.pause()
        else:
            self.play()

    def tick(self, now: Optional[float] = None) -> int:
        """Advance along the timeline by the wall time since the last tick."""
        st = self.state
        if not st.playing:
            return st.current_index
        if now is None:
            now = self._clock()
        if st.last_tick is None:
            st.last_tick = now
            return st.current_index

        delta = max(0.0, now - st.last_tick) * st.speed
        st.last_tick = now
        st.position_s += delta

        end = self._timeline[-1]
        if st.position_s >= end:
            self._at_end()
            return st.current_index

        # last point whose timeline time is <= position
        idx = bisect.bisect_right(self._timeline, st.position_s) - 1
        st.current_index = min(max(idx, 0), self.last_index)
        return st.current_index

    def _at_end(self) -> None:
        st = self.state
        if self.end_policy is EndPolicy.LOOP and self.last_index > 0:
            self._move_to(0)
            return
        if self.end_policy is EndPolicy.STOP:
            self._move_to(0)
        else:
            self._move_to(self.last_index)
        st.playing = False
        st.last_tick = None

    def _move_to(self, index: int) -> None:
        self.state.current_index = index
        self.state.position_s = self._timeline[index]

    def seek(self, fraction: float) -> int:
        """Jump to round(fraction * (length - 1)); fraction is clamped to [0, 1], NaN is ignored."""
        fraction = float(fraction)
        if math.isnan(fraction):
            return self.state.current_index
        fraction = min(max(fraction, 0.0), 1.0)
        self._move_to(_round_half_up(fraction * self.last_index))
        return self.state.current_index

    def seek_index(self, index: int) -> int:
        self._move_to(min(max(int(index), 0), self.last_index))
        return self.state.current_index

    def step(self, delta: int) -> int:
        return self.seek_index(self.state.current_index + delta)

    def set_speed(self, multiplier: float) -> None:
        """Raises InvalidSpeedError (keeping the old speed) unless 0 < multiplier < inf."""
        try:
            m = float(multiplier)
        except (TypeError, ValueError):
            raise InvalidSpeedError(f"Invalid playback speed: {multiplier!r}") from None
        if not math.isfinite(m) or m <= 0:
            raise InvalidSpeedError(f"Playback speed must be > 0, got {multiplier!r}")
        self.state.speed = m

    def reset(self) -> None:
        self.state = PlaybackState(speed=self.state.speed)
