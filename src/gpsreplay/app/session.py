# gpsreplay/app/session.py
"""
Session: one loaded track plus everything needed to replay it.

The session owns the mutable playback state and viewport and hands them to
the core components one call at a time; nothing here blocks or spawns work,
so a single UI loop can drive it directly.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from gpsreplay.analyze.metrics import MetricTable, compute as compute_metrics
from gpsreplay.app import events as ev
from gpsreplay.config import ReplayConfig, default_config
from gpsreplay.errors import InvalidSpeedError
from gpsreplay.playback.cursor import EndPolicy, PlaybackCursor, build_timeline
from gpsreplay.profile.selector import AxisKind, AxisView, ProfileKind, ProfileSelector, ProfileView
from gpsreplay.track.store import RawSample, Track, load as load_track
from gpsreplay.util.logging import log
from gpsreplay.visualize.viewport import DrawCommands, Viewport, ViewportProjector


@dataclass(frozen=True)
class Frame:
    """Everything a renderer needs for one frame."""
    draw: DrawCommands
    progress: float
    profile: ProfileView
    profile_kind: ProfileKind
    x_axis: AxisView
    current_value: Optional[float]
    current_index: int
    length: int
    playing: bool
    speed: float
    notice: Optional[str] = None


class Session:

    def __init__(
            self,
            track: Track,
            table: MetricTable,
            config: ReplayConfig, *,
            width: int = 80,
            height: int = 24,
            clock: Callable[[], float] = time.monotonic,
    ):
        self.track = track
        self.table = table
        self.config = config

        self.profiles = ProfileSelector(table, ProfileKind(config.default_profile))
        self.cursor = PlaybackCursor(
            build_timeline(table.elapsed, untimed_step_s=config.playback.untimed_step_s),
            speed=config.playback.speed,
            end_policy=EndPolicy(config.playback.end_policy),
            clock=clock,
        )
        self.viewport = Viewport(
            width=width,
            height=height,
            bounds=track.bounds,
            cell_aspect=config.viewport.cell_aspect,
        )
        self.projector = ViewportProjector(self.viewport.bounds, margin=config.viewport.margin)
        self.projector.resize(self.viewport, width, height)
        self.notice: Optional[str] = None

    @classmethod
    def from_samples(
            cls,
            samples: Iterable[RawSample],
            config: Optional[ReplayConfig] = None, **kwargs,
    ) -> "Session":
        """Load samples and compute their metrics once. Raises LoadError subclasses."""
        track = load_track(samples)
        table = compute_metrics(track)
        return cls(track, table, config or default_config(), **kwargs)

    # -- events -----------------------------------------------------------

    def handle(self, event: ev.Event) -> None:
        # transient notices last until the next user action
        if not isinstance(event, ev.Tick):
            self.notice = None

        cursor = self.cursor
        if isinstance(event, ev.Tick):
            cursor.tick(event.now)
        elif isinstance(event, ev.Play):
            cursor.play()
        elif isinstance(event, ev.Pause):
            cursor.pause()
        elif isinstance(event, ev.TogglePlay):
            cursor.toggle()
        elif isinstance(event, ev.SeekFraction):
            cursor.seek(event.fraction)
        elif isinstance(event, ev.SeekIndex):
            cursor.seek_index(event.index)
        elif isinstance(event, ev.Step):
            cursor.step(event.delta)
        elif isinstance(event, ev.Rewind):
            cursor.reset()
        elif isinstance(event, ev.NextProfile):
            self.profiles.next()
        elif isinstance(event, ev.PreviousProfile):
            self.profiles.previous()
        elif isinstance(event, ev.ToggleAxis):
            axis = self.profiles.toggle_axis()
            if axis.kind is AxisKind.DISTANCE and not self.table.timed:
                self.notice = "Track has no timestamps: distance axis only"
        elif isinstance(event, ev.SetSpeed):
            try:
                cursor.set_speed(event.multiplier)
            except InvalidSpeedError as e:
                log(str(e))
                self.notice = str(e)
        elif isinstance(event, ev.Resize):
            self.projector.resize(self.viewport, event.width, event.height)
        elif isinstance(event, ev.Pan):
            self.projector.pan(self.viewport, event.dx, event.dy)
        elif isinstance(event, ev.Zoom):
            self.projector.zoom(self.viewport, event.factor)
        elif isinstance(event, ev.ResetView):
            self.projector.reset_view(self.viewport)
        else:
            raise TypeError(f"Unknown event: {event!r}")

    # -- rendering ----------------------------------------------------------

    def frame(self) -> Frame:
        idx = self.cursor.index
        profile = self.profiles.current
        return Frame(
            draw=self.projector.project(self.track, idx, self.viewport),
            progress=self.cursor.progress,
            profile=profile,
            profile_kind=profile.kind,
            x_axis=self.profiles.x_axis,
            current_value=profile.value_at(idx),
            current_index=idx,
            length=len(self.track),
            playing=self.cursor.playing,
            speed=self.cursor.speed,
            notice=self.notice,
        )
