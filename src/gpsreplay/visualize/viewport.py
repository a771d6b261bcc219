# gpsreplay/visualize/viewport.py
"""
Viewport Projector for gpsreplay

Maps WGS84 lat/lon into a bounded 2D drawing space (x right, y down).

Projection is equirectangular: longitude is scaled by cos(mid latitude) so
that a degree east and a degree north cover roughly the same ground distance
near the track. The projected bounding box (plus margin) is fitted into the
drawing area without distortion; the narrower dimension is letterboxed.

Only the affine map depends on the drawing size. The geographic bounds are
computed once per load and reused across resizes, pans and zooms.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from gpsreplay.track.store import GeoBounds, RawSample, Track

Point2D = tuple[float, float]


@dataclass
class Viewport:
    """
    Mutable drawing-area state.

    - width/height: drawing units (columns/rows, or sub-cell dots)
    - cell_aspect: physical height of one y unit relative to one x unit
    - pan_x/pan_y: view offset as a fraction of width/height
    - zoom: magnification about the view centre (1.0 = fit whole route)
    """
    width: int
    height: int
    bounds: GeoBounds
    cell_aspect: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class DrawCommands:
    trace: tuple[Line, ...] = ()
    remaining: tuple[Line, ...] = ()
    marker: Optional[Point2D] = None
    progress: float = 0.0


@dataclass(frozen=True)
class AffineMap:
    """x = ox + (ex - ex0) * scale; y = oy + (ey1 - ey) * scale / cell_aspect"""
    scale: float
    ox: float
    oy: float
    ex0: float
    ey1: float
    kx: float
    cell_aspect: float


class ViewportProjector:

    def __init__(self, bounds: GeoBounds, *, margin: float = 0.05):
        self.bounds = bounds
        self.margin = margin
        self._map: Optional[AffineMap] = None
        self._size: Optional[tuple[int, int, float]] = None

    # -- affine map -------------------------------------------------------

    def resize(self, viewport: Viewport, width: int, height: int) -> None:
        """Apply a new drawing size; recomputes the affine map only."""
        viewport.width = max(1, int(width))
        viewport.height = max(1, int(height))
        self._map = self._fit(viewport)
        self._size = (viewport.width, viewport.height, viewport.cell_aspect)

    def _fit(self, viewport: Viewport) -> AffineMap:
        b = self.bounds
        kx = math.cos(math.radians(b.mid_lat))
        ex0, ex1 = b.min_lon * kx, b.max_lon * kx
        ey0, ey1 = b.min_lat, b.max_lat

        span_x = ex1 - ex0
        span_y = ey1 - ey0
        ex0 -= span_x * self.margin
        ex1 += span_x * self.margin
        ey0 -= span_y * self.margin
        ey1 += span_y * self.margin
        span_x = ex1 - ex0
        span_y = ey1 - ey0

        w = float(viewport.width)
        h_phys = float(viewport.height) * viewport.cell_aspect

        candidates = []
        if span_x > 0:
            candidates.append(w / span_x)
        if span_y > 0:
            candidates.append(h_phys / span_y)
        # a single repeated point has no span at all
        scale = min(candidates) if candidates else 1.0

        ox = (w - span_x * scale) / 2.0
        oy = (viewport.height - span_y * scale / viewport.cell_aspect) / 2.0
        return AffineMap(
            scale=scale, ox=ox, oy=oy, ex0=ex0, ey1=ey1, kx=kx,
            cell_aspect=viewport.cell_aspect,
        )

    def _affine(self, viewport: Viewport) -> AffineMap:
        size = (viewport.width, viewport.height, viewport.cell_aspect)
        if self._map is None or self._size != size:
            self.resize(viewport, viewport.width, viewport.height)
        return self._map

    # -- view controls ----------------------------------------------------

    @staticmethod
    def pan(viewport: Viewport, dx: float, dy: float) -> None:
        """Shift the view by (dx, dy) fractions of its width/height."""
        viewport.pan_x += dx
        viewport.pan_y += dy

    @staticmethod
    def zoom(viewport: Viewport, factor: float) -> None:
        if factor > 0 and math.isfinite(factor):
            viewport.zoom = min(max(viewport.zoom * factor, 0.01), 1000.0)

    @staticmethod
    def reset_view(viewport: Viewport) -> None:
        viewport.pan_x = viewport.pan_y = 0.0
        viewport.zoom = 1.0

    # -- projection -------------------------------------------------------

    def project_point(self, sample: RawSample, viewport: Viewport) -> Point2D:
        m = self._affine(viewport)
        x = m.ox + (sample.lon * m.kx - m.ex0) * m.scale
        y = m.oy + (m.ey1 - sample.lat) * m.scale / m.cell_aspect

        # zoom about the view centre, then pan (view moves, content moves opposite)
        cx = viewport.width / 2.0
        cy = viewport.height / 2.0
        x = cx + (x - cx) * viewport.zoom - viewport.pan_x * viewport.width
        y = cy + (y - cy) * viewport.zoom - viewport.pan_y * viewport.height
        return x, y

    def project(self, track: Track, current_index: int, viewport: Viewport) -> DrawCommands:
        """Trace up to current_index, the rest of the route, the marker and progress."""
        current_index = min(max(current_index, 0), track.last_index)
        pts = [self.project_point(s, viewport) for s in track]

        lines = tuple(Line(a[0], a[1], b[0], b[1]) for a, b in zip(pts, pts[1:]))
        progress = current_index / track.last_index if track.last_index else 1.0

        return DrawCommands(
            trace=lines[:current_index],
            remaining=lines[current_index:],
            marker=pts[current_index],
            progress=progress,
        )
