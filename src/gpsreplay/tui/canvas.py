# gpsreplay/tui/canvas.py
"""
Character-grid rasterization for the terminal UI.

Everything here is pure: frames and draw commands go in, lists of strings
come out. Drawing outside the grid is clipped silently.
"""

from __future__ import annotations

from typing import Optional, Sequence

from gpsreplay.visualize.viewport import DrawCommands, Line

TRACE_CH = "*"
REMAINING_CH = "."
MARKER_CH = "@"
CHART_CH = "."
CURSOR_CH = "|"


def new_grid(width: int, height: int) -> list[list[str]]:
    return [[" "] * width for _ in range(height)]


def to_lines(grid: list[list[str]]) -> list[str]:
    return ["".join(row) for row in grid]


def plot(grid: list[list[str]], x: float, y: float, ch: str) -> None:
    col = int(round(x))
    row = int(round(y))
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        grid[row][col] = ch


def draw_line(grid: list[list[str]], line: Line, ch: str) -> None:
    """Bresenham between the rounded end points."""
    x0, y0 = int(round(line.x1)), int(round(line.y1))
    x1, y1 = int(round(line.x2)), int(round(line.y2))
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        plot(grid, x0, y0, ch)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def render_route(cmds: DrawCommands, width: int, height: int) -> list[str]:
    grid = new_grid(width, height)
    for line in cmds.remaining:
        draw_line(grid, line, REMAINING_CH)
    for line in cmds.trace:
        draw_line(grid, line, TRACE_CH)
    if cmds.marker is not None:
        plot(grid, cmds.marker[0], cmds.marker[1], MARKER_CH)
    return to_lines(grid)


def _scale(v: float, lo: float, hi: float, size: int) -> float:
    if size <= 1 or hi <= lo:
        return (size - 1) / 2.0
    return (v - lo) / (hi - lo) * (size - 1)


def render_chart(
        values: Sequence[Optional[float]],
        xs: Sequence[Optional[float]],
        x_range: Optional[tuple[float, float]],
        y_range: Optional[tuple[float, float]],
        current_index: int,
        width: int,
        height: int,
) -> list[str]:
    """Scatter `values` over `xs`; None in either leaves a gap. Cursor column marked."""
    grid = new_grid(width, height)
    if x_range is None or width <= 0 or height <= 0:
        return to_lines(grid)

    x_lo, x_hi = x_range
    cx = xs[current_index]
    if cx is not None:
        col = _scale(cx, x_lo, x_hi, width)
        for row in range(height):
            plot(grid, col, row, CURSOR_CH)

    if y_range is None:
        return to_lines(grid)
    y_lo, y_hi = y_range
    for x, y in zip(xs, values):
        if x is None or y is None:
            continue
        col = _scale(x, x_lo, x_hi, width)
        row = (height - 1) - _scale(y, y_lo, y_hi, height)
        plot(grid, col, row, CHART_CH)

    cy = values[current_index]
    if cx is not None and cy is not None:
        plot(grid, _scale(cx, x_lo, x_hi, width), (height - 1) - _scale(cy, y_lo, y_hi, height), MARKER_CH)
    return to_lines(grid)


def progress_bar(fraction: float, width: int) -> str:
    """'[####----]' exactly `width` characters wide (min 2)."""
    width = max(2, width)
    inner = width - 2
    fraction = min(max(fraction, 0.0), 1.0)
    filled = int(round(fraction * inner))
    return "[" + "#" * filled + "-" * (inner - filled) + "]"


def format_value(v: Optional[float]) -> str:
    return "--" if v is None else f"{v:.2f}"
