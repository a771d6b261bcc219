"""
Curses-based replay view.

Top half: the route, traced up to the current point with the rest of the
route dotted and the current position marked. Bottom half: the active
profile over time or distance with a cursor column. Below that a status line
and a progress bar.

Architecture:
    - Single thread: poll keys without blocking, emit a Tick every tick_ms,
      then draw a Frame from the Session.
    - Log lines go to the configured log file while curses owns the screen.
"""

import curses
import time
from typing import Optional

from gpsreplay.app import events as ev
from gpsreplay.app.session import Frame, Session
from gpsreplay.tui.canvas import format_value, progress_bar, render_chart, render_route

SEEK_STEP = 0.05
PAN_STEP = 0.1
ZOOM_STEP = 1.25
MIN_ROWS = 6

HELP = "space play/pause  ,/. step  [/] seek  0-9 jump  +/- speed  n/p profile  a axis  arrows pan  z/x zoom  r reset  g rewind  q quit"

# static bindings; digits and speed keys depend on session state
_KEYMAP = {
    ord(" "): ev.TogglePlay(),
    ord(","): ev.Step(-1),
    ord("."): ev.Step(1),
    ord("n"): ev.NextProfile(),
    ord("\t"): ev.NextProfile(),
    ord("p"): ev.PreviousProfile(),
    curses.KEY_BTAB: ev.PreviousProfile(),
    ord("a"): ev.ToggleAxis(),
    curses.KEY_LEFT: ev.Pan(-PAN_STEP, 0.0),
    curses.KEY_RIGHT: ev.Pan(PAN_STEP, 0.0),
    curses.KEY_UP: ev.Pan(0.0, -PAN_STEP),
    curses.KEY_DOWN: ev.Pan(0.0, PAN_STEP),
    ord("z"): ev.Zoom(ZOOM_STEP),
    ord("x"): ev.Zoom(1.0 / ZOOM_STEP),
    ord("r"): ev.ResetView(),
    ord("g"): ev.Rewind(),
    curses.KEY_HOME: ev.Rewind(),
}


def key_to_event(ch: int, session: Session) -> Optional[ev.Event]:
    """Translate a curses key code into a session event (None if unbound)."""
    if ch in _KEYMAP:
        return _KEYMAP[ch]
    if ord("0") <= ch <= ord("9"):
        n = ch - ord("0")
        return ev.SeekFraction(1.0 if n == 9 else n / 10.0)
    if ch == ord("["):
        return ev.SeekFraction(max(0.0, session.cursor.progress - SEEK_STEP))
    if ch == ord("]"):
        return ev.SeekFraction(min(1.0, session.cursor.progress + SEEK_STEP))
    if ch in (ord("+"), ord("=")):
        return ev.SetSpeed(session.cursor.speed * 2.0)
    if ch == ord("-"):
        return ev.SetSpeed(session.cursor.speed / 2.0)
    return None


def layout(h: int, w: int) -> tuple[int, int]:
    """(route_rows, chart_rows) for a terminal of h x w; 4 rows are chrome."""
    body = max(0, h - 5)
    route_rows = body // 2
    return route_rows, body - route_rows


def status_line(frame: Frame) -> str:
    state = ">" if frame.playing else "||"
    return (
        f"{state} {frame.profile.label}: {format_value(frame.current_value)} {frame.profile.unit}"
        f"   x{frame.speed:g}   point {frame.current_index + 1}/{frame.length}"
        + (f"   ! {frame.notice}" if frame.notice else "")
    )


def draw_frame(stdscr, frame: Frame, title: str) -> None:
    h, w = stdscr.getmaxyx()
    cols = max(1, w - 1)
    route_rows, chart_rows = layout(h, w)

    stdscr.erase()
    if h < MIN_ROWS:
        if w >= 2:
            stdscr.addstr(0, 0, "Terminal too small"[:cols])
        stdscr.refresh()
        return
    stdscr.addstr(0, 0, f"Route: {title}"[:cols], curses.A_BOLD)
    for i, line in enumerate(render_route(frame.draw, cols, route_rows), start=1):
        stdscr.addstr(i, 0, line[:cols])

    chart_top = route_rows + 1
    stdscr.addstr(
        chart_top, 0,
        f"{frame.profile.title} over {frame.x_axis.label} [{frame.x_axis.unit}]"[:cols],
        curses.A_BOLD,
    )
    chart = render_chart(
        frame.profile.values, frame.x_axis.values,
        frame.x_axis.value_range, frame.profile.value_range,
        frame.current_index, cols, chart_rows,
    )
    for i, line in enumerate(chart, start=chart_top + 1):
        stdscr.addstr(i, 0, line[:cols])

    if h >= 3:
        stdscr.addstr(h - 3, 0, status_line(frame)[:cols])
        stdscr.addstr(h - 2, 0, progress_bar(frame.progress, cols))
        stdscr.addstr(h - 1, 0, HELP[:cols], curses.A_DIM)
    stdscr.refresh()


def run_replay(stdscr, session: Session, *, title: str, tick_ms: float = 100.0) -> None:
    """
    Run the interactive replay until the user presses 'q'.

    Should be called via curses.wrapper() so the terminal is restored on exit.
    """
    curses.curs_set(0)
    stdscr.nodelay(True)
    stdscr.keypad(True)

    tick_s = tick_ms / 1000.0
    size = None
    next_tick = time.monotonic()

    while True:
        h, w = stdscr.getmaxyx()
        if (h, w) != size:
            size = (h, w)
            session.handle(ev.Resize(max(1, w - 1), max(1, layout(h, w)[0])))

        ch = stdscr.getch()
        while ch != -1:
            if ch in (ord("q"), ord("Q")):
                return
            if ch == curses.KEY_RESIZE:
                size = None
            else:
                event = key_to_event(ch, session)
                if event is not None:
                    session.handle(event)
            ch = stdscr.getch()

        now = time.monotonic()
        if now >= next_tick:
            session.handle(ev.Tick(now))
            next_tick = now + tick_s

        draw_frame(stdscr, session.frame(), title)
        time.sleep(min(tick_s, 0.05))
