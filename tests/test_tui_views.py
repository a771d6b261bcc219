import curses

import pytest

from gpsreplay.app import events as ev
from gpsreplay.app.session import Session
from gpsreplay.tui.views import draw_frame, key_to_event, layout, status_line


class FakeScreen:
    def __init__(self, h=24, w=80):
        self.h, self.w = h, w
        self.rows = {}
        self.refreshed = False

    def getmaxyx(self):
        return self.h, self.w

    def erase(self):
        self.rows.clear()

    def addstr(self, y, x, text, attr=0):
        assert 0 <= y < self.h
        assert x + len(text) < self.w
        self.rows[y] = text

    def refresh(self):
        self.refreshed = True


@pytest.fixture
def session(make_samples):
    return Session.from_samples(
        make_samples([0, 10, 20, 30], times_s=[0, 1, 2, 3]),
        clock=lambda: 0.0,
    )


@pytest.mark.parametrize(
    "key, expected",
    [
        (ord(" "), ev.TogglePlay()),
        (ord("."), ev.Step(1)),
        (ord("n"), ev.NextProfile()),
        (curses.KEY_BTAB, ev.PreviousProfile()),
        (curses.KEY_LEFT, ev.Pan(-0.1, 0.0)),
        (ord("0"), ev.SeekFraction(0.0)),
        (ord("5"), ev.SeekFraction(0.5)),
        (ord("9"), ev.SeekFraction(1.0)),
        (ord("+"), ev.SetSpeed(2.0)),
        (ord("-"), ev.SetSpeed(0.5)),
        (ord("g"), ev.Rewind()),
        (curses.KEY_HOME, ev.Rewind()),
        (ord("?"), None),
    ],
)
def test_key_to_event(session, key, expected):
    assert key_to_event(key, session) == expected


def test_relative_seek_keys(session):
    session.handle(ev.SeekFraction(1.0))
    assert key_to_event(ord("]"), session) == ev.SeekFraction(1.0)
    assert key_to_event(ord("["), session) == ev.SeekFraction(pytest.approx(0.95))


def test_layout_splits_body():
    assert layout(24, 80) == (9, 10)
    assert layout(3, 80) == (0, 0)


def test_status_line_shows_gap_and_notice(session):
    session.handle(ev.SetSpeed(0))
    line = status_line(session.frame())
    assert line.startswith("|| Speed: -- m/s")
    assert "point 1/4" in line
    assert "!" in line


def test_draw_frame_fits_screen(session):
    scr = FakeScreen(h=20, w=60)
    session.handle(ev.Resize(59, layout(20, 60)[0]))
    session.handle(ev.SeekIndex(2))
    draw_frame(scr, session.frame(), "ride.gpx")

    assert scr.refreshed
    assert scr.rows[0].startswith("Route: ride.gpx")
    assert "@" in "".join(scr.rows.values())
    assert scr.rows[18].startswith("[") and scr.rows[18].endswith("]")


@pytest.mark.parametrize("h, w", [(1, 80), (2, 80), (5, 40), (6, 40), (1, 1)])
def test_draw_frame_survives_tiny_terminals(session, h, w):
    scr = FakeScreen(h=h, w=w)
    draw_frame(scr, session.frame(), "ride.gpx")
    assert scr.refreshed
