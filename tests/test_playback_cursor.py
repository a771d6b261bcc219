import math

import pytest

from gpsreplay.errors import InvalidSpeedError
from gpsreplay.playback.cursor import EndPolicy, PlaybackCursor, build_timeline


class FakeClock:
    def __init__(self, t=0.0):
        self.t = t

    def __call__(self):
        return self.t


def make_cursor(timeline=(0.0, 1.0, 2.0, 3.0), **kwargs):
    clock = kwargs.pop("clock", FakeClock())
    return PlaybackCursor(timeline, clock=clock, **kwargs), clock


def test_initial_state_is_paused_at_zero():
    cur, _ = make_cursor()
    assert cur.index == 0
    assert not cur.playing
    assert cur.speed == 1.0
    assert cur.state.last_tick is None


def test_play_then_ticks_advance_by_track_time():
    cur, _ = make_cursor()
    cur.play()
    assert cur.tick(1.0) == 1
    assert cur.tick(2.0) == 2
    assert cur.playing


def test_tick_while_paused_is_noop():
    cur, _ = make_cursor()
    assert cur.tick(5.0) == 0
    assert cur.state.last_tick is None


def test_speed_multiplier_scales_track_time():
    cur, _ = make_cursor(timeline=(0.0, 10.0, 20.0, 30.0))
    cur.set_speed(10.0)
    cur.play()
    assert cur.tick(1.0) == 1
    assert cur.tick(1.5) == 1
    assert cur.tick(2.0) == 2


def test_tick_past_end_clamps_and_pauses():
    cur, _ = make_cursor()
    cur.play()
    assert cur.tick(100.0) == 3
    assert not cur.playing
    assert cur.state.last_tick is None


def test_loop_policy_wraps_and_keeps_playing():
    cur, _ = make_cursor(end_policy=EndPolicy.LOOP)
    cur.play()
    assert cur.tick(10.0) == 0
    assert cur.playing


def test_stop_policy_rewinds_and_pauses():
    cur, _ = make_cursor(end_policy=EndPolicy.STOP)
    cur.play()
    assert cur.tick(10.0) == 0
    assert not cur.playing


def test_play_at_end_restarts_from_beginning():
    cur, clock = make_cursor()
    cur.seek(1.0)
    clock.t = 50.0
    cur.play()
    assert cur.index == 0
    assert cur.tick(51.0) == 1


def test_duplicate_timestamps_jump_to_last_point_at_that_time():
    cur, _ = make_cursor(timeline=(0.0, 1.0, 1.0, 3.0))
    cur.play()
    assert cur.tick(1.0) == 2
    assert cur.tick(2.0) == 2


def test_play_and_pause_are_idempotent():
    cur, clock = make_cursor()
    cur.play()
    clock.t = 0.5
    cur.play()
    assert cur.state.last_tick == 0.0
    cur.pause()
    cur.pause()
    assert not cur.playing


def test_toggle():
    cur, _ = make_cursor()
    cur.toggle()
    assert cur.playing
    cur.toggle()
    assert not cur.playing


@pytest.mark.parametrize(
    "fraction, expected",
    [(0.0, 0), (1.0, 3), (0.5, 2), (0.49, 1), (-1.0, 0), (7.0, 3)],
)
def test_seek(fraction, expected):
    cur, _ = make_cursor()
    assert cur.seek(fraction) == expected
    assert cur.seek(fraction) == expected


def test_seek_keeps_play_state_and_resyncs_position():
    cur, _ = make_cursor(timeline=(0.0, 10.0, 20.0, 30.0))
    cur.play()
    cur.seek(2 / 3)
    assert cur.playing
    assert cur.index == 2
    assert cur.tick(5.0) == 2
    assert cur.tick(10.0) == 3


def test_seek_index_and_step_clamp():
    cur, _ = make_cursor()
    assert cur.seek_index(2) == 2
    assert cur.step(5) == 3
    assert cur.step(-10) == 0
    assert cur.seek_index(-4) == 0


@pytest.mark.parametrize("bad", [0, -1.0, math.inf, math.nan, "fast"])
def test_set_speed_rejects_invalid_and_keeps_previous(bad):
    cur, _ = make_cursor()
    cur.set_speed(2.0)
    with pytest.raises(InvalidSpeedError):
        cur.set_speed(bad)
    assert cur.speed == 2.0


def test_invalid_speed_is_a_value_error():
    cur, _ = make_cursor()
    with pytest.raises(ValueError):
        cur.set_speed(-3)


def test_progress():
    cur, _ = make_cursor()
    cur.seek_index(1)
    assert cur.progress == pytest.approx(1 / 3)
    single, _ = make_cursor(timeline=(0.0,))
    assert single.progress == 1.0


def test_single_point_track_pauses_on_first_tick():
    cur, _ = make_cursor(timeline=(0.0,))
    cur.play()
    assert cur.tick(1.0) == 0
    assert not cur.playing


def test_reset_keeps_speed():
    cur, _ = make_cursor()
    cur.set_speed(4.0)
    cur.seek(1.0)
    cur.play()
    cur.reset()
    assert (cur.index, cur.playing, cur.speed) == (0, False, 4.0)


def test_build_timeline():
    assert build_timeline((0.0, 1.5, 4.0)) == (0.0, 1.5, 4.0)
    assert build_timeline((None, None, None), untimed_step_s=0.5) == (0.0, 0.5, 1.0)


def test_seek_ignores_nan_and_clamps_infinity():
    cur, _ = make_cursor()
    cur.seek_index(2)
    assert cur.seek(math.nan) == 2
    assert cur.seek(math.inf) == 3
    assert cur.seek(-math.inf) == 0
