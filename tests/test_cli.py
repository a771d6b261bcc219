import dataclasses

import pytest

import gpsreplay.cli as cli
from gpsreplay.config import ReplayPaths, default_config


@pytest.fixture
def cfg(tmp_path, monkeypatch):
    c = dataclasses.replace(
        default_config(),
        paths=ReplayPaths(work_root=tmp_path / "work", log_file=tmp_path / "replay.log"),
    )
    monkeypatch.setattr(cli, "load_config", lambda: c)
    return c


def test_summary_prints_report(cfg, capsys, sample_gpx_path):
    rc = cli.main(["--summary", str(sample_gpx_path)])
    out = capsys.readouterr().out
    assert rc == 0
    assert "points        : 5" in out


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["-h"])
    assert exc.value.code == 0
    assert "gpsreplay" in capsys.readouterr().out


def test_no_path_and_no_candidates_prints_usage(cfg, capsys):
    assert cli.main([]) == 1
    assert "usage:" in capsys.readouterr().out


def test_no_path_without_fzf(cfg, monkeypatch):
    cfg.paths.work_root.mkdir()
    (cfg.paths.work_root / "a.gpx").write_text("<gpx/>", encoding="utf-8")
    monkeypatch.setattr("gpsreplay.util.fzf.which", lambda _cmd: None)
    assert cli.main([]) == 2


def test_fzf_selection_is_replayed(cfg, monkeypatch, sample_gpx_path):
    cfg.paths.work_root.mkdir()
    (cfg.paths.work_root / "a.gpx").write_text("<gpx/>", encoding="utf-8")
    monkeypatch.setattr(cli, "fzf_select_paths", lambda paths, header: [sample_gpx_path])
    seen = {}
    monkeypatch.setattr(cli.curses, "wrapper", lambda fn, session, title, tick: seen.update(title=title))
    assert cli.main([]) == 0
    assert seen["title"] == "sample.gpx"


def test_empty_track_fails_with_message(cfg, data_dir, tmp_path):
    assert cli.main([str(data_dir / "empty.gpx")]) == 1
    assert "Track contains no points" in (tmp_path / "test.log").read_text(encoding="utf-8")


def test_missing_file(cfg, tmp_path):
    assert cli.main([str(tmp_path / "nope.gpx")]) == 1


def test_replay_starts_curses_with_session(cfg, monkeypatch, sample_gpx_path):
    calls = []
    monkeypatch.setattr(cli.curses, "wrapper", lambda *a: calls.append(a))

    assert cli.main([str(sample_gpx_path)]) == 0

    (fn, session, title, tick_ms), = calls
    assert fn is cli.run_tui
    assert len(session.track) == 5
    assert title == "sample.gpx"
    assert tick_ms == cfg.playback.tick_ms


def test_ctrl_c_in_replay_exits_cleanly(cfg, monkeypatch, sample_gpx_path):
    def interrupted(*_a):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli.curses, "wrapper", interrupted)
    assert cli.main([str(sample_gpx_path)]) == 0
    assert "Interrupted" in cfg.paths.log_file.read_text(encoding="utf-8")
