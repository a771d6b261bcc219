import pytest

# 0.001 deg of latitude on the haversine sphere
STEP_M = 111.19508


def test_analyze_sample_gpx(sample_gpx_path):
    from gpsreplay.analyze.track import analyze_track

    stats = analyze_track(sample_gpx_path)

    assert stats["points"] == 5
    assert stats["segments"] == 3
    assert stats["distance_m"] == pytest.approx(3 * STEP_M, abs=0.01)
    assert stats["duration_s"] == 30
    assert stats["avg_speed_mps"] == pytest.approx(STEP_M / 10, abs=0.001)
    assert stats["max_speed_mps"] == pytest.approx(STEP_M / 10, abs=0.001)
    assert stats["elevation_gain_m"] == 5.0
    assert stats["elevation_loss_m"] == 2.0


def test_untimed_summary_has_no_speed(make_samples):
    from gpsreplay.analyze.metrics import compute
    from gpsreplay.analyze.track import summarize
    from gpsreplay.track.store import load

    stats = summarize(compute(load(make_samples([0, 100, 250]))))

    assert stats["segments"] == 0
    assert stats["duration_s"] is None
    assert stats["avg_speed_mps"] is None
    assert stats["max_speed_mps"] is None
    assert stats["distance_m"] == pytest.approx(250.0, rel=1e-6)


def test_print_report_tsv_marks_undefined(capsys, tmp_path):
    from gpsreplay.analyze.gpx_analyze import print_report

    stats = {
        "points": 3, "segments": 0, "distance_m": 250.0, "duration_s": None,
        "avg_speed_mps": None, "max_speed_mps": None,
        "elevation_gain_m": 0.0, "elevation_loss_m": 0.0,
    }
    print_report(tmp_path / "a.gpx", stats, tsv=True)

    fields = capsys.readouterr().out.strip().split("\t")
    assert fields[1:] == ["3", "0", "250.00", "-", "-", "-", "0.0", "0.0"]


def test_summary_main_with_explicit_files(capsys, sample_gpx_path, data_dir):
    from gpsreplay.analyze.gpx_analyze import TSV_HEADER, main

    rc = main(["--tsv", str(sample_gpx_path), str(data_dir / "empty.gpx")])

    out = capsys.readouterr().out.splitlines()
    assert rc == 1
    assert out[0] == TSV_HEADER
    assert len(out) == 2
    assert out[1].startswith(str(sample_gpx_path))
