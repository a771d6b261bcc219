from gpsreplay.util import logging as glog


def test_log_prints_timestamped_line(monkeypatch, capsys):
    monkeypatch.setattr(glog, "_log_file", None)
    glog.log("hello")
    out = capsys.readouterr().out
    assert out.endswith("  hello\n")
    assert out[:4].isdigit()


def test_set_log_file_appends(monkeypatch, tmp_path):
    target = tmp_path / "nested" / "replay.log"
    glog.set_log_file(target)
    glog.log("one")
    glog.log("two")
    lines = target.read_text(encoding="utf-8").splitlines()
    assert [line.split("  ", 1)[1] for line in lines] == ["one", "two"]
