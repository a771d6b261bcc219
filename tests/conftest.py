import datetime as dt
import math
from pathlib import Path

import pytest

from gpsreplay.track.store import RawSample

# mean Earth radius used by the haversine package
EARTH_RADIUS_M = 6371008.8
T0 = dt.datetime(2025, 6, 1, 8, 0, 0, tzinfo=dt.timezone.utc)


@pytest.fixture
def sample_gpx_path() -> Path:
    return Path(__file__).parent / "data" / "sample.gpx"


@pytest.fixture
def data_dir() -> Path:
    return Path(__file__).parent / "data"


@pytest.fixture
def make_samples():
    """
    Build samples on the lon=0 meridian so that cumulative great-circle
    distances are exactly the given metres.
    """
    def _make(distances_m, times_s=None, eles=None, lon=0.0):
        out = []
        for i, d in enumerate(distances_m):
            lat = math.degrees(d / EARTH_RADIUS_M)
            t = None
            if times_s is not None and times_s[i] is not None:
                t = T0 + dt.timedelta(seconds=times_s[i])
            ele = eles[i] if eles is not None else None
            out.append(RawSample(lat=lat, lon=lon, ele=ele, time=t))
        return out
    return _make


@pytest.fixture(autouse=True)
def _quiet_log(monkeypatch, tmp_path):
    """Send log lines to a temp file instead of stdout."""
    from gpsreplay.util import logging as glog
    monkeypatch.setattr(glog, "_log_file", tmp_path / "test.log")
