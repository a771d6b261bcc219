# gpsreplay/formats/gpx.py
"""
GPX helpers for gpsreplay

This module is intentionally format-focused:
- GPX namespace handling
- safely reading ElementTree
- turning <trkpt> elements into RawSample objects

Nothing here validates a track; that is the Track Store's job. Missing or
unparseable values are passed on as None so the store can decide.
"""

from __future__ import annotations

import datetime as _dt
import math
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from gpsreplay.errors import InvalidGpxError
from gpsreplay.track.store import RawSample

# GPX 1.1 default namespace
GPX_NS = {"gpx": "http://www.topografix.com/GPX/1/1"}


def _parse_gpx_time(text: str) -> Optional[_dt.datetime]:
    """
    Parse an ISO-8601 timestamp commonly found in GPX <time> nodes.

    Expected examples:
      - "2026-01-02T21:14:44Z"
      - "2026-01-02T21:14:44.123Z"
      - "2026-01-02T21:14:44+00:00"
    """
    if not text:
        return None
    s = text.strip()
    if not s:
        return None

    # ElementTree GPX times commonly use Z for UTC.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    try:
        dt = _dt.datetime.fromisoformat(s)
    except ValueError:
        return None

    # Ensure tz-aware; if naive, assume UTC (conservative for GPX sources)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_dt.timezone.utc)

    return dt.astimezone(_dt.timezone.utc)


def _parse_float(text: Optional[str]) -> Optional[float]:
    if text is None:
        return None
    try:
        v = float(text.strip())
    except ValueError:
        return None
    return v if math.isfinite(v) else None


def read_gpx(path: Path) -> ET.ElementTree:
    """
    Read a GPX file into an ElementTree.

    Raises:
      InvalidGpxError (wrapping ET.ParseError), OSError
    """
    try:
        return ET.parse(path)
    except ET.ParseError as e:
        raise InvalidGpxError(f"Could not parse GPX file {path}: {e}") from e


def extract_samples(tree: ET.ElementTree) -> list[RawSample]:
    """
    Extract ordered samples from the first <trk> of a GPX tree.

    All <trkseg> of that track are concatenated in document order. Only the
    first track is used; multi-track files are not compared.
    """
    root = tree.getroot()
    trk = root.find("gpx:trk", GPX_NS)
    if trk is None:
        return []

    pts: list[RawSample] = []
    for trkpt in trk.findall("gpx:trkseg/gpx:trkpt", GPX_NS):
        pts.append(RawSample(
            lat=_parse_float(trkpt.get("lat")),
            lon=_parse_float(trkpt.get("lon")),
            ele=_parse_float(trkpt.findtext("gpx:ele", namespaces=GPX_NS)),
            time=_parse_gpx_time(trkpt.findtext("gpx:time", default="", namespaces=GPX_NS)),
        ))

    return pts
