#!/usr/bin/env python3
"""
gpsreplay-summary: print whole-track statistics for one or more GPX files.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from gpsreplay.analyze.track import analyze_track
from gpsreplay.config import load_config
from gpsreplay.errors import FzfNotFoundError, LoadError
from gpsreplay.util.fzf import fzf_select_paths
from gpsreplay.util.logging import log
from gpsreplay.util.paths import list_gpx_candidates


def _fmt(v: Optional[float], spec: str) -> str:
    # undefined statistics print as "-", never as 0
    return "-" if v is None else format(v, spec)


def print_report(path: Path, stats: dict, *, tsv: bool) -> None:
    if tsv:
        print(
            f"{path}\t"
            f"{stats['points']}\t"
            f"{stats['segments']}\t"
            f"{_fmt(stats['distance_m'], '.2f')}\t"
            f"{_fmt(stats['duration_s'], '.1f')}\t"
            f"{_fmt(stats['avg_speed_mps'], '.3f')}\t"
            f"{_fmt(stats['max_speed_mps'], '.3f')}\t"
            f"{_fmt(stats['elevation_gain_m'], '.1f')}\t"
            f"{_fmt(stats['elevation_loss_m'], '.1f')}"
        )
    else:
        print(f"\n{path}")
        print(f"  points        : {stats['points']}")
        print(f"  segments      : {stats['segments']}")
        print(f"  distance (m)  : {_fmt(stats['distance_m'], '.2f')}")
        print(f"  duration (s)  : {_fmt(stats['duration_s'], '.1f')}")
        print(f"  avg speed m/s : {_fmt(stats['avg_speed_mps'], '.3f')}")
        print(f"  max speed m/s : {_fmt(stats['max_speed_mps'], '.3f')}")
        print(f"  ascent (m)    : {_fmt(stats['elevation_gain_m'], '.1f')}")
        print(f"  descent (m)   : {_fmt(stats['elevation_loss_m'], '.1f')}")


TSV_HEADER = (
    "file\tpoints\tsegments\tdistance_m\tduration_s\tavg_speed_mps\t"
    "max_speed_mps\televation_gain_m\televation_loss_m"
)


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="gpsreplay: summarize GPX file(s).")
    ap.add_argument("gpx", nargs="*",
                    help="One or more GPX files. If omitted, use fzf selection.")
    ap.add_argument("--work-root", default=None,
                    help="Directory searched for GPX files (default: from config or ~/GPS/_work)")
    ap.add_argument("--tsv", action="store_true",
                    help="Print tab-separated output (good for piping).")

    args = ap.parse_args(argv)

    selected = [Path(p).expanduser() for p in args.gpx]
    if not selected:
        cfg = load_config()
        work_root = Path(args.work_root).expanduser() if args.work_root else cfg.paths.work_root
        gpx_files = list_gpx_candidates(work_root)
        if not gpx_files:
            raise SystemExit(f"No GPX files found under {work_root}")
        try:
            selected = fzf_select_paths(gpx_files, header="Select GPX file(s) to summarize:", multi=True)
        except FzfNotFoundError as e:
            log(str(e))
            return 2

    if args.tsv:
        print(TSV_HEADER)

    rc = 0
    for path in selected:
        if not path.is_file():
            log(f"Skipping (not a file): {path}")
            continue
        try:
            stats = analyze_track(path)
        except LoadError as e:
            log(f"ERROR: {path}: {e}")
            rc = 1
            continue
        print_report(path, stats, tsv=args.tsv)

    return rc


if __name__ == "__main__":
    raise SystemExit(main())
