#!/usr/bin/env python3
"""
gpsreplay: replay a GPX track in the terminal.

    gpsreplay [-h] [--summary] [--plot] [--work-root DIR] [gpx]

Without a path, GPX files under the work root are offered through fzf.
"""

from __future__ import annotations

import argparse
import curses
from pathlib import Path
from typing import Optional

from gpsreplay.analyze.gpx_analyze import print_report
from gpsreplay.analyze.metrics import compute
from gpsreplay.analyze.track import load_gpx_track, summarize
from gpsreplay.app.session import Session
from gpsreplay.config import load_config
from gpsreplay.errors import ConfigError, FzfNotFoundError, LoadError
from gpsreplay.util.fzf import fzf_select_paths
from gpsreplay.util.logging import log, set_log_file
from gpsreplay.util.paths import list_gpx_candidates


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="gpsreplay",
        description="Replay a GPX track: route, playback timeline and switchable statistic profiles.",
    )
    ap.add_argument("gpx", nargs="?", default=None,
                    help="GPX file to replay. If omitted, use fzf selection under the work root.")
    ap.add_argument("--work-root", default=None,
                    help="Directory searched for GPX files (default: from config or ~/GPS/_work)")
    ap.add_argument("--summary", action="store_true",
                    help="Print track statistics instead of starting the replay.")
    ap.add_argument("--plot", action="store_true",
                    help="Show a static matplotlib figure instead of starting the replay.")
    return ap


def main(argv: Optional[list[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    try:
        cfg = load_config()
    except ConfigError as e:
        log(f"ERROR: {e}")
        return 1

    if args.gpx:
        path = Path(args.gpx).expanduser()
    else:
        work_root = Path(args.work_root).expanduser() if args.work_root else cfg.paths.work_root
        candidates = list_gpx_candidates(work_root)
        if not candidates:
            ap.print_usage()
            log(f"No GPX file given and none found under {work_root}")
            return 1
        try:
            picked = fzf_select_paths(candidates, header="Select a GPX file to replay:")
        except FzfNotFoundError as e:
            log(str(e))
            return 2
        if not picked:
            ap.print_usage()
            return 1
        path = picked[0]

    if not path.is_file():
        log(f"ERROR: not a file: {path}")
        return 1

    try:
        track = load_gpx_track(path)
    except LoadError as e:
        log(f"ERROR: {path}: {e}")
        return 1
    table = compute(track)

    if args.summary:
        print_report(path, summarize(table), tsv=False)
        return 0

    session = Session(track, table, cfg)

    if args.plot:
        from gpsreplay.visualize.plot import plot_profile
        plot_profile(track, session.profiles.current, session.profiles.x_axis)
        return 0

    # curses owns the terminal from here on
    set_log_file(cfg.paths.log_file)
    log(f"Replaying {path}")
    try:
        curses.wrapper(run_tui, session, path.name, cfg.playback.tick_ms)
    except KeyboardInterrupt:
        log("Interrupted")
    return 0


def run_tui(stdscr, session: Session, title: str, tick_ms: float) -> None:
    from gpsreplay.tui.views import run_replay
    run_replay(stdscr, session, title=title, tick_ms=tick_ms)


if __name__ == "__main__":
    raise SystemExit(main())
