#!/usr/bin/env python3
"""
run_report.py

Renders the screen name change or suspension report for one data directory.

Usage:
    python run_report.py screen-names [--base screen-names/]
    python run_report.py suspensions [--base suspensions/]

Input:
- <base>/data.csv (no header row)
- <base>/thumbnails/ (optional, pre-fetched 400x400 profile images)

Output:
- Markdown report on stdout; status lines on stderr.

Environment Variables (.env is loaded if present):
- ACCOUNTWATCH_SCREEN_NAMES_DIR / ACCOUNTWATCH_SUSPENSIONS_DIR: default base directory
- ACCOUNTWATCH_REPORTED_LIMIT: number of most recent dates reported (default: 10)
- ACCOUNTWATCH_FOLLOWERS_LIMIT: minimum follower count for listed accounts (default: 200)
"""

from __future__ import annotations

import argparse
import sys

from pandas.errors import ParserError

from accountwatch import KINDS, InvalidRecord, build_buckets, load_items, load_settings, render_report


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="report",
        description="Render tracked account change reports as Markdown.",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    for kind in KINDS.values():
        p = sub.add_parser(kind.name, help=f"{kind.title} report")
        p.add_argument(
            "--base",
            type=str,
            default=None,
            help=f"{kind.title} directory (default: {kind.default_base})",
        )
    return parser.parse_args(argv)


def _status(message: str) -> None:
    print(message, file=sys.stderr)


def main(argv=None) -> None:
    args = parse_args(argv)
    kind = KINDS[args.command]

    try:
        settings = load_settings(kind, args.base)
        items = list(load_items(kind, settings))
        buckets = build_buckets(items)
        shown = render_report(kind, buckets, settings)
    except FileNotFoundError as e:
        _status(f"✗ Error: {e}")
        _status(f"  Expected the {kind.title.lower()} data at <base>/data.csv (--base, default {kind.default_base})")
        raise
    except InvalidRecord as e:
        _status(f"✗ Invalid record: {e}")
        if e.line is not None:
            _status(f"  at data row {e.line}")
        raise
    except ParserError as e:
        _status(f"✗ CSV error: {e}")
        raise
    except ValueError as e:
        _status(f"✗ Validation error: {e}")
        raise

    _status(
        f"✓ {kind.title}: {len(items)} rows, {len(buckets)} dates, "
        f"{min(len(buckets), settings.reported_limit)} reported, {shown} accounts listed"
    )


if __name__ == "__main__":
    main()
