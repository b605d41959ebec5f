"""
report.py

Renders ranked date buckets as a Markdown page with embedded HTML tables.

Layout:
- preamble (title and notes for the report kind)
- contents: one link per reported date with the total found that day
- one section per reported date: summary line plus a table of the accounts
  at or above the follower count limit, already in ranked order
- closing pointer to the full data.csv history
"""

from __future__ import annotations

import sys
from datetime import date, datetime
from itertools import takewhile
from pathlib import Path
from typing import List, Optional, TextIO, Union

from .config import Settings
from .grouping import DateBucket, most_recent
from .records import Record
from .thumbnails import resolve_thumbnail

PROTECTED_GLYPH = "🔒"
VERIFIED_GLYPH = "✔️"

DATA_NOTE = (
    "The full history of all detected changes for all tracked users is available "
    "in the [`data.csv`](./data.csv) file."
)


def format_date(value: Union[date, datetime], fmt: str) -> str:
    # %e is not portable across strftime implementations
    return value.strftime(fmt.replace("%e", f"{value.day:>2}"))


def header_anchor(heading: str) -> str:
    return heading.strip().replace(" ", "-")


def status_glyphs(record: Record) -> str:
    status = ""
    if record.protected:
        status += PROTECTED_GLYPH
    if record.verified:
        status += VERIFIED_GLYPH
    return status


def id_link(user_id: int) -> str:
    return f'<a href="https://twitter.com/intent/user?user_id={user_id}">{user_id}</a>'


def profile_link(screen_name: str) -> str:
    return f'<a href="https://twitter.com/{screen_name}">{screen_name}</a>'


def image_cell(record: Record, thumbnails_dir: Path) -> str:
    src = resolve_thumbnail(record.avatar_url, thumbnails_dir)
    return (
        f'<a href="{record.avatar_url}">'
        f'<img src="{src}" width="40px" height="40px" align="center"/></a>'
    )


def table_header(kind) -> str:
    columns = ["Twitter ID", *kind.columns, "Status", "Follower count"]
    cells = "".join(f'<th align="left">{c}</th>' for c in columns)
    return f"<tr><th></th>{cells}</tr>"


def table_row(kind, record: Record, settings: Settings) -> str:
    cells = [
        image_cell(record, settings.thumbnails_dir),
        id_link(record.user_id),
        *kind.cells(record, settings),
    ]
    body = "".join(f"<td>{c}</td>" for c in cells)
    return (
        f"<tr>{body}"
        f'<td align="center">{status_glyphs(record)}</td>'
        f"<td>{record.followers_count}</td></tr>"
    )


def visible_records(bucket: DateBucket, followers_count_limit: int) -> List[Record]:
    """Leading run of the ranked records that meet the follower count limit."""
    return list(
        takewhile(lambda r: r.followers_count >= followers_count_limit, bucket.records)
    )


def render_report(
    kind,
    buckets: List[DateBucket],
    settings: Settings,
    out: Optional[TextIO] = None,
) -> int:
    """
    Write the report for `buckets` (newest first) to `out` (stdout by default).

    Returns:
        Number of table rows written across all reported dates.
    """
    if out is None:
        out = sys.stdout
    limit = settings.followers_count_limit
    reported = most_recent(buckets, settings.reported_limit)

    def emit(line: str = "") -> None:
        print(line, file=out)

    for line in kind.preamble:
        emit(line.format(limit=limit, days=settings.reported_limit))

    emit("## Contents")
    for bucket in reported:
        heading = format_date(bucket.date, settings.header_date_format)
        emit(f"* [{heading} ({bucket.total} {kind.contents_noun} found)](#{header_anchor(heading)})")

    shown = 0
    for bucket in reported:
        emit(f"\n## {format_date(bucket.date, settings.header_date_format)}")
        emit(kind.summary(bucket, limit))
        emit("<table>")
        emit(table_header(kind))
        for record in visible_records(bucket, limit):
            emit(table_row(kind, record, settings))
            shown += 1
        emit("</table>")

    emit()
    emit(DATA_NOTE)
    return shown
