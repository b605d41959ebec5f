"""
The two report kinds. Each one knows its row shape, its preamble and the
kind-specific table columns; grouping, ranking and rendering are shared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from .config import Settings
from .grouping import DateBucket
from .records import (
    SCREEN_NAME_FIELDS,
    SUSPENSION_FIELDS,
    ScreenNameRecord,
    SuspensionRecord,
    parse_screen_name_row,
    parse_suspension_row,
)
from .report import DATA_NOTE, format_date, profile_link


@dataclass(frozen=True)
class ReportKind:
    name: str
    title: str
    default_base: str
    width: int
    parse_row: Callable[[Sequence[str]], object]
    preamble: Tuple[str, ...]
    columns: Tuple[str, ...]
    contents_noun: str
    cells: Callable[[object, Settings], List[str]]
    summary: Callable[[DateBucket, int], str]


_TRACKING_NOTE = (
    "This report tracks {what} for several million far-right and far-right adjacent accounts on Twitter",
    "(including a lot of crypto / NFT shit, some spam, antivaxxers, etc.).\n",
)


# ======================================================
# SCREEN NAME CHANGES
# ======================================================

def _screen_name_cells(record: ScreenNameRecord, settings: Settings) -> List[str]:
    return [record.previous_name, profile_link(record.new_name)]


def _screen_name_summary(bucket: DateBucket, limit: int) -> str:
    return (
        f"Found {bucket.total} screen name changes, "
        f"with {bucket.included(limit)} included here."
    )


SCREEN_NAMES = ReportKind(
    name="screen-names",
    title="Screen name changes",
    default_base="screen-names/",
    width=SCREEN_NAME_FIELDS,
    parse_row=parse_screen_name_row,
    preamble=(
        "# Screen name changes",
        _TRACKING_NOTE[0].format(what="screen name changes"),
        _TRACKING_NOTE[1],
        "This page presents the last {days} days of available data for all users with more than {limit} followers.",
        "Please note:",
        "* The date listed indicates the day the change was detected, and in some cases it may have happened earlier.",
        "* The \"Twitter ID\" column provides a stable link for the account in cases where the screen name has been changed again.",
        "* Some accounts may have been suspended or deactivated since being added to the report.",
        "* There's a lot of potentially offensive content here, including racial slurs and obscenity.\n",
        DATA_NOTE,
    ),
    columns=("Previous screen name", "New screen name"),
    contents_noun="changes",
    cells=_screen_name_cells,
    summary=_screen_name_summary,
)


# ======================================================
# SUSPENSIONS
# ======================================================

def _suspension_cells(record: SuspensionRecord, settings: Settings) -> List[str]:
    reversed_on = (
        format_date(record.reversed_at, settings.cell_date_format)
        if record.reversed_at is not None
        else ""
    )
    return [
        profile_link(record.screen_name),
        format_date(record.account_created_at, settings.cell_date_format),
        reversed_on,
    ]


def _suspension_summary(bucket: DateBucket, limit: int) -> str:
    unknown = f" ({bucket.unknown_count} for unknown accounts)" if bucket.unknown_count else ""
    return (
        f"Found {bucket.total} suspensions{unknown}, "
        f"with {bucket.included(limit)} included here."
    )


SUSPENSIONS = ReportKind(
    name="suspensions",
    title="Suspensions",
    default_base="suspensions/",
    width=SUSPENSION_FIELDS,
    parse_row=parse_suspension_row,
    preamble=(
        "# Suspensions",
        _TRACKING_NOTE[0].format(what="suspensions"),
        _TRACKING_NOTE[1],
        "This page presents the last {days} days of available data for all users with more than {limit} followers.",
        "Please note:",
        "* The date listed indicates the day the suspension was detected, and in some cases it may have happened earlier.",
        "* The \"Reversed\" column gives the date the account was found to be active again, if it has been.",
        "* Totals include suspensions of accounts we have no profile details for; these are not listed in the tables.",
        "* There's a lot of potentially offensive content here, including racial slurs and obscenity.\n",
        DATA_NOTE,
    ),
    columns=("Screen name", "Created", "Reversed"),
    contents_noun="suspensions",
    cells=_suspension_cells,
    summary=_suspension_summary,
)

KINDS = {kind.name: kind for kind in (SCREEN_NAMES, SUSPENSIONS)}
