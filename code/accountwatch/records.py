"""
records.py

Typed change records parsed from the positional, header-less data.csv rows.

Row Contract
------------
Screen name changes (8 fields):
    detected_at, user_id, verified, protected, followers_count,
    previous_name, new_name, avatar_url

Suspensions (9 fields):
    detected_at, reversed_at, user_id, account_created_at, screen_name,
    verified, protected, followers_count, avatar_url

Rules
-----
1. Timestamps are seconds since the epoch, read as UTC.
2. Counts and ids are unsigned decimal integers (optional leading "+").
3. Flags are exactly "true" or "false".
4. Text fields are taken verbatim.
5. A suspension row with an empty user_id field is an unknown account,
   not a parse failure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence, Union

SCREEN_NAME_FIELDS = 8
SUSPENSION_FIELDS = 9

MAX_USER_ID = 2**64 - 1

_UNSIGNED_RE = re.compile(r"^\+?[0-9]+$")
_SIGNED_RE = re.compile(r"^[+-]?[0-9]+$")


class InvalidRecord(ValueError):
    """Raised when a data.csv row has the wrong shape or a field fails to parse."""

    def __init__(self, row: Sequence[str], kind: str = "record", line: Optional[int] = None):
        self.row = list(row)
        self.kind = kind
        self.line = line
        super().__init__(f"Invalid {kind}: {self.row!r}")

    def at_line(self, line: int) -> "InvalidRecord":
        return InvalidRecord(self.row, self.kind, line)


# ======================================================
# FIELD GRAMMARS
# ======================================================

def parse_timestamp(value: str) -> Optional[datetime]:
    if not _SIGNED_RE.match(value):
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def parse_unsigned(value: str, maximum: Optional[int] = None) -> Optional[int]:
    if not _UNSIGNED_RE.match(value):
        return None
    number = int(value)
    if maximum is not None and number > maximum:
        return None
    return number


def parse_bool(value: str) -> Optional[bool]:
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def format_timestamp(value: datetime) -> str:
    return str(int(value.timestamp()))


def format_bool(value: bool) -> str:
    return "true" if value else "false"


# ======================================================
# RECORDS
# ======================================================

@dataclass(frozen=True)
class ScreenNameRecord:
    detected_at: datetime
    user_id: int
    verified: bool
    protected: bool
    followers_count: int
    previous_name: str
    new_name: str
    avatar_url: str

    @property
    def detected_on(self) -> date:
        return self.detected_at.date()

    def as_row(self) -> List[str]:
        return [
            format_timestamp(self.detected_at),
            str(self.user_id),
            format_bool(self.verified),
            format_bool(self.protected),
            str(self.followers_count),
            self.previous_name,
            self.new_name,
            self.avatar_url,
        ]


@dataclass(frozen=True)
class SuspensionRecord:
    detected_at: datetime
    reversed_at: Optional[datetime]
    user_id: int
    account_created_at: datetime
    screen_name: str
    verified: bool
    protected: bool
    followers_count: int
    avatar_url: str

    @property
    def detected_on(self) -> date:
        return self.detected_at.date()

    def as_row(self) -> List[str]:
        return [
            format_timestamp(self.detected_at),
            format_timestamp(self.reversed_at) if self.reversed_at else "",
            str(self.user_id),
            format_timestamp(self.account_created_at),
            self.screen_name,
            format_bool(self.verified),
            format_bool(self.protected),
            str(self.followers_count),
            self.avatar_url,
        ]


@dataclass(frozen=True)
class UnknownSuspension:
    """A detected suspension (or reversal) for an account we have no details for."""

    detected_at: datetime
    reversed_at: Optional[datetime] = None

    @property
    def detected_on(self) -> date:
        return self.detected_at.date()


Record = Union[ScreenNameRecord, SuspensionRecord]


# ======================================================
# PARSERS
# ======================================================

def parse_screen_name_row(row: Sequence[str]) -> ScreenNameRecord:
    if len(row) != SCREEN_NAME_FIELDS:
        raise InvalidRecord(row, "screen names record")

    detected_at = parse_timestamp(row[0])
    user_id = parse_unsigned(row[1], MAX_USER_ID)
    verified = parse_bool(row[2])
    protected = parse_bool(row[3])
    followers_count = parse_unsigned(row[4])

    if None in (detected_at, user_id, verified, protected, followers_count):
        raise InvalidRecord(row, "screen names record")

    return ScreenNameRecord(
        detected_at=detected_at,
        user_id=user_id,
        verified=verified,
        protected=protected,
        followers_count=followers_count,
        previous_name=row[5],
        new_name=row[6],
        avatar_url=row[7],
    )


def _parse_reversal(value: str, row: Sequence[str]) -> Optional[datetime]:
    if value == "":
        return None
    reversed_at = parse_timestamp(value)
    if reversed_at is None:
        raise InvalidRecord(row, "suspensions record")
    return reversed_at


def parse_suspension_row(row: Sequence[str]) -> Union[SuspensionRecord, UnknownSuspension]:
    if len(row) != SUSPENSION_FIELDS:
        raise InvalidRecord(row, "suspensions record")

    detected_at = parse_timestamp(row[0])
    if detected_at is None:
        raise InvalidRecord(row, "suspensions record")
    reversed_at = _parse_reversal(row[1], row)

    # Empty user id marks an account whose details were never captured
    if row[2] == "":
        return UnknownSuspension(detected_at=detected_at, reversed_at=reversed_at)

    user_id = parse_unsigned(row[2], MAX_USER_ID)
    account_created_at = parse_timestamp(row[3])
    verified = parse_bool(row[5])
    protected = parse_bool(row[6])
    followers_count = parse_unsigned(row[7])

    if None in (user_id, account_created_at, verified, protected, followers_count):
        raise InvalidRecord(row, "suspensions record")

    return SuspensionRecord(
        detected_at=detected_at,
        reversed_at=reversed_at,
        user_id=user_id,
        account_created_at=account_created_at,
        screen_name=row[4],
        verified=verified,
        protected=protected,
        followers_count=followers_count,
        avatar_url=row[8],
    )
