"""
Group parsed records into per-day buckets and rank them for reporting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Union

from .records import Record, UnknownSuspension


@dataclass
class DateBucket:
    date: date
    records: List[Record] = field(default_factory=list)
    unknown_count: int = 0

    @property
    def total(self) -> int:
        """Everything detected on this date, including unknown accounts."""
        return len(self.records) + self.unknown_count

    def included(self, followers_count_limit: int) -> int:
        return sum(1 for r in self.records if r.followers_count >= followers_count_limit)


def rank_key(record: Record):
    return (-record.followers_count, record.user_id)


def build_buckets(items: Iterable[Union[Record, UnknownSuspension]]) -> List[DateBucket]:
    """
    Consume every item and return the buckets newest first, each one ranked by
    follower count (descending) with the user id (ascending) breaking ties.
    """
    by_date: Dict[date, DateBucket] = {}

    for item in items:
        day = item.detected_on
        bucket = by_date.get(day)
        if bucket is None:
            bucket = by_date[day] = DateBucket(day)
        if isinstance(item, UnknownSuspension):
            bucket.unknown_count += 1
        else:
            bucket.records.append(item)

    for bucket in by_date.values():
        bucket.records.sort(key=rank_key)

    return sorted(by_date.values(), key=lambda b: b.date, reverse=True)


def most_recent(buckets: List[DateBucket], limit: int) -> List[DateBucket]:
    return buckets[:limit]
