"""Leave date-range arithmetic: inclusive day counts and public holiday overlap.

Inputs are whole calendar days. Datetimes and ISO strings carrying a time of
day are truncated to their date first, so both endpoints count fully.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import DateLike, to_date
from ..core.constants import PUBLIC_HOLIDAYS

Holiday = tuple[int, int, str]


def count_leave_days(start: DateLike, end: DateLike) -> int:
    """Inclusive number of days between two dates (|end - start| + 1)."""
    s, e = to_date(start), to_date(end)
    if s is None or e is None:
        raise ValueError("start and end dates are required")
    return abs((e - s).days) + 1


def holidays_in_range(
    start: DateLike,
    end: DateLike,
    holidays: Iterable[Holiday] = PUBLIC_HOLIDAYS,
) -> list[str]:
    """Names of holidays falling within [start, end], checked for every year spanned.

    Names are deduplicated and keep the order they were first met.
    """
    s, e = to_date(start), to_date(end)
    if s is None or e is None:
        return []

    table = list(holidays)
    found: dict[str, None] = {}
    for year in range(s.year, e.year + 1):
        for month, day, name in table:
            try:
                observed = date(year, month, day)
            except ValueError:
                # Feb 29 outside leap years
                continue
            if s <= observed <= e:
                found.setdefault(name, None)
    return list(found)


@dataclass(frozen=True)
class RangeSummary:
    start_date: date
    end_date: date
    total_days: int
    holidays: tuple[str, ...]

    @property
    def is_inverted(self) -> bool:
        return self.end_date < self.start_date

    @property
    def range_notice(self) -> str:
        # create_leave_request rejects the same range
        return "End date must be on or after the start date" if self.is_inverted else ""

    @property
    def holiday_notice(self) -> str:
        if not self.holidays:
            return ""
        return "Note: Your leave period includes these public holidays: " + ", ".join(self.holidays)

    def to_dict(self) -> dict:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "total_days": self.total_days,
            "holidays": list(self.holidays),
            "holiday_notice": self.holiday_notice,
            "range_notice": self.range_notice,
        }


def summarize_range(
    start: DateLike,
    end: DateLike,
    holidays: Iterable[Holiday] = PUBLIC_HOLIDAYS,
) -> Optional[RangeSummary]:
    """Day count and holiday overlap for a proposed range; None while either date is unset."""
    s, e = to_date(start), to_date(end)
    if s is None or e is None:
        return None
    return RangeSummary(
        start_date=s,
        end_date=e,
        total_days=count_leave_days(s, e),
        holidays=tuple(holidays_in_range(s, e, holidays)),
    )
