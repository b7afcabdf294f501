"""Week/month period boundaries relative to a reference instant."""

import calendar
import enum
from datetime import date, datetime, time, timedelta
from typing import NamedTuple

END_OF_DAY = time(23, 59, 59, 999000)


class PeriodKind(str, enum.Enum):
    week = "week"
    month = "month"


class DateRange(NamedTuple):
    """Inclusive bounds: start at local midnight, end at 23:59:59.999."""

    start_date: datetime
    end_date: datetime

    @property
    def first_day(self) -> date:
        return self.start_date.date()

    @property
    def last_day(self) -> date:
        return self.end_date.date()


def _bounds(first: date, last: date, tzinfo) -> DateRange:
    return DateRange(
        start_date=datetime.combine(first, time.min, tzinfo=tzinfo),
        end_date=datetime.combine(last, END_OF_DAY, tzinfo=tzinfo),
    )


def resolve_period(kind: PeriodKind | str, offset: int, now: datetime) -> DateRange:
    """
    Return the inclusive range of the period `offset` periods before the one containing `now`.
    Weeks start on Sunday. Boundaries keep now's tzinfo (naive in, naive out).
    """
    kind = PeriodKind(kind)
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    today = now.date()

    if kind is PeriodKind.week:
        days_since_sunday = (today.weekday() + 1) % 7  # Sunday=0 .. Saturday=6
        first = today - timedelta(days=days_since_sunday + 7 * offset)
        return _bounds(first, first + timedelta(days=6), now.tzinfo)

    year, month_index = divmod(today.year * 12 + (today.month - 1) - offset, 12)
    month = month_index + 1
    last_day = calendar.monthrange(year, month)[1]
    return _bounds(date(year, month, 1), date(year, month, last_day), now.tzinfo)
