"""Local calendar-day arithmetic.

Every streak, completion and density computation asks this object where
a day starts and ends, so "today" follows the user's wall clock rather
than raw timestamp equality.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo

import pandas as pd

from wellness_engine import config


class DayCalendar:
    """Day-boundary helpers bound to one timezone and one clock.

    Args:
        tz: Timezone that defines local days. ``None`` works with naive
            datetimes in the machine's local time.
        clock: Returns the current instant. Tests inject a fixed clock.
    """

    def __init__(
        self,
        tz: Optional[tzinfo] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.tz = tz
        self._clock = clock

    @classmethod
    def from_config(cls) -> DayCalendar:
        """Build a calendar for ``WELLNESS_TIMEZONE`` (naive local if unset)."""
        tz = ZoneInfo(config.TIMEZONE) if config.TIMEZONE else None
        return cls(tz=tz)

    def now(self) -> datetime:
        if self._clock is not None:
            return self._localize(self._clock())
        return datetime.now(self.tz)

    def _localize(self, instant: datetime) -> datetime:
        if self.tz is not None and instant.tzinfo is not None:
            return instant.astimezone(self.tz)
        return instant

    def start_of_day(self, instant: datetime) -> datetime:
        return self._localize(instant).replace(hour=0, minute=0, second=0, microsecond=0)

    def end_of_day(self, instant: datetime) -> datetime:
        """Last representable instant of the local day (inclusive bound)."""
        return self.add_days(self.start_of_day(instant), 1) - timedelta(microseconds=1)

    def local_date(self, instant: datetime) -> date:
        return self._localize(instant).date()

    def is_same_day(self, a: datetime, b: datetime) -> bool:
        return self.local_date(a) == self.local_date(b)

    def add_days(self, instant: datetime, days: int) -> datetime:
        # Aware datetime arithmetic is wall-clock arithmetic, so midnight
        # stays midnight across DST changes.
        return instant + timedelta(days=days)

    def add_months(self, instant: datetime, months: int) -> datetime:
        """Shift by calendar months, clamping to the last day of short months."""
        shifted = pd.Timestamp(instant) + pd.DateOffset(months=months)
        return shifted.to_pydatetime()

    def start_of_month(self, instant: datetime) -> datetime:
        return self.start_of_day(instant).replace(day=1)

    def days_in_month(self, instant: datetime) -> list[datetime]:
        """Start-of-day instants for every day of the month containing *instant*."""
        month_start = self.start_of_month(instant)
        count = pd.Timestamp(month_start).days_in_month
        return [month_start.replace(day=day) for day in range(1, count + 1)]
