"""Date range controller: owns the selected window and notifies the host."""

from __future__ import annotations

import calendar
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime

import pytz

from gitlab_app.core.config import TIMEZONE


@dataclass(frozen=True, slots=True)
class DateRange:
    start_date: date
    end_date: date


def current_month_range(today: date | None = None) -> DateRange:
    """First and last calendar day of the month containing ``today``."""
    if today is None:
        today = datetime.now(pytz.timezone(TIMEZONE)).date()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return DateRange(today.replace(day=1), today.replace(day=last_day))


class DateRangeController:
    """Hold ``{start_date, end_date}`` and call ``on_change`` on every accepted change.

    An end date earlier than the start date is clamped up to the start date,
    so the host always sees ``end_date >= start_date``.
    """

    def __init__(self, on_change: Callable[[DateRange], None], *, today: date | None = None):
        self._on_change = on_change
        self._range = current_month_range(today)
        self._mounted = False

    @property
    def value(self) -> DateRange:
        return self._range

    def mount(self) -> DateRange:
        """Emit the default range once; later calls are no-ops."""
        if not self._mounted:
            self._mounted = True
            self._on_change(self._range)
        return self._range

    def set_start(self, start_date: date) -> DateRange:
        end_date = max(self._range.end_date, start_date)
        return self._apply(DateRange(start_date, end_date))

    def set_end(self, end_date: date) -> DateRange:
        return self._apply(DateRange(self._range.start_date, max(end_date, self._range.start_date)))

    def set_range(self, start_date: date, end_date: date) -> DateRange:
        return self._apply(DateRange(start_date, max(end_date, start_date)))

    def _apply(self, new_range: DateRange) -> DateRange:
        if new_range == self._range:
            return self._range
        self._range = new_range
        self._on_change(new_range)
        return new_range
