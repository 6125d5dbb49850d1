"""Display formatters shared by column descriptors and the table renderer."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

import pandas as pd
import pytz

from .config import DATE_DISPLAY_FORMAT, EMPTY_CELL, MONTH_NAMES, SEVERITY_LABELS, STATE_LABELS, TIMEZONE


def _local_ts(value: Any) -> pd.Timestamp | None:
    if value is None or value == "":
        return None
    ts = pd.to_datetime(value, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.tz_convert(pytz.timezone(TIMEZONE))


def day_bound(value: date | datetime, *, end_of_day: bool = False, tz=None) -> pd.Timestamp:
    """Tz-aware timestamp for ``value`` in the dashboard timezone.

    Plain dates expand to the first (or last) instant of that local day.
    Naive datetimes are localized; aware ones are kept.
    """
    tz = tz or pytz.timezone(TIMEZONE)
    if isinstance(value, datetime):
        ts = pd.Timestamp(value)
        return ts.tz_localize(tz) if ts.tzinfo is None else ts
    bound = datetime.combine(value, time.max if end_of_day else time.min)
    return pd.Timestamp(tz.localize(bound))


def month_name(value: Any) -> str | None:
    """Month name of a timestamp in the dashboard timezone, or None."""
    ts = _local_ts(value)
    if ts is None:
        return None
    return MONTH_NAMES[ts.month - 1]


def format_date(value: Any) -> str:
    ts = _local_ts(value)
    if ts is None:
        return EMPTY_CELL
    return ts.strftime(DATE_DISPLAY_FORMAT)


def format_text(value: Any) -> str:
    if value is None:
        return EMPTY_CELL
    try:
        if pd.isna(value):
            return EMPTY_CELL
    except (TypeError, ValueError):
        pass
    return str(value)


def format_iid(value: Any) -> str:
    if value is None:
        return EMPTY_CELL
    return f"#{value}"


def severity_label(value: Any) -> str:
    """Human label for a severity; unknown values are shown verbatim."""
    if value is None:
        return EMPTY_CELL
    return SEVERITY_LABELS.get(str(value).lower(), str(value))


def state_label(value: Any) -> str:
    if value is None:
        return EMPTY_CELL
    return STATE_LABELS.get(str(value), str(value))


def link_value(value: Any) -> Any:
    """Pass URLs through untouched; the renderer turns them into links."""
    return value
