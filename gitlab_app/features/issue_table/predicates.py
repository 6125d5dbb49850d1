"""Column filter predicates for the issue table.

Each predicate is a pure function ``(row_value, filter_value) -> bool``; the
engine ANDs them across every column with an active filter.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

import pandas as pd

from gitlab_app.core.formatting import day_bound

FILTER_NONE = "none"
FILTER_SUBSTRING = "substring"
FILTER_EXACT = "exact"
FILTER_DATE_INTERVAL = "date_interval"

FILTER_KINDS = frozenset({FILTER_NONE, FILTER_SUBSTRING, FILTER_EXACT, FILTER_DATE_INTERVAL})

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_absent(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # Non-scalar values (lists, dicts) are never "absent"
        return False


def to_timestamp(value: Any) -> pd.Timestamp | None:
    """Parse a date-like value into a UTC timestamp; None when unparseable."""
    if is_absent(value) or value == "":
        return None
    try:
        ts = pd.to_datetime(value, utc=True, errors="coerce")
    except (TypeError, ValueError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts


def _bound(value: Any, *, upper: bool) -> pd.Timestamp | None:
    # Date-only bounds name a whole day in the dashboard timezone
    if isinstance(value, str) and _DATE_ONLY.match(value.strip()):
        value = date.fromisoformat(value.strip())
    if isinstance(value, date) and not isinstance(value, datetime):
        return day_bound(value, end_of_day=upper)
    return to_timestamp(value)


def substring_match(row_value: Any, filter_value: Any) -> bool:
    if filter_value is None or filter_value == "":
        return True
    if is_absent(row_value):
        return False
    return str(filter_value).lower() in str(row_value).lower()


def exact_match(row_value: Any, filter_value: Any) -> bool:
    if filter_value is None:
        return True
    if is_absent(row_value):
        return False
    return str(row_value) == str(filter_value)


def date_interval_match(row_value: Any, filter_value: Any) -> bool:
    """Inclusive ``[min, max]`` test; either bound may be missing."""
    lower, upper = normalize_interval(filter_value)
    if lower is None and upper is None:
        return True
    ts = to_timestamp(row_value)
    if ts is None:
        return False
    if lower is not None and ts < _bound(lower, upper=False):
        return False
    if upper is not None and ts > _bound(upper, upper=True):
        return False
    return True


def normalize_interval(filter_value: Any) -> tuple[Any, Any]:
    """Coerce a date-interval filter value into a ``(min, max)`` pair.

    Empty strings and unparseable bounds collapse to None.
    """
    if filter_value is None:
        return None, None
    if isinstance(filter_value, (list, tuple)):
        items = list(filter_value) + [None, None]
        lower, upper = items[0], items[1]
    else:
        lower, upper = filter_value, None
    lower = lower if to_timestamp(lower) is not None else None
    upper = upper if to_timestamp(upper) is not None else None
    return lower, upper


PREDICATES: dict[str, Callable[[Any, Any], bool]] = {
    FILTER_SUBSTRING: substring_match,
    FILTER_EXACT: exact_match,
    FILTER_DATE_INTERVAL: date_interval_match,
}


def is_empty_filter(kind: str, filter_value: Any) -> bool:
    """True when ``filter_value`` imposes no constraint for ``kind``."""
    if filter_value is None:
        return True
    if kind == FILTER_DATE_INTERVAL:
        return normalize_interval(filter_value) == (None, None)
    if kind == FILTER_SUBSTRING:
        return filter_value == ""
    if kind == FILTER_EXACT:
        return filter_value == ""
    return True


def column_mask(values: pd.Series, kind: str, filter_value: Any) -> pd.Series:
    """Boolean mask of ``values`` passing the ``kind`` predicate."""
    predicate = PREDICATES[kind]
    return values.map(lambda v: predicate(v, filter_value)).astype(bool)
