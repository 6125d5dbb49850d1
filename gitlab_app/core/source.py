"""Issue data sources and the date-window inclusion rule.

A source returns the issues relevant to a ``[start, end]`` window. Two
implementations exist: the in-memory fixture used for development and the
GitLab REST source. Both apply the same window predicate so the dashboard
behaves identically whichever one is configured.

Window semantics (``issue_in_window``):

- open issues match only when ``created_at`` falls inside the window;
- closed issues match when ``created_at`` or ``closed_at`` falls inside the
  window, or when the issue spans it (created before the start and closed
  after the end).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import Any

import pandas as pd
import pytz

from .config import TIMEZONE
from .fixtures import SAMPLE_ISSUES
from .formatting import day_bound
from .gitlab_client import GitLabAPI
from .mappers import map_issues
from .models import IssueModel

logger = logging.getLogger(__name__)


class IssueFetchError(Exception):
    """Raised (or reported) when issues cannot be retrieved from a source."""


def window_bounds(
    start: date | datetime,
    end: date | datetime,
    tz: pytz.BaseTzInfo | None = None,
) -> tuple[pd.Timestamp, pd.Timestamp]:
    """Resolve a window into tz-aware inclusive bounds.

    Plain dates expand to the start of ``start`` and the end of ``end`` in the
    dashboard timezone. Naive datetimes are localized; aware ones are kept.
    """
    tz = tz or pytz.timezone(TIMEZONE)
    return day_bound(start, tz=tz), day_bound(end, end_of_day=True, tz=tz)


def issue_in_window(issue: IssueModel, start: pd.Timestamp, end: pd.Timestamp) -> bool:
    created = pd.Timestamp(issue.created_at) if issue.created_at is not None else None
    created_in_range = created is not None and start <= created <= end

    if issue.is_open:
        return created_in_range

    if created_in_range:
        return True
    if issue.closed_at is None:
        return False
    closed = pd.Timestamp(issue.closed_at)
    closed_in_range = start <= closed <= end
    spans_range = created is not None and created <= start and closed >= end
    return closed_in_range or spans_range


def filter_window(
    issues: Iterable[IssueModel],
    start: date | datetime | None,
    end: date | datetime | None,
) -> list[IssueModel]:
    if start is None or end is None:
        return list(issues)
    start_ts, end_ts = window_bounds(start, end)
    return [issue for issue in issues if issue_in_window(issue, start_ts, end_ts)]


class IssueSource:
    """Base class for issue sources.

    Subclasses implement ``list_issues`` and may raise; error recovery happens
    in ``IssueService``.
    """

    label = "Issues"

    async def list_issues(
        self,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
    ) -> list[IssueModel]:
        raise NotImplementedError


class FixtureIssueSource(IssueSource):
    label = "Sample data"

    def __init__(self, raw_issues: Sequence[dict[str, Any]] | None = None):
        self._raw = list(SAMPLE_ISSUES if raw_issues is None else raw_issues)

    async def list_issues(self, start=None, end=None) -> list[IssueModel]:
        return filter_window(map_issues(self._raw), start, end)


class GitLabIssueSource(IssueSource):
    def __init__(self, api: GitLabAPI):
        self.api = api

    @property
    def label(self) -> str:
        return self.api.project or self.api.group or "GitLab"

    async def list_issues(self, start=None, end=None) -> list[IssueModel]:
        updated_after = None
        if start is not None and end is not None:
            # Anything created, closed or spanning the window was updated at or
            # after its start, so this is a superset of the window.
            start_ts, _ = window_bounds(start, end)
            updated_after = start_ts.tz_convert(pytz.UTC).isoformat()
        raw = await asyncio.to_thread(self.api.list_issues, updated_after=updated_after)
        logger.debug("GitLab returned %s raw issue(s) for %s", len(raw), self.label)
        return filter_window(map_issues(raw), start, end)
