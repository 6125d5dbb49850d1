import asyncio
import logging
from datetime import date, datetime

import pandas as pd
import pytz

from gitlab_app.core.fixtures import SAMPLE_ISSUES
from gitlab_app.core.mappers import map_issues
from gitlab_app.core.service import IssueService
from gitlab_app.core.source import (
    FixtureIssueSource,
    GitLabIssueSource,
    IssueFetchError,
    IssueSource,
    filter_window,
    window_bounds,
)


def _iids(issues):
    return {i.iid for i in issues}


def test_october_window_matches_sample():
    issues = filter_window(map_issues(SAMPLE_ISSUES), date(2023, 10, 1), date(2023, 10, 31))
    # 106 (created 2023-08-15, closed 2023-09-05) does not span October
    assert _iids(issues) == {101, 102, 103, 104}


def test_missing_bounds_return_everything():
    issues = map_issues(SAMPLE_ISSUES)
    assert len(filter_window(issues, None, None)) == 8
    assert len(filter_window(issues, date(2023, 10, 1), None)) == 8


def test_span_rule_includes_long_running_closed_issue():
    issues = filter_window(map_issues(SAMPLE_ISSUES), date(2023, 8, 20), date(2023, 8, 31))
    assert _iids(issues) == {106}


def test_open_issue_only_matches_by_creation_date():
    issues = filter_window(map_issues(SAMPLE_ISSUES), date(2023, 11, 1), date(2023, 11, 30))
    # 101/103/104 are still open in November but were created in October
    assert _iids(issues) == {107, 108}


def test_closed_issue_without_close_date():
    raw = [
        {
            "id": 1,
            "iid": 1,
            "state": "closed",
            "created_at": "2023-10-10T10:00:00Z",
            "closed_at": None,
            "author": {},
        },
        {
            "id": 2,
            "iid": 2,
            "state": "closed",
            "created_at": "2023-08-10T10:00:00Z",
            "closed_at": None,
            "author": {},
        },
    ]
    issues = filter_window(map_issues(raw), date(2023, 10, 1), date(2023, 10, 31))
    assert _iids(issues) == {1}


def test_window_bounds_expand_dates_to_full_days():
    tz = pytz.timezone("America/Sao_Paulo")
    start, end = window_bounds(date(2023, 10, 1), date(2023, 10, 31), tz)
    assert start == pd.Timestamp("2023-10-01T00:00:00-03:00")
    assert end.date() == date(2023, 10, 31)
    assert end.hour == 23 and end.minute == 59


def test_window_bounds_keep_aware_datetimes():
    start_dt = datetime(2023, 10, 1, 12, tzinfo=pytz.UTC)
    end_dt = datetime(2023, 10, 2, 12, tzinfo=pytz.UTC)
    start, end = window_bounds(start_dt, end_dt)
    assert start == pd.Timestamp(start_dt)
    assert end == pd.Timestamp(end_dt)


def test_fixture_source_is_async():
    source = FixtureIssueSource()
    issues = asyncio.run(source.list_issues(date(2023, 10, 1), date(2023, 10, 31)))
    assert _iids(issues) == {101, 102, 103, 104}


class _FakeAPI:
    project = "group/project"
    group = None

    def __init__(self, raw):
        self.raw = raw
        self.calls = []

    def list_issues(self, *, updated_after=None):
        self.calls.append(updated_after)
        return self.raw


def test_gitlab_source_applies_window_locally():
    api = _FakeAPI(SAMPLE_ISSUES)
    source = GitLabIssueSource(api)
    issues = asyncio.run(source.list_issues(date(2023, 10, 1), date(2023, 10, 31)))
    assert _iids(issues) == {101, 102, 103, 104}
    assert api.calls == ["2023-10-01T03:00:00+00:00"]
    assert source.label == "group/project"


def test_gitlab_source_without_window():
    api = _FakeAPI(SAMPLE_ISSUES)
    issues = asyncio.run(GitLabIssueSource(api).list_issues())
    assert len(issues) == 8
    assert api.calls == [None]


class _FailingSource(IssueSource):
    label = "Broken"

    async def list_issues(self, start=None, end=None):
        raise ConnectionError("network unreachable")


def test_service_reports_typed_error(caplog):
    service = IssueService(_FailingSource())
    with caplog.at_level(logging.ERROR, logger="gitlab_app.core.service"):
        result = asyncio.run(service.fetch_issues(date(2023, 10, 1), date(2023, 10, 31)))
    assert result.failed
    assert result.issues == []
    assert isinstance(result.error, IssueFetchError)
    assert "network unreachable" in str(result.error)
    assert "Error fetching issues" in caplog.text


def test_service_distinguishes_empty_result():
    service = IssueService(FixtureIssueSource([]))
    result = asyncio.run(service.fetch_issues(date(2023, 10, 1), date(2023, 10, 31)))
    assert not result.failed
    assert result.issues == []


def test_service_progress_callback():
    events = []
    service = IssueService()
    asyncio.run(service.fetch_issues(progress=lambda msg, cur, tot: events.append((msg, cur, tot))))
    assert events[0][0].startswith("Querying issues")
    assert events[-1] == ("Loaded 8 issue(s)", 8, 8)
