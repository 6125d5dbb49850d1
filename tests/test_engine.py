from datetime import date

import pytest

from gitlab_app.core import formatting as fmt
from gitlab_app.core.fixtures import SAMPLE_ISSUES
from gitlab_app.core.mappers import map_issues
from gitlab_app.core.source import filter_window
from gitlab_app.features.issue_table import DEFAULT_COLUMNS, ColumnDescriptor, TableEngine
from gitlab_app.features.issue_table.columns import VALUE_DATE
from gitlab_app.features.issue_table.predicates import FILTER_DATE_INTERVAL, FILTER_EXACT


def _engine():
    return TableEngine(DEFAULT_COLUMNS, map_issues(SAMPLE_ISSUES))


def _iids(rows):
    return [r.iid for r in rows]


def test_no_filters_keeps_dataset_order():
    engine = _engine()
    assert _iids(engine.visible_rows()) == [101, 102, 103, 104, 105, 106, 107, 108]


def test_created_interval_filter():
    engine = _engine()
    engine.set_filter("created_at", ("2023-10-01", "2023-10-31"))
    assert set(_iids(engine.visible_rows())) == {101, 103, 104}


def test_substring_filter_on_author():
    engine = _engine()
    engine.set_filter("author.name", "SOUZA")
    assert _iids(engine.visible_rows()) == [102, 106]
    for row in engine.visible_rows():
        assert "souza" in row.author.name.lower()


def test_substring_filter_on_numeric_column():
    engine = _engine()
    engine.set_filter("iid", "10")
    assert len(engine.visible_rows()) == 8
    engine.set_filter("iid", "105")
    assert _iids(engine.visible_rows()) == [105]


def test_filters_are_anded():
    engine = _engine()
    engine.set_filter("state", "closed")
    engine.set_filter("project.name", "project b")
    assert _iids(engine.visible_rows()) == [102, 105]


def test_set_then_clear_filter_round_trip():
    engine = _engine()
    engine.set_filter("severity", "high")
    engine.set_sort("created_at", descending=True)
    before = _iids(engine.visible_rows())
    engine.set_filter("title", "issue 1")
    assert _iids(engine.visible_rows()) != before
    engine.set_filter("title", None)
    assert _iids(engine.visible_rows()) == before
    engine.set_filter("closed_at", ("2023-09-01", None))
    engine.set_filter("closed_at", (None, None))
    assert _iids(engine.visible_rows()) == before
    assert "closed_at" not in engine.filters


def test_stale_filter_value_is_harmless():
    engine = _engine()
    engine.set_filter("severity", "blocker")
    assert engine.visible_rows() == []
    engine.set_rows(map_issues(SAMPLE_ISSUES[:2]))
    assert engine.visible_rows() == []
    assert engine.filters == {"severity": "blocker"}


def test_exact_options_narrow_with_other_filters():
    engine = _engine()
    assert engine.column_options("severity") == ["high", "medium", "critical", "low"]
    engine.set_filter("state", "closed")
    assert engine.column_options("severity") == ["medium", "low", "high"]
    # A column's own filter does not narrow its options
    assert engine.column_options("state") == ["opened", "closed"]


def test_derived_month_options():
    engine = _engine()
    assert engine.column_options("month_created") == ["October", "September", "August", "November"]
    assert engine.column_options("month_closed") == ["October", "September", "November"]


def test_derived_columns_not_stored_on_rows():
    engine = _engine()
    engine.set_filter("month_created", "November")
    rows = engine.visible_rows()
    assert _iids(rows) == [107, 108]
    assert not hasattr(rows[0], "month_created")


def test_sort_by_closed_at_absent_last_both_directions():
    engine = _engine()
    engine.set_sort("closed_at")
    assert _iids(engine.visible_rows()) == [106, 105, 102, 107, 101, 103, 104, 108]
    engine.set_sort("closed_at", descending=True)
    assert _iids(engine.visible_rows()) == [107, 102, 105, 106, 101, 103, 104, 108]


def test_sort_is_stable_for_ties():
    engine = _engine()
    engine.set_sort("severity")
    assert _iids(engine.visible_rows()) == [103, 101, 104, 106, 105, 108, 102, 107]
    engine.set_sort("severity", descending=True)
    assert _iids(engine.visible_rows()) == [102, 107, 105, 108, 101, 104, 106, 103]


def test_sort_numeric_column():
    engine = _engine()
    engine.set_sort("iid", descending=True)
    assert _iids(engine.visible_rows()) == [108, 107, 106, 105, 104, 103, 102, 101]


def test_sort_does_not_change_membership():
    engine = _engine()
    engine.set_filter("state", "opened")
    unsorted = set(_iids(engine.visible_rows()))
    engine.set_sort("title", descending=True)
    assert set(_iids(engine.visible_rows())) == unsorted


def test_toggle_sort_flips_and_replaces():
    engine = _engine()
    assert engine.toggle_sort("iid").descending is False
    assert engine.toggle_sort("iid").descending is True
    assert engine.toggle_sort("iid").descending is False
    key = engine.toggle_sort("title")
    assert key.column_id == "title" and key.descending is False
    engine.clear_sort()
    assert engine.sort is None
    assert _iids(engine.visible_rows()) == [101, 102, 103, 104, 105, 106, 107, 108]


def test_invalid_column_operations():
    engine = _engine()
    with pytest.raises(KeyError):
        engine.set_filter("nope", "x")
    with pytest.raises(ValueError):
        engine.set_filter("web_url", "gitlab")
    with pytest.raises(ValueError):
        engine.set_sort("web_url")


def test_accessor_errors_do_not_crash():
    def broken(issue):
        if issue.iid % 2:
            raise RuntimeError("boom")
        return issue.created_at

    column = ColumnDescriptor(
        id="flaky",
        header="Flaky",
        accessor=broken,
        filter_kind=FILTER_DATE_INTERVAL,
        value_type=VALUE_DATE,
    )
    engine = TableEngine([column], map_issues(SAMPLE_ISSUES))
    engine.set_sort("flaky")
    # Odd iids raise and sort after the rest in dataset order
    assert _iids(engine.visible_rows()) == [106, 102, 104, 108, 101, 103, 105, 107]
    engine.set_filter("flaky", ("2023-01-01", None))
    assert set(_iids(engine.visible_rows())) == {102, 104, 106, 108}


def test_unparseable_dates_are_treated_as_absent():
    column = ColumnDescriptor(
        id="raw",
        header="Raw",
        accessor=lambda issue: "not a date" if issue.iid == 101 else issue.created_at,
        filter_kind=FILTER_DATE_INTERVAL,
        value_type=VALUE_DATE,
    )
    engine = TableEngine([column], map_issues(SAMPLE_ISSUES[:3]))
    engine.set_sort("raw")
    assert _iids(engine.visible_rows()) == [102, 103, 101]
    engine.set_filter("raw", (None, "2030-01-01"))
    assert _iids(engine.visible_rows()) == [102, 103]


def test_visible_frame_matches_visible_rows():
    engine = _engine()
    engine.set_filter("state", "opened")
    engine.set_sort("created_at", descending=True)
    frame = engine.visible_frame()
    assert list(frame["iid"]) == _iids(engine.visible_rows())
    assert engine.total_count() == len(frame) == 4


def test_empty_engine():
    engine = TableEngine()
    assert engine.visible_rows() == []
    assert engine.column_options("state") == []
    assert engine.visible_frame().empty
    assert engine.total_count() == 0


def _sample_local_edge_issues():
    late_october = dict(SAMPLE_ISSUES[0], id=199, iid=199, created_at="2023-10-31T23:30:00-03:00")
    late_september = dict(SAMPLE_ISSUES[0], id=198, iid=198, created_at="2023-10-01T01:00:00Z")
    return map_issues([late_october, late_september])


def test_created_interval_uses_displayed_local_days():
    engine = TableEngine(DEFAULT_COLUMNS, _sample_local_edge_issues())
    shown = {r.iid: fmt.format_date(r.created_at) for r in engine.visible_rows()}
    assert shown == {199: "31/10/2023", 198: "30/09/2023"}

    engine.set_filter("created_at", ("2023-10-01", "2023-10-31"))
    assert _iids(engine.visible_rows()) == [199]

    engine.set_filter("created_at", None)
    engine.set_filter("month_created", "October")
    assert _iids(engine.visible_rows()) == [199]
    assert _iids(filter_window(engine.rows, date(2023, 10, 1), date(2023, 10, 31))) == [199]


def test_candidate_count_ignores_own_filter():
    engine = _engine()
    assert engine.candidate_count("title") == 8
    engine.set_filter("state", "closed")
    engine.set_filter("title", "issue 2")
    assert engine.candidate_count("title") == 4
    assert engine.candidate_count("state") == 1
    assert TableEngine().candidate_count("title") == 0


def test_missing_values_sort_last_and_are_not_options():
    column = ColumnDescriptor(
        id="sparse",
        header="Sparse",
        accessor=lambda issue: float("nan") if issue.iid % 2 else issue.severity,
        filter_kind=FILTER_EXACT,
    )
    engine = TableEngine([column], map_issues(SAMPLE_ISSUES))
    assert engine.column_options("sparse") == ["medium", "high", "low"]
    engine.set_sort("sparse")
    assert _iids(engine.visible_rows()) == [104, 106, 108, 102, 101, 103, 105, 107]
