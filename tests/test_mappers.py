from datetime import UTC, datetime

from gitlab_app.core.config import normalize_severity
from gitlab_app.core.fixtures import SAMPLE_ISSUES
from gitlab_app.core.mappers import issues_to_dataframe, map_issue, map_issues


def _raw(**overrides):
    raw = {
        "id": 42,
        "iid": 7,
        "title": "Crash on save",
        "description": "Stack trace attached",
        "state": "opened",
        "severity": "HIGH",
        "created_at": "2024-01-05T10:00:00.000Z",
        "updated_at": "2024-01-06T10:00:00.000Z",
        "closed_at": None,
        "author": {"id": 3, "name": "Maria Souza"},
        "project_id": 99,
        "references": {"full": "acme/editor#7"},
        "web_url": "https://gitlab.example.com/acme/editor/-/issues/7",
        "labels": ["bug"],
        "assignees": [{"id": 1, "name": "Ana Costa"}],
    }
    raw.update(overrides)
    return raw


def test_map_issue_basic_fields():
    issue = map_issue(_raw())
    assert issue.iid == 7
    assert issue.severity == "high"
    assert issue.created_at == datetime(2024, 1, 5, 10, tzinfo=UTC)
    assert issue.author.name == "Maria Souza"
    assert issue.project.name == "acme/editor"
    assert issue.assignees == ("Ana Costa",)


def test_open_issue_never_has_close_date():
    issue = map_issue(_raw(state="reopened", closed_at="2024-01-07T10:00:00Z"))
    assert issue.state == "opened"
    assert issue.closed_at is None


def test_unknown_severity_passes_through():
    assert normalize_severity("UNKNOWN") == "UNKNOWN"
    assert normalize_severity("Critical") == "critical"
    assert normalize_severity("  ") is None
    assert map_issue(_raw(severity="blocker")).severity == "blocker"


def test_project_name_falls_back_to_id():
    issue = map_issue(_raw(references=None))
    assert issue.project.name == "99"


def test_map_issues_keeps_first_of_duplicate_ids():
    issues = map_issues([_raw(title="first"), _raw(title="second")])
    assert [i.title for i in issues] == ["first"]


def test_issues_to_dataframe():
    df = issues_to_dataframe(map_issues(SAMPLE_ISSUES))
    assert len(df) == 8
    assert str(df["created_at"].dt.tz) == "UTC"
    assert df["closed_at"].isna().sum() == 4
    assert df.loc[0, "labels"] == "bug, frontend"
