"""Mapping raw GitLab issue JSON into IssueModel instances and DataFrames."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

import pandas as pd

from .config import STATE_CLOSED, STATE_OPENED, normalize_severity
from .models import AuthorModel, IssueModel, ProjectModel


def parse_dt(val: Any) -> datetime | None:
    """Parse an ISO 8601 string (or datetime) into a tz-aware UTC datetime."""
    if val is None or val == "":
        return None
    ts = pd.to_datetime(val, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def _normalize_state(value: Any) -> str:
    text = str(value or "").strip().lower()
    if text in {"closed", "close"}:
        return STATE_CLOSED
    # GitLab also reports "reopened" on some endpoints
    return STATE_OPENED


def _project_ref(raw: dict[str, Any]) -> ProjectModel:
    project = raw.get("project")
    if isinstance(project, dict):
        return ProjectModel(id=project.get("id"), name=project.get("name"))
    # The REST endpoints only embed project_id; derive a readable name from
    # the full reference ("group/project#12") when it is present.
    references = raw.get("references") or {}
    full_ref = str(references.get("full") or "")
    name = full_ref.split("#", 1)[0] if "#" in full_ref else None
    project_id = raw.get("project_id")
    if name is None and project_id is not None:
        name = str(project_id)
    return ProjectModel(id=project_id, name=name)


def map_issue(raw: dict[str, Any]) -> IssueModel:
    state = _normalize_state(raw.get("state"))
    author = raw.get("author") or {}
    milestone = raw.get("milestone") or {}
    closed_at = parse_dt(raw.get("closed_at"))
    if state == STATE_OPENED:
        # Reopened issues may still carry the previous close timestamp
        closed_at = None
    return IssueModel(
        id=int(raw.get("id")),
        iid=int(raw.get("iid")),
        title=raw.get("title"),
        description=raw.get("description"),
        state=state,
        severity=normalize_severity(raw.get("severity")),
        created_at=parse_dt(raw.get("created_at")),
        closed_at=closed_at,
        author=AuthorModel(id=author.get("id"), name=author.get("name")),
        project=_project_ref(raw),
        web_url=raw.get("web_url"),
        updated_at=parse_dt(raw.get("updated_at")),
        milestone=milestone.get("title") if isinstance(milestone, dict) else None,
        labels=tuple(raw.get("labels") or ()),
        assignees=tuple(a.get("name") for a in raw.get("assignees") or () if isinstance(a, dict) and a.get("name")),
    )


def map_issues(raw_issues: Iterable[dict[str, Any]]) -> list[IssueModel]:
    """Map raw issues, keeping only the first occurrence of each ``id``."""
    seen: set[int] = set()
    out: list[IssueModel] = []
    for raw in raw_issues:
        issue = map_issue(raw)
        if issue.id in seen:
            continue
        seen.add(issue.id)
        out.append(issue)
    return out


def issues_to_dataframe(issues: Iterable[IssueModel]) -> pd.DataFrame:
    rows = []
    for i in issues:
        rows.append(
            {
                "id": i.id,
                "iid": i.iid,
                "project": i.project.name,
                "title": i.title,
                "state": i.state,
                "severity": i.severity,
                "created_at": i.created_at,
                "closed_at": i.closed_at,
                "updated_at": i.updated_at,
                "author": i.author.name,
                "milestone": i.milestone,
                "labels": ", ".join(sorted(set(i.labels), key=str.lower)),
                "assignees": ", ".join(i.assignees),
                "web_url": i.web_url,
            }
        )
    df = pd.DataFrame(rows)
    for col in ("created_at", "closed_at", "updated_at"):
        if col in df.columns:
            df[col] = pd.to_datetime(df[col], utc=True, errors="coerce")
    return df
