"""Column descriptors for the issue table.

A descriptor says how to extract a value from an ``IssueModel`` (``accessor``),
how to filter it (``filter_kind``), how to compare it when sorting
(``value_type``) and how to show it (``formatter``). Derived columns such as
the month of creation are plain descriptors whose accessor computes the value;
nothing is stored back on the issue.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from gitlab_app.core import formatting as fmt
from gitlab_app.core.models import IssueModel

from .predicates import (
    FILTER_DATE_INTERVAL,
    FILTER_EXACT,
    FILTER_KINDS,
    FILTER_NONE,
    FILTER_SUBSTRING,
)

VALUE_TEXT = "text"
VALUE_NUMBER = "number"
VALUE_DATE = "date"


@dataclass(frozen=True, slots=True)
class ColumnDescriptor:
    id: str
    header: str
    accessor: Callable[[IssueModel], Any]
    filter_kind: str = FILTER_NONE
    sortable: bool = True
    value_type: str = VALUE_TEXT
    formatter: Callable[[Any], str] = fmt.format_text

    def __post_init__(self):
        if self.filter_kind not in FILTER_KINDS:
            raise ValueError(f"Unknown filter kind {self.filter_kind!r} for column {self.id!r}")

    @property
    def filterable(self) -> bool:
        return self.filter_kind != FILTER_NONE


DEFAULT_COLUMNS: tuple[ColumnDescriptor, ...] = (
    ColumnDescriptor(
        id="project.name",
        header="Project",
        accessor=lambda issue: issue.project.name,
        filter_kind=FILTER_SUBSTRING,
    ),
    ColumnDescriptor(
        id="iid",
        header="ID",
        accessor=lambda issue: issue.iid,
        filter_kind=FILTER_SUBSTRING,
        value_type=VALUE_NUMBER,
        formatter=fmt.format_iid,
    ),
    ColumnDescriptor(
        id="title",
        header="Title",
        accessor=lambda issue: issue.title,
        filter_kind=FILTER_SUBSTRING,
    ),
    ColumnDescriptor(
        id="web_url",
        header="Link",
        accessor=lambda issue: issue.web_url,
        sortable=False,
        formatter=fmt.link_value,
    ),
    ColumnDescriptor(
        id="state",
        header="Status",
        accessor=lambda issue: issue.state,
        filter_kind=FILTER_EXACT,
        formatter=fmt.state_label,
    ),
    ColumnDescriptor(
        id="severity",
        header="Severity",
        accessor=lambda issue: issue.severity,
        filter_kind=FILTER_EXACT,
        formatter=fmt.severity_label,
    ),
    ColumnDescriptor(
        id="created_at",
        header="Opened",
        accessor=lambda issue: issue.created_at,
        filter_kind=FILTER_DATE_INTERVAL,
        value_type=VALUE_DATE,
        formatter=fmt.format_date,
    ),
    ColumnDescriptor(
        id="month_created",
        header="Month Opened",
        accessor=lambda issue: fmt.month_name(issue.created_at),
        filter_kind=FILTER_EXACT,
    ),
    ColumnDescriptor(
        id="closed_at",
        header="Closed",
        accessor=lambda issue: issue.closed_at,
        filter_kind=FILTER_DATE_INTERVAL,
        value_type=VALUE_DATE,
        formatter=fmt.format_date,
    ),
    ColumnDescriptor(
        id="month_closed",
        header="Month Closed",
        accessor=lambda issue: fmt.month_name(issue.closed_at),
        filter_kind=FILTER_EXACT,
    ),
    ColumnDescriptor(
        id="author.name",
        header="Author",
        accessor=lambda issue: issue.author.name,
        filter_kind=FILTER_SUBSTRING,
    ),
)

COLUMNS_BY_ID: dict[str, ColumnDescriptor] = {c.id: c for c in DEFAULT_COLUMNS}


def select_columns(column_ids: Iterable[str] | None = None) -> list[ColumnDescriptor]:
    """Descriptors for ``column_ids`` in the given order; unknown ids are skipped."""
    if column_ids is None:
        return list(DEFAULT_COLUMNS)
    return [COLUMNS_BY_ID[cid] for cid in column_ids if cid in COLUMNS_BY_ID]

