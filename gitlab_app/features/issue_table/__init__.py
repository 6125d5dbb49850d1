"""Issue table feature module: column predicates, descriptors and the table engine."""

from gitlab_app.features.issue_table.columns import DEFAULT_COLUMNS, ColumnDescriptor, select_columns
from gitlab_app.features.issue_table.context import IssueTableContext, build_table_context
from gitlab_app.features.issue_table.engine import SortKey, TableEngine
from gitlab_app.features.issue_table.predicates import (
    date_interval_match,
    exact_match,
    substring_match,
)

__all__ = [
    "DEFAULT_COLUMNS",
    "ColumnDescriptor",
    "IssueTableContext",
    "SortKey",
    "TableEngine",
    "build_table_context",
    "date_interval_match",
    "exact_match",
    "select_columns",
    "substring_match",
]
