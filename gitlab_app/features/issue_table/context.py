"""Pure helpers to build the issue table view context (no Streamlit)."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from gitlab_app.core.models import IssueModel

from .columns import ColumnDescriptor
from .engine import TableEngine

SORT_ASC_MARK = "▲"
SORT_DESC_MARK = "▼"


@dataclass(slots=True)
class IssueTableContext:
    """Everything the page needs to render one pass of the table."""

    rows: list[IssueModel]
    display: pd.DataFrame
    headers: dict[str, str]
    total: int = 0


def header_label(engine: TableEngine, column: ColumnDescriptor) -> str:
    sort = engine.sort
    if sort is None or sort.column_id != column.id:
        return column.header
    mark = SORT_DESC_MARK if sort.descending else SORT_ASC_MARK
    return f"{column.header} {mark}"


def format_frame(values: pd.DataFrame, columns: list[ColumnDescriptor]) -> pd.DataFrame:
    """Apply each column's display formatter; raw ids stay as column names."""
    out = pd.DataFrame(index=values.index)
    for column in columns:
        if column.id not in values.columns:
            continue
        out[column.id] = values[column.id].map(column.formatter)
    return out


def build_table_context(engine: TableEngine) -> IssueTableContext:
    rows = engine.visible_rows()
    values = engine.visible_frame()
    display = format_frame(values, engine.columns)
    headers = {c.id: header_label(engine, c) for c in engine.columns}
    return IssueTableContext(
        rows=rows,
        display=display,
        headers=headers,
        total=len(rows),
    )
