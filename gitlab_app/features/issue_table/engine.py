"""Tabular engine: rows, per-column filters, a single sort key, visible rows.

The engine is a pure in-memory model (no Streamlit) so it can be driven from
tests and from the page alike. Every read (``visible_rows``,
``column_options``, ``visible_frame``) evaluates accessors afresh from the
current rows, filters and sort; nothing derived is cached between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import pandas as pd

from gitlab_app.core.models import IssueModel

from .columns import VALUE_DATE, VALUE_NUMBER, ColumnDescriptor, select_columns
from .predicates import (
    FILTER_DATE_INTERVAL,
    column_mask,
    is_absent,
    is_empty_filter,
    normalize_interval,
    to_timestamp,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SortKey:
    column_id: str
    descending: bool = False


def _safe_access(column: ColumnDescriptor, issue: IssueModel) -> Any:
    try:
        return column.accessor(issue)
    except Exception as exc:
        logger.debug("Accessor for column %s failed on issue %s: %s", column.id, issue.id, exc)
        return None


def _sort_value(column: ColumnDescriptor, value: Any) -> Any:
    """Comparable key for ``value`` or None when it should sort as absent."""
    if is_absent(value):
        return None
    if column.value_type == VALUE_DATE:
        return to_timestamp(value)
    if column.value_type == VALUE_NUMBER:
        try:
            return float(value)
        except (TypeError, ValueError):
            return None
    return str(value)


class TableEngine:
    def __init__(
        self,
        columns: Sequence[ColumnDescriptor] | None = None,
        rows: Iterable[IssueModel] | None = None,
    ):
        self.columns: list[ColumnDescriptor] = list(columns) if columns is not None else select_columns()
        self._by_id: dict[str, ColumnDescriptor] = {c.id: c for c in self.columns}
        self._rows: list[IssueModel] = list(rows or [])
        self._filters: dict[str, Any] = {}
        self._sort: SortKey | None = None

    # ------------------ State ------------------
    @property
    def rows(self) -> list[IssueModel]:
        return list(self._rows)

    @property
    def filters(self) -> Mapping[str, Any]:
        return dict(self._filters)

    @property
    def sort(self) -> SortKey | None:
        return self._sort

    def column(self, column_id: str) -> ColumnDescriptor:
        try:
            return self._by_id[column_id]
        except KeyError:
            raise KeyError(f"Unknown column: {column_id}") from None

    def set_rows(self, rows: Iterable[IssueModel]) -> None:
        """Replace the dataset. Filters and sort are kept as they are."""
        self._rows = list(rows)

    def set_filter(self, column_id: str, value: Any) -> None:
        """Set the filter for one column; None or an empty value clears it."""
        column = self.column(column_id)
        if not column.filterable:
            raise ValueError(f"Column {column_id!r} is not filterable")
        if is_empty_filter(column.filter_kind, value):
            self._filters.pop(column_id, None)
            return
        if column.filter_kind == FILTER_DATE_INTERVAL:
            self._filters[column_id] = normalize_interval(value)
        else:
            self._filters[column_id] = value

    def clear_filters(self) -> None:
        self._filters.clear()

    def set_sort(self, column_id: str, descending: bool = False) -> None:
        column = self.column(column_id)
        if not column.sortable:
            raise ValueError(f"Column {column_id!r} is not sortable")
        self._sort = SortKey(column_id, bool(descending))

    def toggle_sort(self, column_id: str) -> SortKey:
        """Header-click behaviour: flip the active column, else sort ascending."""
        if self._sort is not None and self._sort.column_id == column_id:
            self.set_sort(column_id, not self._sort.descending)
        else:
            self.set_sort(column_id, False)
        return self._sort

    def clear_sort(self) -> None:
        self._sort = None

    # ------------------ Evaluation ------------------
    def _values(self) -> pd.DataFrame:
        """Accessor values for every row, one column per descriptor."""
        data = {c.id: [_safe_access(c, issue) for issue in self._rows] for c in self.columns}
        return pd.DataFrame(data, index=range(len(self._rows)), dtype=object)

    def _mask(self, values: pd.DataFrame, *, exclude: str | None = None) -> pd.Series:
        mask = pd.Series(True, index=values.index, dtype=bool)
        for column_id, value in self._filters.items():
            if column_id == exclude:
                continue
            kind = self._by_id[column_id].filter_kind
            mask &= column_mask(values[column_id], kind, value)
        return mask

    def _ordered_positions(self, values: pd.DataFrame, positions: list[int]) -> list[int]:
        if self._sort is None:
            return positions
        column = self._by_id[self._sort.column_id]
        present: list[tuple[Any, int]] = []
        absent: list[int] = []
        for pos in positions:
            key = _sort_value(column, values.at[pos, column.id])
            if key is None:
                absent.append(pos)
            else:
                present.append((key, pos))
        # sorted() is stable in both directions; absent values always trail
        present.sort(key=lambda pair: pair[0], reverse=self._sort.descending)
        return [pos for _, pos in present] + absent

    def _visible_positions(self, values: pd.DataFrame) -> list[int]:
        mask = self._mask(values)
        positions = [int(p) for p in values.index[mask]]
        return self._ordered_positions(values, positions)

    def visible_rows(self) -> list[IssueModel]:
        """Rows passing every active filter, in sort order (or dataset order)."""
        if not self._rows:
            return []
        values = self._values()
        return [self._rows[pos] for pos in self._visible_positions(values)]

    def visible_frame(self) -> pd.DataFrame:
        """Accessor values of the visible rows, one column per descriptor."""
        if not self._rows:
            return pd.DataFrame(columns=[c.id for c in self.columns])
        values = self._values()
        positions = self._visible_positions(values)
        return values.loc[positions].reset_index(drop=True)

    def total_count(self) -> int:
        return len(self.visible_rows())

    def column_options(self, column_id: str) -> list[Any]:
        """Distinct values of ``column_id`` among rows passing the *other* filters.

        Values keep first-appearance order; absent values are left out. The
        list narrows as filters on other columns are applied.
        """
        column = self.column(column_id)
        if not self._rows:
            return []
        values = self._values()
        mask = self._mask(values, exclude=column.id)
        options: list[Any] = []
        seen: set[str] = set()
        for value in values.loc[mask, column.id]:
            if is_absent(value):
                continue
            marker = str(value)
            if marker in seen:
                continue
            seen.add(marker)
            options.append(value)
        return options

    def candidate_count(self, column_id: str) -> int:
        """Number of rows a filter on ``column_id`` would choose from.

        Every other active filter is applied; the column's own filter is not.
        """
        column = self.column(column_id)
        if not self._rows:
            return 0
        return int(self._mask(self._values(), exclude=column.id).sum())
