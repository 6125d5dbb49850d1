"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from gitlab_app.core.column_config import get_columns
from gitlab_app.core.config import (
    FALLBACK_BADGE_COLORS,
    SETTINGS,
    SEVERITY_COLORS,
    SEVERITY_LABELS,
    STATE_COLORS,
    STATE_LABELS,
)
from gitlab_app.features.issue_table.context import IssueTableContext, format_frame
from gitlab_app.features.issue_table.engine import TableEngine

from .column_metadata import apply_column_metadata

_SEVERITY_BY_LABEL = {label: key for key, label in SEVERITY_LABELS.items()}
_STATE_BY_LABEL = {label: key for key, label in STATE_LABELS.items()}


def _badge_css(colors: tuple[str, str]) -> str:
    background, foreground = colors
    return f"background-color: {background}; color: {foreground}; font-weight: 500"


def severity_badge_css(label: str) -> str:
    key = _SEVERITY_BY_LABEL.get(label)
    return _badge_css(SEVERITY_COLORS.get(key, FALLBACK_BADGE_COLORS))


def state_badge_css(label: str) -> str:
    key = _STATE_BY_LABEL.get(label)
    return _badge_css(STATE_COLORS.get(key, FALLBACK_BADGE_COLORS))


def style_badges(display: pd.DataFrame):
    styler = display.style
    if "severity" in display.columns:
        styler = styler.map(severity_badge_css, subset=["severity"])
    if "state" in display.columns:
        styler = styler.map(state_badge_css, subset=["state"])
    return styler


def render_issue_table(ctx: IssueTableContext, limit: int | None = None) -> None:
    limit = limit or SETTINGS.max_table_rows
    if ctx.display.empty:
        st.info("No issues found.")
    else:
        shown = ctx.display.head(limit)
        cfg = apply_column_metadata(ctx.headers)
        st.dataframe(
            style_badges(shown),
            hide_index=True,
            column_config=cfg,
            column_order=list(ctx.headers),
            height=SETTINGS.table_height,
        )
        if len(ctx.display) > limit:
            st.caption(f"Showing the first {limit} of {len(ctx.display)} issues.")
    st.caption(f"Total issues: {ctx.total}")


def export_frame(engine: TableEngine) -> pd.DataFrame:
    """Visible rows formatted for CSV export, labelled with column headers."""
    wanted = [cid for cid in get_columns("export") if any(c.id == cid for c in engine.columns)]
    columns = [engine.column(cid) for cid in wanted]
    values = engine.visible_frame()
    table = format_frame(values, columns)
    return table.rename(columns={c.id: c.header for c in columns})
