"""Issues page.

Date range picker, per-column filters, single-column sort and the issue
table with a total-count footer. Issues are re-fetched whenever the date range
changes; filters and sort survive the refetch.
"""

from __future__ import annotations

import asyncio
import logging

import streamlit as st

from gitlab_app.app import register_page
from gitlab_app.core.column_config import get_columns
from gitlab_app.core.config import SETTINGS
from gitlab_app.core.service import IssueLoader, IssueService
from gitlab_app.features.date_range.controller import DateRange, DateRangeController
from gitlab_app.features.issue_table import TableEngine, build_table_context, select_columns
from gitlab_app.features.issue_table.predicates import (
    FILTER_DATE_INTERVAL,
    FILTER_EXACT,
    FILTER_SUBSTRING,
)
from gitlab_app.visual.charts import monthly_opened
from gitlab_app.visual.progress import ProgressReporter
from gitlab_app.visual.tables import export_frame, render_issue_table

logger = logging.getLogger(__name__)

PAGE_KEY = "issues"
ENGINE_KEY = f"{PAGE_KEY}_engine"
LOADER_KEY = f"{PAGE_KEY}_loader"
CONTROLLER_KEY = f"{PAGE_KEY}_range"
PENDING_KEY = f"{PAGE_KEY}_pending_fetch"
FILTER_PREFIX = f"{PAGE_KEY}_flt_"
SEARCH_COLUMN = "title"


def _queue_fetch(date_range: DateRange) -> None:
    st.session_state[PENDING_KEY] = date_range


def _get_service() -> IssueService:
    service = st.session_state.get("issue_service")
    if service is None:
        service = IssueService()
        st.session_state["issue_service"] = service
    return service


def _get_loader() -> IssueLoader:
    service = _get_service()
    engine: TableEngine | None = st.session_state.get(ENGINE_KEY)
    if engine is None:
        engine = TableEngine(select_columns(get_columns("issue_table")))
        st.session_state[ENGINE_KEY] = engine
    loader: IssueLoader | None = st.session_state.get(LOADER_KEY)
    if loader is None or loader.service is not service:
        # New connection from the Setup page: refetch with the current window
        loader = IssueLoader(service, engine)
        st.session_state[LOADER_KEY] = loader
        controller = st.session_state.get(CONTROLLER_KEY)
        if controller is not None:
            _queue_fetch(controller.value)
    return loader


def _get_controller() -> DateRangeController:
    controller = st.session_state.get(CONTROLLER_KEY)
    if controller is None:
        controller = DateRangeController(_queue_fetch)
        st.session_state[CONTROLLER_KEY] = controller
    controller.mount()
    return controller


def _clear_filters() -> None:
    engine: TableEngine | None = st.session_state.get(ENGINE_KEY)
    if engine is not None:
        engine.clear_filters()
    for key in [k for k in st.session_state if str(k).startswith(FILTER_PREFIX)]:
        del st.session_state[key]


def _render_date_range(controller: DateRangeController) -> None:
    current = controller.value
    col_start, col_end = st.columns(2)
    start = col_start.date_input("Start date", value=current.start_date, format="DD/MM/YYYY")
    end = col_end.date_input(
        "End date",
        value=max(current.end_date, start),
        min_value=start,
        format="DD/MM/YYYY",
    )
    selected = controller.set_range(start, end)
    st.caption(
        f"Showing issues from {selected.start_date.strftime('%d/%m/%Y')} "
        f"to {selected.end_date.strftime('%d/%m/%Y')}"
    )


def _fetch(loader: IssueLoader, date_range: DateRange) -> None:
    reporter = ProgressReporter("Loading issues")
    applied = asyncio.run(loader.load(date_range.start_date, date_range.end_date, progress=reporter.callback))
    if not applied:
        reporter.complete("A newer request replaced this one.")
    elif loader.last_error is not None:
        reporter.error(f"Failed to fetch issues: {loader.last_error}")
    else:
        reporter.complete(f"Loaded {len(loader.engine.rows)} issue(s).")


def _render_title_search(engine: TableEngine) -> None:
    if not any(c.id == SEARCH_COLUMN for c in engine.columns):
        return
    count = engine.candidate_count(SEARCH_COLUMN)
    text = st.text_input(
        "Search by title",
        key=f"{FILTER_PREFIX}{SEARCH_COLUMN}",
        placeholder=f"Filter {count} records...",
    )
    engine.set_filter(SEARCH_COLUMN, text or None)


def _render_filters(engine: TableEngine) -> None:
    # The title filter is rendered above the table by _render_title_search
    filterable = [c for c in engine.columns if c.filterable and c.id != SEARCH_COLUMN]
    with st.expander("Column filters", expanded=False):
        grid = st.columns(3)
        for idx, column in enumerate(filterable):
            cell = grid[idx % 3]
            key = f"{FILTER_PREFIX}{column.id}"
            if column.filter_kind == FILTER_SUBSTRING:
                text = cell.text_input(
                    column.header,
                    key=key,
                    placeholder=f"Filter {engine.candidate_count(column.id)} records...",
                )
                engine.set_filter(column.id, text or None)
            elif column.filter_kind == FILTER_EXACT:
                options = engine.column_options(column.id)
                selected = st.session_state.get(key)
                if selected and selected not in options:
                    options.append(selected)
                choice = cell.selectbox(
                    column.header,
                    [""] + options,
                    key=key,
                    format_func=lambda v, c=column: "All" if v == "" else c.formatter(v),
                )
                engine.set_filter(column.id, choice or None)
            elif column.filter_kind == FILTER_DATE_INTERVAL:
                low = cell.date_input(f"{column.header} from", value=None, key=f"{key}_min", format="DD/MM/YYYY")
                high = cell.date_input(f"{column.header} to", value=None, key=f"{key}_max", format="DD/MM/YYYY")
                engine.set_filter(
                    column.id,
                    (low.isoformat() if low else None, high.isoformat() if high else None),
                )
        st.button("Clear filters", on_click=_clear_filters, key=f"{PAGE_KEY}_clear_filters")


def _render_sort(engine: TableEngine) -> None:
    sortable = [c for c in engine.columns if c.sortable]
    labels = {c.id: c.header for c in sortable}
    col_by, col_dir = st.columns([3, 1])
    column_id = col_by.selectbox(
        "Sort by",
        [""] + list(labels),
        format_func=lambda v: "(dataset order)" if v == "" else labels[v],
        key=f"{PAGE_KEY}_sort_by",
    )
    descending = col_dir.toggle("Descending", key=f"{PAGE_KEY}_sort_desc")
    if column_id:
        engine.set_sort(column_id, descending)
    else:
        engine.clear_sort()


@register_page("Issues")
def issues_page():
    st.title("GitLab Issues Tracker")
    loader = _get_loader()
    controller = _get_controller()

    st.subheader("Filter by period")
    _render_date_range(controller)

    pending = st.session_state.pop(PENDING_KEY, None)
    if pending is not None:
        _fetch(loader, pending)

    if loader.last_error is not None:
        st.error(
            "Issues could not be loaded; the table below is empty because the fetch failed, "
            f"not because nothing matched. ({loader.last_error})"
        )
        if st.button("Retry", type="primary", key=f"{PAGE_KEY}_retry"):
            _fetch(loader, controller.value)
            st.rerun()

    engine = loader.engine
    st.subheader("Issues")
    _render_title_search(engine)
    _render_filters(engine)
    _render_sort(engine)

    ctx = build_table_context(engine)
    render_issue_table(ctx)

    if ctx.rows:
        chart, _ = monthly_opened(ctx.rows)
        if chart is not None:
            st.markdown("---")
            st.caption("Visible issues by month opened.")
            st.altair_chart(chart, use_container_width=True)
        csv = export_frame(engine).to_csv(index=False).encode(SETTINGS.download_encoding)
        st.download_button(
            "Download CSV",
            data=csv,
            file_name="gitlab_issues.csv",
            mime="text/csv",
        )
