"""Chart builders (Altair) for the issue list."""

from __future__ import annotations

from collections.abc import Iterable

import altair as alt
import pandas as pd
import pytz

from gitlab_app.core.config import STATE_COLORS, STATE_LABELS, TIMEZONE
from gitlab_app.core.mappers import issues_to_dataframe
from gitlab_app.core.models import IssueModel


def _format_issue_list(group: pd.DataFrame) -> str:
    items: list[str] = []
    for _, row in group.iterrows():
        title = str(row.get("title") or "").strip()
        items.append(f"#{row.get('iid')}: {title}" if title else f"#{row.get('iid')}")
    return "\n".join(items)


def monthly_opened(issues: Iterable[IssueModel]):
    """Bar chart of issues per creation month, stacked by current state.

    Returns ``(chart, frame)``; chart is None when nothing can be plotted.
    """
    df = issues_to_dataframe(issues)
    if df.empty:
        return None, df
    tz = pytz.timezone(TIMEZONE)
    tmp = df.copy()
    tmp["created_dt"] = tmp["created_at"].dt.tz_convert(tz)
    tmp = tmp.dropna(subset=["created_dt"])
    if tmp.empty:
        return None, tmp
    # Strip tz before to_period; the local month is already fixed by tz_convert
    tmp["month"] = tmp["created_dt"].dt.tz_localize(None).dt.to_period("M").dt.to_timestamp()
    tmp["state_label"] = tmp["state"].map(lambda s: STATE_LABELS.get(s, s))

    agg = (
        tmp.groupby(["month", "state_label"])
        .apply(
            lambda g: pd.Series({"count": int(len(g)), "issues": _format_issue_list(g)}),
            include_groups=False,
        )
        .reset_index()
    )

    domain = [STATE_LABELS[k] for k in STATE_COLORS]
    colors = [STATE_COLORS[k][1] for k in STATE_COLORS]
    chart = (
        alt.Chart(agg)
        .mark_bar()
        .encode(
            x=alt.X("yearmonth(month):T", title="Month Opened"),
            y=alt.Y("count:Q", title="Issues"),
            color=alt.Color("state_label:N", title="Status", scale=alt.Scale(domain=domain, range=colors)),
            tooltip=[
                alt.Tooltip("yearmonth(month):T", title="Month"),
                alt.Tooltip("state_label:N", title="Status"),
                alt.Tooltip("count:Q", title="Count"),
                alt.Tooltip("issues:N", title="Issues"),
            ],
        )
        .properties(height=240)
    )
    return chart, tmp
