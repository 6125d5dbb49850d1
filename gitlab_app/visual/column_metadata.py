"""Central column metadata and helpers for table rendering."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import streamlit as st

# Mapping of column ids to (help text, format key)
# format key: "link" -> external link column, None -> default text column
COLUMN_METADATA: dict[str, tuple[str, str | None]] = {
    "project.name": ("Project the issue belongs to.", None),
    "iid": ("Issue number, unique within its project.", None),
    "title": ("Issue title from GitLab.", None),
    "web_url": ("Open the issue in GitLab.", "link"),
    "state": ("Current issue state (open or closed).", None),
    "severity": ("Severity assigned to the issue.", None),
    "created_at": ("Date the issue was opened.", None),
    "month_created": ("Month the issue was opened.", None),
    "closed_at": ("Date the issue was closed, if it is closed.", None),
    "month_closed": ("Month the issue was closed.", None),
    "author.name": ("User who opened the issue.", None),
}


def apply_column_metadata(
    headers: Mapping[str, str],
    existing: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return a column_config dictionary with header labels and hover help."""

    config: dict[str, Any] = dict(existing or {})
    for col, label in headers.items():
        if col in config:
            continue
        help_text, fmt = COLUMN_METADATA.get(col, (None, None))
        if fmt == "link":
            config[col] = st.column_config.LinkColumn(label, help=help_text, display_text="Open", width="small")
        else:
            config[col] = st.column_config.Column(label, help=help_text)
    return config
