"""Central configuration, constants, display labels, and shared column definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# GitLab Connection Settings
# =============================================================================
GITLAB_DEFAULT_SERVER = "https://gitlab.com"
GITLAB_API_PATH = "/api/v4"
TIMEZONE = "America/Sao_Paulo"

# Page size for the issues endpoint (GitLab caps per_page at 100)
GITLAB_PAGE_SIZE = 100
GITLAB_REQUEST_TIMEOUT = 30.0

# =============================================================================
# Issue State / Severity
# =============================================================================
STATE_OPENED = "opened"
STATE_CLOSED = "closed"

STATE_LABELS: dict[str, str] = {
    STATE_OPENED: "Open",
    STATE_CLOSED: "Closed",
}

SEVERITY_LABELS: dict[str, str] = {
    "critical": "Critical",
    "high": "High",
    "medium": "Medium",
    "low": "Low",
}

# Badge colors used by the table styler (background, foreground)
SEVERITY_COLORS: dict[str, tuple[str, str]] = {
    "critical": ("#fee2e2", "#991b1b"),
    "high": ("#ffedd5", "#9a3412"),
    "medium": ("#fef9c3", "#854d0e"),
    "low": ("#dbeafe", "#1e40af"),
}
FALLBACK_BADGE_COLORS: tuple[str, str] = ("#f3f4f6", "#1f2937")

STATE_COLORS: dict[str, tuple[str, str]] = {
    STATE_OPENED: ("#dcfce7", "#166534"),
    STATE_CLOSED: ("#f3f4f6", "#1f2937"),
}


def normalize_severity(severity: str | None) -> str | None:
    """Normalize a severity value to its canonical lower-case form.

    Known severities are matched case-insensitively ("CRITICAL" -> "critical").
    Anything else passes through verbatim so the table can still show and
    filter on it.

    Parameters
    ----------
    severity : str or None
        Raw severity string from GitLab.

    Returns
    -------
    str or None
        Canonical severity name, the original string if unknown, or None.
    """
    if severity is None:
        return None
    cleaned = str(severity).strip()
    if not cleaned:
        return None
    if cleaned.lower() in SEVERITY_LABELS:
        return cleaned.lower()
    return str(severity)


# =============================================================================
# Date Display
# =============================================================================
DATE_DISPLAY_FORMAT = "%d/%m/%Y"
EMPTY_CELL = "-"

# Month names used by the derived month columns (index 0 is January)
MONTH_NAMES: Sequence[str] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# =============================================================================
# Table Columns
# =============================================================================
ISSUE_TABLE_COLUMNS: Sequence[str] = (
    "project.name",
    "iid",
    "title",
    "web_url",
    "state",
    "severity",
    "created_at",
    "month_created",
    "closed_at",
    "month_closed",
    "author.name",
)

EXPORT_COLUMNS: Sequence[str] = (
    "project.name",
    "iid",
    "title",
    "state",
    "severity",
    "created_at",
    "closed_at",
    "author.name",
    "web_url",
)


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000
    download_encoding: str = "utf-8"
    table_height: int = 480


SETTINGS = AppSettings()
