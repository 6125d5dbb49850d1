"""Fetch status panel shown while the Issues page loads a date window."""

from __future__ import annotations

import streamlit as st


class ProgressReporter:
    """Collapsible ``st.status`` log of one fetch.

    ``callback`` has the IssueService progress signature; each message becomes
    a line in the panel and the label tracks the loaded count when known.
    """

    def __init__(self, title: str):
        self._title = title
        self._status = st.status(title, expanded=False)
        self._done = False

    def callback(self, message: str, current: int | None = None, total: int | None = None) -> None:
        if self._done:
            return
        self._status.write(message)
        if total:
            self._status.update(label=f"{self._title} ({current or 0}/{total})")

    def complete(self, message: str) -> None:
        if not self._done:
            self._status.update(label=message, state="complete")
            self._done = True

    def error(self, message: str) -> None:
        if not self._done:
            self._status.update(label=message, state="error", expanded=True)
            self._done = True
