"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``gitlab_app/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

from importlib import import_module
from pathlib import Path

import streamlit as st

from gitlab_app.app import main, read_gitlab_secrets

st.set_page_config(layout="wide", page_title="GitLab Issues Tracker")


def _auto_init_issue_service():
    """Initialize the GitLab-backed service from Streamlit secrets if available."""
    if "issue_service" in st.session_state:
        return

    secrets = read_gitlab_secrets()
    server = secrets["GITLAB_URL"]
    token = secrets["GITLAB_TOKEN"]
    project = secrets["GITLAB_PROJECT"]
    group = secrets["GITLAB_GROUP"]

    if server and token and (project or group):
        from gitlab_app.core.gitlab_client import GitLabAPI
        from gitlab_app.core.service import IssueService
        from gitlab_app.core.source import GitLabIssueSource

        api = GitLabAPI(server, token, project=project, group=group)
        st.session_state["gitlab_server"] = server
        st.session_state["issue_service"] = IssueService(GitLabIssueSource(api))
        st.sidebar.success("GitLab connection configured from secrets.")
    else:
        st.sidebar.info("GitLab secrets not found; showing the sample dataset.")


_auto_init_issue_service()

PAGES_DIR = Path(__file__).parent / "gitlab_app" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    import_module(f"gitlab_app.pages.{py.stem}")

if __name__ == "__main__":
    main()
