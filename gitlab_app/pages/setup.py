"""Connection setup page: collect GitLab credentials and initialize IssueService."""

from __future__ import annotations

import streamlit as st

from gitlab_app.app import read_gitlab_secrets, register_page
from gitlab_app.core.config import GITLAB_DEFAULT_SERVER
from gitlab_app.core.gitlab_client import GitLabAPI
from gitlab_app.core.service import IssueService
from gitlab_app.core.source import FixtureIssueSource, GitLabIssueSource


@register_page("Setup / Connection")
def setup_page():
    st.title("GitLab Connection Setup")
    st.caption("Enter credentials (use secrets manager in production). Without a connection the sample dataset is shown.")

    # Pre-fill from secrets if available (user can override)
    secrets = read_gitlab_secrets()
    secret_server = secrets["GITLAB_URL"]
    secret_token = secrets["GITLAB_TOKEN"]
    secret_project = secrets["GITLAB_PROJECT"]
    secret_group = secrets["GITLAB_GROUP"]

    server = st.text_input(
        "GitLab Server URL",
        value=st.session_state.get("gitlab_server") or secret_server or GITLAB_DEFAULT_SERVER,
    )
    token = st.text_input("Access Token", type="password", value=secret_token or "")
    scope_kind = st.radio("Scope", ["Project", "Group"], horizontal=True, index=1 if secret_group and not secret_project else 0)
    scope = st.text_input(
        "Project path or ID" if scope_kind == "Project" else "Group path or ID",
        value=(secret_project if scope_kind == "Project" else secret_group) or "",
    )
    ttl = st.number_input("Client cache TTL (seconds)", min_value=60, max_value=3600, value=300)

    col_connect, col_sample = st.columns(2)
    init_btn = col_connect.button("Initialize Connection", type="primary")
    sample_btn = col_sample.button("Use Sample Data")

    if init_btn:
        if not (server and token and scope):
            st.error("All fields required.")
            return
        try:
            api = GitLabAPI(
                server,
                token,
                project=scope if scope_kind == "Project" else None,
                group=scope if scope_kind == "Group" else None,
                cache_ttl=ttl,
            )
            st.session_state["gitlab_server"] = server
            st.session_state["issue_service"] = IssueService(GitLabIssueSource(api))
            st.success("Connection initialized.")
        except ValueError as e:
            st.error(f"Failed to initialize GitLab client: {e}")

    if sample_btn:
        st.session_state["issue_service"] = IssueService(FixtureIssueSource())
        st.success("Using the sample dataset.")

    service = st.session_state.get("issue_service")
    if service is not None:
        st.info(f"IssueService ready ({service.source.label}).")
