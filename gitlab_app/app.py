"""Application entry point: page registry and router."""

from __future__ import annotations

import streamlit as st

PAGES = {}


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


PAGE_ORDER = ("Issues", "Setup / Connection")

SECRET_NAMES = ("GITLAB_URL", "GITLAB_TOKEN", "GITLAB_PROJECT", "GITLAB_GROUP")


def read_gitlab_secrets() -> dict[str, str | None]:
    """GitLab settings from a ``[gitlab]`` secrets section, falling back to top-level keys."""
    try:
        section = st.secrets.get("gitlab", {})
        return {name: section.get(name) or st.secrets.get(name) for name in SECRET_NAMES}
    except FileNotFoundError:
        # No secrets.toml: run against the sample dataset
        return dict.fromkeys(SECRET_NAMES)


def main():
    st.sidebar.title("GitLab Issues Tracker")
    pages = list(PAGES.keys())
    if not pages:
        st.write("No pages registered yet.")
        return
    ordered = [name for name in PAGE_ORDER if name in pages]
    pages = ordered + sorted(name for name in pages if name not in PAGE_ORDER)

    page = st.sidebar.selectbox("Page", pages, index=0)
    service = st.session_state.get("issue_service")
    if service is not None:
        st.sidebar.caption(f"Source: {service.source.label}")
    PAGES[page]()


if __name__ == "__main__":
    main()
