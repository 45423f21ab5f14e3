"""Convenience launcher for the Streamlit dashboard.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``gitscribe/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

from importlib import import_module
from pathlib import Path

import streamlit as st

from gitscribe.app import main
from gitscribe.core.gitlab_client import GitLabAPI
from gitscribe.core.service import BurndownService
from gitscribe.pages.setup import secret_credentials

st.set_page_config(layout="wide")


def _auto_init_burndown_service():
    """Initialize the GitLab service from Streamlit secrets if available."""
    if "burndown_service" in st.session_state:
        return
    host, token = secret_credentials()
    if host and token:
        st.session_state["gitlab_host"] = host
        st.session_state["burndown_service"] = BurndownService(GitLabAPI(host, token))
        st.sidebar.success("GitLab connection initialized from secrets.")
    else:
        st.sidebar.warning("GitLab secrets not found. Please use the Setup page.")


_auto_init_burndown_service()

PAGES_DIR = Path(__file__).parent / "gitscribe" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    import_module(f"gitscribe.pages.{py.stem}")

if __name__ == "__main__":
    main()
