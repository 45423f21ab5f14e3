"""Connection setup page: collect GitLab credentials and initialize BurndownService."""

from __future__ import annotations

import streamlit as st

from gitscribe.app import register_page
from gitscribe.core.config import GITLAB_DEFAULT_HOST
from gitscribe.core.gitlab_client import GitLabAPI
from gitscribe.core.service import BurndownService


def secret_credentials() -> tuple[str | None, str | None]:
    """GitLab host and token from a ``[gitlab]`` secrets section or top-level keys."""
    gitlab_secrets = st.secrets.get("gitlab", {})
    host = gitlab_secrets.get("GITLAB_HOST") or st.secrets.get("GITLAB_HOST")
    token = gitlab_secrets.get("GITLAB_TOKEN") or st.secrets.get("GITLAB_TOKEN")
    return host, token


@register_page("Setup / Connection")
def setup_page():
    st.title("GitLab Connection Setup")
    st.caption("Enter a personal access token with the api scope (use secrets manager in production).")

    secret_host, secret_token = secret_credentials()
    host = st.text_input(
        "GitLab Host URL",
        value=st.session_state.get("gitlab_host") or secret_host or GITLAB_DEFAULT_HOST,
    )
    token = st.text_input("Personal Access Token", type="password", value=secret_token or "")
    init_btn = st.button("Initialize Connection", type="primary")

    if init_btn:
        if not (host and token):
            st.error("Host and token are required.")
            return
        api = GitLabAPI(host, token)
        st.session_state["gitlab_host"] = host
        st.session_state["burndown_service"] = BurndownService(api)
        st.session_state.pop("groups", None)
        st.session_state.pop("milestones_by_group", None)
        st.success("Connection initialized.")

    if "burndown_service" in st.session_state:
        st.info("BurndownService ready.")
