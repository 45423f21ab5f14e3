"""Dashboard entry point: page registry and router."""

from __future__ import annotations

import streamlit as st

PAGES = {}


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def main():
    st.sidebar.title("GitLab Burndown")
    if not PAGES:
        st.write("No pages registered yet.")
        return
    preferred_order = ["Burndown", "Setup / Connection"]
    pages = [name for name in preferred_order if name in PAGES]
    pages += sorted(name for name in PAGES if name not in preferred_order)
    # Without a connection the burndown page has nothing to show
    if "Setup / Connection" in pages and "burndown_service" not in st.session_state:
        default = pages.index("Setup / Connection")
    else:
        default = 0
    page = st.sidebar.selectbox("Page", pages, index=default)
    PAGES[page]()


if __name__ == "__main__":
    main()
