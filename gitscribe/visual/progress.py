"""Streamlit progress banner fed by BurndownService progress callbacks."""

from __future__ import annotations

import logging

import streamlit as st

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Banner, status line and progress bar for one burndown build."""

    def __init__(self, title: str):
        self._box = st.container()
        self._box.info(title)
        self._status = self._box.empty()
        self._bar = self._box.progress(0.0)
        self._done = False

    def callback(self, message: str, current: int | None = None, total: int | None = None) -> None:
        if self._done:
            return
        logger.debug("%s (%s/%s)", message, current, total)
        if current is not None and total:
            self._status.write(f"{message} ({current}/{total})")
            self._bar.progress(min(max(current / total, 0.0), 1.0))
        else:
            # Unknown total: show the stage without moving the bar
            self._status.write(message)

    def complete(self, message: str) -> None:
        if self._done:
            return
        self._bar.progress(1.0)
        self._box.success(message)
        self._done = True

    def error(self, message: str) -> None:
        if self._done:
            return
        self._box.error(message)
        self._done = True
