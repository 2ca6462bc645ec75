"""Utility helpers for rendering error messages in Streamlit."""

from __future__ import annotations

import streamlit as st


def display_error(msg: str, detail: str | None = None, *, show_detail: bool = False) -> None:
    """Render a user-facing error with optional technical details.

    Args:
        msg: Short error message for the user.
        detail: Optional technical detail.
        show_detail: Render ``detail`` inside an expander when ``True``.
    """

    st.error(msg)
    if detail and show_detail:
        with st.expander("Details"):
            st.code(detail)
