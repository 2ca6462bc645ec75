"""Shared Streamlit layout helpers for the wizard steps."""

from __future__ import annotations

from typing import Callable, Optional, Sequence, TypeVar

import streamlit as st

import config

T = TypeVar("T")


def book_preview_url(book_id: str) -> str:
    return config.BOOK_PREVIEW_URL.format(book_id=book_id)


def render_book_link(book_id: str | None, label: str) -> None:
    """Render a preview link, or an "incomplete" note when no book resolved."""

    if not book_id:
        st.caption(f"{label} (selection incomplete)")
        return
    st.markdown(f"[{label} ↗]({book_preview_url(book_id)})")


def render_step_heading(title: str, subtitle: Optional[str] = None) -> None:
    """Render a consistent heading block for wizard steps."""

    st.header(title)
    if subtitle:
        st.caption(subtitle)


def radio_choice(
    label: str,
    options: Sequence[T],
    current: T | None,
    *,
    format_func: Callable[[T], str] = str,
    captions: Sequence[str] | None = None,
) -> T | None:
    """Render a radio group preselected with ``current``.

    Returns the option picked in this run when it differs from ``current``,
    otherwise ``None``.
    """

    index = list(options).index(current) if current in options else None
    choice = st.radio(
        label,
        options,
        index=index,
        format_func=format_func,
        captions=list(captions) if captions else None,
    )
    if choice is None or choice == current:
        return None
    return choice


def yes_no_choice(label: str, current: bool | None) -> bool | None:
    """Radio for the workbook assist questions; returns a changed answer or ``None``."""

    return radio_choice(
        label,
        (True, False),
        current,
        format_func=lambda value: "Yes" if value else "No",
        captions=("All rows dotted.", "Only first 2 rows dotted."),
    )
