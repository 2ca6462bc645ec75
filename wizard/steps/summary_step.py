from __future__ import annotations

import streamlit as st

from models.questionnaire import CLASS_ORDER
from state.session import WizardSession
from wizard.layout import render_book_link, render_step_heading
from wizard.navigation.machine import EditFromClassSummary, EditFromFinalSummary
from wizard.summary import ClassSummary

__all__ = ["render_summary_items", "step_class_summary"]


def render_summary_items(session: WizardSession, summary: ClassSummary, *, from_final: bool) -> None:
    """Render summary rows with Edit/Remove controls.

    Edits from the final summary remember to come back there; edits from the
    class summary return to step 6 of the same class.
    """

    level = summary.class_level
    scope = "final" if from_final else "class"
    for item in summary.items:
        text_col, edit_col, remove_col = st.columns((0.7, 0.15, 0.15))
        with text_col:
            st.markdown(f"**{item.label}**: {item.value}")
            if item.book_label:
                render_book_link(item.book_id, item.book_label)
        if edit_col.button("Edit", key=f"edit-{scope}-{level}-{item.key}"):
            if from_final:
                session.navigate(EditFromFinalSummary(CLASS_ORDER.index(level), item.step))
            else:
                session.navigate(EditFromClassSummary(item.step))
            st.rerun()
        if item.remove_action is not None and remove_col.button(
            "Remove", key=f"remove-{scope}-{level}-{item.key}"
        ):
            session.dispatch(item.remove_action, class_level=level)
            st.rerun()


def step_class_summary(session: WizardSession) -> None:
    summary = session.class_summary()
    render_step_heading(f"{summary.class_level} summary", "Review the books chosen for this class.")
    render_summary_items(session, summary, from_final=False)
