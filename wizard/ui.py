"""Top-level rendering of the questionnaire wizard."""

from __future__ import annotations

import logging
from typing import Callable

import streamlit as st

from integrations.selection_api import SaveSelection
from models.questionnaire import CLASS_ORDER
from state.ensure_state import reset_state
from state.session import SaveStatus, WizardSession
from wizard.navigation.machine import (
    SUMMARY_STEP,
    Back,
    EditClass,
    Next,
    ReturnToSummary,
    next_button_label,
    visible_steps,
)
from wizard.step_registry import TOTAL_STEPS_PER_CLASS, get_step
from wizard.steps.assessment_step import step_assessment
from wizard.steps.core_step import step_core_subjects
from wizard.steps.english_step import step_english
from wizard.steps.languages_step import step_languages
from wizard.steps.math_step import step_math
from wizard.steps.summary_step import render_summary_items, step_class_summary

logger = logging.getLogger(__name__)

StepRenderer = Callable[[WizardSession], None]

_STEP_RENDERERS: dict[str, StepRenderer] = {
    "english": step_english,
    "math": step_math,
    "assessment": step_assessment,
    "core": step_core_subjects,
    "languages": step_languages,
    "summary": step_class_summary,
}


def _render_header(session: WizardSession) -> None:
    nav = session.navigation
    steps = visible_steps(nav.class_index)
    position = steps.index(nav.step) + 1 if nav.step in steps else nav.step
    st.title(f"Configuring: {session.current_class}")
    step = get_step(nav.step)
    st.progress(position / len(steps), text=f"Step {nav.step} of {TOTAL_STEPS_PER_CLASS}: {step.label}")
    st.caption(step.panel_header)

    progress = session.progress()
    base_col, lang_col = st.columns(2)
    base_col.metric("Answered", progress.base)
    if progress.languages_desired:
        lang_col.metric("Languages", f"{progress.languages_selected}/{progress.languages_desired}")


def _render_navigation(session: WizardSession) -> None:
    nav = session.navigation
    back_col, return_col, next_col = st.columns(3)
    at_start = nav.class_index == 0 and nav.step == 1 and not nav.is_returning_to_summary
    if back_col.button("Back", key="nav-back", disabled=at_start):
        session.navigate(Back())
        st.rerun()
    if nav.is_returning_to_summary and nav.step != SUMMARY_STEP:
        if return_col.button("Return to Summary", key="nav-return"):
            session.navigate(ReturnToSummary())
            st.rerun()
    if next_col.button(next_button_label(nav), key="nav-next", type="primary"):
        session.navigate(Next())
        st.rerun()


def _render_save(session: WizardSession, save_selection: SaveSelection, school_id: str | None) -> None:
    status = session.save_status
    if school_id is None:
        st.warning("Sign in to save this selection.")
    clicked = st.button(
        "Saving..." if status is SaveStatus.SAVING else "Save Selection",
        key="save-selection",
        type="primary",
        disabled=school_id is None or status is SaveStatus.SAVING,
    )
    if clicked:
        with st.spinner("Saving..."):
            status = session.save(save_selection, school_id)

    if status is SaveStatus.SUCCESS:
        st.success(f"Selection saved successfully! (ID: {session.saved_id})")
    elif status is SaveStatus.ERROR:
        st.error("Failed to save selection. Please try again.")


def render_final_summary(session: WizardSession, save_selection: SaveSelection, school_id: str | None) -> None:
    st.title("Final Summary")
    st.caption("Review every class before saving.")
    for summary in session.final_summary():
        with st.container(border=True):
            title_col, edit_col = st.columns((0.8, 0.2))
            title_col.subheader(str(summary.class_level))
            if edit_col.button("Edit class", key=f"edit-class-{summary.class_level}"):
                session.navigate(EditClass(CLASS_ORDER.index(summary.class_level)))
                st.rerun()
            render_summary_items(session, summary, from_final=True)

    _render_save(session, save_selection, school_id)
    back_col, reset_col = st.columns(2)
    if back_col.button("Back", key="final-back"):
        session.navigate(Back())
        st.rerun()
    if reset_col.button("Start over", key="final-reset", help="Discard every answer and begin again."):
        logger.info("Questionnaire reset from the final summary")
        reset_state()
        st.rerun()


def run_wizard(session: WizardSession, save_selection: SaveSelection, school_id: str | None) -> None:
    """Render the screen for the current navigation state."""

    nav = session.navigation
    if nav.show_final_summary:
        render_final_summary(session, save_selection, school_id)
        return

    _render_header(session)
    _STEP_RENDERERS[get_step(nav.step).key](session)
    _render_navigation(session)


__all__ = ["render_final_summary", "run_wizard"]
