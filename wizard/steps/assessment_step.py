from __future__ import annotations

import streamlit as st

from core.completeness import is_assessment_complete
from core.options import ASSESSMENT_OPTIONS
from core.reducer import SetAssessment
from state.session import WizardSession
from wizard.layout import radio_choice, render_book_link, render_step_heading

__all__ = ["step_assessment"]


def step_assessment(session: WizardSession) -> None:
    answers = session.current_answers
    render_step_heading(f"Assessment for {answers.class_level}")

    choice = radio_choice(
        "Assessment pattern",
        [option.value for option in ASSESSMENT_OPTIONS],
        answers.assessment,
        captions=[option.description for option in ASSESSMENT_OPTIONS],
    )
    if choice is not None:
        session.dispatch(SetAssessment(choice))
        st.rerun()

    if is_assessment_complete(answers):
        render_book_link(session.book_ids().assessment, "View Assessment Book")
