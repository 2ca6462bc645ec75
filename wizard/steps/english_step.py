from __future__ import annotations

import streamlit as st

from core.completeness import is_english_complete
from core.options import (
    LTI,
    WRITING_FOCUS_OPTIONS,
    english_assist_applies,
    english_skills_for,
    writing_focus_applies,
)
from core.reducer import SetEnglishAssist, SetEnglishSkill, SetWritingFocus
from state.session import WizardSession
from wizard.layout import radio_choice, render_book_link, render_step_heading, yes_no_choice

__all__ = ["step_english"]


def step_english(session: WizardSession) -> None:
    answers = session.current_answers
    level = answers.class_level
    render_step_heading(f"English for {level}", "Pick the skill book; the workbook follows from it.")

    skills = english_skills_for(level)
    skill = radio_choice(
        "English skill",
        skills,
        answers.english_skill,
        captions=["Caps only writing" if option == LTI else "Select one option" for option in skills],
    )
    if skill is not None:
        session.dispatch(SetEnglishSkill(skill))
        st.rerun()

    if writing_focus_applies(answers):
        focus = radio_choice("Writing focus", WRITING_FOCUS_OPTIONS, answers.english_skill_writing_focus)
        if focus is not None:
            session.dispatch(SetWritingFocus(focus))
            st.rerun()

    if english_assist_applies(answers):
        assist = yes_no_choice("Writing Assist in the workbook?", answers.english_workbook_assist)
        if assist is not None:
            session.dispatch(SetEnglishAssist(assist))
            st.rerun()

    if is_english_complete(answers):
        book_ids = session.book_ids()
        render_book_link(book_ids.english_skill, "View Skill Book")
        render_book_link(book_ids.english_workbook, "View Workbook")
