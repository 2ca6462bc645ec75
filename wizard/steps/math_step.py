from __future__ import annotations

import streamlit as st

from core.completeness import is_math_complete
from core.options import math_assist_applies, math_skills_for
from core.reducer import SetMathAssist, SetMathSkill
from state.session import WizardSession
from wizard.layout import radio_choice, render_book_link, render_step_heading, yes_no_choice

__all__ = ["step_math"]


def step_math(session: WizardSession) -> None:
    answers = session.current_answers
    render_step_heading(f"Math for {answers.class_level}")

    skill = radio_choice("Math skill", math_skills_for(answers.class_level), answers.math_skill)
    if skill is not None:
        session.dispatch(SetMathSkill(skill))
        st.rerun()

    if math_assist_applies(answers):
        assist = yes_no_choice("Writing Assist in the Math workbook?", answers.math_workbook_assist)
        if assist is not None:
            session.dispatch(SetMathAssist(assist))
            st.rerun()

    if is_math_complete(answers):
        book_ids = session.book_ids()
        render_book_link(book_ids.math_skill, "View Skill Book")
        render_book_link(book_ids.math_workbook, "View Workbook")
