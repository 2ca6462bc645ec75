from __future__ import annotations

import streamlit as st

from core.options import CORE_SUBJECT_DESCRIPTIONS
from core.reducer import CORE_SUBJECT_FIELDS, SetCoreSubject
from models.catalog import Subject
from state.session import WizardSession
from wizard.layout import render_book_link, render_step_heading

__all__ = ["step_core_subjects"]

_BOOK_LABELS = {
    Subject.EVS: "View EVS Book",
    Subject.RHYMES: "View Rhymes Book",
    Subject.ART: "View Art Book",
}


def step_core_subjects(session: WizardSession) -> None:
    answers = session.current_answers
    render_step_heading(f"Core subjects for {answers.class_level}", "All three are included unless you opt out.")

    for subject, field_name in CORE_SUBJECT_FIELDS.items():
        included = bool(getattr(answers, field_name))
        checked = st.checkbox(str(subject), value=included, help=CORE_SUBJECT_DESCRIPTIONS[str(subject)])
        if checked != included:
            session.dispatch(SetCoreSubject(subject, checked))
            st.rerun()

    book_ids = session.book_ids()
    slots = (
        (Subject.EVS, answers.include_evs, book_ids.evs),
        (Subject.RHYMES, answers.include_rhymes, book_ids.rhymes),
        (Subject.ART, answers.include_art, book_ids.art),
    )
    for subject, included, book_id in slots:
        if included:
            render_book_link(book_id, _BOOK_LABELS[subject])
