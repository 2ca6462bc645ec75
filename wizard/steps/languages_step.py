from __future__ import annotations

import streamlit as st

from core.completeness import is_language_selection_complete, language_progress
from core.options import LANGUAGE_COUNT_LABELS, LANGUAGES, REGION_PRESETS, language_variants_for
from core.reducer import ApplyRegionPreset, SetLanguageCount, SetLanguageVariant, ToggleLanguage
from state.session import WizardSession
from wizard.layout import radio_choice, render_step_heading

__all__ = ["step_languages"]


def step_languages(session: WizardSession) -> None:
    answers = session.current_answers
    level = answers.class_level
    plan = answers.languages
    render_step_heading(f"Languages for {level}", "Optional: add up to two regional languages.")

    count = radio_choice(
        "How many additional languages?",
        (0, 1, 2),
        plan.count,
        format_func=lambda value: LANGUAGE_COUNT_LABELS[value],
    )
    if count is not None:
        session.dispatch(SetLanguageCount(count))
        st.rerun()

    if plan.count == 0:
        return

    progress = language_progress(answers)
    message = f"Selected {progress.selected} of {progress.desired} allowed."
    if plan.is_full:
        message += " Deselect a language to choose another."
    st.caption(message)

    with st.expander("Fill from a regional preset"):
        region = st.selectbox("Region", list(REGION_PRESETS), index=None, placeholder="Choose a region")
        if st.button("Apply preset", disabled=region is None) and region is not None:
            session.dispatch(ApplyRegionPreset(region))
            st.rerun()

    variants = language_variants_for(level)
    for language in LANGUAGES:
        index = plan.find(language)
        selection = plan.selections[index] if index is not None else None
        name_col, action_col = st.columns((0.7, 0.3))
        name_col.markdown(f"**{language}**")
        clicked = action_col.button(
            "Selected" if selection else "Select",
            key=f"lang-toggle-{level}-{language}",
            type="primary" if selection else "secondary",
            disabled=selection is None and plan.is_full,
        )
        if clicked:
            session.dispatch(ToggleLanguage(language))
            st.rerun()
        if selection is None or not variants:
            continue
        variant = radio_choice(f"{language} edition", variants, selection.variant)
        if variant is not None:
            session.dispatch(SetLanguageVariant(language, variant))
            st.rerun()
        if not is_language_selection_complete(level, selection):
            st.warning(f"Choose an edition for {language}.")
