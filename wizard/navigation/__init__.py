"""Navigation state machine for the questionnaire wizard."""

from __future__ import annotations

from wizard.navigation.machine import (
    INITIAL_STATE,
    Back,
    EditClass,
    EditFromClassSummary,
    EditFromFinalSummary,
    NavigationEvent,
    NavigationState,
    Next,
    ReturnToSummary,
    SummaryReturnTarget,
    next_button_label,
    transition,
    visible_steps,
)

__all__ = [
    "Back",
    "EditClass",
    "EditFromClassSummary",
    "EditFromFinalSummary",
    "INITIAL_STATE",
    "NavigationEvent",
    "NavigationState",
    "Next",
    "ReturnToSummary",
    "SummaryReturnTarget",
    "next_button_label",
    "transition",
    "visible_steps",
]
