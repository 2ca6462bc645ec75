"""Explicit navigation state machine for the questionnaire wizard.

The whole navigational position is one frozen :class:`NavigationState`
value. :func:`transition` is the only way to move between states; UI code
sends an event and stores the returned state.

Step numbers per class::

    1 English  2 Math  3 Assessment  4 Core subjects  5 Languages  6 Class summary

Nursery has no languages step, so moving forward from 4 or back from 6 skips
step 5. After UKG's class summary the wizard shows the final summary across
all classes. Edits started from a summary remember where to return to in
``summary_return_target``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Final, Union

from models.questionnaire import CLASS_ORDER, ClassLevel

logger = logging.getLogger(__name__)

FIRST_STEP: Final[int] = 1
LANGUAGES_STEP: Final[int] = 5
SUMMARY_STEP: Final[int] = 6
LAST_CLASS_INDEX: Final[int] = len(CLASS_ORDER) - 1


class SummaryReturnTarget(StrEnum):
    NONE = "none"
    CLASS = "class"
    FINAL = "final"


@dataclass(frozen=True)
class NavigationState:
    class_index: int = 0
    step: int = FIRST_STEP
    show_final_summary: bool = False
    summary_return_target: SummaryReturnTarget = SummaryReturnTarget.NONE

    def __post_init__(self) -> None:
        if not 0 <= self.class_index <= LAST_CLASS_INDEX:
            raise ValueError(f"class_index out of range: {self.class_index}")
        if not FIRST_STEP <= self.step <= SUMMARY_STEP:
            raise ValueError(f"step out of range: {self.step}")

    @property
    def class_level(self) -> ClassLevel:
        return CLASS_ORDER[self.class_index]

    @property
    def is_returning_to_summary(self) -> bool:
        return self.summary_return_target is not SummaryReturnTarget.NONE


INITIAL_STATE: Final[NavigationState] = NavigationState()


@dataclass(frozen=True)
class Next:
    pass


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class EditFromClassSummary:
    """Edit an item listed on the current class summary."""

    step: int


@dataclass(frozen=True)
class EditFromFinalSummary:
    """Edit an item of ``class_index`` listed on the final summary."""

    class_index: int
    step: int


@dataclass(frozen=True)
class EditClass:
    """Re-open a whole class from the final summary, starting at step 1."""

    class_index: int


@dataclass(frozen=True)
class ReturnToSummary:
    pass


NavigationEvent = Union[Next, Back, EditFromClassSummary, EditFromFinalSummary, EditClass, ReturnToSummary]


def _skips_languages(class_index: int) -> bool:
    return CLASS_ORDER[class_index] is ClassLevel.NURSERY


def _final_summary(state: NavigationState) -> NavigationState:
    return replace(state, show_final_summary=True, summary_return_target=SummaryReturnTarget.NONE)


def _return_to_summary(state: NavigationState) -> NavigationState:
    if state.summary_return_target is SummaryReturnTarget.FINAL:
        return _final_summary(state)
    if state.summary_return_target is SummaryReturnTarget.CLASS:
        return replace(
            state,
            step=SUMMARY_STEP,
            show_final_summary=False,
            summary_return_target=SummaryReturnTarget.NONE,
        )
    return state


def _next(state: NavigationState) -> NavigationState:
    if state.show_final_summary:
        return state
    if state.is_returning_to_summary:
        return _return_to_summary(state)
    if _skips_languages(state.class_index) and state.step == LANGUAGES_STEP - 1:
        return replace(state, step=SUMMARY_STEP)
    if state.step < SUMMARY_STEP:
        return replace(state, step=state.step + 1)
    if state.class_index < LAST_CLASS_INDEX:
        return replace(state, class_index=state.class_index + 1, step=FIRST_STEP)
    return _final_summary(state)


def _back(state: NavigationState) -> NavigationState:
    if state.show_final_summary:
        return NavigationState(class_index=LAST_CLASS_INDEX, step=SUMMARY_STEP)
    if state.is_returning_to_summary and state.step == FIRST_STEP:
        return _return_to_summary(state)
    if _skips_languages(state.class_index) and state.step == SUMMARY_STEP:
        return replace(state, step=LANGUAGES_STEP - 1)
    if state.step > FIRST_STEP:
        return replace(state, step=state.step - 1)
    if state.class_index > 0:
        return replace(state, class_index=state.class_index - 1, step=SUMMARY_STEP)
    return state


def _edit(state: NavigationState, class_index: int, step: int, target: SummaryReturnTarget) -> NavigationState:
    if _skips_languages(class_index) and step == LANGUAGES_STEP:
        raise ValueError("Nursery has no languages step")
    return NavigationState(
        class_index=class_index,
        step=step,
        show_final_summary=False,
        summary_return_target=target,
    )


def transition(state: NavigationState, event: NavigationEvent) -> NavigationState:
    """Return the state reached from ``state`` by ``event``."""

    match event:
        case Next():
            result = _next(state)
        case Back():
            result = _back(state)
        case EditFromClassSummary(step=step):
            result = _edit(state, state.class_index, step, SummaryReturnTarget.CLASS)
        case EditFromFinalSummary(class_index=class_index, step=step):
            result = _edit(state, class_index, step, SummaryReturnTarget.FINAL)
        case EditClass(class_index=class_index):
            result = _edit(state, class_index, FIRST_STEP, SummaryReturnTarget.FINAL)
        case ReturnToSummary():
            result = _return_to_summary(state)
        case _:
            raise TypeError(f"Unsupported navigation event: {event!r}")
    if result != state:
        logger.debug("Navigation %s: %s -> %s", type(event).__name__, state, result)
    return result


def visible_steps(class_index: int) -> tuple[int, ...]:
    """Return the steps a class actually walks through, in order."""

    if _skips_languages(class_index):
        return tuple(step for step in range(FIRST_STEP, SUMMARY_STEP + 1) if step != LANGUAGES_STEP)
    return tuple(range(FIRST_STEP, SUMMARY_STEP + 1))


def next_button_label(state: NavigationState) -> str:
    """Label for the forward button at ``state``."""

    if state.step != SUMMARY_STEP or state.is_returning_to_summary:
        return "Next"
    if state.class_index == LAST_CLASS_INDEX:
        return "Finish & View Summary"
    return f"Next: Configure {CLASS_ORDER[state.class_index + 1]}"


__all__ = [
    "Back",
    "EditClass",
    "EditFromClassSummary",
    "EditFromFinalSummary",
    "FIRST_STEP",
    "INITIAL_STATE",
    "LANGUAGES_STEP",
    "NavigationEvent",
    "NavigationState",
    "Next",
    "ReturnToSummary",
    "SUMMARY_STEP",
    "SummaryReturnTarget",
    "next_button_label",
    "transition",
    "visible_steps",
]
