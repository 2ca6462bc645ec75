"""Registry for wizard steps, metadata, and canonical order."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from core.completeness import (
    is_assessment_complete,
    is_core_complete,
    is_english_complete,
    is_languages_complete,
    is_math_complete,
)
from core.options import has_language_step
from models.questionnaire import ClassLevel, QuestionnaireAnswers

StepPredicate = Callable[[QuestionnaireAnswers], bool]


def _always_active(_class_level: ClassLevel) -> bool:
    return True


def _summary_complete(_answers: QuestionnaireAnswers) -> bool:
    return True


@dataclass(frozen=True)
class StepDefinition:
    """Metadata for one per-class wizard step."""

    number: int
    key: str
    label: str
    panel_header: str
    is_complete: StepPredicate
    is_active: Callable[[ClassLevel], bool] = _always_active


WIZARD_STEPS: Final[tuple[StepDefinition, ...]] = (
    StepDefinition(
        number=1,
        key="english",
        label="English",
        panel_header="Choose the English skill book and workbook",
        is_complete=is_english_complete,
    ),
    StepDefinition(
        number=2,
        key="math",
        label="Math",
        panel_header="Choose the Math skill book and workbook",
        is_complete=is_math_complete,
    ),
    StepDefinition(
        number=3,
        key="assessment",
        label="Assessment",
        panel_header="Choose the assessment pattern",
        is_complete=is_assessment_complete,
    ),
    StepDefinition(
        number=4,
        key="core",
        label="Core subjects",
        panel_header="Include EVS, Rhymes & Stories and Art & Craft",
        is_complete=is_core_complete,
    ),
    StepDefinition(
        number=5,
        key="languages",
        label="Languages",
        panel_header="Add up to two additional languages",
        is_complete=is_languages_complete,
        is_active=has_language_step,
    ),
    StepDefinition(
        number=6,
        key="summary",
        label="Class summary",
        panel_header="Review this class",
        is_complete=_summary_complete,
    ),
)

TOTAL_STEPS_PER_CLASS: Final[int] = len(WIZARD_STEPS)


def get_step(number: int) -> StepDefinition:
    for step in WIZARD_STEPS:
        if step.number == number:
            return step
    raise KeyError(number)


def step_keys() -> tuple[str, ...]:
    return tuple(step.key for step in WIZARD_STEPS)


def active_steps(class_level: ClassLevel) -> tuple[StepDefinition, ...]:
    """Return the steps shown for ``class_level`` in canonical order."""

    return tuple(step for step in WIZARD_STEPS if step.is_active(class_level))


def incomplete_steps(answers: QuestionnaireAnswers) -> tuple[StepDefinition, ...]:
    return tuple(step for step in active_steps(answers.class_level) if not step.is_complete(answers))


__all__ = [
    "StepDefinition",
    "TOTAL_STEPS_PER_CLASS",
    "WIZARD_STEPS",
    "active_steps",
    "get_step",
    "incomplete_steps",
    "step_keys",
]
