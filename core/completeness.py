"""Per-step completeness predicates for one class's answers."""

from __future__ import annotations

from dataclasses import dataclass

from core.options import (
    english_assist_applies,
    language_variant_required,
    math_assist_applies,
    writing_focus_applies,
)
from models.questionnaire import ClassLevel, LanguageSelection, QuestionnaireAnswers


def is_english_complete(answers: QuestionnaireAnswers) -> bool:
    if not answers.english_skill:
        return False
    if writing_focus_applies(answers) and answers.english_skill_writing_focus is None:
        return False
    if english_assist_applies(answers) and answers.english_workbook_assist is None:
        return False
    return True


def is_math_complete(answers: QuestionnaireAnswers) -> bool:
    if not answers.math_skill:
        return False
    if math_assist_applies(answers) and answers.math_workbook_assist is None:
        return False
    return True


def is_assessment_complete(answers: QuestionnaireAnswers) -> bool:
    return answers.assessment is not None


def is_core_complete(_answers: QuestionnaireAnswers) -> bool:
    # Core subject toggles are optional.
    return True


def is_language_selection_complete(class_level: ClassLevel, selection: LanguageSelection) -> bool:
    """A selection is complete once its variant is chosen, if the class needs one."""

    if language_variant_required(class_level):
        return selection.variant is not None
    return True


@dataclass(frozen=True)
class LanguageProgress:
    """Languages step report: desired slots versus complete and pending picks."""

    desired: int
    selected: int
    complete: int

    @property
    def awaiting_variant(self) -> int:
        return self.selected - self.complete

    @property
    def remaining(self) -> int:
        return max(self.desired - self.selected, 0)

    @property
    def pending(self) -> int:
        """Slots that are not yet complete (unpicked or missing a variant)."""

        return max(self.desired - self.complete, 0)

    @property
    def is_complete(self) -> bool:
        return self.pending == 0


def language_progress(answers: QuestionnaireAnswers) -> LanguageProgress:
    plan = answers.languages
    complete = sum(
        1 for selection in plan.selections if is_language_selection_complete(answers.class_level, selection)
    )
    return LanguageProgress(desired=plan.count, selected=len(plan.selections), complete=complete)


def is_languages_complete(answers: QuestionnaireAnswers) -> bool:
    return language_progress(answers).is_complete


@dataclass(frozen=True)
class AnswerProgress:
    """Header counters shown while configuring a class."""

    base: int
    languages_selected: int
    languages_desired: int


def answer_progress(answers: QuestionnaireAnswers) -> AnswerProgress:
    """Score answered sections: skills count double, each included subject once."""

    base = 0
    if answers.english_skill:
        base += 2
    if answers.math_skill:
        base += 2
    if answers.assessment is not None:
        base += 1
    base += sum((answers.include_evs, answers.include_rhymes, answers.include_art))
    return AnswerProgress(
        base=base,
        languages_selected=len(answers.languages.selections),
        languages_desired=answers.languages.count,
    )


__all__ = [
    "AnswerProgress",
    "LanguageProgress",
    "answer_progress",
    "is_assessment_complete",
    "is_core_complete",
    "is_english_complete",
    "is_language_selection_complete",
    "is_languages_complete",
    "is_math_complete",
    "language_progress",
]
