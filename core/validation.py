"""Invariant checks over answer snapshots.

The reducer is responsible for keeping these invariants; the checks exist so
tests (and debug tooling) can assert that no action sequence breaks them.
"""

from __future__ import annotations

from core.options import (
    english_assist_applies,
    has_language_step,
    language_variants_for,
    math_assist_applies,
    writing_focus_applies,
)
from models.questionnaire import AnswerMap, QuestionnaireAnswers


def check_invariants(answers: QuestionnaireAnswers) -> list[str]:
    """Return a description of every invariant ``answers`` violates."""

    problems: list[str] = []
    if answers.english_skill_writing_focus is not None and not writing_focus_applies(answers):
        problems.append("orphaned english_skill_writing_focus")
    if answers.english_workbook_assist is not None and not english_assist_applies(answers):
        problems.append("orphaned english_workbook_assist")
    if answers.math_workbook_assist is not None and not math_assist_applies(answers):
        problems.append("orphaned math_workbook_assist")

    plan = answers.languages
    names = [selection.language for selection in plan.selections]
    if len(names) != len(set(names)):
        problems.append("duplicate language selection")
    if len(plan.selections) > plan.count:
        problems.append("language selections exceed count")
    if not has_language_step(answers.class_level) and (plan.count or plan.selections):
        problems.append(f"{answers.class_level} must not carry languages")
    allowed_variants = language_variants_for(answers.class_level)
    for selection in plan.selections:
        if selection.variant is not None and selection.variant not in allowed_variants:
            problems.append(f"unknown variant {selection.variant!r} for {selection.language}")
    return problems


def check_answer_map(answer_map: AnswerMap) -> dict[str, list[str]]:
    """Return invariant violations keyed by class level (empty when clean)."""

    report: dict[str, list[str]] = {}
    for level, answers in answer_map.items():
        if answers.class_level != level:
            report.setdefault(str(level), []).append("class_level does not match its map key")
        problems = check_invariants(answers)
        if problems:
            report.setdefault(str(level), []).extend(problems)
    return report


__all__ = ["check_answer_map", "check_invariants"]
