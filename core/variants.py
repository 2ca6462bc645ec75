"""Derive catalog variant keys from an answer snapshot.

Each catalog subject is keyed by a ``variant`` string. Skill and workbook
variants fold several answers into one label: the skill choice is the base and
writing focus or workbook assist become qualifiers inside a single
parenthetical, e.g. ``ABCD (Caps, Writing Assist)``. Qualifiers are kept as a
structured :class:`SkillDescriptor` and rendered by :meth:`SkillDescriptor.render`
so no caller ever slices strings.

Derivation never raises. ``None`` means "no key": the answers are not yet
specific enough to identify a book and catalog lookups yield no match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Final, Mapping

from core.options import JOLLY_PHONICS, LTI
from models.catalog import Subject
from models.questionnaire import ClassLevel, QuestionnaireAnswers, WritingFocus

WRITING_ASSIST: Final[str] = "Writing Assist"
NORMAL: Final[str] = "Normal"
STANDARD_VARIANT: Final[str] = "Standard"


@dataclass(frozen=True)
class SkillDescriptor:
    """Base label plus ordered qualifiers, rendered as ``base (q1, q2)``."""

    base: str
    qualifiers: tuple[str, ...] = ()

    def qualified(self, qualifier: str) -> "SkillDescriptor":
        return SkillDescriptor(self.base, (*self.qualifiers, qualifier))

    def render(self) -> str:
        if not self.qualifiers:
            return self.base
        return f"{self.base} ({', '.join(self.qualifiers)})"


def assist_text(assist: bool) -> str:
    return WRITING_ASSIST if assist else NORMAL


def english_skill_descriptor(answers: QuestionnaireAnswers) -> SkillDescriptor | None:
    """Describe the English skill book; LTI is always the caps edition."""

    skill = answers.english_skill
    if not skill:
        return None
    if skill == LTI:
        return SkillDescriptor(LTI, (WritingFocus.CAPS.value,))
    focus = answers.english_skill_writing_focus
    if focus is not None:
        return SkillDescriptor(skill, (focus.value,))
    return SkillDescriptor(skill)


def english_workbook_descriptor(answers: QuestionnaireAnswers) -> SkillDescriptor | None:
    skill = answers.english_skill
    if not skill:
        return None
    if answers.class_level is ClassLevel.UKG or skill == JOLLY_PHONICS:
        return SkillDescriptor(skill)
    if answers.english_workbook_assist is None:
        return None
    descriptor = english_skill_descriptor(answers)
    assert descriptor is not None
    return descriptor.qualified(assist_text(answers.english_workbook_assist))


def math_workbook_descriptor(answers: QuestionnaireAnswers) -> SkillDescriptor | None:
    skill = answers.math_skill
    if not skill:
        return None
    if answers.class_level is ClassLevel.UKG:
        return SkillDescriptor(skill)
    if answers.math_workbook_assist is None:
        return None
    return SkillDescriptor(skill, (assist_text(answers.math_workbook_assist),))


def _english_skill_variant(answers: QuestionnaireAnswers) -> str | None:
    descriptor = english_skill_descriptor(answers)
    return descriptor.render() if descriptor else None


def _english_workbook_variant(answers: QuestionnaireAnswers) -> str | None:
    descriptor = english_workbook_descriptor(answers)
    return descriptor.render() if descriptor else None


def _math_skill_variant(answers: QuestionnaireAnswers) -> str | None:
    return answers.math_skill or None


def _math_workbook_variant(answers: QuestionnaireAnswers) -> str | None:
    descriptor = math_workbook_descriptor(answers)
    return descriptor.render() if descriptor else None


def _assessment_variant(answers: QuestionnaireAnswers) -> str | None:
    return answers.assessment.value if answers.assessment is not None else None


def _standard_variant(_answers: QuestionnaireAnswers) -> str | None:
    return STANDARD_VARIANT


_VARIANT_RULES: Final[Mapping[Subject, Callable[[QuestionnaireAnswers], str | None]]] = {
    Subject.ENGLISH_SKILL: _english_skill_variant,
    Subject.ENGLISH_WORKBOOK: _english_workbook_variant,
    Subject.MATH_SKILL: _math_skill_variant,
    Subject.MATH_WORKBOOK: _math_workbook_variant,
    Subject.ASSESSMENT: _assessment_variant,
    Subject.EVS: _standard_variant,
    Subject.RHYMES: _standard_variant,
    Subject.ART: _standard_variant,
}


def derive_variant(subject: Subject | str, answers: QuestionnaireAnswers) -> str | None:
    """Return the catalog variant for ``subject`` or ``None`` when unresolved."""

    try:
        rule = _VARIANT_RULES[Subject(subject)]
    except ValueError:
        return None
    return rule(answers)


__all__ = [
    "NORMAL",
    "STANDARD_VARIANT",
    "SkillDescriptor",
    "WRITING_ASSIST",
    "assist_text",
    "derive_variant",
    "english_skill_descriptor",
    "english_workbook_descriptor",
    "math_workbook_descriptor",
]
