"""Static answer options per class level and the rules deciding which
follow-up questions apply to a given answer snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping

from models.questionnaire import AssessmentType, ClassLevel, QuestionnaireAnswers, WritingFocus

JOLLY_PHONICS: Final[str] = "Jolly Phonics"
LTI: Final[str] = "LTI"

ENGLISH_SKILLS: Final[Mapping[ClassLevel, tuple[str, ...]]] = MappingProxyType(
    {
        ClassLevel.NURSERY: ("ABCD", "SATPIN", LTI, JOLLY_PHONICS),
        ClassLevel.LKG: ("Caps+vowels", "Small+vowels"),
        ClassLevel.UKG: ("With cursive", "Without cursive"),
    }
)

MATH_SKILLS: Final[Mapping[ClassLevel, tuple[str, ...]]] = MappingProxyType(
    {
        ClassLevel.NURSERY: ("1–10", "1–20", "1–50"),
        ClassLevel.LKG: ("1–100", "1–100 & 1–50 number names", "1–50 tens & ones"),
        ClassLevel.UKG: ("1–100 & names", "1–200", "1–500"),
    }
)

# Skills that are refined by a Nursery writing focus step.
WRITING_FOCUS_SKILLS: Final[frozenset[str]] = frozenset({"ABCD", "SATPIN"})

ASSIST_CLASSES: Final[frozenset[ClassLevel]] = frozenset({ClassLevel.NURSERY, ClassLevel.LKG})


@dataclass(frozen=True)
class AssessmentOption:
    value: AssessmentType
    description: str


ASSESSMENT_OPTIONS: Final[tuple[AssessmentOption, ...]] = (
    AssessmentOption(AssessmentType.TERMWISE, "Assessments conducted at the end of each academic term."),
    AssessmentOption(AssessmentType.ANNUAL, "Includes 4 tests, 1 mid-term, and 1 final term exam."),
    AssessmentOption(
        AssessmentType.ANNUAL_NO_MARKS,
        "Same structure as Annual, but without grade or mark reporting.",
    ),
)

CORE_SUBJECT_DESCRIPTIONS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "EVS": "Concepts: My body, family, school, animals, transport, seasons, etc.",
        "Rhymes & Stories": "Customise 25 rhymes & 5 stories, or select our default book.",
        "Art & Craft": "Age-appropriate colouring and simple craft activities.",
    }
)

LANGUAGE_COUNT_LABELS: Final[tuple[str, ...]] = ("None", "One", "Two")
LANGUAGES: Final[tuple[str, ...]] = ("Kannada", "Hindi", "Tamil", "Telugu", "Marathi")

LANGUAGE_VARIANTS: Final[Mapping[ClassLevel, tuple[str, ...]]] = MappingProxyType(
    {
        ClassLevel.LKG: ("Swara V1", "Swara V2"),
        ClassLevel.UKG: ("Swara & Vyanjana V1", "Swara & Vyanjana V2"),
    }
)

# Ordered language suggestions per region; a preset fills at most ``count`` slots.
REGION_PRESETS: Final[Mapping[str, tuple[str, ...]]] = MappingProxyType(
    {
        "Karnataka": ("Kannada", "Hindi"),
        "Tamil Nadu": ("Tamil", "Hindi"),
        "Andhra Pradesh & Telangana": ("Telugu", "Hindi"),
        "Maharashtra": ("Marathi", "Hindi"),
        "North India": ("Hindi",),
    }
)


def english_skills_for(class_level: ClassLevel) -> tuple[str, ...]:
    return ENGLISH_SKILLS[class_level]


def math_skills_for(class_level: ClassLevel) -> tuple[str, ...]:
    return MATH_SKILLS[class_level]


def language_variants_for(class_level: ClassLevel) -> tuple[str, ...]:
    """Return the language edition variants offered to ``class_level``."""

    return LANGUAGE_VARIANTS.get(class_level, ())


def has_language_step(class_level: ClassLevel) -> bool:
    return class_level is not ClassLevel.NURSERY


def language_variant_required(class_level: ClassLevel) -> bool:
    return bool(language_variants_for(class_level))


def writing_focus_applies(answers: QuestionnaireAnswers) -> bool:
    """Return ``True`` when the Nursery writing focus question is shown."""

    return answers.class_level is ClassLevel.NURSERY and answers.english_skill in WRITING_FOCUS_SKILLS


def english_assist_applies(answers: QuestionnaireAnswers) -> bool:
    """Return ``True`` when the English workbook assist question is shown."""

    return (
        answers.class_level in ASSIST_CLASSES
        and answers.english_skill is not None
        and answers.english_skill != JOLLY_PHONICS
    )


def math_assist_applies(answers: QuestionnaireAnswers) -> bool:
    """Return ``True`` when the Math workbook assist question is shown."""

    return answers.class_level in ASSIST_CLASSES and answers.math_skill is not None


WRITING_FOCUS_OPTIONS: Final[tuple[WritingFocus, ...]] = tuple(WritingFocus)


__all__ = [
    "ASSESSMENT_OPTIONS",
    "ASSIST_CLASSES",
    "AssessmentOption",
    "CORE_SUBJECT_DESCRIPTIONS",
    "ENGLISH_SKILLS",
    "JOLLY_PHONICS",
    "LANGUAGES",
    "LANGUAGE_COUNT_LABELS",
    "LANGUAGE_VARIANTS",
    "LTI",
    "MATH_SKILLS",
    "REGION_PRESETS",
    "WRITING_FOCUS_OPTIONS",
    "WRITING_FOCUS_SKILLS",
    "english_assist_applies",
    "english_skills_for",
    "has_language_step",
    "language_variant_required",
    "language_variants_for",
    "math_assist_applies",
    "math_skills_for",
    "writing_focus_applies",
]
