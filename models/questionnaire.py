"""Pydantic models for the per-class questionnaire answers."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ClassLevel(StrEnum):
    """Academic grades configured by the wizard."""

    NURSERY = "Nursery"
    LKG = "LKG"
    UKG = "UKG"


CLASS_ORDER: tuple[ClassLevel, ...] = (ClassLevel.NURSERY, ClassLevel.LKG, ClassLevel.UKG)


class WritingFocus(StrEnum):
    """Nursery-only letter case refinement for ABCD and SATPIN."""

    CAPS = "Caps"
    SMALL = "Small"
    CAPS_AND_SMALL = "Caps & Small"


class AssessmentType(StrEnum):
    TERMWISE = "Termwise"
    ANNUAL = "Annual"
    ANNUAL_NO_MARKS = "Annual (no marks)"


LanguageCount = Literal[0, 1, 2]


class _AnswerModel(BaseModel):
    """Shared configuration: immutable snapshots with camelCase wire aliases."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class LanguageSelection(_AnswerModel):
    """One picked language plus its (optional) edition variant."""

    language: str
    variant: Optional[str] = None


class LanguagePlan(_AnswerModel):
    """Declared language target and the languages actually picked."""

    count: LanguageCount = 0
    selections: tuple[LanguageSelection, ...] = ()

    @model_validator(mode="after")
    def _check_capacity(self) -> "LanguagePlan":
        if len(self.selections) > self.count:
            raise ValueError("selections exceed the declared language count")
        names = [selection.language for selection in self.selections]
        if len(names) != len(set(names)):
            raise ValueError("duplicate language selection")
        return self

    def find(self, language: str) -> int | None:
        """Return the index of ``language`` in ``selections`` or ``None``."""

        for index, selection in enumerate(self.selections):
            if selection.language == language:
                return index
        return None

    @property
    def is_full(self) -> bool:
        return self.count == 0 or len(self.selections) >= self.count


class QuestionnaireAnswers(_AnswerModel):
    """Answer snapshot for one class level.

    Instances are never mutated; the reducer returns updated copies via
    ``model_copy``. The wire aliases mirror the selection service payload
    (``classLevel``, ``englishSkill``, ``includeEVS`` ...).
    """

    class_level: ClassLevel
    english_skill: Optional[str] = None
    english_skill_writing_focus: Optional[WritingFocus] = None
    english_workbook_assist: Optional[bool] = None
    math_skill: Optional[str] = None
    math_workbook_assist: Optional[bool] = None
    assessment: Optional[AssessmentType] = None
    include_evs: bool = Field(default=True, alias="includeEVS")
    include_rhymes: bool = True
    include_art: bool = True
    languages: LanguagePlan = Field(default_factory=LanguagePlan)

    @classmethod
    def for_class(cls, class_level: ClassLevel | str) -> "QuestionnaireAnswers":
        """Return the default answers for ``class_level``."""

        return cls(class_level=ClassLevel(class_level))

    def to_payload(self) -> dict[str, Any]:
        """Serialise to the JSON shape expected by the selection service."""

        return self.model_dump(mode="json", by_alias=True)


AnswerMap = Mapping[ClassLevel, QuestionnaireAnswers]


def initial_answer_map() -> dict[ClassLevel, QuestionnaireAnswers]:
    """Create the three default answer records, one per class level."""

    return {level: QuestionnaireAnswers.for_class(level) for level in CLASS_ORDER}


def answers_payload(answers: AnswerMap) -> dict[str, dict[str, Any]]:
    """Serialise a full answer map keyed by class level name."""

    return {str(level): answers[level].to_payload() for level in CLASS_ORDER if level in answers}


__all__ = [
    "AnswerMap",
    "AssessmentType",
    "CLASS_ORDER",
    "ClassLevel",
    "LanguageCount",
    "LanguagePlan",
    "LanguageSelection",
    "QuestionnaireAnswers",
    "WritingFocus",
    "answers_payload",
    "initial_answer_map",
]
