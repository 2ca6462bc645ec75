"""Answer reducer: closed set of update actions for one class's answers.

Every action is applied by :func:`reduce_answers`, which returns a new
:class:`~models.questionnaire.QuestionnaireAnswers` and never mutates its
input. Dependent fields are reset in the transition that changes their parent
so no follow-up answer outlives the question it belongs to:

* English skill -> writing focus, workbook assist
* Math skill -> workbook assist
* Language count -> trailing selections beyond the new count

Actions that would set a dependent answer whose question is not shown (for
example a writing focus for LKG, or any language action for Nursery) leave the
answers unchanged. Values that are not offered for the class raise
:class:`~core.errors.AnswerValidationError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping, Union

from core.errors import AnswerValidationError
from core.options import (
    LANGUAGES,
    REGION_PRESETS,
    english_assist_applies,
    english_skills_for,
    has_language_step,
    language_variants_for,
    math_assist_applies,
    math_skills_for,
    writing_focus_applies,
)
from models.catalog import Subject
from models.questionnaire import (
    AnswerMap,
    AssessmentType,
    ClassLevel,
    LanguagePlan,
    LanguageSelection,
    QuestionnaireAnswers,
    WritingFocus,
)

logger = logging.getLogger(__name__)

CORE_SUBJECT_FIELDS: Final[Mapping[Subject, str]] = MappingProxyType(
    {
        Subject.EVS: "include_evs",
        Subject.RHYMES: "include_rhymes",
        Subject.ART: "include_art",
    }
)


@dataclass(frozen=True)
class SetEnglishSkill:
    skill: str


@dataclass(frozen=True)
class SetWritingFocus:
    focus: WritingFocus | str


@dataclass(frozen=True)
class SetEnglishAssist:
    assist: bool


@dataclass(frozen=True)
class SetMathSkill:
    skill: str


@dataclass(frozen=True)
class SetMathAssist:
    assist: bool


@dataclass(frozen=True)
class SetAssessment:
    assessment: AssessmentType | str


@dataclass(frozen=True)
class SetCoreSubject:
    subject: Subject | str
    included: bool


@dataclass(frozen=True)
class RemoveEnglish:
    pass


@dataclass(frozen=True)
class RemoveMath:
    pass


@dataclass(frozen=True)
class RemoveAssessment:
    pass


@dataclass(frozen=True)
class RemoveCoreSubject:
    subject: Subject | str


@dataclass(frozen=True)
class SetLanguageCount:
    count: int


@dataclass(frozen=True)
class ToggleLanguage:
    """Select ``language`` when capacity allows, or deselect it if picked."""

    language: str


@dataclass(frozen=True)
class SetLanguageVariant:
    language: str
    variant: str


@dataclass(frozen=True)
class RemoveLanguage:
    index: int


@dataclass(frozen=True)
class ApplyRegionPreset:
    """Fill the declared language slots from a regional suggestion list."""

    region: str


AnswerAction = Union[
    SetEnglishSkill,
    SetWritingFocus,
    SetEnglishAssist,
    SetMathSkill,
    SetMathAssist,
    SetAssessment,
    SetCoreSubject,
    RemoveEnglish,
    RemoveMath,
    RemoveAssessment,
    RemoveCoreSubject,
    SetLanguageCount,
    ToggleLanguage,
    SetLanguageVariant,
    RemoveLanguage,
    ApplyRegionPreset,
]


def _require_option(field: str, value: object, options: tuple[str, ...], class_level: ClassLevel) -> None:
    if value not in options:
        raise AnswerValidationError(
            f"{value!r} is not a valid {field} option for {class_level}",
            details={"options": list(options)},
            field=field,
            value=value,
        )


def _coerce_enum(field: str, enum_type: type, value: object) -> object:
    try:
        return enum_type(value)
    except ValueError as exc:
        raise AnswerValidationError(f"{value!r} is not a valid {field}", field=field, value=value) from exc


def _core_field(subject: Subject | str) -> str:
    try:
        return CORE_SUBJECT_FIELDS[Subject(subject)]
    except (KeyError, ValueError) as exc:
        raise AnswerValidationError(
            f"{subject!r} is not a core subject", field="core_subject", value=subject
        ) from exc


# --- parent-field transitions -------------------------------------------------


def _set_english_skill(answers: QuestionnaireAnswers, skill: str) -> QuestionnaireAnswers:
    _require_option("english_skill", skill, english_skills_for(answers.class_level), answers.class_level)
    return answers.model_copy(
        update={
            "english_skill": skill,
            "english_skill_writing_focus": None,
            "english_workbook_assist": None,
        }
    )


def _clear_english(answers: QuestionnaireAnswers) -> QuestionnaireAnswers:
    return answers.model_copy(
        update={
            "english_skill": None,
            "english_skill_writing_focus": None,
            "english_workbook_assist": None,
        }
    )


def _set_math_skill(answers: QuestionnaireAnswers, skill: str) -> QuestionnaireAnswers:
    _require_option("math_skill", skill, math_skills_for(answers.class_level), answers.class_level)
    return answers.model_copy(update={"math_skill": skill, "math_workbook_assist": None})


def _clear_math(answers: QuestionnaireAnswers) -> QuestionnaireAnswers:
    return answers.model_copy(update={"math_skill": None, "math_workbook_assist": None})


def _with_languages(
    answers: QuestionnaireAnswers, count: int, selections: tuple[LanguageSelection, ...]
) -> QuestionnaireAnswers:
    plan = LanguagePlan(count=count, selections=selections)
    if plan == answers.languages:
        return answers
    return answers.model_copy(update={"languages": plan})


def _set_language_count(answers: QuestionnaireAnswers, count: int) -> QuestionnaireAnswers:
    if count not in (0, 1, 2):
        raise AnswerValidationError(f"Language count must be 0, 1 or 2, got {count!r}", field="count", value=count)
    plan = answers.languages
    if plan.count == count:
        return answers
    return _with_languages(answers, count, plan.selections[:count])


def _toggle_language(answers: QuestionnaireAnswers, language: str) -> QuestionnaireAnswers:
    _require_option("language", language, LANGUAGES, answers.class_level)
    plan = answers.languages
    existing = plan.find(language)
    if existing is not None:
        remaining = plan.selections[:existing] + plan.selections[existing + 1 :]
        return _with_languages(answers, plan.count, remaining)
    if plan.is_full:
        logger.debug("Language capacity reached for %s; ignoring %s", answers.class_level, language)
        return answers
    return _with_languages(answers, plan.count, (*plan.selections, LanguageSelection(language=language)))


def _set_language_variant(answers: QuestionnaireAnswers, language: str, variant: str) -> QuestionnaireAnswers:
    _require_option("language_variant", variant, language_variants_for(answers.class_level), answers.class_level)
    plan = answers.languages
    if plan.find(language) is None:
        return answers
    selections = tuple(
        selection.model_copy(update={"variant": variant}) if selection.language == language else selection
        for selection in plan.selections
    )
    return _with_languages(answers, plan.count, selections)


def _remove_language(answers: QuestionnaireAnswers, index: int) -> QuestionnaireAnswers:
    plan = answers.languages
    if not 0 <= index < len(plan.selections):
        return answers
    remaining = plan.selections[:index] + plan.selections[index + 1 :]
    return _with_languages(answers, min(plan.count, len(remaining)), remaining)


def _apply_region_preset(answers: QuestionnaireAnswers, region: str) -> QuestionnaireAnswers:
    try:
        preset = REGION_PRESETS[region]
    except KeyError as exc:
        raise AnswerValidationError(f"Unknown region preset {region!r}", field="region", value=region) from exc
    plan = answers.languages
    previous = {selection.language: selection for selection in plan.selections}
    selections = tuple(
        previous.get(language, LanguageSelection(language=language)) for language in preset[: plan.count]
    )
    return _with_languages(answers, plan.count, selections)


def reduce_answers(answers: QuestionnaireAnswers, action: AnswerAction) -> QuestionnaireAnswers:
    """Apply ``action`` to ``answers`` and return the resulting snapshot."""

    level = answers.class_level
    match action:
        case SetEnglishSkill(skill=skill):
            result = _set_english_skill(answers, skill)
        case SetWritingFocus(focus=focus):
            value = _coerce_enum("writing focus", WritingFocus, focus)
            result = (
                answers.model_copy(update={"english_skill_writing_focus": value})
                if writing_focus_applies(answers)
                else answers
            )
        case SetEnglishAssist(assist=assist):
            result = (
                answers.model_copy(update={"english_workbook_assist": bool(assist)})
                if english_assist_applies(answers)
                else answers
            )
        case SetMathSkill(skill=skill):
            result = _set_math_skill(answers, skill)
        case SetMathAssist(assist=assist):
            result = (
                answers.model_copy(update={"math_workbook_assist": bool(assist)})
                if math_assist_applies(answers)
                else answers
            )
        case SetAssessment(assessment=assessment):
            value = _coerce_enum("assessment", AssessmentType, assessment)
            result = answers.model_copy(update={"assessment": value})
        case SetCoreSubject(subject=subject, included=included):
            result = answers.model_copy(update={_core_field(subject): bool(included)})
        case RemoveEnglish():
            result = _clear_english(answers)
        case RemoveMath():
            result = _clear_math(answers)
        case RemoveAssessment():
            result = answers.model_copy(update={"assessment": None})
        case RemoveCoreSubject(subject=subject):
            result = answers.model_copy(update={_core_field(subject): False})
        case SetLanguageCount() | ToggleLanguage() | SetLanguageVariant() | RemoveLanguage() | ApplyRegionPreset() if (
            not has_language_step(level)
        ):
            logger.debug("%s has no language step; ignoring %s", level, type(action).__name__)
            result = answers
        case SetLanguageCount(count=count):
            result = _set_language_count(answers, count)
        case ToggleLanguage(language=language):
            result = _toggle_language(answers, language)
        case SetLanguageVariant(language=language, variant=variant):
            result = _set_language_variant(answers, language, variant)
        case RemoveLanguage(index=index):
            result = _remove_language(answers, index)
        case ApplyRegionPreset(region=region):
            result = _apply_region_preset(answers, region)
        case _:
            raise TypeError(f"Unsupported answer action: {action!r}")
    logger.debug("Applied %s to %s answers", type(action).__name__, level)
    return result


def reduce_answer_map(
    answer_map: AnswerMap, class_level: ClassLevel, action: AnswerAction
) -> dict[ClassLevel, QuestionnaireAnswers]:
    """Return a new answer map with ``action`` applied to ``class_level`` only."""

    updated = dict(answer_map)
    updated[class_level] = reduce_answers(answer_map[class_level], action)
    return updated


__all__ = [
    "AnswerAction",
    "ApplyRegionPreset",
    "CORE_SUBJECT_FIELDS",
    "RemoveAssessment",
    "RemoveCoreSubject",
    "RemoveEnglish",
    "RemoveLanguage",
    "RemoveMath",
    "SetAssessment",
    "SetCoreSubject",
    "SetEnglishAssist",
    "SetEnglishSkill",
    "SetLanguageCount",
    "SetLanguageVariant",
    "SetMathAssist",
    "SetMathSkill",
    "SetWritingFocus",
    "ToggleLanguage",
    "reduce_answer_map",
    "reduce_answers",
]
