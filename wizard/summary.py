"""Summary rows for the class summary (step 6) and the final summary.

Both summaries are built from :func:`derive_book_ids` and
:func:`build_summary_items` so the two views always show the same books for
the same answers.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.catalog import Catalog, find_book_id
from core.completeness import is_language_selection_complete
from core.options import english_assist_applies, has_language_step, language_variant_required, math_assist_applies
from core.reducer import (
    AnswerAction,
    RemoveAssessment,
    RemoveCoreSubject,
    RemoveEnglish,
    RemoveLanguage,
    RemoveMath,
)
from models.catalog import Subject
from models.questionnaire import CLASS_ORDER, AnswerMap, ClassLevel, QuestionnaireAnswers

NOT_SELECTED = "Not selected"


@dataclass(frozen=True)
class BookIds:
    """Resolved catalog ids per summary slot; ``None`` means incomplete or excluded."""

    english_skill: str | None = None
    english_workbook: str | None = None
    math_skill: str | None = None
    math_workbook: str | None = None
    assessment: str | None = None
    evs: str | None = None
    rhymes: str | None = None
    art: str | None = None


def derive_book_ids(answers: QuestionnaireAnswers, catalog: Catalog) -> BookIds:
    """Resolve every book slot for one class; excluded core subjects resolve to ``None``."""

    def _lookup(subject: Subject, enabled: bool = True) -> str | None:
        return find_book_id(catalog, subject, answers) if enabled else None

    return BookIds(
        english_skill=_lookup(Subject.ENGLISH_SKILL),
        english_workbook=_lookup(Subject.ENGLISH_WORKBOOK),
        math_skill=_lookup(Subject.MATH_SKILL),
        math_workbook=_lookup(Subject.MATH_WORKBOOK),
        assessment=_lookup(Subject.ASSESSMENT),
        evs=_lookup(Subject.EVS, answers.include_evs),
        rhymes=_lookup(Subject.RHYMES, answers.include_rhymes),
        art=_lookup(Subject.ART, answers.include_art),
    )


@dataclass(frozen=True)
class SummaryItem:
    key: str
    label: str
    value: str
    step: int
    remove_action: AnswerAction | None = None
    book_id: str | None = None
    book_label: str | None = None

    @property
    def can_remove(self) -> bool:
        return self.remove_action is not None


def _english_skill_value(answers: QuestionnaireAnswers) -> str:
    if not answers.english_skill:
        return NOT_SELECTED
    if answers.english_skill_writing_focus is not None:
        return f"{answers.english_skill} ({answers.english_skill_writing_focus})"
    return answers.english_skill


def _english_workbook_value(answers: QuestionnaireAnswers) -> str:
    if not answers.english_skill:
        return "Requires English skill selection"
    if not english_assist_applies(answers):
        return "Matches English skill selection"
    if answers.english_workbook_assist is None:
        return "Assist not selected"
    return "Writing Assist" if answers.english_workbook_assist else "Normal"


def _math_workbook_value(answers: QuestionnaireAnswers) -> str:
    if not answers.math_skill:
        return "Requires Math skill selection"
    if not math_assist_applies(answers):
        return "Matches Math skill selection"
    if answers.math_workbook_assist is None:
        return "Assist not selected"
    return "Writing Assist" if answers.math_workbook_assist else "Normal"


def _core_item(key: str, subject: Subject, included: bool, book_id: str | None, book_label: str) -> SummaryItem:
    return SummaryItem(
        key=key,
        label=str(subject),
        value="Included" if included else "Not included",
        step=4,
        remove_action=RemoveCoreSubject(subject) if included else None,
        book_id=book_id,
        book_label=book_label if included else None,
    )


def _language_items(answers: QuestionnaireAnswers) -> list[SummaryItem]:
    plan = answers.languages
    if plan.count == 0:
        return [SummaryItem(key="language-none", label="Languages", value="No additional languages selected", step=5)]

    items = [
        SummaryItem(
            key="language-overview",
            label="Languages",
            value=f"{len(plan.selections)} of {plan.count} selected",
            step=5,
        )
    ]
    variant_required = language_variant_required(answers.class_level)
    for index, selection in enumerate(plan.selections):
        if not variant_required:
            value = "Selected"
        elif is_language_selection_complete(answers.class_level, selection):
            value = str(selection.variant)
        else:
            value = "Variant not selected"
        items.append(
            SummaryItem(
                key=f"language-{selection.language}-{index}",
                label=selection.language,
                value=value,
                step=5,
                remove_action=RemoveLanguage(index),
            )
        )
    remaining = plan.count - len(plan.selections)
    if remaining > 0:
        items.append(
            SummaryItem(
                key="language-pending",
                label="Pending languages",
                value=f"{remaining} selection(s) remaining",
                step=5,
            )
        )
    return items


def build_summary_items(answers: QuestionnaireAnswers, book_ids: BookIds) -> list[SummaryItem]:
    """Return the ordered summary rows for one class."""

    has_english = bool(answers.english_skill)
    has_math = bool(answers.math_skill)
    items = [
        SummaryItem(
            key="english-skill",
            label="English Skill Book",
            value=_english_skill_value(answers),
            step=1,
            remove_action=RemoveEnglish() if has_english else None,
            book_id=book_ids.english_skill,
            book_label="View English Skill Book",
        ),
        SummaryItem(
            key="english-workbook",
            label="English Workbook",
            value=_english_workbook_value(answers),
            step=1,
            remove_action=RemoveEnglish() if has_english else None,
            book_id=book_ids.english_workbook,
            book_label="View English Workbook",
        ),
        SummaryItem(
            key="math-skill",
            label="Math Skill Book",
            value=answers.math_skill or NOT_SELECTED,
            step=2,
            remove_action=RemoveMath() if has_math else None,
            book_id=book_ids.math_skill,
            book_label="View Math Skill Book",
        ),
        SummaryItem(
            key="math-workbook",
            label="Math Workbook",
            value=_math_workbook_value(answers),
            step=2,
            remove_action=RemoveMath() if has_math else None,
            book_id=book_ids.math_workbook,
            book_label="View Math Workbook",
        ),
        SummaryItem(
            key="assessment",
            label="Assessment",
            value=str(answers.assessment) if answers.assessment is not None else NOT_SELECTED,
            step=3,
            remove_action=RemoveAssessment() if answers.assessment is not None else None,
            book_id=book_ids.assessment,
            book_label="View Assessment Book",
        ),
        _core_item("core-evs", Subject.EVS, answers.include_evs, book_ids.evs, "View EVS Book"),
        _core_item("core-rhymes", Subject.RHYMES, answers.include_rhymes, book_ids.rhymes, "View Rhymes Book"),
        _core_item("core-art", Subject.ART, answers.include_art, book_ids.art, "View Art Book"),
    ]
    if has_language_step(answers.class_level):
        items.extend(_language_items(answers))
    return items


@dataclass(frozen=True)
class ClassSummary:
    class_level: ClassLevel
    book_ids: BookIds
    items: tuple[SummaryItem, ...]


def summarize_class(answers: QuestionnaireAnswers, catalog: Catalog) -> ClassSummary:
    book_ids = derive_book_ids(answers, catalog)
    return ClassSummary(
        class_level=answers.class_level,
        book_ids=book_ids,
        items=tuple(build_summary_items(answers, book_ids)),
    )


def summarize_all(answer_map: AnswerMap, catalog: Catalog) -> tuple[ClassSummary, ...]:
    """Final summary: one :class:`ClassSummary` per class in wizard order."""

    return tuple(summarize_class(answer_map[level], catalog) for level in CLASS_ORDER)


__all__ = [
    "BookIds",
    "ClassSummary",
    "SummaryItem",
    "build_summary_items",
    "derive_book_ids",
    "summarize_all",
    "summarize_class",
]
