"""Pydantic models for questionnaire answers and catalog records."""

from .catalog import Book, Subject
from .questionnaire import (
    CLASS_ORDER,
    AnswerMap,
    AssessmentType,
    ClassLevel,
    LanguagePlan,
    LanguageSelection,
    QuestionnaireAnswers,
    WritingFocus,
    answers_payload,
    initial_answer_map,
)

__all__ = [
    "AnswerMap",
    "AssessmentType",
    "Book",
    "CLASS_ORDER",
    "ClassLevel",
    "LanguagePlan",
    "LanguageSelection",
    "QuestionnaireAnswers",
    "Subject",
    "WritingFocus",
    "answers_payload",
    "initial_answer_map",
]
