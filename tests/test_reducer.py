from __future__ import annotations

import itertools
import random

import pytest

from core.errors import AnswerValidationError
from core.reducer import (
    ApplyRegionPreset,
    RemoveAssessment,
    RemoveCoreSubject,
    RemoveEnglish,
    RemoveLanguage,
    RemoveMath,
    SetAssessment,
    SetCoreSubject,
    SetEnglishAssist,
    SetEnglishSkill,
    SetLanguageCount,
    SetLanguageVariant,
    SetMathAssist,
    SetMathSkill,
    SetWritingFocus,
    ToggleLanguage,
    reduce_answer_map,
    reduce_answers,
)
from core.validation import check_answer_map, check_invariants
from models.catalog import Subject
from models.questionnaire import (
    AssessmentType,
    ClassLevel,
    LanguageSelection,
    QuestionnaireAnswers,
    WritingFocus,
    initial_answer_map,
)


def _apply(answers: QuestionnaireAnswers, *actions) -> QuestionnaireAnswers:
    for action in actions:
        answers = reduce_answers(answers, action)
    return answers


def _languages(answers: QuestionnaireAnswers) -> list[str]:
    return [selection.language for selection in answers.languages.selections]


def test_changing_english_skill_resets_dependents(nursery: QuestionnaireAnswers) -> None:
    answers = _apply(nursery, SetEnglishSkill("ABCD"), SetWritingFocus("Caps"), SetEnglishAssist(True))
    assert answers.english_skill_writing_focus is WritingFocus.CAPS

    answers = reduce_answers(answers, SetEnglishSkill("SATPIN"))

    assert answers.english_skill == "SATPIN"
    assert answers.english_skill_writing_focus is None
    assert answers.english_workbook_assist is None


def test_reselecting_same_skill_still_clears_dependents(nursery: QuestionnaireAnswers) -> None:
    answers = _apply(nursery, SetEnglishSkill("ABCD"), SetWritingFocus("Small"))

    answers = reduce_answers(answers, SetEnglishSkill("ABCD"))

    assert answers.english_skill_writing_focus is None


def test_changing_math_skill_resets_assist(lkg: QuestionnaireAnswers) -> None:
    answers = _apply(lkg, SetMathSkill("1–100"), SetMathAssist(True), SetMathSkill("1–50 tens & ones"))

    assert answers.math_workbook_assist is None


@pytest.mark.parametrize(
    ("level", "skill"),
    [(ClassLevel.LKG, "Caps+vowels"), (ClassLevel.NURSERY, "LTI"), (ClassLevel.NURSERY, "Jolly Phonics")],
)
def test_writing_focus_is_ignored_where_not_asked(level: ClassLevel, skill: str) -> None:
    answers = reduce_answers(QuestionnaireAnswers.for_class(level), SetEnglishSkill(skill))

    assert reduce_answers(answers, SetWritingFocus("Caps")) is answers


def test_assist_ignored_for_ukg_and_jolly_phonics(ukg: QuestionnaireAnswers, nursery: QuestionnaireAnswers) -> None:
    ukg_answers = _apply(ukg, SetEnglishSkill("With cursive"), SetMathSkill("1–200"))
    assert reduce_answers(ukg_answers, SetEnglishAssist(True)) is ukg_answers
    assert reduce_answers(ukg_answers, SetMathAssist(True)) is ukg_answers

    jolly = reduce_answers(nursery, SetEnglishSkill("Jolly Phonics"))
    assert reduce_answers(jolly, SetEnglishAssist(True)) is jolly


def test_assist_requires_a_skill(lkg: QuestionnaireAnswers) -> None:
    assert reduce_answers(lkg, SetEnglishAssist(True)).english_workbook_assist is None
    assert reduce_answers(lkg, SetMathAssist(True)).math_workbook_assist is None


def test_invalid_options_raise(lkg: QuestionnaireAnswers) -> None:
    with pytest.raises(AnswerValidationError) as excinfo:
        reduce_answers(lkg, SetEnglishSkill("ABCD"))
    assert excinfo.value.field == "english_skill"

    with pytest.raises(AnswerValidationError):
        reduce_answers(lkg, SetMathSkill("1–10"))
    with pytest.raises(AnswerValidationError):
        reduce_answers(lkg, SetAssessment("Weekly"))
    with pytest.raises(AnswerValidationError):
        reduce_answers(lkg, SetCoreSubject("Science", True))
    with pytest.raises(AnswerValidationError):
        reduce_answers(lkg, SetLanguageCount(3))
    with pytest.raises(AnswerValidationError):
        reduce_answers(reduce_answers(lkg, SetLanguageCount(1)), ToggleLanguage("French"))


def test_unknown_action_raises_type_error(lkg: QuestionnaireAnswers) -> None:
    with pytest.raises(TypeError):
        reduce_answers(lkg, object())  # type: ignore[arg-type]


def test_assessment_and_core_subjects(lkg: QuestionnaireAnswers) -> None:
    answers = _apply(lkg, SetAssessment("Annual"), SetCoreSubject(Subject.RHYMES, False))

    assert answers.assessment is AssessmentType.ANNUAL
    assert answers.include_rhymes is False
    assert answers.include_evs is True

    answers = _apply(answers, RemoveAssessment(), RemoveCoreSubject(Subject.EVS))
    assert answers.assessment is None
    assert answers.include_evs is False


def test_remove_english_and_math_clear_dependents(nursery: QuestionnaireAnswers) -> None:
    answers = _apply(
        nursery,
        SetEnglishSkill("ABCD"),
        SetWritingFocus("Caps"),
        SetEnglishAssist(False),
        SetMathSkill("1–20"),
        SetMathAssist(True),
    )

    answers = _apply(answers, RemoveEnglish(), RemoveMath())

    assert answers == QuestionnaireAnswers.for_class(ClassLevel.NURSERY)


def test_reducer_never_mutates_input(lkg: QuestionnaireAnswers) -> None:
    before = lkg.model_dump()

    reduce_answers(lkg, SetEnglishSkill("Caps+vowels"))
    reduce_answers(lkg, SetLanguageCount(2))

    assert lkg.model_dump() == before


def test_toggle_selects_and_deselects(lkg: QuestionnaireAnswers) -> None:
    answers = _apply(lkg, SetLanguageCount(2), ToggleLanguage("Hindi"), ToggleLanguage("Tamil"))
    assert _languages(answers) == ["Hindi", "Tamil"]

    answers = reduce_answers(answers, ToggleLanguage("Hindi"))

    assert _languages(answers) == ["Tamil"]
    assert answers.languages.count == 2


def test_toggle_is_ignored_when_full(lkg: QuestionnaireAnswers) -> None:
    answers = _apply(lkg, SetLanguageCount(1), ToggleLanguage("Kannada"))

    assert reduce_answers(answers, ToggleLanguage("Hindi")) is answers
    assert reduce_answers(lkg, ToggleLanguage("Hindi")) is lkg


def test_lowering_count_truncates_trailing_selections(ukg: QuestionnaireAnswers) -> None:
    answers = _apply(
        ukg,
        SetLanguageCount(2),
        ToggleLanguage("Telugu"),
        ToggleLanguage("Hindi"),
        SetLanguageVariant("Telugu", "Swara & Vyanjana V2"),
    )

    answers = reduce_answers(answers, SetLanguageCount(1))

    assert answers.languages.selections == (LanguageSelection(language="Telugu", variant="Swara & Vyanjana V2"),)
    assert reduce_answers(answers, SetLanguageCount(0)).languages.selections == ()


def test_set_variant_touches_only_matching_language(lkg: QuestionnaireAnswers) -> None:
    answers = _apply(lkg, SetLanguageCount(2), ToggleLanguage("Kannada"), ToggleLanguage("Hindi"))

    answers = reduce_answers(answers, SetLanguageVariant("Hindi", "Swara V2"))

    assert [s.variant for s in answers.languages.selections] == [None, "Swara V2"]
    assert reduce_answers(answers, SetLanguageVariant("Tamil", "Swara V1")) is answers
    with pytest.raises(AnswerValidationError):
        reduce_answers(answers, SetLanguageVariant("Hindi", "Swara & Vyanjana V1"))


def test_remove_language_caps_count(lkg: QuestionnaireAnswers) -> None:
    answers = _apply(lkg, SetLanguageCount(2), ToggleLanguage("Kannada"), ToggleLanguage("Hindi"))

    answers = reduce_answers(answers, RemoveLanguage(0))

    assert _languages(answers) == ["Hindi"]
    assert answers.languages.count == 1
    assert reduce_answers(answers, RemoveLanguage(5)) is answers


def test_remove_language_with_open_slot_keeps_count_at_selection_size(lkg: QuestionnaireAnswers) -> None:
    answers = _apply(lkg, SetLanguageCount(2), ToggleLanguage("Marathi"))

    answers = reduce_answers(answers, RemoveLanguage(0))

    assert answers.languages.count == 0
    assert answers.languages.selections == ()


def test_region_preset_fills_declared_slots(lkg: QuestionnaireAnswers) -> None:
    answers = _apply(
        lkg,
        SetLanguageCount(1),
        ToggleLanguage("Kannada"),
        SetLanguageVariant("Kannada", "Swara V1"),
        SetLanguageCount(2),
    )

    answers = reduce_answers(answers, ApplyRegionPreset("Karnataka"))

    assert answers.languages.selections == (
        LanguageSelection(language="Kannada", variant="Swara V1"),
        LanguageSelection(language="Hindi"),
    )
    with pytest.raises(AnswerValidationError):
        reduce_answers(answers, ApplyRegionPreset("Atlantis"))


def test_region_preset_respects_count(lkg: QuestionnaireAnswers) -> None:
    answers = reduce_answers(lkg, SetLanguageCount(1))

    assert _languages(reduce_answers(answers, ApplyRegionPreset("Tamil Nadu"))) == ["Tamil"]
    assert reduce_answers(lkg, ApplyRegionPreset("Tamil Nadu")) is lkg


@pytest.mark.parametrize(
    "action",
    [SetLanguageCount(2), ToggleLanguage("Hindi"), SetLanguageVariant("Hindi", "Swara V1"), RemoveLanguage(0)],
)
def test_language_actions_ignored_for_nursery(nursery: QuestionnaireAnswers, action) -> None:
    assert reduce_answers(nursery, action) is nursery


def test_reduce_answer_map_touches_one_class() -> None:
    answer_map = initial_answer_map()

    updated = reduce_answer_map(answer_map, ClassLevel.UKG, SetAssessment("Termwise"))

    assert updated is not answer_map
    assert updated[ClassLevel.UKG].assessment is AssessmentType.TERMWISE
    assert updated[ClassLevel.LKG] is answer_map[ClassLevel.LKG]
    assert answer_map[ClassLevel.UKG].assessment is None


def _language_actions() -> list:
    actions: list = [SetLanguageCount(count) for count in (0, 1, 2)]
    actions += [ToggleLanguage(language) for language in ("Kannada", "Hindi", "Tamil")]
    actions += [SetLanguageVariant(language, "Swara V1") for language in ("Kannada", "Hindi")]
    actions += [RemoveLanguage(index) for index in (0, 1)]
    actions += [ApplyRegionPreset("Karnataka"), ApplyRegionPreset("North India")]
    return actions


def test_language_invariants_hold_for_all_pairs(lkg: QuestionnaireAnswers) -> None:
    actions = _language_actions()
    for first, second in itertools.product(actions, repeat=2):
        answers = _apply(lkg, first, second)
        assert check_invariants(answers) == [], (first, second)


def test_invariants_hold_for_random_sequences() -> None:
    rng = random.Random(7)
    skills = {
        ClassLevel.NURSERY: [SetEnglishSkill(s) for s in ("ABCD", "SATPIN", "LTI", "Jolly Phonics")],
        ClassLevel.LKG: [SetEnglishSkill(s) for s in ("Caps+vowels", "Small+vowels")],
        ClassLevel.UKG: [SetEnglishSkill(s) for s in ("With cursive", "Without cursive")],
    }
    common = [
        SetWritingFocus("Caps"),
        SetEnglishAssist(True),
        SetMathAssist(False),
        RemoveEnglish(),
        RemoveMath(),
        SetCoreSubject("Art & Craft", False),
    ]
    answer_map = initial_answer_map()
    for _ in range(300):
        level = rng.choice(list(answer_map))
        action = rng.choice(skills[level] + common + _language_actions()[:-2])
        if isinstance(action, SetLanguageVariant) and level is ClassLevel.UKG:
            continue
        answer_map = reduce_answer_map(answer_map, level, action)
        assert check_answer_map(answer_map) == {}


@pytest.mark.parametrize(
    "action",
    [RemoveEnglish(), RemoveMath(), RemoveAssessment(), RemoveCoreSubject("EVS")],
)
def test_remove_actions_are_idempotent(lkg: QuestionnaireAnswers, action) -> None:
    answers = _apply(
        lkg,
        SetEnglishSkill("Caps+vowels"),
        SetMathSkill("1–100"),
        SetAssessment("Annual"),
        SetLanguageCount(2),
        ToggleLanguage("Hindi"),
        ToggleLanguage("Tamil"),
    )

    once = reduce_answers(answers, action)
    twice = reduce_answers(once, action)

    assert twice == once
