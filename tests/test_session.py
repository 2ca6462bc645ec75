from __future__ import annotations

from typing import Any

import pytest

from constants.keys import StateKeys
from core.catalog import Catalog
from core.errors import SelectionServiceError
from core.reducer import SetAssessment, SetEnglishSkill, SetLanguageCount
from integrations.selection_api import SaveResult
from models.questionnaire import AssessmentType, ClassLevel
from state.session import SaveStatus, WizardSession
from wizard.navigation.machine import Back, EditFromFinalSummary, NavigationState, Next


class _RecordingSaver:
    def __init__(self, result: SaveResult | Exception) -> None:
        self.result = result
        self.calls: list[tuple[dict, str]] = []

    def __call__(self, answers, school_id: str, /) -> SaveResult:
        self.calls.append((dict(answers), school_id))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def state() -> dict[str, Any]:
    return {}


@pytest.fixture
def session(state: dict[str, Any], catalog: Catalog) -> WizardSession:
    return WizardSession(state, catalog)


def test_new_session_starts_idle_at_first_step(session: WizardSession) -> None:
    assert session.current_class is ClassLevel.NURSERY
    assert session.navigation.step == 1
    assert session.save_status is SaveStatus.IDLE
    assert session.saved_id is None


def test_dispatch_targets_current_or_given_class(session: WizardSession) -> None:
    session.dispatch(SetEnglishSkill("ABCD"))
    session.dispatch(SetAssessment("Annual"), class_level=ClassLevel.UKG)

    assert session.answers[ClassLevel.NURSERY].english_skill == "ABCD"
    assert session.answers[ClassLevel.UKG].assessment is AssessmentType.ANNUAL
    assert session.answers[ClassLevel.LKG].assessment is None


def test_save_success_records_id(session: WizardSession) -> None:
    saver = _RecordingSaver(SaveResult(ok=True, id="sel-42"))

    status = session.save(saver, "school-1")

    assert status is SaveStatus.SUCCESS
    assert session.saved_id == "sel-42"
    answers, school_id = saver.calls[0]
    assert school_id == "school-1"
    assert list(answers) == [ClassLevel.NURSERY, ClassLevel.LKG, ClassLevel.UKG]


def test_save_rejected_sets_error(session: WizardSession) -> None:
    assert session.save(_RecordingSaver(SaveResult(ok=False)), "school-1") is SaveStatus.ERROR
    assert session.saved_id is None


@pytest.mark.parametrize("error", [SelectionServiceError("boom"), RuntimeError("boom")])
def test_save_transport_error_sets_error(session: WizardSession, error: Exception) -> None:
    before = session.answers

    assert session.save(_RecordingSaver(error), "school-1") is SaveStatus.ERROR
    assert session.answers == before


def test_save_without_school_sends_nothing(session: WizardSession) -> None:
    saver = _RecordingSaver(SaveResult(ok=True, id="x"))

    assert session.save(saver, None) is SaveStatus.IDLE
    assert saver.calls == []


def test_save_ignored_while_in_flight(session: WizardSession, state: dict[str, Any]) -> None:
    state[StateKeys.SAVE_STATUS] = SaveStatus.SAVING
    saver = _RecordingSaver(SaveResult(ok=True, id="x"))

    assert session.save(saver, "school-1") is SaveStatus.SAVING
    assert saver.calls == []


def test_answer_change_resets_saved_state(session: WizardSession) -> None:
    session.save(_RecordingSaver(SaveResult(ok=True, id="sel-1")), "school-1")

    session.dispatch(SetLanguageCount(1), class_level=ClassLevel.LKG)

    assert session.save_status is SaveStatus.IDLE
    assert session.saved_id is None


def test_back_resets_status_but_keeps_id(session: WizardSession, state: dict[str, Any]) -> None:
    state[StateKeys.NAVIGATION] = NavigationState(class_index=2, step=6, show_final_summary=True)
    session.save(_RecordingSaver(SaveResult(ok=True, id="sel-1")), "school-1")

    session.navigate(Back())

    assert session.save_status is SaveStatus.IDLE
    assert session.saved_id == "sel-1"


def test_edit_resets_status_and_id(session: WizardSession, state: dict[str, Any]) -> None:
    state[StateKeys.NAVIGATION] = NavigationState(class_index=2, step=6, show_final_summary=True)
    session.save(_RecordingSaver(SaveResult(ok=False)), "school-1")

    session.navigate(EditFromFinalSummary(class_index=1, step=2))

    assert session.save_status is SaveStatus.IDLE
    assert session.current_class is ClassLevel.LKG


def test_next_keeps_save_status(session: WizardSession) -> None:
    session.save(_RecordingSaver(SaveResult(ok=False)), "school-1")

    session.navigate(Next())

    assert session.save_status is SaveStatus.ERROR
    assert session.navigation.step == 2


def test_progress_and_summaries(session: WizardSession) -> None:
    session.dispatch(SetEnglishSkill("Jolly Phonics"))

    assert session.progress().base == 2 + 3
    assert session.book_ids().english_workbook is not None
    assert session.class_summary().class_level is ClassLevel.NURSERY
    assert len(session.final_summary()) == 3
