"""Session controller tying answers, navigation and saving together.

:class:`WizardSession` wraps a mutable mapping (``st.session_state`` in the
app, a plain ``dict`` in tests) and is the only place that writes the
questionnaire keys. Answers and navigation are replaced wholesale with new
immutable values on every action.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, MutableMapping

from constants.keys import StateKeys
from core.catalog import Catalog
from core.completeness import AnswerProgress, answer_progress
from core.errors import SelectionServiceError
from core.reducer import AnswerAction, reduce_answer_map
from integrations.selection_api import SaveSelection
from models.questionnaire import CLASS_ORDER, ClassLevel, QuestionnaireAnswers, initial_answer_map
from utils.logging_context import log_context, set_wizard_position
from wizard.navigation.machine import (
    INITIAL_STATE,
    Back,
    EditClass,
    EditFromClassSummary,
    EditFromFinalSummary,
    NavigationEvent,
    NavigationState,
    transition,
)
from wizard.summary import BookIds, ClassSummary, derive_book_ids, summarize_all, summarize_class

logger = logging.getLogger(__name__)


class SaveStatus(StrEnum):
    IDLE = "idle"
    SAVING = "saving"
    SUCCESS = "success"
    ERROR = "error"


_EDIT_EVENTS = (EditFromClassSummary, EditFromFinalSummary, EditClass)


class WizardSession:
    """Manage questionnaire answers, navigation and save status."""

    def __init__(self, session_state: MutableMapping[str, Any], catalog: Catalog) -> None:
        self._state = session_state
        self._catalog = catalog
        self._state.setdefault(StateKeys.ANSWERS, initial_answer_map())
        self._state.setdefault(StateKeys.NAVIGATION, INITIAL_STATE)
        self._state.setdefault(StateKeys.SAVE_STATUS, SaveStatus.IDLE)
        self._state.setdefault(StateKeys.SAVED_ID, None)

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def answers(self) -> dict[ClassLevel, QuestionnaireAnswers]:
        return dict(self._state[StateKeys.ANSWERS])

    @property
    def navigation(self) -> NavigationState:
        return self._state[StateKeys.NAVIGATION]

    @property
    def current_class(self) -> ClassLevel:
        return self.navigation.class_level

    @property
    def current_answers(self) -> QuestionnaireAnswers:
        return self._state[StateKeys.ANSWERS][self.current_class]

    @property
    def save_status(self) -> SaveStatus:
        return SaveStatus(self._state[StateKeys.SAVE_STATUS])

    @property
    def saved_id(self) -> str | None:
        return self._state.get(StateKeys.SAVED_ID)

    @property
    def session_id(self) -> str | None:
        return self._state.get(StateKeys.SESSION_ID)

    def _reset_save_status(self, *, clear_saved_id: bool) -> None:
        self._state[StateKeys.SAVE_STATUS] = SaveStatus.IDLE
        if clear_saved_id:
            self._state[StateKeys.SAVED_ID] = None

    def dispatch(self, action: AnswerAction, class_level: ClassLevel | None = None) -> QuestionnaireAnswers:
        """Apply ``action`` to ``class_level`` (default: the class on screen)."""

        level = class_level or self.current_class
        with log_context(session_id=self.session_id, class_level=level):
            updated = reduce_answer_map(self._state[StateKeys.ANSWERS], level, action)
        self._state[StateKeys.ANSWERS] = updated
        self._reset_save_status(clear_saved_id=True)
        return updated[level]

    def navigate(self, event: NavigationEvent) -> NavigationState:
        new_state = transition(self.navigation, event)
        self._state[StateKeys.NAVIGATION] = new_state
        if isinstance(event, _EDIT_EVENTS):
            self._reset_save_status(clear_saved_id=True)
        elif isinstance(event, Back):
            self._reset_save_status(clear_saved_id=False)
        set_wizard_position(
            "final" if new_state.show_final_summary else new_state.class_level,
            None if new_state.show_final_summary else new_state.step,
        )
        return new_state

    def book_ids(self, class_level: ClassLevel | None = None) -> BookIds:
        answers = self._state[StateKeys.ANSWERS][class_level or self.current_class]
        return derive_book_ids(answers, self._catalog)

    def class_summary(self, class_level: ClassLevel | None = None) -> ClassSummary:
        answers = self._state[StateKeys.ANSWERS][class_level or self.current_class]
        return summarize_class(answers, self._catalog)

    def final_summary(self) -> tuple[ClassSummary, ...]:
        return summarize_all(self._state[StateKeys.ANSWERS], self._catalog)

    def progress(self) -> AnswerProgress:
        return answer_progress(self.current_answers)

    def save(self, save_selection: SaveSelection, school_id: str | None) -> SaveStatus:
        """Hand the full answer map to ``save_selection``.

        Without a ``school_id`` (nobody signed in) nothing is sent and the
        status is left untouched. An explicit ``ok: false`` and a raised
        transport error both end in :attr:`SaveStatus.ERROR`; answers are
        never modified, so retrying is just calling :meth:`save` again.
        """

        if not school_id:
            logger.warning("Save skipped: no authenticated school")
            return self.save_status
        if self.save_status is SaveStatus.SAVING:
            logger.info("Save already in flight; ignoring duplicate request")
            return self.save_status

        self._state[StateKeys.SAVE_STATUS] = SaveStatus.SAVING
        answers = {level: self._state[StateKeys.ANSWERS][level] for level in CLASS_ORDER}
        with log_context(session_id=self.session_id):
            try:
                result = save_selection(answers, school_id)
            except SelectionServiceError as exc:
                logger.warning("Saving selection failed: %s", exc)
                result = None
            except Exception:
                logger.exception("Unexpected error while saving selection")
                result = None

            if result is not None and result.ok:
                self._state[StateKeys.SAVE_STATUS] = SaveStatus.SUCCESS
                self._state[StateKeys.SAVED_ID] = result.id
                logger.info("Saved selection %s for school %s", result.id, school_id)
            else:
                if result is not None:
                    logger.warning("Selection service rejected the submission for school %s", school_id)
                self._state[StateKeys.SAVE_STATUS] = SaveStatus.ERROR
                self._state[StateKeys.SAVED_ID] = None
        return self.save_status


__all__ = ["SaveStatus", "WizardSession"]
