"""Helpers for initializing Streamlit session state."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping, MutableMapping
from types import MappingProxyType
from typing import Any, Callable

import streamlit as st

from constants.keys import StateKeys
from models.questionnaire import CLASS_ORDER, QuestionnaireAnswers, initial_answer_map
from state.session import SaveStatus
from wizard.navigation.machine import INITIAL_STATE, NavigationState

logger = logging.getLogger(__name__)


_DEFAULT_STATE_FACTORIES: Mapping[str, Callable[[], Any]] = MappingProxyType(
    {
        StateKeys.ANSWERS: initial_answer_map,
        StateKeys.NAVIGATION: lambda: INITIAL_STATE,
        StateKeys.SAVE_STATUS: lambda: SaveStatus.IDLE,
        StateKeys.SAVED_ID: lambda: None,
        StateKeys.SESSION_ID: lambda: uuid.uuid4().hex[:12],
    }
)

# Keys that survive :func:`reset_state` (the signed-in user stays logged in).
_PRESERVED_KEYS: tuple[str, ...] = (StateKeys.USER,)


def _answers_valid(value: object) -> bool:
    if not isinstance(value, Mapping):
        return False
    return all(isinstance(value.get(level), QuestionnaireAnswers) for level in CLASS_ORDER)


def ensure_state(session_state: MutableMapping[str, Any] | None = None) -> None:
    """Initialize session state with the questionnaire defaults.

    Existing values are kept unless they have an unexpected type, in which
    case they are replaced by fresh defaults.
    """

    state = session_state if session_state is not None else st.session_state
    if StateKeys.ANSWERS in state and not _answers_valid(state[StateKeys.ANSWERS]):
        logger.warning("Discarding malformed questionnaire answers in session state")
        del state[StateKeys.ANSWERS]
    if StateKeys.NAVIGATION in state and not isinstance(state[StateKeys.NAVIGATION], NavigationState):
        logger.warning("Discarding malformed navigation state")
        del state[StateKeys.NAVIGATION]
    for key, factory in _DEFAULT_STATE_FACTORIES.items():
        if key not in state:
            state[key] = factory()


def reset_state(session_state: MutableMapping[str, Any] | None = None) -> None:
    """Discard the whole questionnaire and start over; nothing is persisted."""

    state = session_state if session_state is not None else st.session_state
    preserved = {key: state[key] for key in _PRESERVED_KEYS if key in state}
    state.clear()
    state.update(preserved)
    ensure_state(state)
