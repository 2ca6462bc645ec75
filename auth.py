from __future__ import annotations

from dataclasses import dataclass
from typing import Any, MutableMapping

import streamlit as st

import config
from constants.keys import StateKeys


@dataclass(frozen=True)
class CurrentUser:
    username: str
    school_id: str


def _session() -> MutableMapping[str, Any]:
    return st.session_state


def login(username: str, school_id: str, session_state: MutableMapping[str, Any] | None = None) -> CurrentUser:
    user = CurrentUser(username=username, school_id=school_id)
    (session_state if session_state is not None else _session())[StateKeys.USER] = user
    return user


def logout(session_state: MutableMapping[str, Any] | None = None) -> None:
    (session_state if session_state is not None else _session()).pop(StateKeys.USER, None)


def current_user(session_state: MutableMapping[str, Any] | None = None) -> CurrentUser | None:
    """Return the signed-in user, or the dev user when dev auth is enabled."""

    state = session_state if session_state is not None else _session()
    user = state.get(StateKeys.USER)
    if isinstance(user, CurrentUser):
        return user
    if config.DEV_AUTH_ENABLED and config.DEV_SCHOOL_ID:
        return CurrentUser(username="dev", school_id=config.DEV_SCHOOL_ID)
    return None


def current_school_id(session_state: MutableMapping[str, Any] | None = None) -> str | None:
    user = current_user(session_state)
    return user.school_id if user else None
