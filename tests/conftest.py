from pathlib import Path
import sys
from dataclasses import dataclass

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.catalog import Catalog, load_catalog  # noqa: E402
from models.questionnaire import ClassLevel, QuestionnaireAnswers  # noqa: E402


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


@pytest.fixture(scope="session")
def catalog() -> Catalog:
    """The catalog shipped with the app."""

    return load_catalog(ROOT / "data" / "catalog.json")


@pytest.fixture
def nursery() -> QuestionnaireAnswers:
    return QuestionnaireAnswers.for_class(ClassLevel.NURSERY)


@pytest.fixture
def lkg() -> QuestionnaireAnswers:
    return QuestionnaireAnswers.for_class(ClassLevel.LKG)


@pytest.fixture
def ukg() -> QuestionnaireAnswers:
    return QuestionnaireAnswers.for_class(ClassLevel.UKG)
