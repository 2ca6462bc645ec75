# app.py: book package wizard entrypoint
from __future__ import annotations

import logging
from pathlib import Path
import sys

import streamlit as st

APP_ROOT = Path(__file__).resolve().parent
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))

import config  # noqa: E402
from auth import current_school_id  # noqa: E402
from core.catalog import load_default_catalog  # noqa: E402
from core.errors import CatalogLoadError  # noqa: E402
from integrations.selection_api import save_selection  # noqa: E402
from state import WizardSession, ensure_state  # noqa: E402
from constants.keys import StateKeys  # noqa: E402
from utils.errors import display_error  # noqa: E402
from utils.logging_context import configure_logging, set_session_id  # noqa: E402
from wizard.ui import run_wizard  # noqa: E402

APP_VERSION = "0.1.0"

logger = logging.getLogger(__name__)

configure_logging(level=config.LOG_LEVEL)

st.set_page_config(page_title="Book Package Wizard", page_icon="📚", layout="centered")

ensure_state()
set_session_id(st.session_state.get(StateKeys.SESSION_ID))

try:
    catalog = load_default_catalog(str(config.CATALOG_PATH))
except CatalogLoadError as exc:
    logger.error("Catalog unavailable: %s", exc)
    display_error("The book catalog could not be loaded.", str(exc), show_detail=True)
    st.stop()

session = WizardSession(st.session_state, catalog)
run_wizard(session, save_selection, current_school_id())
