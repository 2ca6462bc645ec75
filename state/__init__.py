"""Session state utilities."""

from .ensure_state import ensure_state, reset_state
from .session import SaveStatus, WizardSession

__all__ = ["SaveStatus", "WizardSession", "ensure_state", "reset_state"]
