"""Wizard helpers package: step registry, navigation, summaries and Streamlit views."""

from __future__ import annotations

from .step_registry import WIZARD_STEPS, StepDefinition, get_step

__all__ = ["StepDefinition", "WIZARD_STEPS", "get_step"]
