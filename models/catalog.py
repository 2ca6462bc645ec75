"""Catalog record model."""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .questionnaire import ClassLevel


class Subject(StrEnum):
    """Catalog subject names queried by the wizard."""

    ENGLISH_SKILL = "English Skill"
    ENGLISH_WORKBOOK = "English Workbook"
    MATH_SKILL = "Math Skill"
    MATH_WORKBOOK = "Math Workbook"
    ASSESSMENT = "Assessment"
    EVS = "EVS"
    RHYMES = "Rhymes & Stories"
    ART = "Art & Craft"


class Book(BaseModel):
    """A single catalog entry as shipped in ``data/catalog.json``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    class_level: ClassLevel
    subject: str
    language: Optional[str] = None
    variant: str
    price_inr: int = Field(default=0, ge=0)
