from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from core.catalog import Catalog, find_book_id, load_catalog, parse_catalog
from core.errors import CatalogLoadError
from core.reducer import SetEnglishAssist, SetEnglishSkill, SetWritingFocus, reduce_answers
from models.catalog import Book, Subject
from models.questionnaire import ClassLevel, QuestionnaireAnswers


def _book(book_id: str, subject: str = "EVS", variant: str = "Standard", level: str = "LKG") -> dict:
    return {"id": book_id, "class_level": level, "subject": subject, "language": None, "variant": variant}


def test_shipped_catalog_has_no_duplicate_keys(catalog: Catalog) -> None:
    assert len(catalog) > 0
    assert catalog.duplicate_keys() == []


def test_find_matches_on_full_triple(catalog: Catalog) -> None:
    book = catalog.find(ClassLevel.NURSERY, Subject.ENGLISH_SKILL, "ABCD (Caps)")

    assert book is not None
    assert book.subject == "English Skill"
    assert catalog.find(ClassLevel.LKG, Subject.ENGLISH_SKILL, "ABCD (Caps)") is None
    assert catalog.find(ClassLevel.NURSERY, Subject.ENGLISH_SKILL, None) is None


def test_find_book_id_resolves_nursery_workbook(catalog: Catalog, nursery: QuestionnaireAnswers) -> None:
    answers = nursery
    for action in (SetEnglishSkill("ABCD"), SetWritingFocus("Small"), SetEnglishAssist(True)):
        answers = reduce_answers(answers, action)

    book_id = find_book_id(catalog, Subject.ENGLISH_WORKBOOK, answers)

    assert book_id is not None
    assert catalog.get(book_id).variant == "ABCD (Small, Writing Assist)"


def test_find_book_id_incomplete_answers(catalog: Catalog, nursery: QuestionnaireAnswers) -> None:
    answers = reduce_answers(nursery, SetEnglishSkill("ABCD"))

    assert find_book_id(catalog, Subject.ENGLISH_SKILL, answers) is None
    assert find_book_id(catalog, Subject.ENGLISH_WORKBOOK, answers) is None


def test_duplicate_keys_first_record_wins(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="core.catalog"):
        catalog = parse_catalog([_book("first"), _book("second")])

    assert catalog.find(ClassLevel.LKG, Subject.EVS, "Standard").id == "first"
    assert catalog.duplicate_keys() == [(ClassLevel.LKG, "EVS", "Standard")]
    assert "Duplicate catalog key" in caplog.text


def test_unknown_fields_are_ignored() -> None:
    payload = [{**_book("x"), "cover": "x.png"}]

    catalog = parse_catalog(payload)

    assert isinstance(catalog.get("x"), Book)
    assert catalog.get("missing") is None


def test_invalid_record_raises_catalog_error() -> None:
    with pytest.raises(CatalogLoadError) as excinfo:
        parse_catalog([{"id": "x", "class_level": "Grade 1", "subject": "EVS", "variant": "Standard"}])

    assert excinfo.value.details and excinfo.value.details["errors"]


def test_load_catalog_missing_file(tmp_path: Path) -> None:
    with pytest.raises(CatalogLoadError, match="not found") as excinfo:
        load_catalog(tmp_path / "missing.json")

    assert excinfo.value.path == str(tmp_path / "missing.json")


def test_load_catalog_invalid_json(tmp_path: Path) -> None:
    target = tmp_path / "catalog.json"
    target.write_text("{not json", encoding="utf-8")

    with pytest.raises(CatalogLoadError, match="not valid JSON"):
        load_catalog(target)


def test_load_catalog_from_file(tmp_path: Path) -> None:
    target = tmp_path / "catalog.json"
    target.write_text(json.dumps([_book("evs-1"), _book("art-1", subject="Art & Craft")]), encoding="utf-8")

    catalog = load_catalog(target)

    assert [book.id for book in catalog] == ["evs-1", "art-1"]
