"""Read-only book catalog and the lookup used to resolve book ids."""

from __future__ import annotations

import json
import logging
from collections import Counter
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from pydantic import TypeAdapter, ValidationError

from core.errors import CatalogLoadError
from core.variants import derive_variant
from models.catalog import Book, Subject
from models.questionnaire import ClassLevel, QuestionnaireAnswers

logger = logging.getLogger(__name__)

_BOOK_LIST = TypeAdapter(list[Book])

CatalogKey = tuple[ClassLevel, str, str]


class Catalog:
    """Ordered, immutable sequence of :class:`Book` records.

    Lookups match on ``(class_level, subject, variant)``. When several records
    share a key the first one wins; :meth:`duplicate_keys` reports such keys so
    catalog authors can fix them.
    """

    def __init__(self, books: Iterable[Book]) -> None:
        self._books: tuple[Book, ...] = tuple(books)
        self._index: dict[CatalogKey, Book] = {}
        for book in self._books:
            self._index.setdefault((book.class_level, book.subject, book.variant), book)

    def __iter__(self) -> Iterator[Book]:
        return iter(self._books)

    def __len__(self) -> int:
        return len(self._books)

    @property
    def books(self) -> Sequence[Book]:
        return self._books

    def find(self, class_level: ClassLevel, subject: Subject | str, variant: str | None) -> Book | None:
        if variant is None:
            return None
        return self._index.get((ClassLevel(class_level), str(subject), variant))

    def get(self, book_id: str) -> Book | None:
        for book in self._books:
            if book.id == book_id:
                return book
        return None

    def duplicate_keys(self) -> list[CatalogKey]:
        counts = Counter((book.class_level, book.subject, book.variant) for book in self._books)
        return [key for key, count in counts.items() if count > 1]


def find_book_id(catalog: Catalog, subject: Subject | str, answers: QuestionnaireAnswers) -> str | None:
    """Return the id of the book matching ``answers`` for ``subject``.

    Returns ``None`` when the answers do not yet yield a variant key or when
    the catalog has no matching record.
    """

    variant = derive_variant(subject, answers)
    book = catalog.find(answers.class_level, subject, variant)
    return book.id if book else None


def parse_catalog(payload: object) -> Catalog:
    """Validate a decoded JSON payload (list of book dicts) into a catalog."""

    try:
        books = _BOOK_LIST.validate_python(payload)
    except ValidationError as exc:
        raise CatalogLoadError("Catalog entries failed validation", details={"errors": exc.errors()}) from exc
    catalog = Catalog(books)
    for class_level, subject, variant in catalog.duplicate_keys():
        logger.warning(
            "Duplicate catalog key (%s, %s, %s); the first record wins",
            class_level,
            subject,
            variant,
        )
    return catalog


def load_catalog(path: str | Path) -> Catalog:
    """Load and validate the catalog JSON file at ``path``."""

    file_path = Path(path)
    try:
        with file_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError as exc:
        raise CatalogLoadError(f"Catalog file not found: {file_path}", path=str(file_path)) from exc
    except json.JSONDecodeError as exc:
        raise CatalogLoadError(f"Catalog file is not valid JSON: {file_path}", path=str(file_path)) from exc
    catalog = parse_catalog(payload)
    logger.info("Loaded %d catalog records from %s", len(catalog), file_path)
    return catalog


@lru_cache(maxsize=4)
def load_default_catalog(path: str) -> Catalog:
    """Cached variant of :func:`load_catalog` for the configured catalog path."""

    return load_catalog(path)


__all__ = [
    "Catalog",
    "CatalogKey",
    "find_book_id",
    "load_catalog",
    "load_default_catalog",
    "parse_catalog",
]
