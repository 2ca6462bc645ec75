"""Answer-state derivation engine: variants, catalog lookup, completeness and reducer."""

from .catalog import Catalog, find_book_id, load_catalog
from .reducer import reduce_answer_map, reduce_answers
from .variants import derive_variant

__all__ = ["Catalog", "derive_variant", "find_book_id", "load_catalog", "reduce_answer_map", "reduce_answers"]
