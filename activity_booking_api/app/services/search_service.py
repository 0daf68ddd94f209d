"""
Translation of free-text search queries into lesson store filters.

Three kinds of query are recognised:

* a number, which matches lessons whose price or remaining spaces
  equal it, or whose subject or location contains the literal text;
* a single character, which matches lessons whose subject or location
  contains it;
* anything longer, which goes to the full-text index over subject and
  location.  Every word is searched for separately and any match
  counts, ranked by relevance.
"""

import math
import re
from typing import Any

from activity_booking_api.app.core.errors import InvalidQuery
from activity_booking_api.app.stores.lesson_store import StoreFilter


_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_WORD_RE = re.compile(r"\w+")

_CONTAINS = (
    "(lessons.subject LIKE ? ESCAPE '\\' OR lessons.location LIKE ? ESCAPE '\\')"
)


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def parse_number(query: str) -> float | None:
    """Return the value of ``query`` if it is a finite decimal number."""
    text = query.strip()
    if not _NUMBER_RE.match(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def build_search_filter(query: Any) -> StoreFilter:
    """Build the store filter for a raw search query.

    Raises ``InvalidQuery`` if ``query`` is not a non-empty string.
    """
    if not isinstance(query, str) or not query.strip():
        raise InvalidQuery()

    number = parse_number(query)
    if number is not None:
        pattern = _like_pattern(query)
        return StoreFilter(
            where=f"(lessons.price = ? OR lessons.spaces = ? OR {_CONTAINS})",
            params=(number, number, pattern, pattern),
        )

    if len(query) == 1:
        pattern = _like_pattern(query)
        return StoreFilter(where=_CONTAINS, params=(pattern, pattern))

    words = _WORD_RE.findall(query)
    if not words:
        # Nothing the text index could match (punctuation only).
        return StoreFilter(where="0")
    match = " OR ".join(f'"{word}"' for word in words)
    return StoreFilter(where="lessons_fts MATCH ?", params=(match,), text_search=True)
