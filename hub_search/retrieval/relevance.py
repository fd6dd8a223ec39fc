"""Weighted substring relevance heuristic for client-side search."""

from collections.abc import Sequence
from typing import Any

TITLE_MATCH_SCORE = 100.0
FIELD_MATCH_SCORE = 50.0
WORD_MATCH_SCORE = 10.0


def _field_text(field: Any) -> str:
    if isinstance(field, (list, tuple)):
        return " ".join(str(part) for part in field if part)
    return str(field)


def score(query: str, fields: Sequence[Any]) -> float:
    """Score how well a record's fields match a query.

    Position matters: the field at index 0 is the title and earns
    TITLE_MATCH_SCORE when it contains the whole query. Any other field
    containing the whole query earns FIELD_MATCH_SCORE / (index + 1).
    A field that misses the whole query still earns
    WORD_MATCH_SCORE / (index + 1) for each query word it contains.
    Falsy fields contribute nothing but keep their index.

    Args:
        query: Raw query text
        fields: Field values in priority order; lists are joined with spaces

    Returns:
        Non-negative relevance score
    """
    term = query.lower()
    words = term.split()
    total = 0.0

    for index, field in enumerate(fields):
        if not field:
            continue

        text = _field_text(field).lower()

        if term and term in text:
            total += TITLE_MATCH_SCORE if index == 0 else FIELD_MATCH_SCORE / (index + 1)
        else:
            for word in words:
                if word in text:
                    total += WORD_MATCH_SCORE / (index + 1)

    return total


def build_search_text(fields: Sequence[Any]) -> str:
    """Concatenate fields into the lower-cased text used for filtering.

    A missing field still takes its slot, so its neighbours are two spaces
    apart and a single-spaced phrase does not match across the gap.
    """
    return " ".join("" if field is None else _field_text(field) for field in fields).lower()


def matches(query: str, fields: Sequence[Any]) -> bool:
    """Return True when the fields contain the query as a case-insensitive substring."""
    return query.lower() in build_search_text(fields)
