"""Name filtering over the cached catalog index."""

from __future__ import annotations

from collections.abc import Iterable

from rapidfuzz import fuzz, process

from pokedex_browser.models import CatalogIndexEntry

# Minimum WRatio score for a "did you mean" suggestion
SUGGESTION_MIN_SCORE = 70


def normalize_term(term: str) -> str:
    """Trim and lowercase a search term."""
    return term.strip().lower()


def match_names(index: Iterable[CatalogIndexEntry], normalized_term: str) -> list[str]:
    """Return names containing ``normalized_term``, in index order.

    Matching is a case-insensitive substring test; an empty term matches
    nothing because an empty filter means "no filter".
    """
    if not normalized_term:
        return []
    return [entry.name for entry in index if normalized_term in entry.name.lower()]


def suggest_name(index: Iterable[CatalogIndexEntry], query: str) -> str | None:
    """Return the closest catalog name to a failed lookup, if any is close."""
    key = normalize_term(query)
    if not key:
        return None
    names = [entry.name for entry in index]
    if not names:
        return None
    best = process.extractOne(
        key, names, scorer=fuzz.WRatio, score_cutoff=SUGGESTION_MIN_SCORE
    )
    if best is None:
        return None
    name, _score, _index = best
    return name


__all__ = [
    "SUGGESTION_MIN_SCORE",
    "match_names",
    "normalize_term",
    "suggest_name",
]
