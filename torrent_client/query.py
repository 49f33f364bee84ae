from __future__ import annotations

"""
Query construction for the ``list_movies`` endpoint.

Pure string assembly: no network, no percent-encoding beyond the ``%20``
glue between search words.
"""

from typing import Any, Dict, Mapping, Sequence

SPACE = "%20"

DEFAULT_OPTIONS: Dict[str, Any] = {
    "limit": 20,
    "page": 1,
    "quality": "all",
    "genre": "all",
    "minimum_rating": 0,
    "order_by": "desc",
    "sort_by": "year",
}

# Fixed order of the tuning parameters after query_term.
QUERY_FIELDS = ("limit", "page", "quality", "minimum_rating", "order_by", "sort_by", "genre")


def merge_options(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay the given options on the defaults; explicit values always win."""

    merged = dict(DEFAULT_OPTIONS)
    merged.update(options)
    return merged


def build_search_phrase(words: Sequence[str]) -> str:
    """
    Glue search words together with ``%20``.

    Each word is split on whitespace and rejoined first, then the words are
    joined. An empty word therefore leaves a doubled ``%20%20`` behind; that
    is kept as-is.

    Parameters
    ----------
    words : Sequence[str]
        Positional arguments in command-line order.

    Returns
    -------
    str
        The phrase, or ``""`` if there were no words.
    """

    return SPACE.join(SPACE.join(word.split()) for word in words)


def build_query_url(api_base: str, options: Mapping[str, Any], words: Sequence[str]) -> str:
    """
    Build the ``list_movies.json`` URL for a search.

    Parameters
    ----------
    api_base : str
        API root, e.g. ``https://yts.mx/api/v2/``.
    options : Mapping[str, Any]
        Options that were given on the command line.
    words : Sequence[str]
        Search words.

    Returns
    -------
    str
        The full GET URL with ``query_term`` first and the tuning
        parameters after it in a fixed order.
    """

    params = merge_options(options)
    phrase = build_search_phrase(words)
    query_term = phrase if phrase else 0

    pairs = [f"query_term={query_term}"]
    pairs.extend(f"{name}={params[name]}" for name in QUERY_FIELDS)

    base = api_base if api_base.endswith("/") else f"{api_base}/"
    return f"{base}list_movies.json?" + "&".join(pairs)
