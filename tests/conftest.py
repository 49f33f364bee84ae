from __future__ import annotations

"""
Pytest configuration helpers.

Ensures the repository root is importable regardless of how pytest was invoked,
and hands out a canned API response.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def list_movies_payload() -> dict:
    """A trimmed-down but schema-faithful ``list_movies.json`` response."""

    return {
        "status": "ok",
        "status_message": "Query was successful",
        "data": {
            "movie_count": 2,
            "limit": 20,
            "page_number": 1,
            "movies": [
                {
                    "id": 38423,
                    "url": "https://yts.mx/movies/spider-man-2002",
                    "imdb_code": "tt0145487",
                    "title": "Spider-Man",
                    "title_long": "Spider-Man (2002)",
                    "year": 2002,
                    "rating": 7.4,
                    "genres": ["Action", "Adventure"],
                    "summary": "Bitten by a genetically engineered spider.",
                    "torrents": [
                        {"url": "http://x/1", "hash": "AAA", "quality": "720p", "type": "bluray", "seeds": 40, "peers": 3},
                        {"url": "http://x/2", "hash": "BBB", "quality": "1080p", "type": "bluray", "seeds": 90, "peers": 7},
                    ],
                },
                {
                    "id": 1200,
                    "title_long": "Spider-Man 2 (2004)",
                    "summary": "",
                    "torrents": [{"url": "http://x/3", "quality": "720p"}],
                },
            ],
        },
    }
