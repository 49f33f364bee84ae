from __future__ import annotations

"""
Convenience imports for the torrent client package.
"""

from .api import YtsClient
from .arguments import HELP, Invocation, parse_args
from .config import ApiConfig, AppConfig, ConfigLoader
from .models import Movie, MovieList, MovieTorrents, Torrent
from .query import build_query_url
from .table import format_table, print_table_for_columns

__all__ = [
    "ApiConfig",
    "AppConfig",
    "ConfigLoader",
    "HELP",
    "Invocation",
    "Movie",
    "MovieList",
    "MovieTorrents",
    "Torrent",
    "YtsClient",
    "build_query_url",
    "format_table",
    "parse_args",
    "print_table_for_columns",
]
