from __future__ import annotations

"""
Exception taxonomy for the torrent client.

Everything the CLI can trip over ends up as one of these, so the entry point
only has one family of exceptions to catch.
"""


class TorrentClientError(Exception):
    """Base class for every failure the CLI reports to the user."""


class ParseError(TorrentClientError):
    """Raised when the command line can't be made sense of. Never escapes the parser."""


class NetworkError(TorrentClientError):
    """Raised when the API request fails, times out, or answers with a non-2xx status."""


class DecodeError(TorrentClientError):
    """Raised when the API body is not JSON or doesn't look like a movie listing."""


class NotFound(TorrentClientError):
    """Raised when a movie id or torrent index doesn't match any search result."""


class TransferError(TorrentClientError):
    """Raised when fetching or writing a ``.torrent`` file fails halfway."""
