from __future__ import annotations

"""
YTS API client.

One GET for the search, one optional GET for the ``.torrent`` file. No
retries: if the API is having a bad day, the user hears about it.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence
from urllib.parse import urlparse

import requests

from .config import ApiConfig
from .errors import DecodeError, NetworkError, NotFound, TransferError
from .models import MovieList, MovieTorrents, Torrent

CHUNK_SIZE = 64 * 1024


def torrent_filename(url: str) -> str:
    """
    Derive a local filename from a torrent URL.

    Parameters
    ----------
    url : str
        Torrent download URL, e.g. ``https://yts.mx/torrent/download/ABC123``.

    Returns
    -------
    str
        Last path segment with ``.torrent`` appended when it isn't there yet.

    Raises
    ------
    TransferError
        If the URL has no usable path segment.
    """

    name = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    if not name:
        raise TransferError(f"Cannot derive a filename from {url}")
    return name if name.lower().endswith(".torrent") else f"{name}.torrent"


class YtsClient:
    """Thin wrapper around requests.Session dedicated to the YTS endpoints."""

    def __init__(self, config: ApiConfig, session: Optional[requests.Session] = None):
        """
        Parameters
        ----------
        config : ApiConfig
            Base URL, timeout, User-Agent, and where downloads go.
        session : requests.Session, optional
            Pre-built session, mostly for tests.
        """

        self.config = config
        self._session = session

    def _get_session(self) -> requests.Session:
        """
        Return the session, creating it on first use.
        """

        if self._session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": self.config.user_agent, "Accept": "application/json"})
            self._session = session
        return self._session

    def fetch(self, url: str) -> MovieList:
        """
        Run a search and decode the ``list_movies`` envelope.

        Parameters
        ----------
        url : str
            Fully built query URL.

        Returns
        -------
        MovieList
            The validated search results.

        Raises
        ------
        NetworkError
            On transport failure, a non-2xx status, or a non-``ok`` API status.
        DecodeError
            If the body isn't JSON or doesn't match the schema.
        """

        logging.debug("GET %s", url)
        try:
            response = self._get_session().get(url, timeout=self.config.request_timeout)
        except requests.RequestException as exc:
            raise NetworkError(f"Request to {url} failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            logging.warning("API status %s, head: %r", response.status_code, response.text[:300])
            raise NetworkError(f"API answered with HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            logging.warning("API non-JSON head: %r", response.text[:300])
            raise DecodeError("API response is not valid JSON") from exc

        if isinstance(payload, dict) and payload.get("status", "ok") != "ok":
            message = payload.get("status_message") or payload.get("status")
            raise NetworkError(f"API reported an error: {message}")

        movie_list = MovieList.from_response(payload)
        logging.info(
            "API matched %d movies, %d on this page", movie_list.movie_count, len(movie_list.movies)
        )
        return movie_list

    @staticmethod
    def torrents(movie_list: MovieList) -> List[MovieTorrents]:
        """
        Pull the torrent list out of every movie in the result.

        Parameters
        ----------
        movie_list : MovieList
            Decoded search results.

        Returns
        -------
        list[MovieTorrents]
            One entry per movie, in result order.
        """

        return [MovieTorrents.from_movie(movie) for movie in movie_list.movies]

    @staticmethod
    def select(entries: Sequence[MovieTorrents], movie_id: Optional[int], index: int) -> Torrent:
        """
        Find torrent ``index`` of the movie whose id is ``movie_id``.

        Raises
        ------
        NotFound
            If no movie has that id or the index is outside its torrent list.
        """

        if movie_id is None:
            raise NotFound("A movie id is required for downloads (use --movie_id)")

        entry = next((item for item in entries if item.movie_id == movie_id), None)
        if entry is None:
            raise NotFound(f"No movie with id {movie_id} in the search results")

        if not 0 <= index < len(entry.torrents):
            raise NotFound(
                f"Movie {movie_id} has {len(entry.torrents)} torrent(s); index {index} is out of range"
            )
        return entry.torrents[index]

    def download(
        self,
        entries: Sequence[MovieTorrents],
        movie_id: Optional[int],
        index: int = 0,
        target_dir: Optional[str | Path] = None,
    ) -> Path:
        """
        Download one ``.torrent`` file to disk.

        Parameters
        ----------
        entries : Sequence[MovieTorrents]
            Output of :meth:`torrents`.
        movie_id : int | None
            Id of the movie, matched against ``MovieTorrents.movie_id``.
        index : int
            Position within that movie's torrent list.
        target_dir : str | Path, optional
            Destination directory. Defaults to the configured download
            directory, then the current working directory.

        Returns
        -------
        Path
            Where the file landed.

        Raises
        ------
        NotFound
            If ``movie_id`` or ``index`` don't match anything.
        TransferError
            If the request or the write fails. The data is staged in a
            ``.part`` file, so an existing copy survives a failed download.
        """

        torrent = self.select(entries, movie_id, index)
        directory = Path(target_dir or self.config.download_dir or Path.cwd())
        target = directory / torrent_filename(torrent.url)

        logging.info("Downloading %s -> %s", torrent.url, target)
        partial = target.with_name(f"{target.name}.part")
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with self._get_session().get(torrent.url, stream=True, timeout=self.config.request_timeout) as response:
                response.raise_for_status()
                with open(partial, "wb") as handle:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            handle.write(chunk)
            partial.replace(target)
        except (requests.RequestException, OSError) as exc:
            partial.unlink(missing_ok=True)
            raise TransferError(f"Download of {torrent.url} failed: {exc}") from exc

        return target
