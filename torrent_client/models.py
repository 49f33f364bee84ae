from __future__ import annotations

"""
Data models for the torrent client.

The API hands us loose JSON; these dataclasses check it once at the door so
nothing downstream has to wonder whether ``torrents`` is really a list.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .errors import DecodeError


def _require(data: Dict[str, Any], key: str, kind, where: str):
    """
    Fetch ``key`` from ``data`` and insist it has the expected type.

    Parameters
    ----------
    data : dict[str, Any]
        Decoded JSON object.
    key : str
        Field name.
    kind : type | tuple[type, ...]
        Accepted type(s).
    where : str
        Human-readable location for the error message.

    Raises
    ------
    DecodeError
        If the field is absent or of the wrong type.
    """

    if key not in data:
        raise DecodeError(f"Missing field '{key}' in {where}")
    value = data[key]
    # bool is an int subclass; an id of ``true`` is still garbage.
    if isinstance(value, bool) or not isinstance(value, kind):
        raise DecodeError(f"Field '{key}' in {where} has unexpected type {type(value).__name__}")
    return value


def _object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"Expected an object for {where}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Torrent:
    """One downloadable variant of a movie: a quality, a codec, a URL."""

    url: str
    hash: Optional[str] = None
    quality: Optional[str] = None
    type: Optional[str] = None
    seeds: Optional[int] = None
    peers: Optional[int] = None
    size: Optional[str] = None
    size_bytes: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Torrent":
        data = _object(data, "torrent")
        return cls(
            url=_require(data, "url", str, "torrent"),
            hash=data.get("hash"),
            quality=data.get("quality"),
            type=data.get("type"),
            seeds=data.get("seeds"),
            peers=data.get("peers"),
            size=data.get("size"),
            size_bytes=data.get("size_bytes"),
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Movie:
    """A single search hit, with the torrents attached to it."""

    id: int
    title_long: str
    summary: str = ""
    torrents: List[Torrent] = field(default_factory=list)
    title: Optional[str] = None
    year: Optional[int] = None
    rating: Optional[float] = None
    url: Optional[str] = None
    imdb_code: Optional[str] = None
    genres: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Movie":
        """
        Validate and convert one entry of ``data.movies``.

        Parameters
        ----------
        data : Any
            Decoded JSON object for one movie.

        Returns
        -------
        Movie
            The typed record.

        Raises
        ------
        DecodeError
            If ``id`` or ``title_long`` are missing, or ``torrents`` isn't a list.
        """

        data = _object(data, "movie")
        movie_id = _require(data, "id", int, "movie")
        where = f"movie {movie_id}"
        title_long = _require(data, "title_long", str, where)

        # Fresh uploads occasionally arrive without torrents at all.
        raw_torrents = data.get("torrents") or []
        if not isinstance(raw_torrents, list):
            raise DecodeError(f"Field 'torrents' in {where} is not a list")

        summary = data.get("summary") or ""
        genres = data.get("genres") or []

        return cls(
            id=movie_id,
            title_long=title_long,
            summary=str(summary),
            torrents=[Torrent.from_dict(item) for item in raw_torrents],
            title=data.get("title"),
            year=data.get("year"),
            rating=data.get("rating"),
            url=data.get("url"),
            imdb_code=data.get("imdb_code"),
            genres=[str(genre) for genre in genres] if isinstance(genres, list) else [],
        )

    def as_record(self) -> Dict[str, Any]:
        """Flat view of the movie for the table formatter."""

        return {
            "id": self.id,
            "title_long": self.title_long,
            "summary": self.summary,
            "title": self.title,
            "year": self.year,
            "rating": self.rating,
            "genres": ", ".join(self.genres),
        }


@dataclass(frozen=True)
class MovieList:
    """The ``data`` envelope of a ``list_movies`` response."""

    movie_count: int
    limit: Optional[int] = None
    page_number: Optional[int] = None
    movies: List[Movie] = field(default_factory=list)

    @classmethod
    def from_response(cls, payload: Any) -> "MovieList":
        """
        Unwrap ``{status, status_message, data: {...}}`` into a MovieList.

        Parameters
        ----------
        payload : Any
            The whole decoded response body.

        Returns
        -------
        MovieList
            Movies in the order the API returned them.

        Raises
        ------
        DecodeError
            If the envelope doesn't match the ``list_movies`` schema.
        """

        payload = _object(payload, "response")
        data = _object(payload.get("data"), "response data")
        movie_count = _require(data, "movie_count", int, "response data")

        # The API omits ``movies`` entirely when nothing matched.
        raw_movies = data.get("movies", [])
        if not isinstance(raw_movies, list):
            raise DecodeError("Field 'movies' in response data is not a list")

        return cls(
            movie_count=movie_count,
            limit=data.get("limit"),
            page_number=data.get("page_number"),
            movies=[Movie.from_dict(item) for item in raw_movies],
        )


@dataclass(frozen=True)
class MovieTorrents:
    """The torrent list of one movie, tagged with the movie it belongs to."""

    movie_id: int
    title_long: str
    torrents: List[Torrent] = field(default_factory=list)

    @classmethod
    def from_movie(cls, movie: Movie) -> "MovieTorrents":
        return cls(movie_id=movie.id, title_long=movie.title_long, torrents=list(movie.torrents))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "movie_id": self.movie_id,
            "title_long": self.title_long,
            "torrents": [torrent.as_dict() for torrent in self.torrents],
        }
