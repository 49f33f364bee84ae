from __future__ import annotations

"""
Command-line parsing.

Turns raw argv tokens into an :class:`Invocation` (options that were actually
given, plus the search words) or the :data:`HELP` marker. Anything argparse
chokes on becomes :data:`HELP` as well, so a typo shows the usage text
instead of a traceback.
"""

import argparse
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple, Union

from .errors import ParseError

USAGE = """\
usage: torrent-client [options | args]

  Example:
    torrent-client -v Spider Man -s year -o desc
    torrent-client -t Spider Man --limit 3 --genre Action
    torrent-client -d Spider Man --movie_id 38423 --index 0

  -h  --help            Provides help information for torrent client
  -v  --view            Views query results matching specified parameters
  -t  --torrents        Retrieves torrent data for the movies matching the search
  -i  --movie_id        Chooses id to search for movie details. Type integer
  -d  --download        Downloads torrent file for specified movie id and index
      --index           Index of the torrent within the movie's torrent list (default 0)
  -l  --limit           Sets limit for number of search results retrieved
  -q  --quality         Quality of movies to be queried [720p | 1080p | 2160p | 3D]
  -p  --page            Provides page number for search query
  -g  --genre           Genre of movies to be queried
  -mr --minimum_rating  Provides minimum rating of movies
  -o  --order_by        Order for search results [desc | asc]
  -s  --sort_by         Sorting order for search results [title | year | rating | peers | seeds | download_count | like_count | date_added]

      --config          Path to a JSON configuration file (default: torrent_client.json if present)
      --api-base        Override the API base URL for this run
      --output-dir      Directory that receives downloaded .torrent files
      --debug           Enable debug logging
"""

# (short alias, long name, type); ``None`` type means a boolean switch.
SWITCHES = (
    ("-h", "help", None),
    ("-v", "view", None),
    ("-d", "download", None),
    ("-t", "torrents", None),
    (None, "index", int),
    ("-i", "movie_id", int),
    ("-l", "limit", int),
    ("-p", "page", int),
    ("-q", "quality", str),
    ("-g", "genre", str),
    ("-mr", "minimum_rating", int),
    ("-o", "order_by", str),
    ("-s", "sort_by", str),
)

# Flags that tune the client itself rather than the search.
SETTINGS = (
    ("config", "config"),
    ("api-base", "api_base"),
    ("output-dir", "output_dir"),
)


class HelpRequested:
    """Marker returned instead of an :class:`Invocation` when the usage text is due."""

    def __repr__(self) -> str:
        return "HELP"


HELP = HelpRequested()


def _option_strings() -> set:
    strings = {f"--{name}" for _, name, _ in SWITCHES}
    strings.update(short for short, _, _ in SWITCHES if short)
    strings.update(f"--{flag}" for flag, _ in SETTINGS)
    strings.add("--debug")
    return strings


OPTION_STRINGS = _option_strings()
_NUMBER = re.compile(r"^-\d+(\.\d+)?$")


def screen_tokens(tokens: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Split argv into tokens argparse should see and unknown flags to drop.

    argparse resolves a single-dash token by prefix, so ``-m`` would land on
    ``-mr``. Only exact option strings, ``--name=value``, a one-letter alias
    with its value attached (``-l5``), and ``-mr7`` / ``-mr=7`` get through.
    Unknown flags never take a value: the token after one is a search word.

    Returns
    -------
    tuple[list[str], list[str]]
        ``(kept, ignored)``, both in command-line order.
    """

    kept: List[str] = []
    ignored: List[str] = []
    tokens = list(tokens)
    for position, token in enumerate(tokens):
        if token == "--":
            kept.extend(tokens[position:])
            break
        if not token.startswith("-") or token == "-" or _NUMBER.match(token):
            kept.append(token)
        elif token.startswith("--"):
            (kept if token.split("=", 1)[0] in OPTION_STRINGS else ignored).append(token)
        elif token in OPTION_STRINGS:
            kept.append(token)
        elif token.startswith("-mr"):
            kept.extend(["-mr", token[3:].removeprefix("=")])
        elif token[:2] in OPTION_STRINGS:
            kept.append(token)
        else:
            ignored.append(token)
    return kept, ignored


@dataclass
class Invocation:
    """A parsed command line that asks for actual work."""

    options: Dict[str, Any] = field(default_factory=dict)
    words: List[str] = field(default_factory=list)
    settings: Dict[str, Any] = field(default_factory=dict)
    ignored: List[str] = field(default_factory=list)


class _QuietParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing and exiting."""

    def error(self, message):
        raise ParseError(message)


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse parser for the flag table.

    Absent flags stay absent from the namespace (``argument_default=SUPPRESS``),
    which is what lets the query builder tell "not given" from "given".
    """

    parser = _QuietParser(
        prog="torrent-client",
        add_help=False,
        allow_abbrev=False,
        argument_default=argparse.SUPPRESS,
    )
    for short, name, kind in SWITCHES:
        flags = [f"--{name}"] if short is None else [short, f"--{name}"]
        if kind is None:
            parser.add_argument(*flags, dest=name, action="store_true")
        else:
            parser.add_argument(*flags, dest=name, type=kind)

    for flag, dest in SETTINGS:
        parser.add_argument(f"--{flag}", dest=dest)
    parser.add_argument("--debug", dest="debug", action="store_true")

    parser.add_argument("words", nargs="*")
    return parser


def parse_args(args: Sequence[str]) -> Union[Invocation, HelpRequested]:
    """
    Parse command-line tokens.

    Parameters
    ----------
    args : Sequence[str]
        argv without the program name.

    Returns
    -------
    Invocation | HelpRequested
        :data:`HELP` when ``-h`` is present, when there is nothing to parse,
        or when the tokens are malformed; otherwise the parsed invocation.
        Unknown flags are dropped into ``Invocation.ignored``.
    """

    if not args:
        return HELP

    kept, dropped = screen_tokens(args)
    try:
        namespace, unknown = build_parser().parse_known_intermixed_args(kept)
    except (ParseError, TypeError):
        return HELP

    parsed = vars(namespace)
    if parsed.pop("help", False):
        return HELP

    words = list(parsed.pop("words", []))
    settings = {dest: parsed.pop(dest) for _, dest in SETTINGS if dest in parsed}
    if "debug" in parsed:
        settings["debug"] = parsed.pop("debug")

    return Invocation(options=parsed, words=words, settings=settings, ignored=dropped + list(unknown))
