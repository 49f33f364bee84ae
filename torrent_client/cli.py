from __future__ import annotations

"""
Entry point and action dispatch for the torrent client.

Parse argv, load the config, ask YTS, then do exactly one of: dump the
torrent lists, print a table, or download a ``.torrent`` file.
"""

import logging
import sys
from pprint import pprint
from typing import Optional, Sequence, TextIO, Union

from .api import YtsClient
from .arguments import HELP, USAGE, HelpRequested, Invocation, parse_args
from .config import AppConfig, ConfigError, ConfigLoader
from .errors import TorrentClientError
from .query import build_query_url
from .table import print_table_for_columns

VIEW_COLUMNS = ("id", "title_long", "summary")


def configure_logging(config: AppConfig, debug: bool) -> None:
    """
    Funnel the logging level into place.

    Parameters
    ----------
    config : AppConfig
        Loaded configuration with its chosen verbosity.
    debug : bool
        When ``True`` we skip straight to DEBUG.
    """

    level_name = "DEBUG" if debug else config.logging.level.upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def process(
    invocation: Union[Invocation, HelpRequested],
    client: Optional[YtsClient] = None,
    out: Optional[TextIO] = None,
) -> int:
    """
    Carry out a parsed command line.

    Parameters
    ----------
    invocation : Invocation | HelpRequested
        Output of :func:`parse_args`.
    client : YtsClient, optional
        API client; required unless ``invocation`` is :data:`HELP`.
    out : TextIO, optional
        Where results go. Defaults to stdout.

    Returns
    -------
    int
        Exit code, 0 on success. Failures raise :class:`TorrentClientError`.
    """

    stream = out if out is not None else sys.stdout

    if isinstance(invocation, HelpRequested):
        stream.write(USAGE)
        return 0

    if client is None:
        raise ValueError("process() needs a YtsClient for anything but help")

    options = invocation.options
    if invocation.ignored:
        logging.debug("Ignoring unknown arguments: %s", " ".join(invocation.ignored))

    url = build_query_url(client.config.base_url, options, invocation.words)
    movie_list = client.fetch(url)

    if options.get("torrents"):
        pprint([entry.as_dict() for entry in client.torrents(movie_list)], stream=stream, sort_dicts=False)
    elif options.get("view"):
        print_table_for_columns([movie.as_record() for movie in movie_list.movies], VIEW_COLUMNS, out=stream)
    elif options.get("download"):
        path = client.download(
            client.torrents(movie_list),
            options.get("movie_id"),
            options.get("index", 0),
        )
        stream.write(f"Saved {path}\n")
    else:
        logging.debug("No action flag given (-v, -t or -d); nothing to do")

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the CLI workflow.

    Steps
    -----
    1. Parse argv; help or garbage prints the usage text.
    2. Load config and apply per-run overrides.
    3. Fetch and dispatch. Errors end up on stderr with a non-zero exit.
    """

    invocation = parse_args(sys.argv[1:] if argv is None else list(argv))
    if invocation is HELP:
        return process(invocation)

    settings = invocation.settings
    loader = ConfigLoader(settings.get("config"))
    try:
        config = loader.load()
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc

    config = ConfigLoader.apply_overrides(
        config,
        {"download_dir": settings.get("output_dir"), "base_url": settings.get("api_base")},
    )
    configure_logging(config, bool(settings.get("debug")))

    client = YtsClient(config.api)
    try:
        return process(invocation, client)
    except TorrentClientError as exc:
        logging.debug("Failure details", exc_info=True)
        raise SystemExit(f"ERROR: {exc}") from exc


if __name__ == "__main__":
    sys.exit(main())
