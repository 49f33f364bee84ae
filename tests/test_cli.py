from __future__ import annotations

"""Tests for dispatching a parsed command line to the right action."""

import io
from unittest.mock import MagicMock, patch

import pytest

from torrent_client import cli
from torrent_client.api import YtsClient
from torrent_client.arguments import HELP, USAGE, parse_args
from torrent_client.errors import NetworkError
from torrent_client.models import MovieList


@pytest.fixture
def client(list_movies_payload) -> MagicMock:
    mock_client = MagicMock()
    mock_client.config.base_url = "https://yts.mx/api/v2/"
    mock_client.fetch.return_value = MovieList.from_response(list_movies_payload)
    mock_client.torrents.side_effect = YtsClient.torrents
    return mock_client


def test_help_prints_usage_and_succeeds() -> None:
    out = io.StringIO()
    assert cli.process(HELP, out=out) == 0
    assert out.getvalue() == USAGE
    assert "-mr --minimum_rating" in out.getvalue()


def test_view_prints_table(client) -> None:
    out = io.StringIO()
    assert cli.process(parse_args(["-v", "Spider", "Man"]), client, out) == 0

    client.fetch.assert_called_once_with(
        "https://yts.mx/api/v2/list_movies.json?query_term=Spider%20Man"
        "&limit=20&page=1&quality=all&minimum_rating=0&order_by=desc&sort_by=year&genre=all"
    )
    lines = out.getvalue().splitlines()
    assert lines[0].split(" | ")[0].strip() == "id"
    assert "title_long" in lines[0]
    assert lines[2].startswith("38423 | Spider-Man (2002)")
    assert len(lines) == 4


def test_torrents_takes_priority_over_view(client) -> None:
    out = io.StringIO()
    cli.process(parse_args(["-t", "-v", "Spider"]), client, out)
    text = out.getvalue()
    assert "'movie_id': 38423" in text
    assert "http://x/2" in text
    assert "title_long |" not in text


def test_download_uses_movie_id_and_index(client) -> None:
    client.download.return_value = "/tmp/2.torrent"
    out = io.StringIO()
    cli.process(parse_args(["-d", "Spider", "--movie_id", "38423", "--index", "1"]), client, out)

    entries, movie_id, index = client.download.call_args[0]
    assert [entry.movie_id for entry in entries] == [38423, 1200]
    assert (movie_id, index) == (38423, 1)
    assert out.getvalue() == "Saved /tmp/2.torrent\n"


def test_download_index_defaults_to_zero(client) -> None:
    cli.process(parse_args(["-d", "Spider", "-i", "1200"]), client, io.StringIO())
    assert client.download.call_args[0][1:] == (1200, 0)


def test_no_action_flag_is_a_quiet_no_op(client) -> None:
    out = io.StringIO()
    assert cli.process(parse_args(["Spider", "--limit", "3"]), client, out) == 0
    assert out.getvalue() == ""
    client.download.assert_not_called()


def test_errors_propagate_from_process(client) -> None:
    client.fetch.side_effect = NetworkError("API answered with HTTP 500")
    with pytest.raises(NetworkError):
        cli.process(parse_args(["-v", "Spider"]), client, io.StringIO())


def test_main_help_exits_zero(capsys) -> None:
    assert cli.main(["--help"]) == 0
    assert capsys.readouterr().out == USAGE


def test_main_reports_failure_and_exits_non_zero(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TORRENT_CLIENT_API_BASE", raising=False)
    with patch("torrent_client.cli.YtsClient") as client_cls:
        client_cls.return_value.config.base_url = "https://yts.mx/api/v2/"
        client_cls.return_value.fetch.side_effect = NetworkError("API answered with HTTP 500")
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["-v", "Spider"])
    assert excinfo.value.code == "ERROR: API answered with HTTP 500"


def test_main_download_not_found(tmp_path, monkeypatch, list_movies_payload) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TORRENT_CLIENT_API_BASE", raising=False)
    with patch.object(YtsClient, "fetch", return_value=MovieList.from_response(list_movies_payload)):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["-d", "Spider", "--movie_id", "99999"])
    assert "99999" in str(excinfo.value.code)


def test_main_passes_config_and_overrides_to_client(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TORRENT_CLIENT_API_BASE", raising=False)
    with patch("torrent_client.cli.YtsClient") as client_cls, patch("torrent_client.cli.process", return_value=0):
        assert cli.main(["-v", "x", "--api-base", "http://mirror/api/v2/", "--output-dir", "dl"]) == 0
    api_config = client_cls.call_args[0][0]
    assert api_config.base_url == "http://mirror/api/v2/"
    assert api_config.download_dir == "dl"


def test_main_missing_explicit_config(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-v", "x", "--config", "nope.json"])
    assert "not found" in str(excinfo.value.code)
