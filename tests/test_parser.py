"""Tests for the route configuration parser."""

import logging

import pytest

from routeconf import MalformedRouteLine
from routeconf.core.parser import RouteLine, parse_config, parse_lines, tokenize_line


def test_parse_lines_drops_blank_and_comment_lines():
    text = "# header\n\nGET / app.index\n#GET /old app.old\nPOST /login users.login\n"
    assert parse_lines(text) == ["GET / app.index", "POST /login users.login"]


def test_comments_only_count_in_first_column():
    # An indented hash is not a comment; it survives to tokenisation.
    assert parse_lines("  # not a comment") == ["  # not a comment"]


def test_crlf_line_endings():
    assert parse_lines("GET / app.index\r\n\r\n") == ["GET / app.index"]


def test_tokenize_splits_on_whitespace_runs():
    assert tokenize_line("GET\t  /demos/:test     demos.index") == (
        "GET",
        "/demos/:test",
        "demos.index",
    )
    assert tokenize_line("   GET / app.index") == ("GET", "/", "app.index")


def test_tokenize_rejects_short_lines():
    with pytest.raises(MalformedRouteLine) as excinfo:
        tokenize_line("GET /demos", lineno=4)
    assert excinfo.value.lineno == 4
    assert "line 4" in str(excinfo.value)


def test_tokenize_warns_about_extra_fields(caplog):
    with caplog.at_level(logging.WARNING, logger="routeconf"):
        assert tokenize_line("GET / app.index trailing") == ("GET", "/", "app.index")
    assert "trailing" in caplog.text


def test_parse_config_keeps_source_line_numbers():
    lines = parse_config("# routes\nGET / app.index\n\nPOST /login users.login")
    assert lines == [
        RouteLine(lineno=2, verb="GET", path="/", target="app.index"),
        RouteLine(lineno=4, verb="POST", path="/login", target="users.login"),
    ]


def test_parse_config_accepts_prefiltered_lines():
    lines = parse_config(["GET / app.index", "#skip", "PUT /x a.b"])
    assert [line.target for line in lines] == ["app.index", "a.b"]
