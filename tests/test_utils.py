"""Tests for shared helpers."""

import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from travel_news.utils import (
    clean_whitespace,
    extract_domain,
    is_valid_url,
    normalize_url,
    resolve_relative_url,
    setup_logging,
    truncate_text,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_installs_rich_handler(restore_root_logger):
    stream = io.StringIO()

    setup_logging(verbose=True, console=Console(file=stream, width=200))
    logging.getLogger("travel_news.test").debug("scanning %s", "Source A")

    assert restore_root_logger.level == logging.DEBUG
    assert any(isinstance(h, RichHandler) for h in restore_root_logger.handlers)
    assert "scanning Source A" in stream.getvalue()
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_setup_logging_defaults_to_info(restore_root_logger):
    setup_logging(console=Console(file=io.StringIO()))

    assert restore_root_logger.level == logging.INFO


@pytest.mark.parametrize("raw, expected", [
    ("https://Example.com/Travel/", "https://example.com/Travel"),
    ("example.com/a#top", "https://example.com/a"),
    ("https://example.com/", "https://example.com/"),
    ("https://example.com/a?b=1", "https://example.com/a?b=1"),
    ("https://example.com/caf%C3%A9", "https://example.com/caf%C3%A9"),
])
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


def test_extract_domain():
    assert extract_domain("https://www.bbc.com/travel") == "bbc.com"
    assert extract_domain("https://edition.example.com/") == "edition.example.com"


def test_is_valid_url():
    assert is_valid_url("https://example.com/a")
    assert not is_valid_url("ftp://example.com/a")
    assert not is_valid_url("https://localhost/a")
    assert not is_valid_url("not a url")


def test_resolve_relative_url():
    assert resolve_relative_url("https://example.com/travel/", "lisbon") == \
        "https://example.com/travel/lisbon"
    assert resolve_relative_url("https://example.com/travel/", "/porto") == \
        "https://example.com/porto"
    assert resolve_relative_url("https://example.com/", "https://other.com/x") == \
        "https://other.com/x"


def test_truncate_text():
    assert truncate_text("short", 10) == "short"
    assert truncate_text("a fairly long headline", 10) == "a fairl..."


def test_clean_whitespace():
    assert clean_whitespace("  Travel \n\t guide  ") == "Travel guide"
