#!/usr/bin/env python3
"""
Utility functions for travel-news.

Logging setup plus the small URL and text helpers shared by the headline
scraper, the extractors and the CLI tables.
"""

import re
import logging
from typing import Optional
from urllib.parse import urlparse, urljoin, quote, unquote

from rich.console import Console
from rich.logging import RichHandler

_WHITESPACE = re.compile(r'\s+')


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """
    Configure application logging with a rich handler.

    Args:
        verbose: Log at DEBUG level instead of INFO
        console: Console to write log records to (stderr by default)
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True
    )

    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def normalize_url(url: str) -> str:
    """
    Build the comparison key used to spot duplicate headline links.

    The host is lowercased, the path is re-quoted and loses its trailing
    slash, and the fragment is dropped. The query string is kept because
    some sites route articles through it.

    Args:
        url: Absolute or scheme-less URL

    Returns:
        Normalized URL
    """
    url = url.strip()
    if '://' not in url:
        url = 'https://' + url.lstrip('/')

    parts = urlparse(url)
    path = quote(unquote(parts.path), safe='/')
    if path != '/':
        path = path.rstrip('/')

    key = f"{parts.scheme.lower()}://{parts.netloc.lower()}{path}"
    return f"{key}?{parts.query}" if parts.query else key


def extract_domain(url: str) -> str:
    """Host name of a URL without a leading ``www.``."""
    host = urlparse(url).netloc.lower()
    return host[4:] if host.startswith('www.') else host


def is_valid_url(url: str) -> bool:
    """
    Check that a resolved headline link can be fetched over HTTP.

    Args:
        url: Absolute URL

    Returns:
        True for http(s) URLs whose host contains a dot
    """
    try:
        parts = urlparse(url)
    except ValueError:
        return False
    return parts.scheme in ('http', 'https') and '.' in parts.netloc


def resolve_relative_url(base_url: str, relative_url: str) -> str:
    """Make a link found on ``base_url`` absolute."""
    return urljoin(base_url, relative_url)


def truncate_text(text: str, max_length: int = 100, suffix: str = '...') -> str:
    """
    Shorten text for a table cell.

    Args:
        text: Text to shorten
        max_length: Maximum length, suffix included
        suffix: Marker appended when text was cut

    Returns:
        ``text`` itself when short enough, otherwise the cut text plus ``suffix``
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)].rstrip() + suffix


def clean_whitespace(text: str) -> str:
    """Collapse every whitespace run, newlines included, to one space."""
    return _WHITESPACE.sub(' ', text).strip()
