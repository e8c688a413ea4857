"""
HTTP page fetching for travel-news.

Wraps a requests session configured with a browser user agent, a bounded
timeout and automatic retries of transient failures. Every failure is raised
as ``FetchError`` so callers can isolate it.
"""

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException
from urllib3.util.retry import Retry

from ..config import Config, DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

# Throttling and transient server errors
RETRY_STATUSES = (429, 500, 502, 503, 504)


class FetchError(Exception):
    """Raised when a page cannot be downloaded as HTML."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class PageFetcher:
    """Downloads HTML pages over HTTP."""

    def __init__(self, config: Optional[Config] = None,
                 timeout: Optional[float] = None,
                 user_agent: Optional[str] = None,
                 retries: Optional[int] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the fetcher.

        Args:
            config: Configuration to read ``fetcher.*`` settings from
            timeout: Request timeout in seconds (uses config default if None)
            user_agent: User agent string (uses config default if None)
            retries: Retries after a connection error or a retryable status
                (uses config default if None)
            session: Pre-built session, mainly for tests; used as given
        """
        fetcher_config = config.get_fetcher_config() if config is not None else {}

        self.timeout = timeout or fetcher_config.get('timeout', 15)
        self.user_agent = user_agent or fetcher_config.get('user_agent', DEFAULT_USER_AGENT)
        self.retries = fetcher_config.get('retries', 2) if retries is None else retries
        self.retry_backoff = fetcher_config.get('retry_backoff', 0.5)

        self.session = session or self._build_session()
        self.session.headers.update({
            'User-Agent': self.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
            'Accept-Encoding': 'gzip, deflate',
            'Connection': 'keep-alive',
            'Upgrade-Insecure-Requests': '1',
        })

    def _build_session(self) -> requests.Session:
        """Create a session whose adapters retry transient failures."""
        retry = Retry(
            total=self.retries,
            backoff_factor=self.retry_backoff,
            status_forcelist=RETRY_STATUSES,
            # Return the last response so raise_for_status reports its status
            raise_on_status=False
        )
        adapter = HTTPAdapter(max_retries=retry)

        session = requests.Session()
        session.mount('https://', adapter)
        session.mount('http://', adapter)
        return session

    def fetch(self, url: str) -> str:
        """
        Download HTML content from URL.

        Args:
            url: URL to download

        Returns:
            HTML content as string

        Raises:
            FetchError: On network errors, timeouts, HTTP error statuses or
                non-HTML responses, once retries are exhausted
        """
        logger.debug("Fetching %s (timeout %ss, %d retries)", url, self.timeout, self.retries)

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except RequestException as e:
            raise FetchError(url, str(e)) from e

        content_type = response.headers.get('content-type', '').lower()
        if content_type and 'html' not in content_type:
            raise FetchError(url, f"unexpected content type {content_type!r}")

        return response.text

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> 'PageFetcher':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
