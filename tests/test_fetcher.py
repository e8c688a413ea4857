"""Tests for the HTTP page fetcher."""

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from travel_news.config import DEFAULT_USER_AGENT
from travel_news.scraper.fetcher import FetchError, PageFetcher


class FakeResponse:

    def __init__(self, text="<html></html>", status_code=200, content_type="text/html; charset=utf-8"):
        self.text = text
        self.status_code = status_code
        self.headers = {'content-type': content_type} if content_type else {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


class FakeSession:

    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response or FakeResponse()
        self.error = error
        self.requests = []
        self.closed = False

    def get(self, url, timeout=None):
        self.requests.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def test_returns_page_text(config):
    session = FakeSession(FakeResponse("<p>Hello</p>"))
    fetcher = PageFetcher(config, session=session)

    assert fetcher.fetch("https://example.com/") == "<p>Hello</p>"
    assert session.requests == [("https://example.com/", 15)]


def test_sends_browser_headers(config):
    session = FakeSession()

    PageFetcher(config, session=session)

    assert session.headers['User-Agent'] == DEFAULT_USER_AGENT
    assert 'text/html' in session.headers['Accept']


def test_explicit_settings_override_config(config):
    session = FakeSession()
    fetcher = PageFetcher(config, timeout=3, user_agent="travel-news-test/1.0", session=session)

    fetcher.fetch("https://example.com/")

    assert session.requests[0][1] == 3
    assert session.headers['User-Agent'] == "travel-news-test/1.0"


def test_http_error_status(config):
    fetcher = PageFetcher(config, session=FakeSession(FakeResponse(status_code=503)))

    with pytest.raises(FetchError) as excinfo:
        fetcher.fetch("https://example.com/")

    assert excinfo.value.url == "https://example.com/"
    assert "503" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, requests.HTTPError)


def test_network_error(config):
    error = requests.ConnectionError("connection refused")
    fetcher = PageFetcher(config, session=FakeSession(error=error))

    with pytest.raises(FetchError, match="Failed to fetch https://example.com/: connection refused"):
        fetcher.fetch("https://example.com/")


def test_timeout(config):
    fetcher = PageFetcher(config, session=FakeSession(error=requests.Timeout("read timed out")))

    with pytest.raises(FetchError, match="read timed out"):
        fetcher.fetch("https://example.com/")


def test_non_html_response(config):
    fetcher = PageFetcher(config, session=FakeSession(FakeResponse(content_type="application/pdf")))

    with pytest.raises(FetchError, match="unexpected content type"):
        fetcher.fetch("https://example.com/")


def test_missing_content_type_is_accepted(config):
    fetcher = PageFetcher(config, session=FakeSession(FakeResponse("<p>ok</p>", content_type=None)))

    assert fetcher.fetch("https://example.com/") == "<p>ok</p>"


def test_context_manager_closes_session():
    session = FakeSession()

    with PageFetcher(session=session):
        pass

    assert session.closed


@pytest.fixture
def flaky_server(monkeypatch):
    """
    Local HTTP server answering with queued statuses, then with a page.

    Yields the base URL, the status queue and the list of requested paths.
    """
    monkeypatch.setenv("NO_PROXY", "127.0.0.1")
    monkeypatch.setenv("no_proxy", "127.0.0.1")

    statuses = []
    hits = []

    class Handler(BaseHTTPRequestHandler):

        def do_GET(self):
            hits.append(self.path)
            status = statuses.pop(0) if statuses else 200
            body = b"<p>Back online</p>" if status == 200 else b"Service unavailable"
            self.send_response(status)
            self.send_header('Content-Type', 'text/html; charset=utf-8')
            self.send_header('Content-Length', str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format, *args):
            pass

    server = ThreadingHTTPServer(('127.0.0.1', 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    yield f"http://127.0.0.1:{server.server_port}", statuses, hits

    server.shutdown()
    server.server_close()


class TestRetries:

    @pytest.fixture(autouse=True)
    def no_backoff(self, config):
        config.set('fetcher.retry_backoff', 0)

    def test_transient_status_is_retried(self, config, flaky_server):
        base_url, statuses, hits = flaky_server
        statuses.append(503)

        with PageFetcher(config) as fetcher:
            assert fetcher.fetch(base_url + "/story") == "<p>Back online</p>"

        assert hits == ["/story", "/story"]

    def test_gives_up_after_configured_retries(self, config, flaky_server):
        base_url, statuses, hits = flaky_server
        statuses.extend([503, 503, 503])
        config.set('fetcher.retries', 1)

        with PageFetcher(config) as fetcher:
            with pytest.raises(FetchError, match="503"):
                fetcher.fetch(base_url + "/story")

        assert len(hits) == 2

    def test_client_errors_are_not_retried(self, config, flaky_server):
        base_url, statuses, hits = flaky_server
        statuses.append(404)

        with PageFetcher(config) as fetcher:
            with pytest.raises(FetchError, match="404"):
                fetcher.fetch(base_url + "/missing")

        assert hits == ["/missing"]

    def test_retry_policy_comes_from_config(self, config):
        config.set('fetcher.retries', 4)

        with PageFetcher(config) as fetcher:
            retry = fetcher.session.get_adapter("https://example.com/").max_retries

        assert retry.total == 4
        assert 503 in retry.status_forcelist
        assert PageFetcher(config, retries=0).retries == 0
