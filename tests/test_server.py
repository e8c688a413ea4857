"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from travel_news.web_ui.server import create_app

from tests.helpers import PARAGRAPH_100, StubFetcher, article_page, headline, page

SOURCE_A = "https://a.example.com/"
SOURCE_B = "https://b.example.com/"
ARTICLE = "https://a.example.com/italy-beaches"


@pytest.fixture
def fetcher():
    return StubFetcher({
        SOURCE_A: page(
            headline("Travel guide to Lisbon cafes", "/lisbon") +
            headline("Travel guide to Porto bakeries", "/porto")
        ),
        ARTICLE: article_page([PARAGRAPH_100] * 5),
    })


@pytest.fixture
def client(config, fetcher):
    config.set('sources', [
        {'name': "Source A", 'url': SOURCE_A, 'selectors': ["article h2 a"]},
        {'name': "Source B", 'url': SOURCE_B, 'selectors': ["h2 a"]},
        {'name': "Source C", 'url': "https://c.example.com/", 'selectors': ["h2 a"], 'enabled': False},
    ])
    with TestClient(create_app(config, fetcher=fetcher)) as client:
        yield client


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()['status'] == "ok"
    assert "T" in response.json()['timestamp']


def test_scrape_latest_travel_news(client):
    response = client.post("/scrape-latest-travel-news", json={'max_articles': 1})

    assert response.status_code == 200
    data = response.json()
    assert len(data['latest_travel_news']) == 1
    assert data['latest_travel_news'][0]['url'] == "https://a.example.com/lisbon"
    assert data['summary']['total_articles'] == 1
    assert data['summary']['sources_checked'] == 2
    assert data['summary']['successful_sources'] == 1

    a, b = data['source_breakdown']
    assert a['success'] is True and a['total_found'] == 2
    assert b['success'] is False and "Failed to fetch" in b['error']


def test_scrape_without_body_uses_defaults(client):
    response = client.post("/scrape-latest-travel-news")

    assert response.status_code == 200
    assert response.json()['summary']['total_articles'] == 2


def test_scrape_in_parallel(client):
    response = client.post("/scrape-latest-travel-news", json={'parallel': True})

    assert response.status_code == 200
    assert [r['source'] for r in response.json()['source_breakdown']] == ["Source A", "Source B"]


@pytest.mark.parametrize("max_articles", [0, 101, "many"])
def test_scrape_rejects_bad_limits(client, max_articles):
    response = client.post("/scrape-latest-travel-news", json={'max_articles': max_articles})

    assert response.status_code == 422


def test_extract_article(client):
    response = client.post("/extract-article", json={'url': ARTICLE})

    assert response.status_code == 200
    data = response.json()
    assert data['success'] is True
    assert data['title'] == "Best Beaches in Italy"
    assert data['strategy'] == "semantic_container"
    assert data['word_count'] == 125
    assert data['url'] == ARTICLE


def test_extract_article_from_supplied_html(client, fetcher):
    response = client.post("/extract-article", json={
        'url': "https://example.com/offline",
        'html': article_page([PARAGRAPH_100] * 5, title="Offline copy")
    })

    assert response.status_code == 200
    assert response.json()['title'] == "Offline copy"
    assert "https://example.com/offline" not in fetcher.calls


def test_extract_article_download_failure_is_not_an_http_error(client):
    response = client.post("/extract-article", json={'url': "https://a.example.com/missing"})

    assert response.status_code == 200
    data = response.json()
    assert data['success'] is False
    assert data['full_content'] == ""
    assert data['error_message'].startswith("Failed to fetch")


@pytest.mark.parametrize("url", ["ftp://example.com/file", "https://example.com/map.pdf", ""])
def test_extract_article_rejects_invalid_urls(client, url):
    response = client.post("/extract-article", json={'url': url})

    assert response.status_code == 400
    assert response.json()['detail'].startswith("Invalid URL")


def test_sources(client):
    response = client.get("/sources")

    assert response.status_code == 200
    assert [(s['name'], s['enabled']) for s in response.json()] == [
        ("Source A", True), ("Source B", True), ("Source C", False)
    ]


def test_shutdown_closes_fetcher(config):
    fetcher = StubFetcher()

    with TestClient(create_app(config, fetcher=fetcher)):
        assert not fetcher.closed

    assert fetcher.closed
