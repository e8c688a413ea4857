import pytest

from travel_news.config import Config, CONFIG_ENV_VAR
from travel_news.extractors.content_cleaner import ContentCleaner
from travel_news.extractors.content_extractor import ContentExtractor


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep user configuration files out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    return home


@pytest.fixture
def config():
    """Default configuration without courtesy delays."""
    cfg = Config()
    cfg.set('scraper.request_delay', 0)
    return cfg


@pytest.fixture
def cleaner():
    return ContentCleaner()


@pytest.fixture
def extractor():
    return ContentExtractor()
