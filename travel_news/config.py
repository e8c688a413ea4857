"""
Configuration management for travel-news.

Handles loading and managing configuration from YAML files with sensible defaults.
A ``Config`` instance is created by the entry point (CLI or web app) and passed
explicitly to the components that need it.
"""

import os
import copy
import logging
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional

from .models import SourceConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TRAVEL_NEWS_CONFIG"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36 travel-news/1.0.0"
)

DEFAULT_KEYWORDS = [
    "travel", "destination", "hotel", "trip", "vacation",
    "visit", "guide", "best", "new"
]

DEFAULT_SOURCES = [
    {
        "name": "Travel + Leisure",
        "url": "https://www.travelandleisure.com/",
        "selectors": ["article h2 a", "h2 a", "h3 a", ".card-title a"]
    },
    {
        "name": "BBC Travel",
        "url": "https://www.bbc.com/travel",
        "selectors": ["article h2 a", "h3 a", ".media__title a"]
    },
    {
        "name": "AFAR Magazine",
        "url": "https://www.afar.com/",
        "selectors": ["h2 a", "h3 a", '[class*="title"] a']
    }
]


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` updated with ``override``; nested mappings merge, anything else replaces."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class Config:
    """
    Settings for the fetcher, scraper, extractors, server and sources.

    Built-in defaults are overlaid with the first YAML file found, either the
    one passed explicitly or one from the standard locations.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to a YAML file. If None, the standard locations
                are searched and ``$TRAVEL_NEWS_CONFIG`` takes precedence.
        """
        self.config_data = self._load_default_config()
        self.loaded_from: Optional[Path] = None

        if config_file:
            self._load_config_file(config_file)
        else:
            self._load_user_config()

    def _load_default_config(self) -> Dict[str, Any]:
        """Built-in settings, a fresh copy per instance."""
        return {
            "fetcher": {
                "timeout": 15,
                "user_agent": DEFAULT_USER_AGENT,
                "retries": 2,
                "retry_backoff": 0.5
            },
            "scraper": {
                "mode": "sequential",
                "request_delay": 1.0,
                "max_concurrency": 3,
                "max_articles": 20,
                "per_source_limit": 10,
                "per_source_keep": 8,
                "min_title_length": 15,
                "max_title_length": 200,
                "max_age_days": 7,
                "keywords": list(DEFAULT_KEYWORDS)
            },
            "extractor": {
                "primary": "heuristic",
                "fallback": "readability",
                "use_fallback": True
            },
            "server": {
                "host": "0.0.0.0",
                "port": 3000
            },
            "sources": copy.deepcopy(DEFAULT_SOURCES)
        }

    def _candidate_paths(self) -> List[Path]:
        home = Path.home()
        candidates = [
            home / ".travel-news.yml",
            home / ".travel-news.yaml",
            home / ".config" / "travel-news" / "config.yml",
            home / ".config" / "travel-news" / "config.yaml",
            Path("travel-news.yml"),
            Path("travel-news.yaml")
        ]

        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            candidates.insert(0, Path(env_path))
        return candidates

    def _load_user_config(self) -> None:
        """Load the first configuration file found in the standard locations."""
        for candidate in self._candidate_paths():
            if candidate.expanduser().exists():
                self._load_config_file(str(candidate))
                return

    def _load_config_file(self, config_file: str) -> None:
        """
        Overlay settings from a YAML file.

        An unreadable or malformed file is reported as a warning and the
        current settings are left untouched.

        Args:
            config_file: Path to the configuration file
        """
        path = Path(config_file).expanduser()
        if not path.exists():
            return

        try:
            with open(path, 'r', encoding='utf-8') as f:
                overrides = yaml.safe_load(f) or {}
            if not isinstance(overrides, dict):
                raise ValueError("top level must be a mapping")
        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.warning("Could not load config file %s: %s", config_file, e)
            return

        # Lists such as ``sources`` or ``scraper.keywords`` replace the defaults
        self.config_data = _deep_merge(self.config_data, overrides)
        self.loaded_from = path
        logger.debug("Loaded configuration from %s", path)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a value by dotted path, e.g. ``scraper.request_delay``.

        Args:
            key: Dotted configuration key
            default: Returned when any part of the path is missing

        Returns:
            Configuration value or default
        """
        node = self.config_data
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        """
        Set a value by dotted path, creating intermediate sections.

        Args:
            key: Dotted configuration key
            value: Value to store
        """
        *sections, name = key.split('.')
        node = self.config_data
        for section in sections:
            node = node.setdefault(section, {})
        node[name] = value

    def get_fetcher_config(self) -> Dict[str, Any]:
        """HTTP fetcher settings (``timeout``, ``user_agent``, ``retries``, ``retry_backoff``)."""
        return self.get('fetcher', {})

    def get_scraper_config(self) -> Dict[str, Any]:
        """Headline scraper settings."""
        return self.get('scraper', {})

    def get_extractor_config(self) -> Dict[str, Any]:
        """Extractor order settings (``primary``, ``fallback``, ``use_fallback``)."""
        return self.get('extractor', {})

    def get_sources(self, include_disabled: bool = False) -> List[SourceConfig]:
        """
        Get the configured news sources.

        Malformed entries are skipped with a warning.

        Args:
            include_disabled: Also return sources marked ``enabled: false``

        Returns:
            List of SourceConfig records in configuration order
        """
        sources = []
        for entry in self.get('sources', []) or []:
            try:
                source = SourceConfig.from_dict(entry)
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning("Ignoring malformed source entry %r: %s", entry, e)
                continue
            if source.enabled or include_disabled:
                sources.append(source)
        return sources
