#!/usr/bin/env python3
"""
FastAPI web server for travel-news.

This module exposes the headline scan and the article content extractor over
HTTP. Blocking network work runs in a worker thread so the event loop stays
responsive.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from ..config import Config
from ..extractors.extractor_factory import ExtractorFactory
from ..extractors.url_validator import URLValidator, URLValidationError
from ..scraper.fetcher import PageFetcher
from ..scraper.news_scraper import NewsScraper

logger = logging.getLogger(__name__)


class ScrapeRequest(BaseModel):
    """Request model for a headline scan."""
    max_articles: int = Field(20, ge=1, le=100)
    parallel: bool = False


class ExtractRequest(BaseModel):
    """Request model for full-article extraction."""
    url: str
    extractor: Optional[str] = None
    html: Optional[str] = None


class ExtractResponse(BaseModel):
    """Response model for extraction results."""
    title: str
    full_content: str
    excerpt: str
    word_count: int
    quality_score: int
    success: bool
    url: Optional[str] = None
    strategy: Optional[str] = None
    extractor_used: Optional[str] = None
    error_message: Optional[str] = None
    extraction_time_seconds: Optional[float] = None
    reading_time_minutes: int = 0


class SourceInfo(BaseModel):
    """A configured news source."""
    name: str
    url: str
    selectors: List[str]
    enabled: bool


def create_app(config: Optional[Config] = None,
               fetcher: Optional[PageFetcher] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration (loaded from default locations if None)
        fetcher: Page fetcher shared by all handlers (built from config if None)

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = Config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.fetcher.close()

    app = FastAPI(
        title="Travel News",
        description="Latest travel headlines and article content extraction",
        version="1.0.0",
        lifespan=lifespan
    )

    # Shared handles for the request handlers
    fetcher = fetcher or PageFetcher(config)
    app.state.config = config
    app.state.fetcher = fetcher
    app.state.scraper = NewsScraper(config, fetcher)
    app.state.factory = ExtractorFactory(config, fetcher)
    app.state.validator = URLValidator()

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    @app.post("/scrape-latest-travel-news")
    async def scrape_latest_travel_news(request: Optional[ScrapeRequest] = None):
        """Scan every configured source and return the freshest headlines."""
        request = request or ScrapeRequest()
        mode = "parallel" if request.parallel else None

        report = await asyncio.to_thread(
            app.state.scraper.scan, request.max_articles, mode
        )
        return report.to_dict()

    @app.post("/extract-article", response_model=ExtractResponse)
    async def extract_article(request: ExtractRequest):
        """Extract the main content of one article."""
        try:
            url = app.state.validator.ensure_valid(request.url)
        except URLValidationError as e:
            raise HTTPException(status_code=400, detail=f"Invalid URL: {e}")

        logger.info("Extracting article from %s", url)

        if request.html is not None:
            result = await asyncio.to_thread(
                app.state.factory.extract_html, request.html, url, request.extractor
            )
        else:
            result = await asyncio.to_thread(
                app.state.factory.extract, url, request.extractor
            )

        return result.to_dict()

    @app.get("/sources", response_model=List[SourceInfo])
    async def list_sources():
        """List configured news sources."""
        sources = app.state.config.get_sources(include_disabled=True)
        return [source.to_dict() for source in sources]

    return app


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=3000)
