"""
Headline scraping modules for travel-news.

This package contains the page fetcher, freshness heuristics and the
multi-source headline scraper.
"""
