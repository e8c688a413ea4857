"""
Content extraction modules for travel-news.

This package contains the heuristic article extractor, its readability-based
fallback and the helpers they share.
"""
