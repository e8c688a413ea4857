"""
HTTP API for travel-news.
"""
