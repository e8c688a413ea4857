"""
Travel News - Collect the latest travel headlines and extract article content.

Scans a configurable set of travel-news sites for fresh headlines and pulls
the main body text out of individual articles, with an optional HTTP API.
"""

__version__ = "1.0.0"

from .models import ExtractionResult

__all__ = ["ExtractionResult", "__version__"]
