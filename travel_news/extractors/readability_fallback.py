"""
Readability-based fallback content extractor for travel-news.

This module provides backup content extraction using the readability-lxml
library when the heuristic extractor reports low confidence.
"""

import time
import logging
from typing import Optional

from bs4 import BeautifulSoup
from readability import Document

from .content_cleaner import ContentCleaner
from .quality_scorer import score_content
from .strategies import remove_boilerplate
from ..models import ExtractionResult

logger = logging.getLogger(__name__)

EXTRACTOR_NAME = "readability"


class ReadabilityFallback:
    """
    Fallback content extractor using readability-lxml library.

    Readability is good at extracting the main content area but may be less
    precise than the heuristic cascade. Its output goes through the same
    normalization and scoring so results are comparable.
    """

    def __init__(self, cleaner: Optional[ContentCleaner] = None):
        """
        Initialize the Readability fallback extractor.

        Args:
            cleaner: Text cleaner (a default one is created if None)
        """
        self.cleaner = cleaner or ContentCleaner()

    def extract(self, html: str, source_url: str) -> ExtractionResult:
        """
        Extract article content from HTML using readability.

        Args:
            html: Raw HTML of the page
            source_url: URL the HTML was fetched from

        Returns:
            ExtractionResult containing the extracted content or error information
        """
        start_time = time.time()

        try:
            doc = Document(html)

            # Get the cleaned content
            article_html = doc.summary()
            if not article_html or not article_html.strip():
                return ExtractionResult(
                    url=source_url,
                    extractor_used=EXTRACTOR_NAME,
                    error_message="Readability found no content",
                    extraction_time_seconds=time.time() - start_time
                )

            summary = remove_boilerplate(BeautifulSoup(article_html, 'html.parser'))
            content = self.cleaner.normalize(summary.get_text())

            title = self.cleaner.clean_title(doc.title() or "")
            if not title or title == "[no-title]":
                # Fallback to manual title resolution
                title = self.cleaner.resolve_title(BeautifulSoup(html, 'html.parser'))

        except Exception as e:
            logger.warning("Readability extraction failed for %s: %s", source_url, e)
            return ExtractionResult(
                url=source_url,
                extractor_used=EXTRACTOR_NAME,
                error_message=f"Extraction failed: {e}",
                extraction_time_seconds=time.time() - start_time
            )

        return ExtractionResult(
            title=title,
            full_content=content,
            excerpt=self.cleaner.build_excerpt(content),
            quality_score=score_content(content, title),
            url=source_url,
            strategy="readability_summary",
            extractor_used=EXTRACTOR_NAME,
            extraction_time_seconds=time.time() - start_time
        )
