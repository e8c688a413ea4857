"""
Heuristic article content extractor for travel-news.

This module provides the primary content extraction: boilerplate removal,
a cascade of body-locating strategies, normalization, title and excerpt
derivation, and quality scoring. It performs no I/O; callers supply the
HTML they fetched.
"""

import time
import logging
from typing import Iterable, Optional, Tuple

from bs4 import BeautifulSoup

from .content_cleaner import ContentCleaner
from .quality_scorer import score_content
from .strategies import STRATEGIES, Strategy, remove_boilerplate, run_cascade
from ..models import ExtractionResult

logger = logging.getLogger(__name__)

EXTRACTOR_NAME = "heuristic"


class ContentExtractor:
    """
    Extracts the main article body from raw HTML.

    Extraction never raises: malformed input degrades to the body-text
    fallback and low confidence is reported through ``success`` and
    ``quality_score`` on the result.
    """

    def __init__(self, cleaner: Optional[ContentCleaner] = None,
                 strategies: Iterable[Tuple[str, Strategy]] = STRATEGIES,
                 parser: str = 'html.parser'):
        """
        Initialize the extractor.

        Args:
            cleaner: Text cleaner (a default one is created if None)
            strategies: Ordered ``(name, function)`` body-locating strategies
            parser: BeautifulSoup parser name
        """
        self.cleaner = cleaner or ContentCleaner()
        self.strategies = tuple(strategies)
        self.parser = parser

    def extract(self, html: str, source_url: str) -> ExtractionResult:
        """
        Extract article content from an HTML document.

        Args:
            html: Raw HTML of the page
            source_url: URL the HTML was fetched from

        Returns:
            ExtractionResult with content, title, excerpt and quality score
        """
        start_time = time.time()

        try:
            soup = BeautifulSoup(html or "", self.parser)
            # Article headings usually sit in a <header> that is removed below
            title = self.cleaner.resolve_title(soup)
            remove_boilerplate(soup)

            raw_text, strategy = run_cascade(soup, self.strategies)
            content = self.cleaner.normalize(raw_text)
        except Exception as e:
            logger.warning("Could not parse document from %s: %s", source_url, e)
            return ExtractionResult(
                url=source_url,
                extractor_used=EXTRACTOR_NAME,
                error_message=f"Unparseable document: {e}",
                extraction_time_seconds=time.time() - start_time
            )

        result = ExtractionResult(
            title=title,
            full_content=content,
            excerpt=self.cleaner.build_excerpt(content),
            quality_score=score_content(content, title),
            url=source_url,
            strategy=strategy,
            extractor_used=EXTRACTOR_NAME,
            extraction_time_seconds=time.time() - start_time
        )

        logger.debug(
            "Extracted %d words from %s via %s (score %d, success=%s)",
            result.word_count, source_url, strategy,
            result.quality_score, result.success
        )
        return result
