"""
Content cleaning and post-processing for travel-news.

This module normalizes extracted body text and derives the title and excerpt
that accompany it in an extraction result.
"""

import re
from typing import List, Optional

from bs4 import BeautifulSoup

EXCERPT_MAX_LENGTH = 300
EXCERPT_MIN_FRAGMENT = 20
EXCERPT_SENTENCES = 2

_SENTENCE_TERMINALS = re.compile(r'[.!?]')


def split_sentences(text: str) -> List[str]:
    """
    Split text on terminal punctuation.

    Args:
        text: Text to split

    Returns:
        Stripped, non-empty fragments between ``.``, ``!`` and ``?``
    """
    fragments = (fragment.strip() for fragment in _SENTENCE_TERMINALS.split(text or ""))
    return [fragment for fragment in fragments if fragment]


class ContentCleaner:
    """
    Normalizes extracted article text and derives title and excerpt.

    All methods are pure; a single instance can be shared freely.
    """

    # Horizontal whitespace only, newlines are handled separately
    horizontal_space = re.compile(r'[^\S\n]+')
    excess_newlines = re.compile(r'\n{3,}')
    control_chars = re.compile(
        "[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f\N{ZERO WIDTH SPACE}-\N{ZERO WIDTH JOINER}\N{WORD JOINER}\N{ZERO WIDTH NO-BREAK SPACE}]"
    )
    title_separator = re.compile("[|\\-\N{EN DASH}\N{EM DASH}]")

    def normalize(self, text: str) -> str:
        """
        Normalize whitespace and strip unprintable characters.

        Steps, in order: collapse horizontal whitespace runs, collapse three or
        more newlines to two, turn tabs into spaces, drop control characters,
        trim. Removing a control character can leave two spaces or newlines
        side by side, so the pass repeats until the text no longer changes.

        Args:
            text: Raw candidate text

        Returns:
            Normalized text
        """
        if not text:
            return ""

        previous = None
        while text != previous:
            previous = text
            text = self._normalize_pass(text)
        return text

    def _normalize_pass(self, text: str) -> str:
        text = self.horizontal_space.sub(' ', text)
        text = self.excess_newlines.sub('\n\n', text)
        text = text.replace('\t', ' ')
        text = self.control_chars.sub('', text)
        return text.strip()

    def resolve_title(self, soup: BeautifulSoup) -> str:
        """
        Find the article title in a parsed document.

        Tries the first ``h1``, the ``<title>`` element, the ``og:title`` meta
        and the ``title`` meta, in that order, and cleans the first non-empty
        value.

        Args:
            soup: Parsed document

        Returns:
            Cleaned title, or an empty string when none was found
        """
        candidates = (
            lambda: self._tag_text(soup.find('h1')),
            lambda: self._tag_text(soup.find('title')),
            lambda: self._meta_content(soup, property='og:title'),
            lambda: self._meta_content(soup, name='title'),
        )

        for candidate in candidates:
            title = candidate()
            if title:
                return self.clean_title(title)

        return ""

    def clean_title(self, title: str) -> str:
        """
        Drop a site-name suffix from a title.

        Everything from the first pipe, hyphen, en dash or em dash onwards is
        treated as the suffix.

        Args:
            title: Raw title

        Returns:
            Cleaned title
        """
        if not title:
            return ""

        title = re.sub(r'\s+', ' ', title)
        return self.title_separator.split(title, maxsplit=1)[0].strip()

    def build_excerpt(self, content: str) -> str:
        """
        Build a short excerpt from normalized content.

        The first two sentences longer than 20 characters are joined; without
        any such sentence the content itself is used. Either way the excerpt
        is cut to 300 characters, with ``...`` appended when it was cut.

        Args:
            content: Normalized article text

        Returns:
            Excerpt text
        """
        if not content:
            return ""

        fragments = [
            fragment for fragment in split_sentences(content)
            if len(fragment) > EXCERPT_MIN_FRAGMENT
        ]

        if fragments:
            excerpt = '. '.join(fragments[:EXCERPT_SENTENCES]) + '.'
        else:
            excerpt = content

        if len(excerpt) > EXCERPT_MAX_LENGTH:
            excerpt = excerpt[:EXCERPT_MAX_LENGTH] + '...'

        return excerpt

    @staticmethod
    def _tag_text(tag) -> str:
        if tag is None:
            return ""
        return tag.get_text().strip()

    @staticmethod
    def _meta_content(soup: BeautifulSoup, **attrs) -> Optional[str]:
        meta = soup.find('meta', attrs=attrs)
        if meta is None:
            return None
        return (meta.get('content') or '').strip()
