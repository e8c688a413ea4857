"""
Heuristic strategies for locating the main body text of an article.

Each strategy is a plain function taking the cleaned document and returning
either a candidate text or an empty string. ``run_cascade`` tries them in
order and keeps the longest candidate that clears the minimum length.
"""

import re
import logging
from typing import Callable, Iterable, Optional, Set, Tuple

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

Strategy = Callable[[BeautifulSoup], str]

CASCADE_MIN_LENGTH = 300
CLASS_SCAN_MIN_LENGTH = 500
BLOCK_MIN_LENGTH = 200
BLOCK_MIN_PARAGRAPHS = 2
PARAGRAPH_MIN_LENGTH = 50
PARAGRAPH_MIN_COUNT = 3

FALLBACK_STRATEGY = "body_fallback"

BOILERPLATE_SELECTORS = [
    # Non-visible content
    'script', 'style', 'noscript', 'iframe', 'svg', 'template',
    '[hidden]', '[aria-hidden="true"]',
    '[style*="display:none"]', '[style*="display: none"]',

    # Page chrome
    'nav', 'header', 'footer', 'aside',
    '[role="navigation"]', '[role="banner"]',
    '[role="contentinfo"]', '[role="complementary"]',

    # Ad slots and comment embeds
    '[id^="google_ads"]', '[id^="div-gpt-ad"]', '[id*="disqus"]',
]

# Class or id tokens naming a boilerplate widget, e.g. ``sidebar``,
# ``related-posts``, ``article-comments`` or ``cookie-banner``. Modifier
# tokens such as ``has-sidebar`` or ``comments-open`` describe the element
# they sit on and do not match.
BOILERPLATE_NAME_PATTERN = re.compile(
    r'^(?!(?:.*[-_])?(?:has|with|no|is|show|hide|enable|disable)[-_])'
    r'(?:[a-z0-9]+[-_])*'
    r'(?:ads?|advert|adverts|advertisement|advertising|sponsored|'
    r'sidebar|related|recommended|comments?|social|share|sharing|sharebar|'
    r'newsletter|subscribe|subscription|signup|'
    r'cookies?|consent|gdpr)'
    r'(?:[-_](?:box|bar|banner|block|container|wrapper|widget|widgets|list|links|'
    r'section|area|slot|panel|module|popup|modal|notice|form|buttons?|icons?|'
    r'tools|posts|articles|stories|content|unit|title|count|thread))*$',
    re.IGNORECASE
)

NAVIGATION_SELECTORS = [
    'nav', 'header', 'footer', 'aside', 'menu',
    '[role="navigation"]', '[role="menu"]', '[role="menubar"]',
]

NAVIGATION_NAME_PATTERN = re.compile(
    r'^(?!(?:.*[-_])?(?:has|with|no|is|show|hide)[-_])'
    r'(?:[a-z0-9]+[-_])*'
    r'(?:menu|menubar|navbar|nav|navigation|breadcrumbs?)'
    r'(?:[-_](?:bar|block|container|wrapper|list|links|items?|panel|toggle))*$',
    re.IGNORECASE
)

BLOCK_TAGS = [
    'p', 'div', 'section', 'article', 'main', 'blockquote', 'pre',
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'ul', 'ol', 'li', 'dl', 'dt', 'dd',
    'table', 'tr', 'figure', 'figcaption',
]

SEMANTIC_CONTAINER_SELECTOR = 'article, [role="article"], [itemprop="articleBody"]'

CONTENT_CLASS_SELECTORS = [
    '.article-content',
    '.article-body',
    '.article__body',
    '.post-content',
    '.entry-content',
    '.story-body',
    '.story-content',
    '.content-body',
    '.post-body',
    '.blog-content',
    '[class*="article-content"]',
    '[class*="article-body"]',
    '[class*="post-content"]',
]

BLOCK_CONTAINER_TAGS = ['div', 'section', 'article', 'main']

MAIN_REGION_SELECTOR = 'main, [role="main"], #main, #content, .main-content'

# Never removed even when a denylist pattern matches their class
_PROTECTED_TAGS = {'html', 'body'}


def remove_boilerplate(soup: BeautifulSoup) -> BeautifulSoup:
    """
    Remove page chrome from a parsed document in place.

    Deletes every element matching the boilerplate denylist, then marks
    block-level boundaries with newlines so element text reads as prose.

    Args:
        soup: Parsed document

    Returns:
        The same document, cleaned
    """
    removed = _remove_matching(soup, BOILERPLATE_SELECTORS, BOILERPLATE_NAME_PATTERN)
    logger.debug("Removed %d boilerplate elements", removed)

    for br in soup.find_all('br'):
        br.replace_with('\n')

    for tag in soup.find_all(BLOCK_TAGS):
        tag.insert_before('\n')
        tag.insert_after('\n')

    return soup


def element_text(tag) -> str:
    """Return the stripped text of an element, or '' for a missing one."""
    if tag is None:
        return ""
    return tag.get_text().strip()


def semantic_container(soup: BeautifulSoup) -> str:
    """Text of the first article-like element."""
    return element_text(soup.select_one(SEMANTIC_CONTAINER_SELECTOR))


def known_class_names(soup: BeautifulSoup) -> str:
    """Text of the first common content container holding over 500 characters."""
    for selector in CONTENT_CLASS_SELECTORS:
        text = element_text(soup.select_one(selector))
        if len(text) > CLASS_SCAN_MIN_LENGTH:
            return text
    return ""


def best_scoring_block(soup: BeautifulSoup) -> str:
    """
    Text of the block container with the best text/paragraph score.

    A block scores its text length plus 100 per paragraph; only blocks with
    more than 200 characters and more than two paragraphs are considered.
    """
    best_text = ""
    best_score = -1

    for block in soup.find_all(BLOCK_CONTAINER_TAGS):
        text = element_text(block)
        if len(text) <= BLOCK_MIN_LENGTH:
            continue

        paragraphs = len(block.find_all('p'))
        if paragraphs <= BLOCK_MIN_PARAGRAPHS:
            continue

        score = len(text) + 100 * paragraphs
        if score > best_score:
            best_score = score
            best_text = text

    return best_text


def paragraph_concatenation(soup: BeautifulSoup) -> str:
    """All substantial paragraphs joined by blank lines, when there are enough."""
    paragraphs = [element_text(p) for p in soup.find_all('p')]
    paragraphs = [text for text in paragraphs if len(text) > PARAGRAPH_MIN_LENGTH]

    if len(paragraphs) > PARAGRAPH_MIN_COUNT:
        return '\n\n'.join(paragraphs)
    return ""


def main_region(soup: BeautifulSoup) -> str:
    """Text of the first main content region."""
    return element_text(soup.select_one(MAIN_REGION_SELECTOR))


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("semantic_container", semantic_container),
    ("known_class_names", known_class_names),
    ("best_scoring_block", best_scoring_block),
    ("paragraph_concatenation", paragraph_concatenation),
    ("main_region", main_region),
)


def body_fallback(soup: BeautifulSoup) -> str:
    """
    Last resort when no strategy produced enough text.

    Strips navigation-like elements once more and returns the remaining body
    text as is, however short.
    """
    _remove_matching(soup, NAVIGATION_SELECTORS, NAVIGATION_NAME_PATTERN)
    body = soup.body if soup.body is not None else soup
    return body.get_text().strip()


def run_cascade(soup: BeautifulSoup,
                strategies: Iterable[Tuple[str, Strategy]] = STRATEGIES,
                min_length: int = CASCADE_MIN_LENGTH) -> Tuple[str, str]:
    """
    Run every strategy and keep the best candidate.

    A candidate replaces the current best only when it is strictly longer
    and longer than ``min_length``. When nothing qualifies, ``body_fallback``
    provides the text.

    Args:
        soup: Document already passed through ``remove_boilerplate``
        strategies: Ordered ``(name, function)`` pairs
        min_length: Minimum candidate length in characters

    Returns:
        Tuple of (candidate text, name of the strategy that produced it)
    """
    best_text = ""
    best_name = None

    for name, strategy in strategies:
        try:
            candidate = strategy(soup) or ""
        except Exception as e:
            logger.debug("Strategy %s failed: %s", name, e)
            continue

        logger.debug("Strategy %s produced %d characters", name, len(candidate))

        if len(candidate) > len(best_text) and len(candidate) > min_length:
            best_text = candidate
            best_name = name

    if best_name is None:
        return body_fallback(soup), FALLBACK_STRATEGY

    return best_text, best_name


def _content_anchor(soup: BeautifulSoup) -> Optional[Tag]:
    """
    The article-like or main element holding the most paragraph text.

    Elements without paragraphs are weighed by their whole text. On ties the
    later, more deeply nested element wins, so an ``article`` inside ``main``
    is preferred to the ``main`` around it.
    """
    anchor = None
    best = -1

    for tag in soup.select(f'{SEMANTIC_CONTAINER_SELECTOR}, {MAIN_REGION_SELECTOR}'):
        weight = sum(len(p.get_text()) for p in tag.find_all('p')) or len(tag.get_text())
        if weight >= best:
            anchor, best = tag, weight

    return anchor


def _has_matching_name(tag: Tag, pattern: re.Pattern) -> bool:
    names = tag.get('class') or []
    if isinstance(names, str):
        names = names.split()
    names = list(names)
    if tag.get('id'):
        names.append(tag['id'])
    return any(pattern.match(name) for name in names)


def _remove_matching(soup: BeautifulSoup, selectors: Iterable[str], name_pattern: re.Pattern) -> int:
    # The content anchor and everything around it survive any match
    protected: Set[int] = set()
    anchor = _content_anchor(soup)
    if anchor is not None:
        protected.add(id(anchor))
        protected.update(id(parent) for parent in anchor.parents)

    matches = [tag for selector in selectors for tag in soup.select(selector)]
    matches.extend(tag for tag in soup.find_all(True) if _has_matching_name(tag, name_pattern))

    removed = 0
    for tag in matches:
        if tag.decomposed or tag.name in _PROTECTED_TAGS or id(tag) in protected:
            continue
        tag.decompose()
        removed += 1
    return removed
