"""
Quality scoring for extracted article content.

The score is a 0-100 estimate of how likely the extracted text is a genuine
article body. The success gate is a separate yes/no check used to flag
low-confidence extractions.
"""

import re

from .content_cleaner import split_sentences

SCORE_MIN = 0
SCORE_MAX = 100

SUCCESS_MIN_LENGTH = 500
SUCCESS_MIN_WORDS = 100

TRAVEL_KEYWORDS = (
    'travel', 'destination', 'hotel', 'trip', 'vacation', 'visit',
    'guide', 'beach', 'flight', 'airline', 'airport', 'resort',
    'tourism', 'tourist', 'itinerary', 'cruise', 'journey', 'explore',
)

# Whole words only, plural forms included
_KEYWORD_PATTERNS = tuple(
    re.compile(r'\b' + re.escape(keyword) + r'(?:s|es)?\b') for keyword in TRAVEL_KEYWORDS
)

NEGATIVE_INDICATORS = (
    'enable cookies',
    'cookies are disabled',
    'enable javascript',
    'javascript is disabled',
    'javascript is required',
    'subscribe to continue',
    'subscribe to read',
    'subscribers only',
    'sign in to continue',
    'accept all cookies',
)

DISQUALIFYING_PHRASES = (
    'page not found',
    '404 not found',
    'access denied',
    'enable javascript',
    'enable cookies',
    'are you a robot',
    'verify you are human',
    'subscribe to continue reading',
)


def clamp_score(score: int) -> int:
    """Clamp a score into the 0-100 range."""
    return max(SCORE_MIN, min(SCORE_MAX, int(score)))


def passes_success_gate(content: str, word_count: int) -> bool:
    """
    Decide whether extracted content looks like a real article.

    Args:
        content: Normalized article text
        word_count: Number of words in ``content``

    Returns:
        True when the text is long enough and carries no disqualifying phrase
    """
    if len(content) <= SUCCESS_MIN_LENGTH or word_count <= SUCCESS_MIN_WORDS:
        return False

    lowered = content.lower()
    return not any(phrase in lowered for phrase in DISQUALIFYING_PHRASES)


def score_content(content: str, title: str = "") -> int:
    """
    Compute the heuristic quality score.

    Points are added for length, word count, sentence count, a meaningful
    title and each travel keyword present; each negative indicator costs
    10 points. The total is clamped to 0-100.

    Args:
        content: Normalized article text
        title: Resolved article title

    Returns:
        Integer score between 0 and 100
    """
    content = content or ""
    length = len(content)
    words = len(content.split())
    sentences = len(split_sentences(content))
    lowered = content.lower()

    score = 0

    if length > 1000:
        score += 30
    elif length > 500:
        score += 20
    elif length > 200:
        score += 10

    if words > 300:
        score += 25
    elif words > 150:
        score += 15
    elif words > 75:
        score += 10

    if sentences > 10:
        score += 15
    elif sentences > 5:
        score += 10

    if title and len(title) > 10:
        score += 10

    score += 5 * sum(1 for pattern in _KEYWORD_PATTERNS if pattern.search(lowered))
    score -= 10 * sum(1 for phrase in NEGATIVE_INDICATORS if phrase in lowered)

    return clamp_score(score)
