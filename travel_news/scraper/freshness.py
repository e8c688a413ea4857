"""
Recency signals and freshness scoring for scraped headlines.

Front pages rarely carry structured dates, so publication time is inferred
from whatever is available: a ``<time datetime>`` attribute, relative phrases
such as "3 hours ago", or a date embedded in the article URL.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

_RELATIVE_AGE = re.compile(
    r'\b(\d+|an?|one)\s*(minute|min|hour|hr|day|week|month)s?\s+ago\b',
    re.IGNORECASE
)
_JUST_NOW = re.compile(r'\b(just now|moments? ago|today)\b', re.IGNORECASE)
_YESTERDAY = re.compile(r'\byesterday\b', re.IGNORECASE)

_URL_DATE = re.compile(r'/(20\d{2})[/-](0?[1-9]|1[0-2])(?:[/-](0?[1-9]|[12]\d|3[01]))?(?=[/-])')

_UNIT_HOURS = {
    'minute': 1 / 60,
    'min': 1 / 60,
    'hour': 1,
    'hr': 1,
    'day': 24,
    'week': 24 * 7,
    'month': 24 * 30,
}

_DATE_FORMATS = [
    '%Y-%m-%dT%H:%M:%S%z',
    '%Y-%m-%dT%H:%M:%S.%f%z',
    '%Y-%m-%dT%H:%M%z',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d',
    '%Y/%m/%d',
    '%B %d, %Y',
    '%b %d, %Y',
    '%d %B %Y',
]

UNKNOWN_AGE_SCORE = 30
RECENCY_WORD_BONUS = 10

AGE_BANDS = (
    (6, 100),
    (24, 85),
    (72, 65),
    (168, 45),
)
STALE_SCORE = 15


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a date string from markup into an aware UTC datetime.

    Args:
        value: ISO-8601 timestamp or a common human-readable date

    Returns:
        Parsed datetime, or None when the value is not recognised
    """
    if not value:
        return None

    value = value.strip().replace('Z', '+00:00')

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        parsed = None
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(value, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def published_from_text(text: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Infer a publication time from relative phrases in text.

    Args:
        text: Text surrounding a headline
        now: Reference time (defaults to the current UTC time)

    Returns:
        Estimated publication time, or None without a recognised phrase
    """
    if not text:
        return None
    now = now or utcnow()

    match = _RELATIVE_AGE.search(text)
    if match:
        amount, unit = match.group(1).lower(), match.group(2).lower()
        count = 1 if amount in ('a', 'an', 'one') else int(amount)
        return now - timedelta(hours=count * _UNIT_HOURS[unit])

    if _JUST_NOW.search(text):
        return now
    if _YESTERDAY.search(text):
        return now - timedelta(days=1)

    return None


def published_from_url(url: str) -> Optional[datetime]:
    """
    Read a date embedded in a URL path such as ``/2026/10/15/``.

    Args:
        url: Article URL

    Returns:
        Date at midnight UTC (first of the month when no day is present),
        or None
    """
    match = _URL_DATE.search(url or "")
    if not match:
        return None

    year, month, day = match.group(1), match.group(2), match.group(3) or 1
    try:
        return datetime(int(year), int(month), int(day), tzinfo=timezone.utc)
    except ValueError:
        return None


def is_stale(published_at: Optional[datetime], max_age_days: Optional[float],
             now: Optional[datetime] = None) -> bool:
    """
    Check whether a headline is older than the allowed age.

    Headlines without a known publication time are never stale.
    """
    if published_at is None or not max_age_days:
        return False
    now = now or utcnow()
    return now - published_at > timedelta(days=max_age_days)


def freshness_score(title: str, published_at: Optional[datetime] = None,
                    now: Optional[datetime] = None) -> int:
    """
    Score how recent a headline appears to be.

    With a known publication time the score follows fixed age bands; without
    one, a neutral base score is raised when the title uses recency words.

    Args:
        title: Headline text
        published_at: Known or inferred publication time
        now: Reference time (defaults to the current UTC time)

    Returns:
        Integer score between 0 and 100
    """
    now = now or utcnow()

    if published_at is not None:
        hours = max(0.0, (now - published_at).total_seconds() / 3600)
        for limit, score in AGE_BANDS:
            if hours <= limit:
                return score
        return STALE_SCORE

    recency_words = re.compile(
        r'\b(new|latest|now|just|this week|this year|%d)\b' % now.year,
        re.IGNORECASE
    )
    score = UNKNOWN_AGE_SCORE
    if recency_words.search(title or ""):
        score += RECENCY_WORD_BONUS
    return min(100, score)
