"""
URL validation for travel-news extractors.

Article URLs are normalized and checked before any network request is made,
so obviously unusable input (wrong scheme, social networks, local hosts,
downloads) is rejected up front with a readable reason.
"""

from typing import Optional, Tuple
from urllib.parse import urlparse, urlunparse

# Hosts that never serve an extractable article page
BLOCKED_DOMAINS = frozenset({
    'localhost', '127.0.0.1', '0.0.0.0', '::1',
    'facebook.com', 'instagram.com', 'twitter.com', 'x.com',
    'linkedin.com', 'tiktok.com', 'youtube.com', 'pinterest.com',
})

# Path suffixes of documents, media and feeds rather than article pages
NON_ARTICLE_EXTENSIONS = (
    '.pdf', '.doc', '.docx', '.xls', '.xlsx', '.ppt', '.pptx',
    '.zip', '.gz', '.tar', '.exe', '.dmg',
    '.jpg', '.jpeg', '.png', '.gif', '.svg', '.webp',
    '.mp3', '.mp4', '.mov', '.webm',
    '.css', '.js', '.json', '.xml', '.rss',
)


class URLValidationError(ValueError):
    """Raised when a URL is not acceptable for article extraction."""


class URLValidator:
    """
    Normalizes article URLs and explains why a URL is rejected.
    """

    def __init__(self, blocked_domains=BLOCKED_DOMAINS,
                 non_article_extensions=NON_ARTICLE_EXTENSIONS):
        self.blocked_domains = frozenset(blocked_domains)
        self.non_article_extensions = tuple(non_article_extensions)

    def validate_url(self, url: str) -> Tuple[str, Optional[str]]:
        """
        Validate and normalize a URL.

        Args:
            url: URL as typed by a user or found in a file

        Returns:
            Tuple of (normalized_url, error_message); the URL is acceptable
            when error_message is None
        """
        normalized_url = self._normalize_url(url)
        if normalized_url is None:
            return url, "Invalid URL format"

        parsed = urlparse(normalized_url)
        if parsed.scheme not in ('http', 'https'):
            return normalized_url, f"Unsupported URL scheme: {parsed.scheme}"

        host = (parsed.hostname or '').lower()
        if not host:
            return normalized_url, "URL missing domain"
        if self._is_blocked(host):
            return normalized_url, f"Domain not supported for article extraction: {host}"
        if '.' not in host or ' ' in host:
            return normalized_url, f"Invalid domain: {host}"

        path = parsed.path.lower()
        extension = next((ext for ext in self.non_article_extensions if path.endswith(ext)), None)
        if extension:
            return normalized_url, f"URL appears to be a {extension} file, not an article"

        return normalized_url, None

    def ensure_valid(self, url: str) -> str:
        """
        Validate a URL and return its normalized form.

        Raises:
            URLValidationError: If the URL is not acceptable
        """
        normalized_url, error_message = self.validate_url(url)
        if error_message:
            raise URLValidationError(error_message)
        return normalized_url

    def _is_blocked(self, host: str) -> bool:
        return any(host == domain or host.endswith('.' + domain) for domain in self.blocked_domains)

    def _normalize_url(self, url: str) -> Optional[str]:
        """
        Add a missing scheme, lowercase scheme and host, drop the fragment.

        Returns:
            Normalized URL, or None when no host can be found
        """
        if not isinstance(url, str) or not url.strip():
            return None

        url = url.strip()
        if '://' not in url:
            url = 'https:' + url if url.startswith('//') else 'https://' + url

        try:
            parsed = urlparse(url)
        except ValueError:
            return None
        if not parsed.netloc:
            return None

        return urlunparse((
            parsed.scheme.lower(),
            parsed.netloc.lower(),
            parsed.path,
            parsed.params,
            parsed.query,
            ''
        ))
