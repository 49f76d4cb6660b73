# src/seo_tags/utils.py
"""URL and text helpers shared by the analyzer and the CLI."""

import re
from typing import Optional
from urllib.parse import urlparse

_SCHEME_RE = re.compile(r'^https?://', re.IGNORECASE)


def normalize_url(url: Optional[str]) -> str:
    """Trim the URL and prepend https:// when it has no http(s) scheme."""
    if not url:
        return ''
    url = url.strip()
    if not _SCHEME_RE.match(url):
        url = 'https://' + url
    return url


def is_valid_url(url: Optional[str]) -> bool:
    """Check that a string is an absolute URL with a scheme and a host."""
    if not url or not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url)
        # Accessing port validates it
        parsed.port
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def truncate_text(text: Optional[str], max_length: int) -> str:
    """Cut text to max_length characters, appending '...' when shortened."""
    if not text:
        return ''
    return text[:max_length] + '...' if len(text) > max_length else text
