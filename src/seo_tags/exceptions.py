"""Exceptions raised by the SEO tag analyzer."""

from typing import Optional


class SEOTagsError(Exception):
    """Base class for analyzer errors."""


class InvalidURLError(SEOTagsError):
    """The requested URL is not a well-formed absolute URL."""

    def __init__(self, url: str, message: str = "Invalid URL format. Make sure to include https://"):
        super().__init__(message)
        self.url = url
        self.message = message


class FetchError(SEOTagsError):
    """The page could not be fetched.

    status_code and status_text carry the upstream response verbatim; both are
    None when the failure happened at the transport level.
    """

    def __init__(
        self,
        url: str,
        message: str,
        status_code: Optional[int] = None,
        status_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.url = url
        self.message = message
        self.status_code = status_code
        self.status_text = status_text
