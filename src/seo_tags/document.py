# src/seo_tags/document.py
"""Queryable document interface and its BeautifulSoup implementation."""

from abc import ABC, abstractmethod
from typing import Optional

from bs4 import BeautifulSoup

from seo_tags.config import settings


class Document(ABC):
    """Selector operations the tag extractor relies on.

    Every lookup returns None (or 0) when nothing matches; implementations
    must never raise on malformed markup.
    """

    @abstractmethod
    def select_text(self, selector: str) -> Optional[str]:
        """Text content of the first matching element."""
        pass

    @abstractmethod
    def select_attr(self, selector: str, attribute: str) -> Optional[str]:
        """Attribute value of the first matching element."""
        pass

    @abstractmethod
    def select_inner_html(self, selector: str) -> Optional[str]:
        """Inner markup of the first matching element."""
        pass

    @abstractmethod
    def count(self, selector: str) -> int:
        """Number of matching elements."""
        pass


class SoupDocument(Document):
    """Document backed by a BeautifulSoup tree and CSS selectors."""

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    def select_text(self, selector: str) -> Optional[str]:
        element = self.soup.select_one(selector)
        return element.get_text() if element is not None else None

    def select_attr(self, selector: str, attribute: str) -> Optional[str]:
        element = self.soup.select_one(selector)
        if element is None:
            return None
        value = element.get(attribute)
        # Multi-valued attributes (rel, class) come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def select_inner_html(self, selector: str) -> Optional[str]:
        element = self.soup.select_one(selector)
        return element.decode_contents() if element is not None else None

    def count(self, selector: str) -> int:
        return len(self.soup.select(selector))


def parse_html(html: Optional[str], parser: Optional[str] = None) -> SoupDocument:
    """Parse markup into a SoupDocument.

    Args:
        html: Raw HTML (None is treated as an empty document)
        parser: BeautifulSoup parser name. Defaults to settings.HTML_PARSER.

    Returns:
        SoupDocument wrapping the parsed tree
    """
    return SoupDocument(BeautifulSoup(html or "", parser or settings.HTML_PARSER))
