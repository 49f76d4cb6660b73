"""Tag extractor: pulls raw tag values out of a parsed document."""

import logging
from typing import Optional

from seo_tags.document import Document
from seo_tags.models import RawTagValues, TagType

logger = logging.getLogger(__name__)


def _meta_name(name: str) -> str:
    return f'meta[name="{name}"]'


def _meta_property(prop: str) -> str:
    return f'meta[property="{prop}"]'


# (selector, attribute) lookups; attribute None means element text
_ATTRIBUTE_RULES: dict[TagType, tuple[str, Optional[str]]] = {
    TagType.TITLE: ("title", None),
    TagType.DESCRIPTION: (_meta_name("description"), "content"),
    TagType.VIEWPORT: (_meta_name("viewport"), "content"),
    TagType.ROBOTS: (_meta_name("robots"), "content"),
    TagType.OG_TITLE: (_meta_property("og:title"), "content"),
    TagType.OG_DESCRIPTION: (_meta_property("og:description"), "content"),
    TagType.OG_IMAGE: (_meta_property("og:image"), "content"),
    TagType.OG_URL: (_meta_property("og:url"), "content"),
    TagType.OG_TYPE: (_meta_property("og:type"), "content"),
    TagType.OG_SITE_NAME: (_meta_property("og:site_name"), "content"),
    TagType.TWITTER_CARD: (_meta_name("twitter:card"), "content"),
    TagType.TWITTER_TITLE: (_meta_name("twitter:title"), "content"),
    TagType.TWITTER_DESCRIPTION: (_meta_name("twitter:description"), "content"),
    TagType.TWITTER_IMAGE: (_meta_name("twitter:image"), "content"),
    TagType.TWITTER_SITE: (_meta_name("twitter:site"), "content"),
    TagType.TWITTER_CREATOR: (_meta_name("twitter:creator"), "content"),
    TagType.CANONICAL: ('link[rel="canonical"]', "href"),
    TagType.OPEN_SEARCH: (
        'link[rel="search"][type="application/opensearchdescription+xml"]',
        "href",
    ),
}

SCHEMA_SELECTOR = 'script[type="application/ld+json"]'
HREFLANG_SELECTOR = 'link[rel="alternate"][hreflang]'


class TagExtractor:
    """Extracts the raw value of every recognized tag type from a document."""

    def extract(self, document: Document, page_url: str) -> RawTagValues:
        """Extract raw tag values.

        Args:
            document: Parsed page
            page_url: URL the document was fetched from

        Returns:
            Mapping of every TagType to its raw value, None when absent.
            Hreflang only reports presence: the number of alternate links
            as a string, or None when there are none.
        """
        values: RawTagValues = {}

        for tag_type, (selector, attribute) in _ATTRIBUTE_RULES.items():
            if attribute is None:
                raw = document.select_text(selector)
                # Whitespace-only text is absent; otherwise it is measured as written
                if raw is not None and not raw.strip():
                    raw = None
            else:
                raw = document.select_attr(selector, attribute)
            values[tag_type] = raw or None

        values[TagType.SCHEMA] = document.select_inner_html(SCHEMA_SELECTOR) or None

        hreflang_count = document.count(HREFLANG_SELECTOR)
        values[TagType.HREFLANG] = str(hreflang_count) if hreflang_count > 0 else None

        present = sum(1 for v in values.values() if v is not None)
        logger.debug(f"Extracted {present}/{len(values)} tags from {page_url}")

        return values
