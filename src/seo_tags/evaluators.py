"""Tag evaluators: classify raw tag values into findings.

Each evaluator is a total function ``(raw, context) -> Finding``. An absent
tag (``raw is None``) becomes a ``missing`` finding that proposes the exact
tag to add; present tags are checked against the limits in
``AnalysisThresholds``. Malformed content is classified, never raised.

Evaluators are registered in ``EVALUATORS`` keyed by ``TagType``; adding a
tag type means adding a function and a table entry.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional
from urllib.parse import urljoin, urlparse

from seo_tags.config import AnalysisThresholds, default_thresholds
from seo_tags.models import Finding, RawTagValues, TagStatus, TagType
from seo_tags.utils import truncate_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationContext:
    """Page-level inputs shared by all evaluators."""

    page_url: str
    thresholds: AnalysisThresholds = field(default_factory=lambda: default_thresholds)


Evaluator = Callable[[Optional[str], EvaluationContext], Finding]


@dataclass(frozen=True)
class _TagProfile:
    name: str
    description: str


_PROFILES = {
    TagType.TITLE: _TagProfile("Title Tag", "Defines the page title in search results"),
    TagType.DESCRIPTION: _TagProfile("Meta Description", "Provides a summary shown in search results"),
    TagType.VIEWPORT: _TagProfile("Viewport Meta Tag", "Controls how page displays on mobile devices"),
    TagType.ROBOTS: _TagProfile("Robots Meta Tag", "Controls search engine crawling behavior"),
    TagType.OG_TITLE: _TagProfile("og:title", "Title displayed when shared on Facebook"),
    TagType.OG_DESCRIPTION: _TagProfile("og:description", "Description displayed in social shares"),
    TagType.OG_IMAGE: _TagProfile("og:image", "Image displayed in social shares"),
    TagType.TWITTER_CARD: _TagProfile("twitter:card", "Controls Twitter share display type"),
    TagType.TWITTER_IMAGE: _TagProfile("twitter:image", "Image for Twitter shares"),
    TagType.CANONICAL: _TagProfile("Canonical URL", "Specifies the preferred version of a page"),
    TagType.HREFLANG: _TagProfile("Hreflang Tags", "Indicates language/region variants of the page"),
    TagType.SCHEMA: _TagProfile("Schema.org Markup", "Structured data for rich search results"),
    TagType.OPEN_SEARCH: _TagProfile("Open Search", "Allows browsers to search your site directly"),
}


def _finding(
    tag_type: TagType,
    content: Optional[str],
    status: TagStatus,
    status_text: str,
    best_practices: list[str],
    recommendation: Optional[str] = None,
) -> Finding:
    profile = _PROFILES[tag_type]
    return Finding(
        type=tag_type,
        name=profile.name,
        content=content,
        status=status,
        status_text=status_text,
        description=profile.description,
        best_practices=tuple(best_practices),
        recommendation=recommendation,
    )


def _missing(tag_type: TagType, best_practices: list[str], recommendation: str) -> Finding:
    return _finding(tag_type, None, TagStatus.MISSING, "Missing", best_practices, recommendation)


def _with_length(text: str, length: Optional[int]) -> str:
    return f"{text} (current: {length})" if length is not None else text


# =============================================================================
# Basic tags
# =============================================================================

def _title_practices(length: Optional[int] = None) -> list[str]:
    return [
        _with_length("55-60 characters in length", length),
        "Include primary keyword near the beginning",
        "Unique for each page",
        "Be descriptive and compelling",
    ]


def evaluate_title(raw: Optional[str], context: EvaluationContext) -> Finding:
    if raw is None:
        return _missing(
            TagType.TITLE, _title_practices(),
            "Add a descriptive title tag that includes your primary keyword",
        )

    length = len(raw)
    practices = _title_practices(length)
    if length < context.thresholds.title_min:
        return _finding(
            TagType.TITLE, raw, TagStatus.IMPROVE, "Too Short", practices,
            "Make your title longer and more descriptive (aim for 55-60 characters)",
        )
    if length > context.thresholds.title_max:
        return _finding(
            TagType.TITLE, raw, TagStatus.IMPROVE, "Too Long", practices,
            "Shorten your title to prevent truncation in search results (aim for 55-60 characters)",
        )
    return _finding(TagType.TITLE, raw, TagStatus.OPTIMAL, "Optimal", practices)


def _description_practices(length: Optional[int] = None) -> list[str]:
    return [
        _with_length("120-158 characters in length", length),
        "Include relevant keywords naturally",
        "Provide a compelling reason to click",
        "Accurately summarize page content",
    ]


def evaluate_description(raw: Optional[str], context: EvaluationContext) -> Finding:
    if raw is None:
        return _missing(
            TagType.DESCRIPTION, _description_practices(),
            "Add a meta description that summarizes your page content",
        )

    length = len(raw)
    practices = _description_practices(length)
    if length < context.thresholds.description_min:
        return _finding(
            TagType.DESCRIPTION, raw, TagStatus.IMPROVE, "Too Short", practices,
            "Add more specific details to reach optimal length (120-158 characters)",
        )
    if length > context.thresholds.description_max:
        return _finding(
            TagType.DESCRIPTION, raw, TagStatus.IMPROVE, "Too Long", practices,
            "Shorten your description to prevent truncation in search results (aim for 120-158 characters)",
        )
    return _finding(TagType.DESCRIPTION, raw, TagStatus.OPTIMAL, "Optimal", practices)


VIEWPORT_PRACTICES = [
    "Include width=device-width to match screen width",
    "Set initial-scale=1.0 for proper zoom level",
    "Avoid user-scalable=no as it hurts accessibility",
    "Essential for mobile-friendly pages and SEO",
]


def evaluate_viewport(raw: Optional[str], context: EvaluationContext) -> Finding:
    if raw is None:
        return _missing(
            TagType.VIEWPORT, VIEWPORT_PRACTICES,
            'Add viewport meta tag: <meta name="viewport" content="width=device-width, initial-scale=1.0">',
        )

    # Directive names and values are case-insensitive; spacing around '=' is allowed
    normalized = raw.lower().replace(" ", "")
    has_device_width = "width=device-width" in normalized
    has_initial_scale = "initial-scale=1" in normalized

    if not has_device_width or not has_initial_scale:
        return _finding(
            TagType.VIEWPORT, raw, TagStatus.IMPROVE, "Incomplete", VIEWPORT_PRACTICES,
            'Use complete viewport tag: <meta name="viewport" content="width=device-width, initial-scale=1.0">',
        )
    if "user-scalable=no" in normalized:
        return _finding(
            TagType.VIEWPORT, raw, TagStatus.IMPROVE, "Accessibility Issue", VIEWPORT_PRACTICES,
            "Remove user-scalable=no to improve accessibility for users who need to zoom",
        )
    return _finding(TagType.VIEWPORT, raw, TagStatus.OPTIMAL, "Optimal", VIEWPORT_PRACTICES)


ROBOTS_PRACTICES = [
    "Use index,follow for most public pages",
    "Use noindex for duplicate or low-value pages",
    "Use nofollow for untrusted content",
    "Consider using max-snippet and other directives",
]


def evaluate_robots(raw: Optional[str], context: EvaluationContext) -> Finding:
    if raw is None:
        return _missing(
            TagType.ROBOTS, ROBOTS_PRACTICES,
            'Add <meta name="robots" content="index, follow"> for most public pages',
        )

    if "noindex" in raw.lower():
        return _finding(
            TagType.ROBOTS, raw, TagStatus.IMPROVE, "Blocking Indexing", ROBOTS_PRACTICES,
            "This page is set to not be indexed. If this is a public page, change to 'index, follow'",
        )
    return _finding(TagType.ROBOTS, raw, TagStatus.OPTIMAL, "Optimal", ROBOTS_PRACTICES)


# =============================================================================
# Social media tags
# =============================================================================

def _og_title_practices(length: Optional[int] = None) -> list[str]:
    return [
        _with_length("Keep under 60 characters", length),
        "Be specific and engaging",
        "Include branding if relevant",
        "Should match or be similar to page title",
    ]


def evaluate_og_title(raw: Optional[str], context: EvaluationContext) -> Finding:
    if raw is None:
        return _missing(
            TagType.OG_TITLE, _og_title_practices(),
            'Add <meta property="og:title" content="Your Page Title"> for better social sharing',
        )

    length = len(raw)
    practices = _og_title_practices(length)
    if length > context.thresholds.og_title_max:
        return _finding(
            TagType.OG_TITLE, raw, TagStatus.IMPROVE, "Too Long", practices,
            "Shorten your og:title to under 60 characters for optimal display",
        )
    return _finding(TagType.OG_TITLE, raw, TagStatus.OPTIMAL, "Present", practices)


def _og_description_practices(length: Optional[int] = None) -> list[str]:
    practices = ["Aim for 2-4 sentences (around 200 characters)"]
    if length is not None:
        practices.append(f"Current length: {length} characters")
    practices += [
        "Be compelling and informative",
        "Include a call to action if appropriate",
    ]
    if length is None:
        practices.append("Can be similar to meta description")
    return practices


def evaluate_og_description(raw: Optional[str], context: EvaluationContext) -> Finding:
    if raw is None:
        return _missing(
            TagType.OG_DESCRIPTION, _og_description_practices(),
            'Add <meta property="og:description" content="Your description"> for better social sharing',
        )

    length = len(raw)
    practices = _og_description_practices(length)
    if length < context.thresholds.og_description_min:
        return _finding(
            TagType.OG_DESCRIPTION, raw, TagStatus.IMPROVE, "Too Short", practices,
            "Extend your og:description to be more informative (aim for ~200 characters)",
        )
    return _finding(TagType.OG_DESCRIPTION, raw, TagStatus.OPTIMAL, "Present", practices)


OG_IMAGE_PRACTICES = [
    "Use images at least 1200×630 pixels (ideal ratio 1.91:1)",
    "Keep file size under 8MB",
    "Use PNG, JPEG or GIF format",
    "Include branding and relevant content",
]


def evaluate_og_image(raw: Optional[str], context: EvaluationContext) -> Finding:
    if raw is None:
        return _missing(
            TagType.OG_IMAGE, OG_IMAGE_PRACTICES,
            'Add <meta property="og:image" content="https://yoursite.com/images/social-share.jpg"> '
            'for better visibility',
        )
    return _finding(TagType.OG_IMAGE, raw, TagStatus.OPTIMAL, "Present", OG_IMAGE_PRACTICES)


TWITTER_CARD_PRACTICES = [
    "Use summary_large_image for better visibility",
    "summary is acceptable but less engaging",
    "app card for mobile applications",
    "player card for media content",
]


def evaluate_twitter_card(raw: Optional[str], context: EvaluationContext) -> Finding:
    if raw is None:
        return _missing(
            TagType.TWITTER_CARD, TWITTER_CARD_PRACTICES,
            'Add <meta name="twitter:card" content="summary_large_image"> for better Twitter visibility',
        )

    if raw.strip().lower() == "summary":
        return _finding(
            TagType.TWITTER_CARD, raw, TagStatus.IMPROVE, "Suboptimal", TWITTER_CARD_PRACTICES,
            'Change to <meta name="twitter:card" content="summary_large_image"> for better visibility',
        )
    return _finding(TagType.TWITTER_CARD, raw, TagStatus.OPTIMAL, "Optimal", TWITTER_CARD_PRACTICES)


TWITTER_IMAGE_PRACTICES = [
    "Minimum size of 144x144 pixels",
    "For summary_large_image: 300x157 pixels minimum",
    "Maximum file size of 5MB",
    "Use png, jpg, or gif format",
]


def evaluate_twitter_image(raw: Optional[str], context: EvaluationContext) -> Finding:
    if raw is None:
        return _missing(
            TagType.TWITTER_IMAGE, TWITTER_IMAGE_PRACTICES,
            'Add <meta name="twitter:image" content="https://yoursite.com/images/twitter.jpg"> '
            'for better engagement',
        )
    return _finding(TagType.TWITTER_IMAGE, raw, TagStatus.OPTIMAL, "Present", TWITTER_IMAGE_PRACTICES)


# =============================================================================
# Technical tags
# =============================================================================

CANONICAL_PRACTICES = [
    "Should point to the most authoritative version of the page",
    "Use absolute URLs with protocol (https://)",
    "Should match the current URL for unique pages",
    "Essential for pages with multiple entry points or parameters",
]


def _url_path(url: str) -> str:
    return urlparse(url).path or "/"


def evaluate_canonical(raw: Optional[str], context: EvaluationContext) -> Finding:
    if raw is None:
        return _missing(
            TagType.CANONICAL, CANONICAL_PRACTICES,
            f'Add <link rel="canonical" href="{context.page_url}">',
        )

    try:
        canonical_path = _url_path(urljoin(context.page_url, raw.strip()))
        page_path = _url_path(context.page_url)
    except ValueError:
        return _finding(
            TagType.CANONICAL, raw, TagStatus.IMPROVE, "Invalid URL", CANONICAL_PRACTICES,
            "The canonical href could not be parsed. Use an absolute URL such as "
            f'<link rel="canonical" href="{context.page_url}">',
        )

    if canonical_path != page_path:
        return _finding(
            TagType.CANONICAL, raw, TagStatus.IMPROVE, "Different URL", CANONICAL_PRACTICES,
            "Current canonical URL points to a different page, which may be intentional for duplicate content",
        )
    return _finding(TagType.CANONICAL, raw, TagStatus.OPTIMAL, "Present", CANONICAL_PRACTICES)


HREFLANG_PRACTICES = [
    "Use for pages that target multiple languages or regions",
    "Include self-referencing hreflang tags",
    "Use correct language and region codes (e.g., en-us)",
    "All referenced pages should have reciprocal hreflang tags",
]


def evaluate_hreflang(raw: Optional[str], context: EvaluationContext) -> Finding:
    # Absence is expected on single-language sites
    if raw is None:
        return _finding(
            TagType.HREFLANG, None, TagStatus.NOT_APPLICABLE, "N/A", HREFLANG_PRACTICES,
            "Only needed for multilingual sites with specific regional targeting",
        )
    return _finding(
        TagType.HREFLANG, "Multiple hreflang tags present", TagStatus.OPTIMAL, "Present",
        HREFLANG_PRACTICES,
    )


SCHEMA_PRACTICES = [
    "Use appropriate Schema.org type for your content",
    "Include all required properties for your Schema type",
    "Test with Google's Structured Data Testing Tool",
    "Consider multiple Schema types if appropriate",
]


def evaluate_schema(raw: Optional[str], context: EvaluationContext) -> Finding:
    if raw is None:
        return _missing(
            TagType.SCHEMA, SCHEMA_PRACTICES,
            "Add structured data in JSON-LD format based on your content type",
        )

    display = truncate_text(raw, context.thresholds.schema_display_length)

    try:
        data = json.loads(raw)
    except (ValueError, RecursionError):
        data = None
    if data is None:
        # Unparseable, or a bare JSON null
        return _finding(
            TagType.SCHEMA, display, TagStatus.IMPROVE, "Invalid Format", SCHEMA_PRACTICES,
            "Your Schema.org markup has invalid JSON. Check for syntax errors.",
        )

    if not isinstance(data, dict) or not data.get("@context") or not data.get("@type"):
        return _finding(
            TagType.SCHEMA, display, TagStatus.IMPROVE, "Incomplete", SCHEMA_PRACTICES,
            "Schema.org markup is missing required properties (@context or @type)",
        )

    if len(data) < context.thresholds.schema_min_properties:
        return _finding(
            TagType.SCHEMA, display, TagStatus.IMPROVE, "Basic Only", SCHEMA_PRACTICES,
            "Add more properties to your Schema.org markup for richer search results",
        )
    return _finding(TagType.SCHEMA, display, TagStatus.OPTIMAL, "Present", SCHEMA_PRACTICES)


OPEN_SEARCH_PRACTICES = [
    "Create an XML file with search parameters",
    "Link to it from your HTML",
    "Include a descriptive title for your search",
    "Specify the search URL template with parameters",
]


def evaluate_open_search(raw: Optional[str], context: EvaluationContext) -> Finding:
    if raw is None:
        return _missing(
            TagType.OPEN_SEARCH, OPEN_SEARCH_PRACTICES,
            'Add <link rel="search" type="application/opensearchdescription+xml" '
            'title="Search Your Site" href="/opensearch.xml">',
        )
    return _finding(TagType.OPEN_SEARCH, raw, TagStatus.OPTIMAL, "Present", OPEN_SEARCH_PRACTICES)


# Dispatch table; tag types without an entry are extracted but not scored
EVALUATORS: dict[TagType, Evaluator] = {
    TagType.TITLE: evaluate_title,
    TagType.DESCRIPTION: evaluate_description,
    TagType.VIEWPORT: evaluate_viewport,
    TagType.ROBOTS: evaluate_robots,
    TagType.OG_TITLE: evaluate_og_title,
    TagType.OG_DESCRIPTION: evaluate_og_description,
    TagType.OG_IMAGE: evaluate_og_image,
    TagType.TWITTER_CARD: evaluate_twitter_card,
    TagType.TWITTER_IMAGE: evaluate_twitter_image,
    TagType.CANONICAL: evaluate_canonical,
    TagType.HREFLANG: evaluate_hreflang,
    TagType.SCHEMA: evaluate_schema,
    TagType.OPEN_SEARCH: evaluate_open_search,
}


def evaluate(tag_type: TagType, raw: Optional[str], context: EvaluationContext) -> Finding:
    """Evaluate a single tag through the dispatch table.

    Raises:
        KeyError: If no evaluator is registered for tag_type
    """
    finding = EVALUATORS[tag_type](raw, context)
    logger.debug(f"{tag_type.value}: {finding.status.value} ({finding.status_text})")
    return finding


def evaluate_all(
    raw_values: RawTagValues,
    context: EvaluationContext,
    tag_types: Optional[list[TagType]] = None,
) -> dict[TagType, Finding]:
    """Evaluate every requested tag type (default: all registered ones).

    Missing keys in raw_values are treated as absent tags.
    """
    tag_types = tag_types if tag_types is not None else list(EVALUATORS)
    return {
        tag_type: evaluate(tag_type, raw_values.get(tag_type), context)
        for tag_type in tag_types
    }
