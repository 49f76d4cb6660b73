# src/seo_tags/constants.py
"""Centralized constants for the SEO tag analyzer.

This module contains the fixed tables used across the evaluation engine.
For user-configurable limits, see config.py and AnalysisThresholds.
"""

from seo_tags.models import Category, RecommendationKind, TagStatus, TagType


# =============================================================================
# Category Membership
# =============================================================================

# Ordered tag membership for each report section
CATEGORY_MEMBERS = {
    Category.BASIC: (
        TagType.TITLE,
        TagType.DESCRIPTION,
        TagType.VIEWPORT,
        TagType.ROBOTS,
    ),
    Category.SOCIAL_MEDIA: (
        TagType.OG_TITLE,
        TagType.OG_DESCRIPTION,
        TagType.OG_IMAGE,
        TagType.TWITTER_CARD,
        TagType.TWITTER_IMAGE,
    ),
    Category.TECHNICAL: (
        TagType.CANONICAL,
        TagType.HREFLANG,
        TagType.SCHEMA,
        TagType.OPEN_SEARCH,
    ),
}

# (title, icon) shown for each section
SECTION_HEADINGS = {
    Category.BASIC: ("Basic SEO Tags", "search"),
    Category.SOCIAL_MEDIA: ("Social Media Tags", "share-alt"),
    Category.TECHNICAL: ("Technical SEO Tags", "cogs"),
}

# Section status labels keyed by derived status
SECTION_STATUS_TEXT = {
    TagStatus.MISSING: "Missing Tags",
    TagStatus.IMPROVE: "Needs Improvement",
    TagStatus.OPTIMAL: "Good",
}


# =============================================================================
# Scoring Constants
# =============================================================================

# Contribution of each status to the overall score (notApplicable is excluded)
STATUS_WEIGHTS = {
    TagStatus.OPTIMAL: 1.0,
    TagStatus.GOOD: 0.8,
    TagStatus.IMPROVE: 0.4,
    TagStatus.MISSING: 0.0,
}

MAX_SCORE = 100


# =============================================================================
# Recommendation Constants
# =============================================================================

# (title, description) for each recommendation group
RECOMMENDATION_HEADINGS = {
    RecommendationKind.CRITICAL: (
        "Add Critical Missing Tags",
        "Implement the following missing tags to improve SEO performance:",
    ),
    RecommendationKind.IMPROVEMENT: (
        "Optimize Existing Tags",
        "Improve these tags to enhance visibility:",
    ),
    RecommendationKind.ADDITIONAL: (
        "Additional Considerations",
        "These improvements could further enhance your SEO:",
    ),
}

NO_CRITICAL_PLACEHOLDER = "No critical missing tags found"
NO_IMPROVEMENT_PLACEHOLDER = "All existing tags are well optimized"

# Generic hints, independent of the analysis
ADDITIONAL_RECOMMENDATIONS = (
    "Ensure proper heading structure (H1, H2, H3) throughout the page",
    "Optimize image alt text for better accessibility and SEO",
    "Consider adding breadcrumb navigation for improved user experience",
)


# =============================================================================
# Fetcher Constants
# =============================================================================

# Base for exponential backoff calculation
EXPONENTIAL_BACKOFF_BASE = 2

DEFAULT_ACCEPT_HEADER = (
    "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
)
