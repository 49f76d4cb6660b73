"""Data models for SEO tag analysis."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional


class TagType(str, Enum):
    """Recognized tag types. Values are the wire identifiers."""
    TITLE = "title"
    DESCRIPTION = "description"
    VIEWPORT = "viewport"
    ROBOTS = "robots"
    CANONICAL = "canonical"
    OG_TITLE = "ogTitle"
    OG_DESCRIPTION = "ogDescription"
    OG_IMAGE = "ogImage"
    OG_URL = "ogUrl"
    OG_TYPE = "ogType"
    OG_SITE_NAME = "ogSiteName"
    TWITTER_CARD = "twitterCard"
    TWITTER_TITLE = "twitterTitle"
    TWITTER_DESCRIPTION = "twitterDescription"
    TWITTER_IMAGE = "twitterImage"
    TWITTER_SITE = "twitterSite"
    TWITTER_CREATOR = "twitterCreator"
    SCHEMA = "schema"
    HREFLANG = "hreflang"
    OPEN_SEARCH = "openSearch"


class TagStatus(str, Enum):
    """Classification of a single tag."""
    OPTIMAL = "optimal"
    GOOD = "good"
    IMPROVE = "improve"
    MISSING = "missing"
    NOT_APPLICABLE = "notApplicable"

    @property
    def severity(self) -> Optional[int]:
        """Severity rank: missing > improve > optimal/good.

        notApplicable has no severity and never takes part in comparisons.
        """
        return _SEVERITY.get(self)

    @property
    def is_healthy(self) -> bool:
        return self in (TagStatus.OPTIMAL, TagStatus.GOOD)


_SEVERITY = {
    TagStatus.OPTIMAL: 0,
    TagStatus.GOOD: 0,
    TagStatus.IMPROVE: 1,
    TagStatus.MISSING: 2,
}


def worst_status(statuses: Iterable[TagStatus]) -> Optional[TagStatus]:
    """Return the most severe status, ignoring notApplicable.

    Returns None when no status carries a severity.
    """
    ranked = [s for s in statuses if s.severity is not None]
    if not ranked:
        return None
    return max(ranked, key=lambda s: s.severity)


class Category(str, Enum):
    """Report sections."""
    BASIC = "basic"
    SOCIAL_MEDIA = "socialMedia"
    TECHNICAL = "technical"


class RecommendationKind(str, Enum):
    """Recommendation groups, in report order."""
    CRITICAL = "critical"
    IMPROVEMENT = "improvement"
    ADDITIONAL = "additional"


# Raw values produced by the extractor; None means the tag was absent
RawTagValues = dict[TagType, Optional[str]]


@dataclass(frozen=True)
class Finding:
    """Classified result of evaluating one tag."""

    type: TagType
    name: str
    content: Optional[str]
    status: TagStatus
    status_text: str
    description: str
    best_practices: Optional[tuple[str, ...]] = None
    recommendation: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON wire form."""
        data: dict[str, Any] = {
            "type": self.type.value,
            "name": self.name,
            "content": self.content,
            "status": self.status.value,
            "statusText": self.status_text,
            "description": self.description,
        }
        if self.best_practices is not None:
            data["bestPractices"] = list(self.best_practices)
        if self.recommendation is not None:
            data["recommendation"] = self.recommendation
        return data


@dataclass(frozen=True)
class Section:
    """Findings of one category with a derived status."""

    category: Category
    title: str
    icon: str
    status: TagStatus
    status_text: str
    tags: tuple[Finding, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON wire form."""
        return {
            "category": self.category.value,
            "title": self.title,
            "icon": self.icon,
            "status": self.status.value,
            "statusText": self.status_text,
            "tags": [tag.to_dict() for tag in self.tags],
        }


@dataclass(frozen=True)
class RecommendationGroup:
    """One group of action items."""

    kind: RecommendationKind
    title: str
    description: str
    items: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON wire form."""
        return {
            "type": self.kind.value,
            "title": self.title,
            "description": self.description,
            "items": list(self.items),
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Complete SEO tag report for one page."""

    url: str
    score: int
    tags_by_category: dict[Category, tuple[Finding, ...]] = field(default_factory=dict)
    sections: tuple[Section, ...] = ()
    present_count: int = 0
    improve_count: int = 0
    missing_count: int = 0
    recommendations: tuple[RecommendationGroup, ...] = ()

    @property
    def findings(self) -> list[Finding]:
        """All findings in category order."""
        return [f for tags in self.tags_by_category.values() for f in tags]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON wire form."""
        return {
            "url": self.url,
            "score": self.score,
            "tags": {
                category.value: [tag.to_dict() for tag in tags]
                for category, tags in self.tags_by_category.items()
            },
            "sections": [section.to_dict() for section in self.sections],
            "presentCount": self.present_count,
            "improveCount": self.improve_count,
            "missingCount": self.missing_count,
            "recommendations": [group.to_dict() for group in self.recommendations],
        }


@dataclass(frozen=True)
class RequestRecord:
    """A logged analysis request."""

    id: int
    url: str
    request_date: str  # ISO-8601

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "url": self.url,
            "requestDate": self.request_date,
        }
