"""Recommendation generator: turns findings into grouped action items."""

from typing import Iterable

from seo_tags.constants import (
    ADDITIONAL_RECOMMENDATIONS,
    NO_CRITICAL_PLACEHOLDER,
    NO_IMPROVEMENT_PLACEHOLDER,
    RECOMMENDATION_HEADINGS,
)
from seo_tags.models import Finding, RecommendationGroup, RecommendationKind, TagStatus


def _group(kind: RecommendationKind, items: list[str]) -> RecommendationGroup:
    title, description = RECOMMENDATION_HEADINGS[kind]
    return RecommendationGroup(kind=kind, title=title, description=description, items=tuple(items))


def generate_recommendations(findings: Iterable[Finding]) -> tuple[RecommendationGroup, ...]:
    """Build the critical, improvement and additional groups, in that order.

    Missing tags feed the critical group and tags needing work feed the
    improvement group, each item being the finding's own recommendation or a
    generic fallback. Empty groups get a placeholder item. The additional
    group is a fixed list.
    """
    findings = list(findings)

    critical = [
        f.recommendation or f"Add {f.name}"
        for f in findings
        if f.status == TagStatus.MISSING
    ]
    improvements = [
        f.recommendation or f"Improve {f.name}"
        for f in findings
        if f.status == TagStatus.IMPROVE
    ]

    return (
        _group(RecommendationKind.CRITICAL, critical or [NO_CRITICAL_PLACEHOLDER]),
        _group(RecommendationKind.IMPROVEMENT, improvements or [NO_IMPROVEMENT_PLACEHOLDER]),
        _group(RecommendationKind.ADDITIONAL, list(ADDITIONAL_RECOMMENDATIONS)),
    )
