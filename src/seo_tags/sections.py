"""Section aggregator: groups findings by category and derives section health."""

from typing import Iterable

from seo_tags.constants import CATEGORY_MEMBERS, SECTION_HEADINGS, SECTION_STATUS_TEXT
from seo_tags.models import Category, Finding, Section, TagStatus, TagType, worst_status


def group_by_category(findings: dict[TagType, Finding]) -> dict[Category, tuple[Finding, ...]]:
    """Arrange findings into categories following the static membership table.

    Tag types without a finding are skipped.
    """
    return {
        category: tuple(findings[t] for t in members if t in findings)
        for category, members in CATEGORY_MEMBERS.items()
    }


def section_status(findings: Iterable[Finding]) -> TagStatus:
    """Worst status among the findings; notApplicable ones are ignored.

    A section with nothing to judge counts as optimal.
    """
    worst = worst_status(f.status for f in findings)
    if worst is None or worst.is_healthy:
        return TagStatus.OPTIMAL
    return worst


def build_section(category: Category, findings: tuple[Finding, ...]) -> Section:
    """Build the report section for one category."""
    title, icon = SECTION_HEADINGS[category]
    status = section_status(findings)
    return Section(
        category=category,
        title=title,
        icon=icon,
        status=status,
        status_text=SECTION_STATUS_TEXT[status],
        tags=findings,
    )


def build_sections(tags_by_category: dict[Category, tuple[Finding, ...]]) -> tuple[Section, ...]:
    """Build all sections in category order."""
    return tuple(
        build_section(category, findings)
        for category, findings in tags_by_category.items()
    )
