"""Overall score calculation."""

import math
from typing import Iterable

from seo_tags.constants import MAX_SCORE, STATUS_WEIGHTS
from seo_tags.models import Finding, TagStatus


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_score(findings: Iterable[Finding]) -> int:
    """Map findings to a 0-100 score.

    notApplicable findings are dropped; each remaining finding contributes its
    status weight. Returns 0 when nothing is left to score.
    """
    relevant = [f for f in findings if f.status != TagStatus.NOT_APPLICABLE]
    if not relevant:
        return 0

    total = sum(STATUS_WEIGHTS[f.status] for f in relevant)
    return _round_half_up(total / len(relevant) * MAX_SCORE)
