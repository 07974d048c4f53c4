"""
Overall score aggregation.

Folds the seven per-category results into one weighted 0-100 score.
Headings and links only carry a qualitative status, so each is replaced by
a fixed proxy score before weighting.
"""

import math

from .models import (
    ContentFacts,
    HeadingFacts,
    ImageFacts,
    LinkFacts,
    MetaTagFacts,
    MobileFacts,
    PerformanceFacts,
    QualityStatus,
)

WEIGHTS = {
    "meta_tags": 0.20,
    "headings": 0.10,
    "images": 0.10,
    "links": 0.15,
    "performance": 0.20,
    "mobile": 0.15,
    "content": 0.10,
}

LINK_STATUS_SCORES = {
    QualityStatus.GOOD: 80,
    QualityStatus.NEEDS_IMPROVEMENT: 60,
    QualityStatus.POOR: 40,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (62.5 -> 63)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def headings_proxy_score(headings: HeadingFacts) -> int:
    return 100 if headings.analysis.has_proper_h1 else 50


def links_proxy_score(links: LinkFacts) -> int:
    return LINK_STATUS_SCORES[links.analysis.status]


def calculate_overall_score(
    meta_tags: MetaTagFacts,
    headings: HeadingFacts,
    images: ImageFacts,
    links: LinkFacts,
    performance: PerformanceFacts,
    mobile: MobileFacts,
    content: ContentFacts,
) -> int:
    weighted = (
        meta_tags.score * WEIGHTS["meta_tags"]
        + headings_proxy_score(headings) * WEIGHTS["headings"]
        + images.analysis.alt_text_percentage * WEIGHTS["images"]
        + links_proxy_score(links) * WEIGHTS["links"]
        + performance.score * WEIGHTS["performance"]
        + mobile.score * WEIGHTS["mobile"]
        + content.score * WEIGHTS["content"]
    )
    return round_half_up(clamp(weighted))
