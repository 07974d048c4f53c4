"""
Finding classification.

Turns the seven fact bundles into three ordered lists: critical issues,
strengths and improvement areas. Strengths and improvements come from
declarative rule tables; each rule fires independently of the others.
"""

from typing import Callable, List, NamedTuple, Optional

from .models import (
    ContentFacts,
    Finding,
    FindingSeverity,
    HeadingFacts,
    ImageFacts,
    LengthStatus,
    LinkFacts,
    MetaTagFacts,
    MobileFacts,
    PerformanceFacts,
    QualityStatus,
    TagStatus,
)


class PageFacts(NamedTuple):
    """All extractor outputs for one page, as seen by the rules."""

    meta_tags: MetaTagFacts
    headings: HeadingFacts
    images: ImageFacts
    links: LinkFacts
    performance: PerformanceFacts
    mobile: MobileFacts
    content: ContentFacts


class Rule(NamedTuple):
    applies: Callable[[PageFacts], bool]
    build: Callable[[PageFacts], Finding]


def _fixed(type_: str, title: str, description: str) -> Callable[[PageFacts], Finding]:
    finding = Finding(type=type_, title=title, description=description)
    return lambda facts: finding


# ─── Critical Issues ──────────────────────────────────────────────────


def identify_critical_issues(facts: PageFacts) -> List[Finding]:
    issues: List[Finding] = []
    for check in (
        _check_missing_title,
        _check_missing_description,
        _check_h1_count,
        _check_images_missing_alt,
        _check_performance,
    ):
        issue = check(facts)
        if issue:
            issues.append(issue)
    return issues


def _check_missing_title(facts: PageFacts) -> Optional[Finding]:
    if facts.meta_tags.title.content:
        return None
    return Finding(
        type="meta",
        severity=FindingSeverity.CRITICAL,
        title="Missing title tag",
        description="The title tag is essential for search engines to understand page content.",
    )


def _check_missing_description(facts: PageFacts) -> Optional[Finding]:
    if facts.meta_tags.description.content:
        return None
    return Finding(
        type="meta",
        severity=FindingSeverity.CRITICAL,
        title="Missing meta description",
        description=(
            "The meta description helps search engines understand your page "
            "and can improve click-through rates."
        ),
    )


def _check_h1_count(facts: PageFacts) -> Optional[Finding]:
    h1_count = facts.headings.analysis.h1_count
    if h1_count == 0:
        return Finding(
            type="heading",
            severity=FindingSeverity.CRITICAL,
            title="Missing H1 heading",
            description="H1 is a critical element for SEO and should represent the main topic of your page.",
        )
    if h1_count > 1:
        return Finding(
            type="heading",
            severity=FindingSeverity.WARNING,
            title="Multiple H1 headings",
            description="Pages should only have one H1 heading to clearly indicate the main topic.",
        )
    return None


def _check_images_missing_alt(facts: PageFacts) -> Optional[Finding]:
    missing = facts.images.analysis.missing_alt_count
    if missing <= 0:
        return None
    return Finding(
        type="image",
        severity=FindingSeverity.CRITICAL,
        title=f"Missing alt text on {missing} images",
        description="Alt text is essential for accessibility and image SEO.",
    )


def _check_performance(facts: PageFacts) -> Optional[Finding]:
    performance = facts.performance
    if performance.score < 50:
        return Finding(
            type="performance",
            severity=FindingSeverity.CRITICAL,
            title="Slow page performance",
            description=(
                "Page performance is poor, which can negatively impact user "
                "experience and SEO."
            ),
        )
    if performance.metrics.estimated_load_time_value > 3:
        return Finding(
            type="performance",
            severity=FindingSeverity.WARNING,
            title="Slow loading resources",
            description=(
                f"Page takes approximately {performance.metrics.estimated_load_time} "
                "to load, which may affect user experience."
            ),
        )
    return None


# ─── Strengths ────────────────────────────────────────────────────────


def _good_title_only(facts: PageFacts) -> bool:
    return facts.meta_tags.score < 80 and facts.meta_tags.title.status == LengthStatus.GOOD


STRENGTH_RULES: List[Rule] = [
    Rule(
        lambda f: f.meta_tags.score >= 80,
        _fixed("meta", "Good meta tag implementation", "Essential meta tags are well-implemented."),
    ),
    Rule(
        _good_title_only,
        _fixed("meta", "Proper title tag", "The title tag is well-formatted and of optimal length."),
    ),
    Rule(
        lambda f: f.headings.analysis.has_proper_h1 and f.headings.analysis.has_logical_structure,
        _fixed(
            "heading",
            "Proper heading structure",
            "The page has a single H1 and a logical heading hierarchy.",
        ),
    ),
    Rule(
        lambda f: f.images.analysis.alt_text_percentage >= 90,
        _fixed(
            "image",
            "Proper image alt text",
            "Most images have descriptive alt text, which is great for accessibility and SEO.",
        ),
    ),
    Rule(
        lambda f: f.links.analysis.status == QualityStatus.GOOD,
        _fixed(
            "link",
            "Good link structure",
            "Links use descriptive text and external links have proper rel attributes.",
        ),
    ),
    Rule(
        lambda f: f.performance.score >= 80,
        _fixed("performance", "Good page performance", "The page loads quickly and efficiently."),
    ),
    Rule(
        lambda f: f.mobile.score >= 80,
        _fixed("mobile", "Mobile responsive design", "The page is well-optimized for mobile devices."),
    ),
    Rule(
        lambda f: f.content.score >= 80,
        _fixed("content", "High-quality content", "The content is substantial and well-structured."),
    ),
]


# ─── Improvement Areas ────────────────────────────────────────────────


IMPROVEMENT_RULES: List[Rule] = [
    Rule(
        lambda f: not f.meta_tags.open_graph.image.content,
        _fixed("meta", "Add Open Graph image", "Add og:image tag for better social media sharing."),
    ),
    Rule(
        lambda f: f.meta_tags.twitter.card.status == TagStatus.MISSING,
        _fixed(
            "meta",
            "Add Twitter Card tags",
            "Implement Twitter Card meta tags for better Twitter sharing.",
        ),
    ),
    Rule(
        lambda f: f.images.analysis.missing_alt_count > 0,
        lambda f: Finding(
            type="image",
            title="Add missing alt text",
            description=f"Add descriptive alt text to {f.images.analysis.missing_alt_count} images.",
        ),
    ),
    Rule(
        lambda f: f.links.analysis.generic_internal_links > 0,
        lambda f: Finding(
            type="link",
            title="Improve anchor text",
            description=(
                'Replace generic anchor text (like "click here") with descriptive '
                f"text for {f.links.analysis.generic_internal_links} links."
            ),
        ),
    ),
    Rule(
        lambda f: f.performance.score < 80,
        _fixed(
            "performance",
            "Optimize page load speed",
            "Reduce resource size and number to improve page loading time.",
        ),
    ),
    Rule(
        lambda f: f.mobile.score < 80,
        _fixed(
            "mobile",
            "Improve mobile friendliness",
            "Enhance the responsive design for better mobile experience.",
        ),
    ),
    Rule(
        lambda f: f.content.metrics.word_count < 300,
        _fixed(
            "content",
            "Add more content",
            "Increase content length to at least 300 words for better search visibility.",
        ),
    ),
]


def _apply(rules: List[Rule], facts: PageFacts) -> List[Finding]:
    return [rule.build(facts) for rule in rules if rule.applies(facts)]


def identify_strengths(facts: PageFacts) -> List[Finding]:
    return _apply(STRENGTH_RULES, facts)


def identify_improvement_areas(facts: PageFacts) -> List[Finding]:
    return _apply(IMPROVEMENT_RULES, facts)
