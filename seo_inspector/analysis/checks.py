"""
Per-page extractors.

Seven independent checks over one parsed HtmlDocument. Each returns a
frozen fact bundle with its own 0-100 score or qualitative status and
never raises for missing or odd markup.
"""

import re
from typing import Dict, List
from urllib.parse import urljoin, urlparse, urlunparse

from .document import HtmlDocument, text_of
from .models import (
    ContentFacts,
    ContentMetrics,
    ExternalLink,
    HeadingAnalysis,
    HeadingEntry,
    HeadingFacts,
    ImageAnalysis,
    ImageEntry,
    ImageFacts,
    InternalLink,
    LengthCheckedTag,
    LengthStatus,
    LinkAnalysis,
    LinkFacts,
    LinkGroups,
    MetaTagFacts,
    MobileFacts,
    MobileFeatures,
    OpenGraphTags,
    PerformanceFacts,
    PerformanceMetrics,
    PresenceTag,
    QualityStatus,
    ResourceCounts,
    TagStatus,
    TwitterTags,
)
from .scoring import clamp, round_half_up

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

TITLE_LENGTH = (30, 70)
DESCRIPTION_LENGTH = (120, 160)

OPEN_GRAPH_FIELDS = ("title", "description", "url", "image", "type")
TWITTER_FIELDS = ("card", "title", "description", "image")
OPTIMAL_TWITTER_CARDS = ("summary", "summary_large_image")

GENERIC_LINK_PHRASES = (
    "click here",
    "read more",
    "learn more",
    "more info",
    "details",
    "here",
)

_DEFAULT_PORTS = {"http": 80, "https": 443}
_WHITESPACE = re.compile(r"\s+")
_SENTENCE_BREAK = re.compile(r"[.!?]+")


# ─── Meta Tags ────────────────────────────────────────────────────────


def extract_meta_tags(doc: HtmlDocument, page_url: str) -> MetaTagFacts:
    """
    Read title, description, canonical, viewport, robots, Open Graph and
    Twitter Card tags and score them against a 100-point table.

    ``page_url`` is accepted for symmetry with the other extractors; social
    tag values are reported as written.
    """
    title = doc.first_text("//title")
    description = doc.first_attr('//meta[@name="description"]', "content")
    canonical = doc.first_attr('//link[@rel="canonical"]', "href")
    viewport = doc.first_attr('//meta[@name="viewport"]', "content")
    robots = doc.first_attr('//meta[@name="robots"]', "content")

    og = {
        key: doc.first_attr(f'//meta[@property="og:{key}"]', "content")
        for key in OPEN_GRAPH_FIELDS
    }
    twitter = {
        key: doc.first_attr(f'//meta[@name="twitter:{key}"]', "content")
        for key in TWITTER_FIELDS
    }

    score = _meta_tags_score(
        title=title,
        description=description,
        canonical=canonical,
        viewport=viewport,
        og_title=og["title"],
        og_description=og["description"],
        og_image=og["image"],
        twitter_card=twitter["card"],
    )

    return MetaTagFacts(
        title=_length_checked(title, *TITLE_LENGTH),
        description=_length_checked(description, *DESCRIPTION_LENGTH),
        canonical=_presence(canonical),
        viewport=_presence(viewport),
        robots=_presence(robots),
        open_graph=OpenGraphTags(**{k: _presence(v) for k, v in og.items()}),
        twitter=TwitterTags(**{k: _presence(v) for k, v in twitter.items()}),
        score=score,
    )


def _length_checked(value: str, min_len: int, max_len: int) -> LengthCheckedTag:
    length = len(value)
    if not value:
        status = LengthStatus.MISSING
    elif length < min_len:
        status = LengthStatus.TOO_SHORT
    elif length > max_len:
        status = LengthStatus.TOO_LONG
    else:
        status = LengthStatus.GOOD
    return LengthCheckedTag(content=value, length=length, status=status)


def _presence(value: str) -> PresenceTag:
    status = TagStatus.PRESENT if value else TagStatus.MISSING
    return PresenceTag(content=value, status=status)


def _meta_tags_score(
    title: str,
    description: str,
    canonical: str,
    viewport: str,
    og_title: str,
    og_description: str,
    og_image: str,
    twitter_card: str,
) -> int:
    score = 0
    max_score = 100

    # Title and description: 10 for existing, +10 optimal length, +5 otherwise
    for value, (low, high) in ((title, TITLE_LENGTH), (description, DESCRIPTION_LENGTH)):
        if value:
            score += 10
            score += 10 if low <= len(value) <= high else 5

    if canonical:
        score += 10
    if viewport:
        score += 10

    if og_title:
        score += 5
    if og_description:
        score += 5
    if og_image:
        score += 10

    if twitter_card:
        score += 10
        if twitter_card in OPTIMAL_TWITTER_CARDS:
            score += 10

    return round_half_up(score / max_score * 100)


# ─── Headings ─────────────────────────────────────────────────────────


def extract_headings(doc: HtmlDocument) -> HeadingFacts:
    """Collect h1-h6 text per level and judge the outline."""
    headings: Dict[str, List[HeadingEntry]] = {}
    for tag in HEADING_TAGS:
        headings[tag] = [
            HeadingEntry(text=text_of(el).strip()) for el in doc.elements(f"//{tag}")
        ]

    h1_count = len(headings["h1"])
    has_logical_structure = _has_logical_structure(headings)

    return HeadingFacts(
        headings=headings,
        analysis=HeadingAnalysis(
            h1_count=h1_count,
            has_proper_h1=h1_count == 1,
            has_logical_structure=has_logical_structure,
            status=_heading_status(h1_count, has_logical_structure),
        ),
    )


def _has_logical_structure(headings: Dict[str, List[HeadingEntry]]) -> bool:
    """
    Approximate nesting check: exactly one h1, and no h3/h4 without an h2.
    Levels below h4 are not inspected.
    """
    if len(headings["h1"]) != 1:
        return False
    if not headings["h2"] and (headings["h3"] or headings["h4"]):
        return False
    return True


def _heading_status(h1_count: int, has_logical_structure: bool) -> QualityStatus:
    proper_h1 = h1_count == 1
    if proper_h1 and has_logical_structure:
        return QualityStatus.GOOD
    if proper_h1 or has_logical_structure:
        return QualityStatus.NEEDS_IMPROVEMENT
    return QualityStatus.POOR


# ─── Images ───────────────────────────────────────────────────────────


def extract_images(doc: HtmlDocument, page_url: str) -> ImageFacts:
    """List every <img> with its resolved src and alt-text coverage."""
    images: List[ImageEntry] = []
    for img in doc.elements("//img"):
        src = img.get("src") or ""
        alt = img.get("alt") or ""
        images.append(
            ImageEntry(
                src=resolve_url(page_url, src),
                alt=alt,
                has_alt=len(alt) > 0,
                size=None,
            )
        )

    total = len(images)
    with_alt = sum(1 for img in images if img.has_alt)
    missing = total - with_alt
    percentage = round_half_up(with_alt / total * 100) if total else 100

    return ImageFacts(
        images=images,
        analysis=ImageAnalysis(
            total_images=total,
            images_with_alt=with_alt,
            missing_alt_count=missing,
            alt_text_percentage=percentage,
            status=_image_status(total, missing),
        ),
    )


def _image_status(total: int, missing: int) -> QualityStatus:
    if total == 0 or missing == 0:
        return QualityStatus.GOOD
    if missing / total < 0.2:
        return QualityStatus.NEEDS_IMPROVEMENT
    return QualityStatus.POOR


# ─── Links ────────────────────────────────────────────────────────────


def extract_links(doc: HtmlDocument, page_url: str) -> LinkFacts:
    """
    Split anchors into internal and external links.

    A link is internal when its resolved URL starts with the page's origin
    string. This is a prefix test, so ``https://example.com.evil.net`` counts
    as internal to ``https://example.com``.
    """
    origin = url_origin(page_url)
    internal: List[InternalLink] = []
    external: List[ExternalLink] = []

    for a in doc.elements("//a"):
        href = a.get("href") or ""
        text = text_of(a).strip()
        rel = a.get("rel") or ""

        if not href or href.startswith("javascript:") or href == "#":
            continue

        try:
            full_url = resolve_url(page_url, href)
        except ValueError:
            continue

        if full_url.startswith(origin):
            internal.append(
                InternalLink(text=text, url=full_url, is_generic=is_generic_link_text(text))
            )
        else:
            external.append(
                ExternalLink(
                    text=text,
                    url=full_url,
                    has_rel="noopener" in rel or "noreferrer" in rel,
                )
            )

    generic_internal = sum(1 for link in internal if link.is_generic)
    external_without_rel = sum(1 for link in external if not link.has_rel)

    return LinkFacts(
        links=LinkGroups(internal=internal, external=external),
        analysis=LinkAnalysis(
            total_links=len(internal) + len(external),
            internal_links=len(internal),
            external_links=len(external),
            generic_internal_links=generic_internal,
            external_links_without_rel=external_without_rel,
            status=_link_status(
                len(internal), generic_internal, len(external), external_without_rel
            ),
        ),
    )


def resolve_url(page_url: str, ref: str) -> str:
    """
    Absolute form of an href or src found on the page.

    Refs starting with "http" are kept as written. Anything else resolves
    against the page URL with its scheme and host lowercased, so relative
    links share the page origin as returned by url_origin.
    """
    if ref.startswith("http"):
        return ref
    parsed = urlparse(page_url)
    if not parsed.scheme or not parsed.hostname:
        return urljoin(page_url, ref)
    base = url_origin(page_url) + urlunparse(
        ("", "", parsed.path or "/", parsed.params, parsed.query, "")
    )
    return urljoin(base, ref)


def url_origin(url: str) -> str:
    """scheme://host[:port], lowercased, default port omitted."""
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    origin = f"{scheme}://{(parsed.hostname or '').lower()}"
    try:
        port = parsed.port
    except ValueError:
        port = None
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        origin += f":{port}"
    return origin


def is_generic_link_text(text: str) -> bool:
    lowered = text.lower()
    return any(phrase in lowered for phrase in GENERIC_LINK_PHRASES)


def _link_status(
    internal_count: int,
    generic_internal_count: int,
    external_count: int,
    external_without_rel_count: int,
) -> QualityStatus:
    if internal_count == 0:
        return QualityStatus.POOR

    generic_ratio = generic_internal_count / internal_count
    missing_rel_ratio = (
        external_without_rel_count / external_count if external_count else 0
    )
    if generic_ratio > 0.2 or missing_rel_ratio > 0.2:
        return QualityStatus.NEEDS_IMPROVEMENT
    return QualityStatus.GOOD


# ─── Performance (estimated from markup) ──────────────────────────────


def estimate_performance(doc: HtmlDocument) -> PerformanceFacts:
    """Guess load behaviour from resource counts; no network timing."""
    scripts = doc.count("//script")
    styles = doc.count('//link[@rel="stylesheet"]')
    images = doc.count("//img")
    iframes = doc.count("//iframe")
    total = scripts + styles + images + iframes

    # 500ms base plus 100ms per resource
    load_time = round(0.5 + total * 0.1, 1)

    return PerformanceFacts(
        resources=ResourceCounts(
            scripts=scripts, styles=styles, images=images, iframes=iframes, total=total
        ),
        metrics=PerformanceMetrics(
            estimated_load_time=f"{_format_seconds(load_time)}s",
            estimated_load_time_value=load_time,
            first_contentful_paint=f"{load_time * 0.6:.1f}s",
            largest_contentful_paint=f"{load_time * 0.8:.1f}s",
        ),
        score=_performance_score(total, load_time, scripts),
    )


def _format_seconds(value: float) -> str:
    text = f"{value:.1f}"
    return text[:-2] if text.endswith(".0") else text


def _performance_score(total: int, load_time: float, scripts: int) -> int:
    score = 100

    if total > 50:
        score -= 30
    elif total > 30:
        score -= 20
    elif total > 15:
        score -= 10

    if load_time > 3:
        score -= 30
    elif load_time > 2:
        score -= 15
    elif load_time > 1:
        score -= 5

    if scripts > 15:
        score -= 15
    elif scripts > 10:
        score -= 10
    elif scripts > 5:
        score -= 5

    return int(clamp(score))


# ─── Mobile ───────────────────────────────────────────────────────────


def check_mobile_friendliness(doc: HtmlDocument) -> MobileFacts:
    """
    Look for a viewport tag, inline @media rules and "responsive" classes.

    Linked stylesheets are not fetched, so media queries there are missed.
    """
    has_viewport = doc.exists('//meta[@name="viewport"]')
    has_media_queries = "@media" in doc.joined_text("//style")
    html_class = doc.root_attr("class")
    body = doc.body()
    body_class = (body.get("class") or "") if body is not None else ""
    has_responsive = "responsive" in html_class or "responsive" in body_class

    return MobileFacts(
        features=MobileFeatures(
            has_viewport=has_viewport,
            has_media_queries=has_media_queries,
            has_responsive_indicators=has_responsive,
        ),
        score=_mobile_score(has_viewport, has_media_queries, has_responsive),
    )


def _mobile_score(has_viewport: bool, has_media_queries: bool, has_responsive: bool) -> int:
    score = 0
    if has_viewport:
        score += 50
    if has_media_queries:
        score += 25
    if has_responsive:
        score += 25
    # Viewport alone still earns partial credit. Only fires when both
    # other signals are absent, so the total tops out at 100.
    if has_viewport and not has_media_queries and not has_responsive:
        score += 20
    return score


# ─── Content ──────────────────────────────────────────────────────────


def analyze_content(doc: HtmlDocument) -> ContentFacts:
    """Word/paragraph counts and a sentence-length readability estimate."""
    body = doc.body()
    raw_text = text_of(body) if body is not None else ""
    text = _WHITESPACE.sub(" ", raw_text).strip()

    word_count = len(text.split())
    paragraph_count = doc.count("//p")
    sentence_count = len(_SENTENCE_BREAK.split(text)) or 1
    avg_words = word_count / sentence_count

    # Peaks at 15 words per sentence, 3 points off per word either side
    readability = clamp(100 - abs(avg_words - 15) * 3)

    return ContentFacts(
        metrics=ContentMetrics(
            word_count=word_count,
            paragraph_count=paragraph_count,
            readability_score=round(readability, 1),
            avg_words_per_sentence=round(avg_words, 1),
        ),
        score=_content_score(word_count, paragraph_count, readability),
    )


def _content_score(word_count: int, paragraph_count: int, readability: float) -> int:
    score = 0.0

    if word_count > 1000:
        score += 30
    elif word_count > 500:
        score += 20
    elif word_count > 300:
        score += 10

    if paragraph_count > 0 and word_count / paragraph_count < 150:
        score += 20
    elif paragraph_count > 0:
        score += 10

    score += readability * 0.5
    return round_half_up(min(100, score))
