"""
Page analysis data models.

Every fact bundle is a frozen pydantic model built once per analysis.
Attributes are snake_case; JSON output uses camelCase aliases
(``model_dump(by_alias=True)``) so reports keep their camelCase wire shape.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel


class _Facts(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TagStatus(str, Enum):
    MISSING = "missing"
    PRESENT = "present"


class LengthStatus(str, Enum):
    MISSING = "missing"
    TOO_SHORT = "too_short"
    GOOD = "good"
    TOO_LONG = "too_long"


class QualityStatus(str, Enum):
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs_improvement"
    POOR = "poor"


class FindingSeverity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"


# ─── Meta Tags ────────────────────────────────────────────────────────


class LengthCheckedTag(_Facts):
    content: str = ""
    length: int = 0
    status: LengthStatus = LengthStatus.MISSING


class PresenceTag(_Facts):
    content: str = ""
    status: TagStatus = TagStatus.MISSING


class OpenGraphTags(_Facts):
    title: PresenceTag = Field(default_factory=PresenceTag)
    description: PresenceTag = Field(default_factory=PresenceTag)
    url: PresenceTag = Field(default_factory=PresenceTag)
    image: PresenceTag = Field(default_factory=PresenceTag)
    type: PresenceTag = Field(default_factory=PresenceTag)


class TwitterTags(_Facts):
    card: PresenceTag = Field(default_factory=PresenceTag)
    title: PresenceTag = Field(default_factory=PresenceTag)
    description: PresenceTag = Field(default_factory=PresenceTag)
    image: PresenceTag = Field(default_factory=PresenceTag)


class MetaTagFacts(_Facts):
    title: LengthCheckedTag = Field(default_factory=LengthCheckedTag)
    description: LengthCheckedTag = Field(default_factory=LengthCheckedTag)
    canonical: PresenceTag = Field(default_factory=PresenceTag)
    viewport: PresenceTag = Field(default_factory=PresenceTag)
    robots: PresenceTag = Field(default_factory=PresenceTag)
    open_graph: OpenGraphTags = Field(default_factory=OpenGraphTags)
    twitter: TwitterTags = Field(default_factory=TwitterTags)
    score: int = 0


# ─── Headings ─────────────────────────────────────────────────────────


class HeadingEntry(_Facts):
    text: str = ""
    count: int = 1


class HeadingAnalysis(_Facts):
    h1_count: int = 0
    has_proper_h1: bool = False
    has_logical_structure: bool = False
    status: QualityStatus = QualityStatus.POOR


class HeadingFacts(_Facts):
    headings: Dict[str, List[HeadingEntry]] = Field(default_factory=dict)
    analysis: HeadingAnalysis = Field(default_factory=HeadingAnalysis)


# ─── Images ───────────────────────────────────────────────────────────


class ImageEntry(_Facts):
    src: str = ""
    alt: str = ""
    has_alt: bool = False
    size: Optional[str] = None


class ImageAnalysis(_Facts):
    total_images: int = 0
    images_with_alt: int = 0
    missing_alt_count: int = 0
    alt_text_percentage: int = 100
    status: QualityStatus = QualityStatus.GOOD


class ImageFacts(_Facts):
    images: List[ImageEntry] = Field(default_factory=list)
    analysis: ImageAnalysis = Field(default_factory=ImageAnalysis)


# ─── Links ────────────────────────────────────────────────────────────


class InternalLink(_Facts):
    text: str = ""
    url: str = ""
    is_generic: bool = False


class ExternalLink(_Facts):
    text: str = ""
    url: str = ""
    has_rel: bool = False


class LinkGroups(_Facts):
    internal: List[InternalLink] = Field(default_factory=list)
    external: List[ExternalLink] = Field(default_factory=list)


class LinkAnalysis(_Facts):
    total_links: int = 0
    internal_links: int = 0
    external_links: int = 0
    generic_internal_links: int = 0
    external_links_without_rel: int = 0
    status: QualityStatus = QualityStatus.POOR


class LinkFacts(_Facts):
    links: LinkGroups = Field(default_factory=LinkGroups)
    analysis: LinkAnalysis = Field(default_factory=LinkAnalysis)


# ─── Performance ──────────────────────────────────────────────────────


class ResourceCounts(_Facts):
    scripts: int = 0
    styles: int = 0
    images: int = 0
    iframes: int = 0
    total: int = 0


class PerformanceMetrics(_Facts):
    estimated_load_time: str = "0.5s"
    estimated_load_time_value: float = 0.5
    first_contentful_paint: str = "0.3s"
    largest_contentful_paint: str = "0.4s"
    # Placeholder; layout shift cannot be estimated from markup.
    cumulative_layout_shift: str = "0.12"


class PerformanceFacts(_Facts):
    resources: ResourceCounts = Field(default_factory=ResourceCounts)
    metrics: PerformanceMetrics = Field(default_factory=PerformanceMetrics)
    score: int = 100


# ─── Mobile ───────────────────────────────────────────────────────────


class MobileFeatures(_Facts):
    has_viewport: bool = False
    has_media_queries: bool = False
    has_responsive_indicators: bool = False


class MobileFacts(_Facts):
    features: MobileFeatures = Field(default_factory=MobileFeatures)
    score: int = 0


# ─── Content ──────────────────────────────────────────────────────────


class ContentMetrics(_Facts):
    word_count: int = 0
    paragraph_count: int = 0
    readability_score: float = 0.0
    avg_words_per_sentence: float = 0.0


class ContentFacts(_Facts):
    metrics: ContentMetrics = Field(default_factory=ContentMetrics)
    score: int = 0


# ─── Findings & Report ────────────────────────────────────────────────


class Finding(_Facts):
    type: str
    title: str
    description: str = ""
    # Only critical issues carry a severity; strengths and improvements don't.
    severity: Optional[FindingSeverity] = None

    @model_serializer(mode="wrap")
    def _drop_empty_severity(self, handler):
        data = handler(self)
        if data.get("severity") is None:
            data.pop("severity", None)
        return data


class AnalysisReport(_Facts):
    url: str
    title: str = ""
    description: str = ""
    seo_score: int = 0
    meta_tags_score: int = 0
    content_score: int = 0
    links_score: int = 0
    performance_score: int = 0
    mobile_score: int = 0
    meta_tags: MetaTagFacts = Field(default_factory=MetaTagFacts)
    headings: HeadingFacts = Field(default_factory=HeadingFacts)
    links: LinkFacts = Field(default_factory=LinkFacts)
    images: ImageFacts = Field(default_factory=ImageFacts)
    performance_metrics: PerformanceFacts = Field(default_factory=PerformanceFacts)
    content_analysis: ContentFacts = Field(default_factory=ContentFacts)
    mobile: MobileFacts = Field(default_factory=MobileFacts)
    critical_issues: List[Finding] = Field(default_factory=list)
    strengths: List[Finding] = Field(default_factory=list)
    improvement_areas: List[Finding] = Field(default_factory=list)
