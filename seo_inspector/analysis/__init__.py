"""
seo_inspector.analysis — single-page SEO analysis pipeline.

Usage:
    from seo_inspector.analysis import analyze, SEOAnalyzer

    # Already-fetched HTML
    report = analyze(html, "https://example.com/")

    # Fetch and analyze
    report = SEOAnalyzer().analyze_url("https://example.com/")
"""

from .analyzer import SEOAnalyzer, analyze
from .checks import (
    analyze_content,
    check_mobile_friendliness,
    estimate_performance,
    extract_headings,
    extract_images,
    extract_links,
    extract_meta_tags,
)
from .document import HtmlDocument
from .findings import (
    PageFacts,
    identify_critical_issues,
    identify_improvement_areas,
    identify_strengths,
)
from .models import (
    AnalysisReport,
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
from .scoring import calculate_overall_score

__all__ = [
    # Main entry points
    "analyze",
    "SEOAnalyzer",
    "HtmlDocument",
    # Extractors
    "extract_meta_tags",
    "extract_headings",
    "extract_images",
    "extract_links",
    "estimate_performance",
    "check_mobile_friendliness",
    "analyze_content",
    # Aggregation & classification
    "calculate_overall_score",
    "PageFacts",
    "identify_critical_issues",
    "identify_strengths",
    "identify_improvement_areas",
    # Enums
    "TagStatus",
    "LengthStatus",
    "QualityStatus",
    "FindingSeverity",
    # Results
    "AnalysisReport",
    "MetaTagFacts",
    "HeadingFacts",
    "ImageFacts",
    "LinkFacts",
    "PerformanceFacts",
    "MobileFacts",
    "ContentFacts",
    "Finding",
]
