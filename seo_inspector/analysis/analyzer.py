"""
SEOAnalyzer — main orchestrator for single-page analysis.

Parses the page once, runs the seven extractors over the shared document,
then aggregates the scores, classifies findings and assembles the report.
"""

import logging
from typing import Callable, Optional

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
from .models import AnalysisReport
from .scoring import calculate_overall_score, links_proxy_score

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], str]


def collect_facts(doc: HtmlDocument, url: str) -> PageFacts:
    return PageFacts(
        meta_tags=extract_meta_tags(doc, url),
        headings=extract_headings(doc),
        images=extract_images(doc, url),
        links=extract_links(doc, url),
        performance=estimate_performance(doc),
        mobile=check_mobile_friendliness(doc),
        content=analyze_content(doc),
    )


def build_report(url: str, facts: PageFacts) -> AnalysisReport:
    return AnalysisReport(
        url=url,
        title=facts.meta_tags.title.content,
        description=facts.meta_tags.description.content,
        seo_score=calculate_overall_score(*facts),
        meta_tags_score=facts.meta_tags.score,
        content_score=facts.content.score,
        links_score=links_proxy_score(facts.links),
        performance_score=facts.performance.score,
        mobile_score=facts.mobile.score,
        meta_tags=facts.meta_tags,
        headings=facts.headings,
        links=facts.links,
        images=facts.images,
        performance_metrics=facts.performance,
        content_analysis=facts.content,
        mobile=facts.mobile,
        critical_issues=identify_critical_issues(facts),
        strengths=identify_strengths(facts),
        improvement_areas=identify_improvement_areas(facts),
    )


def analyze(html: str, source_url: str) -> AnalysisReport:
    """
    Analyze already-fetched HTML for ``source_url``.

    Pure: identical input gives an identical report. Raises ParseError only
    when no document can be built from ``html``.
    """
    doc = HtmlDocument.parse(html, source_url)
    report = build_report(source_url, collect_facts(doc, source_url))
    logger.info(
        f"Analyzed {source_url}: score={report.seo_score} "
        f"critical={len(report.critical_issues)}"
    )
    return report


class SEOAnalyzer:
    """
    Page analyzer with a pluggable fetcher.

    Usage — raw HTML:
        analyzer = SEOAnalyzer()
        report = analyzer.analyze_html(url, html)

    Usage — fetch then analyze:
        analyzer = SEOAnalyzer(fetcher=PageFetcher(timeout_ms=5000))
        report = analyzer.analyze_url(url)
    """

    def __init__(self, fetcher: Optional[Fetcher] = None):
        if fetcher is None:
            from ..fetcher import PageFetcher

            fetcher = PageFetcher()
        self.fetcher = fetcher

    def analyze_html(self, url: str, html: str) -> AnalysisReport:
        return analyze(html, url)

    def analyze_url(self, url: str) -> AnalysisReport:
        """Fetch ``url`` and analyze it. FetchError propagates unchanged."""
        html = self.fetcher(url)
        return analyze(html, url)
