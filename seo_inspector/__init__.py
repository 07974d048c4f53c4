"""
seo_inspector — heuristic SEO report for a single web page.

Usage:
    from seo_inspector import analyze, SEOAnalyzer

    # Direct HTML analysis (no network)
    report = analyze(html, "https://example.com/")

    # Fetch then analyze
    report = SEOAnalyzer().analyze_url("https://example.com/")
    print(report.seo_score, [i.title for i in report.critical_issues])
"""

from .analysis import AnalysisReport, Finding, SEOAnalyzer, analyze
from .config import Settings
from .errors import (
    FetchError,
    FetchErrorKind,
    InvalidURLError,
    ParseError,
    SEOInspectorError,
)
from .fetcher import PageFetcher, fetch_page
from .service import AnalysisService, validate_url
from .storage import ReportStore, StoredReport

__version__ = "0.1.0"

__all__ = [
    "analyze",
    "SEOAnalyzer",
    "AnalysisReport",
    "Finding",
    "fetch_page",
    "PageFetcher",
    "ReportStore",
    "StoredReport",
    "AnalysisService",
    "validate_url",
    "Settings",
    "SEOInspectorError",
    "FetchError",
    "FetchErrorKind",
    "ParseError",
    "InvalidURLError",
]
