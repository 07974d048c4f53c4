"""Tests for the report store and the analysis service."""

import threading
import time

import pytest

from seo_inspector.analysis.analyzer import SEOAnalyzer, analyze
from seo_inspector.errors import FetchError, FetchErrorKind, InvalidURLError, ParseError
from seo_inspector.service import AnalysisService, validate_url
from seo_inspector.storage import ReportStore

PAGE = "<html><head><title>{title}</title></head><body><h1>{title}</h1></body></html>"


def page_for(url: str) -> str:
    return PAGE.format(title=f"Page at {url}")


class CountingFetcher:
    """Serves a page per URL, counting calls; optional delay to force races."""

    def __init__(self, delay: float = 0.0, fail: bool = False):
        self.delay = delay
        self.fail = fail
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, url):
        with self._lock:
            self.calls.append(url)
        if self.delay:
            time.sleep(self.delay)
        if self.fail:
            raise FetchError(FetchErrorKind.NETWORK, url)
        return page_for(url)


# ---------------------------------------------------------------------------
# ReportStore
# ---------------------------------------------------------------------------


class TestReportStore:
    def test_save_assigns_ids_and_timestamps(self):
        store = ReportStore()
        first = store.save(analyze(page_for("a"), "https://a.example/"))
        second = store.save(analyze(page_for("b"), "https://b.example/"))
        assert (first.id, second.id) == (1, 2)
        assert first.created_at.tzinfo is not None
        assert first.created_at <= second.created_at
        assert first.title == "Page at a"
        assert len(store) == 2

    def test_find_by_url_returns_earliest(self):
        store = ReportStore()
        report = analyze(page_for("a"), "https://a.example/")
        first = store.save(report)
        store.save(report)
        assert store.find_by_url("https://a.example/").id == first.id
        assert store.find_by_url("https://missing.example/") is None

    def test_recent_is_newest_first(self):
        store = ReportStore()
        for i in range(7):
            store.save(analyze(page_for(str(i)), f"https://{i}.example/"))
        recent = store.recent(5)
        assert [r.id for r in recent] == [7, 6, 5, 4, 3]

    def test_recent_on_empty_store(self):
        assert ReportStore().recent(5) == []

    def test_stored_report_serialises_camel_case(self):
        stored = ReportStore().save(analyze(page_for("a"), "https://a.example/"))
        data = stored.model_dump(mode="json", by_alias=True)
        assert data["id"] == 1
        assert "createdAt" in data
        assert "seoScore" in data


# ---------------------------------------------------------------------------
# validate_url
# ---------------------------------------------------------------------------


class TestValidateUrl:
    @pytest.mark.parametrize(
        "url",
        ["https://example.com", "http://example.com:8080/path?q=1", "https://sub.example.co.uk/"],
    )
    def test_accepts(self, url):
        assert validate_url(url) == url

    @pytest.mark.parametrize(
        "url",
        [None, "", "   ", "example.com", "ftp://example.com/", "https://", "http://host:notaport/", 42],
    )
    def test_rejects(self, url):
        with pytest.raises(InvalidURLError):
            validate_url(url)

    def test_invalid_url_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_url("nope")


# ---------------------------------------------------------------------------
# AnalysisService
# ---------------------------------------------------------------------------


class TestAnalysisService:
    def test_analyzes_and_stores(self):
        fetcher = CountingFetcher()
        service = AnalysisService(analyzer=SEOAnalyzer(fetcher=fetcher))
        stored = service.analyze_url("https://a.example/")
        assert stored.id == 1
        assert stored.title == "Page at https://a.example/"
        assert fetcher.calls == ["https://a.example/"]

    def test_second_request_served_from_store(self):
        fetcher = CountingFetcher()
        service = AnalysisService(analyzer=SEOAnalyzer(fetcher=fetcher))
        first = service.analyze_url("https://a.example/")
        second = service.analyze_url("https://a.example/")
        assert first.id == second.id
        assert len(fetcher.calls) == 1

    def test_concurrent_requests_fetch_once(self):
        fetcher = CountingFetcher(delay=0.2)
        service = AnalysisService(analyzer=SEOAnalyzer(fetcher=fetcher))
        results = []
        results_lock = threading.Lock()

        def worker():
            stored = service.analyze_url("https://race.example/")
            with results_lock:
                results.append(stored.id)

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert fetcher.calls == ["https://race.example/"]
        assert results == [1] * 5
        assert len(service.store) == 1

    def test_different_urls_are_analyzed_separately(self):
        fetcher = CountingFetcher()
        service = AnalysisService(analyzer=SEOAnalyzer(fetcher=fetcher))
        service.analyze_url("https://a.example/")
        service.analyze_url("https://b.example/")
        assert len(fetcher.calls) == 2

    def test_fetch_failure_stores_nothing(self):
        service = AnalysisService(analyzer=SEOAnalyzer(fetcher=CountingFetcher(fail=True)))
        with pytest.raises(FetchError):
            service.analyze_url("https://down.example/")
        assert len(service.store) == 0

    def test_parse_failure_stores_nothing(self):
        def fetcher(url):
            raise ParseError(url)

        service = AnalysisService(analyzer=SEOAnalyzer(fetcher=fetcher))
        with pytest.raises(ParseError):
            service.analyze_url("https://broken.example/")
        assert len(service.store) == 0

    def test_empty_body_is_analyzed_and_stored(self):
        service = AnalysisService(analyzer=SEOAnalyzer(fetcher=lambda url: ""))
        stored = service.analyze_url("https://blank.example/")
        assert stored.title == ""
        assert len(service.store) == 1

    def test_url_locks_released_after_analysis(self):
        service = AnalysisService(analyzer=SEOAnalyzer(fetcher=CountingFetcher()))
        for name in ("a", "b", "c"):
            service.analyze_url(f"https://{name}.example/")
        assert service._url_locks == {}

    def test_url_lock_released_after_failure(self):
        service = AnalysisService(analyzer=SEOAnalyzer(fetcher=CountingFetcher(fail=True)))
        with pytest.raises(FetchError):
            service.analyze_url("https://down.example/")
        assert service._url_locks == {}

    def test_invalid_url_never_fetches(self):
        fetcher = CountingFetcher()
        service = AnalysisService(analyzer=SEOAnalyzer(fetcher=fetcher))
        with pytest.raises(InvalidURLError):
            service.analyze_url("not a url")
        assert fetcher.calls == []

    def test_recent_uses_configured_limit(self):
        service = AnalysisService(
            analyzer=SEOAnalyzer(fetcher=CountingFetcher()), recent_limit=2
        )
        for name in ("a", "b", "c"):
            service.analyze_url(f"https://{name}.example/")
        assert [r.url for r in service.recent()] == ["https://c.example/", "https://b.example/"]
        assert len(service.recent(10)) == 3
