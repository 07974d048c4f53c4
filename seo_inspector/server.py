"""
HTTP API for seo_inspector.

Endpoints:
    POST /api/analyze          — Analyze {"url": ...} (or return its stored report)
    GET  /api/recent-analyses  — Most recent stored reports, newest first
    GET  /health               — Liveness check
"""

import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Optional, Tuple

from pydantic import BaseModel

from .analysis.analyzer import SEOAnalyzer
from .config import Settings
from .errors import InvalidURLError, SEOInspectorError
from .fetcher import PageFetcher
from .service import AnalysisService

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = (
    "Invalid URL format. Please enter a valid URL including http:// or https://."
)


def _to_json(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_to_json(item) for item in data]
    return data


# ─── HTTP Request Handler ─────────────────────────────────────────────


class Handler(BaseHTTPRequestHandler):
    server: "SEOInspectorServer"

    def do_GET(self):
        if self.path == "/health":
            self._respond(200, {"status": "ok"})

        elif self.path == "/api/recent-analyses":
            try:
                reports = self.server.service.recent()
            except Exception as e:
                logger.error(f"Failed to list recent analyses: {e}", exc_info=True)
                self._respond(500, {"message": "Failed to retrieve recent analyses"})
                return
            self._respond(200, reports)

        else:
            self._respond(404, {"message": "not found"})

    def do_POST(self):
        if self.path != "/api/analyze":
            self._respond(404, {"message": "not found"})
            return

        body, ok = self._read_json()
        url = body.get("url") if ok and isinstance(body, dict) else None

        try:
            report = self.server.service.analyze_url(url)
        except InvalidURLError:
            self._respond(400, {"message": INVALID_URL_MESSAGE})
            return
        except SEOInspectorError as e:
            logger.warning(f"Analysis failed for {url}: {e}")
            self._respond(500, {"message": str(e)})
            return
        except Exception as e:
            logger.error(f"Unexpected error analyzing {url}: {e}", exc_info=True)
            self._respond(500, {"message": "An error occurred analyzing the URL"})
            return

        self._respond(200, report)

    def _read_json(self) -> Tuple[Any, bool]:
        try:
            content_length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            content_length = -1
        if content_length < 0:
            return None, False
        raw = self.rfile.read(content_length) if content_length else b""
        if not raw:
            return {}, True
        try:
            return json.loads(raw), True
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None, False

    def _respond(self, code: int, data: Any):
        payload = json.dumps(_to_json(data)).encode()
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        # Route access logs through our logger instead of stderr
        logger.debug(f"{self.address_string()} {format % args}")


class SEOInspectorServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: Tuple[str, int], service: AnalysisService):
        super().__init__(address, Handler)
        self.service = service


def build_service(settings: Settings) -> AnalysisService:
    fetcher = PageFetcher(
        timeout_ms=settings.fetch_timeout_ms,
        user_agent=settings.user_agent,
    )
    return AnalysisService(
        analyzer=SEOAnalyzer(fetcher=fetcher),
        recent_limit=settings.recent_limit,
    )


def create_server(
    settings: Settings, service: Optional[AnalysisService] = None
) -> SEOInspectorServer:
    if service is None:
        service = build_service(settings)
    return SEOInspectorServer((settings.host, settings.port), service)


def serve(settings: Settings):
    logging.basicConfig(
        level=settings.log_level, format="%(asctime)s [%(levelname)s] %(message)s"
    )
    server = create_server(settings)
    host, port = server.server_address[:2]
    logger.info(f"SEO inspector listening on {host}:{port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
