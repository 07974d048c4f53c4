"""
Runtime settings, read from SEO_INSPECTOR_* environment variables.

Environment variables:
    SEO_INSPECTOR_HOST              - Bind address for the HTTP API (default: 0.0.0.0)
    SEO_INSPECTOR_PORT              - Port for the HTTP API (default: 8000)
    SEO_INSPECTOR_FETCH_TIMEOUT_MS  - Page fetch timeout in ms (default: 10000)
    SEO_INSPECTOR_USER_AGENT        - User-Agent sent when fetching pages
    SEO_INSPECTOR_RECENT_LIMIT      - Reports returned by /api/recent-analyses (default: 5)
    SEO_INSPECTOR_LOG_LEVEL         - Logging level name (default: INFO)
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SEOInspectorBot/1.0)"

ENV_PREFIX = "SEO_INSPECTOR_"


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=0, le=65535)
    fetch_timeout_ms: int = Field(default=10000, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    recent_limit: int = Field(default=5, gt=0)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the process environment (or a given mapping)."""
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        return cls(**values)
