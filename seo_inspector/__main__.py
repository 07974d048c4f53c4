"""Run the HTTP API: python -m seo_inspector [--host HOST] [--port PORT]"""

import argparse

from .config import Settings
from .server import serve


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="seo_inspector", description="Single-page SEO analysis API"
    )
    parser.add_argument("--host", help="bind address (default: SEO_INSPECTOR_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="port (default: SEO_INSPECTOR_PORT or 8000)")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    overrides = {k: v for k, v in (("host", args.host), ("port", args.port)) if v is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)
    serve(settings)


if __name__ == "__main__":
    main()
