"""
Mobyt Exporter - FastAPI Application
Serves the landing page and runs one collection cycle per scrape.
"""
import argparse
import logging
from typing import List, Optional, Tuple

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, Response

from mobyt_exporter import __version__
from mobyt_exporter.collector import MobytCollector
from mobyt_exporter.config import (
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_METRICS_PATH,
    AppSettings,
    get_settings,
)
from mobyt_exporter.models.schemas import HealthResponse
from mobyt_exporter.observability.metrics import get_content_type, render_snapshot
from mobyt_exporter.services.mobyt_client import MobytClient

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

LANDING_PAGE = """<html>
<head><title>Mobyt Exporter</title></head>
<body>
<h1>Mobyt Exporter</h1>
<p><a href='{metrics_path}'>Metrics</a></p>
</body>
</html>"""


def create_app(
    settings: AppSettings,
    metrics_path: str = DEFAULT_METRICS_PATH,
    client: Optional[MobytClient] = None,
) -> FastAPI:
    """
    Build the exporter app.

    The MobytClient is created once here and shared by every scrape.
    Scrape handlers are sync routes, so concurrent scrapes run in the
    threadpool with independent cycles.
    """
    missing = settings.missing_settings()
    if missing:
        logger.error(f"Missing configuration: {', '.join(missing)}; every scrape will report mobyt_up 0")
    logger.info(f"Using connection endpoint: {settings.endpoint}")

    if client is None:
        client = MobytClient(settings.endpoint)
    collector = MobytCollector(
        client,
        username=settings.username,
        password=settings.password,
        tz_name=settings.timezone,
    )

    app = FastAPI(
        title="Mobyt Exporter",
        version=__version__,
        description="Prometheus exporter for the Mobyt SMS gateway",
        docs_url=None,
        redoc_url=None,
    )
    app.state.collector = collector

    @app.on_event("shutdown")
    def shutdown_event():
        client.close()

    @app.get(metrics_path, include_in_schema=False)
    def get_metrics():
        """Run one collection cycle and render it for Prometheus"""
        snapshot = app.state.collector.collect()
        return Response(content=render_snapshot(snapshot), media_type=get_content_type())

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health() -> HealthResponse:
        """Liveness only; the vendor is not contacted"""
        return HealthResponse(
            status="ok",
            version=__version__,
            endpoint_configured=bool(settings.endpoint),
        )

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def landing_page():
        return HTMLResponse(LANDING_PAGE.format(metrics_path=metrics_path))

    return app


# =============================================================================
# Main Entry Point
# =============================================================================

def parse_listen_address(address: str) -> Tuple[str, int]:
    """
    Split "[host]:port" into (host, port).
    An empty host binds every interface; IPv6 hosts may be bracketed.
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"Invalid listen address: {address!r}")
    host = host.strip("[]") or "0.0.0.0"
    return host, int(port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Prometheus exporter for the Mobyt SMS gateway")
    parser.add_argument("--web.listen-address", dest="listen_address", default=DEFAULT_LISTEN_ADDRESS,
                        help="Address to listen on for telemetry")
    parser.add_argument("--web.telemetry-path", dest="metrics_path", default=DEFAULT_METRICS_PATH,
                        help="Path under which to expose metrics")
    parser.add_argument("--config.file-path", dest="config_file", default="",
                        help="Path to environment file")
    return parser


def main(argv: Optional[List[str]] = None):
    import uvicorn

    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        host, port = parse_listen_address(args.listen_address)
    except ValueError as e:
        parser.error(str(e))

    settings = get_settings(args.config_file or None)
    logging.getLogger().setLevel(settings.log_level)

    app = create_app(settings, metrics_path=args.metrics_path)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
