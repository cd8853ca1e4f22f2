"""FastAPI Application Factory."""

from __future__ import annotations

import logging
import sys

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from resto_radar.api.data import router as data_router
from resto_radar.api.sessions import router as sessions_router
from resto_radar.config import Settings
from resto_radar.infrastructure.cache.session_store import SessionStore

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool = False) -> None:
    """Strukturiertes Logging mit Zeitstempel, Level und Modul-Name."""
    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    root = logging.getLogger("resto_radar")
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
        root.addHandler(handler)
    # Verhindert doppelte Log-Eintraege bei uvicorn
    root.propagate = False


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Erstellt und konfiguriert die FastAPI-Anwendung.

    `transport` wird an alle Daten-Adapter durchgereicht (Tests: MockTransport).
    """
    settings = settings or Settings()
    _configure_logging(settings.debug)

    app = FastAPI(
        title="Restaurant Market Radar API",
        description="Regionale, kuechen- und wettbewerbsbezogene Marktanalysen.",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.transport = transport
    app.state.sessions = SessionStore(settings.max_sessions, settings.session_idle_ttl)

    # CORS (konfigurierbar via CORS_ORIGINS env variable)
    origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(data_router)
    app.include_router(sessions_router)

    # Statische Datendateien (ersetzt den lokalen Static-File-Server)
    if settings.data_dir_available:
        app.mount("/data", StaticFiles(directory=settings.data_dir), name="data")
        logger.info("Serving data directory: %s", settings.data_dir)
    else:
        logger.warning("Data directory not found: %s", settings.data_dir)

    logger.info("Data base URL: %s", settings.data_base_url)
    return app


def run() -> None:
    """Startet den API-Server (Host/Port aus Settings)."""
    import uvicorn

    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
