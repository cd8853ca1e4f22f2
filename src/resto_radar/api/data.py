"""GET-Endpoints fuer Health und Data-Index."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi import APIRouter, HTTPException, Request

from resto_radar.api.schemas import IndexResponse
from resto_radar.config import Settings
from resto_radar.domain.errors import IndexLoadError
from resto_radar.domain.metrics import cuisine_label
from resto_radar.domain.models import SelectOption
from resto_radar.infrastructure.adapters.data_adapter import DataAdapter

router = APIRouter(tags=["Data"])
logger = logging.getLogger(__name__)


def _count_documents(data_dir: Path) -> int:
    return sum(1 for _ in data_dir.rglob("*.json")) if data_dir.is_dir() else 0


@router.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """Service Health Check mit Datenverzeichnis-Status."""
    settings: Settings = request.app.state.settings
    data_dir = Path(settings.data_dir)

    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "data_sources": {
            "data_dir": {
                "available": settings.data_dir_available,
                "path": settings.data_dir,
                "json_documents": _count_documents(data_dir),
            },
            "data_base_url": settings.data_base_url,
        },
        "active_sessions": len(request.app.state.sessions),
    }


@router.get("/api/v1/index", response_model=IndexResponse)
async def data_index(request: Request) -> IndexResponse:
    """Regionen und Kuechen aus einem frisch geladenen Data-Index."""
    settings: Settings = request.app.state.settings
    adapter = DataAdapter(
        settings.data_base_url,
        timeout=settings.request_timeout,
        transport=request.app.state.transport,
    )
    try:
        index = await adapter.load_index()
    except IndexLoadError as e:
        logger.error("Data index unavailable: %s", e)
        raise HTTPException(status_code=503, detail=str(e)) from e

    return IndexResponse(
        regions=[SelectOption(value=r, label=f"{r} (Region)") for r in index.regions],
        cuisines=[SelectOption(value=c, label=cuisine_label(c)) for c in index.cuisines],
    )
