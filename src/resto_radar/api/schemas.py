"""Pydantic Request/Response Models fuer die API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from resto_radar.domain.models import DashboardSnapshot, SelectOption

# --- Request ---

class RegionSelection(BaseModel):
    """Region-Auswahl; leerer String = Region abgewaehlt (Reset)."""

    region: str = Field("", max_length=200, description="Region-ID aus dem Data-Index")


class CuisineSelection(BaseModel):
    """Kuechen-Auswahl innerhalb der aktuellen Region."""

    cuisine: str = Field("", max_length=200, description="Kuechen-ID aus dem Data-Index")


# --- Response ---

class IndexResponse(BaseModel):
    """Auswaehlbare Regionen und Kuechen laut Data-Index."""

    regions: list[SelectOption] = []
    cuisines: list[SelectOption] = []


class SessionResponse(BaseModel):
    """Session-ID plus aktueller Dashboard-Zustand."""

    session_id: str
    dashboard: DashboardSnapshot
