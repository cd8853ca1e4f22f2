"""Gemeinsame Fixtures: Beispiel-Dokumente und ein Fake-Datenserver (httpx.MockTransport)."""

from __future__ import annotations

import asyncio
import copy
from typing import Any

import httpx
import pytest

from resto_radar.config import Settings
from resto_radar.infrastructure.adapters.data_adapter import DataAdapter
from resto_radar.use_cases.dashboard import DashboardState, new_dashboard_state

BASE_URL = "http://testserver/"

DATA_INDEX: dict[str, Any] = {
    "metadata": {"generated_at": "2024-05-01", "version": "2.1"},
    "coverage": {
        "regions": {"top_regions": ["Austin", "Dallas"]},
        "cuisines": {"main_cuisines": ["Mexican", "Thai_(Fusion)"]},
    },
}

REGION_AUSTIN: dict[str, Any] = {
    "metadata": {"region": "Austin"},
    "market_overview": {
        "total_restaurants": 40,
        "cuisine_diversity": 8,
        "average_rating": 4.2,
        "total_reviews": 1200,
    },
}

REGION_DALLAS: dict[str, Any] = {
    "market_overview": {"total_restaurants": 250, "cuisine_diversity": 10},
    "competitive_environment": {
        "competition_intensity": "very_high",
        "overall_quality": "high",
        "quality_consistency": "stable",
        "market_maturity": "mature",
    },
    "cuisine_landscape": {
        "dominant_cuisines": [{"cuisine": "Tex-Mex", "restaurant_count": 60}],
        "emerging_cuisines": ["Korean", "Peruvian"],
        "underrepresented_cuisines": ["Ethiopian"],
    },
    "market_opportunities": [
        {"cuisine": "Korean", "potential": "high"},
        {"cuisine": "Peruvian", "potential": "medium"},
    ],
}

CUISINE_MEXICAN: dict[str, Any] = {
    "market_overview": {
        "total_restaurants": 320,
        "market_penetration": "high",
        "average_rating": 4.1,
        "total_reviews": 15000,
    },
    "popular_dishes": {"popularity": [{"dish": "Tacos", "mentions": 800}]},
    "regional_variations": {
        "Austin": {
            "restaurant_count": 12,
            "average_rating": 4.4,
            "total_reviews": 900,
            "market_maturity": "growing",
            "competition_level": "moderate",
        },
    },
    "national_overview": {
        "total_restaurants": 320,
        "average_rating": 4.1,
        "total_reviews": 15000,
        "regional_presence": 14,
    },
}

COMPETITIVE_AUSTIN_MEXICAN: dict[str, Any] = {
    "metadata": {
        "region": "Austin",
        "cuisine": "Mexican",
        "data_quality": "high",
        "restaurant_count": 12,
    },
    "key_competitors": [
        {
            "name": "Taqueria Uno",
            "rating": 4.6,
            "review_count": 410,
            "market_position": "Leader",
            "key_strengths": ["Authentic recipes", "Fast service"],
            "key_weaknesses": "Limited seating",
        },
        {"name": "Casa Verde", "stars": 4.2, "review_count": 150},
        {"name": "El Patio", "rating": 3.9, "review_count": 80, "market_position": "Niche"},
    ],
    "market_saturation": {
        "saturation_level": "moderate",
        "restaurant_density": 12,
        "entry_difficulty": "medium",
        "average_rating": 4.2,
    },
    "menu_optimization": {
        "regional_context": {
            "market_segment": "premium",
            "customer_expectations": "high",
            "competition_intensity": 12,
        },
        "strategic_recommendations": [
            {
                "recommendation": "Add a regional breakfast menu",
                "rationale": "No competitor serves breakfast",
                "priority": "high",
            },
        ],
    },
    "differentiation_opportunities": [
        {
            "opportunity": "Breakfast tacos",
            "market_demand": "high",
            "competitive_advantage": "strong",
            "implementation_difficulty": "low",
            "region_specific": True,
        },
        {"opportunity": "Vegan menu"},
    ],
}


def default_documents() -> dict[str, Any]:
    return copy.deepcopy({
        "data/data_index.json": DATA_INDEX,
        "data/regions/Austin.json": REGION_AUSTIN,
        "data/regions/Dallas.json": REGION_DALLAS,
        "data/cuisines/Mexican_analysis.json": CUISINE_MEXICAN,
        "data/competitive/Austin_Mexican.json": COMPETITIVE_AUSTIN_MEXICAN,
    })


class FakeDataServer:
    """Liefert Dokumente per Pfad; unbekannte Pfade -> 404.

    - `documents[path]` als str wird unveraendert als Body gesendet (kaputtes JSON).
    - `status_overrides[path]` erzwingt einen HTTP-Status.
    - `gates[path]` (asyncio.Event) haelt die Antwort zurueck bis zum Set.
    """

    def __init__(self, documents: dict[str, Any] | None = None) -> None:
        self.documents = documents if documents is not None else default_documents()
        self.status_overrides: dict[str, int] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.requests: list[httpx.Request] = []

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.lstrip("/")
        gate = self.gates.get(path)
        if gate is not None:
            await gate.wait()
        if path in self.status_overrides:
            return httpx.Response(self.status_overrides[path])
        if path not in self.documents:
            return httpx.Response(404)
        body = self.documents[path]
        if isinstance(body, str):
            return httpx.Response(200, text=body)
        return httpx.Response(200, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls_to(self, path: str) -> int:
        return sum(1 for r in self.requests if r.url.path.lstrip("/") == path)


@pytest.fixture()
def data_server() -> FakeDataServer:
    return FakeDataServer()


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        data_base_url=BASE_URL,
        data_dir=str(tmp_path / "missing-data"),
        _env_file=None,
    )


@pytest.fixture()
def adapter(data_server: FakeDataServer) -> DataAdapter:
    return DataAdapter(BASE_URL, transport=data_server.transport, clock=lambda: 1700000000.0)


@pytest.fixture()
def dashboard(settings: Settings, data_server: FakeDataServer) -> DashboardState:
    return new_dashboard_state(settings, transport=data_server.transport)
