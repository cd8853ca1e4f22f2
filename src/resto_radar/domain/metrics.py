"""Deterministische Kennzahlen fuer das Markt-Oekosystem.

Reine Funktionen ohne IO.
Die Gewichte sind heuristische Kalibrierungskonstanten.
"""

from __future__ import annotations

import math
import re

from resto_radar.domain.models import (
    CuisineLandscape,
    DifferentiationOpportunity,
    MarketOpportunity,
    MarketOverview,
)

_SATURATION_LEVELS = {
    "low": "Low",
    "medium": "Medium",
    "high": "High",
    "very_high": "Very High",
}

_CUSTOMER_LEVELS = {
    "low": "Basic",
    "medium": "Moderate",
    "high": "Sophisticated",
    "very_high": "Expert",
}


def _round_half_up(value: float) -> int:
    """Kaufmaennisches Runden (2.5 -> 3), nicht Banker's Rounding."""
    return math.floor(value + 0.5)


def _clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def diversity_score(
    overview: MarketOverview | None,
    landscape: CuisineLandscape | None,
) -> int:
    """
    Kuechenvielfalt relativ zur Restaurantanzahl.

    Formula: min(100, cuisine_diversity / max(total_restaurants, 1) * 1000)
             + 5 * len(emerging_cuisines)
    Ergebnis gerundet und auf [0, 100] begrenzt.

    Fehlende cuisine_diversity zaehlt als 0, fehlende oder 0 Restaurants als 1
    (keine Division durch 0).
    """
    cuisine_count = (overview.cuisine_diversity if overview else None) or 0
    total_restaurants = (overview.total_restaurants if overview else None) or 1

    score = min(100.0, cuisine_count / max(total_restaurants, 1) * 1000)

    emerging = landscape.emerging_cuisines if landscape else None
    if emerging:
        score += len(emerging) * 5

    return _clamp(_round_half_up(score))


def saturation_level(competition_intensity: str | None) -> str:
    """Wettbewerbsintensitaet als Anzeige-Label, Default "Medium"."""
    return _SATURATION_LEVELS.get(competition_intensity or "", "Medium")


def opportunity_score(
    opportunities: list[MarketOpportunity] | None,
    overview: MarketOverview | None,
) -> int:
    """
    Marktchancen-Score.

    Basis 50, +10 je Chance, +15 je Chance mit potential == "high",
    +20 bei < 50 Restaurants, +10 bei < 100. Begrenzt auf [0, 100].
    """
    score = 50

    if opportunities:
        score += len(opportunities) * 10
        high_potential = [o for o in opportunities if o.potential == "high"]
        score += len(high_potential) * 15

    total_restaurants = (overview.total_restaurants if overview else None) or 0
    if total_restaurants < 50:
        score += 20
    elif total_restaurants < 100:
        score += 10

    return _clamp(score)


def customer_level(overall_quality: str | None) -> str:
    """Gesamtqualitaet als Kunden-Anspruchsniveau, Default "Moderate"."""
    return _CUSTOMER_LEVELS.get(overall_quality or "", "Moderate")


def market_health(diversity: int, opportunity: int) -> int:
    """Mittelwert aus Vielfalt und Chancen (Radar-Achse "Market Health")."""
    return _round_half_up((diversity + opportunity) / 2)


def differentiation_score(opportunity: DifferentiationOpportunity) -> int:
    """Score einer Differenzierungs-Chance: Basis 60, max. 100."""
    score = 60
    if opportunity.market_demand == "high":
        score += 20
    if opportunity.competitive_advantage == "strong":
        score += 15
    if opportunity.implementation_difficulty == "low":
        score += 5
    return score


def cuisine_label(cuisine: str) -> str:
    """Kuechen-ID als Anzeigetext ("Asian_(Fusion)" -> "Asian Fusion")."""
    return re.sub(r"\s+", " ", re.sub(r"[_()]", " ", cuisine)).strip()
