"""Reine Funktionen fuer die Insight-Generierung (Region, Kueche+Wettbewerb).

Alle Funktionen sind zustandslos und ohne I/O.
Template-basierte Texte; jedes vorhandene Feld ergibt genau ein Insight,
die Reihenfolge der Pruefungen ist fest.
"""

from __future__ import annotations

from typing import Any

from resto_radar.domain.models import (
    CompetitiveDocument,
    CuisineDocument,
    Insight,
    RegionalDocument,
)

NO_INSIGHTS = Insight(title="", description="No insights available yet")
BASELINE_INSIGHT = Insight(
    title="",
    description=(
        "Actionable business insights will appear as you explore "
        "regions and cuisines"
    ),
)


# ---------------------------------------------------------------------------
# Hilfsfunktionen (Formatierung)
# ---------------------------------------------------------------------------


def _fmt(value: Any, fallback: str = "N/A") -> str:
    """Feldwert als Text, Fallback bei fehlendem Wert (None/leer)."""
    if value is None or value == "":
        return fallback
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value) or fallback
    return str(value)


# ---------------------------------------------------------------------------
# Regionale Insights
# ---------------------------------------------------------------------------


def generate_regional_insights(document: RegionalDocument) -> list[Insight]:
    """Insights fuer eine Region.

    Reihenfolge: Marktueberblick, Wettbewerbsumfeld, Marktchancen,
    Kuechenlandschaft.
    """
    insights: list[Insight] = []

    overview = document.market_overview
    if overview is not None:
        insights.append(Insight(
            title="Regional Market Overview",
            description=(
                f"This region has {_fmt(overview.total_restaurants)} restaurants "
                f"across {_fmt(overview.cuisine_diversity)} different cuisines. "
                f"Average rating is {_fmt(overview.average_rating)} stars "
                f"with {_fmt(overview.total_reviews)} total reviews."
            ),
        ))

    competitive = document.competitive_environment
    if competitive is not None:
        insights.append(Insight(
            title="Business Environment",
            description=(
                f"Market shows {_fmt(competitive.competition_intensity, 'unknown')} "
                f"competition intensity with "
                f"{_fmt(competitive.overall_quality, 'unknown')} overall quality. "
                f"Quality consistency is "
                f"{_fmt(competitive.quality_consistency, 'unknown')} and market "
                f"maturity is {_fmt(competitive.market_maturity, 'unknown')}."
            ),
        ))

    opportunities = document.market_opportunities
    if opportunities:
        high_potential = [o for o in opportunities if o.potential == "high"]
        gaps = ", ".join(_fmt(o.cuisine, "unknown") for o in opportunities[:3])
        insights.append(Insight(
            title="Market Opportunities",
            description=(
                f"{len(opportunities)} market opportunities identified, with "
                f"{len(high_potential)} high-potential opportunities. "
                f"Key gaps include {gaps}."
            ),
        ))

    landscape = document.cuisine_landscape
    if landscape is not None and landscape.dominant_cuisines:
        top = landscape.dominant_cuisines[0]
        emerging = len(landscape.emerging_cuisines or [])
        underrepresented = len(landscape.underrepresented_cuisines or [])
        insights.append(Insight(
            title="Cuisine Landscape",
            description=(
                f"Market is dominated by {_fmt(top.cuisine, 'unknown')} with "
                f"{_fmt(top.restaurant_count)} restaurants. {emerging} emerging "
                f"cuisines and {underrepresented} underrepresented cuisines "
                f"identified."
            ),
        ))

    return insights


# ---------------------------------------------------------------------------
# Kueche + Wettbewerb
# ---------------------------------------------------------------------------


def generate_comprehensive_insights(
    cuisine: CuisineDocument,
    competitive: CompetitiveDocument,
) -> list[Insight]:
    """Insights fuer eine Kueche in einer Region.

    Reihenfolge: Kuechen-Marktueberblick, Marktsaettigung,
    regionaler Kontext der Menue-Optimierung, Top-Empfehlung.
    """
    insights: list[Insight] = []

    overview = cuisine.market_overview
    if overview is not None:
        insights.append(Insight(
            title="Market Analysis",
            description=(
                f"This cuisine has {_fmt(overview.total_restaurants)} restaurants "
                f"with {_fmt(overview.market_penetration, 'unknown')} market "
                f"penetration. Average rating: {_fmt(overview.average_rating)} "
                f"stars across {_fmt(overview.total_reviews)} reviews."
            ),
        ))

    saturation = competitive.market_saturation
    if saturation is not None:
        insights.append(Insight(
            title="Competitive Landscape",
            description=(
                f"Market saturation is {_fmt(saturation.saturation_level, 'unknown')} "
                f"with {_fmt(saturation.restaurant_density)} competitors. "
                f"Entry difficulty: {_fmt(saturation.entry_difficulty, 'unknown')}. "
                f"Average competitor rating: {_fmt(saturation.average_rating)} stars."
            ),
        ))

    menu = competitive.menu_optimization
    if menu is not None and menu.regional_context is not None:
        context = menu.regional_context
        insights.append(Insight(
            title="Market Positioning Strategy",
            description=(
                f"This region shows {_fmt(context.market_segment, 'unknown')} "
                f"market characteristics with "
                f"{_fmt(context.customer_expectations, 'unknown')} customer "
                f"expectations. Competition intensity: "
                f"{_fmt(context.competition_intensity, 'unknown')} restaurants."
            ),
        ))

    if menu is not None and menu.strategic_recommendations:
        top = menu.strategic_recommendations[0]
        insights.append(Insight(
            title="Strategic Recommendation",
            description=(
                f"{_fmt(top.recommendation)}. Rationale: {_fmt(top.rationale)}. "
                f"Priority: {_fmt(top.priority, 'unknown')}."
            ),
        ))

    return insights


def render_insights(insights: list[Insight]) -> list[Insight]:
    """Leere Liste wird zu genau einem Platzhalter-Insight."""
    if not insights:
        return [NO_INSIGHTS.model_copy()]
    return list(insights)
