"""Panel-Synchronisation: Dokumente -> Panel-Modelle.

Reine Funktionen. Ob ein Panel Inhalt zeigt, ergibt sich ausschliesslich
aus den gelieferten Datensaetzen (siehe `_Panel.mode`); kein Panel
uebernimmt Zustand aus einer frueheren Auswahl.
"""

from __future__ import annotations

from resto_radar.domain.metrics import (
    customer_level,
    differentiation_score,
    diversity_score,
    opportunity_score,
    saturation_level,
)
from resto_radar.domain.models import (
    CompetitiveDocument,
    CompetitivePanel,
    Competitor,
    CompetitorRecord,
    CuisineDocument,
    CuisinePanel,
    CuisineRecord,
    EcosystemPanel,
    OpportunitiesPanel,
    OpportunityCard,
    RegionalDocument,
)

TOP_N = 5

SOURCE_KEY_COMPETITORS = "key_competitors"
SOURCE_REGIONAL_VARIATIONS = "regional_variations"
SOURCE_NATIONAL_OVERVIEW = "national_overview"


def _join(value: list[str] | str | None, fallback: str = "N/A") -> str:
    if not value:
        return fallback
    if isinstance(value, list):
        return ", ".join(value)
    return value


def _rating(competitor: Competitor) -> float:
    return competitor.rating or competitor.stars or 0.0


# --- Ecosystem ---

def build_ecosystem_panel(document: RegionalDocument) -> EcosystemPanel:
    """Oekosystem-Panel; Inhalt nur mit market_overview oder competitive_environment."""
    if document.market_overview is None and document.competitive_environment is None:
        return EcosystemPanel()

    environment = document.competitive_environment
    return EcosystemPanel(
        diversity_score=diversity_score(
            document.market_overview, document.cuisine_landscape,
        ),
        saturation_level=saturation_level(
            environment.competition_intensity if environment else None,
        ),
        opportunity_score=opportunity_score(
            document.market_opportunities, document.market_overview,
        ),
        customer_level=customer_level(
            environment.overall_quality if environment else None,
        ),
    )


# --- Cuisine ---

def select_cuisine_records(
    cuisine_doc: CuisineDocument,
    competitive_doc: CompetitiveDocument,
    region: str,
    cuisine: str,
) -> tuple[str, list[CuisineRecord]]:
    """
    Datenquelle fuer das Kuechen-Panel in fester Prioritaet waehlen.

    1. key_competitors (Top 5)
    2. Eintrag der aktuellen Region in regional_variations
    3. national_overview
    Sonst: ("", []).
    """
    if competitive_doc.key_competitors:
        records = [
            CuisineRecord(
                name=c.name or "Unknown",
                rating=_rating(c),
                reviews=c.review_count or 0,
                position=c.market_position or "Unknown",
                strengths=_join(c.key_strengths),
            )
            for c in competitive_doc.key_competitors[:TOP_N]
        ]
        return SOURCE_KEY_COMPETITORS, records

    variation = (cuisine_doc.regional_variations or {}).get(region)
    if variation is not None:
        record = CuisineRecord(
            name=f"{cuisine} restaurants in {region}",
            rating=variation.average_rating or 0.0,
            reviews=variation.total_reviews or 0,
            position=variation.market_maturity or "Unknown",
            strengths=(
                f"{variation.restaurant_count or 0} restaurants, "
                f"{variation.competition_level or 'unknown'} competition"
            ),
        )
        return SOURCE_REGIONAL_VARIATIONS, [record]

    national = cuisine_doc.national_overview
    if national is not None:
        record = CuisineRecord(
            name=f"{cuisine} cuisine overview",
            rating=national.average_rating or 0.0,
            reviews=national.total_reviews or 0,
            position="National",
            strengths=(
                f"{national.total_restaurants or 0} restaurants across "
                f"{national.regional_presence or 0} regions"
            ),
        )
        return SOURCE_NATIONAL_OVERVIEW, [record]

    return "", []


def build_cuisine_panel(
    cuisine_doc: CuisineDocument,
    competitive_doc: CompetitiveDocument,
    region: str,
    cuisine: str,
) -> CuisinePanel:
    source, records = select_cuisine_records(cuisine_doc, competitive_doc, region, cuisine)
    if records:
        return CuisinePanel(data_source=source, records=records)

    meta = competitive_doc.metadata
    restaurant_count = (meta.restaurant_count if meta else None) or 0
    national = cuisine_doc.national_overview
    national_total = (national.total_restaurants if national else None) or 0

    if restaurant_count > 0 or national_total > 0:
        return CuisinePanel(
            empty_message=(
                f"Data available but no detailed analysis for {cuisine} in {region}"
            ),
            empty_details=[
                f"Restaurant count: {restaurant_count}",
                f"Data quality: {(meta.data_quality if meta else None) or 'unknown'}",
            ],
        )
    return CuisinePanel(
        empty_message=f"No data available for {cuisine} in {region}",
        empty_details=["Try selecting a different region or cuisine combination"],
    )


# --- Competitive ---

def build_competitive_panel(competitive_doc: CompetitiveDocument) -> CompetitivePanel:
    competitors = [
        CompetitorRecord(
            name=c.name or "Unknown",
            rating=_rating(c),
            reviews=c.review_count or 0,
            strengths=_join(c.key_strengths),
            weaknesses=_join(c.key_weaknesses),
        )
        for c in (competitive_doc.key_competitors or [])[:TOP_N]
    ]
    return CompetitivePanel(competitors=competitors)


# --- Opportunities ---

def build_opportunities_panel(competitive_doc: CompetitiveDocument) -> OpportunitiesPanel:
    cards = [
        OpportunityCard(
            title=o.opportunity or "Unnamed opportunity",
            score=differentiation_score(o),
            market_demand=o.market_demand or "Medium",
            implementation=o.implementation_difficulty or "Moderate",
            advantage=o.competitive_advantage or "Moderate",
            region_specific=bool(o.region_specific),
        )
        for o in (competitive_doc.differentiation_opportunities or [])[:TOP_N]
    ]
    return OpportunitiesPanel(opportunities=cards)


# --- Fehlerzustand ---

def error_panels(message: str) -> tuple[CuisinePanel, CompetitivePanel, OpportunitiesPanel]:
    """Die drei kuechenabhaengigen Panels im expliziten Fehlerzustand."""
    text = f"Error loading data: {message}"
    return (
        CuisinePanel(error=text, empty_message=text),
        CompetitivePanel(error=text, empty_message=text),
        OpportunitiesPanel(error=text, empty_message=text),
    )
