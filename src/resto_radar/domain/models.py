"""Domain-Modelle fuer das Restaurant-Markt-Dashboard.

Zwei Gruppen:
- Dokument-Modelle: die vorberechneten JSON-Dateien (Data-Index, Region,
  Kueche, Wettbewerb). Jedes Feld ist optional, unbekannte Felder bleiben
  erhalten. Ein Feld mit falschem Typ faellt auf seinen Default zurueck
  (meist None), statt das ganze Dokument zu verwerfen. Fallback-Logik liegt
  in metrics/panels/insights, nicht hier.
- Anzeige-Modelle: Panels, Selektoren, Status und Snapshot. Der Panel-Modus
  (empty/content) wird immer aus den Daten abgeleitet, nie gespeichert.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    computed_field,
    field_validator,
)

logger = logging.getLogger(__name__)


class _Document(BaseModel):
    """Tolerantes Basismodell fuer ungetypte JSON-Dokumente."""

    model_config = ConfigDict(extra="allow")

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_malformed(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except ValidationError as e:
            name = info.field_name or ""
            logger.warning(
                "Ignoring malformed field %s.%s: %s",
                cls.__name__, name, e.errors()[0]["msg"],
            )
            return cls.model_fields[name].get_default(call_default_factory=True)


# --- Data-Index ---

class RegionCoverage(_Document):
    top_regions: list[str] | None = None


class CuisineCoverage(_Document):
    main_cuisines: list[str] | None = None


class Coverage(_Document):
    regions: RegionCoverage | None = None
    cuisines: CuisineCoverage | None = None


class DataIndex(_Document):
    """Manifest aller auswaehlbaren Regionen und Kuechen."""

    metadata: dict[str, Any] = {}
    coverage: Coverage | None = None

    @property
    def regions(self) -> list[str]:
        if self.coverage is None or self.coverage.regions is None:
            return []
        return list(self.coverage.regions.top_regions or [])

    @property
    def cuisines(self) -> list[str]:
        if self.coverage is None or self.coverage.cuisines is None:
            return []
        return list(self.coverage.cuisines.main_cuisines or [])


# --- Regional-Dokument ---

class MarketOverview(_Document):
    total_restaurants: int | None = None
    cuisine_diversity: int | None = None
    average_rating: float | None = None
    total_reviews: int | None = None


class CompetitiveEnvironment(_Document):
    competition_intensity: str | None = None
    overall_quality: str | None = None
    quality_consistency: str | None = None
    market_maturity: str | None = None


class DominantCuisine(_Document):
    cuisine: str | None = None
    restaurant_count: int | None = None


class CuisineLandscape(_Document):
    dominant_cuisines: list[DominantCuisine] | None = None
    emerging_cuisines: list[Any] | None = None
    underrepresented_cuisines: list[Any] | None = None


class MarketOpportunity(_Document):
    cuisine: str | None = None
    potential: str | None = None


class RegionalDocument(_Document):
    metadata: dict[str, Any] | None = None
    market_overview: MarketOverview | None = None
    competitive_environment: CompetitiveEnvironment | None = None
    cuisine_landscape: CuisineLandscape | None = None
    market_opportunities: list[MarketOpportunity] | None = None


# --- Cuisine-Dokument ---

class CuisineMarketOverview(_Document):
    total_restaurants: int | None = None
    market_penetration: str | float | None = None
    average_rating: float | None = None
    total_reviews: int | None = None


class PopularDishes(_Document):
    popularity: list[Any] | None = None


class RegionalVariation(_Document):
    restaurant_count: int | None = None
    average_rating: float | None = None
    total_reviews: int | None = None
    market_maturity: str | None = None
    competition_level: str | None = None


class NationalOverview(_Document):
    total_restaurants: int | None = None
    average_rating: float | None = None
    total_reviews: int | None = None
    regional_presence: int | None = None


class CuisineDocument(_Document):
    market_overview: CuisineMarketOverview | None = None
    popular_dishes: PopularDishes | None = None
    regional_variations: dict[str, RegionalVariation] | None = None
    national_overview: NationalOverview | None = None


# --- Competitive-Dokument ---

class CompetitiveMetadata(_Document):
    region: str | None = None
    cuisine: str | None = None
    data_quality: str | None = None
    restaurant_count: int | None = None


class Competitor(_Document):
    name: str | None = None
    rating: float | None = None
    stars: float | None = None
    review_count: int | None = None
    market_position: str | None = None
    key_strengths: list[str] | str | None = None
    key_weaknesses: list[str] | str | None = None


class MarketSaturation(_Document):
    saturation_level: str | None = None
    restaurant_density: Any = None
    entry_difficulty: str | None = None
    average_rating: float | None = None


class RegionalContext(_Document):
    market_segment: str | None = None
    customer_expectations: str | None = None
    competition_intensity: Any = None


class StrategicRecommendation(_Document):
    recommendation: str | None = None
    rationale: str | None = None
    priority: str | None = None


class MenuOptimization(_Document):
    status: str | None = None
    regional_popular_dishes: list[Any] | None = None
    regional_context: RegionalContext | None = None
    strategic_recommendations: list[StrategicRecommendation] | None = None


class DifferentiationOpportunity(_Document):
    opportunity: str | None = None
    market_demand: str | None = None
    competitive_advantage: str | None = None
    implementation_difficulty: str | None = None
    region_specific: bool | None = None


class CompetitiveDocument(_Document):
    metadata: CompetitiveMetadata | None = None
    key_competitors: list[Competitor] | None = None
    market_saturation: MarketSaturation | None = None
    menu_optimization: MenuOptimization | None = None
    differentiation_opportunities: list[DifferentiationOpportunity] | None = None


# --- Anzeige: Status, Selektoren, Insights, Charts ---

class StatusKind(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class StatusIndicator(BaseModel):
    kind: StatusKind = StatusKind.LOADING
    message: str = "Initializing..."


class SelectOption(BaseModel):
    value: str
    label: str


class Selector(BaseModel):
    placeholder: str = ""
    options: list[SelectOption] = []
    disabled: bool = False


class Insight(BaseModel):
    title: str
    description: str


class ChartDataset(BaseModel):
    label: str = ""
    data: list[float] = []
    background_color: str | list[str] = ""
    border_color: str = ""


class ChartSpec(BaseModel):
    """Eingabe fuer den externen Chart-Renderer (radar, doughnut, bar)."""

    slot: str
    chart_type: str
    title: str = ""
    labels: list[str] = []
    datasets: list[ChartDataset] = []


# --- Anzeige: Panels ---

class PanelMode(str, Enum):
    EMPTY = "empty"
    CONTENT = "content"


class _Panel(BaseModel):
    """Gemeinsame Basis der vier Panels.

    `error` und `empty_message` werden nur im leeren Modus angezeigt.
    """

    empty_message: str = ""
    empty_details: list[str] = []
    error: str | None = None

    def _has_records(self) -> bool:
        return False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def mode(self) -> PanelMode:
        return PanelMode.CONTENT if self._has_records() else PanelMode.EMPTY


class EcosystemPanel(_Panel):
    """Regionales Markt-Oekosystem (vier Kennzahlen + Radar)."""

    diversity_score: int | None = None
    saturation_level: str = ""
    opportunity_score: int | None = None
    customer_level: str = ""

    def _has_records(self) -> bool:
        return self.diversity_score is not None


class CuisineRecord(BaseModel):
    name: str
    rating: float = 0.0
    reviews: int = 0
    position: str = "Unknown"
    strengths: str = "N/A"


class CuisinePanel(_Panel):
    data_source: str = ""
    records: list[CuisineRecord] = []

    def _has_records(self) -> bool:
        return bool(self.records)


class CompetitorRecord(BaseModel):
    name: str
    rating: float = 0.0
    reviews: int = 0
    strengths: str = "N/A"
    weaknesses: str = "N/A"


class CompetitivePanel(_Panel):
    competitors: list[CompetitorRecord] = []

    def _has_records(self) -> bool:
        return bool(self.competitors)


class OpportunityCard(BaseModel):
    title: str
    score: int
    market_demand: str = "Medium"
    implementation: str = "Moderate"
    advantage: str = "Moderate"
    region_specific: bool | None = None


class OpportunitiesPanel(_Panel):
    opportunities: list[OpportunityCard] = []

    def _has_records(self) -> bool:
        return bool(self.opportunities)


# --- Snapshot ---

class DashboardSnapshot(BaseModel):
    """Serialisierbarer Gesamtzustand einer Dashboard-Session."""

    initialized: bool = False
    current_region: str | None = None
    current_cuisine: str | None = None
    generation: int = 0
    status: StatusIndicator = StatusIndicator()
    region_selector: Selector = Selector()
    cuisine_selector: Selector = Selector()
    ecosystem: EcosystemPanel = EcosystemPanel()
    cuisine: CuisinePanel = CuisinePanel()
    competitive: CompetitivePanel = CompetitivePanel()
    opportunities: OpportunitiesPanel = OpportunitiesPanel()
    insights: list[Insight] = []
    charts: dict[str, ChartSpec] = {}
