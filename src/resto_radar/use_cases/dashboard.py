"""Dashboard-Steuerung: Auswahl-Ereignisse -> Fetch-Kette -> Panels.

Der gesamte Zustand einer Session liegt in `DashboardState` und wird an
die Handler uebergeben (kein modulweites Singleton). Jede Auswahl erhoeht
`generation`; Ergebnisse einer ueberholten Auswahl werden verworfen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from resto_radar.config import Settings
from resto_radar.domain.charts import CUISINE_SLOT, ECOSYSTEM_SLOT, cuisine_chart, ecosystem_chart
from resto_radar.domain.errors import (
    DashboardError,
    IndexLoadError,
    SessionNotReadyError,
    StructuralError,
    UnknownSelectionError,
)
from resto_radar.domain.insights import (
    BASELINE_INSIGHT,
    generate_comprehensive_insights,
    generate_regional_insights,
    render_insights,
)
from resto_radar.domain.metrics import cuisine_label, market_health
from resto_radar.domain.models import (
    ChartSpec,
    CompetitiveDocument,
    CompetitivePanel,
    CuisineDocument,
    CuisinePanel,
    DashboardSnapshot,
    DataIndex,
    EcosystemPanel,
    Insight,
    OpportunitiesPanel,
    PanelMode,
    RegionalDocument,
    SelectOption,
    Selector,
    StatusIndicator,
    StatusKind,
)
from resto_radar.domain.panels import (
    build_competitive_panel,
    build_cuisine_panel,
    build_ecosystem_panel,
    build_opportunities_panel,
    error_panels,
)
from resto_radar.infrastructure.adapters.data_adapter import DataAdapter
from resto_radar.infrastructure.cache.response_cache import ResponseCache
from resto_radar.infrastructure.charts.chart_registry import (
    ChartRegistry,
    InMemoryChartRegistry,
)

logger = logging.getLogger(__name__)

REGION_PLACEHOLDER = "Select a region..."
CUISINE_PLACEHOLDER = "Select a cuisine..."
CUISINE_DISABLED_PLACEHOLDER = "Select region first..."
DEFAULT_CUSTOMER_SOPHISTICATION = 70.0


def _disabled_cuisine_selector() -> Selector:
    return Selector(placeholder=CUISINE_DISABLED_PLACEHOLDER, disabled=True)


def _baseline_insights() -> list[Insight]:
    return [BASELINE_INSIGHT.model_copy()]


@dataclass
class DashboardState:
    """Zustand einer Dashboard-Session."""

    adapter: DataAdapter
    charts: ChartRegistry = field(default_factory=InMemoryChartRegistry)
    customer_sophistication: float = DEFAULT_CUSTOMER_SOPHISTICATION

    index: DataIndex | None = None
    initialized: bool = False

    current_region: str | None = None
    current_cuisine: str | None = None
    generation: int = 0

    status: StatusIndicator = field(default_factory=StatusIndicator)
    region_selector: Selector = field(
        default_factory=lambda: Selector(placeholder=REGION_PLACEHOLDER, disabled=True)
    )
    cuisine_selector: Selector = field(default_factory=_disabled_cuisine_selector)

    ecosystem: EcosystemPanel = field(default_factory=EcosystemPanel)
    cuisine: CuisinePanel = field(default_factory=CuisinePanel)
    competitive: CompetitivePanel = field(default_factory=CompetitivePanel)
    opportunities: OpportunitiesPanel = field(default_factory=OpportunitiesPanel)
    insights: list[Insight] = field(default_factory=_baseline_insights)


def new_dashboard_state(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    charts: ChartRegistry | None = None,
) -> DashboardState:
    """Composition Root: Adapter + Cache + Chart-Registry fuer eine Session."""
    adapter = DataAdapter(
        settings.data_base_url,
        cache=ResponseCache(),
        timeout=settings.request_timeout,
        cache_bust_param=settings.cache_bust_param,
        transport=transport,
    )
    return DashboardState(
        adapter=adapter,
        charts=charts if charts is not None else InMemoryChartRegistry(),
        customer_sophistication=settings.customer_sophistication_score,
    )


# ---------------------------------------------------------------------------
# Hilfsfunktionen
# ---------------------------------------------------------------------------


def _set_status(state: DashboardState, kind: StatusKind, message: str) -> None:
    state.status = StatusIndicator(kind=kind, message=message)
    logger.info("Status updated: %s - %s", kind.value, message)


def _require_initialized(state: DashboardState) -> None:
    if not state.initialized or state.index is None:
        raise SessionNotReadyError("Dashboard not initialized - create a new session")


def _require_known(kind: str, value: str, known: list[str]) -> None:
    """Nur IDs aus dem Data-Index werden zu Dokument-Pfaden."""
    if value not in known:
        logger.warning("Rejected %s selection not in data index: %r", kind, value)
        raise UnknownSelectionError(kind, value)


def _is_stale(state: DashboardState, generation: int, what: str) -> bool:
    if state.generation != generation:
        logger.debug(
            "Discarding %s for superseded selection (generation %d, now %d)",
            what, generation, state.generation,
        )
        return True
    return False


def _log_failure(what: str, error: DashboardError) -> None:
    if isinstance(error, StructuralError):
        logger.error("Structural error in %s: %s", what, error)
    else:
        logger.warning("Failed to load %s: %s", what, error)


def _render_chart(state: DashboardState, chart: ChartSpec) -> None:
    state.charts.destroy(chart.slot)
    state.charts.render(chart)


def _clear_cuisine_panels(state: DashboardState) -> None:
    state.cuisine = CuisinePanel()
    state.competitive = CompetitivePanel()
    state.opportunities = OpportunitiesPanel()
    state.charts.destroy(CUISINE_SLOT)


def _clear_all_panels(state: DashboardState) -> None:
    state.ecosystem = EcosystemPanel()
    _clear_cuisine_panels(state)
    state.cuisine_selector = _disabled_cuisine_selector()
    state.insights = _baseline_insights()
    state.charts.destroy_all()


def _populate_cuisine_selector(state: DashboardState) -> None:
    cuisines = state.index.cuisines if state.index else []
    state.cuisine_selector = Selector(
        placeholder=CUISINE_PLACEHOLDER,
        options=[SelectOption(value=c, label=cuisine_label(c)) for c in cuisines],
        disabled=not cuisines,
    )
    logger.debug("Loaded %d cuisines into selector", len(cuisines))


def _render_ecosystem(state: DashboardState, regional: RegionalDocument) -> None:
    panel = build_ecosystem_panel(regional)
    state.ecosystem = panel
    if panel.mode is not PanelMode.CONTENT:
        state.charts.destroy(ECOSYSTEM_SLOT)
        logger.info("No ecosystem data available - showing empty state")
        return

    diversity = panel.diversity_score or 0
    opportunity = panel.opportunity_score or 0
    _render_chart(state, ecosystem_chart(
        diversity, opportunity, state.customer_sophistication,
        market_health(diversity, opportunity),
    ))
    logger.info(
        "Ecosystem panel updated: diversity=%d saturation=%s opportunity=%d customer=%s",
        diversity, panel.saturation_level, opportunity, panel.customer_level,
    )


def _render_cuisine_panels(
    state: DashboardState,
    region: str,
    cuisine: str,
    cuisine_doc: CuisineDocument,
    competitive_doc: CompetitiveDocument,
) -> None:
    """Reihenfolge: Kueche, Wettbewerb, Chancen, Insights."""
    state.cuisine = build_cuisine_panel(cuisine_doc, competitive_doc, region, cuisine)
    if state.cuisine.mode is PanelMode.CONTENT:
        _render_chart(state, cuisine_chart(competitive_doc))
        logger.info(
            "Cuisine panel: %d items from %s",
            len(state.cuisine.records), state.cuisine.data_source,
        )
    else:
        state.charts.destroy(CUISINE_SLOT)
        logger.info("No valid data available for cuisine panel")

    state.competitive = build_competitive_panel(competitive_doc)
    state.opportunities = build_opportunities_panel(competitive_doc)
    state.insights = render_insights(
        generate_comprehensive_insights(cuisine_doc, competitive_doc)
    )


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------


async def initialize_dashboard(state: DashboardState) -> None:
    """Data-Index laden und Regions-Selektor befuellen.

    Ein IndexLoadError ist terminal: die Session bleibt im Fehlerstatus und
    nimmt keine Auswahl mehr an.
    """
    if state.initialized:
        return

    _set_status(state, StatusKind.LOADING, "Initializing Restaurant Intelligence Platform...")
    try:
        index = await state.adapter.load_index()
    except IndexLoadError as e:
        logger.error("Error initializing platform: %s", e)
        _set_status(state, StatusKind.ERROR, "System initialization failed")
        return

    state.index = index
    state.region_selector = Selector(
        placeholder=REGION_PLACEHOLDER,
        options=[SelectOption(value=r, label=f"{r} (Region)") for r in index.regions],
    )
    state.initialized = True
    _set_status(state, StatusKind.READY, "System ready")


async def select_region(state: DashboardState, region: str) -> None:
    """Region gewaehlt (leer = abgewaehlt -> vollstaendiger Reset).

    Regionen ausserhalb des Data-Index -> UnknownSelectionError, Zustand bleibt.
    """
    _require_initialized(state)
    logger.info("Region selected: %s", region or "<none>")
    if not region:
        reset_dashboard(state)
        return
    _require_known("region", region, state.index.regions if state.index else [])

    state.generation += 1
    generation = state.generation
    state.current_region = region
    state.current_cuisine = None
    _clear_all_panels(state)
    _set_status(state, StatusKind.LOADING, f"Loading data for region {region}...")

    try:
        regional = await state.adapter.load_regional(region)
    except DashboardError as e:
        if _is_stale(state, generation, f"regional error for {region}"):
            return
        _log_failure(f"regional data for {region}", e)
        _set_status(state, StatusKind.ERROR, f"Failed to load data for region {region}: {e}")
        return

    if _is_stale(state, generation, f"regional data for {region}"):
        return

    _render_ecosystem(state, regional)
    _populate_cuisine_selector(state)
    state.insights = render_insights(generate_regional_insights(regional))
    _set_status(state, StatusKind.READY, f"Region {region} loaded successfully")


async def select_cuisine(state: DashboardState, cuisine: str) -> None:
    """Kueche gewaehlt: Kuechen- und Wettbewerbsdokument nacheinander laden.

    Das Oekosystem-Panel haengt nur von der Region ab und bleibt unberuehrt.
    """
    _require_initialized(state)
    logger.info("Cuisine selected: %s", cuisine or "<none>")
    region = state.current_region
    if not region:
        logger.info("Invalid cuisine selection - missing region")
        return
    if cuisine:
        _require_known("cuisine", cuisine, state.index.cuisines if state.index else [])

    state.generation += 1
    generation = state.generation

    if not cuisine:
        state.current_cuisine = None
        _clear_cuisine_panels(state)
        _set_status(state, StatusKind.READY, f"Select a cuisine to analyze region {region}")
        return

    state.current_cuisine = cuisine
    _clear_cuisine_panels(state)
    _set_status(
        state, StatusKind.LOADING, f"Analyzing {cuisine} cuisine in region {region}...",
    )

    try:
        cuisine_doc = await state.adapter.load_cuisine(cuisine)
        if _is_stale(state, generation, f"cuisine data for {cuisine}"):
            return
        competitive_doc = await state.adapter.load_competitive(region, cuisine)
    except DashboardError as e:
        if _is_stale(state, generation, f"cuisine analysis error for {cuisine}"):
            return
        _log_failure(f"{cuisine} analysis in {region}", e)
        state.cuisine, state.competitive, state.opportunities = error_panels(str(e))
        _set_status(state, StatusKind.ERROR, f"Failed to analyze {cuisine} cuisine: {e}")
        return

    if _is_stale(state, generation, f"competitive data for {region}_{cuisine}"):
        return

    _render_cuisine_panels(state, region, cuisine, cuisine_doc, competitive_doc)
    _set_status(
        state, StatusKind.READY, f"{cuisine} analysis complete for region {region}",
    )


def reset_dashboard(state: DashboardState) -> None:
    """Kanonischer Reset: alle Panels leer, alle Charts freigegeben."""
    state.generation += 1
    state.current_region = None
    state.current_cuisine = None
    _clear_all_panels(state)
    _set_status(state, StatusKind.READY, "Select a region to begin analysis")


def build_snapshot(state: DashboardState) -> DashboardSnapshot:
    return DashboardSnapshot(
        initialized=state.initialized,
        current_region=state.current_region,
        current_cuisine=state.current_cuisine,
        generation=state.generation,
        status=state.status,
        region_selector=state.region_selector,
        cuisine_selector=state.cuisine_selector,
        ecosystem=state.ecosystem,
        cuisine=state.cuisine,
        competitive=state.competitive,
        opportunities=state.opportunities,
        insights=state.insights,
        charts=state.charts.active(),
    )
