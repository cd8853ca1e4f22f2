"""Tests fuer die Panel-Synchronisation (domain/panels.py)."""

from conftest import COMPETITIVE_AUSTIN_MEXICAN, CUISINE_MEXICAN, REGION_AUSTIN, REGION_DALLAS

from resto_radar.domain.models import (
    CompetitiveDocument,
    CuisineDocument,
    PanelMode,
    RegionalDocument,
)
from resto_radar.domain.panels import (
    SOURCE_KEY_COMPETITORS,
    SOURCE_NATIONAL_OVERVIEW,
    SOURCE_REGIONAL_VARIATIONS,
    build_competitive_panel,
    build_cuisine_panel,
    build_ecosystem_panel,
    build_opportunities_panel,
    error_panels,
    select_cuisine_records,
)


def _cuisine(data=None) -> CuisineDocument:
    return CuisineDocument.model_validate(data or {})


def _competitive(data=None) -> CompetitiveDocument:
    return CompetitiveDocument.model_validate(data or {})


class TestEcosystemPanel:
    def test_austin_values(self):
        panel = build_ecosystem_panel(RegionalDocument.model_validate(REGION_AUSTIN))
        assert panel.mode is PanelMode.CONTENT
        assert panel.diversity_score == 100
        assert panel.saturation_level == "Medium"
        assert panel.opportunity_score == 70
        assert panel.customer_level == "Moderate"

    def test_dallas_values(self):
        panel = build_ecosystem_panel(RegionalDocument.model_validate(REGION_DALLAS))
        # 10/250*1000 = 40, +2 emerging * 5
        assert panel.diversity_score == 50
        assert panel.saturation_level == "Very High"
        assert panel.opportunity_score == 85
        assert panel.customer_level == "Sophisticated"

    def test_empty_without_overview_and_environment(self):
        panel = build_ecosystem_panel(
            RegionalDocument.model_validate({"market_opportunities": [{"cuisine": "x"}]})
        )
        assert panel.mode is PanelMode.EMPTY
        assert panel.diversity_score is None

    def test_environment_only_is_content(self):
        panel = build_ecosystem_panel(
            RegionalDocument.model_validate({"competitive_environment": {}})
        )
        assert panel.mode is PanelMode.CONTENT
        assert panel.diversity_score == 0


class TestCuisineRecordSelection:
    """Feste Prioritaet: key_competitors > regional_variations > national_overview."""

    def test_key_competitors_win_over_regional_variations(self):
        source, records = select_cuisine_records(
            _cuisine(CUISINE_MEXICAN), _competitive(COMPETITIVE_AUSTIN_MEXICAN),
            "Austin", "Mexican",
        )
        assert source == SOURCE_KEY_COMPETITORS
        assert [r.name for r in records] == ["Taqueria Uno", "Casa Verde", "El Patio"]

    def test_competitor_fields(self):
        _, records = select_cuisine_records(
            _cuisine(), _competitive(COMPETITIVE_AUSTIN_MEXICAN), "Austin", "Mexican",
        )
        first, second, _ = records
        assert first.rating == 4.6
        assert first.reviews == 410
        assert first.position == "Leader"
        assert first.strengths == "Authentic recipes, Fast service"
        # stars als Ersatz fuer rating
        assert second.rating == 4.2
        assert second.position == "Unknown"
        assert second.strengths == "N/A"

    def test_top_five_only(self):
        competitors = [{"name": f"R{i}", "rating": 4.0} for i in range(8)]
        _, records = select_cuisine_records(
            _cuisine(), _competitive({"key_competitors": competitors}), "Austin", "Mexican",
        )
        assert len(records) == 5

    def test_regional_variation_fallback(self):
        source, records = select_cuisine_records(
            _cuisine(CUISINE_MEXICAN), _competitive(), "Austin", "Mexican",
        )
        assert source == SOURCE_REGIONAL_VARIATIONS
        (record,) = records
        assert record.name == "Mexican restaurants in Austin"
        assert record.rating == 4.4
        assert record.reviews == 900
        assert record.position == "growing"

    def test_national_fallback_when_region_missing(self):
        source, records = select_cuisine_records(
            _cuisine(CUISINE_MEXICAN), _competitive(), "Dallas", "Mexican",
        )
        assert source == SOURCE_NATIONAL_OVERVIEW
        (record,) = records
        assert record.name == "Mexican cuisine overview"
        assert record.position == "National"
        assert record.strengths == "320 restaurants across 14 regions"

    def test_empty_competitors_list_falls_through(self):
        source, _ = select_cuisine_records(
            _cuisine(CUISINE_MEXICAN), _competitive({"key_competitors": []}),
            "Austin", "Mexican",
        )
        assert source == SOURCE_REGIONAL_VARIATIONS

    def test_nothing_available(self):
        assert select_cuisine_records(_cuisine(), _competitive(), "Austin", "Thai") == ("", [])


class TestCuisinePanel:
    def test_content_mode(self):
        panel = build_cuisine_panel(
            _cuisine(), _competitive(COMPETITIVE_AUSTIN_MEXICAN), "Austin", "Mexican",
        )
        assert panel.mode is PanelMode.CONTENT
        assert panel.data_source == SOURCE_KEY_COMPETITORS

    def test_data_available_message(self):
        panel = build_cuisine_panel(
            _cuisine(),
            _competitive({"metadata": {"restaurant_count": 4, "data_quality": "low"}}),
            "Austin", "Thai",
        )
        assert panel.mode is PanelMode.EMPTY
        assert panel.empty_message == "Data available but no detailed analysis for Thai in Austin"
        assert panel.empty_details == ["Restaurant count: 4", "Data quality: low"]

    def test_no_data_message(self):
        panel = build_cuisine_panel(_cuisine(), _competitive(), "Austin", "Thai")
        assert panel.mode is PanelMode.EMPTY
        assert panel.empty_message == "No data available for Thai in Austin"
        assert panel.empty_details == ["Try selecting a different region or cuisine combination"]


class TestCompetitiveAndOpportunities:
    def test_competitive_panel(self):
        panel = build_competitive_panel(_competitive(COMPETITIVE_AUSTIN_MEXICAN))
        assert panel.mode is PanelMode.CONTENT
        first = panel.competitors[0]
        assert first.weaknesses == "Limited seating"
        assert panel.competitors[2].strengths == "N/A"

    def test_competitive_panel_empty(self):
        assert build_competitive_panel(_competitive()).mode is PanelMode.EMPTY

    def test_opportunity_cards(self):
        panel = build_opportunities_panel(_competitive(COMPETITIVE_AUSTIN_MEXICAN))
        first, second = panel.opportunities
        assert first.title == "Breakfast tacos"
        assert first.score == 100
        assert first.region_specific is True
        assert second.score == 60
        assert second.market_demand == "Medium"
        assert second.implementation == "Moderate"
        assert second.advantage == "Moderate"
        assert second.region_specific is False

    def test_unnamed_opportunity(self):
        panel = build_opportunities_panel(
            _competitive({"differentiation_opportunities": [{}]})
        )
        assert panel.opportunities[0].title == "Unnamed opportunity"


class TestErrorPanels:
    def test_all_three_show_error(self):
        panels = error_panels("boom")
        for panel in panels:
            assert panel.mode is PanelMode.EMPTY
            assert panel.error == "Error loading data: boom"
            assert panel.empty_message == "Error loading data: boom"
