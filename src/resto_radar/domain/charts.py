"""Chart-Spezifikationen fuer den externen Renderer (ohne Rendering-Logik)."""

from __future__ import annotations

from resto_radar.domain.models import ChartDataset, ChartSpec, CompetitiveDocument

ECOSYSTEM_SLOT = "ecosystem"
CUISINE_SLOT = "cuisine"

_PRIMARY = "rgba(102, 126, 234, 1)"
_PRIMARY_FILL = "rgba(102, 126, 234, 0.2)"
_PRIMARY_SOLID = "rgba(102, 126, 234, 0.8)"
_MUTED = "rgba(200, 200, 200, 0.3)"


def ecosystem_chart(
    diversity: int,
    opportunity: int,
    customer_sophistication: float,
    health: int,
) -> ChartSpec:
    """Radar: Vielfalt, Chancen, Kunden-Niveau, Markt-Gesundheit (0-100)."""
    return ChartSpec(
        slot=ECOSYSTEM_SLOT,
        chart_type="radar",
        title="Market Ecosystem",
        labels=["Diversity", "Opportunity", "Customer Level", "Market Health"],
        datasets=[ChartDataset(
            label="Market Ecosystem",
            data=[float(diversity), float(opportunity),
                  float(customer_sophistication), float(health)],
            background_color=_PRIMARY_FILL,
            border_color=_PRIMARY,
        )],
    )


def cuisine_chart(competitive: CompetitiveDocument) -> ChartSpec:
    """Doughnut mit regionalem Fokus, sonst Balken mit Analyse-Status."""
    meta = competitive.metadata
    if meta is not None:
        region = meta.region or "unknown"
        return ChartSpec(
            slot=CUISINE_SLOT,
            chart_type="doughnut",
            title=f"Regional Analysis: {region} ({meta.cuisine or 'unknown'})",
            labels=[f"Region {region}", "Other Areas"],
            datasets=[ChartDataset(
                data=[70.0, 30.0],
                background_color=[_PRIMARY_SOLID, _MUTED],
            )],
        )

    return ChartSpec(
        slot=CUISINE_SLOT,
        chart_type="bar",
        title="Analysis Status",
        labels=["Data Available", "Analysis Complete"],
        datasets=[ChartDataset(
            label="Status",
            data=[100.0, 90.0],
            background_color=_PRIMARY_SOLID,
        )],
    )
