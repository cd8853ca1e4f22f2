"""Chart-Registry: Schnittstelle zum externen Chart-Renderer."""

from __future__ import annotations

import logging
from typing import Protocol

from resto_radar.domain.errors import ChartSlotBusyError
from resto_radar.domain.models import ChartSpec

logger = logging.getLogger(__name__)


class ChartRegistry(Protocol):
    def render(self, chart: ChartSpec) -> None: ...

    def destroy(self, slot: str) -> None: ...

    def destroy_all(self) -> None: ...

    def active(self) -> dict[str, ChartSpec]: ...


class InMemoryChartRegistry:
    """Haelt die aktuell gerenderten Charts je Slot.

    Ein Slot nimmt hoechstens einen Chart auf; `render` auf einen belegten
    Slot wird mit ChartSlotBusyError abgewiesen.
    """

    def __init__(self) -> None:
        self._charts: dict[str, ChartSpec] = {}
        self.created = 0
        self.destroyed = 0

    def render(self, chart: ChartSpec) -> None:
        if chart.slot in self._charts:
            raise ChartSlotBusyError(f"Chart slot '{chart.slot}' still holds a chart")
        self._charts[chart.slot] = chart
        self.created += 1
        logger.debug("Chart %s rendered (%s)", chart.slot, chart.chart_type)

    def destroy(self, slot: str) -> None:
        if self._charts.pop(slot, None) is not None:
            self.destroyed += 1
            logger.debug("Chart %s destroyed", slot)

    def destroy_all(self) -> None:
        for slot in list(self._charts):
            self.destroy(slot)

    def active(self) -> dict[str, ChartSpec]:
        return dict(self._charts)
