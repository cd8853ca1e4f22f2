"""Fehler-Taxonomie des Dashboards.

IndexLoadError ist fatal (Session bleibt im Fehlerstatus), FetchError und
StructuralError betreffen nur die aktuelle Auswahl.
"""

from __future__ import annotations


class DashboardError(Exception):
    """Basisklasse fuer alle Dashboard-Fehler."""


class IndexLoadError(DashboardError):
    """Data-Index nicht ladbar oder ohne Regionen/Kuechen."""


class FetchError(DashboardError):
    """HTTP-Fehler, Transportfehler oder ungueltiges JSON."""

    def __init__(self, url: str, status: int | None = None, reason: str = "") -> None:
        self.url = url
        self.status = status
        self.reason = reason
        if status is None:
            message = f"Failed to fetch {url}: {reason or 'network error'}"
        else:
            message = f"Failed to fetch {url}: {status} {reason}".rstrip()
        super().__init__(message)


class StructuralError(DashboardError):
    """Gueltiges JSON, aber die erwartete Dokumentstruktur fehlt."""

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"Unexpected document structure at {url}: {detail}")


class SessionNotReadyError(DashboardError):
    """Auswahl vor erfolgreicher Initialisierung (oder nach fatalem Index-Fehler)."""


class UnknownSelectionError(DashboardError):
    """Region oder Kueche nicht im Data-Index."""

    def __init__(self, kind: str, value: str) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f"Unknown {kind}: {value!r}")


class ChartSlotBusyError(DashboardError):
    """Slot ist noch belegt, vorherigen Chart erst freigeben."""
