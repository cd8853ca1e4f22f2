"""Begrenzter Speicher fuer Dashboard-Sessions (LRU + Idle-TTL)."""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from resto_radar.use_cases.dashboard import DashboardState

logger = logging.getLogger(__name__)


class SessionStore:
    """Haelt hoechstens `max_sessions` Sessions.

    Eine Session ohne Zugriff seit `idle_ttl` Sekunden gilt als beendet.
    Beim Anlegen werden abgelaufene Sessions entfernt, danach die am
    laengsten unbenutzten, bis Platz ist. Jede entfernte Session gibt
    ihre Charts frei.
    """

    def __init__(
        self,
        max_sessions: int = 100,
        idle_ttl: float = 3600.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_sessions = max(1, max_sessions)
        self._idle_ttl = idle_ttl
        self._clock = clock
        self._entries: OrderedDict[str, tuple[DashboardState, float]] = OrderedDict()

    def _expired(self, last_seen: float) -> bool:
        return self._clock() - last_seen > self._idle_ttl

    def _evict(self, session_id: str, reason: str) -> None:
        state, _ = self._entries.pop(session_id)
        state.charts.destroy_all()
        logger.info("Session %s evicted (%s)", session_id, reason)

    def _evict_expired(self) -> None:
        for session_id, (_, last_seen) in list(self._entries.items()):
            if self._expired(last_seen):
                self._evict(session_id, "idle")

    def add(self, session_id: str, state: DashboardState) -> None:
        self._evict_expired()
        while len(self._entries) >= self._max_sessions:
            oldest = next(iter(self._entries))
            self._evict(oldest, "capacity")
        self._entries[session_id] = (state, self._clock())

    def get(self, session_id: str) -> DashboardState | None:
        """Session lesen und als benutzt markieren; abgelaufen -> None."""
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        state, last_seen = entry
        if self._expired(last_seen):
            self._evict(session_id, "idle")
            return None
        self._entries[session_id] = (state, self._clock())
        self._entries.move_to_end(session_id)
        return state

    def pop(self, session_id: str) -> DashboardState | None:
        entry = self._entries.pop(session_id, None)
        return entry[0] if entry is not None else None

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
