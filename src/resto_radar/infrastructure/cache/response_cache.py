"""Session-Cache fuer geladene Dokumente (In-Memory, ohne Ablauf)."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def region_key(region: str) -> str:
    return f"region_{region}"


def cuisine_key(cuisine: str) -> str:
    return f"cuisine_{cuisine}"


def competitive_key(region: str, cuisine: str) -> str:
    return f"competitive_{region}_{cuisine}"


class ResponseCache:
    """Key-Value-Store fuer die Dauer einer Session.

    Kein TTL, keine Groessenbegrenzung, keine Invalidierung. Gespeicherte
    Dokumente werden per Referenz zurueckgegeben.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        return self._entries.get(key)

    def put(self, key: str, document: Any) -> None:
        self._entries[key] = document
        logger.debug("Cache put %s (%d entries)", key, len(self._entries))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
