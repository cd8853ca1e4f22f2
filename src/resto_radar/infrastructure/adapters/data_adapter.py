"""Async-Adapter fuer die vorberechneten JSON-Dokumente (Index, Region, Kueche, Wettbewerb)."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from resto_radar.domain.errors import FetchError, IndexLoadError, StructuralError
from resto_radar.domain.models import (
    CompetitiveDocument,
    CuisineDocument,
    DataIndex,
    RegionalDocument,
)
from resto_radar.infrastructure.cache.response_cache import (
    ResponseCache,
    competitive_key,
    cuisine_key,
    region_key,
)

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", bound=BaseModel)


class DataAdapter:
    """Async-Adapter fuer den statischen Daten-Baum unter `<base_url>data/`.

    Jede Dokument-Art hat einen Cache-Key; ein Treffer liefert das bereits
    geladene Objekt ohne Netzwerkzugriff. Kuechen- und Wettbewerbsdokumente
    werden mit Cache-Busting-Parameter geladen, Index und Regionen nicht.
    """

    TIMEOUT = 10.0

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000/",
        *,
        cache: ResponseCache | None = None,
        timeout: float = TIMEOUT,
        cache_bust_param: str = "t",
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._cache = cache if cache is not None else ResponseCache()
        self._timeout = timeout
        self._cache_bust_param = cache_bust_param
        self._transport = transport
        self._clock = clock

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    def _url(self, path: str) -> str:
        return f"{self._base_url}data/{path}"

    def _cache_bust(self) -> dict[str, str]:
        return {self._cache_bust_param: str(int(self._clock() * 1000))}

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        """GET + JSON-Parse. FetchError bei Non-2xx, Transportfehler oder ungueltigem JSON."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport,
            ) as client:
                t0 = time.monotonic()
                resp = await client.get(url, params=params)
                elapsed_ms = int((time.monotonic() - t0) * 1000)
        except httpx.HTTPError as e:
            logger.warning("GET %s failed: %s", url, e)
            raise FetchError(url, reason=str(e)) from e

        logger.info("GET %s -> %d (%dms)", url, resp.status_code, elapsed_ms)
        if not resp.is_success:
            raise FetchError(url, status=resp.status_code, reason=resp.reason_phrase)

        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(url, status=resp.status_code, reason="invalid JSON body") from e

    @staticmethod
    def _parse(model: type[DocumentT], data: Any, url: str) -> DocumentT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(
                "Structural error in %s (%d issues): %s",
                url, e.error_count(), e.errors()[:3],
            )
            raise StructuralError(url, f"{e.error_count()} validation issue(s)") from e

    async def _load(
        self,
        key: str,
        model: type[DocumentT],
        path: str,
        *,
        cache_bust: bool,
    ) -> DocumentT:
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit %s", key)
            return cached  # type: ignore[no-any-return]

        url = self._url(path)
        params = self._cache_bust() if cache_bust else None
        document = self._parse(model, await self._get_json(url, params), url)
        self._cache.put(key, document)
        return document

    async def load_index(self) -> DataIndex:
        """Data-Index laden und pruefen. Jeder Fehler wird zu IndexLoadError."""
        url = self._url("data_index.json")
        try:
            index = self._parse(DataIndex, await self._get_json(url), url)
        except (FetchError, StructuralError) as e:
            raise IndexLoadError(f"Data index not loadable: {e}") from e

        if not index.regions:
            raise IndexLoadError("Invalid data index structure: missing coverage.regions")
        if not index.cuisines:
            raise IndexLoadError("Invalid data index structure: missing coverage.cuisines")

        logger.info(
            "Data index loaded: %d regions, %d cuisines",
            len(index.regions), len(index.cuisines),
        )
        return index

    async def load_regional(self, region: str) -> RegionalDocument:
        return await self._load(
            region_key(region), RegionalDocument,
            f"regions/{region}.json", cache_bust=False,
        )

    async def load_cuisine(self, cuisine: str) -> CuisineDocument:
        return await self._load(
            cuisine_key(cuisine), CuisineDocument,
            f"cuisines/{cuisine}_analysis.json", cache_bust=True,
        )

    async def load_competitive(self, region: str, cuisine: str) -> CompetitiveDocument:
        return await self._load(
            competitive_key(region, cuisine), CompetitiveDocument,
            f"competitive/{region}_{cuisine}.json", cache_bust=True,
        )
