"""Zentrale Konfiguration via Pydantic Settings."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings, loaded from environment / .env file."""

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Datenquelle: Basis-URL, unter der `data/` liegt (mit abschliessendem /)
    data_base_url: str = "http://127.0.0.1:8000/"

    # Lokales Datenverzeichnis, wird unter /data ausgeliefert falls vorhanden
    data_dir: str = "data"

    # HTTP
    request_timeout: float = 10.0
    cache_bust_param: str = "t"

    # Sessions: Obergrenze und Idle-Timeout in Sekunden
    max_sessions: int = 100
    session_idle_ttl: float = 3600.0

    # Radar-Achse "Customer Level" (0-100)
    customer_sophistication_score: float = 70.0

    # Debug-Logging
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def data_dir_available(self) -> bool:
        return Path(self.data_dir).is_dir()
