"""
Settings for the Monastery360 server.

Values come from environment variables or a ``.env`` file in the
working directory. Only the two map values are ever sent to browsers,
through ``/api/config``; everything else stays on the server.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Repository root: <root>/monastery360/config.py
BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Server, map and data-file settings (env names are case-insensitive)."""

    app_name: str = "Monastery360"
    app_version: str = "1.0.0"

    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = ["*"]

    # Public: the browser needs them to draw the map
    google_maps_api_key: Optional[str] = None
    google_maps_map_id: str = "YOUR_MAP_ID_HERE"

    # Catalogue files, read once at startup
    data_dir: Path = BASE_DIR / "data"
    monasteries_file: str = "monasteries.json"
    events_file: str = "events.json"

    # Served at "/" when set and present
    frontend_dir: Optional[Path] = None

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def monasteries_path(self) -> Path:
        return self.data_dir / self.monasteries_file

    @property
    def events_path(self) -> Path:
        return self.data_dir / self.events_file


@lru_cache()
def get_settings() -> Settings:
    """Settings read once per process; routes depend on this, tests override it."""
    return Settings()
