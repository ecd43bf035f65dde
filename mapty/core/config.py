"""Runtime configuration for the app."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mapty.workout.model import Coordinates
from mapty.workout.persistence import DEFAULT_STORAGE_KEY, default_data_dir

DEFAULT_ZOOM_LEVEL = 13


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path = field(default_factory=default_data_dir)
    storage_key: str = DEFAULT_STORAGE_KEY
    zoom_level: int = DEFAULT_ZOOM_LEVEL
    host: str = "127.0.0.1"
    port: int = 8088
    # Shown while waiting for geolocation and when it is denied.
    fallback_center: Coordinates = (51.505, -0.09)
