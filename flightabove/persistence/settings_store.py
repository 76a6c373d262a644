"""JSON file store for FlightServiceSettings."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from flightabove.contracts.settings import FlightServiceSettings

logger = logging.getLogger(__name__)

SETTINGS_PATH_ENV = "FLIGHTABOVE_SETTINGS_PATH"


def default_settings_path() -> Path:
    env_path = os.environ.get(SETTINGS_PATH_ENV)
    if env_path:
        return Path(env_path)
    return Path.home() / ".flightabove" / "settings.json"


class JsonSettingsStore:
    """Load/save settings as a flat JSON document. No migrations."""

    def __init__(self, path: Path | None = None):
        self.path = path or default_settings_path()

    def load(self) -> FlightServiceSettings:
        """Stored settings, or defaults when the file is missing or unreadable."""
        if not self.path.exists():
            return FlightServiceSettings()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return FlightServiceSettings.model_validate(data)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
            return FlightServiceSettings()

    def save(self, settings: FlightServiceSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
        tmp.replace(self.path)
