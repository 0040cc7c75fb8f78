"""JSON file store for application settings."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import attrs
from cattrs import BaseValidationError

from ..defaults import default_settings
from ..models.settings import AppSettings, IdentitySettings
from ..util.structure import converter

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = "roleplay_settings.json"


@attrs.frozen
class SettingsStore:
    """Loads and saves the full settings object as one JSON document.

    Settings are read once at start-up and written back on every change.
    Documents written before the global identity existed are upgraded with
    empty identity fields.
    """

    path: Path = attrs.field(default=Path(DEFAULT_SETTINGS_FILE), converter=Path)

    def load(self) -> AppSettings:
        """Read the stored settings, falling back to the defaults.

        A missing file yields the defaults. An unreadable or invalid file is
        logged and also yields the defaults.
        """
        if not self.path.exists():
            logger.info(f"No settings at {self.path}, using defaults")
            return default_settings()
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            return self.from_dict(data)
        except (OSError, json.JSONDecodeError, BaseValidationError, KeyError, ValueError, TypeError) as e:
            logger.error(f"Failed to load settings from {self.path}: {e}")
            return default_settings()

    def save(self, settings: AppSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(converter.unstructure(settings), f, ensure_ascii=False, indent=2)
        logger.debug(f"Saved settings to {self.path}")

    def reset(self) -> AppSettings:
        """Overwrite the stored settings with the defaults and return them."""
        settings = default_settings()
        self.save(settings)
        return settings

    @staticmethod
    def from_dict(data: dict[str, Any]) -> AppSettings:
        """Structure a settings document, upgrading older layouts."""
        if not isinstance(data, dict):
            raise ValueError("Expected a settings object")
        if data.get("identity_settings") is None:
            data = {**data, "identity_settings": converter.unstructure(IdentitySettings())}
        return converter.structure(data, AppSettings)
