"""Persistent settings store with change notification"""

import json
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..exceptions import ConfigurationError
from ..logging_config import get_logger
from .settings import SyncSettings

logger = get_logger(__name__)

SettingsListener = Callable[[SyncSettings], None]


def _to_configuration_error(error: ValidationError, data: dict[str, Any]) -> ConfigurationError:
    """Turn the first pydantic validation failure into a ConfigurationError"""
    first = error.errors()[0]
    setting = ".".join(str(part) for part in first.get("loc", ())) or "settings"
    return ConfigurationError(setting, data.get(setting), first.get("msg", str(error)))


class SettingsStore:
    """Holds the current SyncSettings and persists them as JSON.

    Saved values are layered over the defaults, so keys added in newer
    versions pick up their default. Every update is validated as a whole
    before it replaces the current settings; listeners are notified after
    the new value is persisted.
    """

    def __init__(self, path: Path | str | None = None, initial: SyncSettings | None = None):
        self.path = Path(path) if path else None
        self._lock = threading.RLock()
        self._listeners: list[SettingsListener] = []
        self._current = initial or self._load()

    def _load(self) -> SyncSettings:
        data: dict[str, Any] = {}
        if self.path and self.path.exists():
            try:
                with open(self.path, encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigurationError("settings_file", str(self.path), str(e)) from e
            if not isinstance(data, dict):
                raise ConfigurationError(
                    "settings_file", str(self.path), "Settings file must hold a JSON object"
                )
        return self._validate(data)

    @staticmethod
    def _validate(data: dict[str, Any]) -> SyncSettings:
        try:
            return SyncSettings(**data)
        except ValidationError as e:
            raise _to_configuration_error(e, data) from e

    def current(self) -> SyncSettings:
        """Return the settings in effect right now"""
        with self._lock:
            return self._current

    def update(self, **changes: Any) -> SyncSettings:
        """Validate, persist and publish a partial settings change"""
        unknown = set(changes) - set(SyncSettings.model_fields)
        if unknown:
            name = sorted(unknown)[0]
            raise ConfigurationError(name, changes[name], "Unknown setting")

        with self._lock:
            merged = {**self._current.model_dump(), **changes}
            new_settings = self._validate(merged)
            self._current = new_settings
            self.save()
            listeners = list(self._listeners)

        logger.debug(f"Settings updated: {', '.join(sorted(changes))}")
        for listener in listeners:
            listener(new_settings)
        return new_settings

    def save(self) -> None:
        """Write the current settings to disk (no-op for in-memory stores)"""
        if not self.path:
            return
        with self._lock:
            payload = self._current.model_dump(mode="json")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

    def subscribe(self, listener: SettingsListener) -> None:
        """Register a callback invoked with the new settings after each update"""
        with self._lock:
            self._listeners.append(listener)
