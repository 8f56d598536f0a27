"""View properties with validation and change notifications."""

from __future__ import annotations

import json
import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any

from jsonschema import ValidationError
from PySide6.QtCore import QObject, Signal

from ..errors import SettingsLoadError, SettingsValidationError
from .schema import DEFAULT_PROPERTIES, merge_with_defaults


def default_properties_path() -> Path:
    """Return the default properties.json location for the current platform."""

    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "commitgrid" / "properties.json"
        return Path.home() / "AppData" / "Roaming" / "commitgrid" / "properties.json"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "commitgrid" / "properties.json"
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / "commitgrid" / "properties.json"
    return Path.home() / ".config" / "commitgrid" / "properties.json"


class ViewProperties(QObject):
    """In-memory table properties, optionally backed by a JSON file.

    Nothing touches the disk until :meth:`load` or :meth:`save` is called, so
    tests and the CLI can use the defaults without a properties file.
    """

    propertyChanged = Signal(str, object)

    def __init__(self, path: Path | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._path = path
        self._data: dict[str, Any] = deepcopy(DEFAULT_PROPERTIES)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Load the properties JSON from disk, keeping defaults if missing."""

        path = self._path or default_properties_path()
        self._path = path
        payload = None
        if path.exists():
            try:
                payload = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise SettingsLoadError(f"{path}: {exc}") from exc
        try:
            self._data = merge_with_defaults(payload)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc

    def save(self) -> Path:
        path = self._path or default_properties_path()
        self._path = path
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(self._data, indent=2, sort_keys=True), encoding="utf-8")
        os.replace(tmp_path, path)
        return path

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def get(self, key: str, default: Any | None = None) -> Any:
        """Return the value for *key*, supporting dotted access for nested keys."""

        target: Any = self._data
        for part in key.split("."):
            if not isinstance(target, dict) or part not in target:
                return default
            target = target[part]
        return target

    def __getitem__(self, key: str) -> Any:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def set(self, key: str, value: Any) -> None:
        """Update *key* with *value*; invalid values leave the properties untouched."""

        candidate = deepcopy(self._data)
        parts = key.split(".")
        target: dict[str, Any] = candidate
        for part in parts[:-1]:
            branch = target.get(part)
            if not isinstance(branch, dict):
                branch = {}
                target[part] = branch
            target = branch
        target[parts[-1]] = value
        try:
            self._data = merge_with_defaults(candidate)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        self.propertyChanged.emit(key, value)

    def snapshot(self) -> dict[str, Any]:
        return deepcopy(self._data)


__all__ = ["ViewProperties", "default_properties_path"]
