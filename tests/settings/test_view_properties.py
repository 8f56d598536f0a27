from __future__ import annotations

import json
from pathlib import Path

import pytest

pytest.importorskip("PySide6.QtTest", reason="Qt test helpers not available", exc_type=ImportError)

from PySide6.QtTest import QSignalSpy

from commitgrid.errors import SettingsLoadError, SettingsValidationError
from commitgrid.settings import DEFAULT_PROPERTIES, ViewProperties


def test_defaults_without_a_file(qapp) -> None:
    properties = ViewProperties()
    assert properties.get("table.columns") == ["root", "commit", "author", "date"]
    assert properties.get("table.load_more_threshold") == 40
    assert properties.get("prefetch.up") == 20
    assert properties.get("prefetch.down") == 40
    assert properties.get("table.unknown", "fallback") == "fallback"
    with pytest.raises(KeyError):
        properties["table.unknown"]


def test_roundtrip(tmp_path: Path, qapp) -> None:
    path = tmp_path / "properties.json"
    properties = ViewProperties(path)
    properties.load()
    spy = QSignalSpy(properties.propertyChanged)
    properties.set("table.compact_refs", True)
    assert spy.count() == 1
    properties.save()

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["table"]["compact_refs"] is True
    assert not path.with_suffix(".json.tmp").exists()

    reloaded = ViewProperties(path)
    reloaded.load()
    assert reloaded.get("table.compact_refs") is True
    assert reloaded.get("table.columns") == DEFAULT_PROPERTIES["table"]["columns"]


def test_invalid_value_is_rejected(qapp) -> None:
    properties = ViewProperties()
    spy = QSignalSpy(properties.propertyChanged)
    with pytest.raises(SettingsValidationError):
        properties.set("table.columns", ["commit", "nope"])
    with pytest.raises(SettingsValidationError):
        properties.set("prefetch.down", 0)
    assert spy.count() == 0
    assert properties.get("table.columns") == ["root", "commit", "author", "date"]


def test_broken_file(tmp_path: Path, qapp) -> None:
    path = tmp_path / "properties.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SettingsLoadError):
        ViewProperties(path).load()

    path.write_text(json.dumps({"table": {"load_more_threshold": 0}}), encoding="utf-8")
    with pytest.raises(SettingsValidationError):
        ViewProperties(path).load()


def test_snapshot_is_a_copy(qapp) -> None:
    properties = ViewProperties()
    snapshot = properties.snapshot()
    snapshot["table"]["columns"].append("hash")
    assert properties.get("table.columns") == ["root", "commit", "author", "date"]
