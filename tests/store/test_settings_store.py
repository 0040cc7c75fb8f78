"""Tests for the JSON settings store."""

import json
from pathlib import Path

import pytest

from roleplay_simulator.defaults import default_settings
from roleplay_simulator.models import AppSettings, Difficulty, Identity, IdentitySettings, Scenario
from roleplay_simulator.store.settings_store import SettingsStore


@pytest.fixture
def store(tmp_path: Path) -> SettingsStore:
    return SettingsStore(tmp_path / "settings.json")


def test_missing_file_yields_defaults(store: SettingsStore) -> None:
    assert store.load() == default_settings()


def test_save_then_load(store: SettingsStore, settings: AppSettings, fixed_identity: Identity) -> None:
    edited = (settings
              .with_scenario(Scenario(id="fixed", category="C", title="T", description="D",
                                      fixed_identity=fixed_identity, images=("data:image/png;base64,AAA",)))
              .with_identity_settings(IdentitySettings(display_name="Rahmat", signature_name="Pak R")))

    store.save(edited)

    assert store.load() == edited


def test_legacy_document_without_identity_settings(store: SettingsStore) -> None:
    document = {
        "scenarios": [{"id": "s1", "category": "C", "title": "T", "description": "D", "is_active": True}],
        "persona_types": [{"id": "t1", "name": "Kooperatif", "description": "Sabar", "difficulty": "Mudah"}],
    }
    store.path.write_text(json.dumps(document), encoding="utf-8")

    loaded = store.load()

    assert loaded.identity_settings == IdentitySettings()
    assert loaded.persona_types[0].difficulty == Difficulty.EASY
    assert loaded.scenarios[0].images == ()
    assert loaded.scenarios[0].persona_type_id == "random"


def test_null_identity_settings_are_upgraded() -> None:
    loaded = SettingsStore.from_dict({"scenarios": [], "persona_types": [], "identity_settings": None})

    assert loaded.identity_settings == IdentitySettings()


def test_null_text_fields_load_as_blank() -> None:
    loaded = SettingsStore.from_dict({
        "scenarios": [{"id": "s1", "category": "C", "title": "T", "description": "D", "script": None}],
        "persona_types": [],
        "identity_settings": {"display_name": None, "signature_name": "Pak R", "phone_number": None},
    })

    assert loaded.identity_settings == IdentitySettings(signature_name="Pak R")
    assert loaded.scenarios[0].script is None


def test_corrupt_file_falls_back_to_defaults(store: SettingsStore) -> None:
    store.path.write_text("{not json", encoding="utf-8")

    assert store.load() == default_settings()


def test_invalid_document_falls_back_to_defaults(store: SettingsStore) -> None:
    store.path.write_text(json.dumps({"scenarios": [{"id": "s1"}]}), encoding="utf-8")

    assert store.load() == default_settings()


def test_reset_writes_defaults(store: SettingsStore, settings: AppSettings) -> None:
    store.save(settings)

    assert store.reset() == default_settings()
    assert store.load() == default_settings()
