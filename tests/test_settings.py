import json
from pathlib import Path

from inspectlocator.settings import (
    DEFAULT_SETTINGS,
    InspectorState,
    SynthesisSettings,
    load_settings,
    save_settings,
)


def test_settings_roundtrip(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    original = InspectorState(
        inspect_enabled=True,
        synthesis=SynthesisSettings(semantic_depth=5, positional_depth=1, semantic_keywords=("nav", "toolbar")),
    )

    ok, error = save_settings(original, config_path)
    assert ok
    assert error is None

    loaded = load_settings(config_path)
    assert loaded == original
    assert not list(tmp_path.glob("*.tmp"))


def test_missing_file_returns_defaults(tmp_path: Path) -> None:
    loaded = load_settings(tmp_path / "absent.json")

    assert not loaded.inspect_enabled
    assert loaded.synthesis == DEFAULT_SETTINGS


def test_invalid_json_returns_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("{not-json", encoding="utf-8")

    assert load_settings(config_path) == InspectorState()


def test_non_object_payload_returns_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("[1, 2, 3]", encoding="utf-8")

    assert load_settings(config_path) == InspectorState()


def test_bad_values_are_ignored_per_field(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps(
            {
                "inspect_enabled": True,
                "synthesis": {
                    "semantic_depth": 4,
                    "positional_depth": -1,
                    "exact_text_limit": True,
                    "long_text_prefix": "30",
                    "semantic_keywords": [" Nav ", "", "Menu"],
                    "unknown": 1,
                },
            }
        ),
        encoding="utf-8",
    )

    loaded = load_settings(config_path)

    assert loaded.inspect_enabled
    assert loaded.synthesis.semantic_depth == 4
    assert loaded.synthesis.positional_depth == DEFAULT_SETTINGS.positional_depth
    assert loaded.synthesis.exact_text_limit == DEFAULT_SETTINGS.exact_text_limit
    assert loaded.synthesis.long_text_prefix == DEFAULT_SETTINGS.long_text_prefix
    assert loaded.synthesis.semantic_keywords == ("nav", "menu")


def test_save_reports_unwritable_folder(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a folder", encoding="utf-8")

    ok, error = save_settings(InspectorState(), blocker / "config.json")

    assert not ok
    assert error is not None
    assert error.startswith("Could not create config folder")
