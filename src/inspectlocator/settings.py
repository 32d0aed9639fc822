from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
import json
from pathlib import Path
import tempfile
from typing import Any

CONFIG_DIR = Path.home() / ".inspectlocator"
CONFIG_PATH = CONFIG_DIR / "config.json"

SEMANTIC_CLASS_KEYWORDS = (
    "nav",
    "navigation",
    "navbar",
    "menu",
    "sidebar",
    "header",
    "footer",
    "form",
    "modal",
    "dialog",
    "popup",
    "dropdown",
    "toolbar",
    "panel",
    "section",
    "container",
    "wrapper",
    "content",
    "main",
    "aside",
    "card",
    "item",
    "list",
    "table",
    "row",
    "column",
    "grid",
)


@dataclass(frozen=True, slots=True)
class SynthesisSettings:
    text_min_length: int = 3
    text_max_interactive: int = 1
    exact_text_limit: int = 50
    long_text_prefix: int = 30
    nested_text_limit: int = 30
    nested_text_prefix: int = 20
    link_direct_text_limit: int = 50
    semantic_depth: int = 3
    positional_depth: int = 2
    semantic_keywords: tuple[str, ...] = SEMANTIC_CLASS_KEYWORDS


DEFAULT_SETTINGS = SynthesisSettings()


@dataclass(slots=True)
class InspectorState:
    inspect_enabled: bool = False
    synthesis: SynthesisSettings = DEFAULT_SETTINGS


def _coerce_synthesis(payload: Any) -> SynthesisSettings:
    if not isinstance(payload, dict):
        return DEFAULT_SETTINGS

    overrides: dict[str, Any] = {}
    for item in fields(SynthesisSettings):
        if item.name not in payload:
            continue
        value = payload[item.name]
        if item.name == "semantic_keywords":
            if isinstance(value, list) and all(isinstance(token, str) for token in value):
                overrides[item.name] = tuple(token.strip().lower() for token in value if token.strip())
            continue
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            overrides[item.name] = value
    return replace(DEFAULT_SETTINGS, **overrides)


def load_settings(config_path: Path | None = None) -> InspectorState:
    path = config_path or CONFIG_PATH
    if not path.exists() or not path.is_file():
        return InspectorState()

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, TypeError):
        return InspectorState()

    if not isinstance(payload, dict):
        return InspectorState()

    return InspectorState(
        inspect_enabled=bool(payload.get("inspect_enabled", False)),
        synthesis=_coerce_synthesis(payload.get("synthesis")),
    )


def save_settings(state: InspectorState, config_path: Path | None = None) -> tuple[bool, str | None]:
    path = config_path or CONFIG_PATH

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return False, f"Could not create config folder: {exc}"

    synthesis = asdict(state.synthesis)
    synthesis["semantic_keywords"] = list(state.synthesis.semantic_keywords)
    payload = json.dumps(
        {"inspect_enabled": state.inspect_enabled, "synthesis": synthesis},
        ensure_ascii=True,
        indent=2,
        sort_keys=True,
    )
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            handle.write(payload)
            handle.flush()
            temp_path = Path(handle.name)

        if temp_path is None:
            return False, "Could not create temporary config file."
        temp_path.replace(path)
    except OSError as exc:
        if temp_path and temp_path.exists():
            temp_path.unlink(missing_ok=True)
        return False, f"Could not write settings: {exc}"

    return True, None
