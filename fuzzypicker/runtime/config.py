"""Persistent JSON config helpers.

Stores picker preferences: UI theme, prompt, mouse reporting, and the
double-click interval. All access is defensive: malformed or missing config
falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..input.key_picker import DOUBLE_CLICK_SECONDS
from ..ui_theme import normalize_theme_name

logger = logging.getLogger(__name__)

APP_NAME = "fuzzypicker"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_PROMPT = "> "


@dataclass(frozen=True)
class PickerOptions:
    """Resolved presentation and interaction settings for one picker."""

    prompt: str = DEFAULT_PROMPT
    theme: str = "default"
    no_color: bool = False
    mouse: bool = True
    double_click_seconds: float = DOUBLE_CLICK_SECONDS


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never breaks a pick session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_theme_name(config: dict[str, object] | None = None) -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = (load_config() if config is None else config).get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = normalize_theme_name(stripped)
    save_config(config)


def load_prompt(config: dict[str, object] | None = None) -> str:
    value = (load_config() if config is None else config).get("prompt")
    if not isinstance(value, str) or not value.isprintable():
        return DEFAULT_PROMPT
    return value


def load_mouse_enabled(config: dict[str, object] | None = None) -> bool:
    """Return the mouse preference; only explicit booleans are accepted."""
    value = (load_config() if config is None else config).get("mouse")
    return value if isinstance(value, bool) else True


def load_double_click_seconds(config: dict[str, object] | None = None) -> float:
    value = (load_config() if config is None else config).get("double_click_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DOUBLE_CLICK_SECONDS
    return float(value)


def load_picker_options(
    *,
    prompt: str | None = None,
    theme: str | None = None,
    no_color: bool = False,
    mouse: bool | None = None,
    config: dict[str, object] | None = None,
) -> PickerOptions:
    """Build :class:`PickerOptions` from the config file plus explicit overrides."""
    data = load_config() if config is None else config
    return PickerOptions(
        prompt=prompt if prompt is not None else load_prompt(data),
        theme=normalize_theme_name(theme if theme is not None else load_theme_name(data)),
        no_color=no_color,
        mouse=mouse if mouse is not None else load_mouse_enabled(data),
        double_click_seconds=load_double_click_seconds(data),
    )
