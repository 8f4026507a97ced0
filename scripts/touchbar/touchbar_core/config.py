"""Toolbar configuration: built-in defaults, JSON file, environment overrides."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from touchbar_core.keys import SLOT_COUNT
from touchbar_core.widgets.registry import DEFAULT_WIDGETS, validate_widget_names

DEFAULT_GLYPHS: dict[str, str] = {
    "uncommitted": "+",
    "unstaged": "!",
    "untracked": "?",
    "stashed": "$",
    "unpulled": "⇣",
    "unpushed": "⇡",
}

GLYPH_ENV = {
    "uncommitted": "GIT_UNCOMMITTED",
    "unstaged": "GIT_UNSTAGED",
    "untracked": "GIT_UNTRACKED",
    "stashed": "GIT_STASHED",
    "unpulled": "GIT_UNPULLED",
    "unpushed": "GIT_UNPUSHED",
}

PACKAGE_MANAGERS = ("yarn", "npm")


@dataclass
class ToolbarConfig:
    widgets: list[str] = field(default_factory=lambda: list(DEFAULT_WIDGETS))
    glyphs: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_GLYPHS))
    folder_command: str = "ls -la"
    package_manager: str = "yarn"
    max_list_items: int = 12
    return_to_default: bool = True


def load_user_config(path: str | None) -> dict:
    if not path:
        return {}

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise ValueError(f"config path not found: {config_path}")

    try:
        data = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON config: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("config root must be a JSON object")
    return data


def _widgets_from_config(value: object) -> list[str]:
    if isinstance(value, dict):
        # disable map: {"git_push": false}
        return [name for name in DEFAULT_WIDGETS if value.get(name, True)]
    if isinstance(value, list):
        return [str(name) for name in value]
    if isinstance(value, str):
        return value.split()
    raise ValueError(f"widgets must be a list, object or string, got {type(value).__name__}")


def _as_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def resolve_config(config_path: str | None = None, environ: Mapping[str, str] | None = None) -> ToolbarConfig:
    env = os.environ if environ is None else environ
    config = ToolbarConfig()
    user_config = load_user_config(config_path or env.get("TOUCHBAR_CONFIG"))

    if "widgets" in user_config:
        config.widgets = _widgets_from_config(user_config["widgets"])

    glyphs = user_config.get("glyphs")
    if isinstance(glyphs, dict):
        for name, glyph in glyphs.items():
            if name not in DEFAULT_GLYPHS:
                raise ValueError(f"unknown glyph: {name}")
            config.glyphs[name] = str(glyph)

    if "folder_command" in user_config:
        config.folder_command = str(user_config["folder_command"])
    if "package_manager" in user_config:
        config.package_manager = str(user_config["package_manager"])
    if "max_list_items" in user_config:
        config.max_list_items = int(user_config["max_list_items"])
    if "return_to_default" in user_config:
        config.return_to_default = _as_bool(user_config["return_to_default"])

    widgets_env = env.get("TOUCHBAR_WIDGETS") or env.get("ITERM_TOUCHBAR_KEYS")
    if widgets_env:
        config.widgets = widgets_env.split()
    for name, var in GLYPH_ENV.items():
        if env.get(var):
            config.glyphs[name] = env[var]
    if env.get("TOUCHBAR_FOLDER_COMMAND"):
        config.folder_command = env["TOUCHBAR_FOLDER_COMMAND"]
    if env.get("TOUCHBAR_PACKAGE_MANAGER"):
        config.package_manager = env["TOUCHBAR_PACKAGE_MANAGER"]

    validate_widget_names(config.widgets)
    if config.package_manager not in PACKAGE_MANAGERS:
        raise ValueError(f"unknown package manager: {config.package_manager}")
    config.max_list_items = min(max(1, config.max_list_items), SLOT_COUNT - 1)
    return config
