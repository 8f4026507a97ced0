"""Current directory widget."""

from __future__ import annotations

from pathlib import Path

from touchbar_core.models import KeyBinding, RunCommand
from touchbar_core.widgets import Probe, WidgetContext


def short_path(path: Path) -> str:
    parts = [part for part in path.parts if part not in ("/", "")]
    return "/".join(parts[-2:]) if parts else "/"


class CurrentFolder(Probe):
    name = "current_folder"

    def render(self, ctx: WidgetContext) -> KeyBinding:
        return KeyBinding(f"👉 {short_path(ctx.cwd)}", RunCommand(ctx.config.folder_command))
