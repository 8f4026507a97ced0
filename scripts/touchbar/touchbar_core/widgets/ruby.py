"""Rake task launcher widget."""

from __future__ import annotations

from touchbar_core.collectors import rake
from touchbar_core.models import KeyBinding, Mode
from touchbar_core.widgets import Probe, WidgetContext


class RakeTasks(Probe):
    name = "rake_tasks"

    def applicable(self, ctx: WidgetContext) -> bool:
        return rake.find_rakefile(ctx.cwd) is not None

    def render(self, ctx: WidgetContext) -> KeyBinding:
        return KeyBinding("⚡️ rake tasks", ctx.invoke(Mode.TASKS))
