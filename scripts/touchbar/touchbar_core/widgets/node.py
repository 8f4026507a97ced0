"""package.json script launcher widget."""

from __future__ import annotations

from touchbar_core.collectors import packages
from touchbar_core.models import KeyBinding, Mode
from touchbar_core.widgets import Probe, WidgetContext


class PackageScripts(Probe):
    name = "package_scripts"

    def applicable(self, ctx: WidgetContext) -> bool:
        return packages.find_manifest(ctx.cwd) is not None

    def render(self, ctx: WidgetContext) -> KeyBinding | None:
        manifest = packages.find_manifest(ctx.cwd)
        if manifest is None:
            return None
        runner = packages.script_runner(manifest, ctx.config.package_manager)
        return KeyBinding(f"⚡️ {runner} run", ctx.invoke(Mode.SCRIPTS))
