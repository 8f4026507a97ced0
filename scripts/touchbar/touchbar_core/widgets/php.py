"""Composer, Laravel artisan and PHPUnit widgets."""

from __future__ import annotations

from touchbar_core.collectors import php
from touchbar_core.models import KeyBinding, Mode, RunCommand
from touchbar_core.widgets import Probe, WidgetContext


class Artisan(Probe):
    name = "artisan"

    def applicable(self, ctx: WidgetContext) -> bool:
        return php.is_laravel_app(ctx.cwd)

    def render(self, ctx: WidgetContext) -> KeyBinding:
        return KeyBinding("⚡️ artisan", ctx.invoke(Mode.FRAMEWORK))


class Composer(Probe):
    name = "composer"

    def applicable(self, ctx: WidgetContext) -> bool:
        return php.has_composer(ctx.cwd)

    def render(self, ctx: WidgetContext) -> KeyBinding:
        return KeyBinding("⚡️ composer", RunCommand(php.composer_command(ctx.cwd)))


class PhpUnit(Probe):
    name = "phpunit"

    def applicable(self, ctx: WidgetContext) -> bool:
        return php.has_phpunit(ctx.cwd)

    def render(self, ctx: WidgetContext) -> KeyBinding:
        return KeyBinding("⚡️ phpunit", RunCommand(php.phpunit_command(ctx.cwd)))
