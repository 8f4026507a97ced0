"""Docker compose launcher widget."""

from __future__ import annotations

from touchbar_core.collectors import docker
from touchbar_core.models import KeyBinding, Mode
from touchbar_core.widgets import Probe, WidgetContext


class DockerCompose(Probe):
    name = "docker_compose"

    def applicable(self, ctx: WidgetContext) -> bool:
        return docker.find_compose_file(ctx.cwd) is not None

    def render(self, ctx: WidgetContext) -> KeyBinding:
        return KeyBinding("⚡️ docker", ctx.invoke(Mode.COMPOSE))
