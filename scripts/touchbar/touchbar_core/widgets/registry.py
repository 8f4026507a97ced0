"""Widget name registry and default order."""

from __future__ import annotations

from touchbar_core.widgets import Probe
from touchbar_core.widgets.docker import DockerCompose
from touchbar_core.widgets.folder import CurrentFolder
from touchbar_core.widgets.git import GitBranch, GitPull, GitPush, GitStatusWidget
from touchbar_core.widgets.node import PackageScripts
from touchbar_core.widgets.php import Artisan, Composer, PhpUnit
from touchbar_core.widgets.ruby import RakeTasks

WIDGETS: dict[str, type[Probe]] = {
    probe.name: probe
    for probe in (
        CurrentFolder,
        GitBranch,
        GitStatusWidget,
        GitPull,
        GitPush,
        PackageScripts,
        RakeTasks,
        Artisan,
        DockerCompose,
        Composer,
        PhpUnit,
    )
}

DEFAULT_WIDGETS = list(WIDGETS)


def validate_widget_names(names: list[str]) -> None:
    unknown = [name for name in names if name not in WIDGETS]
    if unknown:
        raise ValueError(f"unknown widget(s): {', '.join(unknown)}")


def resolve_widgets(names: list[str]) -> list[Probe]:
    validate_widget_names(names)
    return [WIDGETS[name]() for name in names]
