"""Submenu layouts: a back key followed by one key per list item."""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from touchbar_core.collectors import git, packages
from touchbar_core.keys import SLOT_COUNT
from touchbar_core.models import Invoke, Mode
from touchbar_core.ports import KeyPort
from touchbar_core.sources import Sources

logger = logging.getLogger(__name__)

BACK_LABEL = "👈 back"

COMPOSE_COMMANDS = ["up", "stop", "down", "build"]
ARTISAN_COMMANDS = ["serve", "migrate", "tinker", "route:list", "cache:clear"]


def render_list(
    port: KeyPort,
    names: list[str],
    template: str,
    back: Invoke,
    slot_count: int = SLOT_COUNT,
) -> int:
    """Bind slot 1 to ``back`` and the first ``slot_count - 1`` names after it.

    ``template`` receives the shell-quoted name as ``{name}``. Names with
    control characters are skipped. Returns how many names were bound; the
    rest are dropped, there is no second page.
    """
    port.set_label(1, BACK_LABEL)
    port.bind(1, back)

    # a newline would split the bindkey statement sent to the shell
    printable = [name for name in names if name.isprintable()]
    shown = printable[: max(0, slot_count - 1)]
    for offset, name in enumerate(shown):
        slot = offset + 2
        port.set_label(slot, name)
        port.bind_command(slot, template.format(name=shlex.quote(name)))
    return len(shown)


@dataclass
class SubmenuItems:
    names: list[str]
    template: str


def branch_items(cwd: Path, config: Any, sources: Sources) -> SubmenuItems | None:
    branches = git.list_branches(cwd)
    if branches is None:
        return None
    return SubmenuItems(sorted(branches)[: config.max_list_items], "git checkout {name}")


def script_items(cwd: Path, config: Any, sources: Sources) -> SubmenuItems | None:
    names = sources.scripts.items(cwd, config.max_list_items)
    manifest = packages.find_manifest(cwd)
    if names is None or manifest is None:
        return None
    runner = packages.script_runner(manifest, config.package_manager)
    return SubmenuItems(names, f"{runner} run {{name}}")


def task_items(cwd: Path, config: Any, sources: Sources) -> SubmenuItems | None:
    names = sources.tasks.items(cwd, config.max_list_items)
    if names is None:
        return None
    return SubmenuItems(names, "rake {name}")


def compose_items(cwd: Path, config: Any, sources: Sources) -> SubmenuItems:
    return SubmenuItems(list(COMPOSE_COMMANDS), "docker-compose {name}")


def framework_items(cwd: Path, config: Any, sources: Sources) -> SubmenuItems:
    return SubmenuItems(list(ARTISAN_COMMANDS), "php artisan {name}")


SUBMENUS: dict[Mode, Callable[[Path, Any, Sources], "SubmenuItems | None"]] = {
    Mode.BRANCHES: branch_items,
    Mode.SCRIPTS: script_items,
    Mode.TASKS: task_items,
    Mode.COMPOSE: compose_items,
    Mode.FRAMEWORK: framework_items,
}


def render_submenu(port: KeyPort, mode: Mode, cwd: Path, config: Any, sources: Sources, back: Invoke) -> int:
    items: SubmenuItems | None = None
    try:
        items = SUBMENUS[mode](cwd, config, sources)
    except Exception:
        logger.exception("submenu %s failed", mode.value)
    if items is None:
        items = SubmenuItems([], "")
    return render_list(port, items.names, items.template, back)
