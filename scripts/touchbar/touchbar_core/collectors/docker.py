"""Docker compose file discovery."""

from __future__ import annotations

from pathlib import Path

from touchbar_core.collectors import find_up

COMPOSE_FILES = (
    "docker-compose.yml",
    "docker-compose.yaml",
    "compose.yml",
    "compose.yaml",
)


def find_compose_file(cwd: Path) -> Path | None:
    for name in COMPOSE_FILES:
        found = find_up(name, cwd)
        if found is not None:
            return found
    return None
