"""package.json script discovery."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from touchbar_core.collectors import command_output, find_up, read_json

logger = logging.getLogger(__name__)

MANIFEST = "package.json"

LOCKFILE_RUNNERS = [
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
]


def find_manifest(cwd: Path) -> Path | None:
    return find_up(MANIFEST, cwd)


def script_runner(manifest: Path, preference: str = "yarn") -> str:
    for lockfile, runner in LOCKFILE_RUNNERS:
        if (manifest.parent / lockfile).is_file():
            return runner
    return preference


def _script_names(payload: object) -> list[str] | None:
    if not isinstance(payload, dict):
        return None
    return [str(name) for name in payload]


def enumerate_scripts(manifest: Path) -> list[str] | None:
    """Script names as npm reports them, falling back to the manifest itself."""
    output = command_output(["npm", "run", "--json"], manifest.parent, timeout=15)
    if output is not None and output.strip():
        try:
            names = _script_names(json.loads(output))
        except json.JSONDecodeError:
            logger.debug("invalid JSON from npm run --json in %s", manifest.parent)
            names = None
        if names is not None:
            return names

    data = read_json(manifest)
    if not isinstance(data, dict):
        logger.debug("%s missing or invalid", manifest)
        return None
    return _script_names(data.get("scripts") or {})


def select_scripts(names: list[str], limit: int) -> list[str]:
    # namespaced scripts such as "build:css" are left out of the key row
    visible = [name for name in names if ":" not in name]
    return sorted(visible)[:limit]
