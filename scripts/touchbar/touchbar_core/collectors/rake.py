"""Rake task discovery backed by the on-disk .rake_tasks file."""

from __future__ import annotations

import logging
from pathlib import Path

from touchbar_core.collectors import command_output, find_up, is_newer, mtime

logger = logging.getLogger(__name__)

RAKEFILE = "Rakefile"
TASK_CACHE = ".rake_tasks"
RAILS_MARKERS = ("bin/rails", "script/rails")


def find_rakefile(cwd: Path) -> Path | None:
    return find_up(RAKEFILE, cwd)


def is_rails_app(root: Path) -> bool:
    return any((root / marker).exists() for marker in RAILS_MARKERS)


def tasks_changed(root: Path, cache: Path) -> bool:
    tasks_dir = root / "lib" / "tasks"
    if not tasks_dir.exists():
        return False
    cache_mtime = mtime(cache)
    if cache_mtime is None:
        return True
    candidates = [tasks_dir, *tasks_dir.rglob("*")]
    return any((mtime(path) or 0) > cache_mtime for path in candidates)


def needs_generating(rakefile: Path) -> bool:
    root = rakefile.parent
    cache = root / TASK_CACHE
    if not cache.is_file():
        return True
    if is_newer(rakefile, cache):
        return True
    return is_rails_app(root) and tasks_changed(root, cache)


def parse_task_listing(output: str) -> list[str]:
    # "rake db:migrate   # Migrate the database" -> "db:migrate"
    names = []
    for line in output.splitlines():
        parts = line.split()
        if len(parts) >= 2 and parts[0] == "rake":
            names.append(parts[1])
    return names


def generate(rakefile: Path) -> list[str] | None:
    root = rakefile.parent
    output = command_output(["rake", "--silent", "--tasks"], root, timeout=30)
    if output is None:
        return None
    names = parse_task_listing(output)
    try:
        (root / TASK_CACHE).write_text("".join(f"{name}\n" for name in names))
    except OSError as exc:
        logger.warning("could not write %s: %s", root / TASK_CACHE, exc)
    logger.info("generated %s with %d tasks", root / TASK_CACHE, len(names))
    return names


def read_tasks(rakefile: Path) -> list[str] | None:
    cache = rakefile.parent / TASK_CACHE
    try:
        return [line.strip() for line in cache.read_text().splitlines() if line.strip()]
    except OSError:
        return None


def load_tasks(rakefile: Path) -> list[str] | None:
    if needs_generating(rakefile):
        return generate(rakefile)
    return read_tasks(rakefile)


def refresh(rakefile: Path) -> list[str] | None:
    cache = rakefile.parent / TASK_CACHE
    if cache.exists():
        cache.unlink()
    return generate(rakefile)
