"""Submenu data sources with single-entry caches scoped by manifest path."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Hashable

from touchbar_core.collectors import packages, rake

logger = logging.getLogger(__name__)

Loader = Callable[[Path], "list[str] | None"]


class CachedList:
    """Remembers the last list fetched and the scope key it was fetched for."""

    def __init__(self, loader: Loader) -> None:
        self._loader = loader
        self._key: Hashable | None = None
        self._items: list[str] | None = None

    @property
    def key(self) -> Hashable | None:
        return self._key

    def fetch(self, scope_key: Path) -> list[str] | None:
        if self._items is not None and scope_key == self._key:
            return list(self._items)

        items = self._loader(scope_key)
        if items is None:
            # failures are retried on the next fetch
            logger.debug("loader returned nothing for %s", scope_key)
            return None
        self._key = scope_key
        self._items = list(items)
        return list(self._items)

    def invalidate(self) -> None:
        self._key = None
        self._items = None


class ScriptSource:
    def __init__(self, loader: Loader = packages.enumerate_scripts) -> None:
        self.cache = CachedList(loader)

    def items(self, cwd: Path, limit: int) -> list[str] | None:
        manifest = packages.find_manifest(cwd)
        if manifest is None:
            return None
        names = self.cache.fetch(manifest.resolve())
        if names is None:
            return None
        return packages.select_scripts(names, limit)


class TaskSource:
    def __init__(self, loader: Loader = rake.load_tasks) -> None:
        self.cache = CachedList(loader)

    def items(self, cwd: Path, limit: int) -> list[str] | None:
        rakefile = rake.find_rakefile(cwd)
        if rakefile is None:
            return None
        scope = rakefile.resolve()
        if self.cache.key == scope and rake.needs_generating(rakefile):
            # Rakefile or lib/tasks changed since .rake_tasks was written
            self.cache.invalidate()
        names = self.cache.fetch(scope)
        if names is None:
            return None
        return sorted(names)[:limit]


class Sources:
    """The cached sources owned by one toolbar."""

    def __init__(self, scripts: ScriptSource | None = None, tasks: TaskSource | None = None) -> None:
        self.scripts = scripts or ScriptSource()
        self.tasks = tasks or TaskSource()

    def invalidate(self) -> None:
        self.scripts.cache.invalidate()
        self.tasks.cache.invalidate()
