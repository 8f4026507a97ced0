from __future__ import annotations

import json
import os
import tempfile
import time
import unittest
from pathlib import Path
from unittest import mock
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from touchbar_core.collectors import find_up, packages, rake  # noqa: E402
from touchbar_core.sources import CachedList, ScriptSource, TaskSource  # noqa: E402


class CountingLoader:
    def __init__(self, result=None):
        self.calls: list[Path] = []
        self.result = result

    def __call__(self, scope: Path):
        self.calls.append(scope)
        if self.result is not None:
            return list(self.result)
        return [f"item-{len(self.calls)}"]


def write_manifest(directory: Path, scripts: dict) -> Path:
    manifest = directory / "package.json"
    manifest.write_text(json.dumps({"name": directory.name, "scripts": scripts}))
    return manifest


class CachedListTests(unittest.TestCase):
    def test_same_scope_fetches_once(self):
        loader = CountingLoader()
        cache = CachedList(loader)
        first = cache.fetch(Path("/a/package.json"))
        second = cache.fetch(Path("/a/package.json"))
        self.assertEqual(first, second)
        self.assertEqual(len(loader.calls), 1)

    def test_scope_change_refetches_once(self):
        loader = CountingLoader()
        cache = CachedList(loader)
        cache.fetch(Path("/a/package.json"))
        cache.fetch(Path("/b/package.json"))
        cache.fetch(Path("/b/package.json"))
        self.assertEqual(loader.calls, [Path("/a/package.json"), Path("/b/package.json")])
        self.assertEqual(cache.key, Path("/b/package.json"))

    def test_failed_load_is_not_cached(self):
        results = [None, ["build"]]
        cache = CachedList(lambda scope: results.pop(0))
        self.assertIsNone(cache.fetch(Path("/a/package.json")))
        self.assertEqual(cache.fetch(Path("/a/package.json")), ["build"])

    def test_invalidate(self):
        loader = CountingLoader()
        cache = CachedList(loader)
        cache.fetch(Path("/a/package.json"))
        cache.invalidate()
        cache.fetch(Path("/a/package.json"))
        self.assertEqual(len(loader.calls), 2)

    def test_returned_list_is_a_copy(self):
        cache = CachedList(CountingLoader(["a", "b"]))
        cache.fetch(Path("/a")).append("c")
        self.assertEqual(cache.fetch(Path("/a")), ["a", "b"])


class ScriptSourceTests(unittest.TestCase):
    def test_scope_is_nearest_manifest(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            project = root / "app"
            nested = project / "src" / "components"
            nested.mkdir(parents=True)
            write_manifest(project, {"build": "x"})
            other = root / "other"
            other.mkdir()
            write_manifest(other, {"test": "x"})

            loader = CountingLoader(["test", "build", "lint"])
            source = ScriptSource(loader)
            self.assertEqual(source.items(project, 12), ["build", "lint", "test"])
            source.items(nested, 12)
            self.assertEqual(len(loader.calls), 1)
            source.items(other, 12)
            self.assertEqual(len(loader.calls), 2)
            self.assertEqual(loader.calls[1], (other / "package.json").resolve())

    def test_no_manifest(self):
        with tempfile.TemporaryDirectory() as tmp:
            loader = CountingLoader()
            self.assertIsNone(ScriptSource(loader).items(Path(tmp), 12))
            self.assertEqual(loader.calls, [])

    def test_select_scripts_filters_namespaced_sorts_and_caps(self):
        names = ["watch", "build:css", "build", "lint", "test", "dev"]
        self.assertEqual(packages.select_scripts(names, 3), ["build", "dev", "lint"])

    def test_enumerate_scripts_reads_npm_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            manifest = write_manifest(Path(tmp), {"ignored": "x"})
            output = json.dumps({"start": "node .", "build": "tsc"})
            with mock.patch.object(packages, "command_output", return_value=output) as run:
                self.assertEqual(packages.enumerate_scripts(manifest), ["start", "build"])
            run.assert_called_once()
            self.assertEqual(run.call_args[0][0], ["npm", "run", "--json"])

    def test_enumerate_scripts_falls_back_to_manifest(self):
        with tempfile.TemporaryDirectory() as tmp:
            manifest = write_manifest(Path(tmp), {"build": "x", "test": "y"})
            with mock.patch.object(packages, "command_output", return_value=None):
                self.assertEqual(packages.enumerate_scripts(manifest), ["build", "test"])

    def test_enumerate_scripts_invalid_manifest(self):
        with tempfile.TemporaryDirectory() as tmp:
            manifest = Path(tmp) / "package.json"
            manifest.write_text("{broken")
            with mock.patch.object(packages, "command_output", return_value="not json"):
                self.assertIsNone(packages.enumerate_scripts(manifest))

    def test_script_runner_prefers_lockfile(self):
        with tempfile.TemporaryDirectory() as tmp:
            manifest = write_manifest(Path(tmp), {})
            self.assertEqual(packages.script_runner(manifest, "yarn"), "yarn")
            self.assertEqual(packages.script_runner(manifest, "npm"), "npm")
            (Path(tmp) / "package-lock.json").write_text("{}")
            self.assertEqual(packages.script_runner(manifest, "yarn"), "npm")
            (Path(tmp) / "yarn.lock").write_text("")
            self.assertEqual(packages.script_runner(manifest, "npm"), "yarn")

    def test_find_up(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a" / "b").mkdir(parents=True)
            (root / "Rakefile").write_text("")
            self.assertEqual(find_up("Rakefile", root / "a" / "b"), (root / "Rakefile").resolve())
            self.assertIsNone(find_up("definitely-not-here.marker", root / "a"))


class RakeTaskTests(unittest.TestCase):
    LISTING = (
        "rake db:migrate          # Migrate the database\n"
        "rake assets:precompile   # Compile all the assets\n"
        "rake test                # Run tests\n"
    )

    def test_parse_task_listing(self):
        self.assertEqual(
            rake.parse_task_listing(self.LISTING),
            ["db:migrate", "assets:precompile", "test"],
        )

    def test_generate_writes_cache_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            rakefile = Path(tmp) / "Rakefile"
            rakefile.write_text("task :default")
            with mock.patch.object(rake, "command_output", return_value=self.LISTING):
                tasks = rake.load_tasks(rakefile)
            self.assertEqual(tasks, ["db:migrate", "assets:precompile", "test"])
            self.assertEqual(
                (Path(tmp) / ".rake_tasks").read_text(),
                "db:migrate\nassets:precompile\ntest\n",
            )

    def test_fresh_cache_file_is_read_without_rake(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            rakefile = root / "Rakefile"
            rakefile.write_text("")
            cache = root / ".rake_tasks"
            cache.write_text("b\na\n")
            past = time.time() - 100
            os.utime(rakefile, (past, past))
            self.assertFalse(rake.needs_generating(rakefile))
            with mock.patch.object(rake, "command_output") as run:
                self.assertEqual(rake.load_tasks(rakefile), ["b", "a"])
            run.assert_not_called()

    def test_needs_generating_rules(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            rakefile = root / "Rakefile"
            rakefile.write_text("")
            self.assertTrue(rake.needs_generating(rakefile))

            cache = root / ".rake_tasks"
            cache.write_text("a\n")
            now = time.time()
            os.utime(cache, (now - 50, now - 50))
            os.utime(rakefile, (now, now))
            self.assertTrue(rake.needs_generating(rakefile))

            os.utime(rakefile, (now - 100, now - 100))
            self.assertFalse(rake.needs_generating(rakefile))

            # rails apps also watch lib/tasks
            (root / "bin").mkdir()
            (root / "bin" / "rails").write_text("")
            task_file = root / "lib" / "tasks" / "deploy.rake"
            task_file.parent.mkdir(parents=True)
            task_file.write_text("")
            os.utime(task_file, (now, now))
            self.assertTrue(rake.needs_generating(rakefile))

    def test_refresh_regenerates(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            rakefile = root / "Rakefile"
            rakefile.write_text("")
            (root / ".rake_tasks").write_text("stale\n")
            with mock.patch.object(rake, "command_output", return_value="rake fresh  # new\n"):
                self.assertEqual(rake.refresh(rakefile), ["fresh"])
            self.assertEqual((root / ".rake_tasks").read_text(), "fresh\n")

    def test_task_source_sorts_and_caches(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            rakefile = root / "Rakefile"
            rakefile.write_text("")
            (root / ".rake_tasks").write_text("")
            past = time.time() - 100
            os.utime(rakefile, (past, past))
            loader = CountingLoader(["test", "db:migrate", "assets"])
            source = TaskSource(loader)
            self.assertEqual(source.items(root, 2), ["assets", "db:migrate"])
            source.items(root, 2)
            self.assertEqual(len(loader.calls), 1)

    def test_task_source_reloads_after_rakefile_edit(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            rakefile = root / "Rakefile"
            rakefile.write_text("")
            (root / ".rake_tasks").write_text("")
            now = time.time()
            os.utime(rakefile, (now - 100, now - 100))
            loader = CountingLoader(["build"])
            source = TaskSource(loader)
            source.items(root, 12)
            source.items(root, 12)
            self.assertEqual(len(loader.calls), 1)

            os.utime(rakefile, (now + 100, now + 100))
            source.items(root, 12)
            self.assertEqual(len(loader.calls), 2)


if __name__ == "__main__":
    unittest.main()
