"""Composer, Laravel and PHPUnit markers."""

from __future__ import annotations

from pathlib import Path

from touchbar_core.collectors import read_json

COMPOSER_MANIFEST = "composer.json"
COMPOSER_LOCK = "composer.lock"
PHPUNIT_CONFIGS = ("phpunit.xml.dist", "phpunit.xml")
LARAVEL_PACKAGE = "laravel/framework"


def has_composer(cwd: Path) -> bool:
    return (cwd / COMPOSER_MANIFEST).is_file()


def composer_command(cwd: Path) -> str:
    if (cwd / COMPOSER_LOCK).is_file():
        return "composer update"
    return "composer install"


def is_laravel_app(cwd: Path) -> bool:
    manifest = read_json(cwd / COMPOSER_MANIFEST)
    if not isinstance(manifest, dict):
        return False
    require = manifest.get("require")
    return isinstance(require, dict) and LARAVEL_PACKAGE in require


def has_phpunit(cwd: Path) -> bool:
    return any((cwd / name).is_file() for name in PHPUNIT_CONFIGS)


def phpunit_command(cwd: Path) -> str:
    if (cwd / "vendor" / "bin" / "phpunit").is_file():
        return "vendor/bin/phpunit"
    return "phpunit"
