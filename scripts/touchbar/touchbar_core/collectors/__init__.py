"""Collector helpers shared by the project probes."""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

COMMAND_TIMEOUT = 8


def run_command(cmd: list[str], cwd: Path, timeout: int = COMMAND_TIMEOUT) -> subprocess.CompletedProcess | None:
    """Run an external query; ``None`` when the tool is missing or times out."""
    try:
        return subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        logger.debug("%s not installed", cmd[0])
        return None
    except NotADirectoryError:
        logger.debug("working directory unavailable: %s", cwd)
        return None
    except subprocess.TimeoutExpired:
        logger.debug("%s timed out after %ss", " ".join(cmd), timeout)
        return None


def command_output(cmd: list[str], cwd: Path, timeout: int = COMMAND_TIMEOUT) -> str | None:
    proc = run_command(cmd, cwd, timeout)
    if proc is None:
        return None
    if proc.returncode != 0:
        message = (proc.stderr or "").strip().splitlines()
        logger.debug("%s exited %s: %s", " ".join(cmd), proc.returncode, message[0] if message else "")
        return None
    return proc.stdout


def command_succeeds(cmd: list[str], cwd: Path) -> bool | None:
    """True/False on exit status, ``None`` when the command could not run."""
    proc = run_command(cmd, cwd)
    if proc is None:
        return None
    return proc.returncode == 0


def find_up(filename: str, start: Path) -> Path | None:
    current = start.resolve()
    for directory in [current, *current.parents]:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text())
    except (OSError, json.JSONDecodeError):
        return None


def mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


def is_newer(path: Path, than: Path) -> bool:
    left = mtime(path)
    right = mtime(than)
    if left is None or right is None:
        return False
    return left > right
