"""Shared model contracts for toolbar state and key bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Union


class Mode(str, Enum):
    DEFAULT = "default"
    BRANCHES = "branches"
    SCRIPTS = "scripts"
    TASKS = "tasks"
    COMPOSE = "compose"
    FRAMEWORK = "framework"


@dataclass(frozen=True)
class RunCommand:
    command: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "command", "command": self.command}


@dataclass(frozen=True)
class Invoke:
    """Switch the toolbar to ``target``; ``handler`` performs the switch in-process."""

    target: Mode
    handler: Callable[[], None] = field(compare=False, repr=False)

    def __call__(self) -> None:
        self.handler()

    def to_dict(self) -> dict[str, Any]:
        return {"type": "handler", "mode": self.target.value}


Action = Union[RunCommand, Invoke]


@dataclass(frozen=True)
class KeyBinding:
    label: str
    action: Action


@dataclass
class GitStatus:
    uncommitted: bool = False
    unstaged: bool = False
    untracked: bool = False
    stashed: bool = False
    ahead: int | None = None
    behind: int | None = None

