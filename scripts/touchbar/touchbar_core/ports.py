"""Label/bind ports: where rendered key labels and bindings end up."""

from __future__ import annotations

import shlex
from typing import Any

from touchbar_core.keys import (
    FN_KEYS,
    clean_label,
    key_sequence,
    pop_labels_sequence,
    set_label_sequence,
)
from touchbar_core.models import Action, Invoke, RunCommand


class KeyPort:
    """Primitive label and binding operations for the physical key row."""

    def set_label(self, slot: int, text: str) -> None:
        raise NotImplementedError

    def clear_labels(self) -> None:
        raise NotImplementedError

    def bind_command(self, slot: int, command: str) -> None:
        raise NotImplementedError

    def bind_handler(self, slot: int, handler: Invoke) -> None:
        raise NotImplementedError

    def clear_bindings(self) -> None:
        raise NotImplementedError

    def bind(self, slot: int, action: Action) -> None:
        if isinstance(action, RunCommand):
            self.bind_command(slot, action.command)
        elif isinstance(action, Invoke):
            self.bind_handler(slot, action)
        else:
            raise TypeError(f"unsupported action: {action!r}")


class RecordingPort(KeyPort):
    """In-memory key row; keeps every call so renders can be compared."""

    def __init__(self) -> None:
        self.labels: dict[int, str] = {}
        self.bindings: dict[int, Action] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.executed: list[str] = []

    def set_label(self, slot: int, text: str) -> None:
        key_sequence(slot)
        self.labels[slot] = clean_label(text)
        self.calls.append(("set_label", slot, self.labels[slot]))

    def clear_labels(self) -> None:
        self.labels.clear()
        self.calls.append(("clear_labels",))

    def bind_command(self, slot: int, command: str) -> None:
        key_sequence(slot)
        self.bindings[slot] = RunCommand(command)
        self.calls.append(("bind_command", slot, command))

    def bind_handler(self, slot: int, handler: Invoke) -> None:
        key_sequence(slot)
        self.bindings[slot] = handler
        self.calls.append(("bind_handler", slot, handler.target.value))

    def clear_bindings(self) -> None:
        self.bindings.clear()
        self.calls.append(("clear_bindings",))

    def reset_calls(self) -> None:
        self.calls = []

    def press(self, slot: int) -> Action | None:
        action = self.bindings.get(slot)
        if isinstance(action, Invoke):
            action()
        elif isinstance(action, RunCommand):
            self.executed.append(action.command)
        return action

    def snapshot(self) -> list[dict[str, Any]]:
        slots = sorted(set(self.labels) | set(self.bindings))
        result = []
        for slot in slots:
            action = self.bindings.get(slot)
            result.append(
                {
                    "slot": slot,
                    "label": self.labels.get(slot, ""),
                    "action": action.to_dict() if action is not None else None,
                }
            )
        return result


NEWLINE_ESCAPE = "\\n"


def widget_name(handler: Invoke) -> str:
    return f"_touchbar_enter_{handler.target.value}"


class ZshPort(KeyPort):
    """Buffers zsh statements that apply the key row when evaluated by the shell."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def _emit(self, line: str) -> None:
        self._lines.append(line)

    def set_label(self, slot: int, text: str) -> None:
        self._emit(f"print -rn -- {shlex.quote(set_label_sequence(slot, text))}")

    def clear_labels(self) -> None:
        self._emit(f"print -rn -- {shlex.quote(pop_labels_sequence())}")

    def bind_command(self, slot: int, command: str) -> None:
        # bindkey -s expands the trailing \n into Enter.
        keys = shlex.quote(key_sequence(slot))
        self._emit(f"bindkey -s {keys} {shlex.quote(command + ' ' + NEWLINE_ESCAPE)}")

    def bind_handler(self, slot: int, handler: Invoke) -> None:
        self._emit(f"bindkey {shlex.quote(key_sequence(slot))} {widget_name(handler)}")

    def clear_bindings(self) -> None:
        for keys in FN_KEYS:
            self._emit(f"bindkey -s {shlex.quote(keys)} ''")

    def drain(self) -> list[str]:
        lines, self._lines = self._lines, []
        return lines
