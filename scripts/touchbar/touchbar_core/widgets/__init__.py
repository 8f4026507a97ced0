"""Default-mode widgets: probes that each claim at most one key slot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from touchbar_core.keys import SLOT_COUNT
from touchbar_core.models import Invoke, KeyBinding, Mode
from touchbar_core.ports import KeyPort

logger = logging.getLogger(__name__)


@dataclass
class WidgetContext:
    """What a probe may look at during one render pass."""

    cwd: Path
    config: Any
    invoke: Callable[[Mode], Invoke]
    _memo: dict[str, Any] = field(default_factory=dict, repr=False)

    def memo(self, key: str, compute: Callable[[], Any]) -> Any:
        # shared by probes within a single pass only
        if key not in self._memo:
            self._memo[key] = compute()
        return self._memo[key]


class Probe:
    name = ""

    def applicable(self, ctx: WidgetContext) -> bool:
        return True

    def render(self, ctx: WidgetContext) -> KeyBinding | None:
        raise NotImplementedError


def render_pass(port: KeyPort, probes: list[Probe], ctx: WidgetContext, start_slot: int = 1) -> int:
    """Lay probes out left to right; returns the next free slot."""
    slot = start_slot
    for probe in probes:
        if slot > SLOT_COUNT:
            break
        try:
            if not probe.applicable(ctx):
                continue
            binding = probe.render(ctx)
        except Exception:
            logger.exception("widget %s failed", probe.name)
            continue
        if binding is None:
            continue
        port.set_label(slot, binding.label)
        port.bind(slot, binding.action)
        slot += 1
    return slot
