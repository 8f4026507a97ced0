"""Toolbar state machine: one active mode, fully re-rendered on every refresh."""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path

from touchbar_core.config import ToolbarConfig
from touchbar_core.models import Invoke, Mode
from touchbar_core.ports import KeyPort
from touchbar_core.sources import Sources
from touchbar_core.submenus import render_submenu
from touchbar_core.widgets import WidgetContext, render_pass
from touchbar_core.widgets.registry import resolve_widgets

logger = logging.getLogger(__name__)


class Toolbar:
    """Owns the current mode and redraws the key row through ``port``.

    ``prompt()`` is the pre-prompt hook. A prompt only comes back after a
    command ran, so with ``config.return_to_default`` any open submenu is
    closed there; otherwise the submenu is redrawn until "back" is pressed.
    """

    def __init__(
        self,
        port: KeyPort,
        config: ToolbarConfig | None = None,
        sources: Sources | None = None,
        cwd: Path | None = None,
    ) -> None:
        self.port = port
        self.config = config or ToolbarConfig()
        self.sources = sources or Sources()
        self.cwd = cwd
        self.probes = resolve_widgets(self.config.widgets)
        self._mode = Mode.DEFAULT

    @property
    def mode(self) -> Mode:
        return self._mode

    def working_directory(self) -> Path:
        return Path(self.cwd) if self.cwd is not None else Path.cwd()

    def invoke(self, mode: Mode) -> Invoke:
        return Invoke(mode, partial(self.enter, mode))

    def refresh(self) -> None:
        self.port.clear_labels()
        self.port.clear_bindings()

        cwd = self.working_directory()
        if self._mode is Mode.DEFAULT:
            ctx = WidgetContext(cwd=cwd, config=self.config, invoke=self.invoke)
            render_pass(self.port, self.probes, ctx)
        else:
            render_submenu(
                self.port,
                self._mode,
                cwd,
                self.config,
                self.sources,
                back=self.invoke(Mode.DEFAULT),
            )

    def enter(self, mode: Mode) -> None:
        logger.debug("entering %s", mode.value)
        self._mode = Mode(mode)
        self.refresh()

    def return_to_default(self) -> None:
        self.enter(Mode.DEFAULT)

    def prompt(self) -> None:
        if self.config.return_to_default and self._mode is not Mode.DEFAULT:
            logger.debug("command finished, leaving %s", self._mode.value)
            self._mode = Mode.DEFAULT
        self.refresh()
