"""zsh integration: glue script and the coprocess line protocol."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import IO

from touchbar_core.models import Mode
from touchbar_core.ports import ZshPort
from touchbar_core.toolbar import Toolbar

logger = logging.getLogger(__name__)

END_MARKER = "#touchbar-end"

GLUE_HEADER = """\
# touchbar: function key toolbar driven by a long-running coprocess
coproc {command} serve
exec {{_touchbar_out}}>&p {{_touchbar_in}}<&p

_touchbar_request() {{
  print -u $_touchbar_out -r -- "$1"$'\\t'"${{2:-}}"$'\\t'"$PWD"
  local line
  while IFS= read -u $_touchbar_in -r line; do
    [[ $line == '{end}' ]] && break
    eval "$line"
  done
}}

_touchbar_precmd() {{
  _touchbar_request prompt
}}
"""

WIDGET_TEMPLATE = """\
_touchbar_enter_{mode}() {{
  _touchbar_request enter {mode}
}}
zle -N _touchbar_enter_{mode}
"""

GLUE_FOOTER = """\
rake_refresh() {{
  {command} refresh-tasks && _touchbar_request refresh
}}

autoload -Uz add-zsh-hook
add-zsh-hook precmd _touchbar_precmd
"""


def init_script(executable: str = "touchbar") -> str:
    parts = [GLUE_HEADER.format(command=shlex.quote(executable), end=END_MARKER)]
    for mode in Mode:
        parts.append(WIDGET_TEMPLATE.format(mode=mode.value))
    parts.append(GLUE_FOOTER.format(command=shlex.quote(executable)))
    return "\n".join(parts)


def handle_request(toolbar: Toolbar, line: str) -> None:
    fields = line.rstrip("\n").split("\t", 2)
    verb = fields[0]
    arg = fields[1] if len(fields) > 1 else ""
    if len(fields) > 2 and fields[2]:
        toolbar.cwd = Path(fields[2])

    if verb == "prompt":
        toolbar.prompt()
    elif verb == "refresh":
        toolbar.sources.invalidate()
        toolbar.refresh()
    elif verb == "enter":
        toolbar.enter(Mode(arg))
    else:
        raise ValueError(f"unknown request: {verb!r}")


def serve(toolbar: Toolbar, port: ZshPort, stdin: IO[str], stdout: IO[str]) -> int:
    for line in iter(stdin.readline, ""):
        if not line.strip():
            continue
        try:
            handle_request(toolbar, line)
        except ValueError as exc:
            logger.warning("ignoring request %r: %s", line.strip(), exc)
            port.drain()
        for statement in port.drain():
            stdout.write(statement + "\n")
        stdout.write(END_MARKER + "\n")
        stdout.flush()
    return 0
