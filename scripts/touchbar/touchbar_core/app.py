"""Command line entrypoint for the function key toolbar."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from rich.console import Console

from touchbar_core.collectors import rake
from touchbar_core.config import resolve_config
from touchbar_core.log import setup_logging
from touchbar_core.models import Mode
from touchbar_core.ports import RecordingPort, ZshPort
from touchbar_core.preview import render as render_preview
from touchbar_core.shell import init_script, serve
from touchbar_core.toolbar import Toolbar


def _json_output(mode: Mode, port: RecordingPort, cwd: Path) -> str:
    payload = {
        "mode": mode.value,
        "cwd": str(cwd),
        "slots": port.snapshot(),
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _cmd_init(args: argparse.Namespace, console: Console) -> int:
    sys.stdout.write(init_script(args.executable))
    return 0


def _cmd_serve(args: argparse.Namespace, console: Console) -> int:
    config = resolve_config(args.config)
    port = ZshPort()
    toolbar = Toolbar(port, config)
    try:
        return serve(toolbar, port, sys.stdin, sys.stdout)
    except KeyboardInterrupt:
        return 0


def _cmd_render(args: argparse.Namespace, console: Console) -> int:
    config = resolve_config(args.config)
    cwd = Path(args.cwd).resolve() if args.cwd else Path.cwd()
    port = RecordingPort()
    toolbar = Toolbar(port, config, cwd=cwd)
    toolbar.enter(Mode(args.mode))

    if args.json:
        print(_json_output(toolbar.mode, port, cwd))
        return 0

    console.print(render_preview(toolbar.mode, port.snapshot(), str(cwd)))
    return 0


def _cmd_refresh_tasks(args: argparse.Namespace, console: Console) -> int:
    cwd = Path(args.cwd).resolve() if args.cwd else Path.cwd()
    rakefile = rake.find_rakefile(cwd)
    if rakefile is None:
        console.print("[yellow]no Rakefile found[/yellow]")
        return 1

    console.print("[dim]generating rake task overview...[/dim]", highlight=False)
    tasks = rake.refresh(rakefile)
    if tasks is None:
        console.print("[red]rake --tasks failed[/red]")
        return 1
    for task in tasks:
        console.print(task, highlight=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="touchbar", description="Context-sensitive function key toolbar")
    parser.add_argument("--config", default=os.environ.get("TOUCHBAR_CONFIG"), help="Optional JSON config file")
    parser.add_argument("--log-level", help="Logging level (default WARNING)")
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Print the zsh integration script")
    init.add_argument("--executable", default="touchbar", help="Command the shell runs to start the server")
    init.set_defaults(handler=_cmd_init)

    serve_cmd = sub.add_parser("serve", help="Serve render requests from the shell on stdin")
    serve_cmd.set_defaults(handler=_cmd_serve)

    render = sub.add_parser("render", help="Render one mode and show the resulting key row")
    render.add_argument("--mode", default=Mode.DEFAULT.value, choices=[mode.value for mode in Mode])
    render.add_argument("--json", action="store_true", help="Emit JSON payload")
    render.add_argument("--cwd", help="Directory to render for")
    render.set_defaults(handler=_cmd_render)

    tasks = sub.add_parser("refresh-tasks", help="Regenerate .rake_tasks")
    tasks.add_argument("--cwd", help="Directory to look for a Rakefile from")
    tasks.set_defaults(handler=_cmd_refresh_tasks)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    # stdout belongs to the shell during serve; messages go to stderr
    console = Console(stderr=args.command == "serve")
    try:
        return args.handler(args, console)
    except ValueError as exc:
        Console(stderr=True).print(f"[red]touchbar: {exc}[/red]", highlight=False)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
