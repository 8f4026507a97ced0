"""Rich rendering of a recorded key row for `touchbar render`."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from touchbar_core.models import Mode


def _describe(action: dict | None) -> str:
    if not action:
        return "-"
    if action.get("type") == "handler":
        return f"→ {action.get('mode')}"
    return str(action.get("command", "-"))


def render(mode: Mode, slots: list[dict], cwd: str) -> Panel:
    table = Table(box=None, expand=True)
    table.add_column("Key", justify="right", no_wrap=True, style="bold")
    table.add_column("Label", no_wrap=True)
    table.add_column("Action", overflow="fold")

    if not slots:
        table.add_row("-", Text("No keys bound", style="dim"), "-")
    else:
        for slot in slots:
            action = slot.get("action")
            style = "cyan" if action and action.get("type") == "handler" else "default"
            table.add_row(f"F{slot['slot']}", str(slot.get("label", "")), Text(_describe(action), style=style))

    title = f"[bold]Touch Bar ({mode.value})[/bold] [dim]{cwd}[/dim]"
    return Panel(table, title=title, border_style="cyan")
