"""Git widgets: branch switcher, status indicators, pull and push."""

from __future__ import annotations

import shlex

from touchbar_core.collectors import git
from touchbar_core.models import KeyBinding, Mode, RunCommand
from touchbar_core.widgets import Probe, WidgetContext

CLEAN_LABEL = "🙌"
DIRTY_PREFIX = "🔥"


class GitProbe(Probe):
    def applicable(self, ctx: WidgetContext) -> bool:
        return ctx.memo("git.directory", lambda: git.is_git_directory(ctx.cwd))

    def branch(self, ctx: WidgetContext) -> str | None:
        return ctx.memo("git.branch", lambda: git.current_branch(ctx.cwd))


class GitBranch(GitProbe):
    name = "git_branch"

    def render(self, ctx: WidgetContext) -> KeyBinding | None:
        branch = self.branch(ctx)
        if not branch:
            return None
        return KeyBinding(f"🎋 {branch}", ctx.invoke(Mode.BRANCHES))


def status_label(indicators: str) -> str:
    if not indicators:
        return CLEAN_LABEL
    return f"{DIRTY_PREFIX}[{indicators}]"


class GitStatusWidget(GitProbe):
    name = "git_status"

    def render(self, ctx: WidgetContext) -> KeyBinding | None:
        status = git.collect_status(ctx.cwd)
        if status is None:
            return None
        indicators = git.status_indicators(status, ctx.config.glyphs)
        return KeyBinding(status_label(indicators), RunCommand("git status"))


class GitPull(GitProbe):
    name = "git_pull"

    def render(self, ctx: WidgetContext) -> KeyBinding | None:
        branch = self.branch(ctx)
        if not branch:
            return None
        return KeyBinding("⬇️ pull", RunCommand(f"git pull origin {shlex.quote(branch)}"))


class GitPush(GitProbe):
    name = "git_push"

    def render(self, ctx: WidgetContext) -> KeyBinding | None:
        branch = self.branch(ctx)
        if not branch:
            return None
        return KeyBinding("✉️ push", RunCommand(f"git push origin {shlex.quote(branch)}"))
