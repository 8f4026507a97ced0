"""Git queries (fail-soft): branch, dirty state, upstream distance."""

from __future__ import annotations

from pathlib import Path

from touchbar_core.collectors import command_output, command_succeeds, run_command
from touchbar_core.models import GitStatus


def is_git_directory(cwd: Path) -> bool:
    # Inside a work tree, but not inside the .git directory itself.
    output = command_output(["git", "rev-parse", "--is-inside-git-dir"], cwd)
    return output is not None and output.strip() == "false"


def current_branch(cwd: Path) -> str | None:
    proc = run_command(["git", "symbolic-ref", "--quiet", "HEAD"], cwd)
    if proc is None:
        return None
    if proc.returncode == 0:
        ref = proc.stdout.strip()
        return ref[len("refs/heads/"):] if ref.startswith("refs/heads/") else ref
    if proc.returncode == 128:
        return None

    # detached HEAD
    output = command_output(["git", "rev-parse", "--short", "HEAD"], cwd)
    if output is None or not output.strip():
        return None
    return output.strip()


def list_branches(cwd: Path) -> list[str] | None:
    output = command_output(["git", "branch", "--format=%(refname:short)"], cwd)
    if output is None:
        return None
    return [line.strip() for line in output.splitlines() if line.strip()]


def upstream_distance(cwd: Path) -> tuple[int, int] | None:
    """(ahead, behind) against ``@{u}``; ``None`` without an upstream."""
    if not command_succeeds(["git", "rev-parse", "--abbrev-ref", "@{u}"], cwd):
        return None

    output = command_output(["git", "rev-list", "--left-right", "--count", "HEAD...@{u}"], cwd)
    if output is None:
        return None
    parts = output.split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def collect_status(cwd: Path) -> GitStatus | None:
    run_command(["git", "update-index", "--really-refresh", "-q"], cwd)

    staged_clean = command_succeeds(["git", "diff", "--quiet", "--ignore-submodules", "--cached"], cwd)
    if staged_clean is None:
        return None
    worktree_clean = command_succeeds(["git", "diff-files", "--quiet", "--ignore-submodules", "--"], cwd)
    untracked = command_output(["git", "ls-files", "--others", "--exclude-standard"], cwd)
    stashed = command_succeeds(["git", "rev-parse", "--verify", "--quiet", "refs/stash"], cwd)

    status = GitStatus(
        uncommitted=not staged_clean,
        unstaged=worktree_clean is False,
        untracked=bool(untracked and untracked.strip()),
        stashed=bool(stashed),
    )
    distance = upstream_distance(cwd)
    if distance is not None:
        status.ahead, status.behind = distance
    return status


def status_indicators(status: GitStatus, glyphs: dict[str, str]) -> str:
    indicators = ""
    if status.uncommitted:
        indicators += glyphs["uncommitted"]
    if status.unstaged:
        indicators += glyphs["unstaged"]
    if status.untracked:
        indicators += glyphs["untracked"]
    if status.stashed:
        indicators += glyphs["stashed"]
    if (status.behind or 0) > 0:
        indicators += glyphs["unpulled"]
    if (status.ahead or 0) > 0:
        indicators += glyphs["unpushed"]
    return indicators
