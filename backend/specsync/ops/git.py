"""
specsync — git command wrappers.

Each git action the workflow needs is a named function scoped to one
working directory. Failures raise GitCommandError instead of handing
back exit codes.
"""

from __future__ import annotations

import subprocess
from typing import Sequence

from specsync.errors import GitCommandError
from specsync.utils.logging import logger

GIT_CMD = "git"


def run_git(
    args: Sequence[str],
    cwd: str,
    capture: bool = True,
) -> str:
    """
    Run `git <args>` in `cwd` and return its stdout.

    With capture=False the command inherits the terminal, which is what
    `commit --edit` needs to open an editor; the return value is then "".
    """
    logger.debug("  $ git %s (cwd=%s)", " ".join(args), cwd)
    result = subprocess.run(
        [GIT_CMD, *args],
        cwd=cwd,
        capture_output=capture,
        text=True,
    )
    if result.returncode != 0:
        raise GitCommandError(list(args), result.returncode, result.stderr or "")
    return result.stdout or ""


def is_clean(directory: str) -> bool:
    """True when tracked files have no changes. Any git failure counts as dirty."""
    try:
        output = run_git(["status", "--porcelain", "--untracked-files=no"], cwd=directory)
    except (GitCommandError, OSError) as exc:
        logger.warning("  Could not read git status in %s: %s", directory, exc)
        return False
    return output.strip() == ""


def current_branch(directory: str) -> str:
    try:
        return run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=directory).strip()
    except (GitCommandError, OSError) as exc:
        logger.warning("  Could not read current branch in %s: %s", directory, exc)
        return ""


def add(directory: str, paths: Sequence[str]) -> None:
    if not paths:
        return
    run_git(["add", "--", *paths], cwd=directory)


def has_staged_changes(directory: str) -> bool:
    # `diff --cached --quiet` exits 1 when the index differs from HEAD
    try:
        run_git(["diff", "--cached", "--quiet"], cwd=directory)
    except GitCommandError as exc:
        if exc.returncode == 1:
            return True
        raise
    return False


def commit(directory: str, message: str, edit: bool = False) -> None:
    if edit:
        run_git(["commit", "--edit", "-m", message], cwd=directory, capture=False)
    else:
        run_git(["commit", "-m", message], cwd=directory)


def pull(directory: str) -> str:
    return run_git(["pull"], cwd=directory)


def push(directory: str) -> str:
    return run_git(["push"], cwd=directory)
