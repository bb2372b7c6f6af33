"""Branch checkout for the issue under the cursor.

Shells out to the ``git`` executable in the current working directory.
Uncommitted changes are carried across the checkout; if git cannot carry
them (conflicting files) it refuses and the error is reported instead.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import structlog

from lin_cli.core.exceptions import CheckoutError

logger = structlog.get_logger()


def _git(args: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    git = shutil.which("git")
    if git is None:
        raise CheckoutError("git executable not found on PATH")
    return subprocess.run(
        [git, *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
    )


def branch_exists(branch_name: str, cwd: Path | None = None) -> bool:
    """Return True if a local branch named *branch_name* exists."""
    result = _git(
        ["rev-parse", "--verify", "--quiet", f"refs/heads/{branch_name}"],
        cwd or Path.cwd(),
    )
    return result.returncode == 0


def checkout_branch(branch_name: str, cwd: Path | None = None) -> bool:
    """Check out *branch_name*, creating it from HEAD if it does not exist.

    Returns True if the branch was newly created.  Raises
    :class:`CheckoutError` with git's message on any failure.
    """
    if not branch_name:
        raise CheckoutError("Issue has no branch name")

    repo = cwd or Path.cwd()
    inside = _git(["rev-parse", "--is-inside-work-tree"], repo)
    if inside.returncode != 0 or inside.stdout.strip() != "true":
        raise CheckoutError(f"Not a git repository: {repo}")

    create = not branch_exists(branch_name, repo)
    args = ["checkout", "-b", branch_name] if create else ["checkout", branch_name]
    result = _git(args, repo)
    if result.returncode != 0:
        message = result.stderr.strip() or result.stdout.strip() or "git checkout failed"
        logger.warning("checkout_failed", branch=branch_name, error=message)
        raise CheckoutError(f"Error checking out branch '{branch_name}': {message}")

    logger.info("branch_checked_out", branch=branch_name, created=create)
    return create
