"""Git working-tree guard.

Keeps branch switches, pulls and installs from running against a dirty tree
by committing (or refusing) whatever is pending first.
"""

from __future__ import annotations

import sys

from .models import ChangedFile
from .prompt import Prompter
from .shell import git, info


def changed_files() -> list[ChangedFile]:
    """List uncommitted changes from `git status --porcelain -z`."""
    return ChangedFile.parse_porcelain(git("status", "--porcelain", "-z", strip=False))


def commit_files(files: list[ChangedFile], message: str) -> None:
    """Stage each file individually, then commit them with message."""
    for f in files:
        git("add", "--", f.path)
    git("commit", "-m", message)
    print(f"  Committed {len(files)} file(s): {message}")


def check_for_changes(
    prompter: Prompter,
    *,
    interactive: bool = True,
    fallback_message: str = "commit changed files",
) -> None:
    """Commit pending changes, asking first when interactive.

    Args:
        prompter: Source of the operator's answers in interactive mode.
        interactive: When False, commit everything with fallback_message
                     without asking.
        fallback_message: Commit message for non-interactive commits.

    Raises:
        SystemExit: With status 0 if the operator declines to commit.
    """
    info("Checking for changes")
    files = changed_files()
    if not files:
        return

    print("  You have uncommitted changes:")
    for f in files:
        print(f"    {f.status} {f.path}")

    if not interactive:
        commit_files(files, fallback_message)
        return

    if not prompter.confirm("Do you want to commit these changes?"):
        print("Aborting.....Please clean up your working tree.")
        sys.exit(0)
    commit_files(files, prompter.ask("Enter commit message"))
