"""Shell and git utilities.

Every external command (git, gh, npm) goes through run(), so failures are
reported the same way everywhere: the failing command line is printed and the
process exits with status 1. Also provides output formatting helpers and a
scoped working-directory switch.
"""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import NoReturn


def run(
    *args: str, check: bool = True, capture: bool = False
) -> subprocess.CompletedProcess[str]:
    """Run an external command.

    Args:
        *args: Command and arguments (e.g., "npm", "install").
        check: If True (default), a non-zero exit is fatal. Set to False
               for checks where a failed command is an answer.
        capture: If True, capture stdout/stderr as text instead of
                 streaming them to the terminal.

    Returns:
        CompletedProcess with returncode and, when captured, stdout.
    """
    try:
        result = subprocess.run(args, capture_output=capture, text=True)
    except FileNotFoundError:
        fatal(f"Error executing command: {' '.join(args)} (executable not found)")
    if check and result.returncode != 0:
        if capture and result.stderr:
            print(result.stderr.rstrip(), file=sys.stderr)
        fatal(f"Error executing command: {' '.join(args)}")
    return result


def git(*args: str, check: bool = True, strip: bool = True) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "status", "--porcelain").
        check: If True (default), exit on non-zero status.
        strip: Strip surrounding whitespace from the output. Porcelain
               output must keep its leading status columns.

    Returns:
        stdout from the git command.
    """
    out = run("git", *args, check=check, capture=True).stdout or ""
    return out.strip() if strip else out


def git_succeeds(*args: str) -> bool:
    """Return True if a git command exits zero (e.g., rev-parse --verify)."""
    return run("git", *args, check=False, capture=True).returncode == 0


def gh(*args: str) -> str:
    """Run a GitHub CLI command and return its stdout."""
    return run("gh", *args, capture=True).stdout or ""


@contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    """Change into path for the duration of the block.

    The previous directory is restored on every exit path, including
    SystemExit raised by fatal().
    """
    previous = Path.cwd()
    os.chdir(path)
    try:
        yield path
    finally:
        os.chdir(previous)


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate packages and major phases in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def info(msg: str) -> None:
    """Print an indented progress line."""
    print(f"  {msg}")


def warn(msg: str) -> None:
    """Print a warning for a skipped, non-fatal step."""
    print(f"WARNING: {msg}", file=sys.stderr)


def fatal(msg: str) -> NoReturn:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors that should halt the run.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)
