"""Package descriptor resolution.

Package checkouts live side by side with the tool's own checkout:

    <workspace>/sfra-release/       (this tool)
    <workspace>/lib_productlist/
    <workspace>/plugin-applepay/
    ...
"""

from __future__ import annotations

from pathlib import Path

from .models import DEFAULT_BASE_BRANCHES, PackageInfo, ReleaseConfig
from .shell import fatal, warn

TOOL_DIR = Path(__file__).resolve().parent


def base_branch_for(name: str, config: ReleaseConfig) -> str:
    """Return the base branch for a package.

    Configured overrides win, then the built-in mapping, then the
    configured default branch.
    """
    if name in config.base_branches:
        return config.base_branches[name]
    return DEFAULT_BASE_BRANCHES.get(name, config.default_branch)


def find_workspace(config: ReleaseConfig, tool_dir: Path = TOOL_DIR) -> Path:
    """Locate the directory holding all package checkouts.

    Uses config.workspace when set. Otherwise tool_dir must sit inside a
    path component named config.anchor, and everything before that
    component is the workspace.

    Raises:
        SystemExit: If the anchor is not part of tool_dir.
    """
    if config.workspace is not None:
        return config.workspace.expanduser().resolve()
    parts = tool_dir.parts
    if config.anchor not in parts:
        fatal(
            f"{tool_dir} is not inside a '{config.anchor}' directory. "
            "Use --workspace to point at the package checkouts."
        )
    return Path(*parts[: parts.index(config.anchor)])


def resolve_package(
    name: str, config: ReleaseConfig, workspace: Path
) -> PackageInfo | None:
    """Build the descriptor for a package, or None if its checkout is missing."""
    path = workspace / name
    if not path.is_dir():
        warn(f"Package directory {name} does not exist. Skipping.")
        return None
    return PackageInfo(name=name, path=path, base_branch=base_branch_for(name, config))
