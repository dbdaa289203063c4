"""CHANGELOG.md maintenance."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from .editors import read_manifest_version
from .shell import info, warn

TITLE = "# Changelog"


def release_heading(version: str, today: date) -> str:
    """Format a release heading, e.g. "## v1.3.0 (Oct 19, 2026)"."""
    return f"## v{version} ({today.strftime('%b %d, %Y')})"


def prepend_heading(content: str, version: str, heading: str) -> str | None:
    """Insert heading directly below the changelog title.

    Returns:
        The new changelog text, content unchanged if version is already
        mentioned, or None if the file has no "# Changelog" title.
    """
    if version in content:
        return content
    if TITLE not in content:
        return None
    rest = content.replace(TITLE, "", 1)
    return f"{TITLE}\n\n{heading}{rest}"


def update_changelog(root: Path, today: date | None = None) -> bool:
    """Add a heading for the manifest's current version to CHANGELOG.md.

    The version comes from package.json, which must already be bumped.

    Returns:
        True if the changelog was rewritten.
    """
    info("Updating changelog")
    version = read_manifest_version(root / "package.json")
    if version is None:
        warn("No version found in package.json. Skipping changelog.")
        return False

    changelog = root / "CHANGELOG.md"
    if not changelog.exists():
        warn("No CHANGELOG.md file found. Skipping.")
        return False

    content = changelog.read_text(encoding="utf-8")
    heading = release_heading(version, today or date.today())
    updated = prepend_heading(content, version, heading)
    if updated is None:
        warn(f"No '{TITLE}' title in CHANGELOG.md. Left unchanged.")
        return False
    if updated == content:
        info(f"Changelog already updated with version {version}. Skipping.")
        return False

    changelog.write_text(updated, encoding="utf-8")
    info("Changelog updated.")
    return True
