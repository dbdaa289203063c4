"""Release version edits.

Each package embeds its version in a few well-known files. The edits for a
package are looked up with edits_for(), which returns a list of FileEdit
entries: a path relative to the checkout plus a regex and its replacement.
Edits never fail the run: a missing file or an unmatched pattern is reported
and the file is left alone.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .models import Release
from .shell import fatal, info, run, warn

SFRA = "storefront-reference-architecture"
STOREFRONT_DATA = "storefrontdata"
LIBRARY_XML = "demo_data_sfra/libraries/RefArchSharedLibrary/library.xml"


class FileEdit(BaseModel):
    """A single version substitution in one file.

    Attributes:
        path: File path relative to the package checkout.
        pattern: Regex matching the text that carries the old version.
        replacement: Replacement text; "{version}" is filled with the bare
                     release version.
        replace_all: Replace every match instead of only the first.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    pattern: str
    replacement: str
    replace_all: bool = False

    def apply(self, content: str, version: str) -> str | None:
        """Return content with the version substituted, or None if no match."""
        regex = re.compile(self.pattern)
        if not regex.search(content):
            return None
        new_text = self.replacement.format(version=version)
        # Literal replacement: no group references.
        count = 0 if self.replace_all else 1
        return regex.sub(lambda _: new_text, content, count=count)


def cartridge_properties_edit(cartridge: str, path: str | None = None) -> FileEdit:
    """Edit for a `demandware.cartridges.<cartridge>.version=` line."""
    key = f"demandware.cartridges.{cartridge}.version"
    return FileEdit(
        path=path or f"cartridges/{cartridge}/cartridge/{cartridge}.properties",
        pattern=re.escape(key) + r"=\S+",
        replacement=key + "={version}",
    )


def edits_for(package_name: str) -> list[FileEdit]:
    """Return the file edits applied to a package during a release."""
    if package_name == SFRA:
        return [
            FileEdit(
                path="cartridges/app_storefront_base/cartridge/templates/resources/version.properties",
                pattern=r"global\.version\.number=\S+",
                replacement="global.version.number={version}",
            ),
            cartridge_properties_edit(
                "app_storefront_base",
                "cartridges/app_storefront_base/cartridge/app_storefront_base.properties",
            ),
        ]
    edits = [cartridge_properties_edit(package_name)]
    if package_name == STOREFRONT_DATA:
        # The library XML embeds HTML content, so the comment is entity-escaped.
        edits.append(
            FileEdit(
                path=LIBRARY_XML,
                pattern=r"&lt;!-- SFRA \d+\.\d+\.\d+",
                replacement="&lt;!-- SFRA {version}",
                replace_all=True,
            )
        )
    return edits


def apply_edit(root: Path, edit: FileEdit, version: str) -> bool:
    """Apply one edit inside a package checkout.

    Returns:
        True if the file was written, False if it was missing or the
        pattern did not match.
    """
    path = root / edit.path
    if not path.exists():
        warn(f"{edit.path} does not exist. Skipping.")
        return False
    content = path.read_text(encoding="utf-8")
    updated = edit.apply(content, version)
    if updated is None:
        warn(f"No match for {edit.pattern!r} in {edit.path}. Left unchanged.")
        return False
    if updated != content:
        path.write_text(updated, encoding="utf-8")
    info(f"Updated {edit.path} with version {version}")
    return True


def apply_release_edits(root: Path, package_name: str, release: Release) -> None:
    """Apply every registered edit for a package."""
    for edit in edits_for(package_name):
        apply_edit(root, edit, release.bare_version)


def load_manifest(path: Path, text: str) -> dict:
    """Parse package.json text, exiting on malformed JSON."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        fatal(f"Invalid JSON in {path}: {exc}")


def update_manifest(path: Path, version: str) -> bool:
    """Set the "version" field of a package.json.

    Key order is preserved and the file is rewritten with 2-space
    indentation, keeping a trailing newline if the original had one.

    Returns:
        True if the manifest exists and was updated.
    """
    if not path.exists():
        warn(f"package.json file {path} does not exist. Skipping.")
        return False
    original = path.read_text(encoding="utf-8")
    manifest = load_manifest(path, original)
    manifest["version"] = version
    text = json.dumps(manifest, indent=2, ensure_ascii=False)
    if original.endswith("\n"):
        text += "\n"
    path.write_text(text, encoding="utf-8")
    info(f"Updated {path.name} with version {version}")
    return True


def read_manifest_version(path: Path) -> str | None:
    """Return the "version" field of a package.json, or None if absent."""
    if not path.exists():
        return None
    return load_manifest(path, path.read_text(encoding="utf-8")).get("version")


def bump_manifest(root: Path, release: Release, install_command: list[str]) -> None:
    """Update package.json, then reinstall so the lockfile follows."""
    if update_manifest(root / "package.json", release.bare_version):
        run(*install_command)
