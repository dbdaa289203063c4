"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sfra_release.models import PackageInfo, ReleaseConfig


def write_checkout(workspace: Path, name: str, version: str = "1.2.0") -> Path:
    """Create a minimal package checkout with properties, manifest and changelog."""
    root = workspace / name
    props = root / "cartridges" / name / "cartridge" / f"{name}.properties"
    props.parent.mkdir(parents=True)
    props.write_text(
        "## cartridge.properties\n"
        f"demandware.cartridges.{name}.multipleLanguageStorefront=true\n"
        f"demandware.cartridges.{name}.id={name}\n"
        f"demandware.cartridges.{name}.version={version}\n"
    )
    (root / "package.json").write_text(
        json.dumps(
            {"name": name, "version": version, "scripts": {"test": "sgmf-scripts"}},
            indent=2,
        )
        + "\n"
    )
    (root / "CHANGELOG.md").write_text(
        f"# Changelog\n\n## v{version} (Jan 10, 2026)\n\n- Initial release\n"
    )
    return root


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A workspace directory holding package checkouts."""
    ws = tmp_path / "workspace"
    ws.mkdir()
    return ws


@pytest.fixture
def checkout(workspace: Path) -> Path:
    """A lib_productlist checkout at version 1.2.0."""
    return write_checkout(workspace, "lib_productlist")


@pytest.fixture
def package(checkout: Path) -> PackageInfo:
    return PackageInfo(name="lib_productlist", path=checkout, base_branch="master")


@pytest.fixture
def config(workspace: Path) -> ReleaseConfig:
    return ReleaseConfig(workspace=workspace)
