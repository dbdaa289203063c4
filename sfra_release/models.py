"""Data models for sfra-release.

These Pydantic models represent the transient data structures used by the
release and tag workflows. Nothing here is persisted.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PACKAGES: list[str] = [
    "lib_productlist",
    "plugin-applepay",
    "plugin_cartridge_merge",
    "plugin_datadownload",
    "plugin_giftregistry",
    "plugin_instorepickup",
    "plugin_ordermanagement",
    "plugin_productcompare",
    "plugin_sitemap",
    "plugin_wishlists",
    "storefrontdata",
    "storefront-reference-architecture",
]

DEFAULT_BASE_BRANCHES: dict[str, str] = {
    "storefront-reference-architecture": "integration",
    "plugin-slas": "main",
}


class PackageInfo(BaseModel):
    """A package checkout taking part in the release.

    Attributes:
        name: Repository name; also the checkout's directory name and, for
              most packages, the cartridge name in its properties file.
        path: Resolved checkout directory (sibling of the tool's checkout).
        base_branch: Long-lived branch release branches are cut from and
                     pull requests target.
    """

    name: str
    path: Path
    base_branch: str


class Release(BaseModel):
    """A release version as typed by the operator.

    The version is taken verbatim; no semantic-version validation is done.
    """

    version: str

    @property
    def bare_version(self) -> str:
        """Version with a single leading "v" removed, as embedded in files."""
        return self.version[1:] if self.version.startswith("v") else self.version

    @property
    def branch(self) -> str:
        return f"release/{self.version}"

    @property
    def commit_message(self) -> str:
        return f"chore: release {self.version}"


class ChangedFile(BaseModel):
    """One entry of `git status --porcelain -z` output.

    Attributes:
        status: Two-character status code (e.g., " M", "??", "R ").
        path: Path relative to the repository root.
    """

    status: str
    path: str

    @classmethod
    def parse_porcelain(cls, output: str) -> list[ChangedFile]:
        """Parse `git status --porcelain -z` output.

        Entries are NUL-terminated: two status columns, a space, then the
        unquoted path. Renames and copies are followed by an extra field
        holding the source path, which is skipped.
        """
        files: list[ChangedFile] = []
        fields = iter(output.split("\0"))
        for entry in fields:
            if not entry:
                continue
            status = entry[:2]
            files.append(cls(status=status, path=entry[3:]))
            if status[0] in "RC" or status[1] in "RC":
                next(fields, None)
        return files


class ReleaseConfig(BaseModel):
    """Settings for a run, loaded from an optional sfra-release.toml.

    Attributes:
        org: GitHub organization owning every package repository.
        default_branch: Base branch for packages without an override.
        base_branches: Per-package base branch overrides, consulted before
                       the built-in DEFAULT_BASE_BRANCHES mapping.
        remote: Remote that release branches and tags are pushed to.
        install_command: Dependency install command, run in each checkout.
        anchor: Directory name of the tool's own checkout; packages are
                resolved as siblings of it.
        workspace: Explicit parent directory of the checkouts. Takes
                   precedence over the anchor lookup.
        packages: Packages processed when none are given on the command line.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    org: str = "SalesforceCommerceCloud"
    default_branch: str = Field(default="master", alias="default-branch")
    base_branches: dict[str, str] = Field(default_factory=dict, alias="base-branches")
    remote: str = "origin"
    install_command: list[str] = Field(
        default_factory=lambda: ["npm", "install"], alias="install-command"
    )
    anchor: str = "sfra-release"
    workspace: Path | None = None
    packages: list[str] = Field(default_factory=lambda: list(DEFAULT_PACKAGES))
