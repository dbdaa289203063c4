"""Release workflows: branch → bump → commit → push → PR, and tag → push.

prepare_release_prs() walks the packages one at a time:
1. Sync the base branch (committing or refusing stray changes first)
2. Create or reuse the release/<version> branch
3. Install dependencies
4. Bump the version in properties files, package.json and CHANGELOG.md
5. Commit, push, and open a pull request unless one is already open

create_git_tags() tags the head of each package's base branch with the
release version and pushes the tag.

Every step is idempotent so a failed run can simply be repeated once the
failing checkout is cleaned up.
"""

from __future__ import annotations

import re
from pathlib import Path

from .changelog import update_changelog
from .editors import apply_release_edits, bump_manifest
from .guard import check_for_changes
from .models import PackageInfo, Release, ReleaseConfig
from .packages import find_workspace, resolve_package
from .prompt import Prompter
from .shell import (
    fatal,
    gh,
    git,
    git_succeeds,
    info,
    run,
    step,
    warn,
    working_directory,
)


def sync_base_branch(package: PackageInfo, prompter: Prompter) -> None:
    """Switch to the package's base branch and pull, guarding both sides."""
    info(f"Switching to {package.base_branch} branch")
    check_for_changes(prompter)
    run("git", "switch", package.base_branch)
    run("git", "pull")
    check_for_changes(prompter)


def switch_to_release_branch(release: Release) -> None:
    """Check out the release branch, creating it from HEAD if needed."""
    info(f"Switching to release branch {release.branch}")
    if git_succeeds("rev-parse", "--verify", release.branch):
        run("git", "switch", release.branch)
    else:
        run("git", "switch", "-c", release.branch)


def create_pr(package: PackageInfo, release: Release, org: str) -> str | None:
    """Open a pull request for the release branch.

    Returns:
        URL of the new pull request, or None if one was already open or
        the PR number could not be read from gh's output.
    """
    info(f"Checking open PRs against {package.base_branch}")
    open_prs = gh("pr", "list", "--state", "open", "--base", package.base_branch)
    if release.branch in open_prs:
        info(f"PR for {release.branch} already exists. Skipping PR creation.")
        return None

    info(f"Creating PR: {release.branch} → {package.base_branch}")
    output = gh("pr", "create", "--fill", "--base", package.base_branch)
    match = re.search(r"\d+", output)
    if not match:
        warn("Failed to create PR. No PR number found.")
        return None
    return f"https://github.com/{org}/{package.name}/pull/{match.group(0)}"


def release_package(
    package: PackageInfo,
    release: Release,
    config: ReleaseConfig,
    prompter: Prompter,
) -> str | None:
    """Prepare and push the release branch for one package.

    Runs inside the package checkout; the previous working directory is
    restored afterwards.

    Returns:
        URL of the pull request created, if any.
    """
    with working_directory(package.path):
        sync_base_branch(package, prompter)
        switch_to_release_branch(release)

        info(f"Running {' '.join(config.install_command)}")
        run(*config.install_command)
        check_for_changes(prompter)

        root = Path.cwd()
        apply_release_edits(root, package.name, release)
        bump_manifest(root, release, config.install_command)
        update_changelog(root)
        check_for_changes(
            prompter, interactive=False, fallback_message=release.commit_message
        )

        info(f"Pushing {release.branch} to {config.remote}")
        run("git", "push", "-u", config.remote, release.branch)
        return create_pr(package, release, config.org)


def prepare_release_prs(
    release: Release,
    package_names: list[str],
    config: ReleaseConfig,
    prompter: Prompter,
    workspace: Path | None = None,
) -> list[str]:
    """Run the release-branch workflow for each package, in order.

    Args:
        release: Version being released.
        package_names: Packages to process; missing checkouts are skipped.
        config: Run configuration.
        prompter: Answers the guard's commit prompts.
        workspace: Directory holding the checkouts. Located from the
                   config when None.

    Returns:
        URLs of the pull requests created, in processing order.
    """
    step("PR creation")
    print(f"  Version: {release.version}")
    print(f"  Packages: {', '.join(package_names)}")
    workspace = workspace or find_workspace(config)

    created: list[str] = []
    for name in package_names:
        step(f"Processing package: {name}")
        package = resolve_package(name, config, workspace)
        if package is None:
            continue
        url = release_package(package, release, config, prompter)
        if url:
            created.append(url)

    step("List of PRs created")
    for url in created:
        print(url)
    return created


def tag_package(package: PackageInfo, release: Release, config: ReleaseConfig) -> None:
    """Tag the head of the base branch and push the tag.

    The push runs even when the tag already exists locally, so a remote
    that missed an earlier push still receives it.
    """
    with working_directory(package.path):
        info(f"Switching to {package.base_branch} branch")
        run("git", "switch", package.base_branch)
        run("git", "pull")

        existing = git("tag").splitlines()
        if release.version in existing:
            info(f"Tag {release.version} already exists. Skipping tag creation.")
        else:
            git("tag", release.version)
            info(f"Created tag {release.version}")

        run("git", "push", config.remote, f"refs/tags/{release.version}")


def create_git_tags(
    release: Release,
    package_names: list[str],
    config: ReleaseConfig,
    workspace: Path | None = None,
) -> None:
    """Run the tag workflow for each package, in order."""
    step("Git tag creation")
    print(f"  Version: {release.version}")
    print(f"  Packages: {', '.join(package_names)}")
    workspace = workspace or find_workspace(config)
    for name in package_names:
        step(f"Processing package: {name}")
        package = resolve_package(name, config, workspace)
        if package is None:
            continue
        info("Creating git tag")
        tag_package(package, release, config)


def run_release(
    version: str,
    action: str,
    package_names: list[str],
    config: ReleaseConfig,
    prompter: Prompter,
) -> None:
    """Dispatch an action ("createPR" or "createGitTag") for the packages."""
    release = Release(version=version)
    if action == "createPR":
        prepare_release_prs(release, package_names, config, prompter)
    elif action == "createGitTag":
        create_git_tags(release, package_names, config)
    else:
        fatal('Invalid action. Please specify either "createPR" or "createGitTag".')
