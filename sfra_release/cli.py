"""CLI entry point for sfra-release."""

from __future__ import annotations

from pathlib import Path

import click

from sfra_release.config import load_config
from sfra_release.pipeline import run_release
from sfra_release.prompt import NonInteractivePrompter, Prompter, TerminalPrompter

ACTIONS = ("createPR", "createGitTag")

USAGE = """\
Usage: sfra-release <VERSION> <action> [<package1> <package2> ... <packageN>]
Example for PR creation with specific packages: sfra-release v1.0.0 createPR lib_productlist plugin-applepay
Example for PR creation with default packages: sfra-release v1.0.0 createPR
Example for Git tag creation with specific packages: sfra-release v1.0.0 createGitTag lib_productlist plugin-applepay
Example for Git tag creation with default packages: sfra-release v1.0.0 createGitTag"""


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="sfra-release")
@click.argument("args", nargs=-1, metavar="VERSION ACTION [PACKAGE]...")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="TOML config file. Defaults to ./sfra-release.toml when present.",
)
@click.option(
    "--workspace",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory containing the package checkouts.",
)
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    help="Commit uncommitted changes without prompting.",
)
@click.option(
    "-m",
    "--message",
    default="commit changed files",
    show_default=True,
    help="Commit message used with --yes.",
)
def cli(
    args: tuple[str, ...],
    config_path: Path | None,
    workspace: Path | None,
    yes: bool,
    message: str,
) -> None:
    """Prepare release PRs or push release tags across the SFRA packages.

    ACTION is "createPR" or "createGitTag". Without PACKAGE arguments the
    default package list is processed.
    """
    if len(args) < 2:
        raise click.ClickException(USAGE)
    version, action, *packages = args
    if action not in ACTIONS:
        raise click.ClickException(
            'Invalid action. Please specify either "createPR" or "createGitTag".'
        )

    config = load_config(config_path)
    if workspace is not None:
        config.workspace = workspace

    prompter: Prompter = (
        NonInteractivePrompter(message=message) if yes else TerminalPrompter()
    )
    run_release(version, action, packages or list(config.packages), config, prompter)
