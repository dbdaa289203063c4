from sfra_release.cli import cli

cli()
