from lockswitch.cli import cli

cli()
