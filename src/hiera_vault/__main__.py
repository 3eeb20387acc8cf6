import click

from hiera_vault.cli.lookup import lookup
from hiera_vault.version import PACKAGE_VERSION


@click.group(invoke_without_command=True)
@click.version_option(PACKAGE_VERSION, prog_name="hiera-vault")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """hiera-vault CLI"""
    if ctx.invoked_subcommand is None:
        # Show help when no subcommand is provided
        click.echo(ctx.get_help())


cli.add_command(lookup)


if __name__ == "__main__":
    cli()
