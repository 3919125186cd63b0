import click
from .commands import *


@click.group()
@click.option("--path", "-p", default=".", help="Path to the directory holding ffbuilder.toml.")
@click.pass_context
def cli(ctx, path):
    """ffbuilder: resolve and apply FFmpeg configure flags."""
    ctx.obj = {"path": path}

cli.add_command(resolve)
cli.add_command(configure)
cli.add_command(features)
cli.add_command(doctor)
cli.add_command(config)
cli.add_command(log)
cli.add_command(version)

if __name__ == '__main__':
    cli()
