import click

from tripcode import __version__
from tripcode.cli.formats import formats_command
from tripcode.cli.generate import generate_command
from tripcode.lib.log import setup_logging


@click.group()
@click.version_option(__version__, prog_name="tripcode")
def cli():
    """Generates 4chan, 2channel and 2ch.sc tripcodes."""
    # Rebind the handler to this invocation's stderr.
    setup_logging(force=True)


cli.add_command(generate_command)
cli.add_command(formats_command)


if __name__ == "__main__":
    cli()
