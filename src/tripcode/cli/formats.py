import click
from rich.console import Console
from rich.table import Table

from tripcode.formats import get_available_formats, get_format_info


def build_formats_table() -> Table:
    table = Table(
        title="Tripcode types",
        caption="`generate -t sc` uses sc-sjis; `-t sc-utf8` uses sc",
    )
    table.add_column("Type", style="bold cyan", no_wrap=True)
    table.add_column("Aliases")
    table.add_column("Length")
    table.add_column("Description")

    for name in get_available_formats():
        info = get_format_info(name)
        lengths = "/".join(str(n) for n in info["lengths"])
        if info["may_return_error"]:
            lengths += " or ???"
        description = info["description"]
        if info["failable"]:
            description += " [dim](may fail)[/dim]"
        table.add_row(name, ", ".join(info["aliases"]), lengths, description)
    return table


@click.command("formats")
def formats_command():
    """Lists the supported tripcode types."""
    Console().print(build_formats_table())
