import logging
import sys

import click

from decompile.constant import Constant
from decompile.error import DecompileError, format_error
from decompile.output import Output
from undump.objects import LString
from undump.reader import ChunkReader


@click.command()
@click.argument("sourcefile")
@click.option(
    "--header/--no-header",
    default=False,
    help="Whether or not to log the chunk header before the constants.",
)
def constants(sourcefile: str, header: bool) -> None:
    """List the constants of every function in SOURCEFILE as literals."""
    with open(sourcefile, "rb") as f:
        bytecode = f.read()

    try:
        reader = ChunkReader(bytecode, filename=sourcefile)
        if header:
            reader.print_header()
        proto = reader.read()
    except DecompileError as e:
        click.echo(format_error(e), err=True)
        sys.exit(1)

    out = Output()
    proto.dump(out)


@click.command()
@click.argument("text")
def literal(text: str) -> None:
    """Render TEXT as a quoted string literal."""
    const = Constant.from_decoded(LString(text.encode("utf-8", "surrogateescape")))
    out = Output()
    const.print(out)
    out.println()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)


cli.add_command(constants)
cli.add_command(literal)


if __name__ == "__main__":
    cli()
