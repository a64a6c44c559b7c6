"""Command-line interface for termstyle."""

import click
import sys
from typing import Tuple

from rich.console import Console
from rich.table import Table
from rich.text import Text

from termstyle import __version__
from termstyle.color import Ansi256, Color, Named, Rgb
from termstyle.errors import ParseColorError
from termstyle.fmt import Formatter
from termstyle.style import Level
from termstyle.writer import BufferWriter, Target, WriteStyle


SAMPLE_MESSAGES = {
    Level.TRACE: "entering request handler",
    Level.DEBUG: "cache lookup took 3ms",
    Level.INFO: "listening on 127.0.0.1:8080",
    Level.WARN: "config file not found, using defaults",
    Level.ERROR: "failed to open database",
}


def _rich_color(color: Color) -> str:
    """Spell a color the way rich styles expect it."""
    if isinstance(color, Named):
        return color.name
    if isinstance(color, Ansi256):
        return f"color({color.code})"
    if isinstance(color, Rgb):
        return f"rgb({color.r},{color.g},{color.b})"
    return "default"


@click.group()
@click.version_option(__version__, prog_name="termstyle")
def main() -> None:
    """termstyle - styled terminal output for log formatters.

    Examples:

      termstyle parse red 0xFF 0,128,255

      termstyle levels --color always

      termstyle show 214 magenta
    """


@main.command()
@click.argument('colors', nargs=-1, required=True)
def parse(colors: Tuple[str, ...]) -> None:
    """Parse each COLOR and print the resulting value."""
    failed = False
    for text in colors:
        try:
            color = Color.parse(text)
        except ParseColorError as e:
            click.echo(f"error: {e}", err=True)
            failed = True
            continue
        click.echo(f"{text}: {color!r}")
    if failed:
        sys.exit(1)


@main.command()
@click.option('--color', 'write_style', type=click.Choice(['always', 'auto', 'never']),
              default='auto', help='Whether to emit styling sequences')
@click.option('--target', type=click.Choice(['stdout', 'stderr']), default='stdout',
              help='Stream to print to')
def levels(write_style: str, target: str) -> None:
    """Print one sample line per log level in its default style."""
    writer = BufferWriter.create(Target.parse(target), WriteStyle.parse(write_style))
    for level in (Level.TRACE, Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR):
        fmt = Formatter(writer)
        fmt.writeln("{:<5} {}", fmt.default_styled_level(level), SAMPLE_MESSAGES[level])
        fmt.print()


@main.command()
@click.argument('colors', nargs=-1, required=True)
def show(colors: Tuple[str, ...]) -> None:
    """Show each COLOR with its escape sequence and a swatch."""
    console = Console()
    table = Table(title="Colors")
    table.add_column("Input")
    table.add_column("Value")
    table.add_column("Foreground SGR")
    table.add_column("Swatch")

    failed = False
    for text in colors:
        try:
            color = Color.parse(text)
        except ParseColorError as e:
            table.add_row(Text(text), Text(str(e), style="red"), "", "")
            failed = True
            continue
        code = color.ansi_code()
        table.add_row(
            Text(text),
            repr(color),
            f"ESC[{code}m" if code is not None else "",
            f"[on {_rich_color(color)}]      [/]",
        )

    console.print(table)
    if failed:
        sys.exit(1)


if __name__ == '__main__':
    main()
