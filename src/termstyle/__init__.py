"""termstyle - styled terminal output for log formatters.

Build a :class:`Style`, wrap values with it, and write them into a
:class:`Formatter` obtained from a :class:`BufferWriter`::

    writer = BufferWriter.stderr(WriteStyle.AUTO)
    fmt = Formatter(writer)
    style = fmt.style().set_color(Color.RED).set_bold(True)
    fmt.writeln("{}: {}", style.value("error"), "disk full")
    fmt.print()
"""

__version__ = "0.1.0"

from .color import Color
from .errors import BorrowError, ColorSyntaxError, ParseColorError, TermStyleError
from .fmt import Formatter
from .handler import StyledHandler
from .style import Level, Style, StyledValue, default_level_style, default_styled_level
from .writer import Buffer, BufferWriter, ColorSpec, SharedBuffer, Target, WriteStyle

__all__ = [
    "Buffer",
    "BufferWriter",
    "BorrowError",
    "Color",
    "ColorSpec",
    "ColorSyntaxError",
    "Formatter",
    "Level",
    "ParseColorError",
    "SharedBuffer",
    "Style",
    "StyledHandler",
    "StyledValue",
    "Target",
    "TermStyleError",
    "WriteStyle",
    "default_level_style",
    "default_styled_level",
]
