"""Styles and styled values.

A :class:`Style` collects colors and text attributes and is bound to one
shared buffer. Wrapping a value with :meth:`Style.value` gives a
:class:`StyledValue`; formatting it applies the style to the buffer,
writes the value, and always tries to reset the buffer afterwards.

Example::

    style = formatter.style()
    style.set_color(Color.RED).set_bold(True)
    formatter.writeln("{}: {}", style.value(Level.ERROR), "disk full")
"""

from __future__ import annotations
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar
import logging

from .color import Color
from .writer import Buffer, ColorSpec, SharedBuffer


logger = logging.getLogger(__name__)

T = TypeVar("T")


class Level(Enum):
    """Log severity levels, most severe first."""
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5

    @classmethod
    def from_logging(cls, levelno: int) -> Level:
        """Map a stdlib ``logging`` level number onto a level."""
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE

    def __str__(self) -> str:
        return self.name

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


class Style:
    """A set of styles to apply to terminal output.

    Setters return the style itself so calls can be chained. The same
    style can print any number of values.
    """

    def __init__(self, buffer: SharedBuffer, spec: Optional[ColorSpec] = None):
        self._buffer = buffer
        self._spec = spec if spec is not None else ColorSpec()

    @property
    def buffer(self) -> SharedBuffer:
        return self._buffer

    @property
    def spec(self) -> ColorSpec:
        """A copy of the current color spec."""
        return self._spec.copy()

    def set_color(self, color: Color) -> Style:
        """Set the text color."""
        self._spec.fg = color
        return self

    def set_bold(self, yes: bool) -> Style:
        """Set the text weight.

        If ``yes`` is true then text will be written in bold, otherwise in
        the default weight.
        """
        self._spec.bold = yes
        return self

    def set_intense(self, yes: bool) -> Style:
        """Set the text intensity.

        If ``yes`` is true then text will be written in a brighter color,
        otherwise in the default color.
        """
        self._spec.intense = yes
        return self

    def set_bg(self, color: Color) -> Style:
        """Set the background color."""
        self._spec.bg = color
        return self

    set_background = set_bg

    def value(self, value: T) -> StyledValue[T]:
        """Wrap a value in the style.

        The wrapper refers to this style, so changes made to the style
        before the value is formatted are visible in the output.
        """
        return StyledValue(self, value)

    def into_value(self, value: T) -> StyledValue[T]:
        """Wrap a value in a snapshot of the style.

        Later changes to this style do not affect the returned value.
        """
        return StyledValue(self.clone(), value)

    def clone(self) -> Style:
        """Copy the spec; the buffer handle is shared, not copied."""
        return Style(self._buffer, self._spec.copy())

    __copy__ = clone

    def __repr__(self) -> str:
        return f"Style(spec={self._spec!r})"


_CONVERSIONS = {
    None: lambda v: v,
    "s": str,
    "r": repr,
    "a": ascii,
}


class StyledValue(Generic[T]):
    """A value that will be printed using a style.

    It is the result of calling :meth:`Style.value` or
    :meth:`Style.into_value`.
    """

    def __init__(self, style: Style, value: T):
        self.style = style
        self.value = value

    def write_with(self, render: Callable[[T], str]) -> None:
        """Write ``render(value)`` to the style's buffer, styled.

        The buffer stays borrowed for the whole apply, write and reset
        sequence.
        """
        with self.style.buffer.borrow() as buf:
            self._write_styled(buf, render)

    def _write_styled(self, buf: Buffer, render: Callable[[T], str]) -> None:
        buf.set_color(self.style._spec)
        try:
            buf.write(render(self.value))
        except Exception:
            # Always try to reset the terminal style, even if writing failed.
            # The write error is the one that gets reported.
            try:
                buf.reset()
            except Exception:
                logger.debug("reset failed after a write error", exc_info=True)
            raise
        buf.reset()

    def fmt(self, format_spec: str = "", conversion: Optional[str] = None) -> None:
        """Format the value into the buffer.

        ``conversion`` is ``"r"`` (debug), ``"s"`` (display) or ``"a"``, as
        in ``str.format`` fields. ``format_spec`` is any spec the value
        accepts, such as ``"x"``, ``"o"``, ``"b"`` or ``".3e"``.
        """
        try:
            convert = _CONVERSIONS[conversion]
        except KeyError:
            raise ValueError(f"unknown conversion specifier {conversion!r}") from None
        self.write_with(lambda value: format(convert(value), format_spec))

    def __format__(self, format_spec: str) -> str:
        # Rendered standalone, in a scratch buffer of the same mode.
        scratch = self.style.buffer.spawn()
        self._write_styled(scratch, lambda value: format(value, format_spec))
        return scratch.getvalue().decode("utf-8")

    def __str__(self) -> str:
        return format(self, "")

    def __repr__(self) -> str:
        return f"StyledValue(style={self.style!r}, value={self.value!r})"


def default_level_style(buffer: SharedBuffer, level: Level) -> Style:
    """Get the default style for the given level.

    The style can be used to print other values besides the level.
    """
    level_style = Style(buffer)
    if level is Level.TRACE:
        level_style.set_color(Color.WHITE)
    elif level is Level.DEBUG:
        level_style.set_color(Color.BLUE)
    elif level is Level.INFO:
        level_style.set_color(Color.GREEN)
    elif level is Level.WARN:
        level_style.set_color(Color.YELLOW)
    else:
        level_style.set_color(Color.RED).set_bold(True)
    return level_style


def default_styled_level(buffer: SharedBuffer, level: Level) -> StyledValue[Level]:
    """Get a printable, styled level.

    The returned value owns its style, which can only be used to print the
    level.
    """
    return default_level_style(buffer, level).into_value(level)
