"""The formatter handed to log formatting code.

A :class:`Formatter` owns one shared buffer taken from a
:class:`~termstyle.writer.BufferWriter`. Formatting code writes plain text
and styled values into it, then the formatter prints the buffer.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Tuple, Union
import string

from .style import (
    Level,
    Style,
    StyledValue,
    default_level_style,
    default_styled_level,
)
from .writer import BufferWriter, SharedBuffer


class _FieldNumbering:
    """Automatic field numbering shared across one template.

    Mixing ``{}`` with ``{0}`` is an error, as in ``str.format``.
    """

    def __init__(self):
        self.next_index = 0
        self.mode: Optional[str] = None

    def resolve(self, field_name: str) -> str:
        split = min(
            (i for i in (field_name.find("."), field_name.find("[")) if i >= 0),
            default=len(field_name),
        )
        first, rest = field_name[:split], field_name[split:]
        if first == "":
            if self.mode == "manual":
                raise ValueError(
                    "cannot switch from manual field specification "
                    "to automatic field numbering"
                )
            self.mode = "auto"
            first = str(self.next_index)
            self.next_index += 1
        elif first.isdigit():
            if self.mode == "auto":
                raise ValueError(
                    "cannot switch from automatic field numbering "
                    "to manual field specification"
                )
            self.mode = "manual"
        return first + rest


class Formatter:
    """A styled buffer for formatting one log record."""

    def __init__(self, writer: BufferWriter):
        self._writer = writer
        self._buf = SharedBuffer(writer.buffer())
        self._fields = string.Formatter()

    @property
    def buffer(self) -> SharedBuffer:
        return self._buf

    def write(self, data: Union[bytes, str]) -> int:
        with self._buf.borrow() as buf:
            return buf.write(data)

    def flush(self) -> None:
        with self._buf.borrow() as buf:
            buf.flush()

    def clear(self) -> None:
        with self._buf.borrow() as buf:
            buf.clear()

    def getvalue(self) -> bytes:
        return self._buf.getvalue()

    def write_fmt(self, template: str, *args: Any, **kwargs: Any) -> None:
        """Write ``template.format(*args, **kwargs)`` into the buffer.

        Styled values among the arguments are written with their style;
        everything else is formatted as ``str.format`` would.
        """
        numbering = _FieldNumbering()
        for literal, field_name, format_spec, conversion in self._fields.parse(template):
            if literal:
                self.write(literal)
            if field_name is None:
                continue
            obj, _ = self._fields.get_field(numbering.resolve(field_name), args, kwargs)
            format_spec = self._expand_spec(format_spec or "", numbering, args, kwargs)
            if isinstance(obj, StyledValue):
                obj.fmt(format_spec, conversion)
            else:
                obj = self._fields.convert_field(obj, conversion)
                self.write(format(obj, format_spec))

    def _expand_spec(
        self,
        format_spec: str,
        numbering: _FieldNumbering,
        args: Tuple[Any, ...],
        kwargs: Dict[str, Any],
    ) -> str:
        """Substitute replacement fields nested in a format spec."""
        if "{" not in format_spec:
            return format_spec
        parts = []
        for literal, field_name, nested_spec, conversion in self._fields.parse(format_spec):
            parts.append(literal)
            if field_name is None:
                continue
            obj, _ = self._fields.get_field(numbering.resolve(field_name), args, kwargs)
            obj = self._fields.convert_field(obj, conversion)
            parts.append(format(obj, nested_spec or ""))
        return "".join(parts)

    def writeln(self, template: str = "", *args: Any, **kwargs: Any) -> None:
        self.write_fmt(template, *args, **kwargs)
        self.write("\n")

    def style(self) -> Style:
        """Begin a new style bound to this formatter's buffer."""
        return Style(self._buf)

    def default_level_style(self, level: Level) -> Style:
        return default_level_style(self._buf, level)

    def default_styled_level(self, level: Level) -> StyledValue[Level]:
        return default_styled_level(self._buf, level)

    def print(self) -> None:
        """Print the buffer through the writer it came from."""
        with self._buf.borrow() as buf:
            self._writer.print(buf)

    def __repr__(self) -> str:
        return f"Formatter({self._buf!r})"
