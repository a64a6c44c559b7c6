"""Styled output buffers.

A :class:`BufferWriter` is bound to standard output or standard error and
decides once, at construction, whether styling sequences are emitted. It
hands out :class:`Buffer` instances that accumulate bytes and style
changes, and prints finished buffers to its stream.
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum
from typing import IO, Iterator, Optional, Union
import io
import logging
import os
import sys

import colorama

from .color import Color
from .errors import BorrowError


logger = logging.getLogger(__name__)

RESET = b"\x1b[0m"
BOLD = b"\x1b[1m"

_windows_console_fixed = False


class WriteStyle(Enum):
    """Whether or not to print styles to the target."""
    ALWAYS = "always"
    AUTO = "auto"
    NEVER = "never"

    @classmethod
    def parse(cls, s: str) -> WriteStyle:
        """Parse ``always``, ``auto`` or ``never`` (any case)."""
        try:
            return cls(s.strip().lower())
        except ValueError:
            raise ValueError(
                f"invalid write style {s!r}, expected one of: always, auto, never"
            ) from None


class Target(Enum):
    """The standard stream a writer prints to."""
    STDOUT = "stdout"
    STDERR = "stderr"

    @classmethod
    def parse(cls, s: str) -> Target:
        try:
            return cls(s.strip().lower())
        except ValueError:
            raise ValueError(f"invalid target {s!r}, expected stdout or stderr") from None

    def stream(self) -> IO:
        return sys.stdout if self is Target.STDOUT else sys.stderr


@dataclass
class ColorSpec:
    """Foreground and background colors plus text weight and intensity."""
    fg: Optional[Color] = None
    bg: Optional[Color] = None
    bold: bool = False
    intense: bool = False

    def copy(self) -> ColorSpec:
        return replace(self)


def ansi_sequence(spec: ColorSpec) -> bytes:
    """Serialize a color spec to ANSI SGR escape sequences.

    The sequence always starts with a reset, so the previous style never
    leaks into the new one.
    """
    parts = [RESET]
    if spec.bold:
        parts.append(BOLD)
    for color, background in ((spec.fg, False), (spec.bg, True)):
        if color is None:
            continue
        code = color.ansi_code(background=background, intense=spec.intense)
        if code is not None:
            parts.append(f"\x1b[{code}m".encode("ascii"))
    return b"".join(parts)


class Buffer:
    """An in-memory byte buffer that understands styles.

    When ``color`` is false, :meth:`set_color` and :meth:`reset` write
    nothing and cannot fail.
    """

    def __init__(self, color: bool):
        self._color = color
        self._data = bytearray()

    @classmethod
    def ansi(cls) -> Buffer:
        return cls(True)

    @classmethod
    def no_color(cls) -> Buffer:
        return cls(False)

    def supports_color(self) -> bool:
        return self._color

    def is_synchronous(self) -> bool:
        # Styles are recorded in-band, never through a console API.
        return True

    def write(self, data: Union[bytes, str]) -> int:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data.extend(data)
        return len(data)

    def flush(self) -> None:
        pass

    def clear(self) -> None:
        """Discard written bytes, keeping the styling mode."""
        self._data.clear()

    def getvalue(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def set_color(self, spec: ColorSpec) -> None:
        if self._color:
            self.write(ansi_sequence(spec))

    def reset(self) -> None:
        if self._color:
            self.write(RESET)

    def __repr__(self) -> str:
        return f"Buffer(color={self._color}, len={len(self._data)})"


class SharedBuffer:
    """A handle to one buffer that several styles can share.

    Only one borrow may be active at a time; a nested borrow raises
    :class:`~termstyle.errors.BorrowError` instead of interleaving writes.
    """

    def __init__(self, buffer: Buffer):
        self._buffer = buffer
        self._borrowed = False

    @contextmanager
    def borrow(self) -> Iterator[Buffer]:
        if self._borrowed:
            raise BorrowError("buffer is already borrowed")
        self._borrowed = True
        try:
            yield self._buffer
        finally:
            self._borrowed = False

    @property
    def borrowed(self) -> bool:
        return self._borrowed

    def spawn(self) -> Buffer:
        """Return a new, empty buffer with the same styling mode."""
        return Buffer(self._buffer.supports_color())

    def getvalue(self) -> bytes:
        with self.borrow() as buf:
            return buf.getvalue()

    def __repr__(self) -> str:
        return f"SharedBuffer({self._buffer!r})"


def _stream_supports_color(stream: IO) -> bool:
    term = os.environ.get("TERM")
    if term == "dumb":
        return False
    if sys.platform != "win32" and not term:
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (ValueError, OSError):
        # Closed or detached stream.
        return False


def _fix_windows_console() -> None:
    global _windows_console_fixed
    if sys.platform == "win32" and not _windows_console_fixed:
        colorama.just_fix_windows_console()
        _windows_console_fixed = True


class BufferWriter:
    """Creates buffers and prints them to a standard stream."""

    def __init__(self, stream: IO, write_style: WriteStyle = WriteStyle.AUTO):
        self._stream = stream
        self.write_style = write_style
        if write_style is WriteStyle.ALWAYS:
            self._color = True
        elif write_style is WriteStyle.NEVER:
            self._color = False
        else:
            self._color = _stream_supports_color(stream)
        if self._color:
            _fix_windows_console()
        logger.debug(
            "styling %s for %r (write_style=%s)",
            "enabled" if self._color else "disabled",
            stream,
            write_style.value,
        )

    @classmethod
    def create(
        cls,
        target: Target,
        write_style: WriteStyle = WriteStyle.AUTO,
        stream: Optional[IO] = None,
    ) -> BufferWriter:
        """Create a writer for ``target``.

        ``stream`` overrides the process stream, which is mostly useful in
        tests.
        """
        return cls(stream if stream is not None else target.stream(), write_style)

    @classmethod
    def stdout(cls, write_style: WriteStyle = WriteStyle.AUTO) -> BufferWriter:
        return cls.create(Target.STDOUT, write_style)

    @classmethod
    def stderr(cls, write_style: WriteStyle = WriteStyle.AUTO) -> BufferWriter:
        return cls.create(Target.STDERR, write_style)

    def supports_color(self) -> bool:
        return self._color

    def buffer(self) -> Buffer:
        """Return a fresh, empty buffer in this writer's styling mode."""
        return Buffer(self._color)

    new_buffer = buffer

    def print(self, buf: Buffer) -> None:
        """Write the contents of ``buf`` to the stream and flush it.

        The buffer is left untouched; callers clear it before reuse.
        """
        data = buf.getvalue()
        raw = getattr(self._stream, "buffer", None)
        if raw is not None:
            # Keep ordering with text already written to the wrapper.
            self._stream.flush()
            raw.write(data)
            raw.flush()
        elif isinstance(self._stream, io.TextIOBase):
            self._stream.write(data.decode("utf-8", errors="replace"))
            self._stream.flush()
        else:
            self._stream.write(data)
            self._stream.flush()

    publish = print
