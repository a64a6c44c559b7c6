"""A ``logging`` handler that prints records with styled levels."""

from __future__ import annotations
from typing import IO, Callable, Optional
import logging

from .fmt import Formatter
from .style import Level
from .writer import BufferWriter, Target, WriteStyle


FormatFn = Callable[[Formatter, logging.LogRecord], None]

_exception_formatter = logging.Formatter()


def default_format(fmt: Formatter, record: logging.LogRecord) -> None:
    """Write ``[LEVEL name] message``, with the level in its default style."""
    level = Level.from_logging(record.levelno)
    fmt.writeln(
        "[{:<5} {}] {}",
        fmt.default_styled_level(level),
        record.name,
        record.getMessage(),
    )
    if record.exc_info:
        fmt.writeln("{}", _exception_formatter.formatException(record.exc_info))


class StyledHandler(logging.Handler):
    """Print log records to stdout or stderr, one buffer per record.

    ``format_record`` receives a fresh :class:`~termstyle.fmt.Formatter`
    and the record, and writes whatever it likes into the formatter.
    """

    def __init__(
        self,
        target: Target = Target.STDERR,
        write_style: WriteStyle = WriteStyle.AUTO,
        format_record: Optional[FormatFn] = None,
        level: int = logging.NOTSET,
        stream: Optional[IO] = None,
    ):
        super().__init__(level)
        self.writer = BufferWriter.create(target, write_style, stream=stream)
        self.format_record = format_record or default_format

    def emit(self, record: logging.LogRecord) -> None:
        try:
            fmt = Formatter(self.writer)
            self.format_record(fmt, record)
            fmt.print()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)
