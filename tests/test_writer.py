"""Tests for buffers and buffer writers."""

import io

import pytest

from termstyle.color import Ansi256, Color, Rgb
from termstyle.errors import BorrowError
from termstyle.writer import (
    Buffer,
    BufferWriter,
    ColorSpec,
    SharedBuffer,
    Target,
    WriteStyle,
    ansi_sequence,
)


class TestAnsiSequence:
    """Test ANSI SGR serialization of color specs."""

    def test_empty_spec_is_reset(self):
        assert ansi_sequence(ColorSpec()) == b"\x1b[0m"

    def test_named_foreground(self):
        assert ansi_sequence(ColorSpec(fg=Color.RED)) == b"\x1b[0m\x1b[31m"
        assert ansi_sequence(ColorSpec(fg=Color.WHITE)) == b"\x1b[0m\x1b[37m"

    def test_bold_comes_before_colors(self):
        spec = ColorSpec(fg=Color.RED, bold=True)
        assert ansi_sequence(spec) == b"\x1b[0m\x1b[1m\x1b[31m"

    def test_background(self):
        spec = ColorSpec(fg=Color.BLUE, bg=Color.YELLOW)
        assert ansi_sequence(spec) == b"\x1b[0m\x1b[34m\x1b[43m"

    def test_intense_named(self):
        assert ansi_sequence(ColorSpec(fg=Color.RED, intense=True)) == b"\x1b[0m\x1b[38;5;9m"
        assert ansi_sequence(ColorSpec(bg=Color.BLUE, intense=True)) == b"\x1b[0m\x1b[48;5;12m"

    def test_extended_colors(self):
        assert ansi_sequence(ColorSpec(fg=Ansi256(214))) == b"\x1b[0m\x1b[38;5;214m"
        assert ansi_sequence(ColorSpec(bg=Rgb(1, 2, 3))) == b"\x1b[0m\x1b[48;2;1;2;3m"

    def test_reserved_variant_is_skipped(self):
        assert ansi_sequence(ColorSpec(fg=Color._NONEXHAUSTIVE)) == b"\x1b[0m"


class TestBuffer:
    """Test the in-memory buffer."""

    def test_write_bytes_and_text(self):
        buf = Buffer.no_color()
        assert buf.write(b"abc") == 3
        assert buf.write("é") == 2
        assert buf.getvalue() == "abcé".encode("utf-8")
        assert len(buf) == 5

    def test_no_color_ignores_styles(self):
        buf = Buffer.no_color()
        buf.set_color(ColorSpec(fg=Color.RED, bold=True))
        buf.write("plain")
        buf.reset()
        assert buf.getvalue() == b"plain"

    def test_ansi_styles(self):
        buf = Buffer.ansi()
        buf.set_color(ColorSpec(fg=Color.GREEN))
        buf.write("ok")
        buf.reset()
        assert buf.getvalue() == b"\x1b[0m\x1b[32mok\x1b[0m"

    def test_reset_twice(self):
        buf = Buffer.ansi()
        buf.reset()
        buf.reset()
        assert buf.getvalue() == b"\x1b[0m\x1b[0m"

        plain = Buffer.no_color()
        plain.reset()
        plain.reset()
        assert plain.getvalue() == b""

    def test_clear_keeps_mode(self):
        buf = Buffer.ansi()
        buf.write("old")
        buf.clear()
        assert buf.getvalue() == b""
        assert buf.supports_color()
        buf.reset()
        assert buf.getvalue() == b"\x1b[0m"


class TestSharedBuffer:
    """Test the single-borrow discipline."""

    def test_nested_borrow_fails(self):
        shared = SharedBuffer(Buffer.no_color())
        with shared.borrow():
            assert shared.borrowed
            with pytest.raises(BorrowError):
                with shared.borrow():
                    pass
        assert not shared.borrowed

    def test_borrow_released_after_error(self):
        shared = SharedBuffer(Buffer.no_color())
        with pytest.raises(KeyError):
            with shared.borrow():
                raise KeyError("boom")
        with shared.borrow() as buf:
            buf.write("again")
        assert shared.getvalue() == b"again"

    def test_spawn_keeps_mode(self):
        shared = SharedBuffer(Buffer.ansi())
        scratch = shared.spawn()
        assert scratch.supports_color()
        assert scratch.getvalue() == b""


class TtyStream(io.StringIO):
    """A text stream that claims to be a terminal."""

    def isatty(self):
        return True


class TestBufferWriter:
    """Test style negotiation and printing."""

    def test_always_and_never(self):
        assert BufferWriter(io.StringIO(), WriteStyle.ALWAYS).supports_color()
        assert not BufferWriter(TtyStream(), WriteStyle.NEVER).supports_color()

    def test_auto_requires_tty(self, monkeypatch):
        monkeypatch.setenv("TERM", "xterm-256color")
        assert BufferWriter(TtyStream(), WriteStyle.AUTO).supports_color()
        assert not BufferWriter(io.StringIO(), WriteStyle.AUTO).supports_color()

    def test_auto_dumb_terminal(self, monkeypatch):
        monkeypatch.setenv("TERM", "dumb")
        assert not BufferWriter(TtyStream(), WriteStyle.AUTO).supports_color()

    def test_new_buffer_mode(self):
        writer = BufferWriter(io.StringIO(), WriteStyle.ALWAYS)
        assert writer.buffer().supports_color()
        assert writer.new_buffer().getvalue() == b""
        assert not BufferWriter(io.StringIO(), WriteStyle.NEVER).buffer().supports_color()

    def test_print_to_text_stream(self):
        stream = io.StringIO()
        writer = BufferWriter(stream, WriteStyle.ALWAYS)
        buf = writer.buffer()
        buf.set_color(ColorSpec(fg=Color.RED))
        buf.write("hi")
        buf.reset()
        writer.print(buf)
        assert stream.getvalue() == "\x1b[0m\x1b[31mhi\x1b[0m"
        # Printing does not clear.
        assert buf.getvalue() == b"\x1b[0m\x1b[31mhi\x1b[0m"

    def test_print_to_binary_stream(self):
        stream = io.BytesIO()
        writer = BufferWriter(stream, WriteStyle.NEVER)
        buf = writer.buffer()
        buf.set_color(ColorSpec(fg=Color.RED))
        buf.write("hi")
        buf.reset()
        writer.publish(buf)
        assert stream.getvalue() == b"hi"

    def test_print_failure_propagates(self):
        class BrokenStream(io.RawIOBase):
            def write(self, data):
                raise OSError("broken pipe")

        writer = BufferWriter(BrokenStream(), WriteStyle.NEVER)
        buf = writer.buffer()
        buf.write("lost")
        with pytest.raises(OSError):
            writer.print(buf)

    def test_stdout_target(self, capsys):
        writer = BufferWriter.stdout(WriteStyle.NEVER)
        buf = writer.buffer()
        buf.write("to stdout\n")
        writer.print(buf)
        captured = capsys.readouterr()
        assert captured.out == "to stdout\n"
        assert captured.err == ""

    def test_create_with_stream_override(self):
        stream = io.StringIO()
        writer = BufferWriter.create(Target.STDERR, WriteStyle.NEVER, stream=stream)
        buf = writer.buffer()
        buf.write("x")
        writer.print(buf)
        assert stream.getvalue() == "x"


def test_write_style_parse():
    assert WriteStyle.parse("always") is WriteStyle.ALWAYS
    assert WriteStyle.parse(" Auto ") is WriteStyle.AUTO
    assert WriteStyle.parse("NEVER") is WriteStyle.NEVER
    with pytest.raises(ValueError):
        WriteStyle.parse("sometimes")


def test_target_parse():
    assert Target.parse("stdout") is Target.STDOUT
    assert Target.parse("STDERR") is Target.STDERR
    with pytest.raises(ValueError):
        Target.parse("stdin")
