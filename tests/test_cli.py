"""Tests for the command-line interface."""

from click.testing import CliRunner

from termstyle import __version__
from termstyle.cli import main


def test_parse_valid_colors():
    runner = CliRunner()
    result = runner.invoke(main, ["parse", "Red", "0xFF", "0,128,255"])
    assert result.exit_code == 0
    assert "Red: Color.RED" in result.output
    assert "0xFF: Ansi256(code=255)" in result.output
    assert "0,128,255: Rgb(r=0, g=128, b=255)" in result.output


def test_parse_invalid_color():
    runner = CliRunner()
    result = runner.invoke(main, ["parse", "red", "256"])
    assert result.exit_code == 1
    assert "red: Color.RED" in result.output
    assert "error: unrecognized ansi256 color number" in result.output


def test_levels_without_color():
    runner = CliRunner()
    result = runner.invoke(main, ["levels", "--color", "never"])
    assert result.exit_code == 0
    assert "\x1b" not in result.output
    lines = result.output.splitlines()
    assert lines[0] == "TRACE entering request handler"
    assert lines[2] == "INFO  listening on 127.0.0.1:8080"
    assert lines[4] == "ERROR failed to open database"


def test_levels_with_color():
    runner = CliRunner()
    result = runner.invoke(main, ["levels", "--color", "always"])
    assert result.exit_code == 0
    assert "\x1b[0m\x1b[32mINFO \x1b[0m listening" in result.output
    assert "\x1b[0m\x1b[1m\x1b[31mERROR\x1b[0m failed" in result.output


def test_show():
    runner = CliRunner()
    result = runner.invoke(main, ["show", "214"])
    assert result.exit_code == 0
    assert "ESC[38;5;214m" in result.output


def test_show_invalid():
    runner = CliRunner()
    result = runner.invoke(main, ["show", "nope"])
    assert result.exit_code == 1


def test_version():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
