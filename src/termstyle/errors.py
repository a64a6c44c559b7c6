"""Error types for termstyle.

Color parsing failures carry the exact text that could not be parsed.
I/O failures from the styling sink are plain ``OSError`` instances and
are never wrapped by this package.
"""

from enum import Enum, auto
from typing import Optional


COLOR_NAMES = (
    "black",
    "blue",
    "green",
    "red",
    "cyan",
    "magenta",
    "yellow",
    "white",
)


class TermStyleError(Exception):
    """Base class for termstyle errors."""
    pass


class ColorSyntaxErrorKind(Enum):
    """What the color grammar expected to see."""
    INVALID_NAME = auto()
    INVALID_ANSI256 = auto()
    INVALID_RGB = auto()


class ColorSyntaxError(TermStyleError):
    """The color grammar rejected its input."""

    def __init__(self, kind: ColorSyntaxErrorKind, given: str):
        self.kind = kind
        self.given = given
        super().__init__(self._message())

    def _message(self) -> str:
        if self.kind is ColorSyntaxErrorKind.INVALID_NAME:
            return (
                f"unrecognized color name '{self.given}'. "
                f"Choose from: {', '.join(COLOR_NAMES)}"
            )
        if self.kind is ColorSyntaxErrorKind.INVALID_ANSI256:
            return (
                "unrecognized ansi256 color number, "
                f"should be '[0-255]' (or a hex number), but is '{self.given}'"
            )
        return (
            "unrecognized RGB color triple, "
            f"should be '[0-255],[0-255],[0-255]' (or a hex triple), "
            f"but is '{self.given}'"
        )

    def invalid(self) -> str:
        """Return the string that couldn't be parsed."""
        return self.given


class ParseColorError(TermStyleError, ValueError):
    """An error from parsing an invalid color specification.

    Either the grammar rejected the text (``syntax_error`` is set), or the
    grammar accepted a value that :class:`~termstyle.color.Color` has no
    variant for yet.
    """

    def __init__(self, given: str, syntax_error: Optional[ColorSyntaxError] = None):
        self.given = given
        self.syntax_error = syntax_error
        if syntax_error is not None:
            message = str(syntax_error)
        else:
            message = f"unrecognized color value '{given}'"
        super().__init__(message)

    @classmethod
    def from_syntax(cls, err: ColorSyntaxError) -> "ParseColorError":
        return cls(err.invalid(), syntax_error=err)

    @classmethod
    def unrecognized(cls, given: str) -> "ParseColorError":
        return cls(given)

    @property
    def is_unrecognized(self) -> bool:
        return self.syntax_error is None

    def invalid(self) -> str:
        """Return the string that couldn't be parsed as a valid color."""
        if self.syntax_error is not None:
            return self.syntax_error.invalid()
        return self.given


class BorrowError(TermStyleError, RuntimeError):
    """A shared buffer was borrowed while already in use.

    Raised when a styled value is formatted from inside the formatting of
    another styled value bound to the same buffer.
    """
    pass
