"""The set of colors available for terminal foreground and background.

``Ansi256`` and ``Rgb`` colors only render correctly on terminals that
understand the extended SGR sequences.

Colors can be parsed from their human readable form with
:meth:`Color.parse`; see :mod:`termstyle.parser` for the syntax. The set of
variants may grow over time, so code matching on colors should keep a
fallback branch.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from .errors import COLOR_NAMES, ColorSyntaxError, ParseColorError
from .parser import TermColor, parse_term_color


# SGR offsets for the eight basic colors.
_ANSI_OFFSETS: Dict[str, int] = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}


class Color(ABC):
    """Base class for terminal colors."""

    # Filled in below, once the variants exist.
    BLACK: Color
    BLUE: Color
    GREEN: Color
    RED: Color
    CYAN: Color
    MAGENTA: Color
    YELLOW: Color
    WHITE: Color
    Ansi256: type
    Rgb: type

    @abstractmethod
    def ansi_code(self, background: bool = False, intense: bool = False) -> Optional[str]:
        """Return the SGR parameters selecting this color, or None."""
        pass

    @classmethod
    def parse(cls, s: str) -> Color:
        """Parse a color from its human readable form.

        Raises :class:`~termstyle.errors.ParseColorError` with the offending
        text if ``s`` is not a valid color.
        """
        try:
            term_color = parse_term_color(s)
        except ColorSyntaxError as err:
            raise ParseColorError.from_syntax(err) from None
        color = cls.from_term_color(term_color)
        if color is None:
            raise ParseColorError.unrecognized(s)
        return color

    @staticmethod
    def from_term_color(term_color: TermColor) -> Optional[Color]:
        """Map a grammar result onto a color variant, if there is one."""
        if term_color.kind == "name":
            return _NAMED.get(term_color.value)
        if term_color.kind == "ansi256":
            return Ansi256(term_color.value)
        if term_color.kind == "rgb":
            return Rgb(*term_color.value)
        return None


@dataclass(frozen=True)
class Named(Color):
    """One of the eight basic terminal colors."""
    name: str

    def ansi_code(self, background: bool = False, intense: bool = False) -> Optional[str]:
        offset = _ANSI_OFFSETS[self.name]
        if intense:
            return f"{48 if background else 38};5;{offset + 8}"
        return str((40 if background else 30) + offset)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Color.{self.name.upper()}"


@dataclass(frozen=True)
class Ansi256(Color):
    """An 8-bit palette color."""
    code: int

    def __post_init__(self):
        if not 0 <= self.code <= 255:
            raise ValueError(f"ansi256 color out of range: {self.code}")

    def ansi_code(self, background: bool = False, intense: bool = False) -> Optional[str]:
        return f"{48 if background else 38};5;{self.code}"

    def __str__(self) -> str:
        return str(self.code)


@dataclass(frozen=True)
class Rgb(Color):
    """A 24-bit color."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for component in (self.r, self.g, self.b):
            if not 0 <= component <= 255:
                raise ValueError(f"rgb component out of range: {component}")

    def ansi_code(self, background: bool = False, intense: bool = False) -> Optional[str]:
        return f"{48 if background else 38};2;{self.r};{self.g};{self.b}"

    def __str__(self) -> str:
        return f"{self.r},{self.g},{self.b}"


class _Nonexhaustive(Color):
    """Reserved variant; never produced by parsing and never rendered."""

    def ansi_code(self, background: bool = False, intense: bool = False) -> Optional[str]:
        return None

    def __repr__(self) -> str:
        return "Color._NONEXHAUSTIVE"


_NAMED: Dict[str, Color] = {name: Named(name) for name in COLOR_NAMES}

Color.BLACK = _NAMED["black"]
Color.BLUE = _NAMED["blue"]
Color.GREEN = _NAMED["green"]
Color.RED = _NAMED["red"]
Color.CYAN = _NAMED["cyan"]
Color.MAGENTA = _NAMED["magenta"]
Color.YELLOW = _NAMED["yellow"]
Color.WHITE = _NAMED["white"]
Color.Ansi256 = Ansi256
Color.Rgb = Rgb
Color._NONEXHAUSTIVE = _Nonexhaustive()
