"""Grammar for the human readable color syntax.

The format is:

1. Any of the eight color names in English, matched case insensitively.
2. A single 8-bit integer, in either decimal or hexadecimal format.
3. A triple of 8-bit integers separated by commas, where each integer is
   in decimal or hexadecimal format.

Hexadecimal numbers are written with a ``0x`` prefix.

This layer only knows the grammar. Mapping its results onto
:class:`~termstyle.color.Color` happens in :mod:`termstyle.color`.
"""

from string import hexdigits
from typing import NamedTuple, Tuple, Union

from lark import Lark, Transformer
from lark.exceptions import LarkError

from .errors import COLOR_NAMES, ColorSyntaxError, ColorSyntaxErrorKind


GRAMMAR = r"""
start: color

?color: NAME                            -> name
      | number                          -> ansi256
      | number "," number "," number    -> rgb

?number: HEX -> hex
       | DEC -> dec

NAME: /[A-Za-z_][A-Za-z0-9_]*/
HEX.2: /0x[0-9A-Fa-f]+/
DEC: /[0-9]+/
"""


class TermColor(NamedTuple):
    """A color as accepted by the grammar.

    ``kind`` is one of ``"name"``, ``"ansi256"`` or ``"rgb"``.
    """
    kind: str
    value: Union[str, int, Tuple[int, int, int]]


class _ColorTransformer(Transformer):
    """Turn a parse tree into a :class:`TermColor`."""

    def start(self, items):
        return items[0]

    def hex(self, items):
        return int(items[0][2:], 16)

    def dec(self, items):
        return int(items[0])

    def name(self, items):
        return TermColor("name", str(items[0]).lower())

    def ansi256(self, items):
        return TermColor("ansi256", items[0])

    def rgb(self, items):
        return TermColor("rgb", tuple(items))


_parser = Lark(GRAMMAR, parser="lalr", transformer=_ColorTransformer())


def _is_byte(n: int) -> bool:
    return 0 <= n <= 255


def classify_error(s: str) -> ColorSyntaxErrorKind:
    """Decide which part of the grammar a rejected input was aiming for."""
    if "," in s:
        return ColorSyntaxErrorKind.INVALID_RGB
    if s.startswith("0x"):
        digits = s[2:]
        looks_numeric = bool(digits) and all(c in hexdigits for c in digits)
    else:
        looks_numeric = all(c in hexdigits for c in s)
    if looks_numeric:
        return ColorSyntaxErrorKind.INVALID_ANSI256
    return ColorSyntaxErrorKind.INVALID_NAME


def parse_term_color(s: str) -> TermColor:
    """Parse a color specification, raising :class:`ColorSyntaxError`.

    Out-of-range numbers and unknown names are grammar errors too. The
    error always carries the whole input string.
    """
    try:
        result = _parser.parse(s)
    except LarkError:
        raise ColorSyntaxError(classify_error(s), s) from None

    if result.kind == "name":
        if result.value not in COLOR_NAMES:
            raise ColorSyntaxError(classify_error(s), s)
    elif result.kind == "ansi256":
        if not _is_byte(result.value):
            raise ColorSyntaxError(ColorSyntaxErrorKind.INVALID_ANSI256, s)
    elif not all(_is_byte(n) for n in result.value):
        raise ColorSyntaxError(ColorSyntaxErrorKind.INVALID_RGB, s)
    return result
