"""Small text helpers: integer parsing, tokenising and printf-style formatting."""

from __future__ import annotations

import re

_INT_LIMIT = 2147483647
_LEADING = re.compile(r"([^0-9]*)([0-9]*)")
_NEGATIVE_MARK = re.compile(r"-[1-8]")
_SPECIFIER = re.compile(r"%([csdiuxXbopS%])")


def getnbr(text: str) -> int:
    """Parse the first run of digits in ``text`` as an integer.

    Characters before the digits are skipped. A ``-`` counts as a sign only
    when the character after it is one of ``1`` to ``8``. Results whose
    magnitude reaches 2147483647 are reported as 0.
    """
    match = _LEADING.match(text)
    prefix, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    negative = _NEGATIVE_MARK.search(text[: len(prefix) + 1]) is not None
    value = -int(digits) if negative else int(digits)
    if value >= _INT_LIMIT or value <= -_INT_LIMIT:
        return 0
    return value


def strtok(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty tokens."""
    return [token for token in text.split(sep) if token]


def _wrap(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _digits(value: int, spec: str) -> str:
    """Digits of a positive value; zero and negatives give nothing."""
    return format(value, spec) if value > 0 else ""


def _convert(flag: str, value: object) -> str:
    if flag == "c":
        return value if isinstance(value, str) else chr(int(value) & 0xFF)
    if flag == "s":
        return str(value)
    if flag in "di":
        return str(_wrap(int(value), 32))
    if flag == "u":
        return str(int(value) & 0xFFFFFFFF)
    if flag == "x":
        return _digits(_wrap(int(value), 32), "x")
    if flag == "X":
        return _digits(_wrap(int(value), 32), "X")
    if flag == "b":
        return _digits(_wrap(int(value), 64), "b")
    if flag == "o":
        return _digits(_wrap(int(value), 64), "o")
    if flag == "p":
        return "0x" + _digits(_wrap(int(value), 64), "x")
    # "S": a backslash followed by the octal digits
    return "\\" + _digits(_wrap(int(value), 64), "o")


def format_printf(fmt: str, *args: object) -> str:
    """Format ``fmt`` with the specifiers ``%c %s %d %i %u %x %X %b %o %p %S %%``.

    Unknown specifiers are copied through unchanged. Raises ``TypeError``
    when there are fewer arguments than specifiers that consume one.
    """
    values = iter(args)

    def replace(match: re.Match[str]) -> str:
        flag = match.group(1)
        if flag == "%":
            return "%"
        try:
            value = next(values)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None
        return _convert(flag, value)

    return _SPECIFIER.sub(replace, fmt)