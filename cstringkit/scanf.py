"""scanf-style parsing with the conversion rules of a C ``sscanf``.

Field widths count characters. The ``%n`` conversion reports how many
UTF-8 bytes of the input had been consumed, the same unit that
:func:`cstringkit.printf.sprintf` uses for its counts.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

__all__ = ["ScanResult", "sscanf"]

_WHITESPACE = frozenset(" \t\n\v\f\r")
_DIGITS = frozenset("0123456789")
_HEX_VALUES = {char: value for value, char in enumerate("0123456789abcdef")}
_HEX_VALUES.update({char.upper(): value for char, value in list(_HEX_VALUES.items())})
_MAX_WIDTH = 1024
_INTEGER_CONVERSIONS = frozenset("uoxXdni")
_UNSIGNED_CONVERSIONS = frozenset("uoxX")
_FLOAT_CONVERSIONS = frozenset("eEgGf")
_BASES = {"x": 16, "X": 16, "o": 8, "i": 0}
_STORAGE_BITS = {"h": 16, "l": 64}


@dataclass
class ScanResult:
    """Outcome of :func:`sscanf`.

    ``count`` is the number of successful assignments (``-1`` when the
    input or the format is empty). ``values`` holds every value stored, in
    order, including the counts written by ``%n``.
    """

    count: int
    values: list[Any] = field(default_factory=list)


@dataclass
class _Directive:
    offset: int
    suppress: bool = False
    width: int = 0
    length: str = ""


def sscanf(string: str, format: str) -> ScanResult:
    """Parse ``string`` according to a C ``scanf`` format string."""
    if not string or not format:
        return ScanResult(-1)
    return _Scanner(string, format).run()


class _Scanner:
    def __init__(self, text: str, fmt: str) -> None:
        self.text = text
        self.format = fmt
        self.pos = 0
        self.fpos = 0
        self.count = 0
        self.values: list[Any] = []

    def run(self) -> ScanResult:
        while self._next_directive():
            directive = self._parse_directive()
            self._convert(self._format_char(), directive)
            self.fpos += 1
        return ScanResult(self.count, self.values)

    def _char(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _format_char(self, offset: int = 0) -> str:
        index = self.fpos + offset
        return self.format[index] if index < len(self.format) else ""

    def _next_directive(self) -> bool:
        if self.fpos >= len(self.format):
            return False
        while self._format_char() in _WHITESPACE:
            if self._char() == self._format_char():
                self.pos += 1
            self.fpos += 1
        current = self._format_char()
        if not current:
            return False
        if current == "%" and self._format_char(1) != "%":
            matched = True
        else:
            matched = self._char() == current
            if matched:
                self.pos += 1
                self.fpos += 1
        if matched:
            matched = self.fpos < len(self.format)
            if matched:
                self.fpos += 1
        return matched

    def _parse_directive(self) -> _Directive:
        offset = len(self.text[: self.pos].encode("utf-8", "surrogatepass"))
        directive = _Directive(offset=offset)
        if self._format_char() == "*":
            directive.suppress = True
            self.fpos += 1
        while self._format_char() in _DIGITS:
            directive.width = directive.width * 10 + int(self._format_char())
            self.fpos += 1
        letter = self._format_char()
        if letter in ("h", "l", "L"):
            directive.length = letter
            self.fpos += 1
            if letter == "l" and self._format_char() == "l":
                self.fpos += 1
        return directive

    def _convert(self, conversion: str, directive: _Directive) -> None:
        if conversion != "c":
            while self._char() in _WHITESPACE:
                self.pos += 1
        if conversion in _INTEGER_CONVERSIONS:
            self._scan_integer(
                directive,
                base=_BASES.get(conversion, 10),
                unsigned=conversion in _UNSIGNED_CONVERSIONS,
                count_only=conversion == "n",
            )
        elif conversion in _FLOAT_CONVERSIONS:
            self._scan_float(directive)
        elif conversion == "c":
            self._scan_chars(directive)
        elif conversion == "s":
            self._scan_word(directive)
        elif conversion == "p":
            self._scan_pointer(directive)

    def _store(self, value: Any, directive: _Directive, counted: bool = True) -> None:
        self.values.append(value)
        if counted:
            self.count += 1

    def _scan_integer(self, directive: _Directive, base: int, unsigned: bool, count_only: bool) -> None:
        if count_only:
            value, end = directive.offset, self.pos
        else:
            value, end = _parse_integer(self.text, self.pos, base, directive.width)
        if (end > self.pos or count_only) and not directive.suppress:
            bits = _STORAGE_BITS.get(directive.length, 32)
            self._store(_truncate(value, bits, signed=not unsigned), directive, counted=not count_only)
        self.pos = end

    def _scan_float(self, directive: _Directive) -> None:
        special = _match_special(self.text, self.pos)
        if special is None:
            value, end = _parse_decimal(self.text, self.pos, directive.width)
        else:
            value, end = special
        if end > self.pos and not directive.suppress:
            self._store(value if directive.length == "L" else _to_single(value), directive)
        self.pos = end

    def _scan_chars(self, directive: _Directive) -> None:
        width = directive.width or 1
        if directive.suppress:
            self.pos = min(self.pos + width, len(self.text))
            return
        chunk = self.text[self.pos : self.pos + width]
        self.pos += len(chunk)
        self._store(chunk, directive)

    def _scan_word(self, directive: _Directive) -> None:
        if directive.suppress:
            while self._char() and self._char() not in _WHITESPACE:
                self.pos += 1
            return
        end = self.pos
        while end < len(self.text) and self.text[end] not in _WHITESPACE and end - self.pos < directive.width:
            end += 1
        self._store(self.text[self.pos : end], directive)
        self.pos = end

    def _scan_pointer(self, directive: _Directive) -> None:
        special = _match_special(self.text, self.pos)
        if special is None:
            value, end = _parse_integer(self.text, self.pos, 16, directive.width)
            value = _truncate(value, 64, signed=False)
        else:
            value, end = 0, special[1]
        if end > self.pos and not directive.suppress:
            self._store(value, directive)
        self.pos = end


def _truncate(value: int, bits: int, signed: bool) -> int:
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _to_single(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _window(text: str, start: int, width: int) -> str:
    width = min(width, _MAX_WIDTH)
    return text[start : start + width] if width else text[start:]


def _end(text: str, start: int, width: int, consumed: int) -> int:
    """Where the input resumes: a width skips up to the next space."""
    width = min(width, _MAX_WIDTH)
    if not width:
        return start + consumed
    end = start
    while end < len(text) and end - start < width and text[end] != " ":
        end += 1
    return end


def _read_sign(window: str, index: int) -> tuple[int, bool]:
    char = window[index : index + 1]
    if char == "-":
        return index + 1, True
    if char == "+":
        return index + 1, False
    return index, False


def _skip_digits(window: str, index: int) -> int:
    while index < len(window) and window[index] in _DIGITS:
        index += 1
    return index


def _parse_integer(text: str, start: int, base: int, width: int) -> tuple[int, int]:
    window = _window(text, start, width)
    index, negative = _read_sign(window, 0)
    if window[index : index + 1] == "0" and base != 10:
        if window[index + 1 : index + 2] in ("x", "X"):
            detected, index = 16, index + 2
        else:
            detected, index = 8, index + 1
    else:
        detected = 10
    base = base or detected
    value = 0
    while index < len(window):
        digit = _HEX_VALUES.get(window[index])
        if digit is None or digit >= base:
            break
        value = value * base + digit
        index += 1
    value = _truncate(-value if negative else value, 64, signed=True)
    return value, _end(text, start, width, index)


def _parse_decimal(text: str, start: int, width: int) -> tuple[float, int]:
    window = _window(text, start, width)
    index, negative = _read_sign(window, 0)
    whole_start = index
    index = _skip_digits(window, index)
    whole = window[whole_start:index]
    fraction = ""
    if window[index : index + 1] == ".":
        index += 1
        fraction_start = index
        index = _skip_digits(window, index)
        fraction = window[fraction_start:index]
    exponent = 0
    if window[index : index + 1] in ("e", "E"):
        index, exponent_negative = _read_sign(window, index + 1)
        exponent_start = index
        index = _skip_digits(window, index)
        digits = window[exponent_start:index]
        exponent = int(digits) if digits else 0
        if exponent_negative:
            exponent = -exponent
    mantissa = (whole + fraction) or "0"
    sign = "-" if negative else ""
    value = float(Decimal(f"{sign}{mantissa}E{exponent - len(fraction)}"))
    return value, _end(text, start, width, index)


def _match_special(text: str, start: int) -> tuple[float, int] | None:
    """Recognise inf, nan and the printed forms of a null pointer."""
    index = start
    sign = 1.0
    value = 0.0
    recognized = False
    if text.startswith("+", index):
        index += 1
    elif text.startswith("-", index):
        sign = -1.0
        index += 1
    if text.startswith(("inf", "INF"), index):
        index += 3
        if text.startswith(("inity", "INITY"), index):
            index += 5
        value = sign * math.inf
        recognized = True
    if text.startswith(("nan", "NAN"), index):
        index += 3
        value = math.nan
        recognized = True
    if text.startswith("(nil)", index):
        index += 5
        recognized = True
    if text.startswith(("0x0", "0X0"), index):
        index += 3
        value = 0.0
        recognized = True
    return (value, index) if recognized else None