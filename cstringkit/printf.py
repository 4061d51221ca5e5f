"""printf-style formatting with C conversion semantics.

Widths, precisions and the ``%n`` count are measured in UTF-8 bytes,
the way a narrow C formatter sees a multibyte string.
"""

from __future__ import annotations

import math
import operator
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Callable

__all__ = ["Ref", "sprintf"]

_SPEC_RE = re.compile(
    r"%(?:(?P<percent>%)"
    r"|(?P<flags>[-+ 0#]*)(?P<width>\*|[0-9]*)"
    r"(?:(?P<dot>\.)(?P<precision>\*|[0-9]*))?"
    r"(?P<length>h|ll|l|L)?(?P<conversion>.?))",
    re.DOTALL,
)

_LENGTHS = {"h": "h", "l": "l", "ll": "l", "L": "L"}
_FLOAT_CONVERSIONS = frozenset("feEgG")
_SIGNED_CONVERSIONS = frozenset("di")
_UNSIGNED_CONVERSIONS = frozenset("uoxXp")
_DIGIT_FORMATS = {"d": "d", "i": "d", "u": "d", "o": "o", "x": "x", "X": "X", "p": "x"}
_SIGN_CHARS = ("-", "+", " ")
_MAX_G_PRECISION = 18


@dataclass
class Ref:
    """Mutable slot that receives the number of bytes written for ``%n``."""

    value: int = 0


@dataclass
class _Spec:
    conversion: str
    minus: bool = False
    plus: bool = False
    space: bool = False
    zero: bool = False
    alt: bool = False
    width: int = 0
    dot: bool = False
    precision: int = 0
    length: str = ""

    @property
    def upper(self) -> bool:
        return self.conversion in ("X", "E", "G")

    @classmethod
    def parse(cls, match: re.Match, take: Callable[[], Any]) -> "_Spec":
        flags = match["flags"]
        spec = cls(
            conversion=match["conversion"],
            minus="-" in flags,
            plus="+" in flags,
            space=" " in flags,
            zero="0" in flags,
            alt="#" in flags,
            length=_LENGTHS.get(match["length"] or "", ""),
        )
        width = match["width"]
        if width == "*":
            requested = _as_int(take())
            if requested < 0:
                spec.minus = True
            spec.width = abs(requested)
        elif width:
            spec.width = int(width)
        if match["dot"]:
            spec.dot = True
            precision = match["precision"]
            if precision == "*":
                requested = _as_int(take())
                spec.precision = max(requested, 0)
                spec.dot = requested >= 0
            elif precision:
                spec.precision = int(precision)
        return spec


def sprintf(format: str, *args: Any) -> str:
    """Format ``args`` according to a C ``printf`` format string."""
    take = _argument_taker(args)
    pieces: list[str] = []
    written = 0
    position = 0
    for match in _SPEC_RE.finditer(format):
        literal = format[position:match.start()]
        position = match.end()
        pieces.append(literal)
        written += _byte_len(literal)
        if match["percent"]:
            piece = "%"
        elif not match["conversion"]:
            break
        else:
            spec = _Spec.parse(match, take)
            piece = _convert(spec, take, written)
        pieces.append(piece)
        written += _byte_len(piece)
    pieces.append(format[position:])
    return "".join(pieces)


def _argument_taker(args: tuple) -> Callable[[], Any]:
    iterator = iter(args)

    def take() -> Any:
        try:
            return next(iterator)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    return take


def _convert(spec: _Spec, take: Callable[[], Any], written: int) -> str:
    conversion = spec.conversion
    if conversion == "c":
        body = _format_char(spec, take())
    elif conversion == "s":
        body = _format_string(spec, take())
    elif conversion in _FLOAT_CONVERSIONS:
        body = _format_float(spec, take())
    elif conversion in _SIGNED_CONVERSIONS:
        body = _format_signed(spec, take())
    elif conversion in _UNSIGNED_CONVERSIONS:
        body = _format_unsigned(spec, take())
    elif conversion == "n":
        _store_count(spec, take(), written)
        return ""
    else:
        return ""
    return _pad(body, spec)


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8", "surrogatepass"))


def _utf8_len(char: str) -> int | None:
    try:
        return len(char.encode("utf-8"))
    except UnicodeEncodeError:
        return None


def _as_int(value: Any) -> int:
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(f"an integer is required, not {type(value).__name__}") from None


def _wrap(value: int, bits: int, signed: bool) -> int:
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _sign(spec: _Spec, negative: bool) -> str:
    if negative:
        return "-"
    if spec.plus:
        return "+"
    if spec.space:
        return " "
    return ""


def _pad(body: str, spec: _Spec) -> str:
    spaces = spec.width - _byte_len(body)
    if spaces <= 0:
        return body
    if spec.minus:
        return body + " " * spaces
    if spec.zero and body.startswith(_SIGN_CHARS):
        return body[0] + "0" * spaces + body[1:]
    return ("0" if spec.zero else " ") * spaces + body


def _format_char(spec: _Spec, arg: Any) -> str:
    if isinstance(arg, str):
        if len(arg) != 1:
            raise TypeError("%c requires a single character")
        char = arg
    elif spec.length == "l":
        try:
            char = chr(_as_int(arg))
        except (ValueError, OverflowError):
            return ""
    else:
        char = chr(_as_int(arg) & 0xFF)
    if spec.length == "l" and _utf8_len(char) is None:
        return ""
    return char


def _format_string(spec: _Spec, arg: Any) -> str:
    if not isinstance(arg, str):
        raise TypeError(f"%s requires a string, not {type(arg).__name__}")
    if spec.dot and spec.precision == 0:
        return ""
    kept: list[str] = []
    used = 0
    for char in arg:
        size = _utf8_len(char)
        if size is None:
            continue
        if spec.dot and used + size > spec.precision:
            break
        kept.append(char)
        used += size
    return "".join(kept)


def _format_signed(spec: _Spec, arg: Any) -> str:
    bits = 64 if spec.length == "l" else 32
    value = _wrap(_as_int(arg), bits, signed=True)
    sign = _sign(spec, value < 0)
    return _integer_body(spec, sign, "", abs(value), spec.precision)


def _format_unsigned(spec: _Spec, arg: Any) -> str:
    conversion = spec.conversion
    if conversion == "p":
        value = 0 if arg is None else _wrap(_as_int(arg), 64, signed=False)
    else:
        bits = 64 if spec.length == "l" else 32
        value = _wrap(_as_int(arg), bits, signed=False)
    prefix = ""
    precision = spec.precision
    if value and conversion != "u" and (spec.alt or conversion == "p"):
        if conversion == "o":
            prefix = "0"
            precision = max(precision - 1, 0)
        else:
            prefix = "0X" if conversion == "X" else "0x"
    if conversion == "p" and not value:
        prefix = "(nil)"
    return _integer_body(spec, "", prefix, value, precision)


def _skips_zero(spec: _Spec, magnitude: int) -> bool:
    conversion = spec.conversion
    if conversion == "p" and not magnitude:
        return True
    if not (spec.dot and spec.precision == 0 and magnitude == 0):
        return False
    return conversion in ("x", "X", "d", "i") or (conversion == "o" and not spec.alt)


def _integer_body(spec: _Spec, sign: str, prefix: str, magnitude: int, precision: int) -> str:
    if _skips_zero(spec, magnitude):
        return sign + prefix
    digits = format(magnitude, _DIGIT_FORMATS[spec.conversion])
    if spec.dot and precision > len(digits):
        digits = digits.rjust(precision, "0")
    return sign + prefix + digits


def _store_count(spec: _Spec, target: Any, written: int) -> None:
    if target is None:
        return
    if not isinstance(target, Ref):
        raise TypeError("%n requires a Ref")
    if spec.length == "h":
        target.value = _wrap(written, 16, signed=True)
    elif spec.length == "l":
        target.value = written
    else:
        target.value = _wrap(written, 32, signed=True)


def _format_float(spec: _Spec, arg: Any) -> str:
    try:
        value = float(arg)
    except (TypeError, ValueError):
        raise TypeError(f"a real number is required, not {type(arg).__name__}") from None
    negative = math.copysign(1.0, value) < 0
    sign = _sign(spec, negative)
    if math.isnan(value) or math.isinf(value):
        word = "nan" if math.isnan(value) else "inf"
        return sign + (word.upper() if spec.upper else word)

    precision = spec.precision if spec.dot else 6
    with localcontext() as context:
        context.prec = 1200 + precision
        magnitude = Decimal(abs(value))
        mantissa, exponent = _normalise(magnitude, precision)
        conversion = spec.conversion
        remove_zeros = False
        if conversion in ("g", "G"):
            remove_zeros = True
            significant = precision or 1
            use_exponent = exponent < -4 or exponent >= significant
            if use_exponent:
                precision = significant - 1
                conversion = "e" if conversion == "g" else "E"
            else:
                precision = significant - (exponent + 1)
            precision = min(precision, _MAX_G_PRECISION)
        if conversion in ("e", "E"):
            body = _fixed(mantissa, precision, spec.alt, remove_zeros)
            body += _exponent(exponent, conversion)
        else:
            body = _fixed(magnitude, precision, spec.alt, remove_zeros)
    return sign + body


def _round(value: Decimal, places: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _normalise(value: Decimal, precision: int) -> tuple[Decimal, int]:
    if not value:
        return value, 0
    exponent = value.adjusted()
    mantissa = _round(value.scaleb(-exponent), precision)
    if mantissa >= 10:
        mantissa = mantissa.scaleb(-1)
        exponent += 1
    return mantissa, exponent


def _fixed(value: Decimal, precision: int, alt: bool, remove_zeros: bool) -> str:
    rounded = _round(value, precision)
    whole = int(rounded)
    fraction = int((rounded - whole).scaleb(precision))
    text = str(whole)
    if precision or fraction or alt:
        tail = "." + (f"{fraction:0{precision}d}" if precision else "")
        if remove_zeros and not alt:
            tail = tail.rstrip("0.")
        text += tail
    return text


def _exponent(exponent: int, letter: str) -> str:
    sign = "+" if exponent >= 0 else "-"
    return f"{letter}{sign}{abs(exponent):02d}"