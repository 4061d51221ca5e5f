"""Allocating string helpers: ASCII case mapping, insertion and trimming."""

from __future__ import annotations

import string

__all__ = ["insert", "to_lower", "to_upper", "trim"]

_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def to_upper(text: str | None) -> str | None:
    """Return ``text`` with ASCII letters upper-cased; ``None`` passes through."""
    if text is None:
        return None
    return text.translate(_TO_UPPER)


def to_lower(text: str | None) -> str | None:
    """Return ``text`` with ASCII letters lower-cased; ``None`` passes through."""
    if text is None:
        return None
    return text.translate(_TO_LOWER)


def insert(src: str | None, text: str | None, start_index: int) -> str | None:
    """Return ``src`` with ``text`` inserted at ``start_index``.

    Returns ``None`` when either string is ``None`` and raises
    :class:`ValueError` when ``start_index`` lies outside ``src``.
    """
    if src is None or text is None:
        return None
    if not 0 <= start_index <= len(src):
        raise ValueError(f"start index {start_index} is outside a string of length {len(src)}")
    return src[:start_index] + text + src[start_index:]


def trim(src: str | None, trim_chars: str | None) -> str | None:
    """Strip any of ``trim_chars`` from both ends of ``src``.

    With no trim characters the string comes back unchanged.
    """
    if src is None:
        return None
    if not trim_chars:
        return src
    return src.strip(trim_chars)