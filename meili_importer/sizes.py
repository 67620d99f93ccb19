"""Parsing of human-readable byte sizes such as ``20 MiB``."""

from __future__ import annotations

import re
from decimal import Decimal

_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([kmgtpe]?)(i?)(b?)\s*$", re.IGNORECASE)
_PREFIXES = "kmgtpe"


def parse_byte_size(text: str) -> int:
    """Return the number of bytes described by ``text``.

    Decimal prefixes (KB, MB, ...) are powers of 1000, binary ones
    (KiB, MiB, ...) powers of 1024. A bare number is a count of bytes.
    """
    match = _PATTERN.match(text)
    if match is None:
        raise ValueError(f"invalid byte size: {text!r}")
    number, prefix, binary, _ = match.groups()
    if binary and not prefix:
        raise ValueError(f"invalid byte size: {text!r}")
    exponent = _PREFIXES.index(prefix.lower()) + 1 if prefix else 0
    base = 1024 if binary else 1000
    return int(Decimal(number) * base**exponent)