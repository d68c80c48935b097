"""Seed color parsing and normalization."""

from __future__ import annotations

import re
from dataclasses import dataclass

from accentforge.errors import InvalidColorFormat

_HEX_DIGITS_RE = re.compile(r"[0-9a-fA-F]+")

OPAQUE_ALPHA = 0xFF000000


@dataclass(frozen=True, slots=True)
class SeedColor:
    """An opaque ARGB seed color plus the text it was parsed from."""

    argb: int
    raw: str = ""

    @property
    def red(self) -> int:
        return (self.argb >> 16) & 0xFF

    @property
    def green(self) -> int:
        return (self.argb >> 8) & 0xFF

    @property
    def blue(self) -> int:
        return self.argb & 0xFF

    @property
    def hex_rgb(self) -> str:
        return f"{self.argb & 0xFFFFFF:06X}"


def validate_and_normalize(raw_hex: str) -> SeedColor:
    """Parse ``RRGGBB`` or ``AARRGGBB`` (optionally ``#``-prefixed) into a SeedColor.

    Six digit input gets an opaque alpha. Eight digit input is accepted but
    the alpha byte is forced opaque as well, overlays carry no transparency.
    """
    raw = (raw_hex or "").strip()
    value = raw[1:] if raw.startswith("#") else raw
    if len(value) not in (6, 8) or not _HEX_DIGITS_RE.fullmatch(value):
        raise InvalidColorFormat(value)
    return SeedColor(argb=OPAQUE_ALPHA | (int(value, 16) & 0xFFFFFF), raw=raw)
