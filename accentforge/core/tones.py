"""Tone ramp generation for the dynamic-color palette."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from accentforge.core.colors import shift_additive

TONE_STOPS: tuple[int, ...] = (50, 100, 200, 300, 400, 500, 600, 700, 800, 900, 950)

ToneRamp = Mapping[int, int]


def tone_for_stop(base: int, stop: int) -> int:
    """Return the tone for one stop; stop 500 is always ``base``.

    This is a linear approximation, not a perceptually uniform tone model.
    Stops between 100 and 500 pass the base through unchanged.
    """
    if stop >= 500:
        return shift_additive(base, (stop - 500) / 1000, lighter=False)
    factor = stop / 100 if stop <= 100 else 1.0
    return shift_additive(base, (1.0 - factor) * 0.8, lighter=True)


def generate_tones(base: int) -> ToneRamp:
    """Build the 11-stop ramp, lightest (50) to darkest (950)."""
    return MappingProxyType({stop: tone_for_stop(base, stop) for stop in TONE_STOPS})
