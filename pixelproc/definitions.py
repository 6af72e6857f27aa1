"""Pixel kinds, their black and white values, and clamping to numeric types."""

from __future__ import annotations

import enum
import math
from typing import Union

import numpy as np

Number = Union[int, float]


class PixelKind(enum.Enum):
    """The colour layouts of pixels that have named black and white values."""

    LUMA = "luma"
    LUMA_ALPHA = "luma_alpha"
    RGB = "rgb"
    RGBA = "rgba"

    @property
    def channels(self) -> int:
        """Number of channels in a pixel of this kind."""
        return {
            PixelKind.LUMA: 1,
            PixelKind.LUMA_ALPHA: 2,
            PixelKind.RGB: 3,
            PixelKind.RGBA: 4,
        }[self]

    @property
    def has_alpha(self) -> bool:
        """Whether the last channel of this kind is an alpha channel."""
        return self in (PixelKind.LUMA_ALPHA, PixelKind.RGBA)


def _max_value(depth: int) -> int:
    if depth not in (8, 16):
        raise ValueError(f"unsupported bit depth: {depth}")
    return (1 << depth) - 1


def _pixel(kind: PixelKind, colour: int, depth: int) -> tuple[int, ...]:
    full = _max_value(depth)
    kind = PixelKind(kind)
    if kind.has_alpha:
        return (colour,) * (kind.channels - 1) + (full,)
    return (colour,) * kind.channels


def black(kind: PixelKind, depth: int = 8) -> tuple[int, ...]:
    """Return the black pixel of the given kind and bit depth (8 or 16).

    Pixels with an alpha channel are fully opaque.
    """
    _max_value(depth)
    return _pixel(kind, 0, depth)


def white(kind: PixelKind, depth: int = 8) -> tuple[int, ...]:
    """Return the white pixel of the given kind and bit depth (8 or 16)."""
    return _pixel(kind, _max_value(depth), depth)


def clamp(value: Number, dtype) -> Number:
    """Clamp ``value`` to the range of the numeric type ``dtype``.

    Values inside the range are converted as a cast would, so floats are
    truncated towards zero when the target is an integer type. Float targets
    receive the value unchanged. NaN handling is unspecified.
    """
    target = np.dtype(dtype)
    if target.kind == "f":
        return float(value)
    if target.kind not in "iub":
        raise TypeError(f"cannot clamp to {target}")
    info = np.iinfo(target) if target.kind != "b" else None
    low, high = (0, 1) if info is None else (int(info.min), int(info.max))
    if not value < high:
        return high
    if not value > low:
        return low
    if isinstance(value, float) and not math.isfinite(value):
        return high if value > 0 else low
    return int(value)