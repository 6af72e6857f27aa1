"""FAST corner detection on 8-bit grayscale images.

Images are two-dimensional ``numpy`` arrays of ``uint8`` indexed ``[y, x]``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

# Circle labels around the centre pixel p:
#
#          15 00 01
#       14          02
#     13              03
#     12       p      04
#     11              05
#       10          06
#          09 08 07


@dataclass(frozen=True)
class Corner:
    """A detected corner: its location and a detector-specific score."""

    x: int
    y: int
    score: float


class Fast(enum.Enum):
    """Variants of the FAST detector, valued by the contiguous arc length they need.

    A pixel with intensity ``I`` is a corner if a contiguous arc of the
    16-pixel Bresenham circle of radius 3 around it is entirely brighter than
    ``I + t`` or entirely darker than ``I - t``. The score of a corner is the
    greatest threshold at which it still qualifies.
    """

    NINE = 9
    TWELVE = 12


def _as_gray(image) -> np.ndarray:
    array = np.asarray(image)
    if array.ndim != 2:
        raise ValueError("expected a two-dimensional grayscale image")
    if array.dtype != np.uint8:
        raise TypeError(f"expected an image of uint8 pixels, got {array.dtype}")
    return array


def _check_threshold(threshold: int) -> int:
    if not 0 <= threshold <= 255:
        raise ValueError(f"threshold must lie in 0..255, got {threshold}")
    return int(threshold)


def _in_bounds(width: int, height: int, x: int, y: int) -> bool:
    return 3 <= x and 3 <= y and x + 3 < width and y + 3 < height


def _circle(
    rows: Sequence[Sequence[int]], x: int, y: int, p0: int, p4: int, p8: int, p12: int
) -> list[int]:
    return [
        p0,
        rows[y - 3][x + 1],
        rows[y - 2][x + 2],
        rows[y - 1][x + 3],
        p4,
        rows[y + 1][x + 3],
        rows[y + 2][x + 2],
        rows[y + 3][x + 1],
        p8,
        rows[y + 3][x - 1],
        rows[y + 2][x - 2],
        rows[y + 1][x - 3],
        p12,
        rows[y - 1][x - 3],
        rows[y - 2][x - 2],
        rows[y - 3][x - 1],
    ]


def _search_span(circle: Sequence[int], length: int, accept: Callable[[int], bool]) -> bool:
    """True if the circle holds a contiguous (wrapping) run of ``length`` accepted values."""
    if length > len(circle):
        return False
    run = 0
    leading_run = None
    for value in circle:
        if accept(value):
            run += 1
            if run == length:
                return True
        else:
            if leading_run is None:
                leading_run = run
            run = 0
    return run + (leading_run or 0) >= length


def _has_bright_span(circle: Sequence[int], length: int, limit: int) -> bool:
    return _search_span(circle, length, lambda value: value > limit)


def _has_dark_span(circle: Sequence[int], length: int, limit: int) -> bool:
    return _search_span(circle, length, lambda value: value < limit)


def _fast9(rows, width: int, height: int, threshold: int, x: int, y: int) -> bool:
    if not _in_bounds(width, height, x, y):
        return False
    centre = rows[y][x]
    low = centre - threshold
    high = centre + threshold

    p0 = rows[y - 3][x]
    p4 = rows[y + 3][x]
    p8 = rows[y][x + 3]
    p12 = rows[y][x - 3]

    above = (
        (p0 > high and p4 > high)
        or (p4 > high and p8 > high)
        or (p8 > high and p12 > high)
        or (p12 > high and p0 > high)
    )
    below = (
        (p0 < low and p4 < low)
        or (p4 < low and p8 < low)
        or (p8 < low and p12 < low)
        or (p12 < low and p0 < low)
    )
    if not above and not below:
        return False

    circle = _circle(rows, x, y, p0, p4, p8, p12)
    return (above and _has_bright_span(circle, 9, high)) or (
        below and _has_dark_span(circle, 9, low)
    )


def _fast12(rows, width: int, height: int, threshold: int, x: int, y: int) -> bool:
    if not _in_bounds(width, height, x, y):
        return False
    centre = rows[y][x]
    low = centre - threshold
    high = centre + threshold

    p0 = rows[y - 3][x]
    p8 = rows[y + 3][x]
    above = p0 > high and p8 > high
    below = p0 < low and p8 < low
    if not above and not below:
        return False

    p4 = rows[y][x + 3]
    p12 = rows[y][x - 3]
    above = above and (p4 > high or p12 > high)
    below = below and (p4 < low or p12 < low)
    if not above and not below:
        return False

    circle = _circle(rows, x, y, p0, p4, p8, p12)
    if above:
        return _has_bright_span(circle, 12, high)
    return _has_dark_span(circle, 12, low)


_DETECTORS = {Fast.NINE: _fast9, Fast.TWELVE: _fast12}


def _score(rows, width: int, height: int, threshold: int, x: int, y: int, variant: Fast) -> int:
    detect = _DETECTORS[Fast(variant)]
    high, low = 255, threshold
    while high != low:
        probe = high if high == low + 1 else (high + low) // 2
        if detect(rows, width, height, probe, x, y):
            low = probe
        else:
            high = probe - 1
    return high


def _corners(image, threshold: int, variant: Fast) -> list[Corner]:
    gray = _as_gray(image)
    threshold = _check_threshold(threshold)
    height, width = gray.shape
    rows = gray.astype(np.int32).tolist()
    detect = _DETECTORS[variant]
    return [
        Corner(x, y, float(_score(rows, width, height, threshold, x, y, variant)))
        for y in range(3, height - 3)
        for x in range(3, width - 3)
        if detect(rows, width, height, threshold, x, y)
    ]


def corners_fast12(image, threshold: int) -> list[Corner]:
    """Find corners using FAST-12 features, in row-major order."""
    return _corners(image, threshold, Fast.TWELVE)


def corners_fast9(image, threshold: int) -> list[Corner]:
    """Find corners using FAST-9 features, in row-major order."""
    return _corners(image, threshold, Fast.NINE)


def fast_corner_score(image, threshold: int, x: int, y: int, variant: Fast) -> int:
    """Return the largest threshold at which ``(x, y)`` is still a FAST corner.

    ``threshold`` is a lower bound for the search, normally the threshold at
    which the corner was detected. The corner test uses a strict inequality,
    so a smallest intensity difference of ``n`` gives a score of ``n - 1``.
    """
    gray = _as_gray(image)
    threshold = _check_threshold(threshold)
    height, width = gray.shape
    return _score(gray.astype(np.int32).tolist(), width, height, threshold, x, y, variant)


def is_corner_fast9(image, threshold: int, x: int, y: int) -> bool:
    """Whether ``(x, y)`` is a corner according to the FAST-9 detector."""
    gray = _as_gray(image)
    threshold = _check_threshold(threshold)
    height, width = gray.shape
    if not _in_bounds(width, height, x, y):
        return False
    return _fast9(gray.astype(np.int32).tolist(), width, height, threshold, x, y)


def is_corner_fast12(image, threshold: int, x: int, y: int) -> bool:
    """Whether ``(x, y)`` is a corner according to the FAST-12 detector."""
    gray = _as_gray(image)
    threshold = _check_threshold(threshold)
    height, width = gray.shape
    if not _in_bounds(width, height, x, y):
        return False
    return _fast12(gray.astype(np.int32).tolist(), width, height, threshold, x, y)