"""Distance transforms: the distance of each pixel from the nearest pixel of interest.

Images are two-dimensional ``numpy`` arrays indexed ``[y, x]``.
"""

from __future__ import annotations

import enum
import math
from typing import Sequence

import numpy as np


class Norm(enum.Enum):
    """How distance between pixel coordinates is measured.

    ``L1`` is ``abs(x1 - x2) + abs(y1 - y2)`` (Manhattan or city block).
    ``LINF`` is ``max(abs(x1 - x2), abs(y1 - y2))`` (chessboard).
    The squared Euclidean distance has its own function,
    :func:`euclidean_squared_distance_transform`.
    """

    L1 = "l1"
    LINF = "linf"


class _DistanceFrom(enum.Enum):
    FOREGROUND = "foreground"
    BACKGROUND = "background"


def _as_gray(image) -> np.ndarray:
    array = np.asarray(image)
    if array.ndim != 2:
        raise ValueError("expected a two-dimensional grayscale image")
    if array.dtype != np.uint8:
        raise TypeError(f"expected an image of uint8 pixels, got {array.dtype}")
    return array


def distance_transform(image, norm: Norm) -> np.ndarray:
    """Return the distance of each pixel from a non-zero pixel of ``image``.

    Distances saturate at 255.
    """
    out = _as_gray(image).copy()
    distance_transform_mut(out, norm)
    return out


def distance_transform_mut(image: np.ndarray, norm: Norm) -> None:
    """Replace each pixel of ``image`` by its distance from a non-zero pixel.

    Distances saturate at 255.
    """
    if not isinstance(image, np.ndarray):
        raise TypeError("in-place operations need a numpy array")
    _distance_transform_impl(_as_gray(image), Norm(norm), _DistanceFrom.FOREGROUND)


def _distance_transform_impl(image: np.ndarray, norm: Norm, source: _DistanceFrom) -> None:
    height, width = image.shape
    max_distance = min(width + height, 255)
    values: list[list[int]] = image.tolist()
    diagonal = norm is Norm.LINF
    from_foreground = source is _DistanceFrom.FOREGROUND

    def relax(row: list[int], x: int, candidate: int) -> None:
        if candidate + 1 < row[x]:
            row[x] = candidate + 1

    # Top-left to bottom-right.
    for y in range(height):
        row = values[y]
        above = values[y - 1] if y > 0 else None
        for x in range(width):
            is_source = row[x] > 0 if from_foreground else row[x] == 0
            if is_source:
                row[x] = 0
                continue
            row[x] = max_distance
            if x > 0:
                relax(row, x, row[x - 1])
            if above is not None:
                relax(row, x, above[x])
                if diagonal:
                    if x > 0:
                        relax(row, x, above[x - 1])
                    if x < width - 1:
                        relax(row, x, above[x + 1])

    # Bottom-right to top-left.
    for y in reversed(range(height)):
        row = values[y]
        below = values[y + 1] if y < height - 1 else None
        for x in reversed(range(width)):
            if x < width - 1:
                relax(row, x, row[x + 1])
            if below is not None:
                relax(row, x, below[x])
                if diagonal:
                    if x < width - 1:
                        relax(row, x, below[x + 1])
                    if x > 0:
                        relax(row, x, below[x - 1])

    if height and width:
        image[...] = np.array(values, dtype=np.uint8)


def _intersection(f: Sequence[float], p: int, q: int) -> float:
    """Intersection of the parabolas f[p] + (x - p)^2 and f[q] + (x - q)^2."""
    return ((f[q] + q * q) - (f[p] + p * p)) / (2.0 * q - 2.0 * p)


def distance_transform_1d(f: Sequence[float]) -> list[float]:
    """Return ``min over p of (q - p)^2 + f[p]`` for every index ``q``.

    Computed in linear time from the lower envelope of the parabolas, following
    Felzenszwalb and Huttenlocher's "Distance Transforms of Sampled Functions".
    """
    values = [float(v) for v in f]
    n = len(values)
    if n == 0:
        return []

    # locations[i] is the centre of the i-th parabola of the lower envelope;
    # it is lowest on [boundaries[i], boundaries[i + 1]).
    locations = [0] * n
    boundaries = [math.nan] * (n + 1)
    k = 0
    boundaries[0] = -math.inf
    boundaries[1] = math.inf

    for q in range(1, n):
        if values[q] == math.inf:
            continue
        if k == 0 and values[locations[0]] == math.inf:
            locations[0] = q
            boundaries[0] = -math.inf
            boundaries[1] = math.inf
            continue

        s = _intersection(values, locations[k], q)
        while s <= boundaries[k]:
            k -= 1
            s = _intersection(values, locations[k], q)

        k += 1
        locations[k] = q
        boundaries[k] = s
        boundaries[k + 1] = math.inf

    result = []
    k = 0
    for q in range(n):
        while boundaries[k + 1] < q:
            k += 1
        dist = q - locations[k]
        result.append(dist * dist + values[locations[k]])
    return result


def euclidean_squared_distance_transform(image) -> np.ndarray:
    """Return the squared Euclidean distance of each pixel from a non-zero pixel.

    The result is a ``float64`` array; pixels of an image with no non-zero
    pixel are infinitely far away.
    """
    gray = _as_gray(image)
    height, width = gray.shape
    result = np.where(gray > 0, 0.0, math.inf)
    if height == 0 or width == 0:
        return result

    for x in range(width):
        result[:, x] = distance_transform_1d(result[:, x].tolist())
    for y in range(height):
        result[y, :] = distance_transform_1d(result[y, :].tolist())
    return result