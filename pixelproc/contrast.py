"""Thresholding and contrast adjustment for 8-bit grayscale images.

Images are two-dimensional ``numpy`` arrays of ``uint8`` indexed ``[y, x]``.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

_LEVELS = 256


def _as_gray(image) -> np.ndarray:
    array = np.asarray(image)
    if array.ndim != 2:
        raise ValueError("expected a two-dimensional grayscale image")
    if array.dtype != np.uint8:
        raise TypeError(f"expected an image of uint8 pixels, got {array.dtype}")
    return array


def _as_mutable_gray(image) -> np.ndarray:
    if not isinstance(image, np.ndarray):
        raise TypeError("in-place operations need a numpy array")
    return _as_gray(image)


def _histogram(image: np.ndarray) -> np.ndarray:
    return np.bincount(image.ravel(), minlength=_LEVELS).astype(np.int64)


def _cumulative_histogram(image: np.ndarray) -> np.ndarray:
    return np.cumsum(_histogram(image))


def adaptive_threshold(image, block_radius: int) -> np.ndarray:
    """Binarise by comparing each pixel with the mean of the block around it.

    The block is the ``2 * block_radius + 1`` square centred on the pixel,
    cut at the image edges. Pixels at least as bright as the (integer) mean
    become 255, others 0.
    """
    if block_radius <= 0:
        raise ValueError("block_radius must be positive")
    gray = _as_gray(image)
    height, width = gray.shape

    integral = np.zeros((height + 1, width + 1), dtype=np.int64)
    integral[1:, 1:] = gray.astype(np.int64).cumsum(axis=0).cumsum(axis=1)

    ys = np.arange(height)
    xs = np.arange(width)
    y_low = np.maximum(0, ys - block_radius)
    y_high = np.minimum(height - 1, ys + block_radius)
    x_low = np.maximum(0, xs - block_radius)
    x_high = np.minimum(width - 1, xs + block_radius)

    sums = (
        integral[np.ix_(y_high + 1, x_high + 1)]
        - integral[np.ix_(y_low, x_high + 1)]
        - integral[np.ix_(y_high + 1, x_low)]
        + integral[np.ix_(y_low, x_low)]
    )
    counts = (y_high - y_low + 1)[:, None] * (x_high - x_low + 1)[None, :]
    means = sums // np.maximum(counts, 1)

    return np.where(gray.astype(np.int64) >= means, 255, 0).astype(np.uint8)


def otsu_level(image) -> int:
    """Return the Otsu threshold level of an 8-bit grayscale image."""
    gray = _as_gray(image)
    hist = _histogram(gray).tolist()
    total_weight = gray.size
    total_pixel_sum = float(sum(level * count for level, count in enumerate(hist)))

    background_pixel_sum = 0.0
    background_weight = 0
    largest_variance = 0.0
    best_threshold = 0

    for level, count in enumerate(hist):
        background_weight += count
        if background_weight == 0:
            continue
        foreground_weight = total_weight - background_weight
        if foreground_weight == 0:
            break

        background_pixel_sum += float(level * count)
        foreground_pixel_sum = total_pixel_sum - background_pixel_sum
        background_mean = background_pixel_sum / background_weight
        foreground_mean = foreground_pixel_sum / foreground_weight

        variance = (
            float(background_weight)
            * float(foreground_weight)
            * (background_mean - foreground_mean) ** 2
        )
        if variance > largest_variance:
            largest_variance = variance
            best_threshold = level

    return best_threshold


def threshold(image, thresh: int) -> np.ndarray:
    """Return a binarised copy: pixels above ``thresh`` become 255, the rest 0."""
    out = _as_gray(image).copy()
    threshold_mut(out, thresh)
    return out


def threshold_mut(image: np.ndarray, thresh: int) -> None:
    """Binarise ``image`` in place; pixels equal to ``thresh`` become 0."""
    gray = _as_mutable_gray(image)
    gray[...] = np.where(gray <= thresh, 0, 255).astype(np.uint8)


def equalize_histogram_mut(image: np.ndarray) -> None:
    """Equalise the histogram of ``image`` in place."""
    gray = _as_mutable_gray(image)
    if gray.size == 0:
        return
    hist = _cumulative_histogram(gray).astype(np.float32)
    total = hist[_LEVELS - 1]
    fraction = hist[gray] / total
    scaled = np.minimum(np.float32(255), np.float32(255) * fraction)
    gray[...] = scaled.astype(np.uint8)


def equalize_histogram(image) -> np.ndarray:
    """Return a copy of ``image`` with its histogram equalised."""
    out = _as_gray(image).copy()
    equalize_histogram_mut(out)
    return out


def match_histogram_mut(image: np.ndarray, target) -> None:
    """Adjust ``image`` in place so its histogram is close to that of ``target``."""
    gray = _as_mutable_gray(image)
    target_gray = _as_gray(target)
    lut = np.array(
        histogram_lut(_cumulative_histogram(gray), _cumulative_histogram(target_gray)),
        dtype=np.uint8,
    )
    gray[...] = lut[gray]


def match_histogram(image, target) -> np.ndarray:
    """Return a copy of ``image`` whose histogram is close to that of ``target``."""
    out = _as_gray(image).copy()
    match_histogram_mut(out, target)
    return out


def histogram_lut(source_histc: Sequence[int], target_histc: Sequence[int]) -> list[int]:
    """Build a lookup table mapping source levels to target levels.

    ``lut[i]`` is chosen so that the cumulative fraction of the target at
    ``lut[i]`` is as close as possible to that of the source at ``i``. Both
    arguments are cumulative histograms of 256 bins.
    """
    source = np.asarray(source_histc, dtype=np.float32)
    target = np.asarray(target_histc, dtype=np.float32)
    if source.shape != (_LEVELS,) or target.shape != (_LEVELS,):
        raise ValueError("cumulative histograms must have 256 bins")

    source_total = source[_LEVELS - 1]
    target_total = target[_LEVELS - 1]

    lut: list[int] = []
    y = 0
    prev_target_fraction = np.float32(0)

    with np.errstate(divide="ignore", invalid="ignore"):
        for source_count in source:
            source_fraction = source_count / source_total
            target_fraction = target[y] / target_total

            while source_fraction > target_fraction and y < _LEVELS - 1:
                y += 1
                prev_target_fraction = target_fraction
                target_fraction = target[y] / target_total

            if y == 0:
                lut.append(0)
            else:
                prev_dist = abs(prev_target_fraction - source_fraction)
                dist = abs(target_fraction - source_fraction)
                lut.append(y - 1 if prev_dist < dist else y)

    return lut


def stretch_contrast(image, lower: int, upper: int) -> np.ndarray:
    """Return a copy with ``lower`` sent to 0, ``upper`` to 255, linear between."""
    out = _as_gray(image).copy()
    stretch_contrast_mut(out, lower, upper)
    return out


def stretch_contrast_mut(image: np.ndarray, lower: int, upper: int) -> None:
    """Linearly stretch the contrast of ``image`` in place."""
    if not upper > lower:
        raise ValueError("upper must be strictly greater than lower")
    gray = _as_mutable_gray(image)
    values = gray.astype(np.int64)
    scaled = (255 * (values - lower)) // (upper - lower)
    result = np.where(values >= upper, 255, np.where(values <= lower, 0, scaled))
    gray[...] = result.astype(np.uint8)