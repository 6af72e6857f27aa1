import numpy as np
import pytest

from pixelproc.corners import (
    Corner,
    Fast,
    corners_fast9,
    corners_fast12,
    fast_corner_score,
    is_corner_fast9,
    is_corner_fast12,
)


def gray(rows):
    return np.array(rows, dtype=np.uint8)


DARKER_12 = gray(
    [
        [10, 10, 0, 0, 0, 10, 10],
        [10, 0, 10, 10, 10, 0, 10],
        [0, 10, 10, 10, 10, 10, 10],
        [0, 10, 10, 10, 10, 10, 10],
        [0, 10, 10, 10, 10, 10, 10],
        [10, 0, 10, 10, 10, 10, 10],
        [10, 10, 0, 0, 0, 10, 10],
    ]
)

LIGHTER_12 = gray(
    [
        [0, 0, 10, 10, 10, 0, 0],
        [0, 10, 0, 0, 0, 10, 0],
        [10, 0, 0, 0, 0, 0, 0],
        [10, 0, 0, 0, 0, 0, 0],
        [10, 0, 0, 0, 0, 0, 0],
        [0, 10, 0, 0, 0, 0, 0],
        [0, 0, 10, 10, 10, 0, 0],
    ]
)

NONCONTIGUOUS = gray(
    [
        [10, 10, 0, 0, 0, 10, 10],
        [10, 0, 10, 10, 10, 0, 10],
        [0, 10, 10, 10, 10, 10, 10],
        [0, 10, 10, 10, 10, 10, 10],
        [10, 10, 10, 10, 10, 10, 0],
        [10, 0, 10, 10, 10, 10, 10],
        [10, 10, 0, 0, 0, 10, 10],
    ]
)

DARKER_9 = gray(
    [
        [10, 10, 0, 0, 0, 10, 10],
        [10, 0, 10, 10, 10, 0, 10],
        [0, 10, 10, 10, 10, 10, 10],
        [0, 10, 10, 10, 10, 10, 10],
        [0, 10, 10, 10, 10, 10, 10],
        [10, 0, 10, 10, 10, 10, 10],
        [10, 10, 10, 10, 10, 10, 10],
    ]
)

LIGHTER_9 = gray(
    [
        [0, 0, 10, 10, 10, 0, 0],
        [0, 10, 0, 0, 0, 10, 0],
        [10, 0, 0, 0, 0, 0, 0],
        [10, 0, 0, 0, 0, 0, 0],
        [10, 0, 0, 0, 0, 0, 0],
        [0, 10, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
    ]
)

SCORE_9 = gray(
    [
        [10, 10, 0, 0, 0, 10, 10],
        [10, 0, 10, 10, 10, 0, 10],
        [0, 10, 10, 10, 10, 10, 10],
        [0, 10, 10, 20, 10, 10, 10],
        [0, 10, 10, 10, 10, 10, 10],
        [10, 10, 10, 10, 10, 10, 10],
        [10, 10, 10, 10, 10, 10, 10],
    ]
)


def test_fast12_contiguous_darker_pixels():
    assert is_corner_fast12(DARKER_12, 8, 3, 3) is True


def test_fast12_contiguous_darker_pixels_large_threshold():
    assert is_corner_fast12(DARKER_12, 15, 3, 3) is False


def test_fast12_contiguous_lighter_pixels():
    assert is_corner_fast12(LIGHTER_12, 8, 3, 3) is True


def test_fast12_noncontiguous():
    assert is_corner_fast12(NONCONTIGUOUS, 8, 3, 3) is False


def test_fast12_near_image_boundary():
    assert is_corner_fast12(DARKER_12, 8, 1, 1) is False


def test_fast_corner_score_12():
    assert fast_corner_score(DARKER_12, 5, 3, 3, Fast.TWELVE) == 9
    assert fast_corner_score(DARKER_12, 9, 3, 3, Fast.TWELVE) == 9


def test_fast9_contiguous_darker_pixels():
    assert is_corner_fast9(DARKER_9, 8, 3, 3) is True


def test_fast9_contiguous_lighter_pixels():
    assert is_corner_fast9(LIGHTER_9, 8, 3, 3) is True


def test_fast9_noncontiguous():
    assert is_corner_fast9(NONCONTIGUOUS, 8, 3, 3) is False


def test_fast_corner_score_9():
    assert fast_corner_score(SCORE_9, 5, 3, 3, Fast.NINE) == 9
    assert fast_corner_score(SCORE_9, 9, 3, 3, Fast.NINE) == 9


def test_fast9_near_image_boundary():
    assert is_corner_fast9(DARKER_9, 8, 2, 3) is False


def test_corners_fast12_finds_single_corner():
    assert corners_fast12(DARKER_12, 8) == [Corner(3, 3, 9.0)]


def test_corners_fast12_none_above_threshold():
    assert corners_fast12(DARKER_12, 15) == []


def test_corners_fast9_finds_single_corner():
    assert corners_fast9(SCORE_9, 5) == [Corner(3, 3, 9.0)]


def test_constant_image_has_no_corners():
    image = np.full((20, 20), 100, dtype=np.uint8)
    assert corners_fast9(image, 0) == []
    assert corners_fast12(image, 0) == []


def test_corner_scores_are_at_least_threshold():
    rng = np.random.default_rng(7)
    image = rng.integers(0, 256, size=(30, 30), dtype=np.uint8)
    corners = corners_fast9(image, 20)
    assert all(corner.score >= 20 for corner in corners)
    assert all(3 <= c.x < 27 and 3 <= c.y < 27 for c in corners)
    for corner in corners:
        assert is_corner_fast9(image, int(corner.score), corner.x, corner.y)
        if corner.score < 255:
            assert not is_corner_fast9(image, int(corner.score) + 1, corner.x, corner.y)


def test_threshold_out_of_range_raises():
    with pytest.raises(ValueError):
        is_corner_fast9(DARKER_9, 300, 3, 3)


def test_non_grayscale_image_raises():
    with pytest.raises(ValueError):
        corners_fast12(np.zeros((7, 7, 3), dtype=np.uint8), 8)


def test_fast_variant_lengths():
    assert Fast.NINE.value == 9
    assert Fast(12) is Fast.TWELVE