"""Finding border contours within binary images."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

import numpy as np


class BorderType(enum.Enum):
    """Whether a border encloses its foreground region or lies around a hole in it."""

    OUTER = "outer"
    HOLE = "hole"


class Point(NamedTuple):
    """A 2d point with integer coordinates."""

    x: int
    y: int


@dataclass
class Contour:
    """A border of an 8-connected foreground region.

    ``parent`` is the index of the enclosing border in the list returned by
    :func:`find_contours`, or ``None``.
    """

    points: list[Point] = field(default_factory=list)
    border_type: BorderType = BorderType.OUTER
    parent: Optional[int] = None


# Neighbour offsets clockwise from the west.
_DIFFS = (
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
)


def _rotate_to(diffs: deque, value: tuple[int, int]) -> None:
    diffs.rotate(-diffs.index(value))


def find_contours(image) -> list[Contour]:
    """Find the borders of all regions of non-zero pixels in a grayscale image."""
    return find_contours_with_threshold(image, 0)


def find_contours_with_threshold(image, threshold: int) -> list[Contour]:
    """Find the borders of all regions of pixels brighter than ``threshold``.

    Uses the border following algorithm of Suzuki and Abe. ``image`` is a
    two-dimensional array indexed ``[y, x]``.
    """
    array = np.asarray(image)
    if array.ndim != 2:
        raise ValueError("expected a two-dimensional grayscale image")
    height, width = array.shape
    values: list[list[int]] = (array > threshold).astype(int).tolist()

    def nonzero_at(x: int, y: int) -> Optional[Point]:
        if 0 <= x < width and 0 <= y < height and values[y][x] != 0:
            return Point(x, y)
        return None

    diffs = deque(_DIFFS)
    contours: list[Contour] = []
    border_num = 1

    for y in range(height):
        parent_border_num = 1
        row = values[y]
        for x in range(width):
            value = row[x]
            if value == 0:
                continue

            start = None
            if value == 1 and x > 0 and row[x - 1] == 0:
                adjacent, border_type = Point(x - 1, y), BorderType.OUTER
                start = Point(x, y)
            elif value > 0 and x + 1 < width and row[x + 1] == 0:
                if value > 1:
                    parent_border_num = value
                adjacent, border_type = Point(x + 1, y), BorderType.HOLE
                start = Point(x, y)

            if start is not None:
                border_num += 1
                parent = None
                if parent_border_num > 1:
                    parent_index = parent_border_num - 2
                    parent_contour = contours[parent_index]
                    if (border_type == BorderType.OUTER) != (
                        parent_contour.border_type == BorderType.OUTER
                    ):
                        parent = parent_index
                    else:
                        parent = parent_contour.parent

                points: list[Point] = []
                _rotate_to(diffs, (adjacent.x - x, adjacent.y - y))
                pos1 = next(
                    (
                        p
                        for dx, dy in diffs
                        if (p := nonzero_at(x + dx, y + dy)) is not None
                    ),
                    None,
                )
                if pos1 is None:
                    points.append(start)
                    row[x] = -border_num
                else:
                    pos2, pos3 = pos1, start
                    while True:
                        points.append(pos3)
                        _rotate_to(diffs, (pos2.x - pos3.x, pos2.y - pos3.y))
                        pos4 = next(
                            p
                            for dx, dy in reversed(diffs)
                            if (p := nonzero_at(pos3.x + dx, pos3.y + dy)) is not None
                        )
                        step = (pos4.x - pos3.x, pos4.y - pos3.y)
                        is_right_edge = False
                        for diff in reversed(diffs):
                            if diff == step:
                                break
                            if diff == (1, 0):
                                is_right_edge = True
                                break

                        if pos3.x + 1 == width or is_right_edge:
                            values[pos3.y][pos3.x] = -border_num
                        elif values[pos3.y][pos3.x] == 1:
                            values[pos3.y][pos3.x] = border_num

                        if pos4 == start and pos3 == pos1:
                            break
                        pos2, pos3 = pos3, pos4

                contours.append(Contour(points, border_type, parent))

            if row[x] != 1:
                parent_border_num = abs(row[x])

    return contours