# pixelproc

Image processing routines that work on NumPy arrays. A grayscale image is a
two-dimensional array indexed `image[y, x]`; most functions require `uint8`
pixels and raise `TypeError` otherwise, and `ValueError` for arrays that are
not two-dimensional.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `pixelproc.definitions`

- `PixelKind`: `LUMA`, `LUMA_ALPHA`, `RGB` and `RGBA`, with the `channels`
  and `has_alpha` properties.
- `black(kind, depth=8)` and `white(kind, depth=8)` return the pixel as a
  tuple for a bit depth of 8 or 16 (any other depth raises `ValueError`).
  Alpha channels are always fully opaque.
- `clamp(value, dtype)` saturates a number to the range of an integer NumPy
  type, truncating floats towards zero as a cast would. For float types the
  value is returned as a float unchanged; other types raise `TypeError`.

### `pixelproc.contours`

- `find_contours(image)` traces the borders of regions of non-zero pixels
  with Suzuki and Abe's border-following method;
  `find_contours_with_threshold(image, threshold)` treats pixels strictly
  brighter than `threshold` as foreground.
- Each result is a `Contour` with `points` (a list of `Point(x, y)`), a
  `border_type` (`BorderType.OUTER` or `BorderType.HOLE`) and `parent`, the
  index of the enclosing border in the returned list or `None`.

### `pixelproc.contrast`

- `threshold(image, thresh)`: pixels above `thresh` become 255, the rest 0.
- `adaptive_threshold(image, block_radius)`: each pixel is compared with the
  integer mean of the `2 * block_radius + 1` square around it, cut at the
  image edges. `block_radius` must be positive.
- `otsu_level(image)`: the Otsu threshold level.
- `equalize_histogram(image)`, `match_histogram(image, target)` and
  `stretch_contrast(image, lower, upper)` (which requires `upper > lower`).
- `histogram_lut(source_histc, target_histc)`: the lookup table used by
  histogram matching, built from two 256-bin cumulative histograms.
- `threshold_mut`, `equalize_histogram_mut`, `match_histogram_mut` and
  `stretch_contrast_mut` change a NumPy array in place and return `None`.

### `pixelproc.corners`

- `corners_fast9(image, threshold)` and `corners_fast12(image, threshold)`
  return `Corner(x, y, score)` objects in row-major order. Pixels within 3 of
  the image edge are never corners.
- `is_corner_fast9` and `is_corner_fast12` test a single pixel.
- `fast_corner_score(image, threshold, x, y, variant)` returns the largest
  threshold at which a pixel is still a corner, with `variant` one of
  `Fast.NINE` and `Fast.TWELVE`.
- Thresholds must lie in 0..255.

### `pixelproc.distance_transform`

- `distance_transform(image, norm)` and `distance_transform_mut(image, norm)`
  give each pixel's distance from the nearest non-zero pixel under `Norm.L1`
  or `Norm.LINF`, saturating at 255.
- `euclidean_squared_distance_transform(image)` returns exact squared
  Euclidean distances as a `float64` array; with no non-zero pixels every
  distance is infinite.
- `distance_transform_1d(f)` returns `min over p of (q - p)**2 + f[p]` for
  every index `q` of a sequence of floats.

## Example

```python
import numpy as np
from pixelproc.contrast import otsu_level, threshold
from pixelproc.contours import find_contours

image = np.zeros((20, 20), dtype=np.uint8)
image[5:15, 5:15] = 200

binary = threshold(image, otsu_level(image))
for contour in find_contours(binary):
    print(contour.border_type, len(contour.points), contour.parent)
```

## What it does not do

pixelproc only works on arrays already in memory: it does not read or write
image files, draw shapes or text, or display images, and it has no
command-line tool. Use a separate library to load images into NumPy arrays.