"""Image processing on NumPy arrays: contours, contrast, FAST corners and distance transforms."""

__version__ = "0.1.0"
__all__ = ["contours", "contrast", "corners", "definitions", "distance_transform"]