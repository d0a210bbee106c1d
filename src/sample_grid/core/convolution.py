"""Gaussian kernel generation and 2D convolution with edge policies."""

from enum import Enum

import numpy as np
from scipy import ndimage


class ConvResolve(Enum):
    """How the convolution resolves samples that fall outside the matrix."""
    NEAREST = "nearest"  # clamp to the closest edge value
    ZERO = "constant"    # treat outside cells as 0.0
    WRAP = "wrap"        # periodic boundary


def gaussian_kernel(size: int, sigma: float) -> np.ndarray:
    """Create a normalized square Gaussian kernel.

    Parameters
    ----------
    size : int
        Side length of the kernel, must be a positive odd number
    sigma : float
        Standard deviation of the Gaussian, must be positive

    Returns
    -------
    np.ndarray, shape (size, size)
        Kernel whose entries sum to 1

    Examples
    --------
    >>> kernel = gaussian_kernel(3, 1.0)
    >>> round(float(kernel.sum()), 6)
    1.0
    """
    if size <= 0 or size % 2 == 0:
        raise ValueError(f"Kernel size must be a positive odd integer, got {size}")
    if sigma <= 0:
        raise ValueError(f"sigma must be positive, got {sigma}")

    center = (size - 1) / 2.0
    offsets = np.arange(size) - center
    xx, yy = np.meshgrid(offsets, offsets, indexing='ij')
    kernel = np.exp(-(xx ** 2 + yy ** 2) / (2.0 * sigma ** 2))
    return kernel / kernel.sum()


def convolve2d(matrix: np.ndarray,
               kernel: np.ndarray,
               resolve: ConvResolve = ConvResolve.NEAREST) -> np.ndarray:
    """Convolve ``matrix`` with ``kernel``, returning a new array of the same shape.

    The input is never modified; the full output is computed before it is
    returned.
    """
    matrix = np.asarray(matrix, dtype=float)
    kernel = np.asarray(kernel, dtype=float)
    if matrix.ndim != 2 or kernel.ndim != 2:
        raise ValueError("convolve2d expects 2D matrix and kernel")
    return ndimage.convolve(matrix, kernel, mode=resolve.value, cval=0.0)
