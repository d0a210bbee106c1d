"""Core belief-grid components.

- Scalar Kalman estimator for per-cell beliefs
- Bit-packed boolean grids
- Gaussian smoothing with edge policies
- The SampleGrid container tying them together
"""

from .exceptions import (
    SampleGridError,
    MalformedMapError,
    OutOfBoundsError,
    DegenerateUpdateError
)
from .kalman import KalmanNode, kalman_update, DEFAULT_COVARIANCE
from .bitpacked import BitPackedGrid
from .convolution import ConvResolve, gaussian_kernel, convolve2d
from .sample_grid import SampleGrid

__all__ = [
    # Errors
    'SampleGridError',
    'MalformedMapError',
    'OutOfBoundsError',
    'DegenerateUpdateError',

    # Estimation
    'KalmanNode',
    'kalman_update',
    'DEFAULT_COVARIANCE',

    # Bitmaps
    'BitPackedGrid',

    # Smoothing
    'ConvResolve',
    'gaussian_kernel',
    'convolve2d',

    # Grid
    'SampleGrid'
]
