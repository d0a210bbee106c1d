"""
Sample Grid - Kalman-filtered occupancy beliefs with stochastic map realization.

Per-cell 1D Kalman estimators, Gaussian smoothing of the belief field and
sampling of concrete open/blocked maps for downstream planners.
"""

__version__ = "0.1.0"

from .core import SampleGrid, KalmanNode, BitPackedGrid

__all__ = ['SampleGrid', 'KalmanNode', 'BitPackedGrid', '__version__']
