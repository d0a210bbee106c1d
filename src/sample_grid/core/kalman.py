"""One-dimensional Kalman filter used as the per-cell belief estimator.

The hidden cell state is assumed static between measurements, so the
prediction step is the identity and only the measurement update remains
(adapted from kalmanfilter.net, 1D filter with process noise omitted).
"""

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from .exceptions import DegenerateUpdateError

# Covariance every fresh cell starts from
DEFAULT_COVARIANCE = 1.0


def kalman_update(state: Union[float, np.ndarray],
                  covariance: Union[float, np.ndarray],
                  measurement: Union[float, np.ndarray],
                  measurement_noise: float) -> Tuple:
    """Fold one measurement into a (state, covariance) belief.

    Works element-wise on NumPy arrays so that whole grids can be updated
    in a single call.

    Parameters
    ----------
    state : float or np.ndarray
        Current belief mean
    covariance : float or np.ndarray
        Current belief uncertainty
    measurement : float or np.ndarray
        Observed value, typically 0.0 or 1.0
    measurement_noise : float
        Variance of the measurement, 0.0 being a perfect measurement

    Returns
    -------
    Tuple
        Updated ``(state, covariance)``

    Raises
    ------
    ValueError
        If ``measurement_noise`` is negative
    DegenerateUpdateError
        If the measurement noise and any covariance are both zero
    """
    if measurement_noise < 0:
        raise ValueError(f"measurement_noise must be non-negative, got {measurement_noise}")

    covariance = np.asarray(covariance, dtype=float)
    denominator = covariance + measurement_noise
    if np.any(denominator == 0.0):
        raise DegenerateUpdateError(
            "Kalman gain is undefined: covariance and measurement noise are both zero"
        )

    gain = covariance / denominator
    new_state = state + gain * (measurement - state)
    new_covariance = (1.0 - gain) * covariance

    if new_covariance.ndim == 0:
        return float(new_state), float(new_covariance)
    return new_state, new_covariance


@dataclass
class KalmanNode:
    """Scalar belief held by a single grid cell.

    Attributes
    ----------
    state : float
        Belief mean, nominally a probability in [0, 1] (never clamped)
    covariance : float
        Uncertainty of the belief, non-increasing under positive-noise updates
    """
    state: float = 0.0
    covariance: float = DEFAULT_COVARIANCE

    def update(self, measurement: float, measurement_noise: float) -> float:
        """Update the node with a measurement and return the new state.

        The node is left untouched when the update is rejected.
        """
        self.state, self.covariance = kalman_update(
            self.state, self.covariance, measurement, measurement_noise
        )
        return self.state
