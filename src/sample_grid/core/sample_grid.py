"""Grid of per-cell Kalman beliefs with sampled and ground-truth bitmaps.

Each cell holds a belief ``state`` (the probability that the cell is open)
and a ``covariance``. Two bitmaps share the grid dimensions:

- ``ground_truth``: the authoritative open/blocked map the grid is built from
- ``realization``: the current snapshot, either thresholded from the beliefs
  (``sync_*``) or drawn stochastically from them (``sample*``)

Beliefs are stored as two contiguous ``(width, height)`` arrays indexed
``[x, y]``; ``x`` is the column of a text map and ``y`` its row.
"""

import logging
import warnings
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .bitpacked import BitPackedGrid
from .convolution import ConvResolve, convolve2d, gaussian_kernel
from .exceptions import MalformedMapError, OutOfBoundsError
from .kalman import DEFAULT_COVARIANCE, KalmanNode, kalman_update
from ..config.random_state import get_rng
from ..data.map_parser import create_map_from_string, read_map_file
from ..viz.grid_rendering import Heatmap, plot_cells, print_cells

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class SampleGrid:
    """Belief grid that can be smoothed, sampled and corrected by measurements.

    Use one of the constructors rather than calling ``__init__`` directly:
    :meth:`from_grid`, :meth:`with_size`, :meth:`from_string` or
    :meth:`from_file`.

    Parameters
    ----------
    states : np.ndarray, shape (width, height)
        Initial belief means
    covariances : np.ndarray, shape (width, height)
        Initial belief covariances
    ground_truth : BitPackedGrid
        Reference map with the same dimensions. The grid keeps its own copy
        of this and of the arrays.
    rng : Optional[np.random.Generator]
        Generator used for sampling; defaults to the shared generator from
        :func:`sample_grid.config.random_state.get_rng`

    Examples
    --------
    >>> grid = SampleGrid.from_string("@..\\n...\\n")
    >>> grid.cell(0, 0).state, grid.cell(1, 0).state
    (0.0, 1.0)
    >>> grid.observe(0, 0, measurement_noise=0.5)
    0.0
    """

    def __init__(self,
                 states: np.ndarray,
                 covariances: np.ndarray,
                 ground_truth: BitPackedGrid,
                 rng: Optional[np.random.Generator] = None):
        self.width, self.height = states.shape
        if covariances.shape != states.shape:
            raise ValueError(f"covariances must be {states.shape}, got {covariances.shape}")
        if (ground_truth.width, ground_truth.height) != states.shape:
            raise MalformedMapError(
                f"Ground truth is {ground_truth.width}x{ground_truth.height}, "
                f"beliefs are {self.width}x{self.height}"
            )

        self._states = np.array(states, dtype=float)
        self._covariances = np.array(covariances, dtype=float)
        self._realization = BitPackedGrid(self.width, self.height)
        self._ground_truth = ground_truth.copy()
        self._rng = rng if rng is not None else get_rng()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_grid(cls,
                  grid: Union[np.ndarray, Sequence[Sequence[float]]],
                  ground_truth: Union[BitPackedGrid, np.ndarray],
                  rng: Optional[np.random.Generator] = None,
                  covariance: float = DEFAULT_COVARIANCE) -> 'SampleGrid':
        """Create a grid from a belief matrix indexed ``[x][y]`` and a ground truth.

        The realization is synchronized from the beliefs immediately.
        """
        try:
            states = np.array(grid, dtype=float)
        except ValueError as exc:
            raise MalformedMapError(f"Belief matrix is not rectangular: {exc}") from exc
        if states.ndim != 2 or states.size == 0:
            raise MalformedMapError(f"Belief matrix must be a non-empty 2D array, got shape {states.shape}")

        if np.any((states < 0.0) | (states > 1.0)):
            warnings.warn("Belief values outside [0, 1]; sampling treats them as saturated")

        if not isinstance(ground_truth, BitPackedGrid):
            mask = np.asarray(ground_truth, dtype=bool)
            if mask.shape != states.shape:
                raise MalformedMapError(
                    f"Ground truth must be {states.shape}, got {mask.shape}"
                )
            ground_truth = BitPackedGrid(*states.shape)
            ground_truth.set_from_array(mask)

        sample_grid = cls(states, np.full(states.shape, float(covariance)), ground_truth, rng)
        sample_grid.sync_all()
        return sample_grid

    @classmethod
    def with_size(cls,
                  width: int,
                  height: int,
                  rng: Optional[np.random.Generator] = None,
                  covariance: float = DEFAULT_COVARIANCE) -> 'SampleGrid':
        """Create a ``width x height`` grid of zero beliefs and cleared bitmaps."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        return cls(np.zeros((width, height)),
                   np.full((width, height), float(covariance)),
                   BitPackedGrid(width, height),
                   rng)

    @classmethod
    def from_string(cls, text: str,
                    rng: Optional[np.random.Generator] = None,
                    covariance: float = DEFAULT_COVARIANCE) -> 'SampleGrid':
        """Create a grid from map text.

        Open cells get belief 1.0 and ``@`` cells keep 0.0; the ground truth
        is thresholded from those beliefs. The realization stays cleared.
        """
        sample_grid = create_map_from_string(
            text,
            lambda width, height: cls.with_size(width, height, rng=rng, covariance=covariance),
            cls._mark_open
        )
        sample_grid.derive_ground_truth()
        logger.debug("Created %r from text", sample_grid)
        return sample_grid

    @classmethod
    def from_file(cls, path: Union[str, Path],
                  rng: Optional[np.random.Generator] = None,
                  covariance: float = DEFAULT_COVARIANCE) -> 'SampleGrid':
        """Create a grid from a map file (see :meth:`from_string`)."""
        return cls.from_string(read_map_file(path), rng=rng, covariance=covariance)

    @staticmethod
    def _mark_open(grid: 'SampleGrid', x: int, y: int) -> None:
        grid._states[x, y] = 1.0

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether ``(x, y)`` is a cell of the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_cell(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)

    # ------------------------------------------------------------------
    # Bitmap synchronization
    # ------------------------------------------------------------------

    def sync_area(self, x: int, y: int, width: int, height: int) -> None:
        """Threshold the beliefs in ``[x, x+width) x [y, y+height)`` into the realization.

        A cell becomes open whenever its belief is non-zero, i.e. whenever
        it is not a guaranteed obstacle.
        """
        if (width < 0 or height < 0 or x < 0 or y < 0
                or x + width > self.width or y + height > self.height):
            raise OutOfBoundsError(
                x, y, self.width, self.height,
                f"Area ({x}, {y}, {width}, {height}) exceeds a {self.width}x{self.height} grid"
            )
        self._sync_area(x, y, width, height)

    def _sync_area(self, x: int, y: int, width: int, height: int) -> None:
        if width == 0 or height == 0:
            return
        mask = self._states[x:x + width, y:y + height] != 0.0
        self._realization.set_area_from_array(x, y, mask)

    def sync_radius(self, x: int, y: int, radius: int) -> None:
        """Synchronize the square around ``(x, y)``, clipped to the grid.

        The window spans ``[x - (radius + 1), x + (radius + 1))`` on each
        axis, clamped to 0 below and to the grid extent above.
        """
        self._check_cell(x, y)
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")

        reach = radius + 1
        x_min = max(x - reach, 0)
        y_min = max(y - reach, 0)
        x_max = min(x + reach, self.width)
        y_max = min(y + reach, self.height)
        self._sync_area(x_min, y_min, x_max - x_min, y_max - y_min)

    def sync_all(self) -> None:
        """Synchronize the whole realization from the beliefs."""
        self._realization.set_from_array(self._states != 0.0)

    def derive_ground_truth(self) -> None:
        """Threshold the beliefs into the ground truth."""
        self._ground_truth.set_from_array(self._states != 0.0)

    # ------------------------------------------------------------------
    # Smoothing
    # ------------------------------------------------------------------

    def blur(self, kernel_size: int, sigma: float) -> None:
        """Smooth the belief means with a Gaussian kernel.

        Edges are clamped to the nearest cell. Covariances are left as they
        are and the bitmaps are not re-synchronized; call :meth:`sync_all`
        afterwards if the realization should follow the smoothed field.
        """
        kernel = gaussian_kernel(kernel_size, sigma)
        smoothed = convolve2d(self._states, kernel, ConvResolve.NEAREST)
        self._states[:, :] = smoothed
        logger.debug("Blurred %dx%d grid (size=%d, sigma=%.3f)",
                     self.width, self.height, kernel_size, sigma)

    # ------------------------------------------------------------------
    # Sampling and measurement
    # ------------------------------------------------------------------

    def sample(self, x: int, y: int) -> bool:
        """Draw the realization bit of one cell and return it.

        The cell is open with probability ``state``; a zero belief is never
        open and a belief of 1.0 always is.
        """
        self._check_cell(x, y)
        state = self._states[x, y]
        value = bool(state != 0.0 and self._rng.random() < state)
        self._realization.set_bit_value(x, y, value)
        return value

    def sample_all(self) -> None:
        """Independently resample every cell of the realization."""
        draws = self._rng.random((self.width, self.height))
        self._realization.set_from_array((self._states != 0.0) & (draws < self._states))
        logger.debug("Sampled %dx%d grid, %d open cells",
                     self.width, self.height, self._realization.count())

    def observe(self, x: int, y: int, measurement_noise: float) -> float:
        """Measure the ground truth of one cell and fold it into its belief.

        Parameters
        ----------
        x, y : int
            Cell coordinates
        measurement_noise : float
            Variance of the measurement, 0.0 being a perfect measurement

        Returns
        -------
        float
            The updated belief state
        """
        self._check_cell(x, y)
        measurement = float(self._ground_truth.get_bit_value(x, y))
        node = KalmanNode(float(self._states[x, y]), float(self._covariances[x, y]))
        state = node.update(measurement, measurement_noise)
        self._states[x, y] = node.state
        self._covariances[x, y] = node.covariance
        return state

    def observe_all(self, measurement_noise: float) -> None:
        """Measure every cell once; nothing changes if any update is degenerate."""
        measurements = self._ground_truth.to_array().astype(float)
        self._states, self._covariances = kalman_update(
            self._states, self._covariances, measurements, measurement_noise
        )

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def cell(self, x: int, y: int) -> KalmanNode:
        """Return a detached copy of the belief at ``(x, y)``."""
        self._check_cell(x, y)
        return KalmanNode(float(self._states[x, y]), float(self._covariances[x, y]))

    def is_open(self, x: int, y: int) -> bool:
        """Realization bit at ``(x, y)``."""
        self._check_cell(x, y)
        return self._realization.get_bit_value(x, y)

    def is_open_truth(self, x: int, y: int) -> bool:
        """Ground-truth bit at ``(x, y)``."""
        self._check_cell(x, y)
        return self._ground_truth.get_bit_value(x, y)

    @property
    def states(self) -> np.ndarray:
        return self._states.copy()

    @property
    def covariances(self) -> np.ndarray:
        return self._covariances.copy()

    @property
    def realization(self) -> BitPackedGrid:
        return self._realization.copy()

    @property
    def ground_truth(self) -> BitPackedGrid:
        return self._ground_truth.copy()

    def agreement(self) -> float:
        """Fraction of cells where the realization matches the ground truth."""
        return float(np.mean(self._realization.to_array() == self._ground_truth.to_array()))

    def print_sampling_cells(self,
                             path: Optional[Sequence[Cell]] = None,
                             heatmap: Optional[Heatmap] = None) -> str:
        """Render the realization as text, optionally marking a path and heatmap cells."""
        return print_cells(self.width, self.height, self._realization.get_bit_value, path, heatmap)

    def plot_sampling_cells(self,
                            output_file: Union[str, Path],
                            path: Optional[Sequence[Cell]] = None,
                            heatmap: Optional[Heatmap] = None,
                            **plot_kwargs) -> Path:
        """Plot the realization to ``output_file`` (see :func:`plot_cells`)."""
        return plot_cells(self.width, self.height, output_file,
                          self._realization.get_bit_value, path, heatmap, **plot_kwargs)

    def __repr__(self) -> str:
        return f"SampleGrid(width={self.width}, height={self.height})"
