"""Default parameter sets for smoothing, estimation and simulation runs."""

from dataclasses import dataclass
from typing import List


@dataclass
class DefaultConfig:
    """Base configuration structure for a sample grid run."""

    # Smoothing parameters
    kernel_size: int
    sigma: float

    # Estimation parameters
    measurement_noise: float
    default_covariance: float

    # Simulation parameters
    iterations: int

    # Visualization parameters
    figure_dpi: int
    colormap: str


# Light smoothing, moderately noisy sensor
DEFAULT_GRID_CONFIG = DefaultConfig(
    kernel_size=3,
    sigma=1.0,
    measurement_noise=0.25,
    default_covariance=1.0,
    iterations=20,
    figure_dpi=150,
    colormap="viridis"
)

# Wide blur for large open maps
COARSE_GRID_CONFIG = DefaultConfig(
    kernel_size=7,
    sigma=2.0,
    measurement_noise=0.5,
    default_covariance=1.0,
    iterations=50,
    figure_dpi=150,
    colormap="magma"
)

GRID_PRESETS = {
    "default": DEFAULT_GRID_CONFIG,
    "coarse": COARSE_GRID_CONFIG,
    "fine": DefaultConfig(
        kernel_size=3,
        sigma=0.5,
        measurement_noise=0.05,
        default_covariance=1.0,
        iterations=10,
        figure_dpi=300,
        colormap="viridis"
    )
}

# Kernels wider than this blur most maps into a uniform field
MAX_RECOMMENDED_KERNEL = 31
MAX_RECOMMENDED_ITERATIONS = 10000


def validate_config(config: DefaultConfig) -> List[str]:
    """Validate configuration parameters and return list of warnings."""
    warnings = []

    if config.kernel_size <= 0 or config.kernel_size % 2 == 0:
        warnings.append(f"Kernel size {config.kernel_size} must be a positive odd integer")
    elif config.kernel_size > MAX_RECOMMENDED_KERNEL:
        warnings.append(f"Kernel size {config.kernel_size} is very large, the map will wash out")

    if config.sigma <= 0:
        warnings.append(f"Sigma {config.sigma} must be positive")

    if config.measurement_noise < 0:
        warnings.append(f"Measurement noise {config.measurement_noise} must be non-negative")
    elif config.measurement_noise == 0 and config.default_covariance == 0:
        warnings.append("Zero measurement noise with zero covariance makes updates degenerate")

    if config.default_covariance < 0:
        warnings.append(f"Default covariance {config.default_covariance} must be non-negative")

    if config.iterations <= 0:
        warnings.append(f"Iterations {config.iterations} must be positive")
    elif config.iterations > MAX_RECOMMENDED_ITERATIONS:
        warnings.append(f"Iterations {config.iterations} may take a long time")

    return warnings
