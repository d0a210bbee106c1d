"""Main configuration settings with TOML loading support."""

from dataclasses import dataclass, asdict
from typing import Optional, Union
from pathlib import Path
import logging

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib

import tomli_w

from .defaults import GRID_PRESETS, DefaultConfig, validate_config

logger = logging.getLogger(__name__)

_TOML_SECTIONS = ('smoothing', 'estimation', 'simulation', 'visualization', 'advanced')


@dataclass
class Settings:
    """Main configuration settings for sample grid runs.

    Can be loaded from TOML files for user customization while providing
    sensible defaults.
    """

    # Smoothing parameters
    kernel_size: int = 3
    sigma: float = 1.0

    # Estimation parameters
    measurement_noise: float = 0.25
    default_covariance: float = 1.0

    # Simulation parameters
    iterations: int = 20

    # Visualization parameters
    figure_dpi: int = 150
    colormap: str = "viridis"
    output_dir: str = "output"

    # Reproducibility
    random_seed: Optional[int] = None

    # Advanced settings
    verbose: bool = False

    def __post_init__(self):
        """Validate settings after initialization."""
        temp_config = DefaultConfig(
            kernel_size=self.kernel_size,
            sigma=self.sigma,
            measurement_noise=self.measurement_noise,
            default_covariance=self.default_covariance,
            iterations=self.iterations,
            figure_dpi=self.figure_dpi,
            colormap=self.colormap
        )

        for warning in validate_config(temp_config):
            if self.verbose:
                logger.warning("Configuration warning: %s", warning)
            else:
                logger.debug("Configuration warning: %s", warning)

    @classmethod
    def from_preset(cls, preset: str) -> 'Settings':
        """Create settings from a preset configuration.

        Parameters
        ----------
        preset : str
            Preset name ('default', 'fine', 'coarse')

        Returns
        -------
        Settings
            Settings object with preset values
        """
        if preset not in GRID_PRESETS:
            raise ValueError(f"Unknown preset '{preset}'. Available: {list(GRID_PRESETS.keys())}")

        return cls(**asdict(GRID_PRESETS[preset]))

    @classmethod
    def from_toml(cls, toml_path: Union[str, Path]) -> 'Settings':
        """Load settings from TOML file.

        Sections (``[smoothing]``, ``[estimation]``, ...) are flattened;
        top-level keys are accepted as well.

        Raises
        ------
        FileNotFoundError
            If TOML file doesn't exist
        """
        toml_path = Path(toml_path)
        if not toml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {toml_path}")

        with open(toml_path, 'rb') as f:
            config_data = tomllib.load(f)

        settings_data = {}
        for section in _TOML_SECTIONS:
            if section in config_data:
                settings_data.update(config_data[section])

        for key, value in config_data.items():
            if not isinstance(value, dict):
                settings_data[key] = value

        return cls(**settings_data)

    def to_toml(self, toml_path: Union[str, Path]) -> None:
        """Save settings to TOML file, grouped into sections."""
        config_data = {
            'smoothing': {
                'kernel_size': self.kernel_size,
                'sigma': self.sigma
            },
            'estimation': {
                'measurement_noise': self.measurement_noise,
                'default_covariance': self.default_covariance
            },
            'simulation': {
                'iterations': self.iterations
            },
            'visualization': {
                'figure_dpi': self.figure_dpi,
                'colormap': self.colormap,
                'output_dir': self.output_dir
            },
            'advanced': {
                'verbose': self.verbose
            }
        }
        # TOML has no null
        if self.random_seed is not None:
            config_data['advanced']['random_seed'] = self.random_seed

        toml_path = Path(toml_path)
        with open(toml_path, 'wb') as f:
            tomli_w.dump(config_data, f)

    def update(self, **kwargs) -> 'Settings':
        """Create new Settings with updated values."""
        current_dict = asdict(self)
        current_dict.update(kwargs)
        return Settings(**current_dict)


# Global configuration instance
_GLOBAL_CONFIG: Optional[Settings] = None


def get_config(config_path: Optional[Union[str, Path]] = None,
               preset: Optional[str] = None,
               reload: bool = False) -> Settings:
    """Get global configuration settings.

    Parameters
    ----------
    config_path : Optional[Union[str, Path]]
        Path to TOML configuration file. If None, looks for default locations.
    preset : Optional[str]
        Preset configuration name. Ignored if config_path is provided.
    reload : bool
        Force reload configuration even if already loaded

    Returns
    -------
    Settings
        Global configuration settings
    """
    global _GLOBAL_CONFIG

    if _GLOBAL_CONFIG is not None and not reload:
        return _GLOBAL_CONFIG

    if config_path is not None:
        _GLOBAL_CONFIG = Settings.from_toml(config_path)
    else:
        default_paths = [
            Path('sample_grid.toml'),
            Path.home() / '.sample_grid.toml',
            Path.cwd() / 'config' / 'sample_grid.toml'
        ]

        config_loaded = False
        for path in default_paths:
            if path.exists():
                try:
                    _GLOBAL_CONFIG = Settings.from_toml(path)
                    config_loaded = True
                    break
                except (OSError, ValueError, TypeError, tomllib.TOMLDecodeError) as e:
                    logger.warning("Could not load config from %s: %s", path, e)
                    continue

        if not config_loaded:
            _GLOBAL_CONFIG = Settings.from_preset(preset or 'default')

    if _GLOBAL_CONFIG.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(_GLOBAL_CONFIG.random_seed)

    return _GLOBAL_CONFIG


def set_config(settings: Settings) -> None:
    """Set global configuration settings."""
    global _GLOBAL_CONFIG
    _GLOBAL_CONFIG = settings

    if settings.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(settings.random_seed)
