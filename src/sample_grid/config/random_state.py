"""Global random seed management for reproducible sampling runs."""

import numpy as np
from typing import Optional, Dict, Any
import os
import hashlib

ENV_SEED_VARIABLE = 'SAMPLE_GRID_SEED'

# Global random state storage
_GLOBAL_SEED: Optional[int] = None
_RNG: Optional[np.random.Generator] = None
_RNG_STATE: Optional[Dict[str, Any]] = None


def set_global_seed(seed: int) -> None:
    """Set the global random seed.

    Reseeds the shared ``numpy.random.Generator`` handed to grids that are
    not given their own.

    Parameters
    ----------
    seed : int
        Random seed value for reproducibility

    Examples
    --------
    >>> set_global_seed(42)
    >>> # All grids created without an explicit rng now sample reproducibly
    """
    global _GLOBAL_SEED, _RNG, _RNG_STATE

    _GLOBAL_SEED = seed
    _RNG = np.random.default_rng(seed)

    # Store the initial state for reference
    _RNG_STATE = {
        'seed': seed,
        'generator_state': _RNG.bit_generator.state
    }


def get_global_seed() -> Optional[int]:
    """Get the current global random seed, or None if not set."""
    return _GLOBAL_SEED


def get_random_state() -> Optional[Dict[str, Any]]:
    """Get the generator state captured by the last ``set_global_seed`` call."""
    return _RNG_STATE


def get_rng() -> np.random.Generator:
    """Return the shared generator, creating an unseeded one if needed."""
    global _RNG
    if _RNG is None:
        _RNG = np.random.default_rng()
    return _RNG


def create_deterministic_seed(base_string: str) -> int:
    """Create a deterministic seed from a string.

    Useful for deriving reproducible seeds from map file names or
    experiment labels.

    Parameters
    ----------
    base_string : str
        String to hash for seed generation

    Returns
    -------
    int
        Deterministic seed value

    Examples
    --------
    >>> seed = create_deterministic_seed("maps/warehouse.map")
    >>> set_global_seed(seed)
    """
    hash_hex = hashlib.sha256(base_string.encode()).hexdigest()

    # First 8 hex characters, kept inside the 31-bit range
    return int(hash_hex[:8], 16) % (2**31 - 1)


def reset_random_state() -> None:
    """Rewind the shared generator to the state captured by ``set_global_seed``."""
    if _RNG_STATE is None:
        raise RuntimeError("Random state not initialized. Call set_global_seed() first.")

    get_rng().bit_generator.state = _RNG_STATE['generator_state']


def get_environment_seed() -> int:
    """Get seed from the ``SAMPLE_GRID_SEED`` environment variable.

    Non-integer values are hashed into a seed; an unset variable gives 42.
    """
    env_seed = os.environ.get(ENV_SEED_VARIABLE)

    if env_seed is not None:
        try:
            return int(env_seed)
        except ValueError:
            return create_deterministic_seed(env_seed)

    return 42


def ensure_reproducibility() -> int:
    """Seed from the environment unless a global seed is already set.

    Returns
    -------
    int
        The active seed
    """
    if _GLOBAL_SEED is None:
        seed = get_environment_seed()
        set_global_seed(seed)
        return seed
    return _GLOBAL_SEED


# Seed on import; an empty SAMPLE_GRID_SEED opts out
if os.environ.get(ENV_SEED_VARIABLE) != '':
    ensure_reproducibility()
