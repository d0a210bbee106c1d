"""Environment validation for sample grid dependencies."""

import sys
import warnings
from importlib import metadata
from packaging import version

_CORE_PACKAGES = ('numpy', 'scipy')
_OPTIONAL_PACKAGES = ('matplotlib', 'tomli_w')


def _installed_version(distribution: str):
    try:
        return metadata.version(distribution.replace('_', '-'))
    except metadata.PackageNotFoundError:
        return None


def check_environment(min_numpy: str = "1.25", min_scipy: str = "1.11") -> None:
    """Check that environment meets minimum dependency requirements.

    Parameters
    ----------
    min_numpy : str, default="1.25"
        Minimum required NumPy version
    min_scipy : str, default="1.11"
        Minimum required SciPy version

    Raises
    ------
    RuntimeError
        If any dependency requirements are not met

    Examples
    --------
    >>> check_environment()
    >>> check_environment(min_numpy="1.24", min_scipy="1.10")
    """
    errors = []

    if sys.version_info < (3, 9):
        errors.append(f"Python 3.9+ required, found {sys.version_info.major}.{sys.version_info.minor}")

    minimums = {'numpy': min_numpy, 'scipy': min_scipy}
    for package in _CORE_PACKAGES:
        installed = _installed_version(package)
        if installed is None:
            errors.append(f"{package} not installed")
        elif version.parse(installed) < version.parse(minimums[package]):
            errors.append(f"{package} {minimums[package]}+ required, found {installed}")

    optional_warnings = []
    matplotlib_version = _installed_version('matplotlib')
    if matplotlib_version is None:
        optional_warnings.append("Matplotlib not found - required for plot_cells")
    elif version.parse(matplotlib_version) < version.parse("3.5"):
        optional_warnings.append(f"Matplotlib 3.5+ recommended, found {matplotlib_version}")

    if errors:
        error_msg = "Environment validation failed:\n" + "\n".join(f"  - {err}" for err in errors)
        if optional_warnings:
            error_msg += "\n\nWarnings:\n" + "\n".join(f"  - {warn}" for warn in optional_warnings)
        error_msg += "\n\nTo install required dependencies:\n  pip install numpy scipy matplotlib packaging"
        raise RuntimeError(error_msg)

    if optional_warnings:
        warning_msg = "Environment warnings:\n" + "\n".join(f"  - {warn}" for warn in optional_warnings)
        warnings.warn(warning_msg, UserWarning)


def get_dependency_versions() -> dict:
    """Get versions of all relevant dependencies.

    Returns
    -------
    dict
        Dictionary mapping package names to version strings
    """
    versions = {
        'python': f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    }
    for package in _CORE_PACKAGES + _OPTIONAL_PACKAGES + ('packaging',):
        versions[package] = _installed_version(package) or 'not installed'
    return versions
