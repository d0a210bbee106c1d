import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import numpy as np

from .config import Settings, get_config, set_global_seed
from .core import SampleGrid, SampleGridError


def _setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure root logger to log to stdout and optionally to a file.

    Args:
        verbose: If ``True`` set console log level to ``DEBUG`` else ``INFO``.
        log_file: Optional path to a log file, always written at ``DEBUG``.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(log_format))
    handlers.append(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(log_format))
        handlers.append(file_handler)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    logging.debug("Logging initialised. Log file: %s", log_file)


def _load_settings(args: argparse.Namespace) -> Settings:
    """Resolve settings from ``--config`` or the default lookup, then apply CLI overrides."""
    settings = get_config(config_path=args.config, reload=True)
    overrides = {}
    for name in ("kernel_size", "sigma", "measurement_noise", "iterations", "random_seed"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    settings = settings.update(**overrides) if overrides else settings
    if settings.verbose and not args.verbose:
        _setup_logging(verbose=True, log_file=args.log_file)
    return settings


def _make_rng(settings: Settings) -> Optional[np.random.Generator]:
    if settings.random_seed is None:
        return None
    set_global_seed(settings.random_seed)
    return np.random.default_rng(settings.random_seed)


# -----------------------------------------------------------------------------
# Sub-command implementations
# -----------------------------------------------------------------------------

def _cmd_render(args: argparse.Namespace) -> int:
    """Entry point for the ``render`` sub-command."""
    grid = SampleGrid.from_file(args.map)
    sys.stdout.write(grid.ground_truth.render_text())
    return 0


def _cmd_blur(args: argparse.Namespace) -> int:
    """Entry point for the ``blur`` sub-command."""
    logger = logging.getLogger(__name__)
    settings = _load_settings(args)

    grid = SampleGrid.from_file(args.map)
    grid.blur(settings.kernel_size, settings.sigma)
    logger.info("Blurred %s with size=%d sigma=%.3f", args.map, settings.kernel_size, settings.sigma)

    states = grid.states
    for y in range(grid.height):
        sys.stdout.write(" ".join(f"{states[x, y]:.3f}" for x in range(grid.width)) + "\n")
    return 0


def _cmd_simulate(args: argparse.Namespace) -> int:
    """Entry point for the ``simulate`` sub-command."""
    logger = logging.getLogger(__name__)
    settings = _load_settings(args)

    grid = SampleGrid.from_file(args.map, rng=_make_rng(settings),
                                covariance=settings.default_covariance)
    if args.blur:
        grid.blur(settings.kernel_size, settings.sigma)

    logger.info("Simulating %d iteration(s) on %r, noise=%.3f",
                settings.iterations, grid, settings.measurement_noise)
    for iteration in range(1, settings.iterations + 1):
        grid.sample_all()
        agreement = grid.agreement()
        grid.observe_all(settings.measurement_noise)
        logger.info("iteration %d: agreement=%.4f mean_covariance=%.6f",
                    iteration, agreement, float(grid.covariances.mean()))

    grid.sample_all()
    sys.stdout.write(grid.print_sampling_cells())
    return 0


def _cmd_plot(args: argparse.Namespace) -> int:
    """Entry point for the ``plot`` sub-command."""
    logger = logging.getLogger(__name__)
    settings = _load_settings(args)

    grid = SampleGrid.from_file(args.map, rng=_make_rng(settings),
                                covariance=settings.default_covariance)
    if args.sample:
        grid.sample_all()
    else:
        grid.sync_all()

    states = grid.states
    heatmap = {(x, y): float(states[x, y])
               for x in range(grid.width) for y in range(grid.height)} if args.heatmap else None
    output = args.output or Path(settings.output_dir) / f"{Path(args.map).stem}.png"
    output = grid.plot_sampling_cells(output, heatmap=heatmap,
                                      dpi=settings.figure_dpi, colormap=settings.colormap)
    logger.info("Wrote %s", output)
    return 0


# -----------------------------------------------------------------------------
# Argument parsing
# -----------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sample grid command-line interface",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging output.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write DEBUG logs to this file.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a TOML settings file.",
    )

    sub_parsers = parser.add_subparsers(dest="command", required=True)

    # render ------------------------------------------------------------------
    render_parser = sub_parsers.add_parser("render", help="Print the ground truth of a map")
    render_parser.add_argument("map", type=str, help="Path to a text map.")
    render_parser.set_defaults(func=_cmd_render)

    # blur --------------------------------------------------------------------
    blur_parser = sub_parsers.add_parser("blur", help="Blur a map and print the beliefs")
    blur_parser.add_argument("map", type=str, help="Path to a text map.")
    blur_parser.add_argument("--kernel-size", dest="kernel_size", type=int, default=None,
                             help="Odd Gaussian kernel size (overrides settings).")
    blur_parser.add_argument("--sigma", type=float, default=None,
                             help="Gaussian standard deviation (overrides settings).")
    blur_parser.set_defaults(func=_cmd_blur)

    # simulate ----------------------------------------------------------------
    sim_parser = sub_parsers.add_parser("simulate", help="Run the sample/observe loop")
    sim_parser.add_argument("map", type=str, help="Path to a text map.")
    sim_parser.add_argument("--iterations", type=int, default=None,
                            help="Number of sample/observe rounds (overrides settings).")
    sim_parser.add_argument("--noise", dest="measurement_noise", type=float, default=None,
                            help="Measurement noise variance (overrides settings).")
    sim_parser.add_argument("--seed", dest="random_seed", type=int, default=None,
                            help="Random seed (overrides settings).")
    sim_parser.add_argument("--blur", action="store_true",
                            help="Blur the beliefs before the first round.")
    sim_parser.add_argument("--kernel-size", dest="kernel_size", type=int, default=None)
    sim_parser.add_argument("--sigma", type=float, default=None)
    sim_parser.set_defaults(func=_cmd_simulate)

    # plot --------------------------------------------------------------------
    plot_parser = sub_parsers.add_parser("plot", help="Plot the realization of a map")
    plot_parser.add_argument("map", type=str, help="Path to a text map.")
    plot_parser.add_argument("output", type=str, nargs="?", default=None,
                             help="Output image path (defaults to <output_dir>/<map name>.png).")
    plot_parser.add_argument("--sample", action="store_true",
                             help="Sample the realization instead of thresholding it.")
    plot_parser.add_argument("--heatmap", action="store_true",
                             help="Overlay the belief field as a heatmap.")
    plot_parser.add_argument("--seed", dest="random_seed", type=int, default=None)
    plot_parser.set_defaults(func=_cmd_plot)

    return parser


# -----------------------------------------------------------------------------
# Main entry point
# -----------------------------------------------------------------------------

def run(argv: Optional[list] = None) -> int:
    """Parse ``argv``, dispatch to the sub-command and return its exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Logging must be set up *after* parsing to respect --verbose flag.
    _setup_logging(verbose=args.verbose, log_file=args.log_file)

    logger = logging.getLogger(__name__)
    try:
        return args.func(args)
    except SampleGridError as exc:
        logger.error("%s", exc)
        return 1
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Invalid input: %s", exc)
        return 1


def main(argv: Optional[list] = None) -> None:
    """CLI entry point."""
    sys.exit(run(argv))


if __name__ == "__main__":
    main()
