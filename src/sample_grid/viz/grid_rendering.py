"""Text and matplotlib rendering of boolean grids.

Both renderers only need the grid dimensions and a per-cell predicate, so
they work with any grid-like object. A path is an ordered sequence of
``(x, y)`` cells; a heatmap is a sparse mapping from ``(x, y)`` to an
intensity (a dict or an iterable of ``((x, y), value)`` pairs).
"""

from collections import abc
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap

from ..core.bitpacked import OPEN_CHAR, BLOCKED_CHAR

Cell = Tuple[int, int]
Heatmap = Union[Mapping[Cell, float], Iterable[Tuple[Cell, float]]]

PATH_CHAR = "*"
HEATMAP_CHAR = "+"


def print_cells(width: int,
                height: int,
                predicate: Callable[[int, int], bool],
                path: Optional[Sequence[Cell]] = None,
                heatmap: Optional[Heatmap] = None) -> str:
    """Render a grid as text, one newline-terminated line per row.

    Open cells are ``.``, blocked cells ``@``, path cells ``*`` and cells
    covered by the heatmap ``+``. The path is drawn over the heatmap.
    """
    path_cells = set(path) if path else set()
    heat_cells = set(_heatmap_cells(heatmap)) if heatmap is not None else set()
    lines = []
    for y in range(height):
        chars = []
        for x in range(width):
            if (x, y) in path_cells:
                chars.append(PATH_CHAR)
            elif (x, y) in heat_cells:
                chars.append(HEATMAP_CHAR)
            elif predicate(x, y):
                chars.append(OPEN_CHAR)
            else:
                chars.append(BLOCKED_CHAR)
        lines.append(''.join(chars) + '\n')
    return ''.join(lines)


def _heatmap_items(heatmap: Heatmap) -> Iterable[Tuple[Cell, float]]:
    return heatmap.items() if isinstance(heatmap, abc.Mapping) else heatmap


def _heatmap_cells(heatmap: Heatmap) -> Iterable[Cell]:
    return (tuple(cell) for cell, _ in _heatmap_items(heatmap))


def _heatmap_array(width: int, height: int, heatmap: Heatmap) -> np.ndarray:
    image = np.full((height, width), np.nan)
    for (x, y), value in _heatmap_items(heatmap):
        image[y, x] = value
    return image


def plot_cells(width: int,
               height: int,
               output_file: Union[str, Path],
               predicate: Callable[[int, int], bool],
               path: Optional[Sequence[Cell]] = None,
               heatmap: Optional[Heatmap] = None,
               dpi: int = 150,
               colormap: str = 'viridis') -> Path:
    """Plot a grid to an image file.

    Parameters
    ----------
    width, height : int
        Grid dimensions
    output_file : str or Path
        Destination; the suffix selects the format
    predicate : Callable[[int, int], bool]
        True for open cells
    path : Optional[Sequence[Cell]]
        Cells drawn as a polyline on top of the grid
    heatmap : Optional[Heatmap]
        Sparse intensities drawn semi-transparently over the grid
    dpi : int, default=150
        Figure resolution
    colormap : str, default='viridis'
        Colormap for the heatmap overlay

    Returns
    -------
    Path
        The written file
    """
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    occupancy = np.array([[0.0 if predicate(x, y) else 1.0 for x in range(width)]
                          for y in range(height)])

    fig, ax = plt.subplots(figsize=(max(4.0, width / 10), max(4.0, height / 10)))
    try:
        ax.imshow(occupancy, cmap=ListedColormap(['white', 'black']),
                  vmin=0.0, vmax=1.0, interpolation='nearest', origin='upper')

        if heatmap is not None:
            image = _heatmap_array(width, height, heatmap)
            overlay = ax.imshow(np.ma.masked_invalid(image), cmap=colormap, alpha=0.6,
                                interpolation='nearest', origin='upper')
            fig.colorbar(overlay, ax=ax, fraction=0.046, pad=0.04)

        if path:
            xs = [cell[0] for cell in path]
            ys = [cell[1] for cell in path]
            ax.plot(xs, ys, color='red', linewidth=1.5)
            ax.scatter([xs[0], xs[-1]], [ys[0], ys[-1]], color='red', s=12, zorder=3)

        ax.set_xlim(-0.5, width - 0.5)
        ax.set_ylim(height - 0.5, -0.5)
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(f'{width}x{height} grid')

        fig.tight_layout()
        fig.savefig(output_file, dpi=dpi)
    finally:
        plt.close(fig)
    return output_file
