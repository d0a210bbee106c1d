"""Plain-text map parsing.

A map is a block of equal-length rows separated by line breaks. The
character ``@`` marks a blocked cell; every other character is open.
Row index is the y coordinate and column index is the x coordinate.
"""

import logging
from pathlib import Path
from typing import Callable, List, TypeVar, Union

from ..core.exceptions import MalformedMapError

logger = logging.getLogger(__name__)

OBSTACLE_CHAR = "@"

GridT = TypeVar("GridT")


def parse_map_rows(text: str) -> List[str]:
    """Split map text into rows and check they form a rectangle.

    Trailing empty lines are ignored; ``\\r\\n`` line endings are accepted.

    Raises
    ------
    MalformedMapError
        If the map is empty or its rows have different lengths
    """
    rows = text.splitlines()
    while rows and rows[-1] == "":
        rows.pop()

    if not rows or not rows[0]:
        raise MalformedMapError("Map text is empty")

    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise MalformedMapError(
                f"Row {y} has length {len(row)}, expected {width}"
            )
    return rows


def create_map_from_string(text: str,
                           constructor: Callable[[int, int], GridT],
                           on_open_cell: Callable[[GridT, int, int], None]) -> GridT:
    """Build a grid from map text.

    Parameters
    ----------
    text : str
        Map text
    constructor : Callable[[int, int], GridT]
        Called once with ``(width, height)`` to create the grid
    on_open_cell : Callable[[GridT, int, int], None]
        Called with ``(grid, x, y)`` for every cell that is not an obstacle

    Returns
    -------
    GridT
        The grid returned by ``constructor``
    """
    rows = parse_map_rows(text)
    width, height = len(rows[0]), len(rows)
    logger.debug("Parsed %dx%d map", width, height)

    grid = constructor(width, height)
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char != OBSTACLE_CHAR:
                on_open_cell(grid, x, y)
    return grid


def read_map_file(path: Union[str, Path]) -> str:
    """Read a whole map file.

    Raises
    ------
    MalformedMapError
        If the file cannot be read
    """
    path = Path(path)
    try:
        return path.read_text(encoding="ascii")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedMapError(f"Unable to read map file {path}: {exc}") from exc
