"""Map input: text-map parsing and file loading."""

from .map_parser import (
    OBSTACLE_CHAR,
    parse_map_rows,
    create_map_from_string,
    read_map_file
)

__all__ = [
    'OBSTACLE_CHAR',
    'parse_map_rows',
    'create_map_from_string',
    'read_map_file'
]
