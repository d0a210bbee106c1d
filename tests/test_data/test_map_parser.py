"""Tests for text-map parsing and map file loading."""

import pytest

from sample_grid.core import MalformedMapError
from sample_grid.data import OBSTACLE_CHAR, parse_map_rows, create_map_from_string, read_map_file


class TestParseMapRows:
    """Test suite for parse_map_rows."""

    def test_basic_rows(self):
        assert parse_map_rows("@..\n.@.\n") == ["@..", ".@."]

    def test_no_trailing_newline(self):
        assert parse_map_rows("@..\n.@.") == ["@..", ".@."]

    def test_crlf_and_trailing_blank_lines(self):
        assert parse_map_rows("..@\r\n@..\r\n\n\n") == ["..@", "@.."]

    def test_ragged_rows(self):
        with pytest.raises(MalformedMapError, match="Row 1"):
            parse_map_rows("...\n..\n...\n")

    @pytest.mark.parametrize("text", ["", "\n", "\n\n"])
    def test_empty_map(self, text):
        with pytest.raises(MalformedMapError):
            parse_map_rows(text)

    def test_malformed_map_is_value_error(self):
        with pytest.raises(ValueError):
            parse_map_rows("..\n.\n")


class TestCreateMapFromString:
    """Test suite for create_map_from_string."""

    def test_constructor_called_once_with_dimensions(self):
        calls = []

        def constructor(width, height):
            calls.append((width, height))
            return {"cells": []}

        create_map_from_string("....\n.@..\n", constructor, lambda grid, x, y: None)

        assert calls == [(4, 2)]

    def test_callback_receives_open_cells(self):
        grid = create_map_from_string(
            "@.\n.@\nx@\n",
            lambda width, height: [],
            lambda cells, x, y: cells.append((x, y))
        )

        assert grid == [(1, 0), (0, 1), (0, 2)]

    def test_any_non_obstacle_character_is_open(self):
        grid = create_map_from_string(
            "T.G" + OBSTACLE_CHAR + "\n",
            lambda width, height: set(),
            lambda cells, x, y: cells.add(x)
        )

        assert grid == {0, 1, 2}

    def test_ragged_map_never_constructs(self):
        constructed = []

        with pytest.raises(MalformedMapError):
            create_map_from_string("..\n...\n",
                                   lambda w, h: constructed.append((w, h)),
                                   lambda grid, x, y: None)
        assert constructed == []


class TestReadMapFile:
    """Test suite for read_map_file."""

    def test_read(self, map_file, corridor_map):
        assert read_map_file(map_file) == corridor_map
        assert read_map_file(str(map_file)) == corridor_map

    def test_missing_file(self, tmp_path):
        with pytest.raises(MalformedMapError) as excinfo:
            read_map_file(tmp_path / "nope.map")

        assert isinstance(excinfo.value.__cause__, OSError)

    def test_directory_is_unreadable(self, tmp_path):
        with pytest.raises(MalformedMapError):
            read_map_file(tmp_path)
