"""Tests for text and matplotlib grid rendering."""

import matplotlib.pyplot as plt
import pytest

from sample_grid.viz import print_cells, plot_cells, PATH_CHAR, HEATMAP_CHAR


def _diagonal(x, y):
    return x != y


class TestPrintCells:
    """Test suite for print_cells."""

    def test_predicate_rendering(self):
        assert print_cells(3, 2, _diagonal) == "@..\n.@.\n"

    def test_path_overlay(self):
        text = print_cells(3, 3, _diagonal, path=[(0, 0), (1, 0), (2, 0), (2, 1)])

        assert text == f"{PATH_CHAR * 3}\n.@{PATH_CHAR}\n..@\n"

    def test_empty_path_matches_no_path(self):
        assert print_cells(4, 4, _diagonal, path=[]) == print_cells(4, 4, _diagonal)

    @pytest.mark.parametrize("heatmap", [
        {(1, 0): 0.5, (0, 1): 0.1},
        [((1, 0), 0.5), ((0, 1), 0.1)],
    ])
    def test_heatmap_overlay(self, heatmap):
        text = print_cells(3, 2, _diagonal, heatmap=heatmap)

        assert text == f"@{HEATMAP_CHAR}.\n{HEATMAP_CHAR}@.\n"

    def test_path_drawn_over_heatmap(self):
        text = print_cells(2, 1, _diagonal, path=[(1, 0)], heatmap={(0, 0): 1.0, (1, 0): 1.0})

        assert text == f"{HEATMAP_CHAR}{PATH_CHAR}\n"


class TestPlotCells:
    """Test suite for plot_cells."""

    def test_plot_basic(self, tmp_path):
        output = plot_cells(6, 4, tmp_path / "basic.png", _diagonal)

        assert output == tmp_path / "basic.png"
        assert output.exists()

    def test_plot_creates_parent_directories(self, tmp_path):
        output = plot_cells(3, 3, tmp_path / "nested" / "dir" / "grid.png", _diagonal)

        assert output.exists()

    @pytest.mark.parametrize("heatmap", [
        {(0, 1): 0.2, (2, 2): 0.9},
        [((0, 1), 0.2), ((2, 2), 0.9)],
    ])
    def test_plot_with_overlays(self, tmp_path, heatmap):
        output = plot_cells(4, 4, tmp_path / "overlay.png", _diagonal,
                            path=[(0, 1), (1, 2), (2, 3)], heatmap=heatmap,
                            dpi=72, colormap='magma')

        assert output.exists()
        assert output.stat().st_size > 0

    def test_plot_svg(self, tmp_path):
        output = plot_cells(3, 3, tmp_path / "grid.svg", _diagonal)

        assert output.read_text().lstrip().startswith("<?xml")

    def test_figure_closed_when_save_fails(self, tmp_path, monkeypatch):
        def failing_savefig(self, *args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(plt.Figure, "savefig", failing_savefig)
        open_before = len(plt.get_fignums())

        with pytest.raises(OSError, match="disk full"):
            plot_cells(3, 3, tmp_path / "grid.png", _diagonal)

        assert len(plt.get_fignums()) == open_before
