"""
Grid rendering: text dumps and matplotlib plots with path and heatmap overlays.
"""

from .grid_rendering import print_cells, plot_cells, PATH_CHAR, HEATMAP_CHAR

__all__ = ['print_cells', 'plot_cells', 'PATH_CHAR', 'HEATMAP_CHAR']
