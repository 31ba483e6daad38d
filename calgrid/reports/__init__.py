"""Report generation modules for calgrid."""

from .grid_cell import GridCell
from .grid_report import GridReport

__all__ = ['GridCell', 'GridReport']
