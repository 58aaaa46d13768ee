"""Continuous Laplacian operator and its graph counterpart on a grid.

Autodiff helpers need ``torch`` (``pip install graphlap[torch]``); the grid
comparison needs ``networkx`` for the grid generator.
"""

from __future__ import annotations

from .continuous import gaussian_well, sample_grid, gradient_field, laplacian_field
from .grid import (
    GridComparison,
    grid_coordinates,
    sample_on_graph,
    graph_laplacian_product,
    discrete_laplacian_product,
    compare_on_grid,
)

__all__ = [
    "gaussian_well",
    "sample_grid",
    "gradient_field",
    "laplacian_field",
    "GridComparison",
    "grid_coordinates",
    "sample_on_graph",
    "graph_laplacian_product",
    "discrete_laplacian_product",
    "compare_on_grid",
]
