"""A 2D grid is a graph: graph Laplacian vs. discrete Laplacian.

Sampling a field f at the nodes of a square grid gives a node signal f_phi.
On a uniform grid with spacing h, the five-point finite-difference Laplacian is

    (Delta f)(v) ~ sum_{w in N(v)} (f(w) - f(v)) / h^2 = -(L f_phi)(v) / h^2

so the product of the (negated) graph Laplacian with the signal is, up to the
1/h^2 factor, the discrete Laplacian on the grid interior. Boundary nodes miss
neighbours and do not match.

Node order follows :func:`graphlap.graph.builders.grid_graph`: node
``r * n + c`` sits at ``(axis[r], axis[c])``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Optional

import numpy as np

from ..graph.builders import Graph, grid_graph
from ..graph.matrices import laplacian_matrix
from .continuous import laplacian_field

logger = logging.getLogger(__name__)

ProductKind = Literal["signed", "absolute"]


def grid_coordinates(axis: np.ndarray) -> np.ndarray:
    """Node coordinates (n*n, 2) of the square grid built on ``axis``."""
    axis = np.asarray(axis, dtype=np.float64)
    if axis.ndim != 1:
        raise ValueError(f"axis must be 1D, got shape={axis.shape}")
    X, Y = np.meshgrid(axis, axis, indexing="ij")
    return np.stack([X.ravel(), Y.ravel()], axis=1)


def sample_on_graph(fn: Callable, coords: np.ndarray) -> np.ndarray:
    """Evaluate a vectorised NumPy field at node coordinates."""
    coords = np.asarray(coords, dtype=np.float64)
    return np.asarray(fn(coords[:, 0], coords[:, 1]), dtype=np.float64).reshape(-1)


def graph_laplacian_product(L, values: np.ndarray) -> np.ndarray:
    """Return ``-L @ values``."""
    values = np.asarray(values, dtype=np.float64)
    if L.shape[1] != values.shape[0]:
        raise ValueError(f"Shape mismatch: L {L.shape} vs values {values.shape}")
    return -np.asarray(L @ values).reshape(-1)


def discrete_laplacian_product(
    graph: Graph,
    values: np.ndarray,
    *,
    kind: ProductKind = "signed",
) -> np.ndarray:
    """Neighbour-difference sum at every node.

    kind='signed' computes sum_w (f_w - f_v); kind='absolute' computes
    sum_w |f_v - f_w|.
    """
    values = np.asarray(values, dtype=np.float64).reshape(-1)
    if values.shape[0] != graph.n_nodes:
        raise ValueError(f"Expected {graph.n_nodes} node values, got {values.shape[0]}")

    i, j = graph.edges[:, 0], graph.edges[:, 1]
    diff = values[j] - values[i]

    out = np.zeros(graph.n_nodes, dtype=np.float64)
    if kind == "signed":
        np.add.at(out, i, diff)
        np.add.at(out, j, -diff)
    elif kind == "absolute":
        np.add.at(out, i, np.abs(diff))
        np.add.at(out, j, np.abs(diff))
    else:
        raise ValueError(f"Unknown product kind {kind!r}")
    return out


def _uniform_spacing(axis: np.ndarray) -> float:
    if axis.shape[0] < 2:
        raise ValueError("axis needs at least 2 points")
    steps = np.diff(axis)
    if not np.allclose(steps, steps[0]):
        raise ValueError("axis must be uniformly spaced")
    return float(steps[0])


@dataclass(frozen=True)
class GridComparison:
    """Samples of one field on a grid graph and its three Laplacians."""

    graph: Graph
    axis: np.ndarray
    coords: np.ndarray
    spacing: float
    values: np.ndarray
    graph_product: np.ndarray
    discrete_product: np.ndarray
    continuous: Optional[np.ndarray] = None

    def interior_mask(self) -> np.ndarray:
        return self.graph.degrees() == 4

    def interior_error(self) -> float:
        """Relative error of ``-L f / h^2`` against the continuous Laplacian."""
        if self.continuous is None:
            raise ValueError("No continuous Laplacian was computed for this comparison")
        mask = self.interior_mask()
        if not mask.any():
            raise ValueError("Grid has no interior nodes")
        approx = self.graph_product[mask] / self.spacing**2
        exact = self.continuous[mask]
        denom = np.linalg.norm(exact)
        err = np.linalg.norm(approx - exact)
        return float(err / denom) if denom > 0 else float(err)


def compare_on_grid(
    fn: Callable,
    axis: np.ndarray,
    *,
    torch_fn: Optional[Callable] = None,
    kind: ProductKind = "signed",
) -> GridComparison:
    """Sample ``fn`` on a square grid and compute graph/discrete Laplacian products.

    Args:
        fn: vectorised NumPy field ``fn(x, y)``.
        axis: 1D uniformly spaced coordinates for both grid directions.
        torch_fn: optional torch version of ``fn``; when given, the continuous
            Laplacian is evaluated at every node by autodiff.
        kind: neighbour-difference flavour for the discrete product.
    """
    axis = np.asarray(axis, dtype=np.float64)
    h = _uniform_spacing(axis)

    graph = grid_graph(axis.shape[0])
    coords = grid_coordinates(axis)
    values = sample_on_graph(fn, coords)

    L = laplacian_matrix(graph)
    gprod = graph_laplacian_product(L, values)
    dprod = discrete_laplacian_product(graph, values, kind=kind)

    continuous = None
    if torch_fn is not None:
        continuous = laplacian_field(torch_fn, axis, axis).reshape(-1)

    logger.debug("Grid comparison: %d nodes, spacing h=%g, kind=%s", graph.n_nodes, h, kind)
    return GridComparison(
        graph=graph,
        axis=axis,
        coords=coords,
        spacing=h,
        values=values,
        graph_product=gprod,
        discrete_product=dprod,
        continuous=continuous,
    )
