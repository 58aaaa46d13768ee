"""Figures for the walkthrough.

Rendering uses matplotlib, with networkx drawing graphs. Both are optional
(``pip install graphlap[plot]``) and imported lazily. Every function returns
the matplotlib ``Figure``; use :func:`save_figure` to write it to the figure
directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Literal, Optional, Tuple

import numpy as np

from .calculus.grid import GridComparison
from .config import ensure_figure_dir
from .graph.builders import Graph, _require_networkx

logger = logging.getLogger(__name__)

Layout = Literal["spring", "spectral", "grid"]


def _require_pyplot():
    try:
        import matplotlib.pyplot as plt  # type: ignore
    except Exception as e:
        raise ImportError(
            "matplotlib is required for plotting. Install with `pip install graphlap[plot]`."
        ) from e
    return plt


def _hide_axes(ax) -> None:
    ax.set_xticks([])
    ax.set_yticks([])
    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.set_aspect("equal")


def graph_layout(graph: Graph, layout: Layout = "spring", *, seed: int = 0) -> Dict[int, Tuple[float, float]]:
    """Node positions for drawing.

    'grid' assumes a square grid built by :func:`graphlap.graph.grid_graph`.
    """
    if layout == "grid":
        side = int(round(np.sqrt(graph.n_nodes)))
        if side * side != graph.n_nodes:
            raise ValueError(f"grid layout needs a square node count, got {graph.n_nodes}")
        return {r * side + c: (float(c), float(-r)) for r in range(side) for c in range(side)}

    nx = _require_networkx()
    G = graph.to_networkx()
    if layout == "spring":
        return nx.spring_layout(G, seed=seed)
    if layout == "spectral":
        return nx.spectral_layout(G)
    raise ValueError(f"Unknown layout {layout!r}")


def plot_graph(
    graph: Graph,
    *,
    node_color: Optional[np.ndarray] = None,
    node_labels: bool = True,
    edge_labels: bool = False,
    layout: Layout = "spring",
    pos: Optional[Dict[int, Tuple[float, float]]] = None,
    cmap: str = "viridis",
    title: Optional[str] = None,
    ax=None,
):
    """Draw ``graph`` with optional node colouring and node/edge labels."""
    plt = _require_pyplot()
    nx = _require_networkx()

    if ax is None:
        fig, ax = plt.subplots(figsize=(5, 5))
    else:
        fig = ax.figure

    G = graph.to_networkx()
    pos = graph_layout(graph, layout) if pos is None else pos

    colors = "C0" if node_color is None else np.asarray(node_color, dtype=np.float64)
    nodes = nx.draw_networkx_nodes(G, pos, ax=ax, node_color=colors, cmap=cmap, node_size=300)
    nx.draw_networkx_edges(G, pos, ax=ax)

    if node_labels:
        nx.draw_networkx_labels(G, pos, ax=ax, labels={v: str(v) for v in G.nodes}, font_size=8)
    if edge_labels:
        labels = {tuple(e): str(j) for j, e in enumerate(graph.edges.tolist())}
        nx.draw_networkx_edge_labels(G, pos, ax=ax, edge_labels=labels, font_size=7)

    if node_color is not None:
        fig.colorbar(nodes, ax=ax, shrink=0.7)

    _hide_axes(ax)
    if title:
        ax.set_title(title)
    return fig


def plot_surface_samples(xs: np.ndarray, ys: np.ndarray, F: np.ndarray, *, stride: int = 20, title: str = "f(x, y)"):
    """3D surface of sampled field values ``F[i, j] = f(xs[i], ys[j])``."""
    plt = _require_pyplot()
    X, Y = np.meshgrid(xs, ys, indexing="ij")
    fig = plt.figure(figsize=(6, 5))
    ax = fig.add_subplot(projection="3d")
    ax.plot_surface(X, Y, F, rstride=stride, cstride=stride, cmap="viridis", linewidth=0)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(title)
    return fig


def plot_gradient_over_heatmap(
    xs: np.ndarray,
    ys: np.ndarray,
    F: np.ndarray,
    grad: np.ndarray,
    lap: np.ndarray,
    *,
    every: int = 500,
):
    """Top: gradient arrows over a heatmap of f. Bottom: heatmap of the Laplacian."""
    plt = _require_pyplot()
    fig, (ax_top, ax_bottom) = plt.subplots(2, 1, figsize=(6, 10))

    extent = (float(xs[0]), float(xs[-1]), float(ys[0]), float(ys[-1]))
    im = ax_top.imshow(F.T, origin="lower", extent=extent, aspect="equal")
    fig.colorbar(im, ax=ax_top)

    step = max(1, int(every))
    ii = np.arange(0, len(xs), step)
    jj = np.arange(0, len(ys), step)
    I, J = np.meshgrid(ii, jj, indexing="ij")
    ax_top.quiver(xs[I], ys[J], grad[I, J, 0], grad[I, J, 1], color="white")
    ax_top.set_title("Gradient over Heatmap")

    im2 = ax_bottom.imshow(lap.T, origin="lower", extent=extent, aspect="equal", cmap="cool")
    fig.colorbar(im2, ax=ax_bottom)
    ax_bottom.set_title("Laplacian")
    return fig


def plot_laplacian_products(comparison: GridComparison):
    """Grid graph coloured by the discrete and graph Laplacian products."""
    plt = _require_pyplot()
    fig, (ax_left, ax_right) = plt.subplots(1, 2, figsize=(10, 5))
    pos = graph_layout(comparison.graph, "grid")
    plot_graph(
        comparison.graph,
        node_color=comparison.discrete_product,
        node_labels=False,
        pos=pos,
        title="Discrete Laplacian Product",
        ax=ax_left,
    )
    plot_graph(
        comparison.graph,
        node_color=comparison.graph_product,
        node_labels=False,
        pos=pos,
        title="Graph Laplacian Product",
        ax=ax_right,
    )
    return fig


def plot_histogram(values: np.ndarray, *, bins: int = 100, title: Optional[str] = None):
    plt = _require_pyplot()
    fig, ax = plt.subplots(figsize=(6, 4))
    ax.hist(np.ravel(values), bins=bins)
    if title:
        ax.set_title(title)
    return fig


def plot_projection(X_hat: np.ndarray, *, title: str = "Projection"):
    """Scatter a k x n projection: first two rows as (x, y), or index vs value for k = 1."""
    plt = _require_pyplot()
    fig, ax = plt.subplots(figsize=(5, 5))
    X_hat = np.atleast_2d(X_hat)
    if X_hat.shape[0] >= 2:
        ax.scatter(X_hat[0], X_hat[1])
        ax.set_xlabel("component 1")
        ax.set_ylabel("component 2")
    else:
        ax.scatter(np.arange(X_hat.shape[1]), X_hat[0])
        ax.set_xlabel("sample")
    ax.set_title(title)
    return fig


def plot_reconstruction_histograms(original: np.ndarray, reconstruction: np.ndarray, *, bins: int = 20):
    """Side-by-side probability histograms of original and reconstructed values."""
    plt = _require_pyplot()
    fig, (ax_left, ax_right) = plt.subplots(1, 2, figsize=(10, 4))
    for ax, values, color, title in (
        (ax_left, original, "orange", "Original"),
        (ax_right, reconstruction, "black", "Reconstruction"),
    ):
        values = np.ravel(values)
        ax.hist(values, bins=bins, color=color, weights=np.full(values.shape, 1.0 / max(1, values.size)))
        ax.set_title(title)
    return fig


def save_figure(fig, name: str, *, figure_dir: Optional[os.PathLike] = None, dpi: int = 120) -> Path:
    """Save ``fig`` as ``<figure_dir>/<name>.png`` and close it."""
    plt = _require_pyplot()
    out = ensure_figure_dir(figure_dir) / f"{name}.png"
    fig.savefig(out, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    logger.info("Saved figure: %s", out)
    return out
