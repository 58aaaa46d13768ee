from __future__ import annotations

import numpy as np
import pytest

matplotlib = pytest.importorskip("matplotlib")
pytest.importorskip("networkx")
matplotlib.use("Agg")


def test_plot_graph_and_save(tmp_path):
    from graphlap.graph import example_graph, fiedler_vector, laplacian_matrix
    from graphlap.plotting import plot_graph, save_figure

    g = example_graph()
    fig = plot_graph(g, node_color=fiedler_vector(laplacian_matrix(g)), edge_labels=True, title="G")
    out = save_figure(fig, "graph", figure_dir=tmp_path)
    assert out.exists()
    assert out.suffix == ".png"


def test_grid_layout_and_products_figure(tmp_path):
    from graphlap.calculus import compare_on_grid
    from graphlap.plotting import graph_layout, plot_laplacian_products, save_figure

    cmp = compare_on_grid(lambda x, y: x**2 + y**2, np.linspace(-1.0, 1.0, 5))
    pos = graph_layout(cmp.graph, "grid")
    assert pos[6] == (1.0, -1.0)

    fig = plot_laplacian_products(cmp)
    assert len(fig.axes) >= 2
    assert save_figure(fig, "products", figure_dir=tmp_path).exists()


def test_grid_layout_requires_square():
    from graphlap.graph import path_graph
    from graphlap.plotting import graph_layout

    with pytest.raises(ValueError):
        graph_layout(path_graph(3), "grid")


def test_field_and_glpca_figures():
    from graphlap.graph import Graph
    from graphlap.pca import GLPCA
    from graphlap.plotting import (
        plot_gradient_over_heatmap,
        plot_histogram,
        plot_projection,
        plot_reconstruction_histograms,
        plot_surface_samples,
    )

    xs = np.linspace(-1.0, 1.0, 9)
    X, Y = np.meshgrid(xs, xs, indexing="ij")
    F = X**2 + Y**2
    grad = np.stack([2 * X, 2 * Y], axis=-1)
    lap = np.full_like(F, 4.0)

    assert plot_surface_samples(xs, xs, F, stride=2) is not None
    assert plot_gradient_over_heatmap(xs, xs, F, grad, lap, every=4) is not None
    assert plot_histogram(F, bins=5, title="F") is not None

    rng = np.random.default_rng(1)
    data = rng.standard_normal((2, 8))
    cycle = Graph.from_edges(8, [(i, (i + 1) % 8) for i in range(8)])
    res = GLPCA(n_components=2, beta=0.5).fit(data, cycle)
    assert plot_projection(res.projection()) is not None
    assert plot_projection(res.projection()[:1]) is not None
    assert plot_reconstruction_histograms(res.X_centered, res.reconstruction()) is not None

    import matplotlib.pyplot as plt

    plt.close("all")
