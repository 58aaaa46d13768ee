#!/usr/bin/env python
"""Graph matrices of a small simple graph.

This example:
- builds the 4-node, 5-edge example graph G
- prints its adjacency, degree, incidence and Laplacian matrices
- checks L = B B^T = D - A
- optionally saves a labelled drawing of G

Run:
  python examples/01_graph_matrices.py --save-figures
"""

from __future__ import annotations

import argparse
import logging

import numpy as np

from graphlap.graph import example_graph, graph_matrices
from graphlap.logging_config import setup_logging


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--save-figures", action="store_true", help="Save a drawing of G (needs graphlap[plot])")
    p.add_argument("--figure-dir", type=str, default=None)
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    G = example_graph()
    print(f"G: {G.n_nodes} nodes, {G.n_edges} edges")
    for j, (u, v) in enumerate(G.edges.tolist()):
        print(f"  edge {j}: {u} - {v}")

    mats = graph_matrices(G)

    np.set_printoptions(linewidth=120)
    print("\nAdjacency A:")
    print(mats.adjacency.toarray().astype(int))
    print("\nDegree D:")
    print(mats.degree.toarray().astype(int))
    print("\nIncidence B (edges directed low -> high index):")
    print(mats.incidence.toarray().astype(int))
    print("\nLaplacian L:")
    print(mats.laplacian.toarray().astype(int))

    r_bbt, r_dma = mats.identity_residuals()
    print(f"\nmax|L - B B^T| = {r_bbt:.3e}")
    print(f"max|L - (D - A)| = {r_dma:.3e}")
    assert r_bbt == 0.0 and r_dma == 0.0, "Laplacian identities do not hold"

    if args.save_figures:
        from graphlap.plotting import plot_graph, save_figure

        fig = plot_graph(G, edge_labels=True, layout="spectral", title="G")
        save_figure(fig, "01_graph", figure_dir=args.figure_dir)


if __name__ == "__main__":
    main()
