#!/usr/bin/env python
"""Spectral clustering with the Fiedler vector.

This example:
- eigendecomposes the Laplacian of the example graph G
- colours G by its Fiedler vector
- repeats on the 22-node clustered graph H and splits it by sign(psi_2)

Run:
  python examples/03_spectral_clustering.py --save-figures
"""

from __future__ import annotations

import argparse
import logging

import numpy as np

from graphlap.graph import (
    clustered_example_graph,
    example_graph,
    fiedler_vector,
    laplacian_eigen,
    laplacian_matrix,
    spectral_bipartition,
)
from graphlap.logging_config import setup_logging


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--save-figures", action="store_true")
    p.add_argument("--figure-dir", type=str, default=None)
    p.add_argument("--bins", type=int, default=100)
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    np.set_printoptions(precision=4, suppress=True, linewidth=120)

    G = example_graph()
    L = laplacian_matrix(G)
    eig = laplacian_eigen(L)
    print("G eigenvalues:", eig.values)
    print("G eigenvectors (columns):")
    print(eig.vectors)

    psi2 = fiedler_vector(L)
    print("G Fiedler vector:", psi2)

    H = clustered_example_graph()
    LH = laplacian_matrix(H)
    psi2_h = fiedler_vector(LH)
    parts = spectral_bipartition(LH)
    print(f"\nH: {H.n_nodes} nodes, {H.n_edges} edges")
    print("H Fiedler vector:", psi2_h)
    print("H partition +1:", np.flatnonzero(parts > 0).tolist())
    print("H partition -1:", np.flatnonzero(parts < 0).tolist())

    if args.save_figures:
        from graphlap.plotting import plot_graph, plot_histogram, save_figure

        save_figure(plot_graph(G, node_color=psi2, title="G by Fiedler vector"), "03_fiedler_G", figure_dir=args.figure_dir)
        save_figure(plot_graph(H, title="H"), "03_graph_H", figure_dir=args.figure_dir)
        save_figure(
            plot_graph(H, node_color=parts, layout="spectral", title="H by sign(psi_2)"),
            "03_partition_H",
            figure_dir=args.figure_dir,
        )
        save_figure(plot_histogram(psi2_h, bins=args.bins, title="psi_2 of H"), "03_fiedler_hist_H", figure_dir=args.figure_dir)


if __name__ == "__main__":
    main()
