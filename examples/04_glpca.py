#!/usr/bin/env python
"""Graph-Laplacian PCA on the grid example.

This example:
- uses the grid samples of the Gaussian-well field as data X (1 x 25)
- uses the 5x5 grid graph as W
- solves gLPCA in closed form for a chosen beta
- reports the projection and the relative reconstruction error

Run:
  python examples/04_glpca.py --beta 0.5 --components 2 --skip 1
"""

from __future__ import annotations

import argparse
import functools
import logging

import numpy as np

from graphlap.calculus import gaussian_well, grid_coordinates, sample_on_graph
from graphlap.config import WalkthroughConfig
from graphlap.graph import grid_graph
from graphlap.logging_config import setup_logging
from graphlap.pca import GLPCA


def main() -> None:
    cfg = WalkthroughConfig.from_env()

    p = argparse.ArgumentParser()
    p.add_argument("--beta", type=float, default=cfg.beta)
    p.add_argument("--components", type=int, default=cfg.n_components)
    p.add_argument("--skip", type=int, default=cfg.skip)
    p.add_argument("--sigma", type=float, default=cfg.sigma)
    p.add_argument("--sweep", action="store_true", help="Also report the error for beta in 0:0.1:1")
    p.add_argument("--save-figures", action="store_true")
    p.add_argument("--figure-dir", type=str, default=None)
    p.add_argument("--verbose", action="store_true")
    p.add_argument("--debug-pca", action="store_true", help="Log gLPCA normalisers and eigenvalues only")
    args = p.parse_args()

    setup_logging(
        logging.DEBUG if args.verbose else logging.INFO,
        debug_modules=("pca",) if args.debug_pca else (),
    )
    np.set_printoptions(precision=4, suppress=True, linewidth=120)

    axis = cfg.grid_axis()
    W = grid_graph(len(axis))
    X = sample_on_graph(functools.partial(gaussian_well, sigma=args.sigma), grid_coordinates(axis))[None, :]
    print(f"X: shape={X.shape}; W: {W.n_nodes} nodes, {W.n_edges} edges")

    model = GLPCA(n_components=args.components, beta=args.beta, skip=args.skip)
    res = model.fit(X, W)

    print(f"lambda_n={res.lambda_n:.6g}, xi_n={res.xi_n:.6g}, alpha={res.alpha:.6g}")
    print("smallest eigenvalues of G_beta:", res.eigenvalues[: args.skip + args.components])
    X_hat = res.projection()
    print(f"projection X_hat: shape={X_hat.shape}")
    print(X_hat)
    print(f"relative reconstruction error: {res.reconstruction_error():.4f}")

    if args.sweep:
        print("\nbeta   error")
        for beta in np.round(np.arange(0.0, 1.01, 0.1), 1):
            r = GLPCA(n_components=args.components, beta=float(beta), skip=args.skip).fit(X, W)
            print(f"{beta:4.1f}   {r.reconstruction_error():.4f}")

    if args.save_figures:
        from graphlap.plotting import plot_projection, plot_reconstruction_histograms, save_figure

        save_figure(plot_projection(X_hat), "04_projection", figure_dir=args.figure_dir)
        save_figure(
            plot_reconstruction_histograms(res.X_centered, res.reconstruction()),
            "04_reconstruction",
            figure_dir=args.figure_dir,
        )


if __name__ == "__main__":
    main()
