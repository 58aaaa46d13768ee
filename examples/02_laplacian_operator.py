#!/usr/bin/env python
"""The continuous Laplacian operator and the graph Laplacian on a grid.

This example:
- samples the Gaussian-well field f(x, y; sigma) on a fine grid
- computes its gradient and Laplacian by autodiff (torch)
- builds the grid graph on -1:0.5:1 and compares -L f with the
  neighbour-difference (discrete) Laplacian and the continuous Laplacian

Run:
  python examples/02_laplacian_operator.py --surface-step 0.01 --save-figures
"""

from __future__ import annotations

import argparse
import functools
import logging

import numpy as np

from graphlap.calculus import (
    compare_on_grid,
    gaussian_well,
    gradient_field,
    laplacian_field,
    sample_grid,
)
from graphlap.calculus.continuous import _require_torch
from graphlap.config import WalkthroughConfig
from graphlap.logging_config import setup_logging


def main() -> None:
    cfg = WalkthroughConfig.from_env()

    p = argparse.ArgumentParser()
    p.add_argument("--sigma", type=float, default=cfg.sigma)
    p.add_argument("--surface-step", type=float, default=cfg.surface_step)
    p.add_argument("--grid-step", type=float, default=cfg.grid_step)
    p.add_argument("--kind", choices=["signed", "absolute"], default="signed")
    p.add_argument("--save-figures", action="store_true")
    p.add_argument("--figure-dir", type=str, default=None)
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    torch = _require_torch()

    cfg = WalkthroughConfig(sigma=args.sigma, surface_step=args.surface_step, grid_step=args.grid_step)
    f_np = functools.partial(gaussian_well, sigma=cfg.sigma)
    f_torch = functools.partial(gaussian_well, sigma=cfg.sigma, xp=torch)

    xs = cfg.surface_axis()
    print(f"surface grid: {len(xs)} x {len(xs)} points, sigma={cfg.sigma}")

    F = sample_grid(f_np, xs, xs)
    grad = gradient_field(f_torch, xs, xs)
    lap = laplacian_field(f_torch, xs, xs)
    print(f"f:        min={F.min():.4g}, max={F.max():.4g}")
    print(f"|grad f|: max={np.linalg.norm(grad, axis=-1).max():.4g}")
    print(f"lap f:    min={lap.min():.4g}, max={lap.max():.4g}")

    axis = cfg.grid_axis()
    cmp = compare_on_grid(f_np, axis, torch_fn=f_torch, kind=args.kind)
    print(f"\ngrid graph: {cmp.graph.n_nodes} nodes, {cmp.graph.n_edges} edges, h={cmp.spacing}")

    side = len(axis)
    print("\n-L f (graph Laplacian product):")
    print(np.round(cmp.graph_product.reshape(side, side), 4))
    print(f"\nneighbour-difference product ({args.kind}):")
    print(np.round(cmp.discrete_product.reshape(side, side), 4))
    print(f"\ninterior relative error of -L f / h^2 vs. lap f: {cmp.interior_error():.3g}")

    if args.save_figures:
        from graphlap.plotting import (
            plot_gradient_over_heatmap,
            plot_laplacian_products,
            plot_surface_samples,
            save_figure,
        )

        every = max(1, len(xs) // 4)
        save_figure(plot_surface_samples(xs, xs, F, stride=max(1, len(xs) // 50)), "02_surface", figure_dir=args.figure_dir)
        save_figure(plot_gradient_over_heatmap(xs, xs, F, grad, lap, every=every), "02_gradient_laplacian", figure_dir=args.figure_dir)
        save_figure(plot_laplacian_products(cmp), "02_grid_products", figure_dir=args.figure_dir)


if __name__ == "__main__":
    main()
