"""GraphLap.

Graph matrices, the graph Laplacian and Graph-Laplacian PCA, written as a
readable walkthrough library:

- Graph matrices: adjacency, degree, incidence and Laplacian (L = B B^T = D - A)
- The continuous Laplacian operator (autodiff) and its graph counterpart on a grid
- Spectral clustering with the Fiedler vector
- Graph-Laplacian PCA (gLPCA), closed-form solution

The project is intentionally modular:
- Base installation depends only on NumPy and SciPy.
- Extras:
  - `graphlap[nx]` installs `networkx` (graph generators and conversion)
  - `graphlap[torch]` installs `torch` (autodiff gradients and Laplacians)
  - `graphlap[plot]` installs `matplotlib` and `networkx` (figures)

The examples/ directory replays the walkthrough top to bottom.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.4.0"
