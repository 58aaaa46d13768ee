"""Graph-Laplacian PCA."""

from __future__ import annotations

from .glpca import GLPCA, GLPCAResult, center_rows, glpca_matrix

__all__ = ["GLPCA", "GLPCAResult", "center_rows", "glpca_matrix"]
