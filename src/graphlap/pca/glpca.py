r"""Graph-Laplacian PCA (gLPCA).

Reference: B. Jiang, C. Ding, B. Luo, J. Tang, "Graph-Laplacian PCA:
Closed-form Solution and Robustness", CVPR 2013.

Inputs are vector data X (p x n, one sample per column) and graph data W
(n x n similarity between samples). gLPCA couples PCA with Laplacian
embedding by sharing the embedding Q (n x k, Q^T Q = I):

    min_{U, Q}  ||X~ - U Q^T||_F^2 + alpha Tr(Q^T L Q)

where X~ is X with each row centred and L = D - W. For fixed Q the optimal
U is X~ Q, which leaves

    min_Q  Tr(Q^T (alpha L - X~^T X~) Q).

With the normalisers lambda_n = lambda_max(X~^T X~), xi_n = lambda_max(L) and
alpha = lambda_n beta / (xi_n (1 - beta)) this becomes

    G_beta = (1 - beta)(I - X~^T X~ / lambda_n) + beta L / xi_n

and Q is spanned by the eigenvectors of the k smallest eigenvalues of
G_beta. beta = 0 is plain PCA, beta = 1 is plain Laplacian embedding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
import scipy.sparse as sp

from ..graph.builders import Graph
from ..graph.matrices import laplacian_from_adjacency, laplacian_matrix, spectral_radius

logger = logging.getLogger(__name__)

GraphLike = Union[Graph, np.ndarray, "sp.spmatrix"]


def center_rows(X: np.ndarray) -> np.ndarray:
    """Subtract the mean of each row from that row."""
    X = np.atleast_2d(np.asarray(X, dtype=np.float64))
    return X - X.mean(axis=1, keepdims=True)


def _dense_laplacian(W: GraphLike) -> np.ndarray:
    if isinstance(W, Graph):
        L = laplacian_matrix(W)
    else:
        L = laplacian_from_adjacency(W, kind="combinatorial")
    return L.toarray()


def glpca_matrix(
    X_centered: np.ndarray,
    L: np.ndarray,
    beta: float,
    *,
    lambda_n: Optional[float] = None,
    xi_n: Optional[float] = None,
    eps: float = 1e-12,
) -> np.ndarray:
    """Build the normalised gLPCA matrix ``G_beta``.

    Args:
        X_centered: row-centred data, shape (p, n).
        L: dense Laplacian, shape (n, n).
        beta: trade-off in [0, 1].
        lambda_n: largest eigenvalue of X~^T X~ (computed if None).
        xi_n: largest eigenvalue of L (computed if None).
        eps: normalisers at or below this value are rejected.
    """
    if not 0.0 <= beta <= 1.0:
        raise ValueError(f"beta must lie in [0, 1], got {beta}")

    n = X_centered.shape[1]
    if L.shape != (n, n):
        raise ValueError(f"Laplacian shape {L.shape} does not match n={n} samples")

    XtX = X_centered.T @ X_centered
    G = np.zeros((n, n), dtype=np.float64)

    if beta < 1.0:
        lambda_n = spectral_radius(XtX) if lambda_n is None else lambda_n
        if lambda_n <= eps:
            raise ValueError("X has no variance after centring (lambda_n = 0)")
        G += (1.0 - beta) * (np.eye(n) - XtX / lambda_n)

    if beta > 0.0:
        xi_n = spectral_radius(L) if xi_n is None else xi_n
        if xi_n <= eps:
            raise ValueError("Graph Laplacian is zero (xi_n = 0); W has no edges")
        G += beta * L / xi_n

    # Symmetrise away round-off so eigh sees an exactly symmetric matrix.
    return 0.5 * (G + G.T)


@dataclass(frozen=True)
class GLPCAResult:
    """Closed-form gLPCA solution and derived quantities."""

    Q: np.ndarray
    U: np.ndarray
    X_centered: np.ndarray
    laplacian: np.ndarray
    G_beta: np.ndarray
    eigenvalues: np.ndarray
    lambda_n: float
    xi_n: float
    beta: float

    @property
    def n_components(self) -> int:
        return int(self.Q.shape[1])

    @property
    def alpha(self) -> float:
        """Unnormalised trade-off weight (``inf`` at beta = 1)."""
        if self.beta >= 1.0:
            return float("inf")
        if self.beta == 0.0:
            # No graph term; xi_n may be zero for an edgeless W.
            return 0.0
        return self.lambda_n * self.beta / (self.xi_n * (1.0 - self.beta))

    def projection(self) -> np.ndarray:
        """Data in R^k: ``U^T X~ = Q^T X~^T X~``, shape (k, n)."""
        return self.U.T @ self.X_centered

    def reconstruction(self) -> np.ndarray:
        """Reconstruction in R^p: ``X~ Q Q^T``, shape (p, n)."""
        return self.U @ self.Q.T

    def reconstruction_error(self) -> float:
        """``||X~ - X~ Q Q^T||_F / ||X~||_F`` (always in [0, 1])."""
        norm = np.linalg.norm(self.X_centered)
        if norm == 0:
            return 0.0
        return float(np.linalg.norm(self.X_centered - self.reconstruction()) / norm)

    def objective(self) -> float:
        """``||X~ - X~ Q Q^T||_F^2 + alpha Tr(Q^T L Q)``; undefined at beta = 1."""
        if self.beta >= 1.0:
            raise ValueError("The unnormalised objective is undefined at beta = 1")
        resid = np.linalg.norm(self.X_centered - self.reconstruction()) ** 2
        return float(resid + self.alpha * np.trace(self.Q.T @ self.laplacian @ self.Q))


@dataclass(frozen=True)
class GLPCA:
    """Graph-Laplacian PCA estimator.

    Args:
        n_components: embedding dimension k.
        beta: trade-off between PCA (0) and Laplacian embedding (1).
        skip: number of smallest eigenvectors of G_beta to skip before taking
            k (the walkthrough uses ``skip=1``).
    """

    n_components: int = 2
    beta: float = 0.5
    skip: int = 0

    def fit(self, X: np.ndarray, W: GraphLike) -> GLPCAResult:
        """Solve gLPCA for data ``X`` (p x n) and similarity ``W`` (n x n or Graph)."""
        X_centered = center_rows(X)
        n = X_centered.shape[1]

        L = _dense_laplacian(W)
        if L.shape != (n, n):
            raise ValueError(f"W describes {L.shape[0]} nodes but X has n={n} samples (columns)")

        k, skip = int(self.n_components), int(self.skip)
        if skip < 0:
            raise ValueError(f"skip must be non-negative, got {skip}")
        if not 1 <= k <= n - skip:
            raise ValueError(f"n_components must lie in [1, {n - skip}], got {k}")

        XtX = X_centered.T @ X_centered
        lambda_n = spectral_radius(XtX)
        xi_n = spectral_radius(L)
        logger.debug("gLPCA normalisers: lambda_n=%.6g, xi_n=%.6g, beta=%.3g", lambda_n, xi_n, self.beta)

        G = glpca_matrix(X_centered, L, self.beta, lambda_n=lambda_n, xi_n=xi_n)
        values, vectors = np.linalg.eigh(G)
        order = np.argsort(values, kind="stable")
        values, vectors = values[order], vectors[:, order]

        Q = vectors[:, skip : skip + k]
        U = X_centered @ Q
        logger.debug("gLPCA eigenvalues used: %s", values[skip : skip + k])

        return GLPCAResult(
            Q=Q,
            U=U,
            X_centered=X_centered,
            laplacian=L,
            G_beta=G,
            eigenvalues=values,
            lambda_n=float(lambda_n),
            xi_n=float(xi_n),
            beta=float(self.beta),
        )
