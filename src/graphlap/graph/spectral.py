"""Laplacian eigendecomposition and Fiedler-vector clustering.

The Laplacian of a connected graph has a single zero eigenvalue whose
eigenvector is constant (phi_1 = c * 1), which carries no structure. The
eigenvector of the second-smallest eigenvalue, the Fiedler vector, does:
colouring nodes by its sign splits the graph into two weakly-connected parts.

Eigendecompositions here are dense (``numpy.linalg.eigh``); sparse inputs are
densified first.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

import numpy as np
import scipy.sparse as sp

logger = logging.getLogger(__name__)


class Eigen(NamedTuple):
    """Eigenvalues (ascending) and eigenvectors (columns)."""

    values: np.ndarray
    vectors: np.ndarray


def _dense(L) -> np.ndarray:
    M = L.toarray() if sp.issparse(L) else np.asarray(L, dtype=np.float64)
    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        raise ValueError(f"Laplacian must be square, got shape={M.shape}")
    return M


def laplacian_eigen(L) -> Eigen:
    """Dense symmetric eigendecomposition of a Laplacian, sorted ascending."""
    values, vectors = np.linalg.eigh(_dense(L))
    order = np.argsort(values, kind="stable")
    return Eigen(values[order], vectors[:, order])


def algebraic_connectivity(L) -> float:
    """Second-smallest Laplacian eigenvalue (zero iff the graph is disconnected)."""
    M = _dense(L)
    if M.shape[0] < 2:
        raise ValueError(f"Need at least 2 nodes, got {M.shape[0]}")
    return float(np.linalg.eigvalsh(M)[1])


def fiedler_vector(L, *, tol: float = 1e-10) -> np.ndarray:
    """Eigenvector of the second-smallest eigenvalue of ``L``.

    The sign is fixed so that the entry of largest magnitude is positive.
    """
    eig = laplacian_eigen(L)
    if eig.values.shape[0] < 2:
        raise ValueError(f"Need at least 2 nodes, got {eig.values.shape[0]}")

    if eig.values[1] <= tol:
        logger.warning(
            "Second Laplacian eigenvalue is %.3e; the graph is disconnected and the "
            "Fiedler vector is not unique.",
            eig.values[1],
        )

    psi2 = eig.vectors[:, 1].copy()
    if psi2[np.argmax(np.abs(psi2))] < 0:
        psi2 = -psi2
    return psi2


def spectral_bipartition(L) -> np.ndarray:
    """Split nodes by the sign of the Fiedler vector (+1 / -1)."""
    psi2 = fiedler_vector(L)
    return np.where(psi2 >= 0, 1, -1).astype(np.int64)
