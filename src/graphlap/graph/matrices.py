"""Graph matrices: adjacency, degree, incidence and Laplacian.

For a simple undirected graph G with n nodes and m edges:

- Adjacency:  A[i, j] = 1 if {i, j} is an edge, else 0 (symmetric, zero diagonal)
- Degree:     D = diag(deg(v_0), ..., deg(v_{n-1}))
- Incidence:  B is n x m; column j holds -1 at the lower endpoint of edge j
              and +1 at the higher endpoint
- Laplacian:  L = D - A = B B^T

Note that B here is the transpose of the incidence matrix in Strang's
lectures, so his L = B^T B is our L = B B^T. The sign of each column is
arbitrary for an undirected graph, but must be chosen consistently.

All matrices are returned as SciPy CSR matrices. Use ``.toarray()`` for
printing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

import numpy as np

try:
    import scipy.sparse as sp
    import scipy.sparse.linalg as spla
except Exception as e:  # pragma: no cover
    raise ImportError(
        "scipy is required for graph matrices. Install with `pip install graphlap`."
    ) from e

from .builders import Graph

logger = logging.getLogger(__name__)

LaplacianKind = Literal["combinatorial", "normalized"]
RadiusMethod = Literal["dense", "eigsh", "power"]


def adjacency_matrix(graph: Graph, *, dtype: np.dtype = np.float64) -> "sp.csr_matrix":
    """Return the symmetric 0/1 adjacency matrix of ``graph``."""
    n = graph.n_nodes
    rows = np.concatenate([graph.edges[:, 0], graph.edges[:, 1]])
    cols = np.concatenate([graph.edges[:, 1], graph.edges[:, 0]])
    data = np.ones(rows.shape[0], dtype=dtype)

    A = sp.coo_matrix((data, (rows, cols)), shape=(n, n)).tocsr()
    A.eliminate_zeros()
    return A


def degree_matrix(graph: Graph, *, dtype: np.dtype = np.float64) -> "sp.csr_matrix":
    """Return the diagonal degree matrix of ``graph``."""
    n = graph.n_nodes
    return sp.diags(graph.degrees().astype(dtype), offsets=0, shape=(n, n), format="csr")


def incidence_matrix(
    graph: Graph,
    *,
    oriented: bool = True,
    dtype: np.dtype = np.float64,
) -> "sp.csr_matrix":
    """Return the node-by-edge incidence matrix.

    Args:
        graph: simple undirected graph.
        oriented: if True, edge j is treated as directed from its lower to its
            higher endpoint (-1 / +1). If False, both entries are +1.
        dtype: dtype of the matrix entries.

    Returns:
        B: CSR matrix of shape (n_nodes, n_edges).
    """
    n, m = graph.n_nodes, graph.n_edges
    cols = np.arange(m, dtype=np.int64)

    rows = np.concatenate([graph.edges[:, 0], graph.edges[:, 1]])
    lo = -np.ones(m, dtype=dtype) if oriented else np.ones(m, dtype=dtype)
    data = np.concatenate([lo, np.ones(m, dtype=dtype)])

    return sp.coo_matrix((data, (rows, np.concatenate([cols, cols]))), shape=(n, m)).tocsr()


def laplacian_matrix(graph: Graph, *, dtype: np.dtype = np.float64) -> "sp.csr_matrix":
    """Return the combinatorial Laplacian ``L = D - A``."""
    L = degree_matrix(graph, dtype=dtype) - adjacency_matrix(graph, dtype=dtype)
    return L.tocsr()


def _strip_diagonal(W: "sp.csr_matrix") -> "sp.csr_matrix":
    diag = W.diagonal()
    if not diag.any():
        return W
    W = (W - sp.diags(diag)).tocsr()
    W.eliminate_zeros()
    return W


def _inverse_sqrt(d: np.ndarray, eps: float) -> np.ndarray:
    # Isolated nodes keep a zero row in D^{-1/2}.
    out = np.zeros_like(d)
    mask = d > eps
    out[mask] = d[mask] ** -0.5
    return out


def laplacian_from_adjacency(
    W,
    *,
    kind: LaplacianKind = "combinatorial",
    eps: float = 1e-12,
    force_symmetric: bool = True,
) -> "sp.csr_matrix":
    """Laplacian of a weighted similarity matrix ``W`` (dense or sparse, N x N).

    ``kind='combinatorial'`` gives ``diag(W 1) - W``; ``kind='normalized'``
    gives ``I - D^{-1/2} W D^{-1/2}`` with degrees ``<= eps`` treated as zero.
    The diagonal of ``W`` is ignored. With ``force_symmetric`` the result is
    replaced by ``(L + L^T) / 2``.
    """
    if kind not in ("combinatorial", "normalized"):
        raise ValueError(f"Unknown Laplacian kind {kind!r}")
    rows, cols = W.shape
    if rows != cols:
        raise ValueError(f"Similarity matrix must be square, got shape={W.shape}")

    W = _strip_diagonal(sp.csr_matrix(W, dtype=np.float64))
    degrees = np.asarray(W.sum(axis=1)).ravel()

    if kind == "combinatorial":
        L = sp.diags(degrees, shape=(rows, rows), format="csr") - W
    else:
        scale = sp.diags(_inverse_sqrt(degrees, eps), shape=(rows, rows), format="csr")
        L = sp.identity(rows, format="csr", dtype=np.float64) - scale @ W @ scale

    L = L.tocsr()
    return ((L + L.T) * 0.5).tocsr() if force_symmetric else L


def _power_radius(M, n_iter: int, seed: int) -> float:
    x = np.random.default_rng(seed).standard_normal(M.shape[0])
    x /= np.linalg.norm(x)
    for _ in range(max(1, n_iter)):
        y = M @ x
        norm = np.linalg.norm(y)
        if norm <= 1e-30:
            # x landed in the null space: M is (numerically) zero.
            return 0.0
        x = y / norm
    return float(x @ (M @ x))


def spectral_radius(
    M,
    *,
    method: RadiusMethod = "dense",
    n_iter: int = 100,
    seed: int = 0,
) -> float:
    """Largest eigenvalue of a symmetric positive semidefinite matrix.

    Args:
        M: dense or sparse symmetric matrix.
        method: 'dense' (``numpy.linalg.eigvalsh``), 'eigsh' (ARPACK/Lanczos)
            or 'power' iteration.
        n_iter: power-iteration steps (only for method='power').
        seed: RNG seed for power iteration.

    Notes:
        'eigsh' needs N > 1 and falls back to 'dense' for tiny matrices.
    """
    if M.shape[0] != M.shape[1]:
        raise ValueError(f"Matrix must be square, got shape={M.shape}")

    n = M.shape[0]
    if n == 0:
        raise ValueError("Matrix is empty")

    if method == "eigsh" and n < 3:
        method = "dense"

    if method == "dense":
        dense = M.toarray() if sp.issparse(M) else np.asarray(M, dtype=np.float64)
        return float(np.linalg.eigvalsh(dense)[-1])

    if method == "eigsh":
        vals = spla.eigsh(sp.csr_matrix(M, dtype=np.float64), k=1, which="LA", return_eigenvectors=False)
        return float(np.real(vals[0]))

    if method == "power":
        return _power_radius(M, n_iter, seed)

    raise ValueError(f"Unknown method {method!r}")


@dataclass(frozen=True)
class GraphMatrices:
    """The four standard matrices of a simple graph."""

    adjacency: "sp.csr_matrix"
    degree: "sp.csr_matrix"
    incidence: "sp.csr_matrix"
    laplacian: "sp.csr_matrix"

    def identity_residuals(self) -> Tuple[float, float]:
        """Max |.| of ``L - B B^T`` and of ``L - (D - A)``."""
        if self.laplacian.shape[0] == 0:
            return 0.0, 0.0
        B = self.incidence
        r_incidence = abs(self.laplacian - B @ B.T).max()
        r_degree = abs(self.laplacian - (self.degree - self.adjacency)).max()
        return float(r_incidence), float(r_degree)


def graph_matrices(graph: Graph, *, oriented: bool = True, dtype: Optional[np.dtype] = None) -> GraphMatrices:
    """Build adjacency, degree, incidence and Laplacian matrices of ``graph``."""
    dtype = np.float64 if dtype is None else dtype
    mats = GraphMatrices(
        adjacency=adjacency_matrix(graph, dtype=dtype),
        degree=degree_matrix(graph, dtype=dtype),
        incidence=incidence_matrix(graph, oriented=oriented, dtype=dtype),
        laplacian=laplacian_matrix(graph, dtype=dtype),
    )
    logger.debug("Graph matrices: n=%d, m=%d, nnz(L)=%d", graph.n_nodes, graph.n_edges, mats.laplacian.nnz)
    return mats
