from __future__ import annotations

import numpy as np
import pytest

from graphlap.graph.builders import Graph
from graphlap.graph.matrices import adjacency_matrix
from graphlap.pca.glpca import GLPCA, center_rows, glpca_matrix


def _cycle(n):
    return Graph.from_edges(n, [(i, (i + 1) % n) for i in range(n)])


@pytest.fixture
def data():
    rng = np.random.default_rng(0)
    X = rng.standard_normal((3, 12)) + np.array([[1.0], [5.0], [-2.0]])
    return X, _cycle(12)


def test_center_rows():
    X = np.array([[1.0, 2.0, 3.0], [10.0, 10.0, 40.0]])
    Xc = center_rows(X)
    assert np.allclose(Xc.mean(axis=1), 0.0)
    assert np.allclose(Xc[0], [-1.0, 0.0, 1.0])
    # 1D input is treated as a single row
    assert center_rows(np.array([1.0, 3.0])).shape == (1, 2)


@pytest.mark.parametrize("beta", [0.0, 0.25, 0.5, 0.75, 1.0])
def test_embedding_is_orthonormal_and_error_bounded(data, beta):
    X, W = data
    res = GLPCA(n_components=2, beta=beta).fit(X, W)

    assert res.Q.shape == (12, 2)
    assert res.U.shape == (3, 2)
    assert np.allclose(res.Q.T @ res.Q, np.eye(2), atol=1e-10)

    err = res.reconstruction_error()
    assert 0.0 <= err <= 1.0 + 1e-12

    # Q minimises Tr(Q^T G Q): the sum of the k smallest eigenvalues.
    assert np.trace(res.Q.T @ res.G_beta @ res.Q) == pytest.approx(res.eigenvalues[:2].sum())


def test_beta_zero_is_pca(data):
    X, W = data
    res = GLPCA(n_components=3, beta=0.0).fit(X, W)
    # X~ has rank 3, so three components reconstruct it exactly.
    assert res.reconstruction_error() < 1e-8


def test_beta_one_is_laplacian_embedding(data):
    X, W = data
    res = GLPCA(n_components=1, beta=1.0).fit(X, W)
    # smallest Laplacian eigenvector of a connected graph is constant
    assert np.allclose(np.abs(res.Q[:, 0]), 1.0 / np.sqrt(12))
    assert res.alpha == float("inf")
    with pytest.raises(ValueError):
        res.objective()


def test_normalised_and_unnormalised_forms_agree(data):
    X, W = data
    beta = 0.5
    res = GLPCA(n_components=2, beta=beta).fit(X, W)

    XtX = res.X_centered.T @ res.X_centered
    G_alpha = res.alpha * res.laplacian - XtX
    expected = (1.0 - beta) * np.eye(12) + (1.0 - beta) / res.lambda_n * G_alpha
    assert np.allclose(res.G_beta, expected)

    # J = ||X~||^2 + Tr(Q^T G_alpha Q)
    J = np.linalg.norm(res.X_centered) ** 2 + np.trace(res.Q.T @ G_alpha @ res.Q)
    assert res.objective() == pytest.approx(J)


def test_projection_and_reconstruction_shapes(data):
    X, W = data
    res = GLPCA(n_components=2, beta=0.3).fit(X, W)

    X_hat = res.projection()
    assert X_hat.shape == (2, 12)
    assert np.allclose(X_hat, res.Q.T @ res.X_centered.T @ res.X_centered)
    assert res.reconstruction().shape == (3, 12)


def test_dense_similarity_matches_graph(data):
    X, W = data
    from_graph = GLPCA(n_components=2, beta=0.5).fit(X, W)
    from_dense = GLPCA(n_components=2, beta=0.5).fit(X, adjacency_matrix(W).toarray())
    assert np.allclose(from_graph.G_beta, from_dense.G_beta)


def test_sparse_similarity_matches_graph(data):
    sp = pytest.importorskip("scipy.sparse")
    X, W = data
    from_graph = GLPCA(n_components=2, beta=0.5).fit(X, W)
    from_sparse = GLPCA(n_components=2, beta=0.5).fit(X, sp.csr_matrix(adjacency_matrix(W)))
    assert np.allclose(from_graph.G_beta, from_sparse.G_beta)
    assert np.isclose(from_graph.xi_n, from_sparse.xi_n)


def test_beta_zero_accepts_edgeless_graph(data):
    X, _ = data
    res = GLPCA(n_components=2, beta=0.0).fit(X, Graph.from_edges(12, []))
    assert res.xi_n == 0.0
    assert res.alpha == 0.0

    resid = np.linalg.norm(res.X_centered - res.reconstruction()) ** 2
    assert np.isclose(res.objective(), resid)


def test_skip_drops_leading_eigenvectors(data):
    X, W = data
    full = GLPCA(n_components=3, beta=0.5).fit(X, W)
    skipped = GLPCA(n_components=2, beta=0.5, skip=1).fit(X, W)
    # Projectors agree up to eigenvector sign.
    P_full = full.Q[:, 1:] @ full.Q[:, 1:].T
    P_skip = skipped.Q @ skipped.Q.T
    assert np.allclose(P_full, P_skip, atol=1e-8)


def test_validation_errors(data):
    X, W = data
    with pytest.raises(ValueError):
        GLPCA(beta=1.5).fit(X, W)
    with pytest.raises(ValueError):
        GLPCA(n_components=0).fit(X, W)
    with pytest.raises(ValueError):
        GLPCA(n_components=12, skip=1).fit(X, W)
    with pytest.raises(ValueError):
        GLPCA(skip=-1).fit(X, W)
    with pytest.raises(ValueError):
        GLPCA().fit(X[:, :10], W)
    with pytest.raises(ValueError):
        GLPCA(beta=0.5).fit(np.ones((2, 12)), W)
    with pytest.raises(ValueError):
        GLPCA(beta=0.5).fit(X, Graph.from_edges(12, []))

    # A constant data matrix is fine when only the graph term is used.
    res = GLPCA(beta=1.0).fit(np.ones((2, 12)), W)
    assert res.reconstruction_error() == 0.0


def test_glpca_matrix_rejects_mismatched_laplacian(data):
    X, _ = data
    with pytest.raises(ValueError):
        glpca_matrix(center_rows(X), np.eye(5), 0.5)


def test_grid_walkthrough_error_is_bounded():
    pytest.importorskip("networkx")

    import functools

    from graphlap.calculus import gaussian_well, grid_coordinates, sample_on_graph
    from graphlap.graph import grid_graph

    axis = np.linspace(-1.0, 1.0, 5)
    X = sample_on_graph(functools.partial(gaussian_well, sigma=0.1), grid_coordinates(axis))[None, :]
    res = GLPCA(n_components=2, beta=0.5, skip=1).fit(X, grid_graph(5))

    assert res.projection().shape == (2, 25)
    assert 0.0 <= res.reconstruction_error() <= 1.0
