import logging

import numpy as np
import pytest

from graphlap.graph.builders import Graph
from graphlap.graph.matrices import laplacian_matrix
from graphlap.graph.spectral import (
    algebraic_connectivity,
    fiedler_vector,
    laplacian_eigen,
    spectral_bipartition,
)


def _path(n):
    return Graph.from_edges(n, [(i, i + 1) for i in range(n - 1)])


def _two_cliques(size=4):
    # two K_size blocks bridged by a single edge
    edges = []
    for offset in (0, size):
        edges += [(offset + i, offset + j) for i in range(size) for j in range(i + 1, size)]
    edges.append((size - 1, size))
    return Graph.from_edges(2 * size, edges)


def test_laplacian_eigen_null_space_is_constant():
    eig = laplacian_eigen(laplacian_matrix(_path(6)))
    assert np.all(np.diff(eig.values) >= 0)
    assert eig.values[0] == pytest.approx(0.0, abs=1e-10)

    phi1 = eig.vectors[:, 0]
    assert np.allclose(np.abs(phi1), 1.0 / np.sqrt(6))


def test_algebraic_connectivity_of_path():
    n = 7
    expected = 2.0 - 2.0 * np.cos(np.pi / n)
    assert algebraic_connectivity(laplacian_matrix(_path(n))) == pytest.approx(expected)


def test_fiedler_vector_sign_convention():
    psi2 = fiedler_vector(laplacian_matrix(_path(5)))
    assert psi2[np.argmax(np.abs(psi2))] > 0
    assert np.linalg.norm(psi2) == pytest.approx(1.0)
    # orthogonal to the constant vector
    assert psi2.sum() == pytest.approx(0.0, abs=1e-10)


def test_bipartition_separates_cliques():
    parts = spectral_bipartition(laplacian_matrix(_two_cliques()))
    assert set(parts.tolist()) == {-1, 1}
    assert len(set(parts[:4].tolist())) == 1
    assert len(set(parts[4:].tolist())) == 1
    assert parts[0] != parts[4]


def test_disconnected_graph_warns(caplog):
    g = Graph.from_edges(4, [(0, 1), (2, 3)])
    with caplog.at_level(logging.WARNING, logger="graphlap.graph.spectral"):
        psi2 = fiedler_vector(laplacian_matrix(g))
    assert psi2.shape == (4,)
    assert "disconnected" in caplog.text


def test_too_small_graph_raises():
    single = laplacian_matrix(Graph.from_edges(1, []))
    with pytest.raises(ValueError):
        fiedler_vector(single)
    with pytest.raises(ValueError):
        algebraic_connectivity(single)


def test_clustered_example_partition():
    pytest.importorskip("networkx")

    from graphlap.graph.builders import clustered_example_graph

    H = clustered_example_graph()
    parts = spectral_bipartition(laplacian_matrix(H))
    assert parts.shape == (H.n_nodes,)
    assert set(parts.tolist()) == {-1, 1}
