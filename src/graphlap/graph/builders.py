"""Simple undirected graphs.

GraphLap keeps its graph type deliberately small: a node count plus an edge
array. Everything downstream (adjacency, incidence, Laplacian) is derived from
these two fields.

Edge convention:
    edges.shape == (m, 2), every row (i, j) has i < j, rows are unique and
    sorted lexicographically.

The row order is the edge order, i.e. the column order of the incidence
matrix. Treating each undirected edge as directed from the lower to the higher
node index gives the sign convention used by
:func:`graphlap.graph.matrices.incidence_matrix`.

The standard generators (path, cycle, star, grid) are delegated to
``networkx`` and converted with :func:`from_networkx`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

EdgeLike = Union[np.ndarray, Sequence[Tuple[int, int]]]


def _require_networkx():
    try:
        import networkx as nx  # type: ignore
    except Exception as e:
        raise ImportError(
            "networkx is required for graph generators and conversion. "
            "Install with `pip install graphlap[nx]`."
        ) from e
    return nx


def _canonical_edges(n_nodes: int, edges: EdgeLike) -> np.ndarray:
    arr = np.asarray(edges, dtype=np.int64)
    if arr.size == 0:
        return np.zeros((0, 2), dtype=np.int64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"edges must have shape (m, 2), got shape={arr.shape}")

    if arr.min() < 0 or arr.max() >= n_nodes:
        raise ValueError(
            f"edge endpoints must lie in [0, {n_nodes}), got range [{arr.min()}, {arr.max()}]"
        )

    loops = arr[:, 0] == arr[:, 1]
    if loops.any():
        node = int(arr[loops][0, 0])
        raise ValueError(f"self-loops are not allowed in a simple graph (node {node})")

    arr = np.sort(arr, axis=1)
    # np.unique on rows also sorts them lexicographically.
    return np.unique(arr, axis=0)


@dataclass(frozen=True, eq=False)
class Graph:
    """A simple undirected graph on nodes ``0..n_nodes-1``."""

    n_nodes: int
    edges: np.ndarray

    def __post_init__(self) -> None:
        if self.n_nodes < 0:
            raise ValueError(f"n_nodes must be non-negative, got {self.n_nodes}")
        object.__setattr__(self, "n_nodes", int(self.n_nodes))
        object.__setattr__(self, "edges", _canonical_edges(self.n_nodes, self.edges))

    @classmethod
    def from_edges(cls, n_nodes: int, edges: EdgeLike) -> "Graph":
        return cls(n_nodes=n_nodes, edges=np.asarray(edges, dtype=np.int64))

    @property
    def n_edges(self) -> int:
        return int(self.edges.shape[0])

    def degrees(self) -> np.ndarray:
        """Return the degree of every node as an int64 vector."""
        return np.bincount(self.edges.reshape(-1), minlength=self.n_nodes).astype(np.int64)

    def neighbors(self, v: int) -> np.ndarray:
        """Return the sorted neighbours of node ``v``."""
        if not 0 <= v < self.n_nodes:
            raise ValueError(f"node {v} out of range for a graph with {self.n_nodes} nodes")
        left = self.edges[self.edges[:, 0] == v, 1]
        right = self.edges[self.edges[:, 1] == v, 0]
        return np.sort(np.concatenate([left, right]))

    def add_edges(self, edges: EdgeLike) -> "Graph":
        """Return a new graph with ``edges`` added (duplicates are ignored)."""
        extra = np.asarray(edges, dtype=np.int64).reshape(-1, 2)
        return Graph(self.n_nodes, np.concatenate([self.edges, extra], axis=0))

    def to_networkx(self):
        nx = _require_networkx()
        G = nx.Graph()
        G.add_nodes_from(range(self.n_nodes))
        G.add_edges_from(map(tuple, self.edges.tolist()))
        return G


def from_networkx(G, *, nodelist: Optional[Iterable] = None) -> Graph:
    """Convert a ``networkx`` graph into a :class:`Graph`.

    Args:
        G: an undirected networkx graph. Self-loops are rejected.
        nodelist: node order defining the integer labels. Defaults to the
            iteration order of ``G.nodes``.
    """
    nodes = list(G.nodes if nodelist is None else nodelist)
    index = {node: i for i, node in enumerate(nodes)}
    edges = [(index[u], index[v]) for u, v in G.edges()]
    return Graph(len(nodes), np.asarray(edges, dtype=np.int64).reshape(-1, 2))


def empty_graph(n: int) -> Graph:
    return Graph(n, np.zeros((0, 2), dtype=np.int64))


def path_graph(n: int) -> Graph:
    nx = _require_networkx()
    return from_networkx(nx.path_graph(n))


def cycle_graph(n: int) -> Graph:
    if n < 3:
        raise ValueError(f"a simple cycle needs at least 3 nodes, got {n}")
    nx = _require_networkx()
    return from_networkx(nx.cycle_graph(n))


def star_graph(n: int) -> Graph:
    """Star on ``n`` nodes in total, with node 0 at the centre."""
    if n <= 0:
        raise ValueError(f"n must be positive, got {n}")
    nx = _require_networkx()
    # networkx counts leaves, not nodes.
    return from_networkx(nx.star_graph(n - 1))


def grid_graph(rows: int, cols: Optional[int] = None) -> Graph:
    """4-neighbour lattice; node ``(r, c)`` gets index ``r * cols + c``."""
    cols = rows if cols is None else cols
    if rows <= 0 or cols <= 0:
        raise ValueError(f"grid dimensions must be positive, got ({rows}, {cols})")
    nx = _require_networkx()
    G = nx.grid_2d_graph(rows, cols)
    return from_networkx(G, nodelist=sorted(G.nodes))


def disjoint_union(*graphs: Graph) -> Graph:
    """Block-diagonal union; nodes of each graph are shifted by an offset."""
    offset = 0
    blocks = []
    for g in graphs:
        blocks.append(g.edges + offset)
        offset += g.n_nodes
    edges = np.concatenate(blocks, axis=0) if blocks else np.zeros((0, 2), dtype=np.int64)
    return Graph(offset, edges)


def join(g: Graph, h: Graph) -> Graph:
    """Disjoint union of ``g`` and ``h`` plus every edge between them."""
    union = disjoint_union(g, h)
    left = np.arange(g.n_nodes, dtype=np.int64)
    right = np.arange(g.n_nodes, g.n_nodes + h.n_nodes, dtype=np.int64)
    ii, jj = np.meshgrid(left, right, indexing="ij")
    cross = np.stack([ii.ravel(), jj.ravel()], axis=1)
    return union.add_edges(cross)


def example_graph() -> Graph:
    """The 4-node, 5-edge graph used to introduce the graph matrices."""
    return Graph.from_edges(4, [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3)])


def clustered_example_graph() -> Graph:
    """Three loosely-bridged clusters (22 nodes) for spectral clustering.

    Cluster 1 (nodes 0-7):   two isolated nodes joined to a 6-cycle.
    Cluster 2 (nodes 8-14):  a 5-node star joined to a 2-node path.
    Cluster 3 (nodes 15-21): same as cluster 2.

    Bridges: 7-8, 14-15 and 0-16.
    """
    wheel = join(empty_graph(2), cycle_graph(6))
    star_path = join(star_graph(5), path_graph(2))
    H = disjoint_union(wheel, star_path, star_path)
    return H.add_edges([(7, 8), (14, 15), (0, 16)])
