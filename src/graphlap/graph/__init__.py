"""Graph construction, graph matrices and Laplacian spectra.

- Build small simple graphs (paths, cycles, stars, grids, unions, joins)
- Adjacency, degree, incidence and Laplacian matrices as SciPy CSR matrices
- Laplacians of general (weighted) similarity matrices
- Dense eigendecomposition, Fiedler vector and spectral bipartition
"""

from __future__ import annotations

from .builders import (
    Graph,
    from_networkx,
    empty_graph,
    path_graph,
    cycle_graph,
    star_graph,
    grid_graph,
    disjoint_union,
    join,
    example_graph,
    clustered_example_graph,
)
from .matrices import (
    GraphMatrices,
    adjacency_matrix,
    degree_matrix,
    incidence_matrix,
    laplacian_matrix,
    laplacian_from_adjacency,
    graph_matrices,
    spectral_radius,
)
from .spectral import (
    Eigen,
    laplacian_eigen,
    algebraic_connectivity,
    fiedler_vector,
    spectral_bipartition,
)

__all__ = [
    "Graph",
    "from_networkx",
    "empty_graph",
    "path_graph",
    "cycle_graph",
    "star_graph",
    "grid_graph",
    "disjoint_union",
    "join",
    "example_graph",
    "clustered_example_graph",
    "GraphMatrices",
    "adjacency_matrix",
    "degree_matrix",
    "incidence_matrix",
    "laplacian_matrix",
    "laplacian_from_adjacency",
    "graph_matrices",
    "spectral_radius",
    "Eigen",
    "laplacian_eigen",
    "algebraic_connectivity",
    "fiedler_vector",
    "spectral_bipartition",
]
