"""
Graph data structure and instance parser.

Instance file format:
- Line 1: n (number of vertices, numbered 0 to n-1)
- Line 2: m (number of edges)
- Next m lines: edges as "u v" pairs

Vertices live in an arena addressed by index; adjacency lists hold indices.
Parallel edges are kept, and a self-loop lists the vertex twice in its own
neighbor list.
"""

from pathlib import Path
from typing import Iterable, Optional

import networkx as nx


class Graph:
    """Immutable undirected graph over vertices 0..n-1."""

    def __init__(self, num_vertices: int, edges: Iterable[tuple[int, int]], name: str = "graph"):
        if num_vertices < 0:
            raise ValueError(f"Vertex count must be non-negative, got {num_vertices}")

        self.name = name
        self.num_vertices = num_vertices

        adjacency: list[list[int]] = [[] for _ in range(num_vertices)]
        edge_list: list[tuple[int, int]] = []
        for u, v in edges:
            if not (0 <= u < num_vertices and 0 <= v < num_vertices):
                raise ValueError(f"Invalid vertex in edge ({u}, {v}) for graph with {num_vertices} vertices")
            adjacency[u].append(v)
            adjacency[v].append(u)
            edge_list.append((u, v))

        self._adjacency: tuple[tuple[int, ...], ...] = tuple(tuple(nbrs) for nbrs in adjacency)
        self.edges: tuple[tuple[int, int], ...] = tuple(edge_list)

    @classmethod
    def from_file(cls, filepath: str | Path) -> "Graph":
        """
        Parse a graph instance from a file.

        Args:
            filepath: Path to the instance file

        Returns:
            Graph object

        Raises:
            ValueError: If the file format is invalid
        """
        filepath = Path(filepath)

        with open(filepath, "r") as f:
            lines = [line.strip() for line in f.readlines()]

        # Remove empty lines at the end
        while lines and not lines[-1]:
            lines.pop()

        if len(lines) < 2:
            raise ValueError(f"Invalid instance file: {filepath} - too few lines")

        try:
            n = int(lines[0])  # vertices
            m = int(lines[1])  # edges
        except ValueError as e:
            raise ValueError(f"Invalid header in {filepath}: {e}")

        edges = []
        edge_start = 2
        for i in range(edge_start, edge_start + m):
            if i >= len(lines):
                raise ValueError(f"Missing edge on line {i + 1} in {filepath}")
            parts = lines[i].split()
            if len(parts) < 2:
                raise ValueError(f"Invalid edge format on line {i + 1} in {filepath}")
            try:
                u, v = int(parts[0]), int(parts[1])
            except ValueError:
                raise ValueError(f"Invalid edge format on line {i + 1} in {filepath}")
            if not (0 <= u < n and 0 <= v < n):
                raise ValueError(f"Invalid vertex in edge ({u}, {v}) on line {i + 1} in {filepath}")
            edges.append((u, v))

        return cls(n, edges, name=filepath.stem)

    @classmethod
    def from_networkx(cls, g: nx.Graph, name: Optional[str] = None) -> "Graph":
        """
        Convert a networkx graph.

        Node labels are mapped to indices in the graph's node iteration order.
        Parallel edges of a MultiGraph are preserved.
        """
        index = {node: i for i, node in enumerate(g.nodes())}
        edges = [(index[u], index[v]) for u, v in g.edges()]
        if name is None:
            name = str(g.name) if g.name else "graph"
        return cls(len(index), edges, name=name)

    def to_networkx(self) -> nx.MultiGraph:
        """Convert to a networkx.MultiGraph for ad-hoc experimentation."""
        g = nx.MultiGraph(name=self.name)
        g.add_nodes_from(range(self.num_vertices))
        g.add_edges_from(self.edges)
        return g

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    def vertices(self) -> range:
        return range(self.num_vertices)

    def neighbors(self, vertex: int) -> tuple[int, ...]:
        return self._adjacency[vertex]

    def degree(self, vertex: int) -> int:
        return len(self._adjacency[vertex])

    def max_degree(self) -> int:
        """Largest neighbor-list length (0 for an empty graph)."""
        return max((len(nbrs) for nbrs in self._adjacency), default=0)

    def __len__(self) -> int:
        return self.num_vertices

    def __str__(self) -> str:
        return f"Graph({self.name}: n={self.num_vertices}, m={self.num_edges})"
