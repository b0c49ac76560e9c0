"""
Weighted undirected similarity graph over song ids, using NetworkX.

Each edge carries a ``weight`` attribute holding the distance between its two
songs (lower = more similar). NetworkX keeps both adjacency entries of an
undirected edge in sync, so every write and removal is symmetric.

Dijkstra is implemented here rather than delegated to NetworkX so that ties
between equal tentative distances resolve by vertex id, which keeps results
reproducible.
"""

from __future__ import annotations
import heapq
import math
from typing import Any, Dict, List, Optional, Tuple

import networkx as nx
from loguru import logger

MIN_DISTANCE = 0.05


def _check_id(vertex_id: object):
    # ties in Dijkstra and top_k compare ids, so they must share one type
    if not isinstance(vertex_id, str):
        raise TypeError(f"song ids must be str, got {type(vertex_id).__name__}")


class SimilarityGraph:
    """
    Undirected weighted graph keyed by song id.

    Invariants:
    - no vertex is connected to itself
    - re-connecting a pair overwrites the previous distance
    - every distance is at least ``min_distance``

    Not thread-safe; see ``RecommendationEngine`` for the locking wrapper.
    """

    def __init__(self, min_distance: float = MIN_DISTANCE):
        """
        Initialize an empty graph.

        Args:
            min_distance: Floor applied to every edge weight; must be positive
        """
        if min_distance <= 0:
            raise ValueError("min_distance must be positive")
        self.min_distance = min_distance
        self.graph = nx.Graph()

    def add_vertex(self, vertex_id: str):
        """Add a vertex if it is not already present."""
        _check_id(vertex_id)
        if vertex_id not in self.graph:
            self.graph.add_node(vertex_id)

    def remove_vertex(self, vertex_id: str) -> bool:
        """
        Remove a vertex together with all of its incident edges.

        Returns:
            True if the vertex existed
        """
        if vertex_id not in self.graph:
            return False
        self.graph.remove_node(vertex_id)
        return True

    def connect(self, u: str, v: str, distance: float):
        """
        Connect ``u`` and ``v`` with ``distance``.

        Self-loops are ignored. Missing vertices are created. The distance is
        clamped up to ``min_distance``.
        """
        if u == v:
            return
        _check_id(u)
        _check_id(v)
        self.graph.add_edge(u, v, weight=max(float(distance), self.min_distance))

    def disconnect(self, u: str, v: str) -> bool:
        if not self.graph.has_edge(u, v):
            return False
        self.graph.remove_edge(u, v)
        return True

    def distance(self, u: str, v: str) -> Optional[float]:
        """Direct edge distance between ``u`` and ``v``, or None if not connected."""
        if not self.graph.has_edge(u, v):
            return None
        return self.graph[u][v]["weight"]

    def neighbors(self, vertex_id: str, limit: Optional[int] = None) -> List[Tuple[str, float]]:
        """
        Direct neighbors of a vertex, closest first.

        Args:
            vertex_id: The vertex
            limit: Maximum neighbors to return (None for all)

        Returns:
            List of (neighbor, distance) pairs
        """
        if vertex_id not in self.graph:
            return []

        pairs = [(n, data["weight"]) for n, data in self.graph[vertex_id].items()]
        pairs.sort(key=lambda p: (p[1], p[0]))
        return pairs if limit is None else pairs[:limit]

    def degree(self, vertex_id: str) -> int:
        if vertex_id not in self.graph:
            return 0
        return self.graph.degree(vertex_id)

    def vertices(self) -> List[str]:
        return list(self.graph.nodes())

    def edge_count(self) -> int:
        return self.graph.number_of_edges()

    def clear(self):
        self.graph.clear()

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self.graph

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def shortest_paths(self, source: str) -> Dict[str, float]:
        """
        Single-source shortest path distances (Dijkstra).

        Args:
            source: Start vertex

        Returns:
            Mapping of every vertex to its minimum accumulated distance from
            ``source``. Unreachable vertices map to ``inf``; if ``source`` is
            unknown, every vertex does.
        """
        dist = {v: math.inf for v in self.graph.nodes()}
        if source not in self.graph:
            return dist

        dist[source] = 0.0
        visited = set()
        heap = [(0.0, source)]

        while heap:
            d, u = heapq.heappop(heap)
            if u in visited:
                continue
            visited.add(u)

            for v, data in self.graph[u].items():
                if v in visited:
                    continue
                alt = d + data["weight"]
                if alt < dist[v]:
                    dist[v] = alt
                    heapq.heappush(heap, (alt, v))

        return dist

    def get_graph_stats(self) -> Dict[str, Any]:
        """Get statistics about the graph."""
        num_nodes = self.graph.number_of_nodes()
        if num_nodes == 0:
            return {
                "nodes": 0,
                "edges": 0,
                "density": 0.0,
                "avg_degree": 0.0,
                "hub": None,
                "hub_degree": 0,
                "avg_distance": None,
                "connected_components": 0,
            }

        degrees = dict(self.graph.degree())
        hub = min(degrees, key=lambda n: (-degrees[n], n))
        weights = [data["weight"] for _, _, data in self.graph.edges(data=True)]

        stats = {
            "nodes": num_nodes,
            "edges": self.graph.number_of_edges(),
            "density": nx.density(self.graph),
            "avg_degree": sum(degrees.values()) / num_nodes,
            "hub": hub,
            "hub_degree": degrees[hub],
            "avg_distance": sum(weights) / len(weights) if weights else None,
            "connected_components": nx.number_connected_components(self.graph),
        }

        logger.debug(f"Graph stats: {stats['nodes']} nodes, {stats['edges']} edges")
        return stats
