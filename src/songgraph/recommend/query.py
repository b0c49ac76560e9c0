"""
Top-K similarity queries over a SimilarityGraph.
"""

from __future__ import annotations
import math
from typing import Any, List, NamedTuple, Optional, Protocol, Tuple

from songgraph.catalog.song import Song
from songgraph.graph.similarity_graph import SimilarityGraph


class Recommendation(NamedTuple):
    song_id: str
    distance: float


class SongLookup(Protocol):
    def find(self, song_id: Any) -> Optional[Song]: ...


class RecommendationQuery:
    """Runs Dijkstra from a seed and returns its K nearest vertices."""

    def __init__(self, graph: SimilarityGraph):
        self.graph = graph

    def top_k(self, seed: str, k: int) -> List[Recommendation]:
        """
        The ``k`` vertices closest to ``seed``, nearest first.

        Unreachable vertices and the seed itself are never returned. An
        unknown seed or a non-positive ``k`` yields an empty list.

        Args:
            seed: Seed song id
            k: Maximum number of results

        Returns:
            Recommendations sorted by (distance, song id)
        """
        if k <= 0 or seed not in self.graph:
            return []

        dist = self.graph.shortest_paths(seed)
        reachable = [
            Recommendation(v, d) for v, d in dist.items()
            if v != seed and d != math.inf
        ]
        reachable.sort(key=lambda r: (r.distance, r.song_id))
        return reachable[:k]

    @staticmethod
    def resolve(recommendations: List[Recommendation], catalog: SongLookup) -> List[Tuple[Song, float]]:
        """Pair each recommendation with its catalog record, skipping unknown ids."""
        out = []
        for rec in recommendations:
            song = catalog.find(rec.song_id)
            if song is not None:
                out.append((song, rec.distance))
        return out
