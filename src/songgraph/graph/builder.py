"""
Builds and maintains a SimilarityGraph from the song catalog.
"""

from __future__ import annotations
import time
from typing import Any, Callable, Dict, Iterable, Optional

from loguru import logger

from songgraph.catalog.song import Song
from songgraph.graph.heuristic import DistanceHeuristic
from songgraph.graph.similarity_graph import SimilarityGraph


class GraphBuilder:
    """
    Keeps a SimilarityGraph consistent with the catalog.

    - ``rebuild_full``: all-pairs rebuild, O(n^2); bootstrap and bulk reindex
    - ``connect_new_item``: link one song to the rest, O(n); create/import/update
    - ``remove_item``: drop a song and its edges, O(degree); delete
    """

    def __init__(self, graph: SimilarityGraph,
                 heuristic: Optional[Callable[[Song, Song], float]] = None):
        """
        Initialize the builder.

        Args:
            graph: Graph to write into
            heuristic: Distance function for edge weights (defaults to the
                linear ``DistanceHeuristic``)
        """
        self.graph = graph
        self.heuristic = heuristic or DistanceHeuristic()

    def rebuild_full(self, catalog: Iterable[Song]) -> Dict[str, Any]:
        """
        Clear the graph and connect every unordered pair of catalog songs.

        Returns:
            Build statistics
        """
        started = time.perf_counter()
        songs = list(catalog)

        self.graph.clear()
        for song in songs:
            self.graph.add_vertex(song.id)

        for i in range(len(songs)):
            a = songs[i]
            for j in range(i + 1, len(songs)):
                b = songs[j]
                self.graph.connect(a.id, b.id, self.heuristic(a, b))

        stats = {
            "nodes": len(self.graph),
            "edges": self.graph.edge_count(),
            "seconds": time.perf_counter() - started,
        }
        logger.success(f"Similarity graph rebuilt: {stats['nodes']} nodes, "
                       f"{stats['edges']} edges in {stats['seconds']:.3f}s")
        return stats

    def connect_new_item(self, song: Song, catalog: Iterable[Song]) -> int:
        """
        Add ``song`` as a vertex and connect it to every other catalog song.

        Existing edges of ``song`` are overwritten with fresh distances, so
        this also refreshes a song whose attributes changed.

        Returns:
            Number of edges written
        """
        self.graph.add_vertex(song.id)

        written = 0
        for other in catalog:
            if other.id == song.id:
                continue
            self.graph.connect(song.id, other.id, self.heuristic(song, other))
            written += 1

        logger.debug(f"Connected song {song.id} to {written} songs")
        return written

    def remove_item(self, song_id: str) -> bool:
        """Remove a song's vertex and every edge touching it."""
        removed = self.graph.remove_vertex(song_id)
        if removed:
            logger.debug(f"Removed song {song_id} from similarity graph")
        return removed
