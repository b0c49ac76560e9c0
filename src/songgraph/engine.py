"""
Recommendation engine handle.

One ``RecommendationEngine`` is constructed at application start and passed
to whoever needs recommendations. It owns the catalog view, the similarity
graph, its builder and the top-K query, and serialises every graph mutation
and graph read behind a single re-entrant lock.

Catalog mutations go through the engine so the graph follows them: new and
updated songs are connected incrementally, deleted songs are removed from the
graph together with their edges.
"""

from __future__ import annotations
import random
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from songgraph.catalog.importer import import_catalog
from songgraph.catalog.song import Song
from songgraph.catalog.song_catalog import SongCatalog
from songgraph.config import DEFAULT_CONFIG, merge_config
from songgraph.graph.builder import GraphBuilder
from songgraph.graph.heuristic import heuristic_from_config
from songgraph.graph.similarity_graph import SimilarityGraph
from songgraph.recommend.query import Recommendation, RecommendationQuery
from songgraph.recommend.selector import AdaptiveSelector


class RecommendationEngine:
    """Owns one similarity graph and keeps it in sync with a catalog."""

    def __init__(self, catalog: Optional[SongCatalog] = None,
                 config: Optional[Dict[str, Any]] = None):
        """
        Initialize the engine. The graph stays empty until ``bootstrap``.

        Args:
            catalog: Song catalog (a new empty one if omitted)
            config: Configuration dict; missing keys use ``DEFAULT_CONFIG``
        """
        self.config = merge_config(DEFAULT_CONFIG, config or {})
        self.catalog = catalog if catalog is not None else SongCatalog()

        self.graph = SimilarityGraph(min_distance=self.config["graph"]["min_distance"])
        self.heuristic = heuristic_from_config(self.config)
        self.builder = GraphBuilder(self.graph, self.heuristic)
        self.query = RecommendationQuery(self.graph)
        self._lock = threading.RLock()

        logger.debug(f"Engine created with {self.heuristic.kind} heuristic")

    def bootstrap(self) -> Dict[str, Any]:
        """Rebuild the whole graph from the current catalog."""
        with self._lock:
            return self.builder.rebuild_full(self.catalog.all())

    def add_song(self, song: Song) -> Song:
        """Save a song and connect it to the rest of the catalog."""
        with self._lock:
            self.catalog.save(song)
            self.builder.connect_new_item(song, self.catalog.all())
        return song

    def update_song(self, song: Song, previous_id: Optional[str] = None) -> Song:
        """
        Replace a song's record and refresh its edges.

        Args:
            song: The new record
            previous_id: The song's old id, when the update changes it
        """
        with self._lock:
            if previous_id is not None and previous_id != song.id:
                self.catalog.delete(previous_id)
                self.builder.remove_item(previous_id)
            return self.add_song(song)

    def remove_song(self, song_id: str) -> bool:
        """Delete a song from the catalog and prune it from the graph."""
        with self._lock:
            removed = self.catalog.delete(song_id)
            self.builder.remove_item(song_id)
        return removed

    def import_file(self, path: str | Path) -> Dict[str, Any]:
        """Import a catalog file, connecting each new song as it arrives."""
        with self._lock:
            return import_catalog(
                path, self.catalog,
                on_import=lambda song: self.builder.connect_new_item(song, self.catalog.all()),
            )

    def top_k(self, seed: str, k: int) -> List[Recommendation]:
        with self._lock:
            return self.query.top_k(seed, k)

    def recommend(self, seed: Optional[str], k: Optional[int] = None) -> List[Tuple[Song, float]]:
        """
        The ``k`` most similar songs to ``seed`` as (song, distance) pairs.

        Returns an empty list for a missing or unknown seed.
        """
        if seed is None:
            return []
        if k is None:
            k = self.config["recommend"]["default_k"]
        return self.query.resolve(self.top_k(seed, k), self.catalog)

    def new_session(self, rng: Optional[random.Random] = None) -> AdaptiveSelector:
        """Start a playback session over a snapshot of the current catalog."""
        selector_cfg = self.config["selector"]
        session = AdaptiveSelector(
            self, rng=rng,
            history_size=selector_cfg["history_size"],
            similar_pool_size=selector_cfg["similar_pool_size"],
        )
        session.start(self.catalog.all())
        return session

    def graph_stats(self) -> Dict[str, Any]:
        with self._lock:
            return self.graph.get_graph_stats()
