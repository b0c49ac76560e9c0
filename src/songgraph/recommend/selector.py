"""
Adaptive "what plays next" policy for continuous playback.

Each call to ``advance`` prefers a song from the similarity neighbourhood of
the current one, skipping anything in a bounded recently-played history, and
falls back to uniform random picks when the graph offers nothing fresh. When
a pool runs dry the history is cut back to just the current song, so the
selector always produces a track while still never repeating the one that
just played (unless the catalog holds a single song).
"""

from __future__ import annotations
import random
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Protocol

from loguru import logger

from songgraph.catalog.song import Song
from songgraph.errors import NoTrackAvailable

HISTORY_SIZE = 20
SIMILAR_POOL_SIZE = 10


class TopKSource(Protocol):
    def top_k(self, seed: str, k: int) -> list: ...


class AdaptiveSelector:
    """
    One playback session.

    Owned by a single caller: ``advance`` reads the history, queries the
    graph and then mutates the history, with no locking of its own.
    """

    def __init__(self, query: TopKSource, rng: Optional[random.Random] = None,
                 history_size: int = HISTORY_SIZE,
                 similar_pool_size: int = SIMILAR_POOL_SIZE):
        """
        Initialize a session.

        Args:
            query: Anything with ``top_k(seed, k)`` returning objects with a
                ``song_id`` attribute (``RecommendationQuery`` or the engine)
            rng: Random source for every random pick; seed it for
                reproducible sessions
            history_size: Recently-played songs to avoid
            similar_pool_size: How many nearest songs to consider
        """
        if history_size < 1:
            raise ValueError("history_size must be at least 1")
        self.query = query
        self.rng = rng or random.Random()
        self.history_size = history_size
        self.similar_pool_size = similar_pool_size

        self._songs: Dict[str, Song] = {}
        self._snapshot: List[str] = []
        self._history: "OrderedDict[str, None]" = OrderedDict()
        self._current: Optional[str] = None

    def start(self, catalog: Iterable[Song]):
        """Take a snapshot of the catalog and begin a fresh session."""
        self._songs = {song.id: song for song in catalog}
        self._snapshot = list(self._songs)
        self.reset()
        logger.info(f"Playback session started with {len(self._snapshot)} songs")

    def reset(self):
        """Forget the current song and the playback history."""
        self._current = None
        self._history.clear()

    @property
    def current_track(self) -> Optional[Song]:
        if self._current is None:
            return None
        return self._songs[self._current]

    @property
    def recently_played(self) -> List[str]:
        """History ids, oldest first."""
        return list(self._history)

    def advance(self) -> Song:
        """
        Choose, remember and return the next song.

        Raises:
            NoTrackAvailable: If the session's catalog snapshot is empty.
        """
        if not self._snapshot:
            raise NoTrackAvailable("no songs in the playback catalog")

        if self._current is None:
            choice = self.rng.choice(self._snapshot)
        else:
            self._remember(self._current)
            choice = self._pick_similar()
            if choice is None:
                choice = self._pick_random()

        self._current = choice
        return self._songs[choice]

    def _remember(self, song_id: str):
        self._history[song_id] = None
        self._history.move_to_end(song_id)
        while len(self._history) > self.history_size:
            self._history.popitem(last=False)

    def _shrink_history(self):
        self._history.clear()
        self._history[self._current] = None

    def _similar_pool(self) -> List[str]:
        # ids outside the snapshot can linger in a shared graph, so widen the
        # query until the pool is full of snapshot songs or the graph runs out
        k = self.similar_pool_size
        while True:
            recs = self.query.top_k(self._current, k)
            similar = [rec.song_id for rec in recs if rec.song_id in self._songs]
            if len(similar) >= self.similar_pool_size or len(recs) < k:
                return similar[:self.similar_pool_size]
            k *= 2

    def _pick_similar(self) -> Optional[str]:
        similar = self._similar_pool()
        if not similar:
            return None

        fresh = [s for s in similar if s not in self._history]
        if fresh:
            return self.rng.choice(fresh)

        logger.debug(f"Similar pool of {self._current} exhausted, resetting history")
        self._shrink_history()
        return self.rng.choice(similar)

    def _pick_random(self) -> str:
        candidates = [s for s in self._snapshot if s not in self._history]
        if not candidates:
            logger.debug("Catalog exhausted by history, resetting history")
            self._shrink_history()
            candidates = [s for s in self._snapshot if s not in self._history] or list(self._snapshot)
        return self.rng.choice(candidates)
