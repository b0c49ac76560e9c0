"""
In-memory song catalog.

Durable storage is somebody else's job: this is the lookup surface the
engine consumes (enumerate all songs, find one by id) plus the mutations
the engine mirrors into the similarity graph.
"""

from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Optional

from loguru import logger

from songgraph.catalog.song import Song


class SongCatalog:
    """Insertion-ordered mapping of song id to ``Song``."""

    def __init__(self, songs: Optional[Iterable[Song]] = None):
        self._songs: Dict[str, Song] = {}
        for song in songs or ():
            self._songs[song.id] = song

    def find(self, song_id: Optional[str]) -> Optional[Song]:
        if song_id is None:
            return None
        return self._songs.get(song_id)

    def save(self, song: Song) -> Song:
        """Insert or replace a song, keyed by its id."""
        self._songs[song.id] = song
        logger.debug(f"Saved song {song.id}: {song.title}")
        return song

    def delete(self, song_id: str) -> bool:
        removed = self._songs.pop(song_id, None) is not None
        if removed:
            logger.debug(f"Deleted song {song_id}")
        return removed

    def all(self) -> List[Song]:
        return list(self._songs.values())

    def ids(self) -> List[str]:
        return list(self._songs)

    def __contains__(self, song_id: object) -> bool:
        return song_id in self._songs

    def __iter__(self) -> Iterator[Song]:
        return iter(list(self._songs.values()))

    def __len__(self) -> int:
        return len(self._songs)
