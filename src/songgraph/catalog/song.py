from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Song:
    """
    A catalog entry.

    Only ``genre``, ``artist`` and ``year`` feed the similarity heuristic;
    the graph itself stores nothing but ``id``.
    """

    id: str
    title: str
    artist: Optional[str]
    genre: Optional[str]
    year: int
    duration_seconds: int = 0

    def formatted_duration(self) -> str:
        """Duration as ``M:SS``."""
        minutes, seconds = divmod(self.duration_seconds, 60)
        return f"{minutes}:{seconds:02d}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self):
        return f"{self.title} by {self.artist} ({self.genre}, {self.year})"
