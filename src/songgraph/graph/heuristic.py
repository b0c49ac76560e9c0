"""
Distance heuristics used as similarity-graph edge weights.

Lower distance means more similar. Two models exist:

- ``DistanceHeuristic`` (canonical, ``kind: linear``): start at 1.0, subtract
  for matching artist and genre, add a capped penalty for the release-year
  gap, floor the result.
- ``ScoreDistanceHeuristic`` (``kind: score``): accumulate a match score and
  invert it into a distance.

One engine uses exactly one of them for every edge it creates.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Protocol

from songgraph.errors import ConfigError


class SongAttributes(Protocol):
    artist: Optional[str]
    genre: Optional[str]
    year: int


def same_text(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive equality; a missing value never matches."""
    return a is not None and b is not None and a.casefold() == b.casefold()


class DistanceHeuristic:
    """
    Linear penalty model.

    With the default constants the result lies in ``[0.05, 1.4]``: artist
    match -0.5, genre match -0.4, plus ``min(|year gap|, 40) / 100``.
    """

    kind = "linear"

    def __init__(self, base_distance: float = 1.0,
                 artist_match_bonus: float = 0.5,
                 genre_match_bonus: float = 0.4,
                 year_gap_cap: int = 40,
                 year_gap_divisor: float = 100.0,
                 min_distance: float = 0.05):
        self.base_distance = base_distance
        self.artist_match_bonus = artist_match_bonus
        self.genre_match_bonus = genre_match_bonus
        self.year_gap_cap = year_gap_cap
        self.year_gap_divisor = year_gap_divisor
        self.min_distance = min_distance

    def distance(self, a: SongAttributes, b: SongAttributes) -> float:
        d = self.base_distance
        if same_text(a.artist, b.artist):
            d -= self.artist_match_bonus
        if same_text(a.genre, b.genre):
            d -= self.genre_match_bonus
        d += min(abs(a.year - b.year), self.year_gap_cap) / self.year_gap_divisor
        return max(d, self.min_distance)

    __call__ = distance


class ScoreDistanceHeuristic:
    """
    Score-to-distance inversion model.

    Score: artist match +5, genre match +3, year gap <= 2 +2 (else <= 5 +1).
    Distance: ``max(0.5, 10 - score)``.
    """

    kind = "score"

    def __init__(self, artist_match_score: float = 5.0,
                 genre_match_score: float = 3.0,
                 close_year_gap: int = 2,
                 close_year_score: float = 2.0,
                 near_year_gap: int = 5,
                 near_year_score: float = 1.0,
                 max_score_distance: float = 10.0,
                 min_score_distance: float = 0.5):
        self.artist_match_score = artist_match_score
        self.genre_match_score = genre_match_score
        self.close_year_gap = close_year_gap
        self.close_year_score = close_year_score
        self.near_year_gap = near_year_gap
        self.near_year_score = near_year_score
        self.max_score_distance = max_score_distance
        self.min_score_distance = min_score_distance

    def score(self, a: SongAttributes, b: SongAttributes) -> float:
        score = 0.0
        if same_text(a.artist, b.artist):
            score += self.artist_match_score
        if same_text(a.genre, b.genre):
            score += self.genre_match_score
        gap = abs(a.year - b.year)
        if gap <= self.close_year_gap:
            score += self.close_year_score
        elif gap <= self.near_year_gap:
            score += self.near_year_score
        return score

    def distance(self, a: SongAttributes, b: SongAttributes) -> float:
        return max(self.min_score_distance, self.max_score_distance - self.score(a, b))

    __call__ = distance


_LINEAR_KEYS = ("base_distance", "artist_match_bonus", "genre_match_bonus",
                "year_gap_cap", "year_gap_divisor", "min_distance")
_SCORE_KEYS = ("artist_match_score", "genre_match_score", "close_year_gap",
               "close_year_score", "near_year_gap", "near_year_score",
               "max_score_distance", "min_score_distance")


def heuristic_from_config(cfg: Optional[Dict[str, Any]] = None):
    """
    Build the configured heuristic from the ``heuristic`` config section.

    Raises:
        ConfigError: If ``kind`` is neither ``linear`` nor ``score``.
    """
    section = dict((cfg or {}).get("heuristic") or {})
    kind = section.get("kind", "linear")

    if kind == "linear":
        return DistanceHeuristic(**{k: section[k] for k in _LINEAR_KEYS if k in section})
    if kind == "score":
        return ScoreDistanceHeuristic(**{k: section[k] for k in _SCORE_KEYS if k in section})

    raise ConfigError(f"Unknown heuristic kind: {kind!r} (expected 'linear' or 'score')")
