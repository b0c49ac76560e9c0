"""
SongGraph: song similarity graph and next-track recommendation engine.
"""

from .engine import RecommendationEngine
from .errors import NoTrackAvailable, SongGraphError

__all__ = ["RecommendationEngine", "NoTrackAvailable", "SongGraphError"]
