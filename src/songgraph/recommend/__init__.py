"""
Recommendation module for SongGraph.

This module provides top-K similarity queries and the adaptive next-track
selector used by continuous playback.
"""

from .query import Recommendation, RecommendationQuery
from .selector import AdaptiveSelector

__all__ = ["Recommendation", "RecommendationQuery", "AdaptiveSelector"]
