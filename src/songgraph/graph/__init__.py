"""
Graph module for SongGraph.

This module provides the song similarity graph, the distance heuristics that
weight its edges, and the builder that keeps it in sync with the catalog.
"""

from .similarity_graph import SimilarityGraph, MIN_DISTANCE
from .heuristic import DistanceHeuristic, ScoreDistanceHeuristic, heuristic_from_config
from .builder import GraphBuilder

__all__ = [
    "SimilarityGraph",
    "MIN_DISTANCE",
    "DistanceHeuristic",
    "ScoreDistanceHeuristic",
    "heuristic_from_config",
    "GraphBuilder",
]
