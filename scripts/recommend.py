#!/usr/bin/env python
"""
Print the songs most similar to a seed song.

Usage:
    # Top 5 songs similar to song "1" in the sample catalog
    SEED_ID=1 python scripts/recommend.py

    # Custom catalog and K
    CATALOG_PATH=data/my_catalog.parquet SEED_ID=abc K=10 python scripts/recommend.py
"""

from __future__ import annotations
import os
import sys
from dotenv import load_dotenv
from loguru import logger

from songgraph.config import load_config
from songgraph.engine import RecommendationEngine
from songgraph.errors import SongGraphError


def main():
    """Main entry point for similarity recommendations."""
    load_dotenv()

    seed_id = os.getenv("SEED_ID")
    if not seed_id:
        logger.error("SEED_ID environment variable is required")
        print("\nUsage:")
        print("  SEED_ID=1 python scripts/recommend.py")
        print("\nOptional parameters:")
        print("  CATALOG_PATH=path    # Catalog file (default: data/catalog_sample.csv)")
        print("  K=5                  # Number of recommendations (default: from config)")
        sys.exit(1)

    catalog_path = os.getenv("CATALOG_PATH", "data/catalog_sample.csv")
    cfg = load_config()
    k = int(os.getenv("K", cfg["recommend"]["default_k"]))

    engine = RecommendationEngine(config=cfg)
    try:
        report = engine.import_file(catalog_path)
    except SongGraphError as e:
        logger.error(f"Error loading catalog: {e}")
        sys.exit(1)

    logger.info(f"Catalog: {report['imported']} songs from {catalog_path}")

    seed = engine.catalog.find(seed_id)
    if seed is None:
        logger.error(f"Song {seed_id} is not in the catalog")
        sys.exit(1)

    stats = engine.graph_stats()
    logger.info(f"Graph: {stats['nodes']} nodes, {stats['edges']} edges, "
                f"heuristic={engine.heuristic.kind}")

    logger.info(f"\n🎯 Songs similar to {seed}:")
    recommendations = engine.recommend(seed_id, k)
    if not recommendations:
        logger.info("  No similar songs found")
    for i, (song, distance) in enumerate(recommendations, 1):
        logger.info(f"  {i}. {song.title} by {song.artist} "
                    f"({song.genre}, {song.year}), distance {distance:.3f}")


if __name__ == "__main__":
    main()
